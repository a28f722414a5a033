import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.shortcuts import render, redirect
from django.utils import timezone

from apps.transactions.forms import TransactionForm
from apps.transactions.services import create_transaction, list_transactions
from .utils import calculate_totals, filter_by_month, group_by_month, parse_month_cursor

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = '거래 내역을 불러오지 못했습니다. 잠시 후 다시 시도해주세요.'


def _load_transactions(request):
    """사용자 거래 전체 조회 (실패 시 빈 목록 + 에러 메시지)"""
    try:
        return list(list_transactions(request.user))
    except DatabaseError as e:
        logger.error(f"거래 목록 조회 실패: user_id={request.user.id}, error={e}", exc_info=True)
        messages.error(request, LOAD_ERROR_MESSAGE)
        return []


@login_required
def index(request):
    """
    이번 달 대시보드
    - 월 이동 (이전 달 제한 없음, 다음 달은 이번 달까지)
    - 월별 수입/지출/잔액 요약
    - 거래 입력 (POST) + 최근 거래 목록
    """
    today = timezone.localdate()

    if request.method == 'POST':
        form = TransactionForm(request.POST)
        if form.is_valid():
            try:
                tx = create_transaction(request.user, form.cleaned_data, today=today)
            except ValidationError as e:
                messages.error(request, e.messages[0])
            except DatabaseError as e:
                logger.error(f"거래 등록 실패: user_id={request.user.id}, error={e}", exc_info=True)
                messages.error(request, '거래 등록 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요.')
            else:
                messages.success(request, f"{tx.get_tx_type_display()}이 등록되었습니다.")
                # PRG: 목록 새로고침 + 빈 입력 폼
                return redirect(request.get_full_path())
        else:
            messages.error(request, form.first_error())
    else:
        form = TransactionForm()

    cursor = parse_month_cursor(request.GET.get('year'), request.GET.get('month'), today=today)
    next_cursor = cursor.next(today)

    transactions = _load_transactions(request)
    monthly_transactions = filter_by_month(transactions, cursor.year, cursor.month)
    totals = calculate_totals(monthly_transactions)

    context = {
        'form': form,
        'today': today,
        'cursor': cursor,
        'previous_cursor': cursor.previous(),
        'next_cursor': next_cursor if next_cursor != cursor else None,
        'is_current_month': cursor.is_current(today),
        'monthly_transactions': monthly_transactions,
        'totals': totals,
        'transactions': transactions,
    }
    return render(request, 'dashboard/index.html', context)


@login_required
def history(request):
    """월별 전체 거래 내역 (최신 월부터)"""
    transactions = _load_transactions(request)
    month_groups = group_by_month(transactions)

    context = {
        'month_groups': month_groups,
        'totals': calculate_totals(transactions),
        'transaction_count': len(transactions),
    }
    return render(request, 'dashboard/history.html', context)

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import render, redirect, get_object_or_404
from django.utils import timezone
from django.utils.http import url_has_allowed_host_and_scheme

from .models import Transaction
from .services import TransactionNotDeletable, delete_transaction, list_transactions
from .utils import export_transactions_to_excel

logger = logging.getLogger(__name__)


def _redirect_back(request):
    """next 파라미터가 안전하면 그쪽으로, 아니면 대시보드로"""
    next_url = request.POST.get('next') or request.GET.get('next')
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return redirect(next_url)
    return redirect('dashboard:index')


@login_required
def transaction_delete(request, pk):
    """거래 삭제 (오늘 등록한 거래만)"""
    transaction = get_object_or_404(Transaction, pk=pk, user=request.user)
    today = timezone.localdate()

    # 당일이 아니면 확인 화면도 보여주지 않음
    if not transaction.is_deletable(today):
        messages.error(request, TransactionNotDeletable().messages[0])
        return _redirect_back(request)

    if request.method == 'POST':
        try:
            delete_transaction(transaction, today=today)
        except TransactionNotDeletable as e:
            messages.error(request, e.messages[0])
        except DatabaseError as e:
            logger.error(f"거래 삭제 실패: user_id={request.user.id}, tx_id={pk}, error={e}", exc_info=True)
            messages.error(request, '거래 삭제 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요.')
        else:
            messages.success(request, '거래가 삭제되었습니다.')
        return _redirect_back(request)

    return render(request, 'transactions/transaction_confirm_delete.html', {
        'transaction': transaction,
        'next': request.GET.get('next', ''),
    })


@login_required
def transaction_export_view(request):
    """전체 거래 내역 엑셀 다운로드 (거래내역 + 월별요약 시트)"""
    queryset = list_transactions(request.user)

    excel_file = export_transactions_to_excel(queryset)
    timestamp = timezone.localtime().strftime('%Y%m%d_%H%M%S')

    filename = f"transactions_{request.user.username}_{timestamp}.xlsx"
    response = HttpResponse(
        excel_file.read(),
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    logger.info(f"거래 내역 내보내기: user_id={request.user.id}")
    return response

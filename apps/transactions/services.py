"""
거래 저장소 연동 (생성 / 조회 / 삭제)

뷰에서는 이 함수들만 호출합니다.
- 모든 작업은 로그인한 사용자 기준
- 변경 작업은 transaction.atomic 안에서 실행 (실패 시 변경 없음)
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction as db_transaction
from django.utils import timezone

from .models import Transaction

logger = logging.getLogger(__name__)


class TransactionNotDeletable(ValidationError):
    """당일이 아닌 거래 삭제 시도"""

    def __init__(self, message='오늘 등록한 거래만 삭제할 수 있습니다.'):
        super().__init__(message, code='not_deletable')


def list_transactions(user):
    """사용자 거래 목록 (최신 날짜 → 최신 등록 순)"""
    return Transaction.objects.for_user(user).latest_first()


@db_transaction.atomic
def create_transaction(user, cleaned_data, today=None):
    """
    거래 생성

    Args:
        user: 로그인한 사용자
        cleaned_data: TransactionForm.cleaned_data
        today: 거래 날짜 (기본값: 오늘)
    """
    if today is None:
        today = timezone.localdate()

    tx = Transaction(
        user=user,
        tx_type=cleaned_data['tx_type'],
        amount=cleaned_data['amount'],
        description=cleaned_data['description'],
        category=cleaned_data.get('category') or None,
        date=today,
    )
    tx.full_clean()
    tx.save()
    logger.info(f"거래 등록: user_id={user.pk}, tx_id={tx.pk}, type={tx.tx_type}, amount={tx.amount}")
    return tx


def delete_transaction(tx, today=None):
    """
    거래 삭제 (당일 거래만)

    Raises:
        TransactionNotDeletable: 거래 날짜가 오늘이 아닌 경우 (DB는 건드리지 않음)
    """
    if not tx.is_deletable(today):
        logger.warning(f"당일 외 거래 삭제 시도 차단: user_id={tx.user_id}, tx_id={tx.pk}, date={tx.date}")
        raise TransactionNotDeletable()

    tx_id = tx.pk
    with db_transaction.atomic():
        tx.delete()
    logger.info(f"거래 삭제: user_id={tx.user_id}, tx_id={tx_id}")

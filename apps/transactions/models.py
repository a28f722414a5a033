from decimal import Decimal
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import UserOwnedModel

# 상수
MIN_AMOUNT = Decimal('0.01')
MAX_AMOUNT = Decimal('999999999.99')
DESCRIPTION_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 100


class TransactionQuerySet(models.QuerySet):
    """Transaction 전용 QuerySet (헬퍼 메서드)"""
    def for_user(self, user): return self.filter(user=user)
    def latest_first(self): return self.order_by('-date', '-created_at')


class Transaction(UserOwnedModel):
    """
    거래 내역 (핵심 모델)

    - 금액은 항상 양수, 수입/지출 방향은 tx_type으로 구분
    - date는 거래가 속한 날짜 (등록일 기준, 폼에서 수정 불가)
    - created_at은 같은 날짜 내 정렬 기준
    """
    TX_TYPE_INCOME = 'income'
    TX_TYPE_EXPENSE = 'expense'
    TX_TYPE_CHOICES = [(TX_TYPE_INCOME, '수입'), (TX_TYPE_EXPENSE, '지출')]

    tx_type = models.CharField(max_length=10, choices=TX_TYPE_CHOICES, db_index=True)
    amount = models.DecimalField(
        max_digits=11,
        decimal_places=2,
        validators=[MinValueValidator(MIN_AMOUNT), MaxValueValidator(MAX_AMOUNT)],
    )
    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    category = models.CharField(max_length=CATEGORY_MAX_LENGTH, null=True, blank=True)
    date = models.DateField(default=timezone.localdate, db_index=True)

    objects = TransactionQuerySet.as_manager()

    class Meta:
        db_table = 'transactions'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['user', '-date', '-created_at'], name='transaction_user_recent_idx'),
            models.Index(fields=['user', 'tx_type', '-date'], name='transaction_user_type_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name='transaction_amount_positive'),
            models.CheckConstraint(
                condition=models.Q(tx_type__in=['income', 'expense']),
                name='transaction_type_valid'
            ),
        ]

    def __str__(self):
        return f"{self.get_tx_type_display()} {self.amount:,.2f} ({self.date})"

    @property
    def is_income(self):
        return self.tx_type == self.TX_TYPE_INCOME

    @property
    def signed_amount(self):
        """화면 표시용 부호 포함 금액 (지출은 음수)"""
        return self.amount if self.is_income else -self.amount

    def is_deletable(self, today=None):
        """오늘 날짜의 거래만 삭제 가능"""
        if today is None:
            today = timezone.localdate()
        return self.date == today

    def clean(self):
        errors = {}
        if self.description:
            self.description = self.description.strip()
            if not self.description:
                errors['description'] = '내용을 입력하세요.'
        if self.category is not None:
            self.category = self.category.strip() or None
        if errors:
            raise ValidationError(errors)

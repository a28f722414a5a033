"""
월별 집계 엔진

DB에서 가져온 한 사용자의 거래 목록을 메모리에서 집계합니다.
- filter_by_month: 특정 연/월 거래만 추출 (달력 기준, 최근 30일 아님)
- group_by_month: 연/월별 묶음(MonthGroup) 생성, 최신 월이 먼저
- calculate_totals: 수입/지출 합계와 잔액

금액은 Decimal로만 더하고, 반올림은 화면/엑셀 출력 시점에만 합니다.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from django.utils import timezone

from apps.transactions.models import Transaction

ZERO = Decimal('0')

# 유효한 연도 범위 (쿼리 파라미터 검증용)
MIN_YEAR = 2000
MAX_YEAR = 2100


def to_decimal(value):
    """float 오차 방지를 위해 문자열을 거쳐 Decimal로 변환"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_date(value):
    """date / datetime / 'YYYY-MM-DD' 문자열을 date로 변환"""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True)
class Totals:
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO

    @property
    def balance(self):
        return self.total_income - self.total_expenses


def calculate_totals(transactions):
    """수입 합계, 지출 합계, 잔액(수입 - 지출)"""
    total_income = ZERO
    total_expenses = ZERO
    for tx in transactions:
        amount = to_decimal(tx.amount)
        if tx.tx_type == Transaction.TX_TYPE_INCOME:
            total_income += amount
        elif tx.tx_type == Transaction.TX_TYPE_EXPENSE:
            total_expenses += amount
    return Totals(total_income=total_income, total_expenses=total_expenses)


def filter_by_month(transactions, year, month):
    """해당 연/월에 속한 거래만 반환 (없으면 빈 리스트)"""
    cursor = MonthCursor(year, month)
    return [tx for tx in transactions if cursor.contains(tx.date)]


@dataclass
class MonthGroup:
    """연/월 단위 거래 묶음 (화면 표시용, 저장하지 않음)"""
    year: int
    month: int
    transactions: list = field(default_factory=list)
    total_income: Decimal = ZERO
    total_expenses: Decimal = ZERO

    @property
    def balance(self):
        return self.total_income - self.total_expenses

    @property
    def key(self):
        return (self.year, self.month)

    @property
    def label(self):
        return f"{self.year}년 {self.month}월"

    def __len__(self):
        return len(self.transactions)


def group_by_month(transactions):
    """
    거래를 연/월별로 묶어 최신 월부터 정렬

    - 그룹 키는 date의 (연, 월)만 사용 (일자는 무관)
    - 그룹 안에서는 입력 순서를 유지
    - 정렬: 연도 내림차순 → 월 내림차순
    """
    grouped = {}
    for tx in transactions:
        tx_date = to_date(tx.date)
        grouped.setdefault((tx_date.year, tx_date.month), []).append(tx)

    groups = []
    for (year, month), items in grouped.items():
        totals = calculate_totals(items)
        groups.append(MonthGroup(
            year=year,
            month=month,
            transactions=items,
            total_income=totals.total_income,
            total_expenses=totals.total_expenses,
        ))

    groups.sort(key=lambda group: (group.year, group.month), reverse=True)
    return groups


@dataclass(frozen=True, order=True)
class MonthCursor:
    """
    대시보드에서 선택된 월

    "오늘"은 호출할 때마다 새로 계산합니다 (자정이 지나면 경계도 바뀜).
    """
    year: int
    month: int

    @classmethod
    def current(cls, today=None):
        if today is None:
            today = timezone.localdate()
        return cls(today.year, today.month)

    def previous(self):
        """이전 달 (하한 없음)"""
        if self.month == 1:
            return MonthCursor(self.year - 1, 12)
        return MonthCursor(self.year, self.month - 1)

    def next(self, today=None):
        """다음 달 (이번 달 이후로는 이동하지 않고 그대로 반환)"""
        if self >= MonthCursor.current(today):
            return self
        if self.month == 12:
            return MonthCursor(self.year + 1, 1)
        return MonthCursor(self.year, self.month + 1)

    def is_current(self, today=None):
        return self == MonthCursor.current(today)

    def contains(self, day):
        day = to_date(day)
        return day.year == self.year and day.month == self.month

    @property
    def label(self):
        return f"{self.year}년 {self.month}월"


def parse_month_cursor(year, month, today=None):
    """
    쿼리 파라미터(year, month)를 MonthCursor로 변환

    - 값이 없거나 잘못되면 이번 달
    - 미래 월은 이번 달로 제한
    """
    current = MonthCursor.current(today)
    try:
        year = int(year)
        month = int(month)
    except (TypeError, ValueError):
        return current

    if not MIN_YEAR <= year <= MAX_YEAR or not 1 <= month <= 12:
        return current

    cursor = MonthCursor(year, month)
    if cursor > current:
        return current
    return cursor

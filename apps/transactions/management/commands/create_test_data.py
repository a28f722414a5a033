import calendar
import random
from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction as db_transaction
from django.utils import timezone

from apps.dashboard.utils import MonthCursor
from apps.transactions.models import Transaction

User = get_user_model()

INCOME_SAMPLES = [('월급', '급여'), ('부수입', '기타수입'), ('이자', '금융'), ('중고거래 판매', None)]
EXPENSE_SAMPLES = [
    ('점심 식사', '식비'), ('장보기', '식비'), ('지하철', '교통'), ('택시', '교통'),
    ('통신요금', '통신'), ('커피', None), ('영화', '여가'), ('관리비', '주거'),
]


class Command(BaseCommand):
    help = '최근 N개월 테스트 거래 데이터 생성'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='testuser', help='사용자명')
        parser.add_argument('--months', type=int, default=6, help='이번 달 포함 생성할 개월 수')
        parser.add_argument('--transactions-per-month', type=int, default=20, help='월별 거래 건수')
        parser.add_argument('--seed', type=int, default=None, help='난수 시드 (재현용)')

    @db_transaction.atomic
    def handle(self, *args, **options):
        username = options['username']
        months = options['months']
        txs_per_month = options['transactions_per_month']
        rng = random.Random(options['seed'])

        self.stdout.write("=== 테스트 데이터 생성 시작 ===")

        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': f'{username}@example.com'}
        )
        if created:
            user.set_password('test1234')
            user.save()
            self.stdout.write(f"- 사용자 생성: {username}")

        today = timezone.localdate()
        cursor = MonthCursor.current(today)
        transactions_to_create = []

        for _ in range(months):
            last_day = calendar.monthrange(cursor.year, cursor.month)[1]
            if cursor.is_current(today):
                last_day = today.day

            # 월초 급여 1건 + 나머지는 랜덤
            transactions_to_create.append(Transaction(
                user=user,
                tx_type=Transaction.TX_TYPE_INCOME,
                amount=Decimal('3200000.00'),
                description='월급',
                category='급여',
                date=date(cursor.year, cursor.month, 1),
            ))
            for _ in range(max(txs_per_month - 1, 0)):
                if rng.random() < 0.15:
                    tx_type = Transaction.TX_TYPE_INCOME
                    description, category = rng.choice(INCOME_SAMPLES)
                    amount = Decimal(rng.randint(10, 500) * 1000)
                else:
                    tx_type = Transaction.TX_TYPE_EXPENSE
                    description, category = rng.choice(EXPENSE_SAMPLES)
                    amount = Decimal(rng.randint(100, 15000) * 10) / Decimal('10')

                transactions_to_create.append(Transaction(
                    user=user,
                    tx_type=tx_type,
                    amount=amount.quantize(Decimal('0.01')),
                    description=description,
                    category=category,
                    date=date(cursor.year, cursor.month, rng.randint(1, last_day)),
                ))
            cursor = cursor.previous()

        Transaction.objects.bulk_create(transactions_to_create)

        self.stdout.write(
            self.style.SUCCESS(f"✅ {username}: 거래 {len(transactions_to_create)}건 생성 ({months}개월)")
        )

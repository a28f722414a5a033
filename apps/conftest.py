"""
앱 테스트용 공통 fixture
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.utils import timezone

from apps.transactions.models import Transaction


@pytest.fixture
def test_user(db):
    """테스트용 사용자"""
    return User.objects.create_user(username='tester', password='pass')


@pytest.fixture
def other_user(db):
    """다른 사용자 (권한 테스트용)"""
    return User.objects.create_user(username='other', password='pass')


@pytest.fixture
def auth_client(client, test_user):
    """로그인된 클라이언트"""
    client.login(username='tester', password='pass')
    return client


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def make_transaction(test_user, today):
    """거래 생성 헬퍼 (기본값: 오늘, 지출 10,000)"""
    def _make(**kwargs):
        data = {
            'user': test_user,
            'tx_type': Transaction.TX_TYPE_EXPENSE,
            'amount': Decimal('10000.00'),
            'description': '테스트 거래',
            'date': today,
        }
        data.update(kwargs)
        return Transaction.objects.create(**data)
    return _make

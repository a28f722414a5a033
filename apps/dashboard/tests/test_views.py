from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
from django.contrib.messages import get_messages
from django.db import DatabaseError
from django.urls import reverse

from apps.dashboard.utils import MonthCursor
from apps.transactions.models import Transaction


def message_texts(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


@pytest.mark.django_db
class TestDashboardIndex:
    def test_requires_login(self, client):
        """로그인하지 않으면 로그인 페이지로 이동"""
        response = client.get(reverse('dashboard:index'))
        assert response.status_code == 302
        assert '/login/' in response.url

    def test_defaults_to_current_month(self, auth_client, today):
        response = auth_client.get(reverse('dashboard:index'))

        assert response.status_code == 200
        assert response.context['cursor'] == MonthCursor(today.year, today.month)
        assert response.context['is_current_month'] is True
        assert response.context['next_cursor'] is None
        assert response.context['previous_cursor'] == MonthCursor(today.year, today.month).previous()

    def test_empty_month_is_not_an_error(self, auth_client):
        response = auth_client.get(reverse('dashboard:index'), {'year': '2001', 'month': '1'})

        assert response.status_code == 200
        assert response.context['monthly_transactions'] == []
        assert response.context['totals'].balance == Decimal('0')
        assert response.context['is_current_month'] is False
        assert response.context['next_cursor'] == MonthCursor(2001, 2)

    def test_future_month_is_clamped(self, auth_client, today):
        response = auth_client.get(reverse('dashboard:index'), {'year': today.year + 1, 'month': today.month})
        assert response.context['cursor'] == MonthCursor(today.year, today.month)

    def test_monthly_totals(self, auth_client, make_transaction):
        make_transaction(tx_type='income', amount=Decimal('500.00'), date=date(2024, 2, 29))
        make_transaction(tx_type='expense', amount=Decimal('120.25'), date=date(2024, 2, 1))
        make_transaction(tx_type='expense', amount=Decimal('999.00'), date=date(2024, 3, 1))

        response = auth_client.get(reverse('dashboard:index'), {'year': '2024', 'month': '2'})

        totals = response.context['totals']
        assert len(response.context['monthly_transactions']) == 2
        assert totals.total_income == Decimal('500.00')
        assert totals.total_expenses == Decimal('120.25')
        assert totals.balance == Decimal('379.75')

    def test_lists_only_own_transactions(self, auth_client, make_transaction, other_user):
        mine = make_transaction(description='내 거래')
        make_transaction(user=other_user, description='남의 거래')

        response = auth_client.get(reverse('dashboard:index'))

        assert response.context['transactions'] == [mine]

    def test_delete_link_only_for_today_rows(self, auth_client, make_transaction, yesterday):
        """어제 거래는 목록에는 보이지만 삭제 링크는 없음"""
        today_tx = make_transaction(description='오늘 점심')
        old_tx = make_transaction(description='어제 저녁', date=yesterday)

        response = auth_client.get(reverse('dashboard:index'))
        content = response.content.decode()

        assert '오늘 점심' in content
        assert '어제 저녁' in content
        assert reverse('transactions:transaction_delete', kwargs={'pk': today_tx.pk}) in content
        assert reverse('transactions:transaction_delete', kwargs={'pk': old_tx.pk}) not in content

    def test_amount_is_rendered_with_sign(self, auth_client, make_transaction):
        make_transaction(tx_type='income', amount=Decimal('1000.00'))
        make_transaction(tx_type='expense', amount=Decimal('250.50'))

        content = auth_client.get(reverse('dashboard:index')).content.decode()

        assert '+1,000.00' in content
        assert '-250.50' in content

    def test_load_failure_shows_message(self, auth_client):
        with mock.patch('apps.dashboard.views.list_transactions', side_effect=DatabaseError('down')):
            response = auth_client.get(reverse('dashboard:index'))

        assert response.status_code == 200
        assert response.context['transactions'] == []
        assert '거래 내역을 불러오지 못했습니다. 잠시 후 다시 시도해주세요.' in message_texts(response)


@pytest.mark.django_db
class TestDashboardTransactionEntry:
    url = '/'

    def test_create_income(self, auth_client, test_user, today):
        response = auth_client.post(self.url, {
            'tx_type': 'income',
            'amount': '1000.00',
            'description': '  월급  ',
            'category': '   ',
        })

        assert response.status_code == 302
        tx = Transaction.objects.get(user=test_user)
        assert tx.tx_type == 'income'
        assert tx.amount == Decimal('1000.00')
        assert tx.description == '월급'
        assert tx.category is None
        assert tx.date == today
        assert '수입이 등록되었습니다.' in message_texts(response)

    def test_redirect_keeps_selected_month(self, auth_client):
        response = auth_client.post(f'{self.url}?year=2024&month=5', {
            'tx_type': 'expense',
            'amount': '10.00',
            'description': '커피',
            'category': '',
        })
        assert response.status_code == 302
        assert response.url == '/?year=2024&month=5'

    def test_invalid_input_keeps_fields_and_reports_first_error(self, auth_client):
        """검증 실패 시 저장하지 않고 입력값 유지 + 첫 번째 에러만 표시"""
        response = auth_client.post(self.url, {
            'tx_type': 'expense',
            'amount': '0',
            'description': '   ',
            'category': 'Food',
        })

        assert response.status_code == 200
        assert Transaction.objects.count() == 0
        form = response.context['form']
        assert form.data['category'] == 'Food'
        assert form.data['amount'] == '0'
        assert message_texts(response) == ['금액은 0보다 커야 합니다.']

    def test_store_failure_keeps_input(self, auth_client):
        with mock.patch('apps.dashboard.views.create_transaction', side_effect=DatabaseError('down')):
            response = auth_client.post(self.url, {
                'tx_type': 'expense',
                'amount': '10.00',
                'description': '커피',
                'category': '',
            })

        assert response.status_code == 200
        assert Transaction.objects.count() == 0
        assert response.context['form'].data['description'] == '커피'
        assert '거래 등록 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요.' in message_texts(response)

    @pytest.mark.integration
    def test_end_to_end_monthly_summary(self, auth_client, today):
        """수입 1000.00 + 지출 250.50 → 잔액 749.50"""
        auth_client.post(self.url, {'tx_type': 'income', 'amount': '1000.00', 'description': '월급', 'category': '급여'})
        auth_client.post(self.url, {'tx_type': 'expense', 'amount': '250.50', 'description': '장보기', 'category': '식비'})

        response = auth_client.get(self.url)

        totals = response.context['totals']
        assert totals.total_income == Decimal('1000.00')
        assert totals.total_expenses == Decimal('250.50')
        assert totals.balance == Decimal('749.50')
        assert len(response.context['transactions']) == 2


@pytest.mark.django_db
class TestHistoryView:
    def test_requires_login(self, client):
        response = client.get(reverse('dashboard:history'))
        assert response.status_code == 302

    def test_groups_latest_month_first(self, auth_client, make_transaction):
        make_transaction(date=date(2024, 12, 10), tx_type='income', amount=Decimal('100.00'))
        make_transaction(date=date(2025, 1, 5))
        make_transaction(date=date(2024, 1, 20))
        make_transaction(date=date(2024, 12, 31))

        response = auth_client.get(reverse('dashboard:history'))

        assert response.status_code == 200
        groups = response.context['month_groups']
        assert [group.key for group in groups] == [(2025, 1), (2024, 12), (2024, 1)]
        assert len(groups[1]) == 2
        assert groups[1].total_income == Decimal('100.00')
        assert response.context['transaction_count'] == 4

    def test_empty_history(self, auth_client):
        response = auth_client.get(reverse('dashboard:history'))
        assert response.context['month_groups'] == []
        assert '아직 거래 내역이 없습니다' in response.content.decode()

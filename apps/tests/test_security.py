import pytest
from django.urls import reverse

from apps.transactions.models import Transaction


@pytest.mark.django_db
class TestSecurity:

    # --- 1. 인증 테스트 (Authentication) ---

    @pytest.mark.parametrize('url_name', [
        'dashboard:index',
        'dashboard:history',
        'transactions:transaction_export',
    ])
    def test_unauthenticated_user_redirected_to_login(self, client, url_name):
        """로그인 안 한 사용자는 로그인 페이지로"""
        response = client.get(reverse(url_name))
        assert response.status_code == 302
        assert '/login/' in response.url

    # --- 2. 인가/권한 테스트 (Authorization) ---

    def test_user_cannot_delete_others_transaction(self, auth_client, other_user, make_transaction):
        """A 사용자가 B 사용자의 거래를 삭제할 수 없는지"""
        tx = make_transaction(user=other_user)

        response = auth_client.post(reverse('transactions:transaction_delete', kwargs={'pk': tx.pk}))

        assert response.status_code == 404
        assert Transaction.objects.filter(pk=tx.pk).exists()

    def test_history_hides_others_transactions(self, auth_client, other_user, make_transaction):
        make_transaction(user=other_user, description='남의 거래')

        response = auth_client.get(reverse('dashboard:history'))

        assert response.context['month_groups'] == []
        assert '남의 거래' not in response.content.decode()

    # --- 3. 회원가입/로그인 보안 ---

    def test_authenticated_user_cannot_signup_again(self, auth_client):
        response = auth_client.get(reverse('accounts:signup'))
        assert response.status_code == 302
        assert response.url == reverse('dashboard:index')

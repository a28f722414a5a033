from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from apps.transactions.models import Transaction

User = get_user_model()


class Command(BaseCommand):
    help = '테스트용으로 생성된 거래 데이터를 삭제합니다.'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='testuser')

    def handle(self, *args, **options):
        username = options['username']
        self.stdout.write(f"⚠️ {username}의 데이터를 삭제하기 시작합니다...")

        try:
            user = User.objects.get(username=username)

            count, _ = Transaction.objects.filter(user=user).delete()
            self.stdout.write(f"- 삭제된 거래: {count}건")

            self.stdout.write(self.style.SUCCESS(f"✅ {username} 관련 모든 거래 삭제 완료!"))

        except User.DoesNotExist:
            self.stdout.write(self.style.ERROR(f"❌ '{username}' 사용자를 찾을 수 없습니다."))

"""
프로젝트 공통 추상 모델

- TimeStampedModel: 생성/수정 시간 자동 추적
- UserOwnedModel: 사용자 소유 + 타임스탬프
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """생성/수정 시간 자동 추적"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UserOwnedModel(TimeStampedModel):
    """
    사용자 소유 리소스 (타임스탬프 포함)

    모든 조회/저장은 로그인한 사용자 기준으로 제한합니다.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True
    )

    class Meta:
        abstract = True

import logging

from django.contrib import messages
from django.contrib.auth import login as auth_login
from django.contrib.auth.views import (
    LoginView as DjangoLoginView,
    LogoutView as DjangoLogoutView,
)
from django.db import IntegrityError
from django.shortcuts import render, redirect
from django.urls import reverse_lazy

from .forms import CustomUserCreationForm

logger = logging.getLogger(__name__)


class UserLoginView(DjangoLoginView):
    """사용자 로그인"""
    template_name = "accounts/login.html"
    redirect_authenticated_user = True
    next_page = reverse_lazy("dashboard:index")


class UserLogoutView(DjangoLogoutView):
    """사용자 로그아웃"""
    next_page = reverse_lazy("accounts:login")


def signup(request):
    """
    회원가입
    - 이메일 포함 커스텀 폼 사용
    - 가입 즉시 로그인 처리
    """
    if request.user.is_authenticated:
        return redirect('dashboard:index')

    if request.method == "POST":
        form = CustomUserCreationForm(request.POST)
        if form.is_valid():
            try:
                user = form.save()
            except IntegrityError as e:
                logger.error(f"회원가입 실패 (중복 데이터): {e}")
                messages.error(request, "이미 사용 중인 정보입니다.")
            else:
                auth_login(request, user)
                logger.info(f"신규 회원가입: {user.username} (ID: {user.id})")
                messages.success(request, f"{user.username}님, 환영합니다! 가입이 완료되었습니다.")
                return redirect("dashboard:index")
        else:
            # 구체적인 에러 메시지는 템플릿에서 표시
            messages.error(request, "입력 정보를 확인해주세요.")
    else:
        form = CustomUserCreationForm()

    return render(request, "accounts/signup.html", {"form": form})

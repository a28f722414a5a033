from django import forms
from django.contrib.auth.forms import UserCreationForm
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
import re

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9]+$')
USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8


class CustomUserCreationForm(UserCreationForm):
    """
    회원가입 폼
    - 이메일 필수 + 중복 확인
    - 아이디: 4-20자 영문/숫자
    - 비밀번호: 8자 이상, 숫자만 불가
    """
    email = forms.EmailField(
        required=True,
        label='이메일',
        widget=forms.EmailInput(attrs={'autocomplete': 'email'}),
        help_text='비밀번호 찾기에 사용됩니다.'
    )

    class Meta:
        model = User
        fields = ('username', 'email')

    # (label, placeholder, help_text)
    FIELD_TEXTS = {
        'username': ('아이디', '4-20자 영문, 숫자', '4-20자의 영문, 숫자만 사용 가능합니다.'),
        'email': ('이메일', 'example@email.com', '비밀번호 찾기에 사용됩니다.'),
        'password1': ('비밀번호', '8자 이상', '최소 8자 이상이어야 합니다.'),
        'password2': ('비밀번호 확인', '비밀번호 재입력', '동일한 비밀번호를 다시 입력해주세요.'),
    }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field_name, (label, placeholder, help_text) in self.FIELD_TEXTS.items():
            field = self.fields[field_name]
            field.label = label
            field.help_text = help_text
            field.widget.attrs['placeholder'] = placeholder
            field.widget.attrs['class'] = 'form-control'

    def clean_username(self):
        """아이디 검증 (길이 → 형식 → 중복)"""
        username = self.cleaned_data.get('username', '')

        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(f'아이디는 최소 {USERNAME_MIN_LENGTH}자 이상이어야 합니다.')
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(f'아이디는 최대 {USERNAME_MAX_LENGTH}자까지 가능합니다.')
        if not USERNAME_PATTERN.match(username):
            raise ValidationError('아이디는 영문과 숫자만 사용 가능합니다.')
        if User.objects.filter(username__iexact=username).exists():
            raise ValidationError('이미 사용 중인 아이디입니다.')

        return username

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError('이미 가입된 이메일 주소입니다.')
        return email

    def clean_password1(self):
        password = self.cleaned_data.get('password1', '')
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f'비밀번호는 최소 {PASSWORD_MIN_LENGTH}자 이상이어야 합니다.')
        if password.isdigit():
            raise ValidationError('비밀번호는 숫자만으로 구성할 수 없습니다.')
        return password

    def clean_password2(self):
        password1 = self.cleaned_data.get('password1')
        password2 = self.cleaned_data.get('password2')
        if password1 and password2 and password1 != password2:
            raise ValidationError('두 비밀번호가 일치하지 않습니다.')
        return password2

    def save(self, commit=True):
        user = super().save(commit=False)
        user.email = self.cleaned_data['email']
        if commit:
            user.save()
        return user

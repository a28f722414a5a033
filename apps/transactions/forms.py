from django import forms
from django.core.exceptions import NON_FIELD_ERRORS, ValidationError

from .models import (
    Transaction,
    MAX_AMOUNT,
    DESCRIPTION_MAX_LENGTH,
    CATEGORY_MAX_LENGTH,
)


class TransactionForm(forms.ModelForm):
    """
    거래 입력 폼

    검증 순서: 거래 유형 → 금액 → 내용 → 카테고리
    화면에는 가장 먼저 위반된 규칙 하나만 보여줍니다 (first_error).
    날짜는 입력받지 않고 등록일(오늘)로 저장됩니다.
    """
    amount = forms.DecimalField(
        label='금액',
        decimal_places=2,
        widget=forms.NumberInput(attrs={'step': '0.01', 'placeholder': '0.00'}),
        error_messages={
            'required': '금액을 입력하세요.',
            'invalid': '올바른 금액을 입력하세요.',
            'max_decimal_places': '금액은 소수점 2자리까지 입력할 수 있습니다.',
        },
    )

    class Meta:
        model = Transaction
        fields = ['tx_type', 'amount', 'description', 'category']
        widgets = {
            'tx_type': forms.RadioSelect,
            'description': forms.TextInput(attrs={'placeholder': '어디에 쓰셨나요?'}),
            'category': forms.TextInput(attrs={'placeholder': '예: 식비, 교통, 급여'}),
        }
        labels = {
            'tx_type': '거래 유형',
            'description': '내용',
            'category': '카테고리 (선택)',
        }
        error_messages = {
            'tx_type': {
                'required': '거래 유형을 선택하세요.',
                'invalid_choice': '거래 유형은 수입 또는 지출만 가능합니다.',
            },
            'description': {
                'required': '내용을 입력하세요.',
                'max_length': f'내용은 {DESCRIPTION_MAX_LENGTH}자 이하로 입력하세요.',
            },
            'category': {
                'max_length': f'카테고리는 {CATEGORY_MAX_LENGTH}자 이하로 입력하세요.',
            },
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['tx_type'].choices = Transaction.TX_TYPE_CHOICES
        self.fields['tx_type'].initial = Transaction.TX_TYPE_EXPENSE
        self.fields['category'].required = False

        for field_name, field in self.fields.items():
            if field_name == 'tx_type':
                continue
            existing_classes = field.widget.attrs.get('class', '')
            field.widget.attrs['class'] = f'{existing_classes} form-control'.strip()

    def clean_amount(self):
        amount = self.cleaned_data.get('amount')
        if amount is None:
            return amount
        if amount <= 0:
            raise ValidationError('금액은 0보다 커야 합니다.')
        if amount > MAX_AMOUNT:
            raise ValidationError(f'금액은 {MAX_AMOUNT:,} 이하로 입력하세요.')
        return amount

    def clean_description(self):
        description = (self.cleaned_data.get('description') or '').strip()
        if not description:
            raise ValidationError('내용을 입력하세요.')
        return description

    def clean_category(self):
        """공백만 입력한 카테고리는 미지정(None)으로 저장"""
        category = self.cleaned_data.get('category')
        if category is None:
            return None
        return category.strip() or None

    def first_error(self):
        """필드 순서대로 첫 번째 에러 메시지만 반환 (없으면 None)"""
        for name in [*self.fields, NON_FIELD_ERRORS]:
            if name in self.errors:
                return self.errors[name][0]
        return None

from django.contrib import admin
from django.utils.html import format_html

from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    거래 내역 관리

    관리자 화면에서는 당일 삭제 제한을 적용하지 않습니다 (데이터 정정용).
    """
    list_display = [
        'date',
        'get_tx_type_display_colored',
        'get_amount_display',
        'description',
        'category',
        'user',
        'created_at',
    ]

    date_hierarchy = 'date'

    list_filter = ['tx_type', 'date']

    search_fields = ['description', 'category', 'user__username']

    readonly_fields = ['created_at', 'updated_at']

    list_select_related = ['user']

    @admin.display(description='구분', ordering='tx_type')
    def get_tx_type_display_colored(self, obj):
        if obj.is_income:
            return format_html('<span style="color:green; font-weight:bold;">{}</span>', '수입')
        return format_html('<span style="color:red; font-weight:bold;">{}</span>', '지출')

    @admin.display(description='금액', ordering='amount')
    def get_amount_display(self, obj):
        formatted = f"{obj.amount:,.2f}"
        if obj.is_income:
            return format_html('<span style="color:green;">+{}</span>', formatted)
        return format_html('<span style="color:red;">-{}</span>', formatted)

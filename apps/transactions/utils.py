import openpyxl
from io import BytesIO
from openpyxl.styles import Font

from django.utils import timezone

from apps.dashboard.utils import group_by_month

AMOUNT_FORMAT = '#,##0.00'


def export_transactions_to_excel(queryset):
    """
    거래 내역을 엑셀로 내보내기

    시트 1 (거래내역): 날짜, 유형, 금액, 내용, 카테고리, 등록일시
    시트 2 (월별요약): 연도, 월, 건수, 수입, 지출, 잔액 (최신 월부터)
    """
    transactions = list(queryset)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "거래내역"

    headers = ['날짜', '유형', '금액', '내용', '카테고리', '등록일시']
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for tx in transactions:
        created_at = timezone.localtime(tx.created_at).strftime('%Y-%m-%d %H:%M') if tx.created_at else ''
        ws.append([
            tx.date.strftime('%Y-%m-%d'),
            tx.get_tx_type_display(),
            # Decimal을 float으로 변환 (엑셀 호환)
            float(tx.amount),
            tx.description,
            tx.category or '',
            created_at,
        ])
        ws.cell(row=ws.max_row, column=3).number_format = AMOUNT_FORMAT

    summary = wb.create_sheet("월별요약")
    summary.append(['연도', '월', '건수', '수입', '지출', '잔액'])
    for cell in summary[1]:
        cell.font = Font(bold=True)

    for group in group_by_month(transactions):
        summary.append([
            group.year,
            group.month,
            len(group),
            float(group.total_income),
            float(group.total_expenses),
            float(group.balance),
        ])
        for column in (4, 5, 6):
            summary.cell(row=summary.max_row, column=column).number_format = AMOUNT_FORMAT

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output

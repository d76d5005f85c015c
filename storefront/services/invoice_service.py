"""
Order invoice export (Excel)
"""
import io
from decimal import Decimal, ROUND_HALF_UP

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

from storefront.core.config import settings
from storefront.domain.order import Order

CENT = Decimal("0.01")


def invoice_totals(order: Order) -> dict:
    """
    Split an order total back into subtotal, VAT and shipping

    The stored total already includes VAT and shipping; shipping is what
    remains after the items and their VAT.
    """
    subtotal = sum((item.line_total for item in order.items), Decimal("0")).quantize(CENT, rounding=ROUND_HALF_UP)
    vat = (subtotal * settings.VAT_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
    shipping = max(order.total - subtotal - vat, Decimal("0"))

    return {
        'subtotal': subtotal,
        'shipping': shipping,
        'vat': vat,
        'total': order.total,
    }


def generate_invoice(order: Order) -> io.BytesIO:
    """Generate the invoice workbook for an order"""
    wb = Workbook()
    ws = wb.active
    ws.title = "Invoice"

    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True, size=12)
    border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )
    money_format = '#,##0.00'

    ws.cell(row=1, column=1, value=f"{settings.SITE_NAME} - Tax Invoice").font = Font(bold=True, size=14)
    ws.cell(row=2, column=1, value="Order")
    ws.cell(row=2, column=2, value=order.id)
    ws.cell(row=3, column=1, value="Date")
    ws.cell(row=3, column=2, value=order.created_at.strftime('%Y-%m-%d') if order.created_at else "")
    ws.cell(row=4, column=1, value="Customer")
    ws.cell(row=4, column=2, value=order.customer_name)
    ws.cell(row=5, column=1, value="Payment")
    ws.cell(row=5, column=2, value=f"{order.payment_method or ''} ({order.payment_status})")

    header_row = 7
    headers = ["Product", "Quantity", f"Unit Price ({settings.CURRENCY})", f"Total ({settings.CURRENCY})"]
    for col_num, header in enumerate(headers, 1):
        cell = ws.cell(row=header_row, column=col_num, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')
        cell.border = border

    row_num = header_row
    for item in order.items:
        row_num += 1
        data = [
            item.product_name or item.product_id,
            item.quantity,
            float(item.price),
            float(item.line_total),
        ]
        for col_num, value in enumerate(data, 1):
            cell = ws.cell(row=row_num, column=col_num, value=value)
            cell.border = border
            if col_num in [3, 4]:
                cell.alignment = Alignment(horizontal='right', vertical='center')
                cell.number_format = money_format

    totals = invoice_totals(order)
    vat_label = f"VAT ({int(settings.VAT_RATE * 100)}%)"
    row_num += 1
    for label, key in [("Subtotal", 'subtotal'), ("Shipping", 'shipping'), (vat_label, 'vat'), ("Total", 'total')]:
        row_num += 1
        ws.cell(row=row_num, column=3, value=label).font = Font(bold=(key == 'total'))
        cell = ws.cell(row=row_num, column=4, value=float(totals[key]))
        cell.number_format = money_format
        cell.alignment = Alignment(horizontal='right', vertical='center')
        if key == 'total':
            cell.font = Font(bold=True)

    ws.column_dimensions['A'].width = 45
    ws.column_dimensions['B'].width = 12
    ws.column_dimensions['C'].width = 20
    ws.column_dimensions['D'].width = 18

    excel_file = io.BytesIO()
    wb.save(excel_file)
    excel_file.seek(0)

    return excel_file

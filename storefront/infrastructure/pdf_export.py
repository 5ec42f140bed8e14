from io import BytesIO
from datetime import date, datetime
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from storefront.domain.models import Order
from storefront.application.reports import confirmed_revenue

SHOP_NAME = "Susu UHT"
HEADER_COLOR = colors.HexColor("#1E90FF")


def format_rupiah(amount: float) -> str:
    """36000 -> 'Rp 36.000' (индонезийский разделитель тысяч)"""
    return "Rp " + f"{round(amount):,}".replace(",", ".")


def format_date(value) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%d/%m/%Y")


def _build(story, title: str) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4, title=title,
        leftMargin=36, rightMargin=36, topMargin=48, bottomMargin=36
    )
    doc.build(story)
    return buffer.getvalue()


def render_invoice_pdf(order: Order) -> bytes:
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(f"<b>{SHOP_NAME}</b> - INVOICE", styles["Title"]))
    story.append(Paragraph(f"Invoice number: {order.id}", styles["Normal"]))
    story.append(Paragraph(f"Order date: {format_date(order.order_date)}", styles["Normal"]))
    story.append(Spacer(1, 12))

    story.append(Paragraph("<b>Billed to:</b>", styles["Normal"]))
    for line in (order.customer_name, order.address, order.phone):
        story.append(Paragraph(escape(line), styles["Normal"]))
    story.append(Spacer(1, 12))

    unit_price = order.total_price / order.quantity
    table = Table(
        [
            ["Product", "Quantity", "Unit price", "Total"],
            [order.product_name, str(order.quantity), format_rupiah(unit_price), format_rupiah(order.total_price)],
        ],
        repeatRows=1,
    )
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    story.append(table)
    story.append(Spacer(1, 12))
    story.append(Paragraph(f"<b>Amount due: {format_rupiah(order.total_price)}</b>", styles["Heading3"]))

    story.append(Spacer(1, 36))
    story.append(Paragraph(f"Admin {SHOP_NAME}", styles["Normal"]))
    story.append(Paragraph("(Digital signature)", styles["Italic"]))
    story.append(Spacer(1, 18))
    story.append(Paragraph("Thank you for shopping with us!", styles["Normal"]))

    return _build(story, f"invoice-{order.id}")


def render_sales_report_pdf(orders: List[Order], start_date: date, end_date: date) -> bytes:
    styles = getSampleStyleSheet()
    story = [
        Paragraph(f"<b>{SHOP_NAME} sales report</b>", styles["Title"]),
        Paragraph(f"Period: {format_date(start_date)} - {format_date(end_date)}", styles["Italic"]),
        Spacer(1, 12),
    ]

    headers = ["Order ID", "Customer", "Product", "Qty", "Total", "Date", "Status"]
    rows = [
        [
            o.id,
            o.customer_name,
            o.product_name,
            str(o.quantity),
            format_rupiah(o.total_price),
            format_date(o.order_date),
            o.status.value,
        ]
        for o in orders
    ]
    # repeatRows повторяет шапку на каждой странице
    table = Table([headers] + rows, repeatRows=1)
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
    ]
    if rows:
        style.append(("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F3F4F6")]))
    table.setStyle(TableStyle(style))
    story.append(table)
    story.append(Spacer(1, 18))
    story.append(Paragraph(
        f"<b>Total revenue (confirmed): {format_rupiah(confirmed_revenue(orders))}</b>",
        styles["Heading3"],
    ))

    return _build(story, f"sales-report-{start_date}-{end_date}")

"""
Invoice rendering (reportlab).

render_invoice is a pure function of a student snapshot, the issue time and
the institute details: the same inputs always produce the same bytes.
Nothing is persisted; the caller streams the result as a download.
"""

import io
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from app.config import Settings
from app.utils.money import format_currency
from app.utils.time import format_long_date, to_epoch_millis

logger = logging.getLogger(__name__)

PRIMARY = colors.Color(255 / 255, 180 / 255, 60 / 255)
ACCENT = colors.Color(45 / 255, 55 / 255, 72 / 255)
SUCCESS = colors.Color(34 / 255, 197 / 255, 94 / 255)
DANGER = colors.Color(239 / 255, 68 / 255, 68 / 255)
TEXT = colors.Color(31 / 255, 41 / 255, 55 / 255)
TEXT_LIGHT = colors.Color(107 / 255, 114 / 255, 128 / 255)
BG_GRAY = colors.Color(249 / 255, 250 / 255, 251 / 255)
REMINDER_BG = colors.Color(249 / 255, 243 / 255, 232 / 255)
REMINDER_TITLE = colors.Color(180 / 255, 83 / 255, 9 / 255)
REMINDER_TEXT = colors.Color(146 / 255, 64 / 255, 14 / 255)
RULE = colors.Color(220 / 255, 220 / 255, 220 / 255)

MARGIN = 15 * mm


@dataclass(frozen=True)
class InstituteDetails:
    name: str
    tagline: str
    address: str
    city: str
    phone: str
    email: str
    currency_symbol: str = "Rs."

    @classmethod
    def from_settings(cls, settings: Settings) -> "InstituteDetails":
        return cls(
            name=settings.INSTITUTE_NAME,
            tagline=settings.INSTITUTE_TAGLINE,
            address=settings.INSTITUTE_ADDRESS,
            city=settings.INSTITUTE_CITY,
            phone=settings.INSTITUTE_PHONE,
            email=settings.INSTITUTE_EMAIL,
            currency_symbol=settings.CURRENCY_SYMBOL,
        )


@dataclass(frozen=True)
class InvoiceData:
    """Everything printed on one invoice"""
    invoice_number: str
    issued_on: str
    student_name: str
    student_email: str
    student_phone: str
    student_class: str
    tuition_fee: Decimal
    amount_paid: Decimal
    paid: bool

    @property
    def balance(self) -> Decimal:
        return self.tuition_fee - self.amount_paid

    @property
    def needs_reminder(self) -> bool:
        return self.balance > 0 and not self.paid

    @classmethod
    def from_student(cls, student, issued_at: datetime) -> "InvoiceData":
        return cls(
            invoice_number=invoice_number_for(issued_at),
            issued_on=format_long_date(issued_at),
            student_name=student.name or "",
            student_email=student.email or "",
            student_phone=student.phone or "",
            student_class=student.student_class or "",
            tuition_fee=Decimal(student.tuition_fee or 0),
            amount_paid=Decimal(student.amount_paid or 0),
            paid=bool(student.paid),
        )


@dataclass(frozen=True)
class InvoiceDocument:
    invoice_number: str
    filename: str
    content: bytes
    media_type: str = "application/pdf"


def invoice_number_for(issued_at: datetime) -> str:
    """INV-<epoch milliseconds>"""
    return f"INV-{to_epoch_millis(issued_at)}"


def invoice_filename(invoice_number: str, student_name: str) -> str:
    """Invoice_<number>_<name with whitespace runs replaced by _>.pdf"""
    safe_name = re.sub(r"\s+", "_", student_name.strip())
    return f"Invoice_{invoice_number}_{safe_name}.pdf"


class _Page:
    """reportlab canvas addressed in millimetres from the top-left corner"""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4

    def y(self, top: float) -> float:
        return self.height - top

    def fill_rect(self, x: float, top: float, w: float, h: float, color) -> None:
        self.c.setFillColor(color)
        self.c.rect(x, self.y(top) - h, w, h, stroke=0, fill=1)

    def fill_round_rect(self, x: float, top: float, w: float, h: float, radius: float, color) -> None:
        self.c.setFillColor(color)
        self.c.roundRect(x, self.y(top) - h, w, h, radius, stroke=0, fill=1)

    def fill_triangle(self, points, color) -> None:
        self.c.setFillColor(color)
        path = self.c.beginPath()
        (x0, t0), *rest = points
        path.moveTo(x0, self.y(t0))
        for x, t in rest:
            path.lineTo(x, self.y(t))
        path.close()
        self.c.drawPath(path, stroke=0, fill=1)

    def text(self, value: str, x: float, baseline: float, font: str, size: float, color, align: str = "left") -> None:
        self.c.setFont(font, size)
        self.c.setFillColor(color)
        if align == "right":
            self.c.drawRightString(x, self.y(baseline), value)
        elif align == "center":
            self.c.drawCentredString(x, self.y(baseline), value)
        else:
            self.c.drawString(x, self.y(baseline), value)

    def hline(self, x1: float, x2: float, top: float, color, width: float) -> None:
        self.c.setStrokeColor(color)
        self.c.setLineWidth(width)
        self.c.line(x1, self.y(top), x2, self.y(top))


def _draw_header(page: _Page, data: InvoiceData, institute: InstituteDetails) -> None:
    w = page.width
    page.fill_rect(0, 0, w, 60 * mm, ACCENT)
    page.fill_triangle([(w - 40 * mm, 0), (w, 0), (w, 40 * mm)], PRIMARY)
    page.fill_triangle([(0, 50 * mm), (0, 60 * mm), (30 * mm, 60 * mm)], PRIMARY)

    page.text(institute.name.upper(), MARGIN, 25 * mm, "Helvetica-Bold", 26, colors.white)
    page.text(institute.tagline, MARGIN, 33 * mm, "Helvetica", 8, colors.white)
    page.text(institute.phone, w - MARGIN, 45 * mm, "Helvetica", 9, colors.white, align="right")
    page.text(institute.email, w - MARGIN, 50 * mm, "Helvetica", 9, colors.white, align="right")

    top = 75 * mm
    page.fill_rect(MARGIN, top, w - 2 * MARGIN, 20 * mm, PRIMARY)
    page.text("INVOICE", MARGIN + 5 * mm, top + 13 * mm, "Helvetica-Bold", 24, colors.white)
    page.text(f"#{data.invoice_number}", w - MARGIN - 5 * mm, top + 13 * mm, "Helvetica", 10,
              colors.white, align="right")


def _draw_parties(page: _Page, data: InvoiceData) -> None:
    w = page.width
    top = 105 * mm
    col_width = (w - 2 * MARGIN - 10 * mm) / 2

    # Bill-to card
    page.fill_round_rect(MARGIN, top, col_width, 40 * mm, 3 * mm, BG_GRAY)
    x = MARGIN + 5 * mm
    page.text("INVOICE TO", x, top + 8 * mm, "Helvetica-Bold", 9, TEXT_LIGHT)
    page.text(data.student_name, x, top + 16 * mm, "Helvetica-Bold", 11, TEXT)
    page.text(data.student_email, x, top + 23 * mm, "Helvetica", 9, TEXT_LIGHT)
    page.text(data.student_phone, x, top + 29 * mm, "Helvetica", 9, TEXT_LIGHT)
    page.text(f"Class: {data.student_class}", x, top + 35 * mm, "Helvetica", 9, TEXT_LIGHT)

    # Details card
    card_x = MARGIN + col_width + 10 * mm
    right = w - MARGIN - 5 * mm
    page.fill_round_rect(card_x, top, col_width, 40 * mm, 3 * mm, BG_GRAY)
    x = card_x + 5 * mm
    page.text("INVOICE DETAILS", x, top + 8 * mm, "Helvetica-Bold", 9, TEXT_LIGHT)
    page.text("Invoice Date:", x, top + 18 * mm, "Helvetica", 9, TEXT)
    page.text(data.issued_on, right, top + 18 * mm, "Helvetica-Bold", 9, TEXT, align="right")
    page.text("Invoice Number:", x, top + 26 * mm, "Helvetica", 9, TEXT)
    page.text(data.invoice_number, right, top + 26 * mm, "Helvetica-Bold", 9, TEXT, align="right")
    page.text("Payment Status:", x, top + 34 * mm, "Helvetica", 9, TEXT)

    status = "PAID" if data.paid else "PENDING"
    pill_width = page.c.stringWidth(status, "Helvetica-Bold", 8) + 8 * mm
    page.fill_round_rect(right - pill_width, top + 29 * mm, pill_width, 7 * mm, 2 * mm,
                         SUCCESS if data.paid else DANGER)
    page.text(status, right - pill_width / 2, top + 34 * mm, "Helvetica-Bold", 8, colors.white,
              align="center")


def _draw_line_items(page: _Page, data: InvoiceData, institute: InstituteDetails) -> float:
    w = page.width
    right = w - MARGIN - 5 * mm
    symbol = institute.currency_symbol
    row_height = 14 * mm

    top = 160 * mm
    page.fill_rect(MARGIN, top, w - 2 * MARGIN, 12 * mm, ACCENT)
    page.text("DESCRIPTION", MARGIN + 5 * mm, top + 8 * mm, "Helvetica-Bold", 10, colors.white)
    page.text("AMOUNT", right, top + 8 * mm, "Helvetica-Bold", 10, colors.white, align="right")
    top += 12 * mm

    page.fill_rect(MARGIN, top, w - 2 * MARGIN, row_height, colors.white)
    page.hline(MARGIN, w - MARGIN, top + row_height, RULE, 0.3 * mm)
    page.text(f"Tuition Fee - {data.student_class}", MARGIN + 5 * mm, top + 9 * mm, "Helvetica", 10, TEXT)
    page.text(format_currency(data.tuition_fee, symbol), right, top + 9 * mm, "Helvetica-Bold", 10, TEXT,
              align="right")
    top += row_height

    page.fill_rect(MARGIN, top, w - 2 * MARGIN, row_height, BG_GRAY)
    page.hline(MARGIN, w - MARGIN, top + row_height, RULE, 0.3 * mm)
    page.text("Amount Paid", MARGIN + 5 * mm, top + 9 * mm, "Helvetica", 10, TEXT)
    page.text(f"-{format_currency(data.amount_paid, symbol)}", right, top + 9 * mm, "Helvetica-Bold", 10,
              SUCCESS, align="right")
    top += row_height + 5 * mm

    page.fill_rect(MARGIN, top, w - 2 * MARGIN, 18 * mm, PRIMARY)
    page.text("BALANCE DUE", MARGIN + 5 * mm, top + 11 * mm, "Helvetica-Bold", 12, colors.white)
    page.text(format_currency(data.balance, symbol), right, top + 11 * mm, "Helvetica-Bold", 14,
              colors.white, align="right")
    return top + 30 * mm


def _draw_reminder(page: _Page, data: InvoiceData, institute: InstituteDetails, top: float) -> None:
    x = MARGIN + 5 * mm
    page.fill_round_rect(MARGIN, top, page.width - 2 * MARGIN, 25 * mm, 3 * mm, REMINDER_BG)
    page.text("PAYMENT REMINDER", x, top + 8 * mm, "Helvetica-Bold", 10, REMINDER_TITLE)
    balance = format_currency(data.balance, institute.currency_symbol)
    page.text(f"Please ensure payment of {balance} at your earliest convenience.",
              x, top + 15 * mm, "Helvetica", 9, REMINDER_TEXT)
    page.text("For payment inquiries, please contact us at your convenience.",
              x, top + 21 * mm, "Helvetica", 9, REMINDER_TEXT)


def _draw_footer(page: _Page, institute: InstituteDetails) -> None:
    w, h = page.width, page.height
    footer_top = h - 35 * mm
    page.hline(MARGIN, w - MARGIN, footer_top, PRIMARY, 1 * mm)

    line_top = footer_top + 8 * mm
    for line in (institute.address, institute.city):
        page.text(line, w / 2, line_top, "Helvetica", 8, TEXT_LIGHT, align="center")
        line_top += 4 * mm
    page.text(f"Thank you for choosing {institute.name}", w / 2, line_top + 4 * mm, "Helvetica-Bold", 9,
              TEXT, align="center")

    page.c.setFillColor(PRIMARY)
    for i in range(3):
        page.c.circle(w / 2 - 10 * mm + i * 10 * mm, 8 * mm, 1.5 * mm, stroke=0, fill=1)


def render_invoice(student, issued_at: datetime, institute: InstituteDetails) -> InvoiceDocument:
    """
    Lay out a one-page A4 invoice for a student.

    Args:
        student: Student snapshot (anything with the Student attributes)
        issued_at: Issue time; drives the invoice number and date line
        institute: Letterhead details

    Returns:
        InvoiceDocument with the PDF bytes and download filename
    """
    data = InvoiceData.from_student(student, issued_at)

    buf = io.BytesIO()
    # invariant=1 drops the creation timestamp so output is reproducible
    c = canvas.Canvas(buf, pagesize=A4, invariant=1)
    c.setTitle(f"Invoice {data.invoice_number}")
    c.setAuthor(institute.name)
    c.setSubject(f"Tuition invoice for {data.student_name}")

    page = _Page(c)
    _draw_header(page, data, institute)
    _draw_parties(page, data)
    next_top = _draw_line_items(page, data, institute)
    if data.needs_reminder:
        _draw_reminder(page, data, institute, next_top)
    _draw_footer(page, institute)

    c.showPage()
    c.save()

    logger.info(
        "Invoice rendered",
        extra={"invoice_number": data.invoice_number, "reminder": data.needs_reminder},
    )
    return InvoiceDocument(
        invoice_number=data.invoice_number,
        filename=invoice_filename(data.invoice_number, data.student_name),
        content=buf.getvalue(),
    )

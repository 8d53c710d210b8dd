# app/domain/services/invoice_pdf.py
"""
Render an assembled invoice Document to PDF.
Uses ReportLab for PDF generation.

The renderer only lays out what the Document already says: it never
recomputes a tax figure. Each DocumentPage becomes one physical page.
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from app.domain.models.document import AddressBlock, Document, DocumentPage, FinalPageBlock

logger = logging.getLogger("invoice_pdf")

HEADER_BG = colors.Color(0.2, 0.3, 0.5)
LABEL_BG = colors.Color(0.95, 0.95, 0.95)
TOTAL_BG = colors.Color(0.9, 0.95, 1.0)
GRID_COLOR = colors.Color(0.8, 0.8, 0.8)

CONTENT_WIDTH = A4[0] - 30 * mm

# Keys of the ``images`` mapping
LOGO = "logo"
QR_CODE = "qr_code"


def _fmt_amount(val: Decimal) -> str:
    return f"{val:,.2f}"


def _fmt_rate(val: Decimal) -> str:
    text = format(val.normalize(), "f") if val != val.to_integral_value() else str(int(val))
    return f"{text}%"


def _styles() -> dict[str, ParagraphStyle]:
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "InvoiceTitle",
            parent=styles["Heading1"],
            fontSize=16,
            alignment=1,  # center
            spaceAfter=6,
        ),
        "subtitle": ParagraphStyle(
            "InvoiceSubtitle",
            parent=styles["Normal"],
            fontSize=8,
            alignment=1,
            textColor=colors.grey,
            spaceAfter=8,
        ),
        "block": ParagraphStyle(
            "Block",
            parent=styles["Normal"],
            fontSize=8,
            leading=10,
        ),
        "small": ParagraphStyle(
            "Small",
            parent=styles["Normal"],
            fontSize=7,
            leading=9,
        ),
        "footer": ParagraphStyle(
            "Footer",
            parent=styles["Normal"],
            fontSize=8,
            textColor=colors.grey,
            alignment=1,
        ),
    }


def _image(data: bytes | None, width: float, height: float) -> Image | None:
    """Flowable for raw image bytes, or None when they cannot be decoded."""
    if not data:
        return None
    try:
        # Decode fully so a bad logo fails here, not inside doc.build()
        ImageReader(io.BytesIO(data)).getRGBData()
    except (OSError, ValueError, SyntaxError) as exc:
        logger.warning("Skipping undecodable image (%d bytes): %s", len(data), exc)
        return None
    return Image(io.BytesIO(data), width=width, height=height, kind="proportional")


def _address_paragraph(block: AddressBlock, style: ParagraphStyle) -> Paragraph:
    lines = [
        f"<b>{escape(block.label)}</b>",
        f"<b>{escape(block.name)}</b>",
        escape(block.address),
        f"GSTIN: {escape(block.gstin)}  PAN: {escape(block.pan)}",
        f"State: {escape(block.state)}",
        f"Phone: {escape(block.phone)}  Email: {escape(block.email)}",
    ]
    return Paragraph("<br/>".join(lines), style)


def _header_table(page: DocumentPage) -> Table:
    header = page.header
    rows = [
        ["Invoice Number", header.invoice_number, "Invoice Date", header.invoice_date],
        ["PO Number", header.po_number, "PO Date", header.po_date],
        ["E-Way Bill", header.eway_number, "Place of Supply", header.place_of_supply],
    ]
    table = Table(rows, colWidths=[CONTENT_WIDTH * w for w in (0.18, 0.32, 0.18, 0.32)])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), LABEL_BG),
                ("BACKGROUND", (2, 0), (2, -1), LABEL_BG),
                ("TEXTCOLOR", (0, 0), (0, -1), colors.grey),
                ("TEXTCOLOR", (2, 0), (2, -1), colors.grey),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 3),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
                ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def _parties_table(page: DocumentPage, style: ParagraphStyle) -> Table:
    cells = [[
        _address_paragraph(page.supplier, style),
        _address_paragraph(page.billed_to, style),
        _address_paragraph(page.shipped_to, style),
    ]]
    table = Table(cells, colWidths=[CONTENT_WIDTH / 3] * 3)
    table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    return table


def _items_table(page: DocumentPage, tax_split: str) -> Table:
    header = ["#", "Item", "HSN/SAC", "Qty", "Rate", "Taxable"]
    if tax_split == "IGST":
        header += ["IGST %", "IGST"]
    elif tax_split == "CGST_SGST":
        header += ["CGST %", "CGST", "SGST %", "SGST"]
    header.append("Amount")

    rows = [header]
    for item in page.items:
        row = [
            str(item.serial),
            item.name[:40],
            item.hsn_code,
            item.quantity,
            _fmt_amount(item.unit_price),
            _fmt_amount(item.taxable_value),
        ]
        if tax_split == "IGST":
            row += [_fmt_rate(item.component_rate), _fmt_amount(item.igst_amount)]
        elif tax_split == "CGST_SGST":
            row += [
                _fmt_rate(item.component_rate),
                _fmt_amount(item.cgst_amount),
                _fmt_rate(item.component_rate),
                _fmt_amount(item.sgst_amount),
            ]
        row.append(_fmt_amount(item.line_total))
        rows.append(row)

    fixed = [18, 0, 45, 40, 50, 55]
    tax_cols = {"IGST": [32, 48], "CGST_SGST": [32, 44, 32, 44]}.get(tax_split, [])
    widths = fixed + tax_cols + [60]
    widths[1] = CONTENT_WIDTH - sum(widths)

    table = Table(rows, colWidths=widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ALIGN", (3, 0), (-1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ("LEFTPADDING", (0, 0), (-1, -1), 3),
                ("RIGHTPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    return table


def _summary_table(final: FinalPageBlock, tax_split: str) -> Table:
    header = ["HSN/SAC", "Rate", "Taxable"]
    if tax_split == "IGST":
        header.append("IGST")
    elif tax_split == "CGST_SGST":
        header += ["CGST", "SGST"]
    header += ["Total Tax", "Total"]

    rows = [header]
    for entry in final.tax_summary:
        row = [entry.hsn_code, _fmt_rate(entry.tax_rate), _fmt_amount(entry.taxable_value)]
        if tax_split == "IGST":
            row.append(_fmt_amount(entry.igst_amount))
        elif tax_split == "CGST_SGST":
            row += [_fmt_amount(entry.cgst_amount), _fmt_amount(entry.sgst_amount)]
        row += [_fmt_amount(entry.total_tax), _fmt_amount(entry.total)]
        rows.append(row)

    table = Table(rows, colWidths=[CONTENT_WIDTH / len(header)] * len(header))
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
            ]
        )
    )
    return table


def _totals_table(final: FinalPageBlock, tax_split: str) -> Table:
    totals = final.totals
    rows = [
        ["Description", "Amount (Rs)"],
        ["Total Items / Qty", f"{totals.total_item_count} / {totals.total_quantity}"],
        ["Taxable Value", _fmt_amount(totals.taxable_total)],
    ]
    if tax_split == "IGST":
        rows.append(["IGST", _fmt_amount(totals.igst_total)])
    elif tax_split == "CGST_SGST":
        rows.append(["CGST", _fmt_amount(totals.cgst_total)])
        rows.append(["SGST", _fmt_amount(totals.sgst_total)])
    rows.append(["Total Tax", _fmt_amount(totals.tax_total)])
    rows.append(["TOTAL AMOUNT", _fmt_amount(totals.grand_total)])

    table = Table(rows, colWidths=[CONTENT_WIDTH * 0.65, CONTENT_WIDTH * 0.35])
    table.setStyle(
        TableStyle(
            [
                # Header row
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                # Total row (last row)
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                # General
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ("LEFTPADDING", (0, 0), (-1, -1), 8),
                ("RIGHTPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _bank_table(final: FinalPageBlock, style: ParagraphStyle, qr: Image | None) -> Table:
    bank = final.bank
    lines = [
        "<b>Bank Details</b>",
        escape(bank.display),
        f"A/c Holder: {escape(bank.account_holder)}",
        f"A/c No: {escape(bank.account_no)}",
        f"UPI: {escape(bank.upi_id)}",
    ]
    cells = [[Paragraph("<br/>".join(lines), style), qr or ""]]
    table = Table(cells, colWidths=[CONTENT_WIDTH * 0.75, CONTENT_WIDTH * 0.25])
    table.setStyle(
        TableStyle(
            [
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ALIGN", (1, 0), (1, 0), "CENTER"),
            ]
        )
    )
    return table


def _page_elements(
    document: Document,
    page: DocumentPage,
    styles: dict[str, ParagraphStyle],
    images: dict[str, bytes | None],
) -> list:
    elements = []

    logo = _image(images.get(LOGO), 30 * mm, 15 * mm)
    if logo is not None:
        elements.append(logo)
    elements.append(Paragraph(escape(page.header.title), styles["title"]))
    elements.append(
        Paragraph(f"Page {page.page_number} of {page.total_pages}", styles["subtitle"])
    )
    elements.append(_header_table(page))
    elements.append(Spacer(1, 6))
    elements.append(_parties_table(page, styles["block"]))
    elements.append(Spacer(1, 6))

    if page.items:
        elements.append(_items_table(page, document.tax_split))
        elements.append(Spacer(1, 6))

    final = page.final
    if final is None:
        elements.append(Paragraph("Continued on next page", styles["footer"]))
        return elements

    if final.tax_summary and document.gst_applicable:
        elements.append(_summary_table(final, document.tax_split))
        elements.append(Spacer(1, 6))
    elements.append(_totals_table(final, document.tax_split))
    elements.append(
        Paragraph(f"<b>Amount in words:</b> {escape(final.totals.amount_in_words)}", styles["block"])
    )
    elements.append(Spacer(1, 6))

    if final.bank is not None:
        qr = _image(images.get(QR_CODE), 25 * mm, 25 * mm)
        elements.append(_bank_table(final, styles["block"], qr))
        elements.append(Spacer(1, 6))

    elements.append(Paragraph(f"<b>Terms &amp; Notes:</b> {escape(final.terms)}", styles["small"]))
    if final.show_signature:
        elements.append(Spacer(1, 20))
        elements.append(Paragraph("Authorised Signatory", styles["block"]))

    elements.append(Spacer(1, 10))
    elements.append(Paragraph("This is a computer-generated invoice.", styles["footer"]))
    return elements


def render_document_pdf(document: Document, images: dict[str, bytes | None] | None = None) -> bytes:
    """
    Render an assembled invoice document to PDF.

    Args:
        document: Output of ``generate_document``.
        images: Optional raw image bytes keyed by ``"logo"`` and
                ``"qr_code"``; a missing or None entry renders no image.

    Returns:
        PDF file as bytes.
    """
    images = images or {}
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=document.title,
    )

    styles = _styles()
    elements = []
    for page in document.pages:
        if elements:
            elements.append(PageBreak())
        elements.extend(_page_elements(document, page, styles, images))

    doc.build(elements)
    logger.info("Rendered %s PDF with %d pages", document.title, len(document.pages))
    return buf.getvalue()

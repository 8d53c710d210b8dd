# app/domain/services/document_assembler.py
"""
Compose the per-page document description.

Pure structuring: every figure comes from the InvoiceComputation built
by ``invoice_document.compute_invoice``. Nothing here decides the tax
split or rounds an amount.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Sequence

from app.domain.models.computation import InvoiceComputation
from app.domain.models.document import (
    AddressBlock,
    BankBlock,
    Document,
    DocumentPage,
    FinalPageBlock,
    HeaderBlock,
    ItemRow,
    TaxSummaryEntry,
    TotalsBlock,
)
from app.domain.models.invoice import BankDetails, Company, Party, ShippingAddress, Transaction
from app.domain.services.address_resolver import (
    PLACEHOLDER,
    format_phone_number,
    or_placeholder,
    place_of_supply_display,
    resolve_billing_address,
    resolve_buyer_phone,
    resolve_company_address,
    resolve_consignee_phone,
    resolve_shipping_address,
)
from app.domain.services.line_items import ComputedLine
from app.domain.services.paginator import Page

# unit -> (singular, plural)
UNIT_SHORT_FORMS = {
    "piece": ("Pc", "Pcs"),
    "kilogram": ("Kg", "Kgs"),
    "kg": ("Kg", "Kgs"),
    "gram": ("g", "g"),
    "g": ("g", "g"),
    "litre": ("Ltr", "Ltrs"),
    "ltr": ("Ltr", "Ltrs"),
    "box": ("Box", "Boxes"),
    "bag": ("Bag", "Bags"),
    "packet": ("Pkt", "Pkts"),
    "pkt": ("Pkt", "Pkts"),
    "dozen": ("dz", "dz"),
    "meter": ("m", "m"),
    "m": ("m", "m"),
    "foot": ("ft", "ft"),
    "ft": ("ft", "ft"),
    "unit": ("Unit", "Units"),
}


# ---------------------------------------------------------------------------
# Field formatting
# ---------------------------------------------------------------------------

def document_title(transaction: Transaction, gst_applicable: bool) -> str:
    if transaction.type == "proforma":
        return "PROFORMA INVOICE"
    return "TAX INVOICE" if gst_applicable else "INVOICE"


def invoice_number(transaction: Transaction) -> str:
    """Invoice number, else reference number, else ``INV-`` + last 6 of the id."""
    if transaction.invoice_number and transaction.invoice_number.strip():
        return transaction.invoice_number.strip()
    if transaction.reference_number and transaction.reference_number.strip():
        return transaction.reference_number.strip()
    tail = (transaction.id or "")[-6:].upper()
    return f"INV-{tail or '000000'}"


def format_date(value: dt.date | None) -> str:
    return value.strftime("%d-%m-%Y") if value else PLACEHOLDER


def _plain_number(value: Decimal) -> str:
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


def format_quantity(quantity: Decimal | None, unit: str | None) -> str:
    """``"2 Pcs"``, ``"1 Kg"``; unknown units are kept as given."""
    if quantity is None:
        return PLACEHOLDER
    qty = _plain_number(quantity)
    if not unit or not unit.strip():
        return qty
    normalized = unit.strip().lower()
    singular_key = normalized[:-1] if normalized.endswith("s") else normalized
    forms = UNIT_SHORT_FORMS.get(normalized) or UNIT_SHORT_FORMS.get(singular_key)
    if forms is None:
        return f"{qty} {unit.strip()}"
    return f"{qty} {forms[0] if quantity == 1 else forms[1]}"


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _header(transaction: Transaction, company: Company, computation: InvoiceComputation) -> HeaderBlock:
    return HeaderBlock(
        title=document_title(transaction, computation.classification.gst_applicable),
        document_type=transaction.type,
        invoice_number=invoice_number(transaction),
        invoice_date=format_date(transaction.date),
        po_number=or_placeholder(transaction.po_number),
        po_date=format_date(transaction.po_date),
        eway_number=or_placeholder(transaction.eway_number),
        place_of_supply=place_of_supply_display(computation.place_of_supply_state),
        logo_url=company.logo_url or None,
    )


def _address_blocks(
    company: Company,
    party: Party | None,
    shipping_address: ShippingAddress | None,
    computation: InvoiceComputation,
) -> tuple[AddressBlock, AddressBlock, AddressBlock]:
    supplier = AddressBlock(
        label="Supplier",
        name=or_placeholder(company.business_name),
        address=resolve_company_address(company),
        gstin=or_placeholder(company.gstin),
        pan=or_placeholder(company.pan),
        state=or_placeholder(computation.supplier_state),
        phone=format_phone_number(company.mobile_number) or PLACEHOLDER,
        email=or_placeholder(company.email),
    )

    billing_address = resolve_billing_address(party)
    buyer_phone = resolve_buyer_phone(party)
    billed_to = AddressBlock(
        label="Billed To",
        name=or_placeholder(party.name if party else None),
        address=billing_address,
        gstin=or_placeholder(party.gstin if party else None),
        pan=or_placeholder(party.pan if party else None),
        state=or_placeholder(party.state if party else None),
        phone=buyer_phone,
        email=or_placeholder(party.email if party else None),
    )

    consignee_name = (shipping_address.name if shipping_address else None) or (
        party.name if party else None
    )
    shipped_to = AddressBlock(
        label="Shipped To",
        name=or_placeholder(consignee_name),
        address=resolve_shipping_address(shipping_address, billing_address),
        gstin=billed_to.gstin,
        pan=billed_to.pan,
        state=or_placeholder(computation.place_of_supply_state),
        phone=resolve_consignee_phone(shipping_address, buyer_phone),
        email=billed_to.email,
    )
    return supplier, billed_to, shipped_to


def _item_row(line: ComputedLine, serial: int) -> ItemRow:
    item = line.source
    return ItemRow(
        serial=serial,
        name=item.name,
        description=item.description,
        kind=item.kind,
        hsn_code=line.hsn_code,
        quantity=format_quantity(line.quantity, item.unit),
        unit_price=line.unit_price,
        taxable_value=line.taxable_value,
        tax_rate=line.tax_rate_percent,
        component_rate=line.component_rate_percent,
        igst_amount=line.igst_amount,
        cgst_amount=line.cgst_amount,
        sgst_amount=line.sgst_amount,
        line_total=line.line_total,
    )


def bank_available(bank: BankDetails | None) -> bool:
    if bank is None:
        return False
    return any(
        (value or "").strip()
        for value in (bank.bank_name, bank.ifsc_code, bank.branch_address, bank.account_no, bank.upi_id)
    )


def bank_block(transaction: Transaction, bank: BankDetails | None) -> BankBlock | None:
    """Bank/QR block, or None for proforma documents and missing details."""
    if transaction.type == "proforma" or not bank_available(bank):
        return None
    ifsc = (bank.ifsc_code or "").strip()
    display = ", ".join(
        part
        for part in (
            (bank.bank_name or "").strip(),
            (bank.branch_address or "").strip(),
            (bank.city or "").strip(),
            f"IFSC: {ifsc}" if ifsc else "",
        )
        if part
    )
    return BankBlock(
        bank_name=or_placeholder(bank.bank_name),
        account_holder=or_placeholder(bank.account_holder),
        account_no=or_placeholder(bank.account_no),
        ifsc_code=or_placeholder(bank.ifsc_code),
        branch=or_placeholder(bank.branch_address),
        upi_id=or_placeholder(bank.upi_id),
        qr_code_url=bank.qr_code_url or None,
        display=display or PLACEHOLDER,
    )


def _final_block(transaction: Transaction, bank: BankDetails | None, computation: InvoiceComputation) -> FinalPageBlock:
    totals = computation.totals
    return FinalPageBlock(
        tax_summary=[
            TaxSummaryEntry(
                hsn_code=row.hsn_code,
                tax_rate=row.tax_rate_percent,
                taxable_value=row.taxable_value,
                igst_amount=row.igst_amount,
                cgst_amount=row.cgst_amount,
                sgst_amount=row.sgst_amount,
                total_tax=row.total_tax,
                total=row.total,
            )
            for row in computation.tax_summary
        ],
        totals=TotalsBlock(
            taxable_total=totals.taxable_total,
            igst_total=totals.igst_total,
            cgst_total=totals.cgst_total,
            sgst_total=totals.sgst_total,
            tax_total=totals.tax_total,
            grand_total=totals.grand_total,
            total_item_count=totals.total_item_count,
            total_quantity=totals.total_quantity,
            amount_in_words=computation.amount_in_words,
        ),
        bank=bank_block(transaction, bank),
        terms=or_placeholder(transaction.notes),
        show_signature=transaction.type != "proforma",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def assemble(
    transaction: Transaction,
    company: Company,
    party: Party | None,
    shipping_address: ShippingAddress | None,
    bank: BankDetails | None,
    pages: Sequence[Page],
    *,
    computation: InvoiceComputation,
) -> Document:
    classification = computation.classification
    header = _header(transaction, company, computation)
    supplier, billed_to, shipped_to = _address_blocks(company, party, shipping_address, computation)

    document_pages = []
    for page in pages:
        document_pages.append(
            DocumentPage(
                page_number=page.index,
                total_pages=page.total_pages,
                is_final_page=page.is_final_page,
                header=header,
                supplier=supplier,
                billed_to=billed_to,
                shipped_to=shipped_to,
                items=[
                    _item_row(line, page.start_index + offset + 1)
                    for offset, line in enumerate(page.items)
                ],
                final=_final_block(transaction, bank, computation) if page.is_final_page else None,
            )
        )

    return Document(
        title=header.title,
        tax_split=classification.split.value,
        gst_applicable=classification.gst_applicable,
        interstate=classification.interstate,
        warnings=list(computation.warnings),
        pages=document_pages,
    )

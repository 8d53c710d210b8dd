# app/domain/models/document.py
"""
Structured document handed to renderers.

Plain data only: no markup, fonts or colours. Money fields are already
rounded to 2 places and must be printed as-is.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class HeaderBlock(BaseModel):
    title: str                      # PROFORMA INVOICE / TAX INVOICE / INVOICE
    document_type: str
    invoice_number: str
    invoice_date: str = "-"
    po_number: str = "-"
    po_date: str = "-"
    eway_number: str = "-"
    place_of_supply: str = "-"
    logo_url: Optional[str] = None


class AddressBlock(BaseModel):
    label: str                      # "Supplier", "Billed To", "Shipped To"
    name: str = "-"
    address: str = "-"
    gstin: str = "-"
    pan: str = "-"
    state: str = "-"
    phone: str = "-"
    email: str = "-"


class ItemRow(BaseModel):
    serial: int
    name: str
    description: str = ""
    kind: str = "product"
    hsn_code: str = "-"
    quantity: str = "-"             # display text, e.g. "2 Pcs"; "-" for services
    unit_price: Decimal
    taxable_value: Decimal
    tax_rate: Decimal
    component_rate: Decimal         # rate per component: half for CGST/SGST
    igst_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    line_total: Decimal


class TaxSummaryEntry(BaseModel):
    hsn_code: str
    tax_rate: Decimal
    taxable_value: Decimal
    igst_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    total_tax: Decimal
    total: Decimal


class TotalsBlock(BaseModel):
    taxable_total: Decimal
    igst_total: Decimal
    cgst_total: Decimal
    sgst_total: Decimal
    tax_total: Decimal
    grand_total: Decimal
    total_item_count: int
    total_quantity: Decimal
    amount_in_words: str


class BankBlock(BaseModel):
    bank_name: str = "-"
    account_holder: str = "-"
    account_no: str = "-"
    ifsc_code: str = "-"
    branch: str = "-"
    upi_id: str = "-"
    qr_code_url: Optional[str] = None
    display: str = "-"              # one-line "bank, branch, city, IFSC: code"


class FinalPageBlock(BaseModel):
    tax_summary: list[TaxSummaryEntry] = Field(default_factory=list)
    totals: TotalsBlock
    bank: Optional[BankBlock] = None    # None for proforma or when unavailable
    terms: str = "-"
    show_signature: bool = True


class DocumentPage(BaseModel):
    page_number: int
    total_pages: int
    is_final_page: bool
    header: HeaderBlock
    supplier: AddressBlock
    billed_to: AddressBlock
    shipped_to: AddressBlock
    items: list[ItemRow] = Field(default_factory=list)
    final: Optional[FinalPageBlock] = None


class Document(BaseModel):
    title: str
    tax_split: str                  # IGST / CGST_SGST / NONE
    gst_applicable: bool
    interstate: bool
    warnings: list[str] = Field(default_factory=list)
    pages: list[DocumentPage] = Field(default_factory=list)

    @property
    def final_page(self) -> DocumentPage:
        return self.pages[-1]

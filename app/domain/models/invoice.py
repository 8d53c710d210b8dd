# app/domain/models/invoice.py
"""
Input records for invoice generation.

These are snapshots handed over by the network layer. They are frozen:
the engine reads them and never mutates them.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

# Raw numeric value "as entered" (parsed and validated by the line computer)
RawNumber = Union[Decimal, int, float, str, None]

DocumentType = Literal["sale", "purchase", "proforma"]
ItemKind = Literal["product", "service"]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class LineInput(_Record):
    kind: ItemKind = "product"
    name: str = "Item"
    description: str = ""
    quantity: RawNumber = None    # absent / irrelevant for services
    unit: Optional[str] = None
    unit_price: RawNumber = None
    amount: RawNumber = None      # pre-computed line amount, wins over qty * price
    tax_rate: RawNumber = None    # percent, e.g. 18
    hsn_code: Optional[str] = None  # HSN for products, SAC for services


class ShippingAddress(_Record):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    phone: Optional[str] = None
    mobile_number: Optional[str] = None
    contact_number: Optional[str] = None


class BankDetails(_Record):
    bank_name: Optional[str] = None
    account_holder: Optional[str] = None
    account_no: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_address: Optional[str] = None
    city: Optional[str] = None
    upi_id: Optional[str] = None
    qr_code_url: Optional[str] = None


class Party(_Record):
    """Counter-party: customer on a sale, vendor on a purchase."""

    name: str = ""
    gstin: Optional[str] = None
    pan: Optional[str] = None
    state: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    phone: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None


class Company(_Record):
    """The document issuer."""

    business_name: str = ""
    gstin: Optional[str] = None
    pan: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    email: Optional[str] = None
    mobile_number: Optional[str] = None
    logo_url: Optional[str] = None


class Transaction(_Record):
    id: Optional[str] = None
    type: DocumentType = "sale"
    date: Optional[dt.date] = None
    invoice_number: Optional[str] = None
    reference_number: Optional[str] = None
    po_number: Optional[str] = None
    po_date: Optional[dt.date] = None
    eway_number: Optional[str] = None
    notes: Optional[str] = None
    items: tuple[LineInput, ...] = ()

    # Used when the caller does not pass shipping / bank explicitly
    shipping_address: Optional[ShippingAddress] = None
    bank: Optional[BankDetails] = None

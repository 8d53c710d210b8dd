# app/api/v1/schemas/documents.py
"""Request schemas for invoice document endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.domain.models.invoice import BankDetails, Company, Party, ShippingAddress, Transaction


class GenerateDocumentRequest(BaseModel):
    """Everything needed to generate one invoice document."""

    transaction: Transaction
    company: Company
    party: Optional[Party] = None
    shipping_address: Optional[ShippingAddress] = Field(
        default=None,
        description="Overrides transaction.shipping_address when given",
    )
    bank: Optional[BankDetails] = Field(
        default=None,
        description="Overrides transaction.bank when given",
    )
    charges_tax: Optional[bool] = Field(
        default=None,
        description="Whether the company charges GST; defaults to 'company has a GSTIN'",
    )
    capacity_per_page: Optional[int] = Field(
        default=None,
        ge=1,
        description="Item rows per page; defaults to the PAGE_CAPACITY setting",
    )

# app/domain/models/computation.py
"""
Figures computed once per generation call.

The assembler only reads this bundle; it never re-derives the split or
any amount.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.services.document_totals import DocumentTotals
from app.domain.services.hsn_summary import TaxSummaryRow
from app.domain.services.line_items import ComputedLine
from app.domain.services.tax_classifier import Classification

WARNING_PLACE_OF_SUPPLY_UNKNOWN = "place_of_supply_unknown"
WARNING_PARTY_GSTIN_INVALID = "party_gstin_invalid"


@dataclass(frozen=True)
class InvoiceComputation:
    classification: Classification
    lines: list[ComputedLine]
    tax_summary: list[TaxSummaryRow]
    totals: DocumentTotals
    amount_in_words: str
    supplier_state: str
    place_of_supply_state: str
    warnings: list[str] = field(default_factory=list)

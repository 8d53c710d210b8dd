# app/domain/services/document_totals.py
"""Document-level totals across all computed lines."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from app.domain.money import ZERO, round2
from app.domain.services.line_items import ComputedLine


@dataclass(frozen=True)
class DocumentTotals:
    taxable_total: Decimal = ZERO
    igst_total: Decimal = ZERO
    cgst_total: Decimal = ZERO
    sgst_total: Decimal = ZERO
    grand_total: Decimal = ZERO
    total_item_count: int = 0
    total_quantity: Decimal = Decimal("0")

    @property
    def tax_total(self) -> Decimal:
        return self.igst_total + self.cgst_total + self.sgst_total


def totalize(lines: Sequence[ComputedLine]) -> DocumentTotals:
    """
    Sum every figure across lines.

    Sums are exact Decimals and rounded once at the end, never per
    addition. Services contribute nothing to the quantity total.
    """
    taxable = sum((line.taxable_value for line in lines), Decimal("0"))
    igst = sum((line.igst_amount for line in lines), Decimal("0"))
    cgst = sum((line.cgst_amount for line in lines), Decimal("0"))
    sgst = sum((line.sgst_amount for line in lines), Decimal("0"))
    quantity = sum(
        (line.quantity for line in lines if not line.is_service and line.quantity is not None),
        Decimal("0"),
    )

    return DocumentTotals(
        taxable_total=round2(taxable),
        igst_total=round2(igst),
        cgst_total=round2(cgst),
        sgst_total=round2(sgst),
        grand_total=round2(taxable + igst + cgst + sgst),
        total_item_count=len(lines),
        total_quantity=quantity,
    )

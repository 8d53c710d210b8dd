# app/domain/services/hsn_summary.py
"""
HSN/SAC-wise tax summary for the statutory table on the last page.

Rows are keyed by (HSN/SAC code, tax rate) and keep the order in which
each key first appears in the item list, so regenerating the same
transaction always yields the same row order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from app.domain.money import ZERO
from app.domain.services.line_items import ComputedLine


@dataclass
class TaxSummaryRow:
    hsn_code: str
    tax_rate_percent: Decimal
    taxable_value: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    line_count: int = 0
    total_tax: Decimal = field(init=False, default=ZERO)
    total: Decimal = field(init=False, default=ZERO)

    def add(self, line: ComputedLine) -> None:
        self.taxable_value += line.taxable_value
        self.igst_amount += line.igst_amount
        self.cgst_amount += line.cgst_amount
        self.sgst_amount += line.sgst_amount
        self.total_tax = self.igst_amount + self.cgst_amount + self.sgst_amount
        self.total = self.taxable_value + self.total_tax
        self.line_count += 1


def aggregate_hsn(lines: Iterable[ComputedLine]) -> list[TaxSummaryRow]:
    rows: dict[tuple[str, Decimal], TaxSummaryRow] = {}
    for line in lines:
        # Decimal("18") and Decimal("18.00") hash equal, so 18 vs 18.00 share a row
        key = (line.hsn_code, line.tax_rate_percent)
        row = rows.get(key)
        if row is None:
            row = TaxSummaryRow(hsn_code=line.hsn_code, tax_rate_percent=line.tax_rate_percent)
            rows[key] = row
        row.add(line)
    return list(rows.values())

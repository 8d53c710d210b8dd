# app/domain/services/line_items.py
"""
Per-line tax computation.

Takes the raw lines as entered and the split chosen by the classifier,
returns one ComputedLine per input in the same order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from app.domain.errors import ValidationError
from app.domain.models.invoice import LineInput
from app.domain.money import ZERO, parse_decimal, round2
from app.domain.services.tax_classifier import TaxSplit

logger = logging.getLogger("line_items")

_HUNDRED = Decimal("100")
_TWO_HUNDRED = Decimal("200")


@dataclass(frozen=True)
class ComputedLine:
    source: LineInput
    quantity: Decimal | None          # None for services (displayed "-")
    unit_price: Decimal
    taxable_value: Decimal
    tax_rate_percent: Decimal
    igst_amount: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    line_total: Decimal = ZERO
    split: TaxSplit = TaxSplit.NONE

    @property
    def is_service(self) -> bool:
        return self.source.kind == "service"

    @property
    def hsn_code(self) -> str:
        code = (self.source.hsn_code or "").strip()
        return code or "-"

    @property
    def component_rate_percent(self) -> Decimal:
        """Rate printed per tax column: half the rate on each of CGST and SGST."""
        if self.split is TaxSplit.CGST_SGST:
            return self.tax_rate_percent / 2
        return self.tax_rate_percent

    @property
    def tax_amount(self) -> Decimal:
        return self.igst_amount + self.cgst_amount + self.sgst_amount


def _quantity(item: LineInput, index: int) -> Decimal | None:
    qty = parse_decimal(item.quantity, f"items[{index}].quantity")
    if qty is not None and qty < 0:
        raise ValidationError(
            f"Negative quantity {qty} on line {index + 1} ({item.name!r})",
            field=f"items[{index}].quantity",
        )
    if item.kind == "service":
        return None
    if qty is None:
        return Decimal("1")
    return qty


def _tax_rate(item: LineInput, index: int) -> Decimal:
    field = f"items[{index}].tax_rate"
    rate = parse_decimal(item.tax_rate, field)
    if rate is None:
        return Decimal("0")
    if rate < 0:
        raise ValidationError(f"Negative tax rate {rate} on line {index + 1}", field=field)
    return rate


def compute_line(item: LineInput, split: TaxSplit, index: int = 0) -> ComputedLine:
    quantity = _quantity(item, index)
    rate = _tax_rate(item, index)
    unit_price = parse_decimal(item.unit_price, f"items[{index}].unit_price")
    amount = parse_decimal(item.amount, f"items[{index}].amount")

    effective_qty = quantity if quantity is not None else Decimal("1")
    if amount is not None:
        taxable = round2(amount)
    else:
        taxable = round2(effective_qty * (unit_price or Decimal("0")))

    if unit_price is None:
        # Price shown on the document when only the line amount was given
        unit_price = round2(taxable / effective_qty) if effective_qty else ZERO
    else:
        unit_price = round2(unit_price)

    igst = cgst = sgst = ZERO
    if split is TaxSplit.IGST:
        igst = round2(taxable * rate / _HUNDRED)
    elif split is TaxSplit.CGST_SGST:
        # Each half rounded on its own; may differ from IGST rounding by 1 paisa
        cgst = round2(taxable * rate / _TWO_HUNDRED)
        sgst = round2(taxable * rate / _TWO_HUNDRED)

    return ComputedLine(
        source=item,
        quantity=quantity,
        unit_price=unit_price,
        taxable_value=taxable,
        tax_rate_percent=rate,
        igst_amount=igst,
        cgst_amount=cgst,
        sgst_amount=sgst,
        line_total=round2(taxable + igst + cgst + sgst),
        split=split,
    )


def compute_lines(line_inputs: Iterable[LineInput], split: TaxSplit) -> list[ComputedLine]:
    """Compute every line; the first malformed line raises ValidationError."""
    lines = [compute_line(item, split, index) for index, item in enumerate(line_inputs)]
    logger.debug("Computed %d lines with split=%s", len(lines), split.value)
    return lines

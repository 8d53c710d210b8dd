"""Tests for the HSN/SAC tax summary."""

from decimal import Decimal

from app.domain.models.invoice import LineInput
from app.domain.services.document_totals import totalize
from app.domain.services.hsn_summary import aggregate_hsn
from app.domain.services.line_items import compute_lines
from app.domain.services.tax_classifier import TaxSplit


def _lines(split=TaxSplit.CGST_SGST):
    items = [
        LineInput(name="Bag", quantity=2, unit_price=500, tax_rate=18, hsn_code="4202"),
        LineInput(name="Pen", quantity=10, unit_price="12.50", tax_rate=12, hsn_code="9608"),
        LineInput(name="Wallet", quantity=1, unit_price=300, tax_rate="18.00", hsn_code="4202"),
        LineInput(name="Refill", quantity=5, unit_price=8, tax_rate=12, hsn_code="9608"),
        LineInput(name="Strap", quantity=1, unit_price=50, tax_rate=5, hsn_code="4202"),
    ]
    return compute_lines(items, split)


class TestAggregateHSN:
    def test_groups_by_code_and_rate(self):
        rows = aggregate_hsn(_lines())
        keys = [(row.hsn_code, row.tax_rate_percent) for row in rows]
        assert keys == [
            ("4202", Decimal("18")),
            ("9608", Decimal("12")),
            ("4202", Decimal("5")),
        ]

    def test_row_sums(self):
        first = aggregate_hsn(_lines())[0]
        assert first.taxable_value == Decimal("1300.00")
        assert first.cgst_amount == Decimal("117.00")
        assert first.sgst_amount == Decimal("117.00")
        assert first.total_tax == Decimal("234.00")
        assert first.total == Decimal("1534.00")
        assert first.line_count == 2

    def test_empty_input(self):
        assert aggregate_hsn([]) == []

    def test_taxable_matches_document_total(self):
        lines = _lines(TaxSplit.IGST)
        rows = aggregate_hsn(lines)
        totals = totalize(lines)
        assert sum(row.taxable_value for row in rows) == totals.taxable_total

    def test_order_is_stable(self):
        first = [(r.hsn_code, r.tax_rate_percent) for r in aggregate_hsn(_lines())]
        second = [(r.hsn_code, r.tax_rate_percent) for r in aggregate_hsn(_lines())]
        assert first == second

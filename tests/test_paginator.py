"""Tests for page splitting and the footer overflow rule."""

import pytest

from app.domain.errors import ValidationError
from app.domain.services.line_items import compute_lines
from app.domain.services.paginator import (
    PaginationConfig,
    has_large_footer,
    paginate,
    paginate_with_config,
)
from app.domain.services.tax_classifier import TaxSplit


@pytest.fixture
def lines_of(make_lines):
    def _make(count):
        return compute_lines(make_lines(count), TaxSplit.NONE)

    return _make


class TestPaginate:
    def test_overflow_rule_not_triggered_by_short_last_page(self, lines_of):
        pages = paginate(lines_of(45), capacity_per_page=40, has_large_footer=True)
        assert [p.item_count for p in pages] == [40, 5]
        assert [p.is_final_page for p in pages] == [False, True]
        assert pages[-1].total_pages == 2

    def test_dense_last_page_gets_footer_page(self, lines_of):
        pages = paginate(lines_of(38), capacity_per_page=40, has_large_footer=True)
        assert len(pages) == 2
        assert pages[0].item_count == 38
        assert not pages[0].is_final_page
        assert pages[1].item_count == 0
        assert pages[1].is_final_page

    def test_dense_last_page_without_large_footer(self, lines_of):
        pages = paginate(lines_of(38), capacity_per_page=40, has_large_footer=False)
        assert len(pages) == 1
        assert pages[0].is_final_page

    def test_cutoff_is_exclusive(self, lines_of):
        assert len(paginate(lines_of(15), has_large_footer=True)) == 1
        assert len(paginate(lines_of(16), has_large_footer=True)) == 2

    def test_zero_lines_gives_one_final_page(self):
        pages = paginate([], has_large_footer=True)
        assert len(pages) == 1
        assert pages[0].items == ()
        assert pages[0].is_final_page

    def test_every_line_on_exactly_one_page(self, lines_of):
        lines = lines_of(123)
        pages = paginate(lines, capacity_per_page=40, has_large_footer=True)
        assert sum(p.item_count for p in pages) == len(lines)
        assert [line for p in pages for line in p.items] == lines

    def test_start_index_and_numbering(self, lines_of):
        pages = paginate(lines_of(85), capacity_per_page=40)
        assert [p.start_index for p in pages] == [0, 40, 80]
        assert [p.index for p in pages] == [1, 2, 3]
        assert all(p.total_pages == 3 for p in pages)

    def test_deterministic(self, lines_of):
        lines = lines_of(77)
        first = paginate(lines, capacity_per_page=25, has_large_footer=True)
        second = paginate(lines, capacity_per_page=25, has_large_footer=True)
        assert first == second

    def test_custom_cutoff(self, lines_of):
        pages = paginate(lines_of(10), capacity_per_page=40, has_large_footer=True, overflow_item_cutoff=5)
        assert len(pages) == 2

    def test_invalid_capacity(self, lines_of):
        with pytest.raises(ValidationError):
            paginate(lines_of(3), capacity_per_page=0)

    def test_invalid_cutoff(self, lines_of):
        with pytest.raises(ValidationError):
            paginate(lines_of(3), overflow_item_cutoff=-1)

    def test_with_config(self, lines_of):
        config = PaginationConfig(capacity_per_page=10, footer_overflow_item_cutoff=3)
        pages = paginate_with_config(lines_of(14), config, large_footer=True)
        assert [p.item_count for p in pages] == [10, 4, 0]


class TestLargeFooter:
    def test_bank_block_makes_footer_large(self):
        assert has_large_footer(True, None, 300)

    def test_long_terms_make_footer_large(self):
        assert has_large_footer(False, "x" * 301, 300)
        assert not has_large_footer(False, "x" * 300, 300)

    def test_small_footer(self):
        assert not has_large_footer(False, "Goods once sold will not be taken back.", 300)

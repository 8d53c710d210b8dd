# app/domain/services/paginator.py
"""
Split computed lines into fixed-capacity pages.

Only the final page carries totals, tax summary, bank block and terms.
If that page is already dense and the footer is large, the footer moves
to an extra item-free page instead of overflowing the dense one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from app.domain.errors import ValidationError
from app.domain.services.line_items import ComputedLine

DEFAULT_CAPACITY_PER_PAGE = 40
DEFAULT_FOOTER_OVERFLOW_ITEM_CUTOFF = 15
DEFAULT_FOOTER_OVERFLOW_THRESHOLD = 300  # characters of terms text


@dataclass(frozen=True)
class PaginationConfig:
    capacity_per_page: int = DEFAULT_CAPACITY_PER_PAGE
    # Terms text longer than this counts as a large footer on its own
    footer_overflow_threshold: int = DEFAULT_FOOTER_OVERFLOW_THRESHOLD
    # A final page with more items than this cannot also hold a large footer
    footer_overflow_item_cutoff: int = DEFAULT_FOOTER_OVERFLOW_ITEM_CUTOFF


@dataclass(frozen=True)
class Page:
    items: tuple[ComputedLine, ...]
    index: int            # 1-based
    total_pages: int
    is_final_page: bool
    start_index: int = 0  # position of items[0] in the full list

    @property
    def item_count(self) -> int:
        return len(self.items)


def has_large_footer(bank_block_shown: bool, terms: str | None, threshold: int) -> bool:
    """Bank/QR details or long terms text make the footer large."""
    return bank_block_shown or len((terms or "").strip()) > threshold


def paginate(
    lines: Sequence[ComputedLine],
    capacity_per_page: int = DEFAULT_CAPACITY_PER_PAGE,
    has_large_footer: bool = False,
    overflow_item_cutoff: int = DEFAULT_FOOTER_OVERFLOW_ITEM_CUTOFF,
) -> list[Page]:
    if capacity_per_page < 1:
        raise ValidationError(
            f"capacity_per_page must be at least 1, got {capacity_per_page}",
            field="capacity_per_page",
        )
    if overflow_item_cutoff < 0:
        raise ValidationError(
            f"overflow_item_cutoff cannot be negative, got {overflow_item_cutoff}",
            field="overflow_item_cutoff",
        )

    chunks = [
        (start, tuple(lines[start:start + capacity_per_page]))
        for start in range(0, len(lines), capacity_per_page)
    ]
    if not chunks:
        # Totals must always render somewhere
        chunks = [(0, ())]

    needs_footer_page = has_large_footer and len(chunks[-1][1]) > overflow_item_cutoff
    if needs_footer_page:
        chunks.append((len(lines), ()))

    total = len(chunks)
    return [
        Page(
            items=items,
            index=number,
            total_pages=total,
            is_final_page=number == total,
            start_index=start,
        )
        for number, (start, items) in enumerate(chunks, start=1)
    ]


def paginate_with_config(
    lines: Sequence[ComputedLine],
    config: PaginationConfig,
    large_footer: bool,
) -> list[Page]:
    return paginate(
        lines,
        capacity_per_page=config.capacity_per_page,
        has_large_footer=large_footer,
        overflow_item_cutoff=config.footer_overflow_item_cutoff,
    )

# app/domain/services/amount_in_words.py
"""
Rupee amounts in words, Indian numbering.

Groups are thousand (10^3), lakh (10^5) and crore (10^7). Paise are
dropped: the words line states whole rupees of the floored grand total,
as printed on statutory invoices.

    >>> to_words(123456)
    'One Lakh Twenty Three Thousand Four Hundred Fifty Six Rupees Only'
"""

from __future__ import annotations

import math
from decimal import Decimal

from app.domain.errors import ValidationError

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _below_hundred(n: int) -> str:
    if n < 20:
        return ONES[n]
    unit = n % 10
    return TENS[n // 10] + (f" {ONES[unit]}" if unit else "")


def _below_thousand(n: int) -> str:
    parts = []
    if n >= 100:
        parts.append(f"{ONES[n // 100]} Hundred")
        n %= 100
    if n:
        parts.append(_below_hundred(n))
    return " ".join(parts)


def _convert(n: int) -> str:
    parts = []
    if n >= CRORE:
        # Beyond 99 crore the crore count itself is spelled in Indian groups
        parts.append(f"{_convert(n // CRORE)} Crore")
        n %= CRORE
    if n >= LAKH:
        parts.append(f"{_below_hundred(n // LAKH)} Lakh")
        n %= LAKH
    if n >= THOUSAND:
        parts.append(f"{_below_hundred(n // THOUSAND)} Thousand")
        n %= THOUSAND
    if n:
        parts.append(_below_thousand(n))
    return " ".join(parts)


def to_words(amount: int) -> str:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"Amount in words needs a whole number, got {amount!r}", field="amount")
    if amount < 0:
        raise ValidationError(f"Amount in words cannot be negative: {amount}", field="amount")
    if amount == 0:
        return "Zero Rupees Only"
    return f"{_convert(amount)} Rupees Only"


def total_in_words(amount: Decimal) -> str:
    """Words for a grand total with paise dropped.

    A net-negative total (credit lines only) is spelled from its absolute
    value and prefixed with "Minus".
    """
    if amount < 0:
        return f"Minus {to_words(int(math.floor(-amount)))}"
    return to_words(int(math.floor(amount)))

# app/domain/services/address_resolver.py
"""
Address, state and contact resolution for invoice documents.

Each fallback chain is an explicit, ordered function so its precedence
can be tested on its own. Nothing here raises: missing data resolves to
the ``"-"`` placeholder.
"""

from __future__ import annotations

import re

from app.domain.models.invoice import Company, Party, ShippingAddress
from app.domain.services.gstin_pan_validation import STATE_CODES, state_from_gstin

PLACEHOLDER = "-"

_PARENTHETICAL_SUFFIX = re.compile(r"\s*\([^)]*\)\s*$")
_NON_DIGITS = re.compile(r"\D")
_WHITESPACE = re.compile(r"\s+")

# Old or informal spellings -> canonical key
_STATE_ALIASES = {
    "orissa": "odisha",
    "pondicherry": "puducherry",
    "uttaranchal": "uttarakhand",
    "nct of delhi": "delhi",
    "andaman and nicobar": "andaman and nicobar islands",
    "dadra and nagar haveli and daman and diu": "dadra and nagar haveli",
}


def _state_key(name: str) -> str:
    key = _PARENTHETICAL_SUFFIX.sub("", name).lower().replace("&", " and ")
    key = _WHITESPACE.sub(" ", key).strip()
    return _STATE_ALIASES.get(key, key)


# Later codes win: Andhra Pradesh maps to "37", "28" stays an input alias
_STATE_NAME_TO_CODE = {_state_key(_name): _code for _code, _name in STATE_CODES.items()}


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


def _join_lines(*parts: str | None) -> str:
    return ", ".join(p for p in (_clean(x) for x in parts) if p)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------

def resolve_billing_address(party: Party | None) -> str:
    if party is None:
        return PLACEHOLDER
    joined = _join_lines(party.address, party.city, party.state, party.pincode)
    return joined or PLACEHOLDER


def resolve_shipping_address(
    shipping_address: ShippingAddress | None,
    fallback_billing_address: str,
) -> str:
    """Shipping address lines, else the already-resolved billing address."""
    if shipping_address is not None:
        joined = _join_lines(
            shipping_address.address,
            shipping_address.city,
            shipping_address.state,
            shipping_address.pincode,
        )
        if joined:
            return joined
    return fallback_billing_address or PLACEHOLDER


def resolve_company_address(company: Company) -> str:
    joined = _join_lines(company.address, company.city, company.state, company.pincode)
    return joined or PLACEHOLDER


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------

def resolve_place_of_supply_state(
    shipping_address: ShippingAddress | None,
    party: Party | None,
) -> str:
    """Shipping state wins, then the party's billing state, else unknown."""
    if shipping_address is not None and _clean(shipping_address.state):
        return _clean(shipping_address.state)
    if party is not None and _clean(party.state):
        return _clean(party.state)
    return PLACEHOLDER


def resolve_supplier_state(company: Company) -> str:
    """Company state, else the state encoded in its GSTIN, else unknown."""
    if _clean(company.state):
        return _clean(company.state)
    return state_from_gstin(company.gstin) or PLACEHOLDER


def normalize_state(state: str | None) -> str:
    """
    Canonical comparison key for a state.

    Case-insensitive and whitespace-collapsed, "&" read as "and", trailing
    "(...)" dropped, common aliases (Orissa, Pondicherry) folded in, and
    2-digit GST state codes mapped to their state name. Unknown states
    give "".
    """
    text = _clean(state)
    if not text or text == PLACEHOLDER:
        return ""
    if text.isdigit():
        name = STATE_CODES.get(text.zfill(2))
        if name:
            text = name
    return _state_key(text)


def state_code(state: str | None) -> str | None:
    key = normalize_state(state)
    return _STATE_NAME_TO_CODE.get(key) if key else None


def place_of_supply_display(state: str | None) -> str:
    """``"27-Maharashtra"`` when the code is known, else the state as given."""
    text = _clean(state)
    if not text or text == PLACEHOLDER:
        return PLACEHOLDER
    code = state_code(text)
    if text.isdigit():
        name = STATE_CODES.get(text.zfill(2))
        return f"{code}-{name}" if code and name else text
    name = _PARENTHETICAL_SUFFIX.sub("", text).strip()
    return f"{code}-{name}" if code else name


# ---------------------------------------------------------------------------
# Contact numbers
# ---------------------------------------------------------------------------

def format_phone_number(phone: str | None) -> str:
    """Format as ``XXXXX-XXXXX`` from the last 10 digits.

    Numbers that do not yield 10 digits are returned unchanged.
    """
    if not phone:
        return ""
    digits = _NON_DIGITS.sub("", str(phone))
    cleaned = digits[-10:]
    if len(cleaned) != 10:
        return str(phone)
    return f"{cleaned[:5]}-{cleaned[5:]}"


def _first_phone(*candidates: str | None) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return format_phone_number(candidate.strip())
    return ""


def resolve_buyer_phone(party: Party | None) -> str:
    """Party mobile, then phone, then contact number."""
    if party is None:
        return PLACEHOLDER
    return _first_phone(party.mobile_number, party.phone, party.contact_number) or PLACEHOLDER


def resolve_consignee_phone(shipping_address: ShippingAddress | None, buyer_phone: str) -> str:
    """Shipping phone, then mobile, then contact number, else the buyer's phone."""
    if shipping_address is not None:
        phone = _first_phone(
            shipping_address.phone,
            shipping_address.mobile_number,
            shipping_address.contact_number,
        )
        if phone:
            return phone
    return buyer_phone or PLACEHOLDER


def or_placeholder(value: str | None) -> str:
    return _clean(value) or PLACEHOLDER

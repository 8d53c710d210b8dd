# app/domain/services/tax_classifier.py
"""
Decide the GST split for a document.

IGST for inter-state supplies, CGST + SGST for intra-state supplies,
no tax when GST does not apply. The decision is made once per document
and every line, summary and template uses the same result.

Unknown place of supply
-----------------------
When either the supplier state or the place-of-supply state is unknown
the supply is treated as intra-state (CGST + SGST). Charging IGST on a
guess is the worse error, so this conservative default is used and
flagged through ``Classification.place_of_supply_unknown``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from app.domain.services.address_resolver import normalize_state
from app.domain.services.gstin_pan_validation import has_gstin

logger = logging.getLogger("tax_classifier")


class TaxSplit(str, Enum):
    IGST = "IGST"
    CGST_SGST = "CGST_SGST"
    NONE = "NONE"


@dataclass(frozen=True)
class Classification:
    gst_applicable: bool
    interstate: bool
    split: TaxSplit
    place_of_supply_unknown: bool = False
    document_type: str = "sale"


def is_interstate(company_state: str | None, place_of_supply_state: str | None) -> tuple[bool, bool]:
    """Return ``(interstate, state_unknown)``."""
    supplier = normalize_state(company_state)
    recipient = normalize_state(place_of_supply_state)
    if not supplier or not recipient:
        return False, True
    return supplier != recipient, False


def classify(
    company_state: str | None,
    place_of_supply_state: str | None,
    party_gstin: str | None,
    document_type: str = "sale",
    charges_tax: bool = True,
) -> Classification:
    """
    Classify a transaction.

    Args:
        company_state: Supplier's state (name or 2-digit code).
        place_of_supply_state: Shipping state, else party state.
        party_gstin: Counter-party GSTIN; blank means no GST eligibility.
        document_type: ``sale`` / ``purchase`` / ``proforma``. Proforma does
            not change applicability, only presentation downstream.
        charges_tax: Caller's policy flag, whether the company charges tax
            on this transaction type.

    Returns:
        Classification with exactly one split selected.
    """
    interstate, unknown = is_interstate(company_state, place_of_supply_state)
    gst_applicable = bool(charges_tax) and has_gstin(party_gstin)

    if not gst_applicable:
        split = TaxSplit.NONE
    elif interstate:
        split = TaxSplit.IGST
    else:
        split = TaxSplit.CGST_SGST

    if unknown and gst_applicable:
        logger.warning(
            "Place of supply unknown (supplier=%r, recipient=%r); defaulting to intra-state",
            company_state,
            place_of_supply_state,
        )

    return Classification(
        gst_applicable=gst_applicable,
        interstate=interstate,
        split=split,
        place_of_supply_unknown=unknown,
        document_type=document_type,
    )

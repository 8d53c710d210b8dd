# app/domain/services/invoice_document.py
"""
Invoice document generation.

compute_invoice() runs the shared tax pipeline once:

    resolve states -> classify -> compute lines -> HSN summary -> totals -> words

generate_document() paginates the computed lines and assembles the
renderer-neutral Document. Every renderer consumes that Document, so the
split, rounding and words can never disagree between outputs.
"""

from __future__ import annotations

import logging

from app.domain.models.computation import (
    WARNING_PARTY_GSTIN_INVALID,
    WARNING_PLACE_OF_SUPPLY_UNKNOWN,
    InvoiceComputation,
)
from app.domain.models.document import Document
from app.domain.models.invoice import BankDetails, Company, Party, ShippingAddress, Transaction
from app.domain.services.address_resolver import (
    resolve_place_of_supply_state,
    resolve_supplier_state,
)
from app.domain.services.amount_in_words import total_in_words
from app.domain.services.document_assembler import assemble, bank_block
from app.domain.services.document_totals import totalize
from app.domain.services.gstin_pan_validation import has_gstin, is_valid_gstin
from app.domain.services.hsn_summary import aggregate_hsn
from app.domain.services.line_items import compute_lines
from app.domain.services.paginator import PaginationConfig, has_large_footer, paginate_with_config
from app.domain.services.tax_classifier import classify

logger = logging.getLogger("invoice_document")


def compute_invoice(
    transaction: Transaction,
    company: Company,
    party: Party | None,
    shipping_address: ShippingAddress | None,
    *,
    charges_tax: bool | None = None,
) -> InvoiceComputation:
    """
    Compute every figure of an invoice.

    Args:
        charges_tax: Whether the company charges GST on this transaction.
            Defaults to "the company has a GSTIN": unregistered suppliers
            cannot charge GST.

    Raises:
        ValidationError: on the first malformed line.
    """
    if charges_tax is None:
        charges_tax = has_gstin(company.gstin)

    supplier_state = resolve_supplier_state(company)
    pos_state = resolve_place_of_supply_state(shipping_address, party)
    party_gstin = party.gstin if party else None

    classification = classify(
        supplier_state,
        pos_state,
        party_gstin,
        document_type=transaction.type,
        charges_tax=charges_tax,
    )

    lines = compute_lines(transaction.items, classification.split)
    totals = totalize(lines)

    warnings: list[str] = []
    if classification.place_of_supply_unknown and classification.gst_applicable:
        warnings.append(WARNING_PLACE_OF_SUPPLY_UNKNOWN)
    if has_gstin(party_gstin) and not is_valid_gstin(party_gstin):
        logger.warning("Party GSTIN %r does not match the GSTIN format; tax still applied", party_gstin)
        warnings.append(WARNING_PARTY_GSTIN_INVALID)

    logger.info(
        "Computed invoice %s: split=%s lines=%d grand_total=%s",
        transaction.id or "-",
        classification.split.value,
        len(lines),
        totals.grand_total,
    )

    return InvoiceComputation(
        classification=classification,
        lines=lines,
        tax_summary=aggregate_hsn(lines),
        totals=totals,
        amount_in_words=total_in_words(totals.grand_total),
        supplier_state=supplier_state,
        place_of_supply_state=pos_state,
        warnings=warnings,
    )


def generate_document(
    transaction: Transaction,
    company: Company,
    party: Party | None,
    shipping_address: ShippingAddress | None = None,
    bank: BankDetails | None = None,
    *,
    charges_tax: bool | None = None,
    pagination: PaginationConfig | None = None,
) -> Document:
    """Compute, paginate and assemble one invoice document."""
    shipping_address = shipping_address or transaction.shipping_address
    bank = bank or transaction.bank
    pagination = pagination or PaginationConfig()

    computation = compute_invoice(
        transaction, company, party, shipping_address, charges_tax=charges_tax
    )

    large_footer = has_large_footer(
        bank_block(transaction, bank) is not None,
        transaction.notes,
        pagination.footer_overflow_threshold,
    )
    pages = paginate_with_config(computation.lines, pagination, large_footer)
    logger.debug("Paginated %d lines into %d pages", len(computation.lines), len(pages))

    return assemble(
        transaction,
        company,
        party,
        shipping_address,
        bank,
        pages,
        computation=computation,
    )

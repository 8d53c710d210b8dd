# app/api/v1/routes/documents.py
"""
Invoice document endpoints: JSON preview and PDF download.
"""

from __future__ import annotations

import io
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from app.api.v1.envelope import ok
from app.api.v1.schemas.documents import GenerateDocumentRequest
from app.config.settings import settings
from app.domain.errors import ValidationError
from app.domain.models.document import Document
from app.domain.services.invoice_document import generate_document
from app.domain.services.invoice_pdf import LOGO, QR_CODE, render_document_pdf
from app.infrastructure.external.asset_fetcher import fetch_assets

logger = logging.getLogger("api.v1.documents")

router = APIRouter(prefix="/documents", tags=["Documents"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate(body: GenerateDocumentRequest) -> Document:
    try:
        return generate_document(
            body.transaction,
            body.company,
            body.party,
            body.shipping_address,
            body.bank,
            charges_tax=body.charges_tax,
            pagination=settings.pagination_config(body.capacity_per_page),
        )
    except ValidationError as exc:
        logger.info("Rejected document for %s: %s", body.transaction.id or "-", exc)
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "field": exc.field},
        )


def _pdf_filename(document: Document) -> str:
    number = document.final_page.header.invoice_number
    safe = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in number)
    return f"invoice_{safe}.pdf"


# ---------------------------------------------------------------------------
# POST /documents/preview
# ---------------------------------------------------------------------------

@router.post("/preview")
async def preview_document(body: GenerateDocumentRequest):
    """Generate the structured document without rendering it."""
    document = _generate(body)
    return ok(data=document.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# POST /documents/pdf
# ---------------------------------------------------------------------------

@router.post("/pdf")
async def download_document_pdf(body: GenerateDocumentRequest):
    """Generate the document and stream it as a PDF."""
    document = _generate(body)

    final = document.final_page.final
    images = await fetch_assets(
        {
            LOGO: document.final_page.header.logo_url,
            QR_CODE: final.bank.qr_code_url if final and final.bank else None,
        },
        timeout=settings.ASSET_FETCH_TIMEOUT,
    )

    pdf_bytes = render_document_pdf(document, images)

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{_pdf_filename(document)}"'
        },
    )

# tests/test_api_documents.py
"""Tests for the document preview and PDF endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app

_FETCH_ASSETS_PATH = "app.api.v1.routes.documents.fetch_assets"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload() -> dict:
    return {
        "transaction": {
            "id": "abc123def456",
            "type": "sale",
            "date": "2025-01-15",
            "invoice_number": "INV/2025/001",
            "items": [
                {"name": "Laptop Bag", "quantity": 2, "unit": "piece", "unit_price": "500", "tax_rate": 18, "hsn_code": "4202"},
            ],
        },
        "company": {
            "business_name": "ABC Traders",
            "gstin": "27AAPFU0939F1ZV",
            "state": "Maharashtra",
            "logo_url": "https://cdn.example.com/logo.png",
        },
        "party": {"name": "Tech Solutions", "gstin": "29AABCT1332L1ZZ", "state": "Karnataka"},
        "bank": {"bank_name": "HDFC Bank", "ifsc_code": "HDFC0000123", "qr_code_url": "https://cdn.example.com/qr.png"},
    }


def test_health(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_preview_document(client, payload):
    resp = client.post("/api/v1/documents/preview", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    document = body["data"]
    assert document["tax_split"] == "IGST"
    assert document["title"] == "TAX INVOICE"
    totals = document["pages"][-1]["final"]["totals"]
    assert totals["grand_total"] == "1180.00"
    assert totals["igst_total"] == "180.00"


def test_preview_capacity_override(client, payload):
    payload["transaction"]["items"] = [
        {"name": f"Item {n}", "quantity": 1, "unit_price": "10", "tax_rate": 5} for n in range(5)
    ]
    payload["bank"] = None
    payload["capacity_per_page"] = 2
    resp = client.post("/api/v1/documents/preview", json=payload)
    assert resp.status_code == 200
    assert len(resp.json()["data"]["pages"]) == 3


def test_invalid_line_is_422(client, payload):
    payload["transaction"]["items"][0]["tax_rate"] = "-18"
    resp = client.post("/api/v1/documents/preview", json=payload)
    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "items[0].tax_rate"


def test_invalid_capacity_is_422(client, payload):
    payload["capacity_per_page"] = 0
    resp = client.post("/api/v1/documents/preview", json=payload)
    assert resp.status_code == 422


def test_download_pdf(client, payload):
    with patch(_FETCH_ASSETS_PATH, new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = {"logo": None, "qr_code": None}
        resp = client.post("/api/v1/documents/pdf", json=payload)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="invoice_INV_2025_001.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")

    urls = mock_fetch.call_args.args[0]
    assert urls == {
        "logo": "https://cdn.example.com/logo.png",
        "qr_code": "https://cdn.example.com/qr.png",
    }

"""Shared test fixtures for the invoice engine test suite."""

import asyncio
import datetime as dt

import pytest

from app.domain.models.invoice import (
    BankDetails,
    Company,
    LineInput,
    Party,
    ShippingAddress,
    Transaction,
)

MAHARASHTRA_GSTIN = "27AAPFU0939F1ZV"
KARNATAKA_GSTIN = "29AABCT1332L1ZZ"
MAHARASHTRA_BUYER_GSTIN = "27AADCB2230M1ZP"


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def company() -> Company:
    return Company(
        business_name="ABC Traders Pvt Ltd",
        gstin=MAHARASHTRA_GSTIN,
        pan="AAPFU0939F",
        state="Maharashtra",
        address="12 MG Road",
        city="Pune",
        pincode="411001",
        email="billing@abctraders.in",
        mobile_number="+91 98765 43210",
    )


@pytest.fixture
def local_party() -> Party:
    """Registered buyer in the supplier's own state."""
    return Party(
        name="XYZ Enterprises",
        gstin=MAHARASHTRA_BUYER_GSTIN,
        state="Maharashtra",
        address="5 Link Road",
        city="Mumbai",
        pincode="400050",
        mobile_number="9123456780",
    )


@pytest.fixture
def interstate_party() -> Party:
    """Registered buyer in another state."""
    return Party(
        name="Tech Solutions",
        gstin=KARNATAKA_GSTIN,
        state="Karnataka",
        address="80 Residency Road",
        city="Bengaluru",
        pincode="560025",
        phone="080-41234567",
    )


@pytest.fixture
def unregistered_party() -> Party:
    return Party(name="Walk-in Customer", state="Maharashtra")


@pytest.fixture
def bank() -> BankDetails:
    return BankDetails(
        bank_name="HDFC Bank",
        account_holder="ABC Traders Pvt Ltd",
        account_no="50100012345678",
        ifsc_code="HDFC0000123",
        branch_address="FC Road",
        city="Pune",
        upi_id="abctraders@hdfcbank",
        qr_code_url="https://cdn.example.com/qr.png",
    )


@pytest.fixture
def laptop_line() -> LineInput:
    return LineInput(
        kind="product",
        name="Laptop Bag",
        quantity=2,
        unit="piece",
        unit_price="500.00",
        tax_rate=18,
        hsn_code="4202",
    )


@pytest.fixture
def consulting_line() -> LineInput:
    return LineInput(
        kind="service",
        name="Consulting",
        amount="1500",
        tax_rate=18,
        hsn_code="998311",
    )


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""

    def _make(items=(), **overrides) -> Transaction:
        fields = {
            "id": "64f1c0ffee0042ab12",
            "type": "sale",
            "date": dt.date(2025, 1, 15),
            "invoice_number": "INV-2025-001",
            "items": tuple(items),
        }
        fields.update(overrides)
        return Transaction(**fields)

    return _make


@pytest.fixture
def make_lines():
    """Factory for ``count`` identical product lines."""

    def _make(count: int, price: str = "100", rate: int = 18) -> list[LineInput]:
        return [
            LineInput(name=f"Item {n}", quantity=1, unit_price=price, tax_rate=rate, hsn_code="8471")
            for n in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def shipping_to_karnataka() -> ShippingAddress:
    return ShippingAddress(
        name="XYZ Warehouse",
        address="Plot 9, KIADB",
        city="Hosur Road",
        state="Karnataka",
        pincode="560100",
        contact_number="9988776655",
    )

import asyncio
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from httpx import ASGITransport, AsyncClient

from booking.main import app
from booking.api import payments
from booking.core.enums import BookingStatus, Priority
from booking.core.security import create_access_token
from booking.models.booking import Booking
from booking.schemas.booking import BookingRecord, InsertResult
from booking.schemas.card import CardDetails
from booking.schemas.checklist import ChecklistItem
from booking.schemas.trip import TripContext, Vehicle
from booking.services.booking_store import get_booking_store
from booking.services.settlement import SettlementRegistry


class FakeBookingStore:
    """In-memory stand-in for the booking store.

    ``gate`` holds every insert until it is set; ``result`` and ``error``
    script the store's answer.
    """

    def __init__(self, result: InsertResult | None = None, error: Exception | None = None,
                 gate: asyncio.Event | None = None):
        self.result = result
        self.error = error
        self.gate = gate
        self.records: list[BookingRecord] = []
        self.rows: list[Booking] = []

    @property
    def calls(self) -> int:
        return len(self.records)

    async def insert_booking(self, record: BookingRecord) -> InsertResult:
        self.records.append(record)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.result is not None:
            return self.result
        return InsertResult(success=True, data={"payment_id": len(self.records)})

    async def list_for_user(self, user_id: str, limit: int = 20, offset: int = 0):
        rows = [row for row in self.rows if row.user_id == user_id]
        return rows[offset:offset + limit]


@pytest.fixture
def booking_store():
    return FakeBookingStore()


@pytest.fixture
def make_store():
    return FakeBookingStore


@pytest.fixture
def trip_context():
    return TripContext(
        origin="Kenyatta Avenue, Nairobi",
        destination="Ngong Road, Nairobi",
        distance_km=10,
        duration=25,
        date="2026-11-10",
        time="10:00 AM",
    )


@pytest.fixture
def vehicle():
    return Vehicle(id="truck-1", name="Isuzu Canter", rate=Decimal("14240"))


@pytest.fixture
def valid_card():
    return CardDetails(
        number="4111 1111 1111 1111",
        holder_name="Jane Wanjiru",
        expiry="12/99",
        cvv="123",
    )


@pytest.fixture
def checklist_items():
    return [
        ChecklistItem(id="1", name="Packing Boxes", checked=True, priority=Priority.HIGH),
        ChecklistItem(id="2", name="Bubble Wrap", checked=False, priority=Priority.MEDIUM),
    ]


@pytest.fixture
def stored_booking():
    return Booking(
        id=7,
        user_id="user_1",
        user_name="Jane Wanjiru",
        origin="Kenyatta Avenue, Nairobi",
        destination="Ngong Road, Nairobi",
        distance=Decimal("10"),
        duration=25.0,
        vehicle="Isuzu Canter",
        date_time="2026-11-10 10:00 AM",
        distance_price=Decimal("1000"),
        subtotal=Decimal("15240"),
        shipping=Decimal("5000"),
        tax=Decimal("2438.40"),
        total_price=Decimal("22678.40"),
        status=BookingStatus.COMPLETED,
        created_at=datetime(2026, 10, 1, 9, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def user_token():
    return create_access_token("user_1", name="Jane Wanjiru")


@pytest.fixture
def other_user_token():
    return create_access_token("user_2", name="Otieno")


@pytest.fixture
def auth_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def settlement_registry(monkeypatch):
    fresh = SettlementRegistry()
    monkeypatch.setattr(payments, "registry", fresh)
    return fresh


@pytest.fixture
async def test_client(booking_store, settlement_registry):
    app.dependency_overrides[get_booking_store] = lambda: booking_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def settle_payload():
    return {
        "trip": {
            "origin": "Kenyatta Avenue, Nairobi",
            "destination": "Ngong Road, Nairobi",
            "distance_km": 10,
            "duration": 25,
            "date": "2026-11-10",
            "time": "10:00 AM",
        },
        "vehicle": {"id": "truck-1", "name": "Isuzu Canter", "rate": "Kshs 14,240"},
        "method": "card",
        "card": {
            "number": "4111 1111 1111 1111",
            "holder_name": "Jane Wanjiru",
            "expiry": "12/99",
            "cvv": "123",
        },
        "checklist": [
            {"id": "1", "name": "Packing Boxes", "checked": True, "priority": "high"},
            {"id": "2", "name": "Bubble Wrap", "checked": False, "priority": "medium"},
        ],
    }


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "cards: marks tests related to card formatting and validation"
    )
    config.addinivalue_line(
        "markers", "settlement: marks tests related to payment settlement"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )

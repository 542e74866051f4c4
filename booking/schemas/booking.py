from datetime import datetime, timezone
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional

from booking.core.enums import BookingStatus
from booking.schemas.checklist import ChecklistSummary
from booking.schemas.trip import NOT_AVAILABLE
from booking.utils.money import ZERO


class BookingRecord(BaseModel):
    """A completed checkout as handed to the booking store.

    Every field carries a sentinel default so a record built from a partial
    trip context is still structurally complete.
    """

    model_config = ConfigDict(from_attributes=True)

    payment_id: Optional[int] = None
    user_id: str = NOT_AVAILABLE
    user_name: str = NOT_AVAILABLE
    origin: str = NOT_AVAILABLE
    destination: str = NOT_AVAILABLE
    distance: Decimal = ZERO
    distance_price: Decimal = ZERO
    duration: float = 0
    vehicle: str = NOT_AVAILABLE
    date_time: str = NOT_AVAILABLE
    subtotal: Decimal = ZERO
    shipping: Decimal = ZERO
    tax: Decimal = ZERO
    total_price: Decimal = ZERO
    status: BookingStatus = BookingStatus.COMPLETED
    checklist: Optional[ChecklistSummary] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_row(self) -> dict[str, Any]:
        # The checklist summary is informational and is not stored.
        return self.model_dump(exclude={"payment_id", "checklist"})


class InsertResult(BaseModel):
    success: bool
    data: Optional[dict[str, Any]] = None
    message: Optional[str] = None

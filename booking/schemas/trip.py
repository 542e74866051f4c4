from decimal import Decimal
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional

from booking.utils.money import ZERO, parse_amount

NOT_AVAILABLE = "N/A"


class TripContext(BaseModel):
    """Snapshot of the trip the user planned on the map screens."""

    model_config = ConfigDict(frozen=True)

    origin: Optional[str] = None
    destination: Optional[str] = None
    distance_km: Decimal = ZERO
    duration: Optional[float] = None
    date: Optional[str] = None
    time: Optional[str] = None

    @field_validator("distance_km", mode="before")
    @classmethod
    def _coerce_distance(cls, value):
        return parse_amount(value)

    def date_time(self) -> str:
        parts = [p.strip() for p in (self.date, self.time) if p and p.strip()]
        return " ".join(parts) if parts else NOT_AVAILABLE


class Vehicle(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None
    rate: Decimal = ZERO

    @field_validator("rate", mode="before")
    @classmethod
    def _parse_rate(cls, value):
        return parse_amount(value)

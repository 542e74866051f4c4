from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional

from booking.core.enums import FailureReason, PaymentMethod
from booking.schemas.booking import BookingRecord
from booking.schemas.card import CardDetails
from booking.schemas.checklist import ChecklistItem, check_unique_ids
from booking.schemas.trip import TripContext, Vehicle


class SettleRequest(BaseModel):
    trip: TripContext = Field(default_factory=TripContext)
    vehicle: Optional[Vehicle] = None
    method: PaymentMethod
    card: Optional[CardDetails] = None
    checklist: list[ChecklistItem] = Field(default_factory=list)

    @field_validator("checklist")
    @classmethod
    def _unique_ids(cls, items):
        return check_unique_ids(items)


class SettlementOutcome(BaseModel):
    outcome: Literal["succeeded", "failed"]
    record: Optional[BookingRecord] = None
    reason: Optional[FailureReason] = None
    message: Optional[str] = None
    violations: list[str] = Field(default_factory=list)

    @classmethod
    def succeeded(cls, record: BookingRecord) -> "SettlementOutcome":
        return cls(outcome="succeeded", record=record)

    @classmethod
    def failed(cls, reason: FailureReason, message: str, violations: Optional[list[str]] = None) -> "SettlementOutcome":
        return cls(outcome="failed", reason=reason, message=message, violations=violations or [])

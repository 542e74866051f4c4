"""Payment settlement: validate, build the booking record, persist it.

A ``PaymentSettlement`` drives one user's checkout through

    idle -> validating -> submitting -> succeeded
    idle -> validating -> failed -> idle

Only one submission may be in flight per machine. Outcomes are returned as
values; nothing raised by the booking store escapes ``settle``.
"""
import logging
import time
from typing import Callable, Optional, Sequence

from booking.core.enums import BookingStatus, FailureReason, PaymentMethod, SettlementState
from booking.core.metrics import settlement_duration, settlements_ignored, settlements_total
from booking.schemas.booking import BookingRecord, InsertResult
from booking.schemas.card import CardDetails
from booking.schemas.checklist import ChecklistItem
from booking.schemas.cost import CostBreakdown
from booking.schemas.settlement import SettlementOutcome
from booking.schemas.trip import NOT_AVAILABLE, TripContext, Vehicle
from booking.services.booking_store import BookingStore
from booking.services.cards import validate_card_details
from booking.services.checklist import summarize_checklist

logger = logging.getLogger(__name__)

TransitionListener = Callable[[SettlementState, SettlementState], None]

VALIDATION_MESSAGE = "Please correct the card details and try again"
PERSISTENCE_MESSAGE = "Your booking could not be saved. Please try again."


def _or_sentinel(value: Optional[str]) -> str:
    if value is None:
        return NOT_AVAILABLE
    value = str(value).strip()
    return value or NOT_AVAILABLE


def build_booking_record(
    trip: Optional[TripContext],
    vehicle: Optional[Vehicle],
    cost: CostBreakdown,
    user_id: Optional[str] = None,
    user_name: Optional[str] = None,
    checklist: Optional[Sequence[ChecklistItem]] = None,
) -> BookingRecord:
    trip = trip or TripContext()
    return BookingRecord(
        user_id=_or_sentinel(user_id),
        user_name=_or_sentinel(user_name),
        origin=_or_sentinel(trip.origin),
        destination=_or_sentinel(trip.destination),
        distance=trip.distance_km,
        distance_price=cost.distance_price,
        duration=trip.duration or 0,
        vehicle=_or_sentinel(vehicle.name if vehicle else None),
        date_time=trip.date_time(),
        subtotal=cost.subtotal,
        shipping=cost.shipping_cost,
        tax=cost.tax,
        total_price=cost.total_cost,
        status=BookingStatus.COMPLETED,
        checklist=summarize_checklist(checklist) if checklist is not None else None,
    )


class PaymentSettlement:
    def __init__(
        self,
        store: BookingStore,
        user_id: Optional[str] = None,
        user_name: Optional[str] = None,
        on_transition: Optional[TransitionListener] = None,
    ):
        self.store = store
        self.user_id = user_id
        self.user_name = user_name
        self.on_transition = on_transition
        self._state = SettlementState.IDLE

    @property
    def state(self) -> SettlementState:
        return self._state

    @property
    def in_flight(self) -> bool:
        return self._state is SettlementState.SUBMITTING

    def _move(self, new_state: SettlementState) -> None:
        old_state, self._state = self._state, new_state
        logger.info(f"Settlement for user {self.user_id}: {old_state} -> {new_state}")
        if self.on_transition is not None:
            try:
                self.on_transition(old_state, new_state)
            except Exception as e:
                logger.error(f"Transition listener failed on {old_state} -> {new_state}: {e}", exc_info=True)

    def acknowledge(self) -> None:
        """Clear a failure notice so the next pay action starts from idle."""
        if self._state is SettlementState.FAILED:
            self._move(SettlementState.IDLE)

    def reset(self) -> None:
        if self.in_flight:
            raise RuntimeError("Cannot reset a settlement while a submission is in flight")
        if self._state is not SettlementState.IDLE:
            self._move(SettlementState.IDLE)

    def _fail(self, reason: FailureReason, message: str, violations: Optional[list[str]] = None) -> SettlementOutcome:
        self._move(SettlementState.FAILED)
        settlements_total.labels(outcome="failed", reason=str(reason)).inc()
        return SettlementOutcome.failed(reason, message, violations)

    async def settle(
        self,
        trip: Optional[TripContext],
        vehicle: Optional[Vehicle],
        cost: CostBreakdown,
        method: PaymentMethod,
        card: Optional[CardDetails] = None,
        checklist: Optional[Sequence[ChecklistItem]] = None,
    ) -> Optional[SettlementOutcome]:
        """Run one pay action.

        Returns None when the action is ignored: a submission is already in
        flight, or this machine already produced a booking. If the task is
        cancelled mid-submission the machine goes back to idle before the
        cancellation propagates.
        """
        if self.in_flight:
            logger.info(f"Pay action ignored for user {self.user_id}: submission in flight")
            settlements_ignored.inc()
            return None
        if self._state is SettlementState.SUCCEEDED:
            logger.info(f"Pay action ignored for user {self.user_id}: booking already settled")
            settlements_ignored.inc()
            return None

        self.acknowledge()
        self._move(SettlementState.VALIDATING)

        if method.requires_card_details:
            violations = validate_card_details(card or CardDetails())
            if violations:
                logger.info(f"Card validation failed for user {self.user_id}: {len(violations)} violation(s)")
                return self._fail(FailureReason.VALIDATION, VALIDATION_MESSAGE, violations)

        self._move(SettlementState.SUBMITTING)
        started = time.perf_counter()
        try:
            return await self._submit(trip, vehicle, cost, checklist, started)
        finally:
            if self.in_flight:
                logger.warning(f"Submission for user {self.user_id} was interrupted, returning to idle")
                settlement_duration.labels(outcome="interrupted").observe(time.perf_counter() - started)
                self._move(SettlementState.IDLE)

    async def _submit(
        self,
        trip: Optional[TripContext],
        vehicle: Optional[Vehicle],
        cost: CostBreakdown,
        checklist: Optional[Sequence[ChecklistItem]],
        started: float,
    ) -> SettlementOutcome:
        try:
            record = build_booking_record(trip, vehicle, cost, self.user_id, self.user_name, checklist)
            result = InsertResult.model_validate(await self.store.insert_booking(record))
        except Exception as e:
            logger.error(f"Booking submission raised for user {self.user_id}: {e}", exc_info=True)
            settlement_duration.labels(outcome="failed").observe(time.perf_counter() - started)
            return self._fail(FailureReason.PERSISTENCE, PERSISTENCE_MESSAGE)

        if not result.success:
            logger.warning(f"Booking store rejected record for user {self.user_id}: {result.message}")
            settlement_duration.labels(outcome="failed").observe(time.perf_counter() - started)
            return self._fail(FailureReason.PERSISTENCE, result.message or PERSISTENCE_MESSAGE)

        payment_id = (result.data or {}).get("payment_id")
        if payment_id is not None:
            record = record.model_copy(update={"payment_id": payment_id})

        settlement_duration.labels(outcome="succeeded").observe(time.perf_counter() - started)
        self._move(SettlementState.SUCCEEDED)
        settlements_total.labels(outcome="succeeded", reason="none").inc()
        return SettlementOutcome.succeeded(record)


class SettlementRegistry:
    """Tracks the machine handling each user's current checkout.

    Double taps share the in-flight machine. Settled or failed machines are
    dropped by ``release`` so nothing outlives its request.
    """

    def __init__(self):
        self._machines: dict[str, PaymentSettlement] = {}

    def __len__(self) -> int:
        return len(self._machines)

    def for_user(self, user_id: str, user_name: Optional[str], store: BookingStore) -> PaymentSettlement:
        machine = self._machines.get(user_id)
        if machine is not None and machine.in_flight:
            return machine
        machine = PaymentSettlement(store, user_id=user_id, user_name=user_name)
        self._machines[user_id] = machine
        return machine

    def release(self, user_id: str, machine: PaymentSettlement) -> None:
        if self._machines.get(user_id) is machine and not machine.in_flight:
            del self._machines[user_id]


registry = SettlementRegistry()

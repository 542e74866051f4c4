import logging
from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import JSONResponse
from typing import Optional

from booking.core.security import CurrentUser, get_current_user
from booking.schemas.card import CardDetails, CardValidationOut
from booking.schemas.settlement import SettleRequest, SettlementOutcome
from booking.core.enums import FailureReason
from booking.services.booking_store import BookingStore, get_booking_store
from booking.services.cards import format_card_details, validate_card_details
from booking.services.pricing import compute_cost
from booking.services.settlement import registry
from booking.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payments", tags=["payments"])

STATUS_FOR_FAILURE = {
    FailureReason.VALIDATION: 422,
    FailureReason.PERSISTENCE: 502,
}


def _outcome_response(outcome: SettlementOutcome) -> JSONResponse:
    status_code = 201 if outcome.outcome == "succeeded" else STATUS_FOR_FAILURE[outcome.reason]
    return JSONResponse(status_code=status_code, content=outcome.model_dump(mode="json"))


@router.post("/card/format", response_model=CardDetails)
async def format_card(payload: CardDetails):
    return format_card_details(payload)


@router.post("/card/validate", response_model=CardValidationOut)
async def validate_card(payload: CardDetails):
    violations = validate_card_details(payload)
    return CardValidationOut(valid=not violations, violations=violations)


@router.post("/settle", response_model=SettlementOutcome, status_code=201)
async def settle(
    payload: SettleRequest,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    store: BookingStore = Depends(get_booking_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    scoped_key = f"{current_user.user_id}:{idempotency_key}" if idempotency_key else None
    if scoped_key:
        cached = await get_idempotent(scoped_key)
        if cached:
            logger.info(f"Replaying settlement outcome for idempotency key {idempotency_key}")
            return _outcome_response(SettlementOutcome.model_validate(cached))

    cost = compute_cost(
        payload.vehicle.rate if payload.vehicle else 0,
        payload.trip.distance_km,
    )
    machine = registry.for_user(current_user.user_id, current_user.name, store)
    try:
        outcome = await machine.settle(
            payload.trip,
            payload.vehicle,
            cost,
            payload.method,
            card=payload.card,
            checklist=payload.checklist,
        )
    finally:
        registry.release(current_user.user_id, machine)
    if outcome is None:
        raise HTTPException(status_code=409, detail="A payment is already being processed")

    if outcome.outcome == "succeeded" and scoped_key:
        await set_idempotent(scoped_key, outcome.model_dump(mode="json"))

    return _outcome_response(outcome)

from fastapi import APIRouter, Depends, Query
from typing import List

from booking.core.response_builders import build_booking_response_list
from booking.core.security import CurrentUser, get_current_user
from booking.schemas.booking import BookingRecord
from booking.services.booking_store import SqlBookingStore, get_booking_store

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("/", response_model=List[BookingRecord])
async def list_bookings(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    store: SqlBookingStore = Depends(get_booking_store),
    current_user: CurrentUser = Depends(get_current_user),
):
    bookings = await store.list_for_user(current_user.user_id, limit=limit, offset=offset)
    return build_booking_response_list(bookings)

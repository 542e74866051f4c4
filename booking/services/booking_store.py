"""Booking persistence boundary.

The settlement machine only depends on ``BookingStore.insert_booking``; the
SQLAlchemy store is the default implementation behind the API.
"""
import logging
from typing import Protocol, Sequence

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from booking.db.session import get_db
from booking.models.booking import Booking
from booking.schemas.booking import BookingRecord, InsertResult

logger = logging.getLogger(__name__)


class BookingStore(Protocol):
    async def insert_booking(self, record: BookingRecord) -> InsertResult:
        ...


class SqlBookingStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_booking(self, record: BookingRecord) -> InsertResult:
        row = Booking(**record.to_row())
        try:
            self.db.add(row)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Booking insert failed for user {record.user_id}: {e}")
            return InsertResult(success=False, message="The booking could not be saved")
        logger.info(f"Booking {row.id} stored for user {record.user_id}")
        return InsertResult(success=True, data={"payment_id": row.id})

    async def list_for_user(self, user_id: str, limit: int = 20, offset: int = 0) -> Sequence[Booking]:
        q = (
            select(Booking)
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        res = await self.db.execute(q)
        return res.scalars().all()


async def get_booking_store(db: AsyncSession = Depends(get_db)) -> SqlBookingStore:
    return SqlBookingStore(db)

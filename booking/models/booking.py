from sqlalchemy import Column, String, Float, Numeric, Enum
from booking.models.base import BaseModel
from booking.core.enums import BookingStatus

class Booking(BaseModel):
    __tablename__ = "payments"

    user_id = Column(String(64), nullable=False, index=True)
    user_name = Column(String(120), nullable=False)

    origin = Column(String, nullable=False)
    destination = Column(String, nullable=False)
    distance = Column(Numeric(12, 3), nullable=False)
    duration = Column(Float, nullable=False)
    vehicle = Column(String(120), nullable=False)
    date_time = Column(String(64), nullable=False)

    distance_price = Column(Numeric(14, 4), nullable=False)
    subtotal = Column(Numeric(14, 4), nullable=False)
    shipping = Column(Numeric(14, 4), nullable=False)
    tax = Column(Numeric(14, 4), nullable=False)
    total_price = Column(Numeric(14, 4), nullable=False)

    status = Column(Enum(BookingStatus), default=BookingStatus.COMPLETED, nullable=False)
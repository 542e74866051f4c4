from booking.models.booking import Booking
from booking.schemas.booking import BookingRecord


def build_booking_response(booking: Booking) -> BookingRecord:
    return BookingRecord(
        payment_id=booking.id,
        user_id=booking.user_id,
        user_name=booking.user_name,
        origin=booking.origin,
        destination=booking.destination,
        distance=booking.distance,
        distance_price=booking.distance_price,
        duration=booking.duration,
        vehicle=booking.vehicle,
        date_time=booking.date_time,
        subtotal=booking.subtotal,
        shipping=booking.shipping,
        tax=booking.tax,
        total_price=booking.total_price,
        status=booking.status,
        created_at=booking.created_at,
    )


def build_booking_response_list(bookings: list) -> list:
    return [build_booking_response(booking) for booking in bookings]

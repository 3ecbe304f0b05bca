from typing import List

from database import BookingStore
from errors import NotFoundError
from models import Booking, PaymentStatus, TripType
from schemas import BookingCreate, BookingUpdate, PaymentUpdate
from utils.log import get_logger

logger = get_logger(__name__)


class BookingService:
    """Booking lifecycle: create, read, patch, pay, delete."""

    def __init__(self, store: BookingStore):
        self.store = store

    def create_booking(self, request: BookingCreate) -> Booking:
        """
        Persist a new booking.

        Only the date fields matching the trip type are kept; the others are
        forced to None. Whether those dates were supplied is not checked.
        """
        oneway = request.trip_type == TripType.ONEWAY

        booking = Booking(
            email=request.email,
            contact=request.contact,
            from_location=request.from_location,
            to_location=request.to_location,
            trip_type=request.trip_type.value,
            date=request.date if oneway else None,
            start_date=None if oneway else request.start_date,
            end_date=None if oneway else request.end_date,
            passenger_count=request.passenger_count,
            payment_amount=0,
            payment_status=PaymentStatus.PENDING.value,
        )
        booking = self.store.insert(booking)

        logger.info(
            "booking_created",
            booking_id=booking.id,
            trip_type=booking.trip_type,
            passengers=booking.passenger_count,
        )
        return booking

    def list_bookings(self) -> List[Booking]:
        return self.store.all()

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.store.get(booking_id)
        if booking is None:
            raise NotFoundError(booking_id)
        return booking

    def update_booking(self, booking_id: str, patch: BookingUpdate) -> Booking:
        # applied as sent; trip type date rules only run on create
        fields = {
            name: value.value if isinstance(value, (TripType, PaymentStatus)) else value
            for name, value in patch.model_dump(exclude_unset=True).items()
        }
        booking = self.store.update(booking_id, fields)
        if booking is None:
            raise NotFoundError(booking_id)

        logger.info("booking_updated", booking_id=booking_id, fields=sorted(fields))
        return booking

    def update_payment(self, booking_id: str, payment: PaymentUpdate) -> Booking:
        booking = self.store.update(
            booking_id,
            {
                "payment_amount": payment.payment_amount,
                "payment_status": payment.payment_status.value,
            },
        )
        if booking is None:
            raise NotFoundError(booking_id)

        logger.info(
            "booking_payment_updated",
            booking_id=booking_id,
            payment_amount=booking.payment_amount,
            payment_status=booking.payment_status,
        )
        return booking

    def delete_booking(self, booking_id: str) -> Booking:
        booking = self.store.delete(booking_id)
        if booking is None:
            raise NotFoundError(booking_id)

        logger.info("booking_deleted", booking_id=booking_id)
        return booking

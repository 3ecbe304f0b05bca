import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Float, DateTime

from database import Base


class TripType(str, enum.Enum):
    ONEWAY = "oneway"
    ROUNDTRIP = "roundtrip"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


def generate_booking_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, index=True, default=generate_booking_id)

    email = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    from_location = Column("from", String, nullable=False)
    to_location = Column("to", String, nullable=False)
    trip_type = Column(String, nullable=False)

    # oneway uses date, roundtrip uses start_date/end_date
    date = Column(String, nullable=True)
    start_date = Column(String, nullable=True)
    end_date = Column(String, nullable=True)

    passenger_count = Column("passenger", Integer, nullable=False)

    payment_amount = Column(Float, nullable=False, default=0)
    payment_status = Column(String, nullable=False, default=PaymentStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, trip_type={self.trip_type}, payment_status={self.payment_status})>"

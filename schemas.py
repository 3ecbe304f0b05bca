from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from errors import ValidationError
from models import PaymentStatus, TripType


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# -------------------
# BOOKING REQUESTS
# -------------------
class BookingCreate(CamelModel):
    email: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    from_location: str = Field(..., alias="from", min_length=1)
    to_location: str = Field(..., alias="to", min_length=1)
    passenger_count: int = Field(..., alias="passenger", ge=1)
    trip_type: TripType

    # which of these survive depends on trip_type
    date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class BookingUpdate(CamelModel):
    email: Optional[str] = Field(None, min_length=1)
    contact: Optional[str] = Field(None, min_length=1)
    from_location: Optional[str] = Field(None, alias="from", min_length=1)
    to_location: Optional[str] = Field(None, alias="to", min_length=1)
    passenger_count: Optional[int] = Field(None, alias="passenger", ge=1)
    trip_type: Optional[TripType] = None
    date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    payment_amount: Optional[float] = Field(None, ge=0)
    payment_status: Optional[PaymentStatus] = None

    @field_validator(
        "email", "contact", "from_location", "to_location", "passenger_count",
        "trip_type", "payment_amount", "payment_status",
    )
    @classmethod
    def not_null(cls, value):
        # omitted is fine, an explicit null would blank a NOT NULL column
        if value is None:
            raise ValueError("may not be null")
        return value


class PaymentUpdate(CamelModel):
    payment_amount: float = Field(..., ge=0)
    payment_status: PaymentStatus


# -------------------
# INVOICE
# -------------------
class InvoiceRequest(CamelModel):
    contact_no: str = Field(..., min_length=1)
    customer_name: str
    from_location: str = Field(..., alias="from")
    to_location: str = Field(..., alias="to")
    date: str
    amount: float = Field(..., ge=0)


class InvoiceResponse(BaseModel):
    success: bool = True
    imageUrl: str
    whatsappURL: str


# -------------------
# BOOKING RESPONSES
# -------------------
class BookingOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    contact: str
    from_location: str = Field(..., alias="from")
    to_location: str = Field(..., alias="to")
    trip_type: TripType
    date: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    passenger_count: int = Field(..., alias="passenger")
    payment_amount: float
    payment_status: PaymentStatus
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        # SQLite hands back naive datetimes; they are stored as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class BookingCreated(BaseModel):
    message: str
    booking: BookingOut


class BookingUpdated(BaseModel):
    message: str
    updatedBooking: BookingOut


class BookingDeleted(BaseModel):
    message: str
    deletedBooking: BookingOut


def missing_fields(errors: List[Dict[str, Any]]) -> List[str]:
    """Names of the fields pydantic reported as absent or empty."""
    names = []
    for error in errors:
        if error.get("type") not in ("missing", "string_too_short"):
            continue
        loc = [part for part in error.get("loc", ()) if part != "body"]
        if loc and str(loc[0]) not in names:
            names.append(str(loc[0]))
    return names


def validation_error_from(errors: List[Dict[str, Any]]) -> ValidationError:
    missing = missing_fields(errors)
    if missing:
        return ValidationError("Missing required fields", fields=missing)
    first = errors[0] if errors else {}
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "Invalid request")
    return ValidationError(f"Invalid field {loc}: {detail}" if loc else detail)

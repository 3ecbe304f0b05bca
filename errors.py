from typing import Iterable, Optional


class BookingServiceError(Exception):
    """Base class for failures raised by the booking and invoice services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingServiceError):
    """Missing or malformed request input."""

    def __init__(self, message: str = "Missing required fields", fields: Optional[Iterable[str]] = None):
        self.fields = list(fields or [])
        if self.fields:
            message = f"{message}: {', '.join(self.fields)}"
        super().__init__(message)


class NotFoundError(BookingServiceError):
    def __init__(self, booking_id: str):
        super().__init__("Booking not found")
        self.booking_id = booking_id


class RenderError(BookingServiceError):
    """Any failure inside the invoice rendering pipeline."""


class StoreError(BookingServiceError):
    """The underlying database failed or is not open."""

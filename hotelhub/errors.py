"""
Error taxonomy for the booking service.

Every failure the booking flow can report is a HotelHubError subclass carrying
a stable machine-readable code, the HTTP status the API maps it to and a
human-readable message that is returned to the staff UI or the voice agent.
"""

from __future__ import annotations


class HotelHubError(Exception):
    """Base class for all expected failures."""

    code = "error"
    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingField(HotelHubError):
    code = "missing_field"
    status_code = 400
    default_message = "Missing required reservation information"

    def __init__(self, message: str | None = None, fields: list[str] | None = None) -> None:
        self.fields = fields or []
        super().__init__(message)


class InvalidDateRange(HotelHubError):
    code = "invalid_date_range"
    status_code = 400
    default_message = "Check-out date must be after check-in date"


class RoomUnavailable(HotelHubError):
    """A normal rejection: the room is booked for (part of) the requested dates."""

    code = "room_unavailable"
    status_code = 409
    default_message = "Room is not available for selected dates"


class RoomNotFound(HotelHubError):
    code = "room_not_found"
    status_code = 404
    default_message = "Room not found"


class ReservationNotFound(HotelHubError):
    code = "reservation_not_found"
    status_code = 404
    default_message = "Reservation not found"


class InvalidStatusTransition(HotelHubError):
    code = "invalid_status_transition"
    status_code = 409
    default_message = "Reservation status cannot be changed that way"


class DataUnavailable(HotelHubError):
    """Any failure of the remote data store."""

    code = "data_unavailable"
    status_code = 503
    default_message = "The reservation database is unavailable, please try again"


class PaymentVerificationFailed(HotelHubError):
    code = "payment_verification_failed"
    status_code = 502
    default_message = "Failed to verify payment"


class ConfigurationMissing(HotelHubError):
    code = "configuration_missing"
    status_code = 500
    default_message = "Required API credentials are not configured"


class DuplicateRoomNumber(HotelHubError):
    code = "duplicate_room_number"
    status_code = 409
    default_message = "A room with this number already exists"


class PaymentSessionRequired(HotelHubError):
    """Raised when a paid feature is requested without a valid payment session."""

    code = "payment_required"
    status_code = 402
    default_message = "A paid session is required to call the voice agent"

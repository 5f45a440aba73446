"""
Booking orchestrator.

One booking attempt walks through

    Validating -> CheckingAvailability -> ResolvingGuest -> Pricing -> Persisting

and ends in exactly one of Committed, Rejected or Failed. Every step runs once;
nothing is retried. The same flow serves the staff reservation form and the
voice agent, so every outcome is returned as a BookingOutcome rather than
raised.

Availability check and insert are separate statements, so two concurrent
bookings can both pass the check. The reservations_no_overlap exclusion
constraint rejects the second insert, which is reported as RoomUnavailable.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import (
    DataUnavailable,
    HotelHubError,
    InvalidDateRange,
    MissingField,
    RoomNotFound,
    RoomUnavailable,
)
from hotelhub.metrics import booking_attempts, booking_duration, booking_rejections
from hotelhub.models.enums import ReservationStatus, RoomStatus
from hotelhub.services.availability import check_room_conflict
from hotelhub.services.guests import resolve_guest
from hotelhub.services.pricing import compute_total
from hotelhub.services.room_status import mark_room_status
from hotelhub.utils.datetime import parse_iso_date, utc_today

logger = structlog.get_logger(__name__)


class BookingState(str, enum.Enum):
    VALIDATING = "validating"
    CHECKING_AVAILABILITY = "checking_availability"
    RESOLVING_GUEST = "resolving_guest"
    PRICING = "pricing"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class BookingRequest:
    """Booking input shared by the staff form and the voice agent."""

    guest_name: Optional[str]
    room_id: Optional[str]
    check_in_date: Optional[str | date]
    check_out_date: Optional[str | date]
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    special_requests: Optional[str] = None
    total_amount: Optional[Decimal] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "BookingRequest":
        """Build a request from the camelCase booking contract."""
        total = data.get("totalAmount")
        return cls(
            guest_name=data.get("guestName"),
            room_id=data.get("roomId"),
            check_in_date=data.get("checkInDate"),
            check_out_date=data.get("checkOutDate"),
            guest_email=data.get("guestEmail"),
            guest_phone=data.get("guestPhone"),
            special_requests=data.get("specialRequests"),
            total_amount=Decimal(str(total)) if total is not None else None,
        )


@dataclass
class BookingOutcome:
    state: BookingState
    reservation_id: Optional[str] = None
    error: Optional[HotelHubError] = None
    total_amount: Optional[Decimal] = None
    room_status_synced: Optional[bool] = None

    @property
    def success(self) -> bool:
        return self.state is BookingState.COMMITTED

    def to_result(self) -> dict[str, Any]:
        """Render the {success, reservationId?, error?} contract."""
        result: dict[str, Any] = {"success": self.success}
        if self.reservation_id:
            result["reservationId"] = self.reservation_id
        if self.error is not None:
            result["error"] = self.error.message
        return result


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def validate_request(request: BookingRequest) -> tuple[date, date]:
    """
    Local validation, done before any store access.

    Returns:
        tuple[date, date]: Parsed check-in and check-out dates

    Raises:
        MissingField: guest name, room id or either date is absent
        InvalidDateRange: dates are malformed or check-out is not after check-in
    """
    required = {
        "guestName": request.guest_name,
        "roomId": request.room_id,
        "checkInDate": request.check_in_date,
        "checkOutDate": request.check_out_date,
    }
    missing = [field for field, value in required.items() if not _present(value)]
    if missing:
        raise MissingField(fields=missing)

    try:
        check_in = parse_iso_date(request.check_in_date)  # type: ignore[arg-type]
        check_out = parse_iso_date(request.check_out_date)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise InvalidDateRange("Dates must be in YYYY-MM-DD format") from e

    if check_out <= check_in:
        raise InvalidDateRange()
    return check_in, check_out


def _finish(
    outcome: BookingOutcome, channel: str, log: Any, started: float
) -> BookingOutcome:
    booking_attempts.labels(channel=channel, outcome=outcome.state.value).inc()
    booking_duration.labels(channel=channel).observe(time.time() - started)
    if outcome.error is not None:
        booking_rejections.labels(channel=channel, reason=outcome.error.code).inc()
        log.info(
            "booking_not_committed",
            state=outcome.state.value,
            reason=outcome.error.code,
            error=outcome.error.message,
        )
    return outcome


def book_reservation(
    store: DataStore,
    request: BookingRequest,
    today: Optional[date] = None,
    channel: str = "staff",
) -> BookingOutcome:
    """
    Run one booking attempt to completion.

    Args:
        store: Data store
        request: Booking input
        today: Current date, used to decide whether the room becomes occupied
            now (defaults to today's UTC date)
        channel: Where the booking came from (staff or agent), for logs and metrics

    Returns:
        BookingOutcome: Committed with the new reservation id, Rejected for
        validation errors and unavailable rooms, Failed for store errors
    """
    started = time.time()
    log = logger.bind(channel=channel, room_id=request.room_id)
    state = BookingState.VALIDATING

    try:
        try:
            check_in, check_out = validate_request(request)
        except (MissingField, InvalidDateRange) as e:
            return _finish(BookingOutcome(BookingState.REJECTED, error=e), channel, log, started)

        room_id = str(request.room_id).strip()
        guest_name = str(request.guest_name).strip()

        state = BookingState.CHECKING_AVAILABILITY
        try:
            room = store.get_room(room_id)
            if room is None:
                raise RoomNotFound()
            if check_room_conflict(store, room_id, check_in, check_out):
                raise RoomUnavailable()
        except (RoomNotFound, RoomUnavailable) as e:
            return _finish(BookingOutcome(BookingState.REJECTED, error=e), channel, log, started)
        except DataUnavailable as e:
            return _finish(BookingOutcome(BookingState.FAILED, error=e), channel, log, started)

        state = BookingState.RESOLVING_GUEST
        try:
            guest_id = resolve_guest(
                store, guest_name, email=request.guest_email, phone=request.guest_phone
            )
        except DataUnavailable as e:
            return _finish(BookingOutcome(BookingState.FAILED, error=e), channel, log, started)

        state = BookingState.PRICING
        total = compute_total(
            room["price_per_night"], check_in, check_out, explicit_total=request.total_amount
        )

        state = BookingState.PERSISTING
        notes = request.special_requests.strip() if request.special_requests else None
        try:
            reservation_id = store.insert_reservation(
                room_id,
                guest_id,
                check_in,
                check_out,
                ReservationStatus.CONFIRMED.value,
                total,
                notes or None,
            )
        except RoomUnavailable as e:
            return _finish(BookingOutcome(BookingState.REJECTED, error=e), channel, log, started)
        except DataUnavailable as e:
            return _finish(BookingOutcome(BookingState.FAILED, error=e), channel, log, started)

        room_synced = None
        if check_in == (today or utc_today()):
            room_synced = mark_room_status(store, room_id, RoomStatus.OCCUPIED)

        log.info(
            "booking_committed",
            reservation_id=reservation_id,
            guest_id=guest_id,
            check_in=check_in.isoformat(),
            check_out=check_out.isoformat(),
            total_amount=str(total),
            room_status_synced=room_synced,
        )
        return _finish(
            BookingOutcome(
                BookingState.COMMITTED,
                reservation_id=reservation_id,
                total_amount=total,
                room_status_synced=room_synced,
            ),
            channel,
            log,
            started,
        )

    except Exception as e:
        log.exception("booking_crashed", state=state.value, error=str(e))
        return _finish(
            BookingOutcome(
                BookingState.FAILED, error=HotelHubError("Failed to create reservation")
            ),
            channel,
            log,
            started,
        )

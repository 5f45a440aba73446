"""
Bookings requested by the voice agent.

The agent payload goes through an explicit pipeline before it reaches the
booking orchestrator:

    extract_reservation_payload -> normalize_agent_reservation -> match_room -> book_reservation
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import (
    DataUnavailable,
    HotelHubError,
    InvalidDateRange,
    MissingField,
    RoomUnavailable,
)
from hotelhub.metrics import booking_attempts, booking_rejections
from hotelhub.normalizers.agent_payload import (
    extract_reservation_payload,
    normalize_agent_reservation,
)
from hotelhub.services.booking import BookingOutcome, BookingRequest, BookingState, book_reservation
from hotelhub.services.room_matching import match_room
from hotelhub.utils.datetime import parse_iso_date

logger = structlog.get_logger(__name__)

CHANNEL = "agent"


def _stop(state: BookingState, error: HotelHubError) -> BookingOutcome:
    booking_attempts.labels(channel=CHANNEL, outcome=state.value).inc()
    booking_rejections.labels(channel=CHANNEL, reason=error.code).inc()
    logger.info("agent_booking_stopped", state=state.value, reason=error.code)
    return BookingOutcome(state, error=error)


def _requested_dates(request: BookingRequest) -> Optional[tuple[date, date]]:
    """Parsed (check_in, check_out), or None when either is missing or malformed."""
    if not request.check_in_date or not request.check_out_date:
        return None
    try:
        return parse_iso_date(request.check_in_date), parse_iso_date(request.check_out_date)
    except (TypeError, ValueError):
        return None


def book_from_agent(
    store: DataStore, raw: Any, today: Optional[date] = None
) -> BookingOutcome:
    """
    Turn a raw agent message into a booking attempt.

    Reversed dates are rejected with InvalidDateRange before any room lookup.
    The room is resolved with match_room() when the dates are usable; with
    missing or malformed dates the request goes to the orchestrator unchanged
    so it reports the validation error.

    Args:
        store: Data store
        raw: Agent message (dict, JSON string or text containing JSON)
        today: Current date override, for tests

    Returns:
        BookingOutcome: Same contract as staff bookings
    """
    unreadable = MissingField("Could not read reservation details from the agent response")
    try:
        payload = extract_reservation_payload(raw)
        if payload is None:
            return _stop(BookingState.REJECTED, unreadable)
        fields = normalize_agent_reservation(payload)
        request = BookingRequest.from_payload(fields)
    except Exception as e:
        logger.exception("agent_payload_unreadable", error=str(e))
        return _stop(BookingState.REJECTED, unreadable)

    dates = _requested_dates(request)
    if dates is not None and dates[1] <= dates[0]:
        return _stop(BookingState.REJECTED, InvalidDateRange())

    if dates is not None and request.guest_name:
        try:
            room = match_room(
                store, fields["roomId"], dates[0], dates[1], room_type=fields["roomType"]
            )
        except RoomUnavailable as e:
            return _stop(BookingState.REJECTED, e)
        except DataUnavailable as e:
            return _stop(BookingState.FAILED, e)
        request.room_id = str(room["id"])

    return book_reservation(store, request, today=today, channel=CHANNEL)

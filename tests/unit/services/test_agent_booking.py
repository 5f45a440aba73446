"""Unit tests for voice agent bookings."""

from __future__ import annotations

import json
from datetime import date
from unittest.mock import patch

import pytest

from hotelhub.errors import InvalidDateRange, MissingField, RoomUnavailable
from hotelhub.services.agent_booking import book_from_agent
from hotelhub.services.booking import BookingState

TODAY = date(2024, 1, 1)


@pytest.mark.unit
def test_tool_call_books_matching_category(store) -> None:
    store.add_room("101", "standard")
    suite = store.add_room("301", "suite", price_per_night=300)
    raw = {
        "tool_call": {
            "name": "create_reservation",
            "parameters": json.dumps(
                {
                    "guest_name": "Noel Frost",
                    "email": "noel@example.com",
                    "room_type": "suite",
                    "check_in": "2024-01-10",
                    "check_out": "2024-01-12",
                }
            ),
        }
    }

    outcome = book_from_agent(store, raw, today=TODAY)

    assert outcome.state is BookingState.COMMITTED
    row = store.reservations[outcome.reservation_id]
    assert row["room_id"] == suite
    assert str(row["total_amount"]) == "600"


@pytest.mark.unit
def test_free_text_with_room_number(store) -> None:
    room_id = store.add_room("204", "deluxe")
    raw = (
        "Sure! Here is the booking: "
        '{"reservation": {"guestName": "Ana", "room": "Room 204", '
        '"checkInDate": "January 10, 2024", "checkOutDate": "January 11, 2024"}}'
    )

    outcome = book_from_agent(store, raw, today=TODAY)

    assert outcome.success
    assert store.reservations[outcome.reservation_id]["room_id"] == room_id


@pytest.mark.unit
def test_unreadable_message_is_rejected(store) -> None:
    outcome = book_from_agent(store, "I could not understand the caller", today=TODAY)

    assert outcome.state is BookingState.REJECTED
    assert isinstance(outcome.error, MissingField)
    assert store.calls == []


@pytest.mark.unit
def test_missing_guest_name_reported_by_validation(store) -> None:
    store.add_room()

    outcome = book_from_agent(
        store, {"reservation": {"checkIn": "2024-01-10", "checkOut": "2024-01-12"}}, today=TODAY
    )

    assert isinstance(outcome.error, MissingField)
    assert outcome.error.fields == ["guestName", "roomId"]
    assert store.calls == []


@pytest.mark.unit
def test_reversed_dates_skip_room_matching(store) -> None:
    store.add_room()

    outcome = book_from_agent(
        store,
        {"guestName": "Ana", "room": "101", "checkIn": "2024-01-12", "checkOut": "2024-01-10"},
        today=TODAY,
    )

    assert isinstance(outcome.error, InvalidDateRange)
    assert store.calls == []


@pytest.mark.unit
def test_no_free_room_is_rejected(store) -> None:
    room_id = store.add_room()
    store.add_reservation(room_id, date(2024, 1, 9), date(2024, 1, 11))

    outcome = book_from_agent(
        store,
        {"guestName": "Ana", "checkIn": "2024-01-10", "checkOut": "2024-01-12"},
        today=TODAY,
    )

    assert outcome.state is BookingState.REJECTED
    assert isinstance(outcome.error, RoomUnavailable)
    assert outcome.to_result() == {
        "success": False,
        "error": "No rooms are available for the selected dates",
    }


@pytest.mark.unit
def test_room_listing_failure_fails_booking(store) -> None:
    store.add_room()
    store.fail_on.add("list_rooms")

    outcome = book_from_agent(
        store,
        {"guestName": "Ana", "roomType": "deluxe", "checkIn": "2024-01-10", "checkOut": "2024-01-12"},
        today=TODAY,
    )

    assert outcome.state is BookingState.FAILED
    assert store.reservations == {}


@pytest.mark.unit
def test_named_room_already_booked_is_rejected_by_orchestrator(store) -> None:
    room_id = store.add_room("101")
    store.add_room("102")
    store.add_reservation(room_id, date(2024, 1, 10), date(2024, 1, 12))

    outcome = book_from_agent(
        store,
        {"guestName": "Ana", "roomNumber": "101", "checkIn": "2024-01-10", "checkOut": "2024-01-12"},
        today=TODAY,
    )

    assert isinstance(outcome.error, RoomUnavailable)
    assert outcome.error.message == "Room is not available for selected dates"


@pytest.mark.unit
@pytest.mark.parametrize("total", ["NaN", "Infinity"])
def test_non_finite_total_falls_back_to_nightly_price(store, total: str) -> None:
    room_id = store.add_room("201", "deluxe", price_per_night=150)

    outcome = book_from_agent(
        store,
        {
            "guestName": "Ana",
            "roomType": "deluxe",
            "checkInDate": "2024-01-10",
            "checkOutDate": "2024-01-13",
            "totalAmount": total,
        },
        today=TODAY,
    )

    assert outcome.state is BookingState.COMMITTED
    row = store.reservations[outcome.reservation_id]
    assert row["room_id"] == room_id
    assert str(row["total_amount"]) == "450"


@pytest.mark.unit
def test_normalization_crash_is_rejected_not_raised(store) -> None:
    with patch(
        "hotelhub.services.agent_booking.normalize_agent_reservation",
        side_effect=ArithmeticError("bad number"),
    ):
        outcome = book_from_agent(store, {"guestName": "Ana"}, today=TODAY)

    assert outcome.state is BookingState.REJECTED
    assert outcome.to_result() == {
        "success": False,
        "error": "Could not read reservation details from the agent response",
    }
    assert store.calls == []


@pytest.mark.unit
def test_reversed_dates_with_only_a_category(store) -> None:
    store.add_room("201", "deluxe")

    outcome = book_from_agent(
        store,
        {
            "guestName": "Ana",
            "roomType": "deluxe",
            "checkInDate": "2024-01-13",
            "checkOutDate": "2024-01-10",
        },
        today=TODAY,
    )

    assert outcome.state is BookingState.REJECTED
    assert isinstance(outcome.error, InvalidDateRange)
    assert outcome.to_result() == {
        "success": False,
        "error": "Check-out date must be after check-in date",
    }
    assert store.calls == []


@pytest.mark.unit
def test_reversed_dates_without_guest_name(store) -> None:
    outcome = book_from_agent(
        store, {"roomType": "suite", "checkIn": "2024-01-13", "checkOut": "2024-01-13"}, today=TODAY
    )

    assert isinstance(outcome.error, InvalidDateRange)

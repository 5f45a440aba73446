"""Unit tests for check-in, check-out and cancellation."""

from __future__ import annotations

from datetime import date

import pytest

from hotelhub.errors import DataUnavailable, InvalidStatusTransition, ReservationNotFound
from hotelhub.services.stays import (
    cancel_reservation,
    check_in_reservation,
    check_out_reservation,
)


@pytest.fixture
def booked(store):
    room_id = store.add_room()
    guest_id = store.insert_guest("Ana")
    reservation_id = store.add_reservation(
        room_id, date(2024, 1, 10), date(2024, 1, 12), status="confirmed", guest_id=guest_id
    )
    return room_id, guest_id, reservation_id


@pytest.mark.unit
def test_check_in_marks_room_occupied(store, booked) -> None:
    room_id, _, reservation_id = booked

    result = check_in_reservation(store, reservation_id)

    assert result == {
        "reservationId": reservation_id,
        "status": "checked-in",
        "roomStatusSynced": True,
    }
    assert store.reservations[reservation_id]["status"] == "checked-in"
    assert store.rooms[room_id]["status"] == "occupied"


@pytest.mark.unit
def test_check_out_cleans_room_and_counts_stay(store, booked) -> None:
    room_id, guest_id, reservation_id = booked
    check_in_reservation(store, reservation_id)

    result = check_out_reservation(store, reservation_id)

    assert result["status"] == "checked-out"
    assert store.rooms[room_id]["status"] == "cleaning"
    assert store.guests[guest_id]["total_stays"] == 1
    assert store.guests[guest_id]["last_visit"] is not None


@pytest.mark.unit
def test_cancel_leaves_room_status(store, booked) -> None:
    room_id, _, reservation_id = booked

    result = cancel_reservation(store, reservation_id)

    assert result["status"] == "cancelled"
    assert result["roomStatusSynced"] is None
    assert store.rooms[room_id]["status"] == "available"


@pytest.mark.unit
def test_cannot_cancel_after_check_in(store, booked) -> None:
    _, _, reservation_id = booked
    check_in_reservation(store, reservation_id)

    with pytest.raises(InvalidStatusTransition):
        cancel_reservation(store, reservation_id)


@pytest.mark.unit
def test_cannot_check_out_before_check_in(store, booked) -> None:
    _, _, reservation_id = booked

    with pytest.raises(InvalidStatusTransition):
        check_out_reservation(store, reservation_id)


@pytest.mark.unit
def test_unknown_reservation(store) -> None:
    with pytest.raises(ReservationNotFound):
        check_in_reservation(store, "missing")


@pytest.mark.unit
def test_room_status_failure_does_not_block_check_in(store, booked) -> None:
    room_id, _, reservation_id = booked
    store.fail_on.add("update_room")

    result = check_in_reservation(store, reservation_id)

    assert result["roomStatusSynced"] is False
    assert store.reservations[reservation_id]["status"] == "checked-in"


@pytest.mark.unit
def test_guest_stay_failure_surfaces_after_status_change(store, booked) -> None:
    _, _, reservation_id = booked
    check_in_reservation(store, reservation_id)
    store.fail_on.add("record_guest_stay")

    with pytest.raises(DataUnavailable):
        check_out_reservation(store, reservation_id)

    assert store.reservations[reservation_id]["status"] == "checked-out"

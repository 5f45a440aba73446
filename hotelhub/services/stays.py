"""
Reservation status transitions performed by front-desk staff.

    pending | confirmed  --check_in-->   checked-in    (room -> occupied)
    checked-in           --check_out-->  checked-out   (room -> cleaning, guest stay counted)
    pending | confirmed  --cancel-->     cancelled

Room status changes go through the best-effort interface in room_status.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import InvalidStatusTransition, ReservationNotFound
from hotelhub.models.enums import ReservationStatus, RoomStatus
from hotelhub.services.room_status import mark_room_status
from hotelhub.utils.datetime import utc_now

logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: dict[ReservationStatus, tuple[ReservationStatus, ...]] = {
    ReservationStatus.CHECKED_IN: (ReservationStatus.PENDING, ReservationStatus.CONFIRMED),
    ReservationStatus.CHECKED_OUT: (ReservationStatus.CHECKED_IN,),
    ReservationStatus.CANCELLED: (ReservationStatus.PENDING, ReservationStatus.CONFIRMED),
}

ROOM_STATUS_AFTER: dict[ReservationStatus, Optional[RoomStatus]] = {
    ReservationStatus.CHECKED_IN: RoomStatus.OCCUPIED,
    ReservationStatus.CHECKED_OUT: RoomStatus.CLEANING,
    ReservationStatus.CANCELLED: None,
}


def _transition(
    store: DataStore, reservation_id: str, target: ReservationStatus
) -> tuple[dict[str, Any], dict[str, Any]]:
    reservation = store.get_reservation(reservation_id)
    if reservation is None:
        raise ReservationNotFound()

    current = ReservationStatus(reservation["status"])
    if current not in ALLOWED_TRANSITIONS[target]:
        raise InvalidStatusTransition(
            f"Cannot change reservation from {current.value} to {target.value}"
        )

    if not store.update_reservation_status(reservation_id, target.value):
        raise ReservationNotFound()

    logger.info(
        "reservation_status_changed",
        reservation_id=reservation_id,
        from_status=current.value,
        to_status=target.value,
    )

    room_status = ROOM_STATUS_AFTER[target]
    room_synced = None
    if room_status is not None:
        room_synced = mark_room_status(store, str(reservation["room_id"]), room_status)

    return reservation, {
        "reservationId": reservation_id,
        "status": target.value,
        "roomStatusSynced": room_synced,
    }


def check_in_reservation(store: DataStore, reservation_id: str) -> dict[str, Any]:
    """Check a guest in and mark the room occupied."""
    _, result = _transition(store, reservation_id, ReservationStatus.CHECKED_IN)
    return result


def check_out_reservation(store: DataStore, reservation_id: str) -> dict[str, Any]:
    """
    Check a guest out.

    The room goes to cleaning and the guest's total_stays / last_visit are
    updated. The guest update is part of the check-out and its failure is
    raised as DataUnavailable after the status change has been written.
    """
    reservation, result = _transition(store, reservation_id, ReservationStatus.CHECKED_OUT)
    store.record_guest_stay(str(reservation["guest_id"]), utc_now())
    return result


def cancel_reservation(store: DataStore, reservation_id: str) -> dict[str, Any]:
    """Cancel a reservation that has not been checked in yet."""
    _, result = _transition(store, reservation_id, ReservationStatus.CANCELLED)
    return result

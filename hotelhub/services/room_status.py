"""
Best-effort room status updates.

Booking, check-in and check-out change a room's housekeeping status as a side
effect. These updates are fire-and-forget relative to the operation that
triggered them: a failure is logged and counted but never undoes the
reservation change. reconcile_room_statuses() repairs rooms whose status was
left behind.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import HotelHubError
from hotelhub.metrics import room_status_updates
from hotelhub.models.enums import RoomStatus
from hotelhub.utils.datetime import utc_today

logger = structlog.get_logger(__name__)


def mark_room_status(store: DataStore, room_id: str, status: RoomStatus) -> bool:
    """
    Set a room's status without ever raising.

    Args:
        store: Data store
        room_id: Room id
        status: Target status

    Returns:
        bool: True if the room row was updated, False on any failure
    """
    try:
        updated = store.update_room(room_id, {"status": status.value})
    except HotelHubError as e:
        logger.warning(
            "room_status_update_failed",
            room_id=room_id,
            status=status.value,
            error=e.message,
        )
        room_status_updates.labels(status=status.value, result="failure").inc()
        return False

    if not updated:
        logger.warning("room_status_update_missed", room_id=room_id, status=status.value)
        room_status_updates.labels(status=status.value, result="failure").inc()
        return False

    room_status_updates.labels(status=status.value, result="success").inc()
    logger.info("room_status_updated", room_id=room_id, status=status.value)
    return True


def reconcile_room_statuses(store: DataStore, today: Optional[date] = None) -> list[str]:
    """
    Mark rooms occupied when their reservations say they should be.

    A room should be occupied on a given day if a confirmed reservation checks
    in that day or a checked-in reservation spans it. Rooms already occupied
    are left alone.

    Args:
        store: Data store
        today: Day to reconcile (defaults to today's UTC date)

    Returns:
        list[str]: Ids of the rooms whose status was changed

    Raises:
        DataUnavailable: If reservations or rooms cannot be read
    """
    day = today or utc_today()
    reservations = store.list_reservations_occupying(day)

    fixed: list[str] = []
    seen: set[str] = set()
    for reservation in reservations:
        room_id = str(reservation["room_id"])
        if room_id in seen:
            continue
        seen.add(room_id)

        room = store.get_room(room_id)
        if room is None or room["status"] == RoomStatus.OCCUPIED.value:
            continue
        if mark_room_status(store, room_id, RoomStatus.OCCUPIED):
            fixed.append(room_id)

    logger.info("room_statuses_reconciled", day=day.isoformat(), fixed=len(fixed))
    return fixed

"""
Room availability checks.

A reservation occupies the half-open range [check_in_date, check_out_date):
the departure day is free for the next arrival, so back-to-back stays on the
changeover day do not conflict.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import DataUnavailable
from hotelhub.utils.datetime import parse_iso_date

logger = structlog.get_logger(__name__)


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True if [start_a, end_a) and [start_b, end_b) share at least one night."""
    return start_a < end_b and end_a > start_b


def has_conflict(
    existing: Iterable[Mapping[str, Any]],
    check_in: date,
    check_out: date,
) -> bool:
    """
    Decide whether a candidate stay overlaps any of the given reservations.

    The caller passes only the active reservations of a single room and has
    already checked that check_out > check_in.

    Args:
        existing: Reservation rows with check_in_date / check_out_date
        check_in: Candidate arrival date
        check_out: Candidate departure date

    Returns:
        bool: True if at least one reservation overlaps the candidate range

    Example:
        >>> rows = [{"check_in_date": date(2024, 1, 15), "check_out_date": date(2024, 1, 18)}]
        >>> has_conflict(rows, date(2024, 1, 18), date(2024, 1, 20))
        False
    """
    for reservation in existing:
        existing_start = parse_iso_date(reservation["check_in_date"])
        existing_end = parse_iso_date(reservation["check_out_date"])
        if ranges_overlap(check_in, check_out, existing_start, existing_end):
            return True
    return False


def check_room_conflict(
    store: DataStore,
    room_id: str,
    check_in: date,
    check_out: date,
) -> bool:
    """
    Fetch a room's active reservations and test the candidate range against them.

    Raises:
        DataUnavailable: If the reservations could not be read. Callers must
            treat the room as unavailable in that case.
    """
    try:
        existing = store.list_active_reservations(room_id)
    except DataUnavailable:
        logger.warning("availability_lookup_failed", room_id=room_id)
        raise

    conflict = has_conflict(existing, check_in, check_out)
    logger.debug(
        "availability_checked",
        room_id=room_id,
        check_in=check_in.isoformat(),
        check_out=check_out.isoformat(),
        active_reservations=len(existing),
        conflict=conflict,
    )
    return conflict


def is_room_available(
    store: DataStore,
    room_id: str,
    check_in: date,
    check_out: date,
) -> bool:
    """Fail-closed wrapper: a store failure reports the room as unavailable."""
    try:
        return not check_room_conflict(store, room_id, check_in, check_out)
    except DataUnavailable:
        return False

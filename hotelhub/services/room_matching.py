"""
Room selection for voice agent bookings.

The agent often names a room loosely ("the deluxe one", "room 204", "a suite")
instead of passing a room id. match_room() resolves the hint with a fixed
fallback policy:

    1. hint is a known room id           -> that room
    2. hint equals a room number         -> that room
    3. hint or room_type maps to a category through ROOM_TYPE_ALIASES
                                         -> first available room of that category
    4. otherwise                         -> first available room of any category
    5. nothing available                 -> RoomUnavailable

"Available" means room status is available and no active reservation overlaps
the requested dates. Candidates are tried in room number order. Steps 1 and 2
return the named room even if it is booked; the orchestrator then rejects the
booking with RoomUnavailable.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

import structlog

from hotelhub.db.store import DataStore
from hotelhub.errors import RoomUnavailable
from hotelhub.models.enums import RoomStatus, RoomType
from hotelhub.services.availability import is_room_available
from hotelhub.utils.ids import is_valid_uuid

logger = structlog.get_logger(__name__)

ROOM_TYPE_ALIASES: dict[str, RoomType] = {
    "standard": RoomType.STANDARD,
    "single": RoomType.STANDARD,
    "double": RoomType.STANDARD,
    "twin": RoomType.STANDARD,
    "basic": RoomType.STANDARD,
    "regular": RoomType.STANDARD,
    "deluxe": RoomType.DELUXE,
    "premium": RoomType.DELUXE,
    "king": RoomType.DELUXE,
    "queen": RoomType.DELUXE,
    "suite": RoomType.SUITE,
    "family": RoomType.SUITE,
    "presidential": RoomType.SUITE,
    "penthouse": RoomType.SUITE,
}

_ROOM_NUMBER_PATTERN = re.compile(r"^(?:room\s*(?:number\s*)?#?\s*)?([a-z0-9-]+)$")
_WORD = re.compile(r"[a-z]+")


def category_for(hint: Optional[str]) -> Optional[RoomType]:
    """
    Map free text to a room category using whole-word aliases.

    Example:
        >>> category_for("A Deluxe King room")
        <RoomType.DELUXE: 'deluxe'>
    """
    if not hint:
        return None
    for word in _WORD.findall(hint.lower()):
        if word in ROOM_TYPE_ALIASES:
            return ROOM_TYPE_ALIASES[word]
    return None


def room_number_for(hint: Optional[str]) -> Optional[str]:
    """Extract a room number from "204", "room 204" or "Room #204"."""
    if not hint:
        return None
    match = _ROOM_NUMBER_PATTERN.match(hint.strip().lower())
    return match.group(1) if match else None


def _first_available(
    store: DataStore,
    rooms: list[dict[str, Any]],
    check_in: date,
    check_out: date,
    category: Optional[RoomType] = None,
) -> Optional[dict[str, Any]]:
    for room in rooms:
        if category is not None and room["room_type"] != category.value:
            continue
        if is_room_available(store, str(room["id"]), check_in, check_out):
            return room
    return None


def match_room(
    store: DataStore,
    hint: Optional[str],
    check_in: date,
    check_out: date,
    room_type: Optional[str] = None,
) -> dict[str, Any]:
    """
    Pick the room an agent booking refers to.

    Args:
        store: Data store
        hint: Room id, room number or free-text description from the agent
        check_in: Requested arrival
        check_out: Requested departure
        room_type: Optional separate category hint

    Returns:
        dict[str, Any]: The chosen room row

    Raises:
        RoomUnavailable: If no room satisfies the policy
        DataUnavailable: If rooms cannot be listed
    """
    hint = hint.strip() if hint else None

    if hint and is_valid_uuid(hint):
        room = store.get_room(hint)
        if room is not None:
            logger.info("room_matched", rule="room_id", room_id=str(room["id"]))
            return room

    number = room_number_for(hint)
    if number:
        room = store.get_room_by_number(number)
        if room is not None:
            logger.info("room_matched", rule="room_number", room_id=str(room["id"]))
            return room

    rooms = store.list_rooms(status=RoomStatus.AVAILABLE.value)

    category = category_for(hint) or category_for(room_type)
    if category is not None:
        room = _first_available(store, rooms, check_in, check_out, category)
        if room is not None:
            logger.info(
                "room_matched", rule="category", category=category.value, room_id=str(room["id"])
            )
            return room

    room = _first_available(store, rooms, check_in, check_out)
    if room is not None:
        logger.info("room_matched", rule="any_available", room_id=str(room["id"]))
        return room

    logger.info("room_match_failed", hint=hint, room_type=room_type)
    raise RoomUnavailable("No rooms are available for the selected dates")

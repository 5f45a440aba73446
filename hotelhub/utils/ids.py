"""Identifier helpers."""

from uuid import UUID


def is_valid_uuid(value: object) -> bool:
    """
    Return True if value is a UUID string (or UUID instance).

    Rooms, guests and reservations are keyed by UUIDs. Agent payloads often
    carry a room number or category where a room id is expected, so callers
    check the shape before querying a UUID column with it.
    """
    if isinstance(value, UUID):
        return True
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True

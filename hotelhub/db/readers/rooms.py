from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from hotelhub.models.rooms import Room, RoomPhoto


def get_room(conn: Connection, room_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch a single room by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        room_id (str): Room UUID.

    Returns:
        Optional[dict[str, Any]]: Room row as a dict, or None if not found.
    """
    row = conn.execute(select(Room.__table__).where(Room.id == room_id)).mappings().fetchone()
    return dict(row) if row else None


def get_room_by_number(conn: Connection, room_number: str) -> Optional[dict[str, Any]]:
    """
    Fetch a room by its display label (e.g. "101").

    Args:
        conn (Connection): SQLAlchemy DB connection.
        room_number (str): Room number as shown to guests.

    Returns:
        Optional[dict[str, Any]]: Room row or None.
    """
    row = (
        conn.execute(select(Room.__table__).where(Room.room_number == room_number))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def list_rooms(conn: Connection, status: Optional[str] = None) -> list[dict[str, Any]]:
    """
    List rooms ordered by room number, optionally filtered by status.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        status (Optional[str]): Only return rooms with this status.

    Returns:
        list[dict[str, Any]]: Room rows.
    """
    stmt = select(Room.__table__).order_by(Room.room_number)
    if status is not None:
        stmt = stmt.where(Room.status == status)
    return [dict(row) for row in conn.execute(stmt).mappings()]


def list_room_photos(conn: Connection, room_id: str) -> list[dict[str, Any]]:
    """Return the photos attached to a room, oldest first."""
    stmt = (
        select(RoomPhoto.__table__)
        .where(RoomPhoto.room_id == room_id)
        .order_by(RoomPhoto.created_at, RoomPhoto.id)
    )
    return [dict(row) for row in conn.execute(stmt).mappings()]

from typing import Any

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from hotelhub.models.rooms import Room, RoomPhoto
from hotelhub.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def insert_room(conn: Connection, data: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a new room.

    Args:
        conn (Connection): SQLAlchemy DB connection (inside a transaction).
        data (dict): Column values (room_number, room_type, price_per_night,
            status, description).

    Returns:
        dict[str, Any]: The inserted row, including its generated id.
    """
    stmt = insert(Room).values(**data).returning(*Room.__table__.c)
    row = conn.execute(stmt).mappings().one()
    return dict(row)


def update_room(conn: Connection, room_id: str, values: dict[str, Any]) -> bool:
    """
    Update fields of an existing room.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        room_id (str): Room UUID.
        values (dict): Fields to update.

    Returns:
        bool: True if a row was updated.
    """
    values = {**values, "updated_at": utc_now()}
    result = conn.execute(update(Room).where(Room.id == room_id).values(**values))
    return result.rowcount > 0


def insert_room_photo(conn: Connection, room_id: str, photo_url: str, file_path: str) -> dict[str, Any]:
    """Attach a photo record to a room and return the new row."""
    stmt = (
        insert(RoomPhoto)
        .values(room_id=room_id, photo_url=photo_url, file_path=file_path)
        .returning(*RoomPhoto.__table__.c)
    )
    return dict(conn.execute(stmt).mappings().one())


def delete_room_photo(conn: Connection, photo_id: str) -> bool:
    """Remove a photo record. Returns True if it existed."""
    result = conn.execute(delete(RoomPhoto).where(RoomPhoto.id == photo_id))
    return result.rowcount > 0

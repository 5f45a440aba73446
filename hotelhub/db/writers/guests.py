from datetime import datetime
from typing import Optional

from sqlalchemy import func, insert, update
from sqlalchemy.engine import Connection

from hotelhub.models.guests import Guest
from hotelhub.utils.datetime import utc_now


def insert_guest(
    conn: Connection,
    name: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> str:
    """
    Insert a guest and return its id.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        name (str): Guest name.
        email (Optional[str]): Email address, if known.
        phone (Optional[str]): Phone number, if known.

    Returns:
        str: New guest UUID.
    """
    stmt = insert(Guest).values(name=name, email=email, phone=phone).returning(Guest.id)
    return str(conn.execute(stmt).scalar_one())


def record_guest_stay(conn: Connection, guest_id: str, visited_at: datetime) -> None:
    """
    Increment a guest's total_stays and set last_visit.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        guest_id (str): Guest UUID.
        visited_at (datetime): Timestamp of the completed stay.
    """
    stmt = (
        update(Guest)
        .where(Guest.id == guest_id)
        .values(
            total_stays=func.coalesce(Guest.total_stays, 0) + 1,
            last_visit=visited_at,
            updated_at=utc_now(),
        )
    )
    conn.execute(stmt)

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from hotelhub.models.guests import Guest


def find_guest_by_email(conn: Connection, email: str) -> Optional[dict[str, Any]]:
    """
    Look up a guest by exact email match.

    If several guests share the email (possible for rows created before email
    deduplication existed), the oldest one wins.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        email (str): Email address to match exactly.

    Returns:
        Optional[dict[str, Any]]: Guest row or None.
    """
    row = (
        conn.execute(
            select(Guest.__table__)
            .where(Guest.email == email)
            .order_by(Guest.created_at)
            .limit(1)
        )
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def list_guests(conn: Connection) -> list[dict[str, Any]]:
    """Return all guests ordered by name."""
    stmt = select(Guest.__table__).order_by(Guest.name)
    return [dict(row) for row in conn.execute(stmt).mappings()]

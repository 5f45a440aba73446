from datetime import date
from decimal import Decimal
from typing import Optional

import structlog
from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from hotelhub.models.reservations import Reservation
from hotelhub.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def insert_reservation(
    conn: Connection,
    room_id: str,
    guest_id: str,
    check_in_date: date,
    check_out_date: date,
    status: str,
    total_amount: Optional[Decimal],
    notes: Optional[str] = None,
) -> str:
    """
    Insert a reservation row and return its id.

    The reservations_no_overlap exclusion constraint rejects the insert if an
    active reservation for the same room overlaps the dates; the resulting
    IntegrityError is translated by the data store.

    Args:
        conn (Connection): SQLAlchemy DB connection (inside a transaction).
        room_id (str): Room UUID.
        guest_id (str): Guest UUID.
        check_in_date (date): First night.
        check_out_date (date): Departure day (not occupied).
        status (str): Initial status.
        total_amount (Optional[Decimal]): Charge for the stay.
        notes (Optional[str]): Special requests.

    Returns:
        str: New reservation UUID.
    """
    stmt = (
        insert(Reservation)
        .values(
            room_id=room_id,
            guest_id=guest_id,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            status=status,
            total_amount=total_amount,
            notes=notes,
        )
        .returning(Reservation.id)
    )
    reservation_id = str(conn.execute(stmt).scalar_one())
    logger.debug("reservation_row_inserted", reservation_id=reservation_id, room_id=room_id)
    return reservation_id


def update_reservation_status(conn: Connection, reservation_id: str, status: str) -> bool:
    """
    Set the status of a reservation.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        reservation_id (str): Reservation UUID.
        status (str): New status value.

    Returns:
        bool: True if a row was updated.
    """
    result = conn.execute(
        update(Reservation)
        .where(Reservation.id == reservation_id)
        .values(status=status, updated_at=utc_now())
    )
    return result.rowcount > 0

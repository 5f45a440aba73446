from datetime import date
from typing import Any, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.engine import Connection

from hotelhub.models.enums import ACTIVE_RESERVATION_STATUSES, ReservationStatus
from hotelhub.models.reservations import Reservation


def list_active_reservations_for_room(conn: Connection, room_id: str) -> list[dict[str, Any]]:
    """
    Fetch the reservations of a room that currently occupy it.

    Only pending, confirmed and checked-in reservations are returned; these
    are the ones a new booking must not overlap.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        room_id (str): Room UUID.

    Returns:
        list[dict[str, Any]]: Reservation rows.
    """
    stmt = (
        select(Reservation.__table__)
        .where(Reservation.room_id == room_id)
        .where(Reservation.status.in_(ACTIVE_RESERVATION_STATUSES))
        .order_by(Reservation.check_in_date)
    )
    return [dict(row) for row in conn.execute(stmt).mappings()]


def get_reservation(conn: Connection, reservation_id: str) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(select(Reservation.__table__).where(Reservation.id == reservation_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def list_reservations(
    conn: Connection,
    room_id: Optional[str] = None,
    status: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    List reservations ordered by check-in date.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        room_id (Optional[str]): Restrict to one room.
        status (Optional[str]): Restrict to one status.

    Returns:
        list[dict[str, Any]]: Reservation rows.
    """
    stmt = select(Reservation.__table__).order_by(Reservation.check_in_date, Reservation.id)
    if room_id is not None:
        stmt = stmt.where(Reservation.room_id == room_id)
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    return [dict(row) for row in conn.execute(stmt).mappings()]


def list_reservations_occupying(conn: Connection, day: date) -> list[dict[str, Any]]:
    """
    Reservations that should make their room occupied on the given day.

    That is confirmed reservations checking in that day, and checked-in
    reservations whose stay covers it.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        day (date): Calendar day to check.

    Returns:
        list[dict[str, Any]]: Reservation rows.
    """
    stmt = select(Reservation.__table__).where(
        or_(
            and_(
                Reservation.status == ReservationStatus.CONFIRMED.value,
                Reservation.check_in_date == day,
            ),
            and_(
                Reservation.status == ReservationStatus.CHECKED_IN.value,
                Reservation.check_in_date <= day,
                Reservation.check_out_date > day,
            ),
        )
    )
    return [dict(row) for row in conn.execute(stmt).mappings()]

"""
Data store facade used by the booking services.

The services never touch SQLAlchemy directly: they depend on the DataStore
interface below, which SqlDataStore implements on top of the reader and writer
functions. Every SQLAlchemy failure is translated into DataUnavailable here,
so the services only ever see the error taxonomy in hotelhub.errors.

Tests inject an in-memory implementation through the get_data_store
dependency.
"""

from __future__ import annotations

import time
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional, Protocol, TypeVar

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hotelhub.db.readers import guests as guest_readers
from hotelhub.db.readers import reservations as reservation_readers
from hotelhub.db.readers import rooms as room_readers
from hotelhub.db.writers import guests as guest_writers
from hotelhub.db.writers import reservations as reservation_writers
from hotelhub.db.writers import rooms as room_writers
from hotelhub.errors import DataUnavailable, DuplicateRoomNumber, RoomUnavailable
from hotelhub.metrics import db_errors, db_operations, db_query_duration
from hotelhub.utils.ids import is_valid_uuid

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# PostgreSQL SQLSTATE codes
EXCLUSION_VIOLATION = "23P01"
UNIQUE_VIOLATION = "23505"


class DataStore(Protocol):
    """Operations the booking services need from the hotel database."""

    def get_room(self, room_id: str) -> Optional[dict[str, Any]]: ...

    def get_room_by_number(self, room_number: str) -> Optional[dict[str, Any]]: ...

    def list_rooms(self, status: Optional[str] = None) -> list[dict[str, Any]]: ...

    def insert_room(self, data: dict[str, Any]) -> dict[str, Any]: ...

    def update_room(self, room_id: str, values: dict[str, Any]) -> bool: ...

    def list_room_photos(self, room_id: str) -> list[dict[str, Any]]: ...

    def insert_room_photo(self, room_id: str, photo_url: str, file_path: str) -> dict[str, Any]: ...

    def delete_room_photo(self, photo_id: str) -> bool: ...

    def find_guest_by_email(self, email: str) -> Optional[dict[str, Any]]: ...

    def list_guests(self) -> list[dict[str, Any]]: ...

    def insert_guest(
        self, name: str, email: Optional[str] = None, phone: Optional[str] = None
    ) -> str: ...

    def record_guest_stay(self, guest_id: str, visited_at: datetime) -> None: ...

    def list_active_reservations(self, room_id: str) -> list[dict[str, Any]]: ...

    def list_reservations(
        self, room_id: Optional[str] = None, status: Optional[str] = None
    ) -> list[dict[str, Any]]: ...

    def list_reservations_occupying(self, day: date) -> list[dict[str, Any]]: ...

    def get_reservation(self, reservation_id: str) -> Optional[dict[str, Any]]: ...

    def insert_reservation(
        self,
        room_id: str,
        guest_id: str,
        check_in_date: date,
        check_out_date: date,
        status: str,
        total_amount: Optional[Decimal],
        notes: Optional[str] = None,
    ) -> str: ...

    def update_reservation_status(self, reservation_id: str, status: str) -> bool: ...


def _sqlstate(error: IntegrityError) -> Optional[str]:
    return getattr(error.orig, "pgcode", None)


class SqlDataStore:
    """
    DataStore backed by PostgreSQL through a SQLAlchemy engine.

    Each method runs in its own connection: reads use engine.connect(), writes
    use engine.begin() so they commit on success. A booking attempt therefore
    spans several short transactions, and the check-then-insert race is closed
    by the reservations_no_overlap constraint rather than by a lock.

    Example:
        >>> from hotelhub.db.engine import engine
        >>> store = SqlDataStore(engine)
        >>> store.list_rooms(status="available")
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def _run(
        self,
        operation: str,
        table: str,
        fn: Callable[..., T],
        *args: Any,
        write: bool = False,
        **kwargs: Any,
    ) -> T:
        start_time = time.time()
        try:
            if write:
                with self.engine.begin() as conn:
                    result = fn(conn, *args, **kwargs)
            else:
                with self.engine.connect() as conn:
                    result = fn(conn, *args, **kwargs)
        except IntegrityError as e:
            code = _sqlstate(e)
            if code == EXCLUSION_VIOLATION:
                logger.warning("overlap_rejected_by_database", table=table)
                raise RoomUnavailable() from e
            if code == UNIQUE_VIOLATION and table == "rooms":
                raise DuplicateRoomNumber() from e
            db_errors.labels(operation=operation, table=table).inc()
            logger.error("db_integrity_error", operation=operation, table=table, error=str(e))
            raise DataUnavailable() from e
        except SQLAlchemyError as e:
            db_errors.labels(operation=operation, table=table).inc()
            logger.error("db_operation_failed", operation=operation, table=table, error=str(e))
            raise DataUnavailable() from e
        finally:
            db_query_duration.labels(operation=operation).observe(time.time() - start_time)

        db_operations.labels(operation=operation, table=table).inc()
        return result

    # Rooms

    def get_room(self, room_id: str) -> Optional[dict[str, Any]]:
        if not is_valid_uuid(room_id):
            return None
        return self._run("select", "rooms", room_readers.get_room, room_id)

    def get_room_by_number(self, room_number: str) -> Optional[dict[str, Any]]:
        return self._run("select", "rooms", room_readers.get_room_by_number, room_number)

    def list_rooms(self, status: Optional[str] = None) -> list[dict[str, Any]]:
        return self._run("select", "rooms", room_readers.list_rooms, status=status)

    def insert_room(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._run("insert", "rooms", room_writers.insert_room, data, write=True)

    def update_room(self, room_id: str, values: dict[str, Any]) -> bool:
        if not is_valid_uuid(room_id):
            return False
        return self._run("update", "rooms", room_writers.update_room, room_id, values, write=True)

    def list_room_photos(self, room_id: str) -> list[dict[str, Any]]:
        return self._run("select", "room_photos", room_readers.list_room_photos, room_id)

    def insert_room_photo(self, room_id: str, photo_url: str, file_path: str) -> dict[str, Any]:
        return self._run(
            "insert",
            "room_photos",
            room_writers.insert_room_photo,
            room_id,
            photo_url,
            file_path,
            write=True,
        )

    def delete_room_photo(self, photo_id: str) -> bool:
        if not is_valid_uuid(photo_id):
            return False
        return self._run(
            "delete", "room_photos", room_writers.delete_room_photo, photo_id, write=True
        )

    # Guests

    def find_guest_by_email(self, email: str) -> Optional[dict[str, Any]]:
        return self._run("select", "guests", guest_readers.find_guest_by_email, email)

    def list_guests(self) -> list[dict[str, Any]]:
        return self._run("select", "guests", guest_readers.list_guests)

    def insert_guest(
        self, name: str, email: Optional[str] = None, phone: Optional[str] = None
    ) -> str:
        return self._run(
            "insert", "guests", guest_writers.insert_guest, name, email, phone, write=True
        )

    def record_guest_stay(self, guest_id: str, visited_at: datetime) -> None:
        self._run(
            "update", "guests", guest_writers.record_guest_stay, guest_id, visited_at, write=True
        )

    # Reservations

    def list_active_reservations(self, room_id: str) -> list[dict[str, Any]]:
        return self._run(
            "select",
            "reservations",
            reservation_readers.list_active_reservations_for_room,
            room_id,
        )

    def list_reservations(
        self, room_id: Optional[str] = None, status: Optional[str] = None
    ) -> list[dict[str, Any]]:
        if room_id is not None and not is_valid_uuid(room_id):
            return []
        return self._run(
            "select",
            "reservations",
            reservation_readers.list_reservations,
            room_id=room_id,
            status=status,
        )

    def list_reservations_occupying(self, day: date) -> list[dict[str, Any]]:
        return self._run(
            "select", "reservations", reservation_readers.list_reservations_occupying, day
        )

    def get_reservation(self, reservation_id: str) -> Optional[dict[str, Any]]:
        if not is_valid_uuid(reservation_id):
            return None
        return self._run(
            "select", "reservations", reservation_readers.get_reservation, reservation_id
        )

    def insert_reservation(
        self,
        room_id: str,
        guest_id: str,
        check_in_date: date,
        check_out_date: date,
        status: str,
        total_amount: Optional[Decimal],
        notes: Optional[str] = None,
    ) -> str:
        return self._run(
            "insert",
            "reservations",
            reservation_writers.insert_reservation,
            room_id,
            guest_id,
            check_in_date,
            check_out_date,
            status,
            total_amount,
            notes,
            write=True,
        )

    def update_reservation_status(self, reservation_id: str, status: str) -> bool:
        return self._run(
            "update",
            "reservations",
            reservation_writers.update_reservation_status,
            reservation_id,
            status,
            write=True,
        )

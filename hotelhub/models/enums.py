"""Status and category enums shared by the models, schemas and services."""

from __future__ import annotations

import enum


class RoomType(str, enum.Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"


class RoomStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    MAINTENANCE = "maintenance"


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    CANCELLED = "cancelled"


# Statuses that occupy a room and therefore must never overlap for one room.
ACTIVE_RESERVATION_STATUSES: tuple[str, ...] = (
    ReservationStatus.PENDING.value,
    ReservationStatus.CONFIRMED.value,
    ReservationStatus.CHECKED_IN.value,
)


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values (e.g. "checked-in") rather than member names."""
    return [member.value for member in enum_cls]

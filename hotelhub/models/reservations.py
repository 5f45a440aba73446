from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, ForeignKey, Numeric, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from hotelhub.config import SCHEMA
from hotelhub.models.base import Base
from hotelhub.models.enums import ReservationStatus, enum_values


class Reservation(Base):
    """
    ORM model for a room reservation.

    A reservation occupies [check_in_date, check_out_date) for its room: the
    check-out day itself is free for the next guest. For one room, reservations
    in an active status (pending, confirmed, checked-in) never overlap; the
    migration backs this with a gist exclusion constraint named
    reservations_no_overlap.
    """

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="reservations_valid_range"),
        {"schema": SCHEMA},
    )

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=text("gen_random_uuid()"))
    room_id = Column(
        UUID(as_uuid=False),
        ForeignKey(f"{SCHEMA}.rooms.id"),
        nullable=False,
        index=True,
    )
    guest_id = Column(
        UUID(as_uuid=False),
        ForeignKey(f"{SCHEMA}.guests.id"),
        nullable=False,
        index=True,
    )
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            schema=SCHEMA,
            values_callable=enum_values,
        ),
        nullable=False,
        server_default=ReservationStatus.PENDING.value,
    )
    total_amount = Column(Numeric(10, 2), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

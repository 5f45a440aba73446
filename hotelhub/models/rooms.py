from sqlalchemy import CheckConstraint, Column, DateTime, Enum, ForeignKey, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from hotelhub.config import SCHEMA
from hotelhub.models.base import Base
from hotelhub.models.enums import RoomStatus, RoomType, enum_values


class Room(Base):
    """
    ORM model for a bookable room.

    room_number is the unique label shown to staff and guests. status is the
    housekeeping lifecycle (available, occupied, cleaning, maintenance) and is
    changed by check-in/out and by administrative edits. Rooms are never
    deleted by the application.
    """

    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint("price_per_night > 0", name="rooms_positive_price"),
        {"schema": SCHEMA},
    )

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=text("gen_random_uuid()"))
    room_number = Column(String, nullable=False, unique=True)
    room_type = Column(
        Enum(RoomType, name="room_type", schema=SCHEMA, values_callable=enum_values),
        nullable=False,
    )
    price_per_night = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(RoomStatus, name="room_status", schema=SCHEMA, values_callable=enum_values),
        nullable=False,
        server_default=RoomStatus.AVAILABLE.value,
    )
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class RoomPhoto(Base):
    """
    ORM model for a photo attached to a room.

    The image itself lives in blob storage; this row keeps its public URL and
    storage path. Photos are ordered by created_at.
    """

    __tablename__ = "room_photos"
    __table_args__ = {"schema": SCHEMA}

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=text("gen_random_uuid()"))
    room_id = Column(
        UUID(as_uuid=False),
        ForeignKey(f"{SCHEMA}.rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    photo_url = Column(Text, nullable=False)
    file_path = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

from sqlalchemy import Column, DateTime, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from hotelhub.config import SCHEMA
from hotelhub.models.base import Base


class Guest(Base):
    """
    ORM model for a hotel guest.

    Guests are created by staff or by the booking engine. email is the only
    deduplication key: the booking engine reuses a guest with the same email
    and otherwise inserts a new row. total_stays and last_visit are bumped at
    check-out.
    """

    __tablename__ = "guests"
    __table_args__ = {"schema": SCHEMA}

    id = Column(UUID(as_uuid=False), primary_key=True, server_default=text("gen_random_uuid()"))
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    phone = Column(String, nullable=True)
    total_stays = Column(Integer, nullable=True, server_default=text("0"))
    last_visit = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

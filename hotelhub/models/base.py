from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All hotel tables (rooms, room_photos, guests, reservations) live in the
    hotelhub schema and inherit from this base.
    """

    pass

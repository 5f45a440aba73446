"""Create rooms, room_photos, guests and reservations

Revision ID: 3f1c9a7d2b44
Revises:
Create Date: 2025-11-03 10:12:31.402118

"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3f1c9a7d2b44"
down_revision = None
branch_labels = None
depends_on = None

SCHEMA = "hotelhub"

room_type = postgresql.ENUM("standard", "deluxe", "suite", name="room_type", schema=SCHEMA)
room_status = postgresql.ENUM(
    "available", "occupied", "cleaning", "maintenance", name="room_status", schema=SCHEMA
)
reservation_status = postgresql.ENUM(
    "pending",
    "confirmed",
    "checked-in",
    "checked-out",
    "cancelled",
    name="reservation_status",
    schema=SCHEMA,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # gen_random_uuid() and the room/date-range exclusion constraint
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    bind = op.get_bind()
    room_type.create(bind, checkfirst=True)
    room_status.create(bind, checkfirst=True)
    reservation_status.create(bind, checkfirst=True)

    op.create_table(
        "rooms",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("room_number", sa.String(), nullable=False, unique=True),
        sa.Column("room_type", postgresql.ENUM(name="room_type", schema=SCHEMA, create_type=False), nullable=False),
        sa.Column("price_per_night", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="room_status", schema=SCHEMA, create_type=False),
            nullable=False,
            server_default="available",
        ),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("price_per_night > 0", name="rooms_positive_price"),
        schema=SCHEMA,
    )

    op.create_table(
        "room_photos",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "room_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey(f"{SCHEMA}.rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("photo_url", sa.Text(), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_room_photos_room_id", "room_photos", ["room_id"], schema=SCHEMA)

    op.create_table(
        "guests",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("total_stays", sa.Integer(), nullable=True, server_default=sa.text("0")),
        sa.Column("last_visit", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        schema=SCHEMA,
    )
    op.create_index("ix_guests_email", "guests", ["email"], schema=SCHEMA)

    op.create_table(
        "reservations",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column(
            "room_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey(f"{SCHEMA}.rooms.id"),
            nullable=False,
        ),
        sa.Column(
            "guest_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey(f"{SCHEMA}.guests.id"),
            nullable=False,
        ),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="reservation_status", schema=SCHEMA, create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("check_out_date > check_in_date", name="reservations_valid_range"),
        schema=SCHEMA,
    )
    op.create_index("ix_reservations_room_id", "reservations", ["room_id"], schema=SCHEMA)
    op.create_index("ix_reservations_guest_id", "reservations", ["guest_id"], schema=SCHEMA)

    # Active reservations of one room may not share a night: [check_in, check_out)
    op.execute(
        f"""
        ALTER TABLE {SCHEMA}.reservations
        ADD CONSTRAINT reservations_no_overlap
        EXCLUDE USING gist (
            room_id WITH =,
            daterange(check_in_date, check_out_date, '[)') WITH &&
        )
        WHERE (status IN ('pending', 'confirmed', 'checked-in'))
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("reservations", schema=SCHEMA)
    op.drop_table("guests", schema=SCHEMA)
    op.drop_table("room_photos", schema=SCHEMA)
    op.drop_table("rooms", schema=SCHEMA)

    bind = op.get_bind()
    reservation_status.drop(bind, checkfirst=True)
    room_status.drop(bind, checkfirst=True)
    room_type.drop(bind, checkfirst=True)

"""
Shared fixtures for integration tests.

These tests need a PostgreSQL database migrated with `alembic upgrade head`.
They are skipped when the database is unreachable or the hotelhub schema has
not been created.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Generator

import pytest
from sqlalchemy import inspect, text

from hotelhub.config import SCHEMA
from hotelhub.db.engine import check_engine_health, engine
from hotelhub.db.store import SqlDataStore


def _schema_ready() -> bool:
    if not check_engine_health():
        return False
    return inspect(engine).has_table("rooms", schema=SCHEMA)


def pytest_collection_modifyitems(config: Any, items: list[Any]) -> None:
    integration_items = [item for item in items if "integration" in item.keywords]
    if not integration_items or _schema_ready():
        return
    skip = pytest.mark.skip(reason="PostgreSQL with a migrated hotelhub schema is not available")
    for item in integration_items:
        item.add_marker(skip)


@pytest.fixture
def sql_store() -> SqlDataStore:
    """Data store on the real engine."""
    return SqlDataStore(engine)


@pytest.fixture
def test_room(sql_store: SqlDataStore) -> Generator[dict[str, Any], None, None]:
    """
    Create a room with a unique number for one test.

    Reservations, photos and guests attached to it are removed afterwards.
    """
    room = sql_store.insert_room(
        {
            "room_number": f"T-{uuid.uuid4().hex[:8]}",
            "room_type": "standard",
            "price_per_night": Decimal("100.00"),
            "status": "available",
            "description": "integration test room",
        }
    )

    yield room

    with engine.begin() as conn:
        guest_ids = [
            row[0]
            for row in conn.execute(
                text(f"SELECT guest_id FROM {SCHEMA}.reservations WHERE room_id = :room_id"),
                {"room_id": room["id"]},
            )
        ]
        conn.execute(
            text(f"DELETE FROM {SCHEMA}.reservations WHERE room_id = :room_id"),
            {"room_id": room["id"]},
        )
        conn.execute(
            text(f"DELETE FROM {SCHEMA}.room_photos WHERE room_id = :room_id"),
            {"room_id": room["id"]},
        )
        conn.execute(text(f"DELETE FROM {SCHEMA}.rooms WHERE id = :id"), {"id": room["id"]})
        for guest_id in guest_ids:
            conn.execute(
                text(
                    f"DELETE FROM {SCHEMA}.guests g WHERE g.id = :id AND NOT EXISTS "
                    f"(SELECT 1 FROM {SCHEMA}.reservations r WHERE r.guest_id = g.id)"
                ),
                {"id": guest_id},
            )

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import argparse
from decimal import Decimal

from hotelhub.db.engine import engine
from hotelhub.db.store import SqlDataStore
from hotelhub.errors import DuplicateRoomNumber
from hotelhub.models.enums import RoomStatus, RoomType

# === DEMO INVENTORY ===

DEMO_ROOMS: list[dict[str, object]] = [
    {"room_number": "101", "room_type": RoomType.STANDARD, "price_per_night": Decimal("120")},
    {"room_number": "102", "room_type": RoomType.STANDARD, "price_per_night": Decimal("120")},
    {"room_number": "201", "room_type": RoomType.DELUXE, "price_per_night": Decimal("180")},
    {"room_number": "202", "room_type": RoomType.DELUXE, "price_per_night": Decimal("180")},
    {"room_number": "301", "room_type": RoomType.SUITE, "price_per_night": Decimal("320")},
]


def seed(dry_run: bool = False) -> None:
    store = SqlDataStore(engine)
    for demo in DEMO_ROOMS:
        room_type = demo["room_type"]
        assert isinstance(room_type, RoomType)
        data = {
            "room_number": demo["room_number"],
            "room_type": room_type.value,
            "price_per_night": demo["price_per_night"],
            "status": RoomStatus.AVAILABLE.value,
            "description": f"{room_type.value.title()} room {demo['room_number']}",
        }
        if dry_run:
            print(f"would insert {data}")
            continue
        try:
            store.insert_room(data)
            print(f"✅ Room {demo['room_number']} created")
        except DuplicateRoomNumber:
            print(f"⏭️  Room {demo['room_number']} already exists")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Insert the demo room inventory")
    parser.add_argument("--dry-run", action="store_true", help="Only print what would be inserted")
    args = parser.parse_args()
    seed(dry_run=args.dry_run)

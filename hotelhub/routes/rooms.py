"""
Room administration and availability endpoints.

Photo uploads go straight to blob storage from the client; these endpoints
only record and remove the attachment rows.
"""

from datetime import date
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status

from hotelhub.db.store import DataStore
from hotelhub.dependencies import get_data_store
from hotelhub.errors import InvalidDateRange, RoomNotFound
from hotelhub.models.enums import RoomStatus
from hotelhub.schemas.rooms import RoomCreatePayload, RoomPhotoPayload, RoomUpdatePayload
from hotelhub.services.availability import is_room_available
from hotelhub.services.room_status import reconcile_room_statuses

logger = structlog.get_logger(__name__)
router = APIRouter()


def _room_or_404(store: DataStore, room_id: str) -> dict[str, Any]:
    room = store.get_room(room_id)
    if room is None:
        raise RoomNotFound()
    return room


@router.post("/rooms", status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreatePayload,
    store: DataStore = Depends(get_data_store),
) -> dict[str, Any]:
    """
    Add a room. It starts out available.

    Returns:
        dict: The inserted room row
    """
    room = store.insert_room(
        {
            "room_number": payload.room_number.strip(),
            "room_type": payload.room_type.value,
            "price_per_night": payload.price_per_night,
            "status": RoomStatus.AVAILABLE.value,
            "description": payload.description,
        }
    )
    logger.info("room_created", room_id=str(room["id"]), room_number=room["room_number"])
    return room


@router.get("/rooms")
def list_rooms(
    status_filter: Optional[RoomStatus] = Query(None, alias="status"),
    store: DataStore = Depends(get_data_store),
) -> list[dict[str, Any]]:
    """List rooms ordered by room number, optionally only those with a given status."""
    return store.list_rooms(status=status_filter.value if status_filter else None)


@router.post("/rooms/reconcile-status")
def reconcile_status(
    day: Optional[date] = Query(None, description="Day to reconcile, defaults to today (UTC)"),
    store: DataStore = Depends(get_data_store),
) -> dict[str, Any]:
    """Mark rooms occupied where a reservation says they should be."""
    fixed = reconcile_room_statuses(store, day)
    return {"updated": fixed}


@router.get("/rooms/{room_id}")
def get_room(room_id: str, store: DataStore = Depends(get_data_store)) -> dict[str, Any]:
    """Return a room together with its photos, oldest first."""
    room = _room_or_404(store, room_id)
    return {**room, "photos": store.list_room_photos(room_id)}


@router.patch("/rooms/{room_id}")
def update_room(
    room_id: str,
    payload: RoomUpdatePayload,
    store: DataStore = Depends(get_data_store),
) -> dict[str, Any]:
    """Edit room fields or set its status."""
    update_data = {
        key: value.value if hasattr(value, "value") else value
        for key, value in payload.model_dump().items()
        if value is not None
    }
    if not update_data:
        return {"message": "No fields to update"}

    if not store.update_room(room_id, update_data):
        raise RoomNotFound()

    logger.info("room_updated", room_id=room_id, fields=sorted(update_data))
    return {"message": f"Room {room_id} updated successfully"}


@router.get("/rooms/{room_id}/availability")
def room_availability(
    room_id: str,
    check_in: date = Query(..., alias="checkIn"),
    check_out: date = Query(..., alias="checkOut"),
    store: DataStore = Depends(get_data_store),
) -> dict[str, Any]:
    """
    Tell whether a room is free for [checkIn, checkOut).

    A database failure is reported as unavailable.
    """
    if check_out <= check_in:
        raise InvalidDateRange()
    _room_or_404(store, room_id)
    return {
        "roomId": room_id,
        "checkInDate": check_in.isoformat(),
        "checkOutDate": check_out.isoformat(),
        "available": is_room_available(store, room_id, check_in, check_out),
    }


@router.post("/rooms/{room_id}/photos", status_code=status.HTTP_201_CREATED)
def add_room_photo(
    room_id: str,
    payload: RoomPhotoPayload,
    store: DataStore = Depends(get_data_store),
) -> dict[str, Any]:
    _room_or_404(store, room_id)
    return store.insert_room_photo(room_id, payload.photo_url, payload.file_path)


@router.delete("/rooms/{room_id}/photos/{photo_id}")
def delete_room_photo(
    room_id: str,
    photo_id: str,
    store: DataStore = Depends(get_data_store),
) -> dict[str, str]:
    _room_or_404(store, room_id)
    if not store.delete_room_photo(photo_id):
        return {"message": "Photo already removed"}
    return {"message": f"Photo {photo_id} removed"}

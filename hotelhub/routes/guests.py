from typing import Any

import structlog
from fastapi import APIRouter, Depends, status

from hotelhub.db.store import DataStore
from hotelhub.dependencies import get_data_store
from hotelhub.schemas.guests import GuestCreatePayload

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/guests")
def list_guests(store: DataStore = Depends(get_data_store)) -> list[dict[str, Any]]:
    """List guests ordered by name."""
    return store.list_guests()


@router.post("/guests", status_code=status.HTTP_201_CREATED)
def create_guest(
    payload: GuestCreatePayload,
    store: DataStore = Depends(get_data_store),
) -> dict[str, str]:
    """
    Register a guest from the front desk.

    Unlike booking, this always inserts: staff may add a second profile for
    an email that is already on file.
    """
    guest_id = store.insert_guest(
        payload.name.strip(),
        email=payload.email or None,
        phone=payload.phone or None,
    )
    logger.info("guest_registered", guest_id=guest_id)
    return {"id": guest_id}

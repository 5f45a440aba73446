"""Staff reservation endpoints: booking, listing and stay transitions."""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from hotelhub.db.store import DataStore
from hotelhub.dependencies import get_data_store
from hotelhub.models.enums import ReservationStatus
from hotelhub.schemas.bookings import BookingPayload
from hotelhub.services.booking import BookingOutcome, book_reservation
from hotelhub.services.stays import (
    cancel_reservation,
    check_in_reservation,
    check_out_reservation,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


def booking_response(outcome: BookingOutcome) -> JSONResponse:
    """
    Render a booking outcome as {success, reservationId?, error?}.

    201 on commit, otherwise the status code of the error.
    """
    if outcome.success:
        return JSONResponse(status_code=status.HTTP_201_CREATED, content=outcome.to_result())
    status_code = outcome.error.status_code if outcome.error is not None else 500
    return JSONResponse(status_code=status_code, content=outcome.to_result())


@router.post("/reservations", status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: BookingPayload,
    store: DataStore = Depends(get_data_store),
) -> JSONResponse:
    """
    Book a room from the staff reservation form.

    Args:
        payload: Booking input contract
        store: Data store

    Returns:
        JSONResponse: {"success": true, "reservationId": ...} or
        {"success": false, "error": ...}
    """
    outcome = book_reservation(store, payload.to_request(), channel="staff")
    return booking_response(outcome)


@router.get("/reservations")
def list_reservations(
    room_id: Optional[str] = Query(None, description="Only reservations for this room"),
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    store: DataStore = Depends(get_data_store),
) -> list[dict[str, Any]]:
    """List reservations ordered by check-in date."""
    return store.list_reservations(
        room_id=room_id,
        status=status_filter.value if status_filter else None,
    )


@router.post("/reservations/{reservation_id}/check-in")
def check_in(reservation_id: str, store: DataStore = Depends(get_data_store)) -> dict[str, Any]:
    return check_in_reservation(store, reservation_id)


@router.post("/reservations/{reservation_id}/check-out")
def check_out(reservation_id: str, store: DataStore = Depends(get_data_store)) -> dict[str, Any]:
    return check_out_reservation(store, reservation_id)


@router.post("/reservations/{reservation_id}/cancel")
def cancel(reservation_id: str, store: DataStore = Depends(get_data_store)) -> dict[str, Any]:
    return cancel_reservation(store, reservation_id)

"""
Endpoints used by the voice agent page and the agent's booking tool.

GET /agent/hotel-data is only served while a paid payment session is active.
POST /agent/reservations accepts whatever the agent emitted (tool call
parameters, a JSON string or text containing JSON).
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from hotelhub import config
from hotelhub.db.store import DataStore
from hotelhub.dependencies import get_data_store, get_payment_session_gate
from hotelhub.errors import ConfigurationMissing, PaymentSessionRequired
from hotelhub.models.enums import RoomStatus
from hotelhub.routes.reservations import booking_response
from hotelhub.services.agent_booking import book_from_agent
from hotelhub.services.payment_session import PaymentSessionGate

logger = structlog.get_logger(__name__)
router = APIRouter()

HOTEL_POLICIES = {
    "cancellationDeadline": "24 hours before check-in",
    "minStay": 1,
}


@router.get("/hotel-data")
def hotel_data(
    store: DataStore = Depends(get_data_store),
    gate: PaymentSessionGate = Depends(get_payment_session_gate),
) -> dict[str, Any]:
    """
    Context handed to the voice agent when a call starts.

    Raises:
        PaymentSessionRequired: No valid payment session (402)
        ConfigurationMissing: VOICE_AGENT_ID is not set (500)
    """
    if not gate.is_valid():
        raise PaymentSessionRequired()
    if not config.VOICE_AGENT_ID:
        raise ConfigurationMissing("Voice agent id not configured")

    rooms = store.list_rooms(status=RoomStatus.AVAILABLE.value)
    return {
        "agentId": config.VOICE_AGENT_ID,
        "hotelName": config.HOTEL_NAME,
        "rooms": rooms,
        "checkInTime": config.CHECK_IN_TIME,
        "checkOutTime": config.CHECK_OUT_TIME,
        "policies": HOTEL_POLICIES,
        "sessionRemaining": gate.format_remaining(),
    }


@router.post("/reservations")
async def agent_reservation(
    request: Request,
    store: DataStore = Depends(get_data_store),
) -> JSONResponse:
    """
    Book a room from an agent tool call.

    Returns:
        JSONResponse: {"success": true, "reservationId": ...} (201) or
        {"success": false, "error": ...}
    """
    body = await request.body()
    try:
        raw: Any = await request.json()
    except ValueError:
        raw = body.decode("utf-8", errors="replace")

    outcome = await run_in_threadpool(book_from_agent, store, raw)
    return booking_response(outcome)

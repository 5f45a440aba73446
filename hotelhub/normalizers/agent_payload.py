"""
Normalisation of voice agent reservation payloads.

The voice agent reports a booking either through a tool call or as free text
containing JSON, with field names that drift between camelCase and
snake_case. extract_reservation_payload() finds the reservation object inside
whatever envelope arrived and normalize_agent_reservation() maps it onto the
booking input contract.
"""

import json
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import structlog
from dateutil import parser as date_parser

logger = structlog.get_logger(__name__)

FIELD_ALIASES: Dict[str, tuple[str, ...]] = {
    "guestName": ("guestName", "guest_name", "name", "fullName", "full_name"),
    "guestEmail": ("guestEmail", "guest_email", "email"),
    "guestPhone": ("guestPhone", "guest_phone", "phone", "phoneNumber", "phone_number"),
    "roomId": ("roomId", "room_id", "room", "roomNumber", "room_number"),
    "roomType": ("roomType", "room_type", "category"),
    "checkInDate": ("checkInDate", "check_in_date", "checkIn", "check_in", "arrival"),
    "checkOutDate": ("checkOutDate", "check_out_date", "checkOut", "check_out", "departure"),
    "specialRequests": ("specialRequests", "special_requests", "notes", "requests"),
    "totalAmount": ("totalAmount", "total_amount", "total", "price"),
}

_ENVELOPE_KEYS = ("parameters", "arguments", "params")


def _loads(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    # Free text around a JSON object: take the outermost braces.
    start, end = raw.find("{"), raw.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        return json.loads(raw[start : end + 1])
    except json.JSONDecodeError:
        return None


def extract_reservation_payload(raw: Any) -> Optional[Dict[str, Any]]:
    """
    Find the reservation object in an agent message.

    Accepted shapes:
        {"reservation": {...}}
        {"data": {"reservation": {...}}}
        {"parameters": {...}} / {"tool_call": {"parameters": {...}}}
        a JSON string (or text containing JSON) of any of the above
        a bare reservation object

    Returns:
        Optional[Dict[str, Any]]: The reservation fields, or None if nothing
        usable was found
    """
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        raw = _loads(raw)
    if not isinstance(raw, dict):
        logger.warning("agent_payload_unrecognised", payload_type=type(raw).__name__)
        return None

    if isinstance(raw.get("reservation"), dict):
        return raw["reservation"]

    data = raw.get("data")
    if isinstance(data, dict) and isinstance(data.get("reservation"), dict):
        return data["reservation"]

    tool_call = raw.get("tool_call") or raw.get("toolCall")
    if isinstance(tool_call, dict):
        return extract_reservation_payload(tool_call)

    for key in _ENVELOPE_KEYS:
        value = raw.get(key)
        if isinstance(value, str):
            value = _loads(value)
        if isinstance(value, dict):
            return extract_reservation_payload(value)

    if any(alias in raw for aliases in FIELD_ALIASES.values() for alias in aliases):
        return raw

    logger.warning("agent_payload_without_reservation", keys=sorted(raw.keys()))
    return None


def _pick(payload: Dict[str, Any], field: str) -> Any:
    for alias in FIELD_ALIASES[field]:
        value = payload.get(alias)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _iso_date(value: Any) -> Optional[str]:
    """
    Coerce a spoken or written date to YYYY-MM-DD.

    Values that cannot be parsed are passed through unchanged so that booking
    validation reports them.
    """
    text = _text(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        pass
    try:
        return date_parser.parse(text).date().isoformat()
    except (ValueError, OverflowError):
        return text


def _amount(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip().lstrip("$").replace(",", "")
    if not text:
        return None
    try:
        amount = Decimal(text)
    except InvalidOperation:
        logger.warning("agent_total_unparseable", value=str(value))
        return None
    if not amount.is_finite():
        logger.warning("agent_total_not_finite", value=str(value))
        return None
    return amount if amount > 0 else None


def normalize_agent_reservation(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map an agent reservation object onto the booking input contract.

    Args:
        payload: Reservation fields as sent by the agent

    Returns:
        Dict[str, Any]: Booking input (guestName, guestEmail, guestPhone,
        roomId, checkInDate, checkOutDate, specialRequests, totalAmount) plus
        the roomType hint used for room matching. Absent fields are None.

    Example:
        >>> normalize_agent_reservation({"guest_name": "Ana", "check_in": "Jan 10 2024"})["checkInDate"]
        '2024-01-10'
    """
    return {
        "guestName": _text(_pick(payload, "guestName")),
        "guestEmail": _text(_pick(payload, "guestEmail")),
        "guestPhone": _text(_pick(payload, "guestPhone")),
        "roomId": _text(_pick(payload, "roomId")),
        "roomType": _text(_pick(payload, "roomType")),
        "checkInDate": _iso_date(_pick(payload, "checkInDate")),
        "checkOutDate": _iso_date(_pick(payload, "checkOutDate")),
        "specialRequests": _text(_pick(payload, "specialRequests")),
        "totalAmount": _amount(_pick(payload, "totalAmount")),
    }

"""Guest resolution for new bookings."""

from __future__ import annotations

from typing import Optional

import structlog

from hotelhub.db.store import DataStore

logger = structlog.get_logger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_guest(
    store: DataStore,
    name: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> str:
    """
    Map guest details to a single guest id, reusing an existing guest when possible.

    Email is the only deduplication key. When an email is given and a guest
    with exactly that email exists, its id is returned and the stored record is
    left untouched (even if name or phone differ). Otherwise a new guest is
    inserted. Without an email a new guest is always created.

    Args:
        store: Data store
        name: Guest name (required)
        email: Optional email address
        phone: Optional phone number

    Returns:
        str: Guest id

    Raises:
        DataUnavailable: If the lookup or the insert fails. Nothing is retried.
    """
    email = _clean(email)
    phone = _clean(phone)

    if email:
        existing = store.find_guest_by_email(email)
        if existing:
            logger.info("guest_reused", guest_id=str(existing["id"]), email=email)
            return str(existing["id"])
        guest_id = store.insert_guest(name, email=email, phone=phone)
    else:
        guest_id = store.insert_guest(name, phone=phone)

    logger.info("guest_created", guest_id=guest_id, email=email, phone=phone)
    return guest_id

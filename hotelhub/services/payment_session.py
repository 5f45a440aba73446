"""
Payment session gate.

After the payment gateway reports a paid checkout, a PaymentSession record is
stored and consulted to unlock the voice agent. The record lives in an
injected SessionStore (in memory for tests, a JSON file for durable local
storage) and expires after a fixed window.

This gate trusts whatever the store holds. It is an access convenience for a
low-stakes product, not a security boundary.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Optional, Protocol

import structlog

from hotelhub.utils.datetime import from_epoch_ms, to_epoch_ms, utc_now

logger = structlog.get_logger(__name__)

PAYMENT_SESSION_KEY = "santa_payment_session"
DEFAULT_SESSION_TTL = timedelta(hours=24)


class SessionStore(Protocol):
    """A single keyed record with get / set / clear."""

    def get(self) -> Optional[dict[str, Any]]: ...

    def set(self, record: dict[str, Any]) -> None: ...

    def clear(self) -> None: ...


class InMemorySessionStore:
    def __init__(self) -> None:
        self._record: Optional[dict[str, Any]] = None

    def get(self) -> Optional[dict[str, Any]]:
        return dict(self._record) if self._record is not None else None

    def set(self, record: dict[str, Any]) -> None:
        self._record = dict(record)

    def clear(self) -> None:
        self._record = None


class JsonFileSessionStore:
    """
    Keeps the record in a JSON file under PAYMENT_SESSION_KEY.

    A missing or unreadable file reads as "no session".
    """

    def __init__(self, path: str | os.PathLike[str], key: str = PAYMENT_SESSION_KEY) -> None:
        self.path = Path(path)
        self.key = key

    def _load(self) -> dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("payment_session_file_unreadable", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def get(self) -> Optional[dict[str, Any]]:
        record = self._load().get(self.key)
        return record if isinstance(record, dict) else None

    def set(self, record: dict[str, Any]) -> None:
        data = self._load()
        data[self.key] = record
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f)

    def clear(self) -> None:
        data = self._load()
        if self.key not in data:
            return
        del data[self.key]
        if data:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f)
        else:
            self.path.unlink(missing_ok=True)


@dataclass
class PaymentSession:
    session_id: str
    timestamp: int
    paid: bool
    expires_at: int

    def to_record(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "timestamp": self.timestamp,
            "paid": self.paid,
            "expiresAt": self.expires_at,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "PaymentSession":
        return cls(
            session_id=str(record["sessionId"]),
            timestamp=int(record["timestamp"]),
            paid=bool(record["paid"]),
            expires_at=int(record["expiresAt"]),
        )


class PaymentSessionGate:
    """
    Create, read and expire the payment session.

    Example:
        >>> gate = PaymentSessionGate(InMemorySessionStore())
        >>> session = gate.create("cs_test_123")
        >>> gate.is_valid()
        True
    """

    def __init__(
        self,
        store: SessionStore,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.ttl = ttl
        self.clock = clock

    def create(self, session_id: str) -> PaymentSession:
        now = self.clock()
        session = PaymentSession(
            session_id=session_id,
            timestamp=to_epoch_ms(now),
            paid=True,
            expires_at=to_epoch_ms(now + self.ttl),
        )
        self.store.set(session.to_record())
        logger.info("payment_session_created", expires_at=from_epoch_ms(session.expires_at).isoformat())
        return session

    def read(self) -> Optional[PaymentSession]:
        """Return the stored session, or None if absent, malformed or expired."""
        record = self.store.get()
        if record is None:
            return None

        try:
            session = PaymentSession.from_record(record)
        except (KeyError, TypeError, ValueError):
            logger.warning("payment_session_malformed")
            return None

        if to_epoch_ms(self.clock()) > session.expires_at:
            logger.info("payment_session_expired")
            self.clear()
            return None
        return session

    def is_valid(self) -> bool:
        session = self.read()
        return session is not None and session.paid is True

    def clear(self) -> None:
        self.store.clear()

    def remaining_seconds(self) -> int:
        session = self.read()
        if session is None:
            return 0
        remaining_ms = session.expires_at - to_epoch_ms(self.clock())
        return max(0, remaining_ms // 1000)

    def format_remaining(self) -> str:
        """Human-readable time left, e.g. "23h 59m", "45m" or "Expired"."""
        seconds = self.remaining_seconds()
        if seconds == 0:
            return "Expired"

        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

"""
FastAPI dependency injection providers.

Routes receive the data store, the payment gateway and the payment session
gate through these providers. Tests replace them with in-memory fakes using
app.dependency_overrides.

Example:
    >>> app.dependency_overrides[get_data_store] = lambda: fake_store
    >>> client = TestClient(app)
    >>> client.post("/reservations", json={...})
"""

from __future__ import annotations

from datetime import timedelta
from typing import Generator, Optional

from fastapi import Depends
from sqlalchemy.engine import Engine

from hotelhub.config import PAYMENT_SESSION_PATH, PAYMENT_SESSION_TTL_HOURS
from hotelhub.db.engine import engine
from hotelhub.db.store import DataStore, SqlDataStore
from hotelhub.payments.stripe_gateway import StripeGateway
from hotelhub.services.payment_session import JsonFileSessionStore, PaymentSessionGate

_payment_session_gate: Optional[PaymentSessionGate] = None


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine
    """
    yield engine


def get_data_store(db_engine: Engine = Depends(get_db_engine)) -> DataStore:
    """Provide the SQL-backed data store used by the booking services."""
    return SqlDataStore(db_engine)


def get_payment_gateway() -> StripeGateway:
    """Provide a Stripe gateway using STRIPE_SECRET_KEY."""
    return StripeGateway()


def get_payment_session_gate() -> PaymentSessionGate:
    """
    Provide the process-wide payment session gate.

    The session record is kept in the JSON file at PAYMENT_SESSION_PATH and
    expires after PAYMENT_SESSION_TTL_HOURS.
    """
    global _payment_session_gate
    if _payment_session_gate is None:
        _payment_session_gate = PaymentSessionGate(
            JsonFileSessionStore(PAYMENT_SESSION_PATH),
            ttl=timedelta(hours=PAYMENT_SESSION_TTL_HOURS),
        )
    return _payment_session_gate

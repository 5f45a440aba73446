"""
Prometheus scrape endpoint.

Exposes the booking, room status, database and payment metrics defined in
hotelhub.metrics together with the default process collectors.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
def metrics() -> Any:
    """
    Return all registered metrics in the Prometheus text format.

    Example Response:
        # HELP hotelhub_booking_attempts_total Total number of booking attempts by terminal state
        # TYPE hotelhub_booking_attempts_total counter
        hotelhub_booking_attempts_total{channel="agent",outcome="committed"} 7.0
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

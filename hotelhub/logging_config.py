from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, cast

import structlog

from hotelhub.config import DEBUG, LOG_LEVEL

# Type alias for structlog processor
Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

CONTACT_KEYS = ("email", "guest_email", "phone", "guest_phone")


def _mask_email(value: str) -> str:
    local, sep, domain = value.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def _mask_phone(value: str) -> str:
    digits = [c for c in value if c.isdigit()]
    return f"***{''.join(digits[-4:])}" if len(digits) > 4 else "***"


def mask_contact_details(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """
    Mask guest emails and phone numbers before an event is rendered.

    Example:
        >>> mask_contact_details(None, "info", {"email": "ana@example.com"})
        {'email': 'a***@example.com'}
    """
    for key in CONTACT_KEYS:
        value = event_dict.get(key)
        if not isinstance(value, str):
            continue
        event_dict[key] = _mask_email(value) if "email" in key else _mask_phone(value)
    return event_dict


def setup_logging() -> None:
    """
    Configures structured logging globally using structlog.

    In production (LOG_LEVEL=INFO): Outputs JSON for log aggregation
    In development (LOG_LEVEL=DEBUG): Outputs human-readable console format

    Request-scoped values bound with structlog.contextvars (the request ID set by
    RequestIDMiddleware) are merged into every event, and guest contact details
    are masked in every renderer.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s:%(lineno)d: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )

    for noisy_logger in ["stripe", "sqlalchemy.engine", "uvicorn.access"]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, mask_contact_details),
    ]
    if DEBUG:
        processors.append(cast(Processor, structlog.dev.ConsoleRenderer(colors=True)))
    else:
        # booking_crashed and unhandled_error carry tracebacks
        processors.append(cast(Processor, structlog.processors.format_exc_info))
        processors.append(cast(Processor, structlog.processors.JSONRenderer()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

"""
Prometheus metrics for monitoring bookings, database operations and payments.

This module defines all Prometheus metrics used throughout the application.
Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from hotelhub.metrics import booking_attempts, booking_duration
    >>> with booking_duration.labels(channel="agent").time():
    ...     outcome = book_reservation(store, request)
    >>> booking_attempts.labels(channel="agent", outcome=outcome.state.value).inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Booking Metrics
# =============================================================================

booking_attempts = Counter(
    "hotelhub_booking_attempts_total",
    "Total number of booking attempts by terminal state",
    ["channel", "outcome"],
)
"""
Counter for booking attempts.

Labels:
    channel: Where the booking came from (staff, agent)
    outcome: Terminal state (committed, rejected, failed)
"""

booking_rejections = Counter(
    "hotelhub_booking_rejections_total",
    "Booking attempts that ended without a reservation, by error code",
    ["channel", "reason"],
)
"""
Counter for rejected or failed bookings.

Labels:
    channel: staff or agent
    reason: Error code (missing_field, invalid_date_range, room_unavailable, ...)
"""

booking_duration = Histogram(
    "hotelhub_booking_duration_seconds",
    "Duration of a booking attempt in seconds",
    ["channel"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
)

# =============================================================================
# Room Status Metrics
# =============================================================================

room_status_updates = Counter(
    "hotelhub_room_status_updates_total",
    "Best-effort room status updates",
    ["status", "result"],
)
"""
Counter for room status side effects.

Labels:
    status: Target room status (occupied, cleaning, ...)
    result: success or failure
"""

# =============================================================================
# Database Metrics
# =============================================================================

db_operations = Counter(
    "hotelhub_db_operations_total",
    "Total database operations performed",
    ["operation", "table"],
)
"""
Counter for database operations.

Labels:
    operation: Type of operation (insert, update, select, delete)
    table: Database table name (rooms, room_photos, guests, reservations)
"""

db_errors = Counter(
    "hotelhub_db_errors_total",
    "Database operations that raised and were surfaced as DataUnavailable",
    ["operation", "table"],
)

db_query_duration = Histogram(
    "hotelhub_db_query_duration_seconds",
    "Database query execution time in seconds",
    ["operation"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, float("inf")),
)

# =============================================================================
# Payment Metrics
# =============================================================================

payment_requests = Counter(
    "hotelhub_payment_requests_total",
    "Calls made to the payment gateway",
    ["operation", "status"],
)
"""
Counter for payment gateway calls.

Labels:
    operation: create_checkout_session or verify_payment
    status: success, unpaid or error
"""

"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'hotel_booking_attempts_total',
    'Booking operations by outcome',
    ['operation', 'outcome']  # get/create/update; success, not_found, forbidden
)

booking_latency = Histogram(
    'hotel_booking_latency_seconds',
    'Booking operation latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Store-level uniqueness violations (two writers raced for one room)
room_conflicts = Counter(
    'hotel_booking_room_conflicts_total',
    'Writes rejected by the room uniqueness constraint'
)

# Cache metrics
cache_operations = Counter(
    'hotel_booking_cache_operations_total',
    'Booking view cache operations',
    ['operation', 'result']  # get/set/delete, hit/miss/ok/error
)

redis_connection_errors = Counter(
    'hotel_booking_redis_connection_errors_total',
    'Redis connection errors'
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(operation: str, outcome: str):
    """Record a booking operation. Outcome: success, not_found, forbidden, error"""
    booking_attempts.labels(operation=operation, outcome=outcome).inc()


def record_room_conflict():
    room_conflicts.inc()


def record_cache_operation(operation: str, result: str):
    cache_operations.labels(operation=operation, result=result).inc()

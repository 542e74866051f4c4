"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

settlements_total = Counter(
    'settlements_total',
    'Settlement attempts by terminal outcome',
    ['outcome', 'reason'],
    registry=registry
)

settlements_ignored = Counter(
    'settlements_ignored_total',
    'Pay actions ignored because a submission was already in flight',
    registry=registry
)

settlement_duration = Histogram(
    'settlement_duration_seconds',
    'Time spent in the submitting phase',
    ['outcome'],
    registry=registry
)

quote_cache_hits = Counter(
    'quote_cache_hits_total',
    'Total cost quote cache hits',
    registry=registry
)

quote_cache_misses = Counter(
    'quote_cache_misses_total',
    'Total cost quote cache misses',
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)

db_connected = Gauge(
    'db_connected',
    'Database connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    from prometheus_client import generate_latest
    return generate_latest(registry).decode('utf-8')

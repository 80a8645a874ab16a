"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_generated_total = Counter(
    "licenses_generated_total",
    "Total licenses generated",
    ["license_type"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["outcome"],
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total first-time device bindings",
)

licenses_expired_total = Counter(
    "licenses_expired_total",
    "Total licenses transitioned to expired",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked",
)

licenses_reset_total = Counter(
    "licenses_reset_total",
    "Total licenses reset to unused",
)

licenses_deleted_total = Counter(
    "licenses_deleted_total",
    "Total licenses deleted",
)

license_key_collisions_total = Counter(
    "license_key_collisions_total",
    "Generated license keys that collided with an existing key",
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

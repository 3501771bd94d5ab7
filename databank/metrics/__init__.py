# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the physician databank service."""
from prometheus_client import Counter, Gauge, Histogram

PHYSICIANS_CREATED = Counter(
    "physicians_created_total", "Total physician records created"
)
PHYSICIANS_UPDATED = Counter(
    "physicians_updated_total", "Total successful physician updates"
)
PHYSICIANS_DELETED = Counter(
    "physicians_deleted_total", "Total physician records deleted"
)
UPDATE_REJECTIONS = Counter(
    "physician_update_rejections_total",
    "Updates rejected by the optimistic-concurrency check",
    ["reason"],
)
PHYSICIANS_TOTAL = Gauge(
    "physicians_total", "Physician records currently stored"
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)

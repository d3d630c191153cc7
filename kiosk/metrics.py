"""
Prometheus metric definitions.

Shared by the request hooks in kiosk.blueprints.metrics and by the services
that count business outcomes.
"""
import os
from prometheus_client import Counter, Histogram, Gauge, REGISTRY

# Gunicorn with several workers writes samples to PROMETHEUS_MULTIPROC_DIR
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None

METRIC_REGISTRY = None if MULTIPROCESS_MODE else REGISTRY

http_requests_total = Counter(
    'kiosk_http_requests_total',
    'HTTP requests served',
    ['method', 'endpoint', 'http_status'],
    registry=METRIC_REGISTRY
)

http_request_duration_seconds = Histogram(
    'kiosk_http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    registry=METRIC_REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0)
)

http_requests_in_flight = Gauge(
    'kiosk_http_requests_in_flight',
    'HTTP requests being processed',
    registry=METRIC_REGISTRY,
    multiprocess_mode='livesum'
)

sales_created_total = Counter(
    'kiosk_sales_created_total',
    'Sales committed',
    ['payment'],
    registry=METRIC_REGISTRY
)

sale_failures_total = Counter(
    'kiosk_sale_failures_total',
    'Sale attempts rolled back, by error kind',
    ['reason'],
    registry=METRIC_REGISTRY
)

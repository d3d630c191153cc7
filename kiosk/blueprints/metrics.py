"""
Prometheus metrics blueprint.

HTTP traffic is recorded per endpoint. /metrics is unauthenticated and
should only be reachable from the monitoring network.
"""
from flask import Blueprint, Response, request, g
from prometheus_client import generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess, REGISTRY
import time
from kiosk.metrics import (
    MULTIPROCESS_MODE, http_requests_total, http_request_duration_seconds, http_requests_in_flight
)

metrics_bp = Blueprint('metrics', __name__)

UNTRACKED_ENDPOINTS = {'metrics.metrics', 'static'}


def _tracked():
    return request.endpoint not in UNTRACKED_ENDPOINTS


def setup_metrics_instrumentation(app):
    """Hook request timing and counting into the app."""

    @app.before_request
    def start_request_timer():
        if _tracked():
            g.metrics_started_at = time.perf_counter()
            http_requests_in_flight.inc()

    @app.after_request
    def record_request(response):
        started_at = g.get('metrics_started_at')
        if started_at is not None:
            endpoint = request.endpoint or 'unknown'
            http_request_duration_seconds.labels(
                method=request.method, endpoint=endpoint
            ).observe(time.perf_counter() - started_at)
            http_requests_total.labels(
                method=request.method, endpoint=endpoint, http_status=response.status_code
            ).inc()
        return response

    @app.teardown_request
    def finish_request(exception=None):
        # Runs even when the view raised, unlike after_request
        if g.pop('metrics_started_at', None) is not None:
            http_requests_in_flight.dec()


@metrics_bp.route('/metrics')
def metrics():
    """Prometheus text exposition of every registered metric."""
    if MULTIPROCESS_MODE:
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        data = generate_latest(registry)
    else:
        data = generate_latest(REGISTRY)

    return Response(data, mimetype=CONTENT_TYPE_LATEST)

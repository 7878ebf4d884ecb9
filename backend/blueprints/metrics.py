"""Prometheus metrics endpoint and request/search instrumentation (optional)."""

from __future__ import annotations

import hmac
import time

from flask import Blueprint, Response, abort, g, request
from loguru import logger

import config

bp = Blueprint("metrics", __name__)

METRICS_KEY_HEADER = "X-CATALOG-SEARCH-METRICS-KEY"

# Created on first use; the default registry is process-local.
_METRICS: dict = {}


def _is_enabled() -> bool:
    return bool(config.settings.web.enable_metrics)


def _check_key() -> None:
    key = (config.settings.web.metrics_key or "").strip()
    if not key:
        return

    provided = (request.headers.get(METRICS_KEY_HEADER) or "").strip()
    if not hmac.compare_digest(provided, key):
        abort(403)


def _get_metrics() -> dict:
    if not _METRICS:
        from prometheus_client import Counter, Histogram

        _METRICS["requests_total"] = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
        )
        _METRICS["request_seconds"] = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
        )
        _METRICS["search_results"] = Histogram(
            "catalog_search_results",
            "Products matched per search request",
            buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
        )
    return _METRICS


@bp.route("/metrics", methods=["GET"])
def metrics():
    if not _is_enabled():
        abort(404)
    _check_key()

    try:
        from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

        _get_metrics()
        data = generate_latest()
        return Response(data, mimetype=CONTENT_TYPE_LATEST)
    except Exception:
        logger.opt(exception=True).warning("Failed to generate Prometheus metrics")
        abort(503)


def observe_search(results_found: int) -> None:
    """Record how many products a search matched (only when metrics are enabled)."""
    if not _is_enabled():
        return
    try:
        _get_metrics()["search_results"].observe(results_found)
    except Exception:
        logger.opt(exception=True).debug("Failed to record search metric")


def before_request_hook() -> None:
    """Record request start time (only when metrics are enabled)."""
    if not _is_enabled():
        return
    g._metrics_start_time = time.perf_counter()


def after_request_hook(response):
    """Update request counters/histograms (only when metrics are enabled)."""
    if not _is_enabled():
        return response

    start = getattr(g, "_metrics_start_time", None)
    if start is None:
        return response

    try:
        duration = max(0.0, time.perf_counter() - start)
        endpoint = request.endpoint or "unknown"
        method = request.method or "UNKNOWN"
        status = str(response.status_code or 0)

        m = _get_metrics()
        m["requests_total"].labels(method=method, endpoint=endpoint, status=status).inc()
        m["request_seconds"].labels(method=method, endpoint=endpoint).observe(duration)
    except Exception:
        # Metrics failures never break responses.
        logger.opt(exception=True).debug("Failed to record request metrics")

    return response

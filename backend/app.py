"""Flask application factory."""

from __future__ import annotations

import logging
import sys

from flask import Flask, request
from loguru import logger
from werkzeug.exceptions import HTTPException

from config import Settings, settings

from .blueprints import api_products, metrics, web
from .services.api_helpers import STORE_EXTENSION_KEY, api_error
from .services.catalog_store import CatalogStore, SqliteCatalogStore
from .utils.errors import ApiError

LOG_FILE_NAME = "catalog_search.log"


def configure_logging(s: Settings) -> None:
    """Replace loguru sinks with stdout and, when enabled, a rotating file in `log_dir`."""
    logger.remove()
    serialize = str(getattr(s, "log_format", "text") or "text").strip().lower() == "json"
    level = s.log_level.upper()
    logger.add(sys.stdout, level=level, serialize=serialize)
    if s.log_to_file:
        s.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(s.log_dir / LOG_FILE_NAME, level=level, serialize=serialize, rotation="10 MB", retention=5)


configure_logging(settings)

if not settings.access_log:
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ApiError)
    def _handle_api_error(err: ApiError):
        if err.status >= 500:
            logger.error(f"{request.method} {request.path} failed: {err.message}")
        return api_error(err.message, err.status)

    @app.errorhandler(404)
    def _handle_404(_err):
        return api_error("Not Found", 404)

    @app.errorhandler(405)
    def _handle_405(_err):
        return api_error("Method Not Allowed", 405)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(err: HTTPException):
        return api_error(err.name, err.code or 500)

    @app.errorhandler(Exception)
    def _handle_unexpected(err: Exception):
        logger.opt(exception=err).error(f"Unhandled error on {request.method} {request.path}")
        return api_error("Internal Server Error", 500)


def create_app(catalog_store: CatalogStore | None = None) -> Flask:
    """Build the app; the catalog store defaults to the SQLite catalog in `data_dir`."""
    app = Flask(__name__)
    app.json.sort_keys = False

    # Optional Sentry error reporting (no-op unless configured).
    from config.sentry import initialize_sentry

    initialize_sentry()

    app.config.update(MAX_CONTENT_LENGTH=settings.web.max_content_length)

    # Initialize Swagger/OpenAPI documentation (disabled by default)
    if settings.enable_swagger:
        try:
            from flasgger import Swagger

            app.config["SWAGGER"] = {
                "title": "Catalog Search API",
                "uiversion": 3,
                "description": "Product search, listing and detail endpoints",
                "version": "1.0.0",
                "specs_route": "/apidocs/",
            }
            Swagger(app)
        except ImportError:
            logger.warning("flasgger not installed, Swagger UI disabled")

    app.extensions[STORE_EXTENSION_KEY] = catalog_store if catalog_store is not None else SqliteCatalogStore()

    _register_error_handlers(app)

    @app.after_request
    def add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        # API responses are never cached.
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    app.register_blueprint(web.bp)
    app.register_blueprint(api_products.bp)
    app.register_blueprint(metrics.bp)

    # Prometheus request metrics (no-op unless enabled).
    app.before_request(metrics.before_request_hook)
    app.after_request(metrics.after_request_hook)

    return app

"""Blueprint modules for app routes."""

from . import api_products, metrics, web

__all__ = ["api_products", "metrics", "web"]

"""Backend package for the catalog search Flask app.

The main entry point is `create_app()` from `backend.app`.

Modules:
- app: Flask application factory
- blueprints/: Route handlers organized by feature
- schemas/: Pydantic models for catalog documents and query parameters
- services/: Search engine, catalog browsing and store implementations
- utils/: Text normalization, pagination, error types
"""

from .app import create_app

__all__ = ["create_app"]

"""Test package for catalog-search.

This package contains tests organized into two categories:

- **unit/**: Unit tests for individual functions and classes
  - test_text.py: Normalization, singularization, keyword extraction
  - test_aliases.py: Category and color alias tables
  - test_relevance.py: Scoring rules and ranking
  - test_pagination.py: Page slicing arithmetic
  - test_search_service.py: Search orchestration and tracing
  - test_catalog_service.py: Listing filters, detail, colors
  - test_schemas.py: Pydantic catalog and query schemas
  - test_errors.py: Error types and request helpers
  - test_repositories.py: Repositories and the SQLite catalog store
  - test_sqlitekv_*.py: SQLite key-value wrapper
  - test_seed_catalog.py: Fixture seeding tool
  - test_config_*.py, test_settings_path_resolution.py: Settings
  - test_sentry_init.py: Optional Sentry setup
  - test_metrics_endpoint.py: Optional /metrics endpoint

- **integration/**: Integration tests using Flask test client
  - test_app.py: Application setup, blueprints, error handlers
  - test_api_search.py: GET /products/search
  - test_api_products.py: Listing, detail and colors

Running tests:
    pytest tests/
    pytest tests/unit/
    pytest tests/integration/
"""

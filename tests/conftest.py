"""Shared pytest fixtures and test configuration.

This module provides common fixtures and utilities for all tests.
"""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

# Ensure repo root is on sys.path
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


def configure_test_env() -> None:
    """Configure environment variables for testing.

    The data directory defaults to an isolated temporary directory so the
    SQLite catalog created by tests never touches the real data/ folder.
    Set CATALOG_SEARCH_DATA_DIR to override.
    """
    if "CATALOG_SEARCH_DATA_DIR" not in os.environ:
        os.environ["CATALOG_SEARCH_DATA_DIR"] = tempfile.mkdtemp(prefix="catalog_search_test_")

    os.environ["CATALOG_SEARCH_ENABLE_SWAGGER"] = "0"
    os.environ["CATALOG_SEARCH_ENABLE_METRICS"] = "0"
    os.environ["CATALOG_SEARCH_SENTRY_ENABLED"] = "0"
    os.environ.setdefault("CATALOG_SEARCH_LOG_LEVEL", "ERROR")


# Configure test environment on import
configure_test_env()


NOW = datetime.now(timezone.utc)


def make_product(**overrides):
    """Build a catalog Product with sensible defaults for any omitted field."""
    from backend.schemas.products import Product

    doc = {
        "id": 1,
        "name": "",
        "description": "",
        "detailedDescription": "",
        "price": Decimal("10.00"),
        "size": None,
        "color": None,
        "material": "",
        "category": "",
        "available": True,
        "new": False,
        "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    doc.update(overrides)
    return Product.model_validate(doc)


def build_catalog():
    """Five products over two collections, plus two reviews of product 1.

    Listing order (createdAt descending) is 1, 3, 4, 2, 5.
    """
    from backend.schemas.products import CollectionRef, Review
    from backend.services.catalog_store import InMemoryCatalogStore

    summer = CollectionRef(id=1, title="Verão Tropical", description="Peças leves para o calor")
    basics = CollectionRef(id=2, title="Essenciais", description=None)

    products = [
        make_product(
            id=1,
            name="Vestido Azul Floral",
            description="Vestido leve de algodão",
            detailedDescription="Estampa floral com alças finas",
            price=Decimal("129.90"),
            size=["P", "M"],
            color="Azul",
            material="Algodão",
            category="vestido",
            new=True,
            image1="img/1a.jpg",
            image4="img/1d.jpg",
            collection=summer,
            createdAt=NOW - timedelta(days=2),
        ),
        make_product(
            id=2,
            name="Sandália Couro",
            description="Sandália rasteira confortável",
            price=Decimal("89.90"),
            size=["36", "37"],
            color="Marrom",
            material="Couro",
            category="sandalia",
            createdAt=datetime(2024, 1, 10, tzinfo=timezone.utc),
        ),
        make_product(
            id=3,
            name="Biquíni Lilás",
            description="Biquíni cortininha",
            price=Decimal("49.90"),
            size=["P"],
            color="Lilás",
            material="Lycra",
            category="biquini",
            new=True,
            collection=summer,
            createdAt=NOW - timedelta(days=10),
        ),
        make_product(
            id=4,
            name="Bolsa de Praia",
            description="Bolsa grande de palha",
            price=Decimal("210.00"),
            color="Bege",
            material="Palha",
            category="bolsa",
            collection=basics,
            createdAt=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        make_product(
            id=5,
            name="Vestido Longo Vermelho",
            description="Vestido longo para festas",
            price=Decimal("199.00"),
            size=["M", "G"],
            color="Vermelho",
            material="Viscose",
            category="vestido",
            createdAt=datetime(2023, 12, 1, tzinfo=timezone.utc),
        ),
    ]
    reviews = [
        Review.model_validate(
            {
                "id": 1,
                "productId": 1,
                "comentario": "Lindo!",
                "estrelas": 5,
                "dataDePublicacao": "2025-01-02T10:00:00Z",
                "user": {"id": 7, "name": "Ana", "username": "ana"},
            }
        ),
        Review.model_validate(
            {
                "id": 2,
                "productId": 1,
                "comentario": "Tecido bom, veste pequeno",
                "estrelas": 4,
                "dataDePublicacao": "2025-02-01T10:00:00Z",
            }
        ),
    ]
    return InMemoryCatalogStore(products, [summer, basics], reviews)


@pytest.fixture(scope="session")
def catalog():
    """In-memory fixture catalog shared by the app and service tests."""
    return build_catalog()


@pytest.fixture(scope="session")
def app(catalog):
    """Create Flask application for testing.

    This fixture is session-scoped to avoid recreating the app for each test.
    """
    from backend import create_app

    application = create_app(catalog_store=catalog)
    application.testing = True
    return application


@pytest.fixture
def client(app):
    """Create Flask test client.

    This fixture is function-scoped to ensure clean state for each test.
    """
    return app.test_client()


@pytest.fixture
def product_factory():
    """Return the `make_product` builder."""
    return make_product


class FailingCatalogStore:
    """Store whose every read fails, for error-path tests."""

    def fetch_all_projected(self):
        raise RuntimeError("database unavailable")

    def get_product(self, product_id):
        raise RuntimeError("database unavailable")

    def list_collections(self):
        raise RuntimeError("database unavailable")

    def get_reviews(self, product_id):
        raise RuntimeError("database unavailable")


@pytest.fixture
def failing_store():
    return FailingCatalogStore()

"""Integration tests for GET /products/search."""

from __future__ import annotations

import pytest


class TestSearchValidation:
    """Invalid parameters are rejected before the catalog is read."""

    @pytest.mark.parametrize(
        "qs,message",
        [
            ("", 'query parameter "q" is required'),
            ("q=", 'query parameter "q" is required'),
            ("q=%20%20", 'query parameter "q" is required'),
            ("q=vestido&limit=150", "limit cannot exceed 100"),
            ("q=vestido&page=0", "page and limit must be positive integers"),
            ("q=vestido&limit=abc", "page and limit must be positive integers"),
            ("q=vestido&page=-2", "page and limit must be positive integers"),
        ],
    )
    def test_bad_request(self, client, qs, message):
        resp = client.get(f"/products/search?{qs}")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": message}

    def test_validation_happens_before_store_access(self, failing_store):
        """A broken store is never reached by an invalid request."""
        from backend import create_app

        app = create_app(catalog_store=failing_store)
        resp = app.test_client().get("/products/search?q=vestido&limit=0")
        assert resp.status_code == 400


class TestSearchResults:
    """Response envelope and ranking."""

    def test_envelope(self, client):
        resp = client.get("/products/search?q=Dresses")
        assert resp.status_code == 200
        body = resp.get_json()
        assert list(body) == ["data", "search", "pagination"]
        assert body["search"] == {
            "query": "Dresses",
            "normalizedQuery": "dresses",
            "keywords": ["dresse"],
            "resultsFound": 2,
        }
        assert body["pagination"] == {
            "page": 1,
            "limit": 10,
            "total": 2,
            "totalPages": 1,
            "hasNextPage": False,
            "hasPreviousPage": False,
        }

    def test_items_are_projected_without_score(self, client):
        item = client.get("/products/search?q=vestido").get_json()["data"][0]
        assert item["id"] == 1
        assert item["detailedDescription"] == "Estampa floral com alças finas"
        assert item["price"] == "129.90"
        assert item["collection"]["title"] == "Verão Tropical"
        assert "score" not in item
        assert "image4" not in item
        assert "image5" not in item

    def test_category_alias_ranks_dresses(self, client):
        """'dress' finds both dresses and leaves the sandal out."""
        ids = [p["id"] for p in client.get("/products/search?q=dress").get_json()["data"]]
        assert ids == [1, 5]

    def test_color_translation(self, client):
        """English color names find the localized color."""
        ids = [p["id"] for p in client.get("/products/search?q=red").get_json()["data"]]
        assert ids == [5]

    def test_accents_are_ignored(self, client):
        with_accent = client.get("/products/search?q=biqu%C3%ADni").get_json()
        without = client.get("/products/search?q=BIQUINI").get_json()
        assert [p["id"] for p in with_accent["data"]] == [p["id"] for p in without["data"]] == [3]

    def test_new_arrivals(self, client):
        """Novelty queries favour products flagged new and created recently."""
        ids = [p["id"] for p in client.get("/products/search?q=novidades").get_json()["data"]]
        assert ids[:2] == [1, 3]

    def test_no_match(self, client):
        body = client.get("/products/search?q=zzznomatch").get_json()
        assert body["data"] == []
        assert body["search"]["resultsFound"] == 0
        assert body["pagination"]["totalPages"] == 0
        assert body["pagination"]["hasNextPage"] is False

    def test_second_page(self, client):
        body = client.get("/products/search?q=dress&limit=1&page=2").get_json()
        assert [p["id"] for p in body["data"]] == [5]
        assert body["pagination"]["hasPreviousPage"] is True
        assert body["pagination"]["hasNextPage"] is False
        assert body["pagination"]["totalPages"] == 2

    def test_repeated_search_is_identical(self, client):
        first = client.get("/products/search?q=vestido%20azul").get_data()
        second = client.get("/products/search?q=vestido%20azul").get_data()
        assert first == second


class TestSearchFailures:
    def test_store_failure_is_500(self, failing_store):
        from backend import create_app

        app = create_app(catalog_store=failing_store)
        resp = app.test_client().get("/products/search?q=vestido")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Failed to search products"}

"""Unit tests for pydantic catalog and query schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

import config
from backend.schemas.products import Product, ProductListQuery, Review, SearchQuery
from backend.utils.errors import first_error_message


def _message(model, data) -> str:
    with pytest.raises(ValidationError) as excinfo:
        model.model_validate(data)
    return first_error_message(excinfo.value)


class TestSearchQuery:
    """Tests for SearchQuery validation."""

    def test_defaults(self):
        """page defaults to 1 and limit to 10."""
        q = SearchQuery.model_validate({"q": "vestido"})
        assert (q.q, q.page, q.limit) == ("vestido", 1, 10)

    def test_string_numbers_are_parsed(self):
        """Query-string values arrive as strings."""
        q = SearchQuery.model_validate({"q": "bolsa", "page": "3", "limit": "25"})
        assert (q.page, q.limit) == (3, 25)

    def test_raw_query_is_kept(self):
        """The query text is not trimmed or normalized."""
        assert SearchQuery.model_validate({"q": "  Maiô "}).q == "  Maiô "

    @pytest.mark.parametrize("data", [{}, {"q": ""}, {"q": "   "}])
    def test_missing_query(self, data):
        assert _message(SearchQuery, data) == 'query parameter "q" is required'

    @pytest.mark.parametrize("value", ["0", "-1", "abc", "1.5"])
    def test_invalid_page(self, value):
        assert _message(SearchQuery, {"q": "x", "page": value}) == "page and limit must be positive integers"

    def test_limit_ceiling(self):
        """limit above 100 is rejected."""
        assert _message(SearchQuery, {"q": "x", "limit": "150"}) == "limit cannot exceed 100"

    def test_limit_at_ceiling_is_accepted(self):
        assert SearchQuery.model_validate({"q": "x", "limit": "100"}).limit == 100


class TestProductListQuery:
    """Tests for listing filters."""

    def test_aliases_and_csv(self):
        """Portuguese parameter names map to fields; lists are comma separated."""
        q = ProductListQuery.model_validate(
            {"categoria": "vestido", "colecao": "Verão", "preco": "ate50", "tamanhos": "P, M,,G", "cores": "Azul"}
        )
        assert q.category == "vestido"
        assert q.collection == "Verão"
        assert q.price_band == "ate50"
        assert q.sizes == ["P", "M", "G"]
        assert q.colors == ["Azul"]

    def test_blank_filters_are_ignored(self):
        q = ProductListQuery.model_validate({"categoria": "", "material": "  ", "cores": ""})
        assert q.category is None
        assert q.material is None
        assert q.colors == []

    def test_pagination_validated(self):
        assert _message(ProductListQuery, {"limit": "-1"}) == "page and limit must be positive integers"
        assert _message(ProductListQuery, {"limit": "101"}) == "limit cannot exceed 100"

    @pytest.mark.parametrize("data", [{"page": "0", "limit": "0"}, {"page": "abc", "limit": "x"}, {}])
    def test_zero_or_garbage_pagination_uses_defaults(self, data):
        q = ProductListQuery.model_validate(data)
        assert q.page == 1
        assert q.limit == config.settings.search.default_limit


class TestProduct:
    """Tests for the Product document model."""

    def test_wire_names_and_projection(self):
        """to_dict uses camelCase names and omits detail-only images."""
        p = Product.model_validate(
            {
                "id": 3,
                "name": "Biquíni",
                "detailedDescription": None,
                "price": "49.90",
                "color": " ",
                "image4": "x.jpg",
                "createdAt": "2025-01-01T00:00:00Z",
            }
        )
        assert p.price == Decimal("49.90")
        assert p.detailed_description == ""
        assert p.color is None
        data = p.to_dict()
        assert data["detailedDescription"] == ""
        assert data["createdAt"].startswith("2025-01-01T00:00:00")
        assert "image4" not in data
        assert "image5" not in data
        assert "image1" in data

    def test_created_at_required(self):
        with pytest.raises(ValidationError):
            Product.model_validate({"id": 1})

    def test_naive_created_at_is_utc(self):
        p = Product.model_validate({"id": 1, "createdAt": "2025-01-01T00:00:00"})
        assert p.created_at == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestReview:
    """Tests for the Review model."""

    def test_stars_range(self):
        with pytest.raises(ValidationError):
            Review.model_validate({"id": 1, "productId": 1, "estrelas": 6, "dataDePublicacao": "2025-01-01T00:00:00Z"})

    def test_to_dict_omits_product_id(self):
        r = Review.model_validate(
            {"id": 1, "productId": 2, "comentario": "ok", "estrelas": 3, "dataDePublicacao": "2025-01-01T00:00:00Z"}
        )
        data = r.to_dict()
        assert "productId" not in data
        assert data["comentario"] == "ok"
        assert data["estrelas"] == 3

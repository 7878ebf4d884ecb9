"""Product catalog API routes: search, listing, detail and colors."""

from __future__ import annotations

from flask import Blueprint, jsonify

from ..schemas.products import ProductListQuery, SearchQuery
from ..services.api_helpers import get_catalog_store, parse_query_args
from ..services.catalog_service import get_product_detail, list_colors, list_products
from ..services.search_service import SearchService
from ..utils.errors import ValidationError
from .metrics import observe_search

bp = Blueprint("products", __name__, url_prefix="/products")


@bp.route("/search", methods=["GET"])
def search_products():
    """Search products by free text, ranked by relevance
    ---
    tags:
      - Products
    parameters:
      - in: query
        name: q
        type: string
        required: true
        description: Search text (English or Portuguese)
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 10
        description: Page size (max 100)
    responses:
      200:
        description: Ranked products with search metadata and pagination
        schema:
          type: object
          properties:
            data:
              type: array
            search:
              type: object
              properties:
                query:
                  type: string
                normalizedQuery:
                  type: string
                keywords:
                  type: array
                  items:
                    type: string
                resultsFound:
                  type: integer
            pagination:
              type: object
      400:
        description: Missing query or invalid pagination
      500:
        description: Search failed
    """
    query = parse_query_args(SearchQuery)
    result = SearchService(get_catalog_store()).search(query)
    observe_search(result.results_found)
    return jsonify(result.to_dict())


@bp.route("/", methods=["GET"], strict_slashes=False)
def list_all_products():
    """List products with optional filters, newest first
    ---
    tags:
      - Products
    parameters:
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 10
      - in: query
        name: categoria
        type: string
        description: Exact category
      - in: query
        name: colecao
        type: string
        description: Collection title (accents and case ignored)
      - in: query
        name: preco
        type: string
        enum: [ate50, 50a100, 100a150, 150a200, 200mais]
      - in: query
        name: material
        type: string
      - in: query
        name: tamanhos
        type: string
        description: Comma-separated sizes; any one must be offered
      - in: query
        name: cores
        type: string
        description: Comma-separated colors
    responses:
      200:
        description: Products and pagination
      400:
        description: Invalid pagination
      404:
        description: Unknown collection
    """
    query = parse_query_args(ProductListQuery)
    page = list_products(get_catalog_store(), query)
    return jsonify({"data": [p.to_dict() for p in page.items], "pagination": page.meta()})


@bp.route("/cores", methods=["GET"])
def product_colors():
    """Distinct product colors
    ---
    tags:
      - Products
    responses:
      200:
        description: Color names in catalog order
        schema:
          type: array
          items:
            type: string
    """
    return jsonify(list_colors(get_catalog_store()))


@bp.route("/<product_id>", methods=["GET"])
def product_detail(product_id: str):
    """Product detail with images, reviews and review statistics
    ---
    tags:
      - Products
    parameters:
      - in: path
        name: product_id
        type: integer
        required: true
    responses:
      200:
        description: Product detail
      400:
        description: Non-integer product id
      404:
        description: Product not found
    """
    try:
        pid = int(product_id)
    except ValueError:
        raise ValidationError("Product ID must be an integer") from None
    return jsonify(get_product_detail(get_catalog_store(), pid))

"""API response helpers and request parsing utilities."""

from __future__ import annotations

from typing import Any, TypeVar

from flask import current_app, jsonify, request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..utils.errors import validation_error_from
from .catalog_store import CatalogStore

ModelT = TypeVar("ModelT", bound=BaseModel)

STORE_EXTENSION_KEY = "catalog_store"


def api_error(error: str, status: int = 400) -> tuple[Any, int]:
    """Return a standardized JSON error response."""
    return jsonify({"error": error}), status


def parse_query_args(model: type[ModelT]) -> ModelT:
    """Validate the request's query string into `model`.

    Raises `ValidationError` (400) with the first pydantic error message.
    Repeated parameters keep their first value.
    """
    try:
        return model.model_validate(request.args.to_dict())
    except PydanticValidationError as exc:
        raise validation_error_from(exc) from None


def get_catalog_store() -> CatalogStore:
    """Catalog store injected into the running app by `create_app`."""
    return current_app.extensions[STORE_EXTENSION_KEY]

"""Root routes."""

from __future__ import annotations

from flask import Blueprint, jsonify

bp = Blueprint("web", __name__)


@bp.route("/hello-world", methods=["GET"])
def hello_world():
    """Greeting used as a smoke test
    ---
    tags:
      - System
    responses:
      200:
        description: Static greeting
        schema:
          type: object
          properties:
            message:
              type: string
    """
    return jsonify({"message": "Hello, World!"})

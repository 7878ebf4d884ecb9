"""
Catalog search web server.

Development:
    python serve.py

Production (WSGI):
    gunicorn serve:app
"""

from loguru import logger

from backend import create_app
from config import settings

app = create_app()


if __name__ == "__main__":
    logger.info(f"Serving catalog search on http://{settings.host}:{settings.serve_port}")
    app.run(host=settings.host, port=settings.serve_port)

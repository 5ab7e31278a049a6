"""HTTP API for glyphmesh.

Key functions:
- create_app: Build the FastAPI application (POST /generate, GET /health)
"""

from glyphmesh.api.server import create_app

__all__ = ["create_app"]

"""HTTP API serving graph.json and backlinks."""

from .api import app, create_app

__all__ = ["app", "create_app"]

"""JSON HTTP API (Flask) for the KMP document search engine."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]

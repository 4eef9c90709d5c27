"""
Mentor GPT API package.

Provides the FastAPI application for the metered chat service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

"""
Storefront API package.

Provides the FastAPI application for the cake shop catalog service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

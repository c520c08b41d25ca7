"""FastAPI surface for classroll."""

from .app import create_app

__all__ = ["create_app"]

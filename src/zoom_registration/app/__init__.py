"""FastAPI application for zoom_registration."""
from .main import create_app

__all__ = ["create_app"]

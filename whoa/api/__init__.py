"""Web API application."""

from .main import Application, create_app

__all__ = ["Application", "create_app"]

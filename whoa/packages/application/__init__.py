"""Application package."""

from .package import ApplicationPackage
from .settings import ApplicationSettings

__all__ = ["ApplicationPackage", "ApplicationSettings"]

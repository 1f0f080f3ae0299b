"""CORS package."""

from .package import CorsPackage
from .middleware import CorsMiddleware

__all__ = ["CorsPackage", "CorsMiddleware"]

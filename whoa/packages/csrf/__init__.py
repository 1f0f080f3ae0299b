"""CSRF package."""

from .package import CsrfPackage
from .middleware import CsrfMiddleware
from .settings import CsrfSettings

__all__ = ["CsrfPackage", "CsrfMiddleware", "CsrfSettings"]

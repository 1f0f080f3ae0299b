"""Authorization package."""

from .package import AuthorizationPackage

__all__ = ["AuthorizationPackage"]

"""CSRF token generation and storage."""

from .storage import CsrfTokenGenerator, CsrfTokenStorage, SessionCsrfTokenStorage

__all__ = ["CsrfTokenGenerator", "CsrfTokenStorage", "SessionCsrfTokenStorage"]

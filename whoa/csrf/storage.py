"""CSRF token generation and storage."""

import logging
import secrets
import time
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class CsrfTokenGenerator(ABC):
    @abstractmethod
    def create(self) -> str:
        """Create a new token."""
        pass


class CsrfTokenStorage(CsrfTokenGenerator):
    @abstractmethod
    def check(self, token: str) -> bool:
        """Check a token. A valid token is consumed and cannot be used again."""
        pass


class SessionCsrfTokenStorage(CsrfTokenStorage):
    """
    Keeps issued tokens in the session as ``{token: timestamp}``.

    When ``max_tokens`` is set and the number of stored tokens exceeds
    ``max_tokens + max_tokens_gc_threshold`` only the newest ``max_tokens``
    are kept.
    """

    TOKEN_BYTE_LENGTH = 16

    def __init__(self, session: MutableMapping, token_storage_key: str,
                 max_tokens: Optional[int], max_tokens_gc_threshold: int):
        if not token_storage_key:
            raise ValueError("Token storage key must not be empty.")
        if max_tokens is not None and max_tokens <= 0:
            raise ValueError("Max tokens must be positive or None.")
        if max_tokens_gc_threshold < 0:
            raise ValueError("GC threshold must not be negative.")

        self.session = session
        self.token_storage_key = token_storage_key
        self.max_tokens = max_tokens
        self.max_tokens_gc_threshold = max_tokens_gc_threshold

    def create(self) -> str:
        tokens = self._get_tokens()
        value = self.create_token_value()
        tokens[value] = self.create_token_timestamp()

        if self.max_tokens is not None and len(tokens) > self.max_tokens + self.max_tokens_gc_threshold:
            # stable sort keeps insertion order for equal timestamps
            newest = sorted(tokens.items(), key=lambda item: item[1])[-self.max_tokens:]
            logger.debug(f"CSRF token storage cleaned: {len(tokens)} -> {len(newest)}")
            tokens = dict(newest)

        self._set_tokens(tokens)

        return value

    def check(self, token: str) -> bool:
        tokens = self._get_tokens()
        if token not in tokens:
            return False

        del tokens[token]
        self._set_tokens(tokens)

        return True

    def create_token_value(self) -> str:
        return secrets.token_hex(self.TOKEN_BYTE_LENGTH)

    def create_token_timestamp(self) -> int:
        return int(time.time())

    def _get_tokens(self) -> Dict[str, int]:
        if self.token_storage_key in self.session:
            return dict(self.session[self.token_storage_key])
        return {}

    def _set_tokens(self, tokens: Dict[str, int]):
        self.session[self.token_storage_key] = tokens

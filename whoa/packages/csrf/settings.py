"""CSRF protection settings."""

from typing import Any, Dict

from whoa.class_loader import import_string
from whoa.settings import Settings


class CsrfSettings(Settings):
    """
    CSRF protection.

    Read from the ``csrf`` configuration section.
    ``KEY_CREATE_ERROR_RESPONSE_METHOD`` is a callable (or its dotted path)
    receiving the container and the request and returning the response for
    a request without a valid token.
    """

    KEY_HTTP_METHODS_TO_CHECK = "http_methods_to_check"
    KEY_HTTP_REQUEST_CSRF_TOKEN_KEY = "http_request_csrf_token_key"
    KEY_TOKEN_STORAGE_KEY_IN_SESSION = "token_storage_key_in_session"
    KEY_MAX_TOKENS = "max_tokens"
    KEY_MAX_TOKENS_THRESHOLD = "max_tokens_threshold"
    KEY_CREATE_ERROR_RESPONSE_METHOD = "create_error_response_method"

    DEFAULT_HTTP_METHODS_TO_CHECK = ["POST", "PUT", "PATCH", "DELETE"]
    DEFAULT_HTTP_REQUEST_CSRF_TOKEN_KEY = "_token"
    DEFAULT_TOKEN_STORAGE_KEY_IN_SESSION = "csrf_tokens"
    DEFAULT_MAX_TOKENS = 20
    DEFAULT_MAX_TOKENS_THRESHOLD = 5

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        settings = {
            self.KEY_HTTP_METHODS_TO_CHECK: self.DEFAULT_HTTP_METHODS_TO_CHECK,
            self.KEY_HTTP_REQUEST_CSRF_TOKEN_KEY: self.DEFAULT_HTTP_REQUEST_CSRF_TOKEN_KEY,
            self.KEY_TOKEN_STORAGE_KEY_IN_SESSION: self.DEFAULT_TOKEN_STORAGE_KEY_IN_SESSION,
            self.KEY_MAX_TOKENS: self.DEFAULT_MAX_TOKENS,
            self.KEY_MAX_TOKENS_THRESHOLD: self.DEFAULT_MAX_TOKENS_THRESHOLD,
            self.KEY_CREATE_ERROR_RESPONSE_METHOD: None,
        }
        settings.update({key: value for key, value in (app_config.get("csrf") or {}).items() if key in settings})
        settings.update(self.get_settings())

        settings[self.KEY_HTTP_METHODS_TO_CHECK] = [m.upper() for m in settings[self.KEY_HTTP_METHODS_TO_CHECK]]

        method = settings[self.KEY_CREATE_ERROR_RESPONSE_METHOD]
        if isinstance(method, str):
            method = import_string(method)
        if method is not None and not callable(method):
            raise ValueError("CSRF error response method must be callable.")
        settings[self.KEY_CREATE_ERROR_RESPONSE_METHOD] = method

        return settings

    def get_settings(self) -> Dict[str, Any]:
        return {}

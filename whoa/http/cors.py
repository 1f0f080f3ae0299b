"""CORS request analysis."""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from whoa.settings import Settings

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SIMPLE_METHODS = {"GET", "HEAD", "POST"}


class RequestType(enum.Enum):
    OUT_OF_CORS_SCOPE = "out_of_cors_scope"
    PRE_FLIGHT_REQUEST = "pre_flight_request"
    ACTUAL_REQUEST = "actual_request"
    ERR_NO_HOST_HEADER = "err_no_host_header"
    ERR_ORIGIN_NOT_ALLOWED = "err_origin_not_allowed"
    ERR_METHOD_NOT_SUPPORTED = "err_method_not_supported"
    ERR_HEADERS_NOT_SUPPORTED = "err_headers_not_supported"

    @property
    def is_error(self) -> bool:
        return self.name.startswith("ERR_")


@dataclass
class AnalysisResult:
    request_type: RequestType
    response_headers: Dict[str, str] = field(default_factory=dict)

    def get_request_type(self) -> RequestType:
        return self.request_type

    def get_response_headers(self) -> Dict[str, str]:
        return self.response_headers


def _origin_string(scheme: str, host: str, port: Optional[int]) -> str:
    scheme = (scheme or "http").lower()
    if port is None or _DEFAULT_PORTS.get(scheme) == int(port):
        return f"{scheme}://{host.lower()}"
    return f"{scheme}://{host.lower()}:{port}"


def _normalize_origin(origin: str) -> Optional[str]:
    """Lower case origin without the default port, None when it cannot be parsed."""
    try:
        parts = urlsplit(origin)
        if not parts.scheme or not parts.hostname:
            return origin.lower()
        return _origin_string(parts.scheme, parts.hostname, parts.port)
    except ValueError:
        return None


def _split_header(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class CorsSettings(Settings):
    """
    CORS settings.

    The server origin is taken from ``app.origin`` of the application
    configuration. ``KEY_ALLOWED_ORIGINS`` may contain ``*`` to allow any
    origin.
    """

    KEY_SERVER_ORIGIN = "server_origin"
    KEY_ALLOWED_ORIGINS = "allowed_origins"
    KEY_ALLOWED_METHODS = "allowed_methods"
    KEY_ALLOWED_HEADERS = "allowed_headers"
    KEY_EXPOSED_HEADERS = "exposed_headers"
    KEY_IS_USING_CREDENTIALS = "is_using_credentials"
    KEY_PRE_FLIGHT_MAX_AGE = "pre_flight_max_age"
    KEY_IS_FORCE_ADD_METHODS = "is_force_add_methods"
    KEY_IS_FORCE_ADD_HEADERS = "is_force_add_headers"
    KEY_IS_CHECK_HOST = "is_check_host"
    KEY_LOGS_ENABLED = "logs_enabled"

    def get(self, app_config: Dict[str, Any]) -> Dict[str, Any]:
        origin = (app_config.get("app") or {}).get("origin") or {}
        settings = {
            self.KEY_SERVER_ORIGIN: _origin_string(
                origin.get("scheme", "http"), origin.get("host", "localhost"), origin.get("port")
            ),
            self.KEY_ALLOWED_ORIGINS: [],
            self.KEY_ALLOWED_METHODS: ["GET", "POST", "PATCH", "PUT", "DELETE"],
            self.KEY_ALLOWED_HEADERS: ["content-type", "authorization", "x-requested-with"],
            self.KEY_EXPOSED_HEADERS: [],
            self.KEY_IS_USING_CREDENTIALS: False,
            self.KEY_PRE_FLIGHT_MAX_AGE: 0,
            self.KEY_IS_FORCE_ADD_METHODS: False,
            self.KEY_IS_FORCE_ADD_HEADERS: False,
            self.KEY_IS_CHECK_HOST: False,
            self.KEY_LOGS_ENABLED: False,
        }
        settings.update({key: value for key, value in (app_config.get("cors") or {}).items() if key in settings})
        settings.update(self.get_settings())

        return settings

    def get_settings(self) -> Dict[str, Any]:
        """Settings overriding the ``cors`` section of the configuration."""
        return {}


class CorsAnalyzer:
    """Classifies requests as CORS pre-flight, actual or out of scope and builds response headers."""

    def __init__(self, settings: Mapping[str, Any]):
        self.server_origin = settings[CorsSettings.KEY_SERVER_ORIGIN]
        allowed_origins = settings.get(CorsSettings.KEY_ALLOWED_ORIGINS) or []
        self.is_any_origin_allowed = "*" in allowed_origins
        self.allowed_origins = {_normalize_origin(o) for o in allowed_origins if o != "*"} - {None}
        self.allowed_methods = [m.upper() for m in settings.get(CorsSettings.KEY_ALLOWED_METHODS) or []]
        self.allowed_headers = [h.lower() for h in settings.get(CorsSettings.KEY_ALLOWED_HEADERS) or []]
        self.exposed_headers = list(settings.get(CorsSettings.KEY_EXPOSED_HEADERS) or [])
        self.is_using_credentials = bool(settings.get(CorsSettings.KEY_IS_USING_CREDENTIALS))
        self.pre_flight_max_age = int(settings.get(CorsSettings.KEY_PRE_FLIGHT_MAX_AGE) or 0)
        self.is_force_add_methods = bool(settings.get(CorsSettings.KEY_IS_FORCE_ADD_METHODS))
        self.is_force_add_headers = bool(settings.get(CorsSettings.KEY_IS_FORCE_ADD_HEADERS))
        self.is_check_host = bool(settings.get(CorsSettings.KEY_IS_CHECK_HOST))
        self.logs_enabled = bool(settings.get(CorsSettings.KEY_LOGS_ENABLED))

    def analyze(self, request) -> AnalysisResult:
        """
        Analyze a request.

        Args:
            request: Object with ``method`` and case-insensitive ``headers``
        """
        headers = request.headers
        method = request.method.upper()

        if self.is_check_host and not self._is_same_host(headers.get("host")):
            return self._result(RequestType.ERR_NO_HOST_HEADER)

        origin = headers.get("origin")
        if not origin:
            return self._result(RequestType.OUT_OF_CORS_SCOPE)

        normalized = _normalize_origin(origin)
        if normalized is not None and normalized == self.server_origin:
            return self._result(RequestType.OUT_OF_CORS_SCOPE)

        if normalized is None or not self._is_origin_allowed(normalized):
            return self._result(RequestType.ERR_ORIGIN_NOT_ALLOWED, origin=origin)

        requested_method = headers.get("access-control-request-method")
        if method == "OPTIONS" and requested_method:
            return self._analyze_pre_flight(origin, requested_method.upper(), headers)

        return self._result(RequestType.ACTUAL_REQUEST, self._actual_headers(origin))

    def _analyze_pre_flight(self, origin: str, requested_method: str, headers) -> AnalysisResult:
        if requested_method not in self.allowed_methods:
            return self._result(RequestType.ERR_METHOD_NOT_SUPPORTED, method=requested_method)

        requested_headers = _split_header(headers.get("access-control-request-headers"))
        if any(header not in self.allowed_headers for header in requested_headers):
            return self._result(RequestType.ERR_HEADERS_NOT_SUPPORTED, headers=requested_headers)

        response_headers = {"Access-Control-Allow-Origin": origin}
        if self.is_using_credentials:
            response_headers["Access-Control-Allow-Credentials"] = "true"
        if self.pre_flight_max_age > 0:
            response_headers["Access-Control-Max-Age"] = str(self.pre_flight_max_age)
        if self.is_force_add_methods or requested_method not in _SIMPLE_METHODS:
            response_headers["Access-Control-Allow-Methods"] = ", ".join(self.allowed_methods)
        if self.is_force_add_headers or requested_headers:
            response_headers["Access-Control-Allow-Headers"] = ", ".join(
                self.allowed_headers if self.is_force_add_headers else requested_headers
            )

        return self._result(RequestType.PRE_FLIGHT_REQUEST, response_headers)

    def _actual_headers(self, origin: str) -> Dict[str, str]:
        response_headers = {"Access-Control-Allow-Origin": origin}
        if self.is_using_credentials:
            response_headers["Access-Control-Allow-Credentials"] = "true"
        if self.exposed_headers:
            response_headers["Access-Control-Expose-Headers"] = ", ".join(self.exposed_headers)
        return response_headers

    def _is_origin_allowed(self, normalized_origin: str) -> bool:
        return self.is_any_origin_allowed or normalized_origin in self.allowed_origins

    def _is_same_host(self, host: Optional[str]) -> bool:
        if not host:
            return False
        server = urlsplit(self.server_origin)
        try:
            request = urlsplit(f"{server.scheme}://{host}")
            return _origin_string(server.scheme, request.hostname or "", request.port) == self.server_origin
        except ValueError:
            return False

    def _result(self, request_type: RequestType, response_headers: Dict[str, str] = None,
                **details) -> AnalysisResult:
        if self.logs_enabled:
            logger.debug(f"CORS analysis: {request_type.value} {details or ''}")
        return AnalysisResult(request_type, response_headers or {})

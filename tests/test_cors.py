"""Tests for CORS analysis and the CORS middleware."""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from whoa.http import CorsAnalyzer, CorsSettings, RequestType

ALLOWED_ORIGIN = "http://allowed.example.com"


def make_request(method="GET", **headers):
    headers = {name.replace("_", "-"): value for name, value in headers.items()}
    return SimpleNamespace(method=method, headers=Headers(headers))


def make_analyzer(**cors):
    config = {
        "app": {"origin": {"scheme": "http", "host": "localhost", "port": 8080}},
        "cors": {"allowed_origins": [ALLOWED_ORIGIN], **cors},
    }
    return CorsAnalyzer(CorsSettings().get(config))


class TestCorsSettings:
    """Server origin and defaults."""

    def test_server_origin(self):
        settings = CorsSettings().get({"app": {"origin": {"scheme": "https", "host": "Example.com", "port": 443}}})

        assert settings[CorsSettings.KEY_SERVER_ORIGIN] == "https://example.com"

    def test_default_origin(self):
        settings = CorsSettings().get({})

        assert settings[CorsSettings.KEY_SERVER_ORIGIN] == "http://localhost"
        assert settings[CorsSettings.KEY_ALLOWED_ORIGINS] == []
        assert settings[CorsSettings.KEY_PRE_FLIGHT_MAX_AGE] == 0

    def test_get_settings_overrides_config(self):
        class StrictCorsSettings(CorsSettings):
            def get_settings(self):
                return {self.KEY_ALLOWED_ORIGINS: []}

        settings = StrictCorsSettings().get({"cors": {"allowed_origins": ["*"]}})

        assert settings[CorsSettings.KEY_ALLOWED_ORIGINS] == []


class TestCorsAnalyzer:
    """Request classification."""

    def test_no_origin_is_out_of_scope(self):
        result = make_analyzer().analyze(make_request())

        assert result.get_request_type() is RequestType.OUT_OF_CORS_SCOPE
        assert result.get_response_headers() == {}

    def test_same_origin_is_out_of_scope(self):
        result = make_analyzer().analyze(make_request(origin="http://LOCALHOST:8080"))

        assert result.get_request_type() is RequestType.OUT_OF_CORS_SCOPE

    def test_actual_request(self):
        result = make_analyzer().analyze(make_request(origin=ALLOWED_ORIGIN))

        assert result.get_request_type() is RequestType.ACTUAL_REQUEST
        assert result.get_response_headers() == {"Access-Control-Allow-Origin": ALLOWED_ORIGIN}

    def test_actual_request_with_credentials_and_exposed_headers(self):
        analyzer = make_analyzer(is_using_credentials=True, exposed_headers=["X-Total"])

        headers = analyzer.analyze(make_request(origin=ALLOWED_ORIGIN)).get_response_headers()

        assert headers["Access-Control-Allow-Credentials"] == "true"
        assert headers["Access-Control-Expose-Headers"] == "X-Total"

    def test_origin_not_allowed(self):
        result = make_analyzer().analyze(make_request(origin="http://evil.example.com"))

        assert result.get_request_type() is RequestType.ERR_ORIGIN_NOT_ALLOWED
        assert result.get_request_type().is_error

    @pytest.mark.parametrize("origin", ["http://evil.example.com:abc", "http://[evil", "http://localhost:99999"])
    def test_unparseable_origin_is_not_allowed(self, origin):
        result = make_analyzer().analyze(make_request(origin=origin))

        assert result.get_request_type() is RequestType.ERR_ORIGIN_NOT_ALLOWED

    def test_unparseable_origin_with_any_origin_allowed(self):
        result = make_analyzer(allowed_origins=["*"]).analyze(make_request(origin="http://[evil"))

        assert result.get_request_type() is RequestType.ERR_ORIGIN_NOT_ALLOWED

    def test_default_port_is_ignored(self):
        result = make_analyzer().analyze(make_request(origin="http://allowed.example.com:80"))

        assert result.get_request_type() is RequestType.ACTUAL_REQUEST

    def test_any_origin(self):
        result = make_analyzer(allowed_origins=["*"]).analyze(make_request(origin="http://any.example.com"))

        assert result.get_request_type() is RequestType.ACTUAL_REQUEST

    def test_pre_flight(self):
        analyzer = make_analyzer(pre_flight_max_age=600)
        request = make_request(
            "OPTIONS",
            origin=ALLOWED_ORIGIN,
            access_control_request_method="PUT",
            access_control_request_headers="Content-Type",
        )

        result = analyzer.analyze(request)

        assert result.get_request_type() is RequestType.PRE_FLIGHT_REQUEST
        assert result.get_response_headers() == {
            "Access-Control-Allow-Origin": ALLOWED_ORIGIN,
            "Access-Control-Max-Age": "600",
            "Access-Control-Allow-Methods": "GET, POST, PATCH, PUT, DELETE",
            "Access-Control-Allow-Headers": "content-type",
        }

    def test_pre_flight_for_simple_method(self):
        request = make_request("OPTIONS", origin=ALLOWED_ORIGIN, access_control_request_method="GET")

        headers = make_analyzer().analyze(request).get_response_headers()

        assert headers == {"Access-Control-Allow-Origin": ALLOWED_ORIGIN}

    def test_pre_flight_forced_headers(self):
        analyzer = make_analyzer(is_force_add_methods=True, is_force_add_headers=True)
        request = make_request("OPTIONS", origin=ALLOWED_ORIGIN, access_control_request_method="GET")

        headers = analyzer.analyze(request).get_response_headers()

        assert headers["Access-Control-Allow-Methods"] == "GET, POST, PATCH, PUT, DELETE"
        assert headers["Access-Control-Allow-Headers"] == "content-type, authorization, x-requested-with"

    def test_pre_flight_method_not_supported(self):
        request = make_request("OPTIONS", origin=ALLOWED_ORIGIN, access_control_request_method="TRACE")

        result = make_analyzer().analyze(request)

        assert result.get_request_type() is RequestType.ERR_METHOD_NOT_SUPPORTED

    def test_pre_flight_headers_not_supported(self):
        request = make_request(
            "OPTIONS",
            origin=ALLOWED_ORIGIN,
            access_control_request_method="POST",
            access_control_request_headers="X-Custom",
        )

        result = make_analyzer().analyze(request)

        assert result.get_request_type() is RequestType.ERR_HEADERS_NOT_SUPPORTED

    def test_options_without_requested_method_is_actual(self):
        result = make_analyzer().analyze(make_request("OPTIONS", origin=ALLOWED_ORIGIN))

        assert result.get_request_type() is RequestType.ACTUAL_REQUEST

    @pytest.mark.parametrize("host,expected", [
        ("localhost:8080", RequestType.OUT_OF_CORS_SCOPE),
        ("other:8080", RequestType.ERR_NO_HOST_HEADER),
        ("localhost:abc", RequestType.ERR_NO_HOST_HEADER),
        ("[localhost", RequestType.ERR_NO_HOST_HEADER),
        (None, RequestType.ERR_NO_HOST_HEADER),
    ])
    def test_host_check(self, host, expected):
        headers = {} if host is None else {"host": host}

        result = make_analyzer(is_check_host=True).analyze(make_request(**headers))

        assert result.get_request_type() is expected


class TestCorsMiddleware:
    """CORS handling through the application."""

    @pytest.fixture
    def client(self, application):
        return TestClient(application.create_api())

    def test_request_without_origin(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    def test_actual_request_gets_headers(self, client):
        response = client.get("/health", headers={"Origin": ALLOWED_ORIGIN})

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_pre_flight_is_answered(self, client):
        response = client.options("/health", headers={
            "Origin": ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "PATCH",
        })

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-max-age"] == "600"
        assert response.headers["access-control-allow-methods"] == "GET, POST, PATCH, PUT, DELETE"

    def test_origin_not_allowed(self, client):
        response = client.get("/health", headers={"Origin": "http://evil.example.com"})

        assert response.status_code == 400

    @pytest.mark.parametrize("origin", ["http://evil.example.com:abc", "http://[evil"])
    def test_malformed_origin_is_rejected(self, client, origin):
        response = client.get("/health", headers={"Origin": origin})

        assert response.status_code == 400

    def test_analyzer_in_container(self, container):
        analyzer = container.get(CorsAnalyzer)

        assert analyzer.server_origin == "http://localhost:8080"
        assert analyzer.pre_flight_max_age == 600

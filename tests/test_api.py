"""Tests for the web API assembled from enabled packages."""

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from whoa import __version__
from whoa.api import Application, create_app
from whoa.core import Container, PackageRegistry
from whoa.exceptions import AuthorizationError
from whoa.http import RequestStorage


def make_client(application: Application) -> TestClient:
    api = application.create_api()

    @api.get("/fail")
    async def fail():
        raise RuntimeError("kaboom")

    @api.get("/forbidden")
    async def forbidden():
        raise AuthorizationError("can_view_secrets")

    @api.get("/container")
    async def container_info(request: Request):
        container = request.state.container
        storage = container.get(RequestStorage)
        return {
            "is_container": isinstance(container, Container),
            "path": storage.get().url.path,
        }

    return TestClient(api)


class TestGeneralEndpoints:
    """Application information."""

    @pytest.fixture
    def client(self, application):
        return make_client(application)

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Fixture Application"
        assert data["version"] == __version__
        assert data["status"] == "online"
        assert data["packages"] == [
            "application", "log_file", "data", "session", "cors", "csrf", "authorization", "commands",
        ]

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_container_per_request(self, client):
        response = client.get("/container")

        assert response.json() == {"is_container": True, "path": "/container"}

    def test_create_app(self, app_config):
        api = create_app(app_config)

        assert api.title == "Fixture Application"
        assert api.version == __version__
        assert isinstance(api.state.application, Application)


class TestExceptionHandling:
    """Exceptions raised by routes become responses."""

    def test_debug_json_error(self, application):
        response = make_client(application).get("/fail")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["type"] == "RuntimeError"
        assert error["message"] == "kaboom"
        assert error["file"].endswith("test_api.py")

    def test_production_json_error(self, app_config):
        app_config["app"]["debug"] = False

        response = make_client(Application(app_config)).get("/fail")

        assert response.status_code == 500
        assert response.json() == {"error": {"message": "Internal Server Error"}}

    def test_status_code_from_exception(self, app_config):
        app_config["app"]["debug"] = False

        response = make_client(Application(app_config)).get("/forbidden")

        assert response.status_code == 403

    def test_text_handler(self, app_config):
        app_config["app"].update({"debug": False, "exception_handler": "text"})

        response = make_client(Application(app_config)).get("/fail")

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert response.headers["content-type"].startswith("text/plain")

    def test_html_handler(self, app_config):
        app_config["app"]["exception_handler"] = "html"

        response = make_client(Application(app_config)).get("/fail")

        assert response.headers["content-type"].startswith("text/html")
        assert "Whoops! There was a problem with &#x27;Test Application&#x27;." in response.text

    def test_custom_handler_class(self, app_config):
        app_config["app"]["exception_handler"] = "whoa.exception_handlers.TextThrowableHandler"

        response = make_client(Application(app_config)).get("/fail")

        assert response.text.startswith("RuntimeError: kaboom in file ")


class TestApplicationWithoutPackages:
    """An application with an empty package registry still serves requests."""

    @pytest.fixture
    def application(self):
        return Application({"packages": {}}, package_registry=PackageRegistry())

    def test_defaults(self, application):
        api = application.create_api()

        assert api.title == "Whoa"
        assert application.get_commands() == {}

    def test_text_fallback_handler(self, application):
        client = make_client(application)

        assert client.get("/").json()["packages"] == []
        response = client.get("/fail")
        assert response.status_code == 500
        assert response.text == "Internal Server Error"

    def test_no_request_storage(self, application):
        container = application.create_container()

        assert not container.has(RequestStorage)

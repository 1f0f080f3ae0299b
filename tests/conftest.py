"""Shared test fixtures for the Whoa test suite."""

import io
import logging
import os
import sys

import pytest

# Add parent directory to path so we can import whoa, and the tests
# directory so fixture models, migrations and seeds import as ``fixtures.*``
TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.dirname(TESTS_DIR))
sys.path.insert(0, TESTS_DIR)

from whoa.api import Application
from whoa.commands import CommandIO
from whoa.packages.data import dispose_engines

FIXTURES_DIR = os.path.join(TESTS_DIR, "fixtures")
APP_NAME = "Test Application"


def fixture_path(*parts) -> str:
    return os.path.join(FIXTURES_DIR, *parts)


@pytest.fixture
def db_url(tmp_path):
    """URL of a temporary SQLite database file."""
    return f"sqlite:///{tmp_path / 'test.sqlite'}"


@pytest.fixture
def app_config(tmp_path, db_url):
    """Application configuration using the fixture models, migrations, seeds and policies."""
    log_folder = tmp_path / "logs"
    log_folder.mkdir()
    scaffold_root = tmp_path / "app"
    scaffold_root.mkdir()

    return {
        "app": {
            "name": APP_NAME,
            "debug": True,
            "exception_handler": "json",
            "origin": {"scheme": "http", "host": "localhost", "port": 8080},
        },
        "settings": {
            "folder": fixture_path("settings"),
        },
        "logging": {
            "enabled": True,
            "folder": str(log_folder),
            "file": "test.log",
            "level": "DEBUG",
        },
        "data": {
            "url": db_url,
            "models_folder": fixture_path("models"),
            "migrations_folder": fixture_path("migrations"),
            "migrations_list_file": fixture_path("migrations", "migrations.py"),
            "seeds_folder": fixture_path("seeds"),
            "seeds_list_file": fixture_path("seeds", "seeds.py"),
            "seed_init": "fixtures.seeds.data.init_seed",
        },
        "session": {
            "secret_key": "test-secret",
        },
        "cors": {
            "allowed_origins": ["http://allowed.example.com"],
            "pre_flight_max_age": 600,
        },
        "authorization": {
            "policies_folder": fixture_path("policies"),
        },
        "commands": {
            "impersonate_as_user_identity": 1,
            "impersonate_with_user_properties": {"email": "admin@example.com"},
            "impersonate_with_user_scopes": ["posts:edit"],
        },
        "scaffold": {
            "root": str(scaffold_root),
        },
        "packages": {},
    }


@pytest.fixture(autouse=True)
def release_application_resources():
    """Close database engines and log files opened by applications of a test."""
    yield
    dispose_engines()

    app_logger = logging.getLogger(APP_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def application(app_config):
    """Application with every package enabled."""
    return Application(app_config)


@pytest.fixture
def container(application):
    """Container as created for a request or a command."""
    return application.create_container()


@pytest.fixture
def command_io():
    """Command IO collecting output in memory."""
    return CommandIO(
        verbosity=CommandIO.VERBOSITY_VERBOSE,
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )

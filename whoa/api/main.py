"""Application assembly: settings, per-request containers, web API and commands."""

import logging
import os
from functools import partial
from typing import Any, Dict, Type

from fastapi import APIRouter, FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from whoa import __version__
from whoa.config import get_config
from whoa.core import Container, PackageRegistry
from whoa.core.package_loader import PackageLoader
from whoa.packages.application import ApplicationSettings
from whoa.packages.session import SessionSettings
from whoa.settings import FileSettingsProvider, InstanceSettingsProvider
from .middleware import RequestContainerMiddleware, ThrowableHandlerMiddleware

logger = logging.getLogger(__name__)

router = APIRouter()


class Application:
    """
    Application built from enabled packages.

    Settings are loaded once from the configured settings folder; package
    default settings are added for every settings class the application does
    not provide itself. A new container is created for every request and
    command.
    """

    def __init__(self, config: Dict[str, Any] = None, package_registry: PackageRegistry = None):
        self.config = config if config is not None else get_config()

        if package_registry is None:
            package_registry = PackageRegistry()
            loader = PackageLoader(config=self.config, package_registry=package_registry)
            if not loader.load_all_packages():
                raise RuntimeError("Failed to load application packages")

        self.registry = package_registry
        self._settings_provider = None

    def get_settings_provider(self) -> InstanceSettingsProvider:
        if self._settings_provider is None:
            self._settings_provider = self.create_settings_provider()
        return self._settings_provider

    def create_settings_provider(self) -> InstanceSettingsProvider:
        provider = FileSettingsProvider(self.config)

        section = self.config.get("settings") or {}
        folder = section.get("folder")
        if folder:
            provider.load(os.path.join(folder, section.get("file_mask") or "*.py"))

        for settings_class in self.registry.get_all_settings():
            if provider.is_registered(settings_class):
                logger.debug(f"Application overrides default settings {settings_class.__name__}")
                continue
            provider.register(settings_class())

        return provider

    def create_container(self) -> Container:
        container = Container()
        container[InstanceSettingsProvider] = self.get_settings_provider()

        for configurator in self.registry.get_all_configurators():
            configurator.configure_container(container)

        return container

    def create_api(self) -> FastAPI:
        provider = self.get_settings_provider()
        name = "Whoa"
        if provider.has(ApplicationSettings):
            name = provider.get(ApplicationSettings)[ApplicationSettings.KEY_APP_NAME]

        api = FastAPI(
            title=name,
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc",
        )
        api.state.application = self

        # add_middleware puts a middleware outside of the ones added before
        for middleware in reversed(self.registry.get_all_middleware()):
            api.add_middleware(middleware)
        api.add_middleware(ThrowableHandlerMiddleware)
        api.add_middleware(RequestContainerMiddleware, application=self)

        if provider.has(SessionSettings):
            session = provider.get(SessionSettings)
            api.add_middleware(
                SessionMiddleware,
                secret_key=session[SessionSettings.KEY_SECRET_KEY],
                session_cookie=session[SessionSettings.KEY_COOKIE_NAME],
                max_age=session[SessionSettings.KEY_MAX_AGE],
                same_site=session[SessionSettings.KEY_SAME_SITE],
                https_only=session[SessionSettings.KEY_HTTPS_ONLY],
            )

        api.include_router(router)

        logger.info(f"Created API '{name}' with {len(self.registry.get_enabled())} packages")
        return api

    def get_commands(self) -> Dict[str, Type]:
        return {command.get_name(): command for command in self.registry.get_all_commands()}

    def run_command(self, command_class: Type, io):
        """Execute a command inside a fresh container, wrapped by the command middleware."""
        container = self.create_container()

        def handler(command_io):
            return command_class.execute(container, command_io)

        for middleware in reversed(self.registry.get_all_command_middleware()):
            handler = partial(middleware.handle, next_handler=handler, container=container)

        logger.info(f"Running command {command_class.get_name()}")
        handler(io)


@router.get("/", tags=["general"])
async def root(request: Request):
    """Root endpoint - application information."""
    application: Application = request.app.state.application
    return {
        "name": request.app.title,
        "version": __version__,
        "status": "online",
        "docs": "/docs",
        "packages": [package.name for package in application.registry.get_enabled()],
    }


@router.get("/health", tags=["general"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


def create_app(config: Dict[str, Any] = None) -> FastAPI:
    """Build the web API for a configuration (the loaded one by default)."""
    return Application(config).create_api()

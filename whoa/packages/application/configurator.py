"""Container configurator for core application services."""

import logging

from whoa.class_loader import import_string
from whoa.core import Container, ContainerConfigurator
from whoa.exception_handlers import (
    HtmlThrowableHandler,
    JsonThrowableHandler,
    TextThrowableHandler,
    ThrowableHandler,
)
from whoa.filesystem import FileSystem
from whoa.http import RequestStorage
from whoa.settings import InstanceSettingsProvider
from .settings import ApplicationSettings

logger = logging.getLogger(__name__)

THROWABLE_HANDLERS = {
    "text": TextThrowableHandler,
    "html": HtmlThrowableHandler,
    "json": JsonThrowableHandler,
}


class ApplicationContainerConfigurator(ContainerConfigurator):
    """Registers the file system, request storage and exception handler."""

    @classmethod
    def configure_container(cls, container: Container):
        container[RequestStorage] = RequestStorage()
        container.share(FileSystem, lambda c: FileSystem())
        container.share(ThrowableHandler, cls.create_throwable_handler)

    @staticmethod
    def create_throwable_handler(container: Container) -> ThrowableHandler:
        settings = container.get(InstanceSettingsProvider).get(ApplicationSettings)
        name = settings[ApplicationSettings.KEY_EXCEPTION_HANDLER]

        handler_class = THROWABLE_HANDLERS.get(name)
        if handler_class is None:
            handler_class = import_string(name)
            if not isinstance(handler_class, type) or not issubclass(handler_class, ThrowableHandler):
                raise ValueError(f"`{name}` is not an exception handler class.")

        logger.debug(f"Using exception handler {handler_class.__name__}")
        return handler_class()

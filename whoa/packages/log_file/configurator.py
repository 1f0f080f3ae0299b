"""Container configurator for the application logger."""

import logging
import os

from whoa.core import Container, ContainerConfigurator
from whoa.settings import InstanceSettingsProvider
from .settings import LogFileSettings


class LogFileContainerConfigurator(ContainerConfigurator):
    """Registers ``logging.Logger`` writing to the configured log file."""

    @classmethod
    def configure_container(cls, container: Container):
        container.share(logging.Logger, cls.create_logger)

    @staticmethod
    def create_logger(container: Container) -> logging.Logger:
        settings = container.get(InstanceSettingsProvider).get(LogFileSettings)
        app_logger = logging.getLogger(settings[LogFileSettings.KEY_LOGGER_NAME])

        if not settings[LogFileSettings.KEY_IS_ENABLED]:
            if not app_logger.handlers:
                app_logger.addHandler(logging.NullHandler())
            return app_logger

        path = os.path.abspath(os.path.join(
            settings[LogFileSettings.KEY_LOG_FOLDER], settings[LogFileSettings.KEY_LOG_FILE]
        ))
        app_logger.setLevel(settings[LogFileSettings.KEY_LOG_LEVEL])

        # a container is created per request, the handler is added once
        is_attached = any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == path
            for handler in app_logger.handlers
        )
        if not is_attached:
            handler = logging.FileHandler(path, encoding="utf-8")
            handler.setFormatter(logging.Formatter(settings[LogFileSettings.KEY_LOG_FORMAT]))
            app_logger.addHandler(handler)

        return app_logger

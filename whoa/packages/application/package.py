"""Application package definition."""

from whoa.core import Package, PackageConfig
from .configurator import ApplicationContainerConfigurator
from .settings import ApplicationSettings


class ApplicationPackage(Package):
    """Core services every application needs."""

    DEFAULT_PRIORITY = 10

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [ApplicationContainerConfigurator]
        self._settings = [ApplicationSettings]

    @property
    def name(self) -> str:
        return "application"

    @property
    def display_name(self) -> str:
        return "Application"

    @property
    def description(self) -> str:
        return "File system, request storage and exception handling"

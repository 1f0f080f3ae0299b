"""Log file package definition."""

from whoa.core import Package, PackageConfig
from .configurator import LogFileContainerConfigurator
from .settings import LogFileSettings


class LogFilePackage(Package):
    """Application logger writing into a log file."""

    DEFAULT_PRIORITY = 20

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [LogFileContainerConfigurator]
        self._settings = [LogFileSettings]

    @property
    def name(self) -> str:
        return "log_file"

    @property
    def display_name(self) -> str:
        return "Log File"

    @property
    def description(self) -> str:
        return "Application logger with a file handler"

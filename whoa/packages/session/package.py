"""Session package definition."""

from whoa.core import Package, PackageConfig
from .configurator import SessionContainerConfigurator
from .settings import SessionSettings


class SessionPackage(Package):
    """Cookie based session."""

    DEFAULT_PRIORITY = 40

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [SessionContainerConfigurator]
        self._settings = [SessionSettings]

    @property
    def name(self) -> str:
        return "session"

    @property
    def display_name(self) -> str:
        return "Session"

    @property
    def description(self) -> str:
        return "Signed cookie session available from the container"

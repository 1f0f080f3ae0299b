"""Data package definition."""

from whoa.commands import DataCommand
from whoa.core import Package, PackageConfig
from whoa.data import DatabaseSettings, DataSettings
from .configurator import DataContainerConfigurator


class DataPackage(Package):
    """Database access, models schema, migrations and seeds."""

    DEFAULT_PRIORITY = 30

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._configurators = [DataContainerConfigurator]
        self._settings = [DataSettings, DatabaseSettings]
        self._commands = [DataCommand]

    @property
    def name(self) -> str:
        return "data"

    @property
    def display_name(self) -> str:
        return "Data"

    @property
    def description(self) -> str:
        return "SQLAlchemy engine, models schema, migrations and seeds"

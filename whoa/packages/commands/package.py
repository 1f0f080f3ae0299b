"""Commands package definition."""

from whoa.commands import CommandSettings, ImpersonationMiddleware, MakeCommand, ScaffoldSettings
from whoa.core import Package, PackageConfig


class CommandsPackage(Package):
    """Scaffolding command and impersonation of the command user."""

    DEFAULT_PRIORITY = 70

    def __init__(self, config: PackageConfig = None):
        super().__init__(config)

        self._settings = [CommandSettings, ScaffoldSettings]
        self._commands = [MakeCommand]
        self._command_middleware = [ImpersonationMiddleware]

    @property
    def name(self) -> str:
        return "commands"

    @property
    def display_name(self) -> str:
        return "Commands"

    @property
    def description(self) -> str:
        return "Code scaffolding and console user impersonation"

"""Console commands."""

from .io import CommandIO
from .base import Command, CommandMiddleware
from .settings import CommandSettings, ScaffoldSettings
from .data_command import DataCommand
from .make_command import MakeCommand
from .impersonation import BaseImpersonationMiddleware, CliPassport, ImpersonationMiddleware

__all__ = [
    "CommandIO",
    "Command",
    "CommandMiddleware",
    "CommandSettings",
    "ScaffoldSettings",
    "DataCommand",
    "MakeCommand",
    "BaseImpersonationMiddleware",
    "CliPassport",
    "ImpersonationMiddleware",
]

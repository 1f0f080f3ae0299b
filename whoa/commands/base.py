"""Command and command middleware base classes."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from .io import CommandIO


class Command(ABC):
    """
    Console command.

    Arguments and options are described with dicts::

        {"name": "action", "description": "...", "required": True}
        {"name": "path", "shortcut": "i", "description": "...", "has_value": True}
    """

    NAME: str = None
    DESCRIPTION: str = ""
    HELP: str = ""

    @classmethod
    def get_name(cls) -> str:
        return cls.NAME

    @classmethod
    def get_description(cls) -> str:
        return cls.DESCRIPTION

    @classmethod
    def get_help(cls) -> str:
        return cls.HELP

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        return []

    @classmethod
    def get_options(cls) -> List[Dict[str, Any]]:
        return []

    @classmethod
    @abstractmethod
    def execute(cls, container, io: CommandIO):
        pass


class CommandMiddleware(ABC):
    """Runs before a command, ``next_handler(io)`` continues the chain."""

    @classmethod
    @abstractmethod
    def handle(cls, io: CommandIO, next_handler: Callable[[CommandIO], None], container):
        pass

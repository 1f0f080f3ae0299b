"""Console input and output for commands."""

import logging
import sys
from typing import Any, Dict, TextIO

logger = logging.getLogger(__name__)


class CommandIO:
    """Command arguments, options and verbosity-aware output."""

    VERBOSITY_QUIET = 0
    VERBOSITY_NORMAL = 1
    VERBOSITY_VERBOSE = 2
    VERBOSITY_VERY_VERBOSE = 3
    VERBOSITY_DEBUG = 4

    def __init__(self, arguments: Dict[str, Any] = None, options: Dict[str, Any] = None,
                 verbosity: int = VERBOSITY_NORMAL, stdout: TextIO = None, stderr: TextIO = None):
        self._arguments = dict(arguments or {})
        self._options = dict(options or {})
        self.verbosity = verbosity
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    def has_argument(self, name: str) -> bool:
        return name in self._arguments

    def get_argument(self, name: str):
        return self._arguments[name]

    def get_arguments(self) -> Dict[str, Any]:
        return self._arguments

    def has_option(self, name: str) -> bool:
        return self._options.get(name) is not None

    def get_option(self, name: str):
        return self._options[name]

    def get_options(self) -> Dict[str, Any]:
        return self._options

    def write_info(self, message: str, verbosity: int = VERBOSITY_NORMAL) -> "CommandIO":
        if self.verbosity >= verbosity:
            print(message, file=self._stdout)
        return self

    def write_warning(self, message: str, verbosity: int = VERBOSITY_NORMAL) -> "CommandIO":
        logger.warning(message)
        if self.verbosity >= verbosity:
            print(f"Warning: {message}", file=self._stderr)
        return self

    def write_error(self, message: str, verbosity: int = VERBOSITY_QUIET) -> "CommandIO":
        logger.error(message)
        if self.verbosity >= verbosity:
            print(f"Error: {message}", file=self._stderr)
        return self

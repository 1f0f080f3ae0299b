"""Settings provider loading settings classes from Python files."""

import inspect
import logging
from typing import Any, Dict

from whoa.class_loader import select_classes
from whoa.exceptions import InvalidSettingsClassError
from .base import Settings
from .instance_provider import InstanceSettingsProvider

logger = logging.getLogger(__name__)


class FileSettingsProvider(InstanceSettingsProvider):
    """Registers every concrete settings class found in matching files."""

    def __init__(self, app_config: Dict[str, Any]):
        super().__init__(app_config)

    def load(self, path_pattern: str) -> "FileSettingsProvider":
        """
        Load settings from files matching a glob pattern.

        Args:
            path_pattern: Glob such as ``/app/settings/*.py``

        Returns:
            The provider itself
        """
        count = 0
        for settings_class in select_classes(path_pattern, Settings):
            self._check_do_not_have_required_parameters_on_create(settings_class)
            self.register(settings_class())
            count += 1

        logger.info(f"Loaded {count} settings classes from {path_pattern}")
        return self

    @staticmethod
    def _check_do_not_have_required_parameters_on_create(candidate) -> bool:
        """Make sure a settings instance can be created without arguments."""
        if not inspect.isclass(candidate) or inspect.isabstract(candidate):
            raise InvalidSettingsClassError(str(candidate))

        try:
            signature = inspect.signature(candidate)
        except (TypeError, ValueError) as e:
            raise InvalidSettingsClassError(candidate.__qualname__) from e

        for parameter in signature.parameters.values():
            is_required = parameter.default is inspect.Parameter.empty and parameter.kind not in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            )
            if is_required:
                raise InvalidSettingsClassError(candidate.__qualname__)

        return True

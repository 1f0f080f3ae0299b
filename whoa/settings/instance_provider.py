"""Settings provider resolving settings by class hierarchy."""

import logging
from abc import ABC
from typing import Any, Dict, List, Optional, Type

from whoa.exceptions import (
    AlreadyRegisteredSettingsError,
    AmbiguousSettingsError,
    NotRegisteredSettingsError,
)
from .base import Settings

logger = logging.getLogger(__name__)

# Bases every settings class shares which are never used as lookup keys
_IGNORED_BASES = (object, ABC)


class InstanceSettingsProvider:
    """
    Provides settings registered as instances.

    Every registered instance can be found by its own class and by each of its
    base classes. When several instances share a base class the most specific
    one (a subclass of all the others) is selected; if there is no such
    instance the base class is ambiguous.
    """

    def __init__(self, app_config: Dict[str, Any]):
        self._app_config = app_config
        self._instances: Dict[Type, Settings] = {}
        self._is_processed = True
        self._settings_map: Dict[Type, int] = {}
        self._settings_data: Dict[int, Dict[str, Any]] = {}
        self._ambiguous_map: Dict[Type, bool] = {}

    def has(self, cls: Type) -> bool:
        return cls in self.get_settings_map()

    def get(self, cls: Type) -> Dict[str, Any]:
        if not self.has(cls):
            if cls in self._ambiguous_map:
                raise AmbiguousSettingsError(_class_name(cls))
            raise NotRegisteredSettingsError(_class_name(cls))

        index = self._settings_map[cls]
        return self._settings_data[index]

    def register(self, settings: Settings) -> "InstanceSettingsProvider":
        cls = type(settings)
        if cls in self._instances:
            raise AlreadyRegisteredSettingsError(_class_name(cls))

        self._instances[cls] = settings
        self._is_processed = False
        logger.debug(f"Registered settings {_class_name(cls)}")

        return self

    def is_registered(self, cls: Type) -> bool:
        """Whether an instance of ``cls`` or of its subclass has been registered."""
        if any(isinstance(instance, cls) for instance in self._instances.values()):
            return True
        return self._is_processed and cls in self._settings_map

    def get_settings_map(self) -> Dict[Type, int]:
        self._check_instances_are_processed()
        return self._settings_map

    def get_settings_data(self) -> Dict[int, Dict[str, Any]]:
        self._check_instances_are_processed()
        return self._settings_data

    def get_ambiguous_map(self) -> Dict[Type, bool]:
        self._check_instances_are_processed()
        return self._ambiguous_map

    def is_ambiguous(self, cls: Type) -> bool:
        return cls in self.get_ambiguous_map()

    def get_application_configuration(self) -> Dict[str, Any]:
        return self._app_config

    def get_data(self) -> list:
        """Processed state suitable for caching."""
        self._check_instances_are_processed()
        return [self._app_config, self._settings_map, self._settings_data, self._ambiguous_map]

    def set_data(self, data: list) -> "InstanceSettingsProvider":
        self._app_config, self._settings_map, self._settings_data, self._ambiguous_map = data
        self._instances = {}
        self._is_processed = True
        return self

    def _check_instances_are_processed(self):
        if not self._is_processed:
            self._process_instances()

    def _process_instances(self):
        preliminary_map: Dict[Type, List[Settings]] = {}
        for instance in self._instances.values():
            for cls in type(instance).__mro__:
                if cls in _IGNORED_BASES:
                    continue
                preliminary_map.setdefault(cls, []).append(instance)

        settings_data: Dict[int, Dict[str, Any]] = {}
        index_by_id: Dict[int, int] = {}

        def get_index(instance: Settings) -> int:
            key = id(instance)
            if key not in index_by_id:
                index = len(settings_data)
                index_by_id[key] = index
                settings_data[index] = instance.get(self._app_config)
            return index_by_id[key]

        settings_map: Dict[Type, int] = {}
        ambiguous_map: Dict[Type, bool] = {}
        for cls, instances in preliminary_map.items():
            selected = instances[0] if len(instances) == 1 else self._select_child_settings(instances)
            if selected is not None:
                settings_map[cls] = get_index(selected)
            else:
                ambiguous_map[cls] = True

        self._settings_map = settings_map
        self._settings_data = settings_data
        self._ambiguous_map = ambiguous_map
        self._is_processed = True

    def _select_child_settings(self, instances: List[Settings]) -> Optional[Settings]:
        selected = instances[0]
        for instance in instances[1:]:
            selected = self._select_child_settings_among_two(selected, instance)
            if selected is None:
                break
        return selected

    @staticmethod
    def _select_child_settings_among_two(first: Settings, second: Settings) -> Optional[Settings]:
        first_cls, second_cls = type(first), type(second)
        if issubclass(first_cls, second_cls):
            return first
        if issubclass(second_cls, first_cls):
            return second
        return None


def _class_name(cls) -> str:
    if isinstance(cls, type):
        return f"{cls.__module__}.{cls.__qualname__}"
    return str(cls)

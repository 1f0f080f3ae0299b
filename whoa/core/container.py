"""Dependency injection container."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable

from whoa.exceptions import ServiceNotFoundError


class Container:
    """
    Service container.

    Values assigned with ``container[key] = value`` are returned as they are.
    Factories registered with ``share`` are called with the container on the
    first ``get`` and the result is reused afterwards.
    """

    def __init__(self):
        self._values: Dict[Hashable, Any] = {}
        self._factories: Dict[Hashable, Callable[["Container"], Any]] = {}

    def __setitem__(self, key: Hashable, value: Any):
        self._factories.pop(key, None)
        self._values[key] = value

    def __getitem__(self, key: Hashable) -> Any:
        return self.get(key)

    def __delitem__(self, key: Hashable):
        if not self.has(key):
            raise ServiceNotFoundError(key)
        self._values.pop(key, None)
        self._factories.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def share(self, key: Hashable, factory: Callable[["Container"], Any]) -> "Container":
        """Register a factory whose result is created once and then shared."""
        self._values.pop(key, None)
        self._factories[key] = factory
        return self

    def has(self, key: Hashable) -> bool:
        return key in self._values or key in self._factories

    def get(self, key: Hashable) -> Any:
        if key in self._values:
            return self._values[key]

        factory = self._factories.get(key)
        if factory is None:
            raise ServiceNotFoundError(key)

        value = factory(self)
        # factory could have replaced itself while running
        if key in self._factories:
            del self._factories[key]
        self._values[key] = value

        return value

    def keys(self):
        return list(self._values.keys()) + list(self._factories.keys())

    def __repr__(self):
        return f"<Container: {len(self._values)} values, {len(self._factories)} factories>"


class ContainerConfigurator(ABC):
    """Base class for package container configurators."""

    @classmethod
    @abstractmethod
    def configure_container(cls, container: Container):
        pass

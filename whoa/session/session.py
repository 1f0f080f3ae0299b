"""Session access through replaceable storage functions."""

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass
class SessionFunctions:
    """Callables used by :class:`Session` to reach the underlying storage."""
    retrieve: Callable[[Any], Any]
    put: Callable[[Any, Any], None]
    has: Callable[[Any], bool]
    delete: Callable[[Any], None]
    iterate: Callable[[], Iterator]

    @classmethod
    def from_mapping(cls, storage) -> "SessionFunctions":
        """Functions working over a mutable mapping such as ``request.session``."""

        def delete(key):
            storage.pop(key, None)

        return cls(
            retrieve=storage.__getitem__,
            put=storage.__setitem__,
            has=storage.__contains__,
            delete=delete,
            iterate=lambda: iter(list(storage.items())),
        )


def _check_key(key):
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise TypeError(f"Session key must be str or int, got {type(key).__name__}")


class Session(MutableMapping):
    """
    Session storage.

    Keys must be strings or integers. Iteration yields ``(key, value)``
    pairs as provided by the iterate function.
    """

    def __init__(self, functions: SessionFunctions):
        self._functions = functions

    def __getitem__(self, key):
        _check_key(key)
        return self._functions.retrieve(key)

    def __setitem__(self, key, value):
        _check_key(key)
        self._functions.put(key, value)

    def __delitem__(self, key):
        _check_key(key)
        self._functions.delete(key)

    def __contains__(self, key) -> bool:
        _check_key(key)
        return bool(self._functions.has(key))

    def __iter__(self):
        for key, _ in self._functions.iterate():
            yield key

    def __len__(self) -> int:
        return sum(1 for _ in self._functions.iterate())

    def items_iterator(self) -> Iterator:
        return self._functions.iterate()

    @property
    def functions(self) -> SessionFunctions:
        return self._functions

"""Keyed state store port.

Each aggregation stage owns exactly one store and is its only writer, so
a read-modify-write on a key is never interleaved with another writer.
"""

from abc import ABC, abstractmethod


class StateStore(ABC):
    """Abstract key/value store holding one current value per key."""

    @abstractmethod
    def get(self, key):
        """Return the value stored for ``key``, or None when absent."""
        ...

    @abstractmethod
    def put(self, key, value) -> None:
        """Store ``value`` as the current value for ``key``."""
        ...

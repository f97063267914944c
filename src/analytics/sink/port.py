"""Output sink port (abstract interface).

Every derived view is published as ``(key, value)`` records on a named
channel. Adapters decide where the records go; a failing adapter raises
and stops the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OutputRecord:
    """A record published on an output channel."""

    channel: str
    key: Any
    value: Any


class OutputSink(ABC):
    """Abstract output sink interface."""

    @abstractmethod
    def send(self, channel: str, key: Any, value: Any) -> None:
        """Publish ``(key, value)`` on ``channel``."""
        ...

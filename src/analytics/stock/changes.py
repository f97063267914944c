"""Changelog records passed between pipeline stages.

A ``Change`` is one update to a keyed table: the value the key held before
and the value it holds now. Regrouping a table turns every change into
``Retracted``/``Added`` observations on the target key.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Change:
    """Update of ``key`` from ``old`` (None when first seen) to ``new``."""

    key: Any
    old: Any
    new: Any


@dataclass(frozen=True)
class Added:
    """Accumulator for ``key`` after folding in a new contribution."""

    key: Any
    value: Any


@dataclass(frozen=True)
class Retracted:
    """Accumulator for ``key`` after undoing a previous contribution."""

    key: Any
    value: Any


Observation = Added | Retracted

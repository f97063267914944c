"""Regroup a changelog table under a new key with paired add/subtract reducers.

Each source key holds one current value. When it changes from ``old`` to
``new``, the old contribution is first retracted from the target key it
was counted under, and only then is the new contribution added. Without
the retraction a regrouped total would count every historical value.

The accumulator's ``last_update`` is carried along but never compared:
last-write-wins applies to source keys only.
"""

import structlog

from analytics.stock.changes import Added, Retracted
from analytics.stock.quantity import Quantity

logger = structlog.get_logger(__name__)


class RegroupAggregator:
    """Re-key a changelog table and reduce it per target key.

    ``select_key(source_key, value)`` picks the target key. ``adder`` and
    ``subtractor`` are ``(acc, value) -> acc`` reducers; ``initializer``
    builds the accumulator for a target key seen for the first time.
    """

    def __init__(self, store, select_key, initializer, adder, subtractor, name="regroup"):
        self.store = store
        self.select_key = select_key
        self.initializer = initializer
        self.adder = adder
        self.subtractor = subtractor
        self.name = name

    def _fold(self, target, value, reducer):
        acc = self.store.get(target)
        if acc is None:
            acc = self.initializer()
        acc = reducer(acc, value)
        self.store.put(target, acc)
        return acc

    def apply(self, change):
        """Apply one source-key change and return its observations, retraction first."""
        observations = []
        if change.old is not None:
            target = self.select_key(change.key, change.old)
            observations.append(Retracted(target, self._fold(target, change.old, self.subtractor)))
        if change.new is not None:
            target = self.select_key(change.key, change.new)
            observations.append(Added(target, self._fold(target, change.new, self.adder)))

        logger.debug(
            "Change regrouped",
            stage=self.name,
            source_key=list(change.key) if isinstance(change.key, tuple) else change.key,
            observations=len(observations),
        )
        return observations

    def current(self, target):
        return self.store.get(target)


def _add(acc, value):
    return acc.sum(value)


def _subtract(acc, value):
    return acc.subtract(value)


class ItemRegroupAggregator(RegroupAggregator):
    """Per-item totals of the (warehouse_id, item_id) quantity table."""

    def __init__(self, store):
        super().__init__(
            store,
            select_key=lambda key, value: key[1],
            initializer=Quantity.empty,
            adder=_add,
            subtractor=_subtract,
            name="item",
        )


class WarehouseRegroupAggregator(RegroupAggregator):
    """Per-warehouse totals of the (warehouse_id, item_id) quantity table."""

    def __init__(self, store):
        super().__init__(
            store,
            select_key=lambda key, value: key[0],
            initializer=Quantity.empty,
            adder=_add,
            subtractor=_subtract,
            name="warehouse",
        )

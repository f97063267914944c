"""Last-write-wins aggregation of stock quantities per (warehouse, item)."""

import structlog

from analytics.stock.changes import Change
from analytics.stock.quantity import MIN_TIMESTAMP, Quantity

logger = structlog.get_logger(__name__)


def last_write_wins(acc, event):
    """Fold ``event`` into ``acc``, keeping ``acc`` when it is strictly newer.

    Ties go to the incoming event, so replaying the same event is a no-op.
    """
    if acc.is_after(event.last_update):
        return acc
    return Quantity.of(event)


class StockAggregator:
    """Maintains the latest accepted ``Quantity`` for each (warehouse, item) key.

    Every applied event yields a ``Change`` for its key, even when the event
    was rejected as stale, so downstream tables see the current value.
    """

    def __init__(self, store):
        self.store = store

    def apply(self, key, event):
        key = tuple(key)
        old = self.store.get(key)
        acc = old if old is not None else Quantity.empty(MIN_TIMESTAMP)

        new = last_write_wins(acc, event)
        if new is acc:
            logger.debug(
                "Stale stock update rejected",
                key=list(key),
                current_update=acc.last_update.isoformat(),
                rejected_update=event.last_update.isoformat(),
                rejected_quantity=event.quantity,
            )
        self.store.put(key, new)
        return Change(key=key, old=old, new=new)

    def current(self, key):
        return self.store.get(tuple(key))

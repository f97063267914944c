"""Track the observed min/max of each item's global stock."""

import structlog

from analytics.stock.changes import Observation, Retracted
from analytics.stock.quantity import GlobalStockQuantity, MinMax

logger = structlog.get_logger(__name__)


def tag(observation: Observation) -> GlobalStockQuantity:
    """Re-emit a per-item total as a ``GlobalStockQuantity``.

    Totals observed while a warehouse's old contribution is retracted are
    flagged ``is_retraction``.
    """
    return GlobalStockQuantity(
        quantity=observation.value.quantity,
        is_retraction=isinstance(observation, Retracted),
    )


class GlobalRangeTracker:
    """Maintains a widening ``MinMax`` per item from non-retraction totals.

    A regroup first retracts a warehouse's old contribution and only then
    adds the new one. The total visible in between was never a real stock
    level, so retraction-flagged quantities leave the range untouched.
    """

    def __init__(self, store):
        self.store = store

    def observe(self, item_id, global_quantity):
        """Fold ``global_quantity`` into the item's range and return the current range."""
        current = self.store.get(item_id)
        if current is None:
            current = MinMax.empty()

        if global_quantity.is_retraction:
            logger.debug(
                "Retraction ignored by range tracker",
                item_id=item_id,
                quantity=global_quantity.quantity,
            )
            return current

        widened = current.widen(global_quantity.quantity)
        self.store.put(item_id, widened)
        return widened

    def apply(self, observation):
        """Tag a per-item observation and track it. Returns ``(GlobalStockQuantity, MinMax)``."""
        global_quantity = tag(observation)
        return global_quantity, self.observe(observation.key, global_quantity)

    def current(self, item_id):
        return self.store.get(item_id)

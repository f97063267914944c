"""Join warehouse master records against per-warehouse stock totals."""

from functools import partial

import structlog

from analytics.capacity.allocation import Allocation, WarehouseKey

logger = structlog.get_logger(__name__)


class WarehouseCapacityJoiner:
    """Stream-table join of warehouse events with the per-warehouse stock table.

    The join only fires when the table side holds a total for the warehouse.
    ``allocate(quantity, capacity)`` is the allocation policy.
    """

    def __init__(self, totals, allocate=None, low=0.25, high=0.85):
        self.totals = totals
        self.allocate = allocate or partial(Allocation.calculate, low=low, high=high)

    def join(self, warehouse_id, warehouse):
        total = self.totals.get(warehouse_id)
        if total is None:
            logger.debug("No stock total yet for warehouse, join skipped", warehouse_id=warehouse_id)
            return None

        allocation = self.allocate(total.quantity, warehouse.storage_capacity)
        return WarehouseKey.of(warehouse), allocation

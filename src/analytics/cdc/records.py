"""Typed domain records decoded from CDC "after" images.

Both records are immutable facts: the state of a database row right after
a change was committed.
"""

from protean.fields import DateTime, Float, Integer, String

from analytics.domain import analytics


@analytics.value_object
class StockQuantityEvent:
    """Quantity of one stock item held at one warehouse, as of ``last_update``."""

    warehouse_id = Integer(required=True)
    item_id = Integer(required=True)
    quantity = Integer(required=True)
    last_update = DateTime(required=True)

    @property
    def key(self):
        return (self.warehouse_id, self.item_id)


@analytics.value_object
class WarehouseEvent:
    """Master record of a warehouse: location and storage capacity."""

    warehouse_id = Integer(required=True)
    name = String(required=True, max_length=255)
    latitude = Float(required=True)
    longitude = Float(required=True)
    storage_capacity = Integer(required=True)

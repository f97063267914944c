"""Warehouse item stock: latest accepted quantity per (warehouse, item)."""

from protean.fields import DateTime, Integer, String

from analytics.domain import analytics
from analytics.stock.quantity import Quantity, as_utc


@analytics.projection
class WarehouseItemStock:
    entry_key = String(identifier=True, required=True, max_length=64)  # "warehouse_id::item_id"
    warehouse_id = Integer(required=True)
    item_id = Integer(required=True)
    quantity = Integer(default=0)
    last_update = DateTime(required=True)

    @classmethod
    def from_state(cls, entry_key, key, value):
        warehouse_id, item_id = key
        return cls(
            entry_key=entry_key,
            warehouse_id=warehouse_id,
            item_id=item_id,
            quantity=value.quantity,
            last_update=value.last_update,
        )

    def apply_state(self, value):
        self.quantity = value.quantity
        self.last_update = value.last_update

    def to_state(self):
        return Quantity(quantity=self.quantity, last_update=as_utc(self.last_update))

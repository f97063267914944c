"""Warehouse stock total: quantity per warehouse summed across items."""

from protean.fields import DateTime, Integer, String

from analytics.domain import analytics
from analytics.stock.quantity import Quantity, as_utc


@analytics.projection
class WarehouseStockTotal:
    warehouse_key = String(identifier=True, required=True, max_length=32)
    warehouse_id = Integer(required=True)
    quantity = Integer(default=0)
    last_update = DateTime(required=True)

    @classmethod
    def from_state(cls, warehouse_key, key, value):
        return cls(
            warehouse_key=warehouse_key,
            warehouse_id=key,
            quantity=value.quantity,
            last_update=value.last_update,
        )

    def apply_state(self, value):
        self.quantity = value.quantity
        self.last_update = value.last_update

    def to_state(self):
        return Quantity(quantity=self.quantity, last_update=as_utc(self.last_update))

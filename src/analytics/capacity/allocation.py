"""Warehouse capacity allocation value objects."""

from enum import Enum

from protean.fields import Float, Integer, String

from analytics.domain import analytics


class AllocationLevel(Enum):
    EMPTY = "Empty"
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"
    OVERFLOW = "Overflow"


@analytics.value_object
class WarehouseKey:
    """Denormalized warehouse identity used to key capacity allocations."""

    warehouse_id = Integer(required=True)
    name = String(required=True, max_length=255)
    latitude = Float(required=True)
    longitude = Float(required=True)

    @classmethod
    def of(cls, warehouse):
        return cls(
            warehouse_id=warehouse.warehouse_id,
            name=warehouse.name,
            latitude=warehouse.latitude,
            longitude=warehouse.longitude,
        )


@analytics.value_object
class Allocation:
    """How much of a warehouse's storage capacity its stock occupies.

    ``ratio`` is None when the warehouse reports no usable capacity.
    """

    quantity = Integer(required=True)
    capacity = Integer(required=True)
    ratio = Float()
    level = String(choices=AllocationLevel, required=True)

    @classmethod
    def calculate(cls, quantity, capacity, low=0.25, high=0.85):
        if capacity <= 0:
            ratio = None
            level = AllocationLevel.OVERFLOW if quantity > 0 else AllocationLevel.EMPTY
        else:
            ratio = quantity / capacity
            if quantity <= 0:
                level = AllocationLevel.EMPTY
            elif ratio > 1.0:
                level = AllocationLevel.OVERFLOW
            elif ratio >= high:
                level = AllocationLevel.HIGH
            elif ratio < low:
                level = AllocationLevel.LOW
            else:
                level = AllocationLevel.NORMAL

        return cls(quantity=quantity, capacity=capacity, ratio=ratio, level=level.value)

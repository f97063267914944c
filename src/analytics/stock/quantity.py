"""Quantity value objects carried between pipeline stages."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Integer

from analytics.domain import analytics

MIN_TIMESTAMP = datetime.min.replace(tzinfo=UTC)

MAX_INT = 2**31 - 1
MIN_INT = -(2**31)


def as_utc(timestamp):
    """Return ``timestamp`` as an aware UTC datetime (naive values are taken as UTC)."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC)


def newer(first, second):
    first, second = as_utc(first), as_utc(second)
    return first if first > second else second


@analytics.value_object
class Quantity:
    """Latest known quantity for some key.

    Ordered by ``last_update``. ``sum`` and ``subtract`` combine quantities
    and keep the newer of the two stamps.
    """

    quantity = Integer(required=True)
    last_update = DateTime(required=True)

    @classmethod
    def empty(cls, last_update=MIN_TIMESTAMP):
        return cls(quantity=0, last_update=last_update)

    @classmethod
    def of(cls, event):
        """Build the quantity reported by a ``StockQuantityEvent``."""
        return cls(quantity=event.quantity, last_update=as_utc(event.last_update))

    def is_after(self, timestamp):
        return as_utc(self.last_update) > as_utc(timestamp)

    def sum(self, other):
        return Quantity(
            quantity=self.quantity + other.quantity,
            last_update=newer(self.last_update, other.last_update),
        )

    def subtract(self, other):
        return Quantity(
            quantity=self.quantity - other.quantity,
            last_update=newer(self.last_update, other.last_update),
        )


@analytics.value_object
class GlobalStockQuantity:
    """Global stock of an item across warehouses.

    ``is_retraction`` marks values produced while undoing a warehouse's
    previous contribution. Those values are intermediate, not observed totals.
    """

    quantity = Integer(required=True)
    is_retraction = Boolean(default=False)


@analytics.value_object
class MinMax:
    """Observed range of an item's global stock. Only ever widens."""

    minimum = Integer(required=True)
    maximum = Integer(required=True)

    @classmethod
    def empty(cls):
        return cls(minimum=MAX_INT, maximum=MIN_INT)

    @property
    def is_empty(self):
        return self.minimum > self.maximum

    def widen(self, value):
        return MinMax(minimum=min(self.minimum, value), maximum=max(self.maximum, value))

"""Stock range: observed min/max of each item's global stock."""

from protean.fields import Integer, String

from analytics.domain import analytics
from analytics.stock.quantity import MinMax


@analytics.projection
class StockRange:
    item_key = String(identifier=True, required=True, max_length=32)
    item_id = Integer(required=True)
    minimum = Integer(required=True)
    maximum = Integer(required=True)

    @classmethod
    def from_state(cls, item_key, key, value):
        return cls(item_key=item_key, item_id=key, minimum=value.minimum, maximum=value.maximum)

    def apply_state(self, value):
        self.minimum = value.minimum
        self.maximum = value.maximum

    def to_state(self):
        return MinMax(minimum=self.minimum, maximum=self.maximum)

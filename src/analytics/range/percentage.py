"""Position of an item's global stock within its observed range."""

import math

import structlog

from analytics.errors import DivisionByZeroRange

logger = structlog.get_logger(__name__)


def position_within(item_id, quantity, min_max):
    """Return ``(quantity - min) / (max - min)``.

    Raises ``DivisionByZeroRange`` when the range holds a single value.
    """
    span = min_max.maximum - min_max.minimum
    if span == 0:
        raise DivisionByZeroRange(item_id, quantity)
    return (quantity - min_max.minimum) / span


class PercentagePublisher:
    """Computes the range percentage for non-retraction global quantities.

    ``zero_range_policy`` decides what a single-value range yields:
    ``suppress`` emits nothing, ``zero`` emits 0.0 and ``nan`` emits NaN.
    """

    def __init__(self, zero_range_policy="suppress"):
        self.zero_range_policy = zero_range_policy

    def compute(self, item_id, global_quantity, min_max):
        """Return the percentage to publish, or None when nothing should be emitted."""
        if global_quantity.is_retraction or min_max.is_empty:
            return None

        try:
            return position_within(item_id, global_quantity.quantity, min_max)
        except DivisionByZeroRange:
            if self.zero_range_policy == "zero":
                return 0.0
            if self.zero_range_policy == "nan":
                return math.nan
            logger.debug(
                "Percentage suppressed for single-value range",
                item_id=item_id,
                quantity=global_quantity.quantity,
            )
            return None

"""Inventory analytics bounded context: derived views over warehouse CDC feeds.

Consumes stock-quantity and warehouse change records and maintains
continuously-updated views: latest stock per warehouse/item, global stock
per item, warehouse capacity allocation, and the position of each item's
global stock within its observed range.
"""

import structlog
from protean.domain import Domain

from analytics.utils.logging import configure_logging

configure_logging()

analytics = Domain(name="analytics")

logger = structlog.get_logger(__name__)

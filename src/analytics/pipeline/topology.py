"""Inventory analytics pipeline: wires every stage from raw CDC records to sinks.

Stock records:
    normalize -> decode -> last-write-wins per (warehouse, item)
        -> warehouse-stock
        -> per-warehouse totals (table for the capacity join)
        -> per-item totals -> range tracker -> global-stock
                                            -> global-stock-percentage

Warehouse records:
    normalize -> decode -> join with per-warehouse totals -> warehouse-capacity

Each record is fully folded into every stage's state before anything is
published for it. The pipeline assumes it is the single writer for all of
its keys; records for one key must be fed in arrival order.
"""

import structlog

from analytics.capacity.joiner import WarehouseCapacityJoiner
from analytics.cdc.decoder import decode_stock_quantity, decode_warehouse
from analytics.cdc.normalizer import (
    STOCK_SOURCE,
    WAREHOUSE_SOURCE,
    normalize_stock_record,
    normalize_warehouse_record,
)
from analytics.config import get_settings
from analytics.errors import DecodeError
from analytics.pipeline.channels import (
    DEAD_LETTER,
    GLOBAL_STOCK,
    GLOBAL_STOCK_PERCENTAGE,
    WAREHOUSE_CAPACITY,
    WAREHOUSE_STOCK,
)
from analytics.projections.item_stock_total import ItemStockTotal
from analytics.projections.stock_range import StockRange
from analytics.projections.warehouse_item_stock import WarehouseItemStock
from analytics.projections.warehouse_stock_total import WarehouseStockTotal
from analytics.range.percentage import PercentagePublisher
from analytics.range.tracker import GlobalRangeTracker
from analytics.state.memory_adapter import InMemoryStateStore
from analytics.state.projection_adapter import ProjectionStateStore
from analytics.stock.aggregator import StockAggregator
from analytics.stock.regroup import ItemRegroupAggregator, WarehouseRegroupAggregator

logger = structlog.get_logger(__name__)

STAGES = ("warehouse_item_stock", "warehouse_totals", "item_totals", "stock_range")


def projection_stores():
    """State stores backed by the domain's projections. Needs an active domain context."""
    return {
        "warehouse_item_stock": ProjectionStateStore(WarehouseItemStock),
        "warehouse_totals": ProjectionStateStore(WarehouseStockTotal),
        "item_totals": ProjectionStateStore(ItemStockTotal),
        "stock_range": ProjectionStateStore(StockRange),
    }


def in_memory_stores():
    return {stage: InMemoryStateStore() for stage in STAGES}


class InventoryAnalyticsPipeline:
    def __init__(self, sink, settings=None, stores=None, allocate=None):
        self.sink = sink
        self.settings = settings or get_settings()
        self.stores = stores or projection_stores()

        missing = set(STAGES) - set(self.stores)
        if missing:
            raise ValueError(f"Missing state stores: {sorted(missing)}")

        self.stock_aggregator = StockAggregator(self.stores["warehouse_item_stock"])
        self.warehouse_regroup = WarehouseRegroupAggregator(self.stores["warehouse_totals"])
        self.item_regroup = ItemRegroupAggregator(self.stores["item_totals"])
        self.range_tracker = GlobalRangeTracker(self.stores["stock_range"])
        self.capacity_joiner = WarehouseCapacityJoiner(
            self.stores["warehouse_totals"],
            allocate=allocate,
            low=self.settings.allocation_low,
            high=self.settings.allocation_high,
        )
        self.percentage_publisher = PercentagePublisher(self.settings.zero_range_policy)

    # -------------------------------------------------------------------
    # Malformed input
    # -------------------------------------------------------------------
    def _reject(self, source, raw_key, raw_value, error):
        if self.settings.dead_letter_enabled:
            logger.warning(
                "Malformed record routed to dead letter",
                source=source,
                key=raw_key,
                errors=error.messages,
            )
            self.sink.send(
                DEAD_LETTER,
                raw_key,
                {"source": source, "value": raw_value, "errors": error.messages},
            )
        else:
            logger.warning("Malformed record skipped", source=source, key=raw_key, errors=error.messages)

    # -------------------------------------------------------------------
    # Stock feed
    # -------------------------------------------------------------------
    def process_stock_record(self, raw_key, raw_value):
        """Fold one stock-quantity CDC record into every derived view."""
        try:
            normalized = normalize_stock_record(raw_key, raw_value)
            if normalized is None:
                return
            key, event = decode_stock_quantity(*normalized)
        except DecodeError as exc:
            self._reject(STOCK_SOURCE, raw_key, raw_value, exc)
            return

        change = self.stock_aggregator.apply(key, event)
        self.warehouse_regroup.apply(change)

        tracked = [self.range_tracker.apply(observation) for observation in self.item_regroup.apply(change)]

        self.sink.send(WAREHOUSE_STOCK, list(change.key), change.new)
        for global_quantity, min_max in tracked:
            if global_quantity.is_retraction:
                continue
            item_id = change.key[1]
            self.sink.send(GLOBAL_STOCK, item_id, global_quantity.quantity)
            percentage = self.percentage_publisher.compute(item_id, global_quantity, min_max)
            if percentage is not None:
                self.sink.send(GLOBAL_STOCK_PERCENTAGE, item_id, percentage)

    # -------------------------------------------------------------------
    # Warehouse feed
    # -------------------------------------------------------------------
    def process_warehouse_record(self, raw_key, raw_value):
        """Join one warehouse CDC record against the current per-warehouse stock."""
        try:
            normalized = normalize_warehouse_record(raw_key, raw_value)
            if normalized is None:
                return
            warehouse_id, warehouse = decode_warehouse(*normalized)
        except DecodeError as exc:
            self._reject(WAREHOUSE_SOURCE, raw_key, raw_value, exc)
            return

        joined = self.capacity_joiner.join(warehouse_id, warehouse)
        if joined is None:
            return
        warehouse_key, allocation = joined
        self.sink.send(WAREHOUSE_CAPACITY, warehouse_key, allocation)

    # -------------------------------------------------------------------
    # Merged feed
    # -------------------------------------------------------------------
    def process(self, source, raw_key, raw_value):
        if source == STOCK_SOURCE:
            self.process_stock_record(raw_key, raw_value)
        elif source == WAREHOUSE_SOURCE:
            self.process_warehouse_record(raw_key, raw_value)
        else:
            self._reject(source, raw_key, raw_value, DecodeError(source, {"source": ["Unknown source"]}))

    def replay(self, records):
        """Process ``(source, raw_key, raw_value)`` records in order and return how many were read."""
        count = 0
        for source, raw_key, raw_value in records:
            self.process(source, raw_key, raw_value)
            count += 1
        return count

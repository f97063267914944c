from datetime import UTC, datetime, timedelta

import pytest
from protean.integrations.pytest import DomainFixture

BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture(scope="session")
def analytics_bed():
    from analytics.domain import analytics

    bed = DomainFixture(analytics)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(analytics_bed):
    from protean import current_domain

    with analytics_bed.domain_context():
        yield
        # Clear projection state between tests
        for _, provider in current_domain.providers.items():
            provider._data_reset()


# ---------------------------------------------------------------------------
# CDC record builders
# ---------------------------------------------------------------------------
def at(tick):
    """Timestamp ``tick`` seconds after the test epoch."""
    return BASE_TIME + timedelta(seconds=tick)


@pytest.fixture()
def stock_record():
    """Build a Debezium-style ``(key, value)`` pair for a stock quantity row."""

    def _build(warehouse_id, item_id, quantity, tick, op="u"):
        key = {"payload": {"warehouseid": warehouse_id, "stockitemid": item_id}}
        value = {
            "payload": {
                "before": None,
                "after": {
                    "warehouseid": warehouse_id,
                    "stockitemid": item_id,
                    "quantity": quantity,
                    "lastupdate": at(tick).isoformat(),
                },
                "op": op,
            }
        }
        return key, value

    return _build


@pytest.fixture()
def warehouse_record():
    """Build a Debezium-style ``(key, value)`` pair for a warehouse row."""

    def _build(warehouse_id, capacity, name=None, latitude=52.52, longitude=13.405):
        key = {"payload": {"id": warehouse_id}}
        value = {
            "payload": {
                "before": None,
                "after": {
                    "id": warehouse_id,
                    "name": name or f"Warehouse {warehouse_id}",
                    "latitude": latitude,
                    "longitude": longitude,
                    "storagecapacity": capacity,
                },
                "op": "u",
            }
        }
        return key, value

    return _build


@pytest.fixture()
def stock_event():
    """Build a decoded ``StockQuantityEvent``."""
    from analytics.cdc.records import StockQuantityEvent

    def _build(warehouse_id, item_id, quantity, tick):
        return StockQuantityEvent(
            warehouse_id=warehouse_id,
            item_id=item_id,
            quantity=quantity,
            last_update=at(tick),
        )

    return _build


@pytest.fixture()
def settings():
    from analytics.config import Settings

    return Settings(zero_range_policy="suppress", malformed_records="dead_letter", sink="memory")


@pytest.fixture()
def sink():
    from analytics.sink.memory_adapter import InMemorySink

    return InMemorySink()


@pytest.fixture()
def pipeline(sink, settings):
    from analytics.pipeline.topology import InventoryAnalyticsPipeline

    return InventoryAnalyticsPipeline(sink, settings=settings)

"""Tests for the keyed state store adapters."""

from analytics.projections.stock_range import StockRange
from analytics.projections.warehouse_item_stock import WarehouseItemStock
from analytics.state.memory_adapter import InMemoryStateStore
from analytics.state.projection_adapter import ProjectionStateStore, build_key
from analytics.stock.quantity import MinMax, Quantity
from protean import current_domain


class TestBuildKey:
    def test_composite_keys_are_joined(self):
        assert build_key((1, 7)) == "1::7"
        assert build_key([1, 7]) == "1::7"

    def test_scalar_keys_are_stringified(self):
        assert build_key(7) == "7"


class TestInMemoryStateStore:
    def test_missing_key_is_none(self):
        assert InMemoryStateStore().get("missing") is None

    def test_put_replaces_current_value(self):
        store = InMemoryStateStore()
        store.put("a", 1)
        store.put("a", 2)

        assert store.get("a") == 2
        assert len(store) == 1


class TestProjectionStateStore:
    def test_missing_key_is_none(self):
        assert ProjectionStateStore(WarehouseItemStock).get((1, 7)) is None

    def test_round_trips_state_through_projection(self, stock_event):
        store = ProjectionStateStore(WarehouseItemStock)
        quantity = Quantity.of(stock_event(1, 7, 10, tick=5))
        store.put((1, 7), quantity)

        assert store.get((1, 7)) == quantity
        assert current_domain.repository_for(WarehouseItemStock).get("1::7").quantity == 10

    def test_second_put_updates_existing_record(self, stock_event):
        store = ProjectionStateStore(WarehouseItemStock)
        store.put((1, 7), Quantity.of(stock_event(1, 7, 10, tick=1)))
        latest = Quantity.of(stock_event(1, 7, 30, tick=2))

        store.put((1, 7), latest)

        assert store.get((1, 7)) == latest
        records = current_domain.repository_for(WarehouseItemStock)._dao.query.all().items
        assert len(records) == 1

    def test_range_record_is_widened_in_place(self):
        store = ProjectionStateStore(StockRange)
        store.put(100, MinMax(minimum=10, maximum=10))
        store.put(100, MinMax(minimum=10, maximum=35))

        record = current_domain.repository_for(StockRange).get("100")
        assert (record.item_id, record.minimum, record.maximum) == (100, 10, 35)

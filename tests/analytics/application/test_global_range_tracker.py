"""Tests for min/max tracking of global stock per item."""

import pytest
from analytics.projections.stock_range import StockRange
from analytics.range.tracker import GlobalRangeTracker, tag
from analytics.state.projection_adapter import ProjectionStateStore
from analytics.stock.changes import Added, Retracted
from analytics.stock.quantity import MIN_TIMESTAMP, GlobalStockQuantity, MinMax, Quantity
from protean import current_domain


@pytest.fixture()
def tracker():
    return GlobalRangeTracker(ProjectionStateStore(StockRange))


def _total(quantity):
    return Quantity(quantity=quantity, last_update=MIN_TIMESTAMP)


class TestTagging:
    def test_added_total_is_not_a_retraction(self):
        tagged = tag(Added(7, _total(15)))
        assert tagged == GlobalStockQuantity(quantity=15, is_retraction=False)

    def test_retracted_total_is_flagged(self):
        tagged = tag(Retracted(7, _total(5)))
        assert tagged == GlobalStockQuantity(quantity=5, is_retraction=True)


class TestRangeTracking:
    def test_first_observation_sets_both_bounds(self, tracker):
        assert tracker.observe(7, GlobalStockQuantity(quantity=10)) == MinMax(minimum=10, maximum=10)

    def test_range_is_persisted(self, tracker):
        tracker.observe(7, GlobalStockQuantity(quantity=10))
        tracker.observe(7, GlobalStockQuantity(quantity=35))

        record = current_domain.repository_for(StockRange).get("7")
        assert (record.minimum, record.maximum) == (10, 35)

    def test_retraction_never_lowers_a_recorded_minimum(self, tracker):
        tracker.observe(7, GlobalStockQuantity(quantity=200))
        result = tracker.observe(7, GlobalStockQuantity(quantity=0, is_retraction=True))

        assert result == MinMax(minimum=200, maximum=200)
        assert tracker.current(7) == MinMax(minimum=200, maximum=200)

    def test_retraction_before_any_observation_stores_nothing(self, tracker):
        result = tracker.observe(7, GlobalStockQuantity(quantity=0, is_retraction=True))

        assert result.is_empty
        assert tracker.current(7) is None

    def test_bounds_only_widen(self, tracker):
        minimums, maximums = [], []
        for quantity in [50, 20, 80, 30, 10, 90, 60]:
            current = tracker.observe(7, GlobalStockQuantity(quantity=quantity))
            minimums.append(current.minimum)
            maximums.append(current.maximum)

        assert minimums == sorted(minimums, reverse=True)
        assert maximums == sorted(maximums)
        assert tracker.current(7) == MinMax(minimum=10, maximum=90)

    def test_apply_tags_and_tracks_an_observation(self, tracker):
        global_quantity, current = tracker.apply(Added(7, _total(15)))

        assert global_quantity.quantity == 15
        assert current == MinMax(minimum=15, maximum=15)

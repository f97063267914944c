"""Shared BDD step definitions for the Analytics domain."""

from datetime import UTC, datetime, timedelta

import pytest
from analytics.pipeline.channels import GLOBAL_STOCK, GLOBAL_STOCK_PERCENTAGE
from analytics.projections.item_stock_total import ItemStockTotal
from analytics.projections.stock_range import StockRange
from analytics.projections.warehouse_item_stock import WarehouseItemStock
from protean import current_domain
from pytest_bdd import given, parsers, then, when

_REPORT = parsers.parse("warehouse {warehouse_id:d} reports {quantity:d} units of item {item_id:d} at tick {tick:d}")


# ---------------------------------------------------------------------------
# Given / When steps
# ---------------------------------------------------------------------------
@given(_REPORT)
def _(pipeline, stock_record, warehouse_id, quantity, item_id, tick):
    pipeline.process_stock_record(*stock_record(warehouse_id, item_id, quantity, tick))


@when(_REPORT)
def _(pipeline, stock_record, warehouse_id, quantity, item_id, tick):
    pipeline.process_stock_record(*stock_record(warehouse_id, item_id, quantity, tick))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse("the global stock of item {item_id:d} is {quantity:d}"))
def _(item_id, quantity):
    assert current_domain.repository_for(ItemStockTotal).get(str(item_id)).quantity == quantity


@then(parsers.parse("the published global stock of item {item_id:d} was {quantities}"))
def _(sink, item_id, quantities):
    expected = [int(value) for value in quantities.split(",")]
    assert [record.value for record in sink.records(GLOBAL_STOCK) if record.key == item_id] == expected


@then(parsers.parse("the stock range of item {item_id:d} is {minimum:d} to {maximum:d}"))
def _(item_id, minimum, maximum):
    record = current_domain.repository_for(StockRange).get(str(item_id))
    assert (record.minimum, record.maximum) == (minimum, maximum)


@then(parsers.parse("the latest percentage of item {item_id:d} is {percentage:f}"))
def _(sink, item_id, percentage):
    assert sink.latest(GLOBAL_STOCK_PERCENTAGE, item_id).value == pytest.approx(percentage)


@then(parsers.parse("warehouse {warehouse_id:d} holds {quantity:d} units of item {item_id:d} as of tick {tick:d}"))
def _(warehouse_id, quantity, item_id, tick):
    record = current_domain.repository_for(WarehouseItemStock).get(f"{warehouse_id}::{item_id}")
    last_update = record.last_update
    if last_update.tzinfo is None:
        last_update = last_update.replace(tzinfo=UTC)
    assert record.quantity == quantity
    assert last_update == datetime(2024, 1, 1, tzinfo=UTC) + timedelta(seconds=tick)

"""Decode normalized CDC payloads into typed domain records."""

from datetime import UTC, datetime, timedelta

from protean.exceptions import ValidationError

from analytics.cdc.normalizer import STOCK_SOURCE, WAREHOUSE_SOURCE
from analytics.cdc.records import StockQuantityEvent, WarehouseEvent
from analytics.errors import DecodeError

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def parse_timestamp(value):
    """Parse a CDC timestamp into an aware UTC datetime.

    Integers are epoch microseconds (Debezium ``MicroTimestamp``); strings
    are ISO-8601 (``ZonedTimestamp``). Naive values are taken as UTC.
    """
    if isinstance(value, bool):
        raise ValueError("Timestamp cannot be a boolean")
    if isinstance(value, int):
        return _EPOCH + timedelta(microseconds=value)
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value)
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _require(source, payload, *names):
    missing = {name: ["is required"] for name in names if payload.get(name) is None}
    if missing:
        raise DecodeError(source, missing)


def _as_id(value):
    """Coerce a key part to ``int``, refusing booleans and fractional numbers."""
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a valid integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{value!r} is not a valid integer")
    return int(value)


def _ids(source, raw_key):
    if not isinstance(raw_key, (list, tuple)) or len(raw_key) != 2:
        raise DecodeError(source, {"key": ["Expected [warehouse_id, stock_item_id]"]})
    try:
        return _as_id(raw_key[0]), _as_id(raw_key[1])
    except (TypeError, ValueError) as exc:
        raise DecodeError(source, {"key": [str(exc)]}) from exc


def decode_stock_quantity(raw_key, payload):
    """Return ``((warehouse_id, item_id), StockQuantityEvent)`` for a normalized stock record."""
    key = _ids(STOCK_SOURCE, raw_key)
    _require(STOCK_SOURCE, payload, "quantity", "lastupdate")

    try:
        last_update = parse_timestamp(payload["lastupdate"])
    except (TypeError, ValueError, OverflowError) as exc:
        raise DecodeError(STOCK_SOURCE, {"lastupdate": [str(exc)]}) from exc

    try:
        event = StockQuantityEvent(
            warehouse_id=payload.get("warehouseid", key[0]),
            item_id=payload.get("stockitemid", key[1]),
            quantity=payload["quantity"],
            last_update=last_update,
        )
    except ValidationError as exc:
        raise DecodeError(STOCK_SOURCE, exc.messages) from exc

    if event.key != key:
        raise DecodeError(STOCK_SOURCE, {"key": [f"Key {list(key)} does not match payload {list(event.key)}"]})
    return key, event


def decode_warehouse(raw_key, payload):
    """Return ``(warehouse_id, WarehouseEvent)`` for a normalized warehouse record."""
    _require(WAREHOUSE_SOURCE, payload, "name", "latitude", "longitude", "storagecapacity")

    try:
        warehouse = WarehouseEvent(
            warehouse_id=payload.get("id", raw_key),
            name=payload["name"],
            latitude=payload["latitude"],
            longitude=payload["longitude"],
            storage_capacity=payload["storagecapacity"],
        )
    except ValidationError as exc:
        raise DecodeError(WAREHOUSE_SOURCE, exc.messages) from exc

    if str(warehouse.warehouse_id) != str(raw_key):
        raise DecodeError(WAREHOUSE_SOURCE, {"key": [f"Key {raw_key} does not match payload {warehouse.warehouse_id}"]})
    return warehouse.warehouse_id, warehouse

"""Strip the CDC envelope from raw change records.

Change records arrive as Debezium-style JSON documents, optionally wrapped
in a ``{"schema": ..., "payload": ...}`` envelope. Normalizing a record
yields the key the pipeline groups by and the "after" image of the row.
"""

import structlog

from analytics.errors import DecodeError

logger = structlog.get_logger(__name__)

STOCK_SOURCE = "stock"
WAREHOUSE_SOURCE = "warehouse"


def _payload(node):
    """Return the payload of an envelope, accepting records without the schema wrapper."""
    if isinstance(node, dict) and "payload" in node:
        return node["payload"]
    return node


def _after_image(source, raw_key, raw_value):
    """Return the row state after the change, or None for deletes."""
    if raw_value is None:
        logger.info("Tombstone record dropped", source=source, key=raw_key)
        return None

    payload = _payload(raw_value)
    if not isinstance(payload, dict):
        raise DecodeError(source, {"value": ["Change record value must be an object"]})

    after = payload.get("after")
    if after is None:
        logger.info(
            "Delete record dropped",
            source=source,
            key=raw_key,
            op=payload.get("op"),
        )
        return None
    if not isinstance(after, dict):
        raise DecodeError(source, {"after": ["After image must be an object"]})
    return after


def _key_field(source, key_payload, name):
    if not isinstance(key_payload, dict) or key_payload.get(name) is None:
        raise DecodeError(source, {f"key.{name}": ["is required"]})
    return key_payload[name]


def normalize_stock_record(raw_key, raw_value):
    """Return ``([warehouse_id, stock_item_id], after)`` or None for a delete."""
    key_payload = _payload(raw_key)
    composite_key = [
        _key_field(STOCK_SOURCE, key_payload, "warehouseid"),
        _key_field(STOCK_SOURCE, key_payload, "stockitemid"),
    ]
    after = _after_image(STOCK_SOURCE, raw_key, raw_value)
    if after is None:
        return None
    return composite_key, after


def normalize_warehouse_record(raw_key, raw_value):
    """Return ``(warehouse_id, after)`` or None for a delete."""
    warehouse_id = _key_field(WAREHOUSE_SOURCE, _payload(raw_key), "id")
    after = _after_image(WAREHOUSE_SOURCE, raw_key, raw_value)
    if after is None:
        return None
    return warehouse_id, after

"""Pydantic request/response schemas for the Analytics API.

These are external contracts (anti-corruption layer), separate from
internal Protean value objects and projections.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# CDC ingestion
# ---------------------------------------------------------------------------
class ChangeRecordRequest(BaseModel):
    key: Any
    value: Any | None = None


class StatusResponse(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------
class WarehouseItemStockResponse(BaseModel):
    warehouse_id: int
    item_id: int
    quantity: int
    last_update: datetime


class ItemStockResponse(BaseModel):
    item_id: int
    quantity: int


class WarehouseStockResponse(BaseModel):
    warehouse_id: int
    quantity: int


class StockRangeResponse(BaseModel):
    item_id: int
    minimum: int
    maximum: int

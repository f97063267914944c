"""FastAPI routes for the Analytics domain: CDC ingestion and derived views."""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from analytics.api.schemas import (
    ChangeRecordRequest,
    ItemStockResponse,
    StatusResponse,
    StockRangeResponse,
    WarehouseItemStockResponse,
    WarehouseStockResponse,
)
from analytics.pipeline import get_pipeline
from analytics.projections.item_stock_total import ItemStockTotal
from analytics.projections.stock_range import StockRange
from analytics.projections.warehouse_item_stock import WarehouseItemStock
from analytics.projections.warehouse_stock_total import WarehouseStockTotal
from analytics.state.projection_adapter import build_key


def _fetch(projection_cls, key, label):
    try:
        return current_domain.repository_for(projection_cls).get(build_key(key))
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail=f"No {label} recorded for {build_key(key)}") from None


# ---------------------------------------------------------------------------
# CDC Router
# ---------------------------------------------------------------------------
cdc_router = APIRouter(prefix="/cdc", tags=["cdc"])


@cdc_router.post("/stock", status_code=202, response_model=StatusResponse)
async def ingest_stock_record(body: ChangeRecordRequest) -> StatusResponse:
    """Push one stock-quantity change record through the pipeline."""
    get_pipeline().process_stock_record(body.key, body.value)
    return StatusResponse(status="accepted")


@cdc_router.post("/warehouses", status_code=202, response_model=StatusResponse)
async def ingest_warehouse_record(body: ChangeRecordRequest) -> StatusResponse:
    """Push one warehouse change record through the pipeline."""
    get_pipeline().process_warehouse_record(body.key, body.value)
    return StatusResponse(status="accepted")


# ---------------------------------------------------------------------------
# Views Router
# ---------------------------------------------------------------------------
views_router = APIRouter(prefix="/views", tags=["views"])


@views_router.get("/warehouse-stock/{warehouse_id}/{item_id}", response_model=WarehouseItemStockResponse)
async def get_warehouse_item_stock(warehouse_id: int, item_id: int) -> WarehouseItemStockResponse:
    record = _fetch(WarehouseItemStock, (warehouse_id, item_id), "warehouse stock")
    return WarehouseItemStockResponse(
        warehouse_id=record.warehouse_id,
        item_id=record.item_id,
        quantity=record.quantity,
        last_update=record.last_update,
    )


@views_router.get("/items/{item_id}", response_model=ItemStockResponse)
async def get_item_stock(item_id: int) -> ItemStockResponse:
    record = _fetch(ItemStockTotal, item_id, "item stock")
    return ItemStockResponse(item_id=record.item_id, quantity=record.quantity)


@views_router.get("/items/{item_id}/range", response_model=StockRangeResponse)
async def get_item_stock_range(item_id: int) -> StockRangeResponse:
    record = _fetch(StockRange, item_id, "stock range")
    return StockRangeResponse(item_id=record.item_id, minimum=record.minimum, maximum=record.maximum)


@views_router.get("/warehouses/{warehouse_id}", response_model=WarehouseStockResponse)
async def get_warehouse_stock(warehouse_id: int) -> WarehouseStockResponse:
    record = _fetch(WarehouseStockTotal, warehouse_id, "warehouse stock")
    return WarehouseStockResponse(warehouse_id=record.warehouse_id, quantity=record.quantity)

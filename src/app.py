"""Inventory analytics FastAPI application.

Accepts CDC records over HTTP and serves the derived views. Each request
runs inside the analytics domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from analytics.domain import analytics  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

analytics.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Inventory Analytics API",
    description="Warehouse stock analytics derived from CDC feeds",
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the analytics domain context for each request."""
    with analytics.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from analytics.api import cdc_router, views_router  # noqa: E402

app.include_router(cdc_router)
app.include_router(views_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": analytics.name})

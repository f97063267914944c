from analytics.api.routes import cdc_router, views_router

__all__ = ["cdc_router", "views_router"]

"""Pipeline factory.

Provides get_pipeline() / reset_pipeline() so entry points share one
pipeline instance per process. State lives in the domain's projections,
so a domain context must be active while records are processed.
"""

from analytics.pipeline.topology import InventoryAnalyticsPipeline

_current_pipeline: InventoryAnalyticsPipeline | None = None


def get_pipeline() -> InventoryAnalyticsPipeline:
    """Return the shared pipeline, built with the current sink on first use."""
    global _current_pipeline
    if _current_pipeline is None:
        from analytics.sink import get_sink

        _current_pipeline = InventoryAnalyticsPipeline(get_sink())
    return _current_pipeline


def reset_pipeline() -> None:
    """Drop the shared pipeline (useful for tests)."""
    global _current_pipeline
    _current_pipeline = None

"""Output sink factory.

Provides get_sink() / set_sink() / reset_sink() to swap implementations:
- InMemorySink for development and testing
- JsonLinesSink for streaming records to stdout
"""

from analytics.config import get_settings
from analytics.sink.port import OutputSink

_current_sink: OutputSink | None = None


def build_sink(adapter: str) -> OutputSink:
    """Build a fresh sink for the named adapter (``memory`` or ``stdout``)."""
    if adapter == "memory":
        from analytics.sink.memory_adapter import InMemorySink

        return InMemorySink()
    if adapter == "stdout":
        from analytics.sink.jsonl_adapter import JsonLinesSink

        return JsonLinesSink()
    raise ValueError(f"Unknown sink adapter: {adapter}")


def get_sink() -> OutputSink:
    """Return the current sink, built from ``ANALYTICS_SINK`` on first use."""
    global _current_sink
    if _current_sink is None:
        _current_sink = build_sink(get_settings().sink)
    return _current_sink


def set_sink(sink: OutputSink) -> None:
    """Override the active sink (useful for tests)."""
    global _current_sink
    _current_sink = sink


def reset_sink() -> None:
    """Reset to the configured default sink."""
    global _current_sink
    _current_sink = None

"""Analytics pipeline runner.

Replays a merged CDC feed through the inventory analytics pipeline and
publishes every derived view to the chosen sink. Each input line is a
JSON object ``{"source": "stock" | "warehouse", "key": ..., "value": ...}``.

Usage:
    python src/server.py feed.jsonl                 # Replay a file, print records as JSON lines
    cat feed.jsonl | python src/server.py -         # Read the feed from stdin
    python src/server.py --zero-range-policy zero feed.jsonl
"""

import argparse
import json
import sys
from contextlib import ExitStack

import structlog

logger = structlog.get_logger(__name__)


def _read_feed(streams):
    for stream in streams:
        for line_number, line in enumerate(stream, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                logger.warning("Unreadable feed line skipped", line=line_number, error=str(exc))
                continue
            if not isinstance(record, dict):
                logger.warning("Feed line is not an object, skipped", line=line_number)
                continue
            yield record.get("source"), record.get("key"), record.get("value")


def _get_domain():
    """Import and initialize the analytics domain."""
    from analytics.domain import analytics

    analytics.init()
    return analytics


def run(paths, zero_range_policy=None, malformed_records=None, sink=None):
    """Replay the feeds at ``paths`` ("-" for stdin). Returns the number of records read.

    ``sink`` names an adapter (``memory`` or ``stdout``) to publish to; when
    omitted the active sink from ``get_sink()`` is used.
    """
    from analytics.config import get_settings
    from analytics.pipeline.topology import InventoryAnalyticsPipeline
    from analytics.sink import build_sink, get_sink, set_sink

    settings = get_settings()
    if zero_range_policy or malformed_records:
        settings = settings.model_copy(
            update={
                "zero_range_policy": zero_range_policy or settings.zero_range_policy,
                "malformed_records": malformed_records or settings.malformed_records,
            }
        )
    if sink:
        set_sink(build_sink(sink))

    domain = _get_domain()
    with ExitStack() as stack:
        streams = [
            sys.stdin if path == "-" else stack.enter_context(open(path, encoding="utf-8")) for path in paths
        ]
        with domain.domain_context():
            pipeline = InventoryAnalyticsPipeline(get_sink(), settings=settings)
            count = pipeline.replay(_read_feed(streams))

    logger.info("Feed replay complete", records=count)
    return count


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inventory analytics pipeline runner")
    parser.add_argument("paths", nargs="*", default=["-"], help="JSON-lines feed files ('-' for stdin)")
    parser.add_argument(
        "--zero-range-policy",
        choices=["suppress", "zero", "nan"],
        help="Percentage emitted when an item's range is a single value",
    )
    parser.add_argument(
        "--malformed-records",
        choices=["dead_letter", "skip"],
        help="Route malformed records to the dead-letter channel or skip them",
    )
    parser.add_argument(
        "--sink",
        choices=["stdout", "memory"],
        default="stdout",
        help="Where derived records are published (default: stdout as JSON lines)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: ANALYTICS_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--log-json", action="store_true", help="Render logs as JSON")
    args = parser.parse_args(argv)

    from analytics.utils.logging import configure_logging

    configure_logging(level=args.log_level, json=args.log_json or None)

    try:
        run(
            args.paths,
            zero_range_policy=args.zero_range_policy,
            malformed_records=args.malformed_records,
            sink=args.sink,
        )
    except (OSError, ValueError) as exc:
        logger.error("Analytics pipeline stopped", error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""In-memory sink that keeps every published record, grouped by channel."""

from collections import defaultdict

from analytics.sink.port import OutputRecord, OutputSink


class InMemorySink(OutputSink):
    def __init__(self) -> None:
        self._records: dict[str, list[OutputRecord]] = defaultdict(list)

    def send(self, channel, key, value) -> None:
        self._records[channel].append(OutputRecord(channel=channel, key=key, value=value))

    def records(self, channel: str) -> list[OutputRecord]:
        return list(self._records.get(channel, []))

    def latest(self, channel: str, key=None) -> OutputRecord | None:
        """Return the last record on ``channel``, optionally restricted to ``key``."""
        for record in reversed(self._records.get(channel, [])):
            if key is None or record.key == key:
                return record
        return None

    def clear(self) -> None:
        self._records.clear()

"""Sink writing one JSON object per record to a text stream."""

import json
import sys

from analytics.sink.port import OutputSink


def to_primitive(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, tuple):
        return list(value)
    return value


class JsonLinesSink(OutputSink):
    def __init__(self, stream=None) -> None:
        self.stream = stream or sys.stdout

    def send(self, channel, key, value) -> None:
        line = json.dumps(
            {"channel": channel, "key": to_primitive(key), "value": to_primitive(value)},
            default=str,
        )
        self.stream.write(line + "\n")
        self.stream.flush()

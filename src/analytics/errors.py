"""Error taxonomy for the analytics pipeline."""


class AnalyticsError(Exception):
    """Base class for analytics pipeline errors."""


class DecodeError(AnalyticsError):
    """A CDC record could not be turned into a domain record.

    ``messages`` follows Protean's ``ValidationError`` shape: a mapping of
    field name to a list of error strings.
    """

    def __init__(self, source, messages):
        self.source = source
        self.messages = messages
        super().__init__(f"Malformed {source} record: {messages}")


class DivisionByZeroRange(AnalyticsError):
    """An item's observed range is a single value, so no position can be computed."""

    def __init__(self, item_id, value):
        self.item_id = item_id
        self.value = value
        super().__init__(f"Item {item_id} has an empty range at {value}")

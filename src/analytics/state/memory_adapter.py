"""Dict-backed state store for isolated runs and replays."""

from analytics.state.port import StateStore


class InMemoryStateStore(StateStore):
    def __init__(self):
        self._data = {}

    def get(self, key):
        return self._data.get(key)

    def put(self, key, value) -> None:
        self._data[key] = value

    def __len__(self):
        return len(self._data)

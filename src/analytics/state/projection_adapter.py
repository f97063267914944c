"""State store backed by a Protean projection repository.

The projection class converts between records and state values through
``from_state(record_key, key, value)``, ``apply_state(value)`` and
``to_state()``. Keys are stored as strings; composite keys are joined
with ``::``.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from analytics.state.port import StateStore


def build_key(key):
    if isinstance(key, (list, tuple)):
        return "::".join(str(part) for part in key)
    return str(key)


class ProjectionStateStore(StateStore):
    def __init__(self, projection_cls):
        self.projection_cls = projection_cls

    def _get_record(self, key):
        """Get the projection record, or None if it doesn't exist yet."""
        repo = current_domain.repository_for(self.projection_cls)
        try:
            return repo, repo.get(build_key(key))
        except ObjectNotFoundError:
            return repo, None

    def get(self, key):
        _, record = self._get_record(key)
        if record is None:
            return None
        return record.to_state()

    def put(self, key, value) -> None:
        repo, record = self._get_record(key)
        if record is None:
            record = self.projection_cls.from_state(build_key(key), key, value)
        else:
            record.apply_state(value)
        repo.add(record)

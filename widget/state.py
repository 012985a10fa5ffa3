"""Per-widget-instance day offset toggle."""

from schedule_cache.store import KeyValueStore


class DayOffsetState:
    """Persisted "today / tomorrow" flag for each widget instance.

    Values are kept in their own store so they never mix with the
    schedule cache owned by the app shell.
    """

    KEY_FORMAT = "dayOffset_{widget_id}"

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _key(self, widget_id: int) -> str:
        return self.KEY_FORMAT.format(widget_id=widget_id)

    def get(self, widget_id: int) -> int:
        """Return the day offset (0 or 1) shown by ``widget_id``."""
        return min(max(self._store.get_int(self._key(widget_id), 0), 0), 1)

    def toggle(self, widget_id: int) -> int:
        """Flip the offset between today and tomorrow and return the new value."""
        new_offset = 1 if self.get(widget_id) == 0 else 0
        self._store.set_int(self._key(widget_id), new_offset)
        return new_offset

    def forget(self, widget_id: int) -> None:
        self._store.remove(self._key(widget_id))

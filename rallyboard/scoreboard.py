import logging
from typing import Any, Optional

from rallyboard.state import apply_local_update, apply_remote_snapshot, same_record
from rallyboard.store import ScoreboardStore

_logger = logging.getLogger(__name__)


class Scoreboard:
    """Owner of the in-process copy of the scoreboard record.

    Every write re-reads the store right before merging, then overwrites the
    store and the cache together. There is no locking: whichever write
    finishes last wins.
    """

    def __init__(self, store: ScoreboardStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.log = logger or _logger
        self._state = store.load()

    @property
    def current(self) -> dict:
        """Latest known record, without touching the disk"""
        return dict(self._state)

    def read(self) -> dict:
        """Read-through: reload from disk and refresh the cache"""
        self._state = self.store.load()
        return dict(self._state)

    def update(self, payload: Any) -> dict:
        """Apply a controller update and return the resulting full record"""
        latest = self.store.load()
        updated = apply_local_update(latest, payload)
        self._write(updated)
        return dict(updated)

    def apply_remote(self, raw: Any) -> bool:
        """Merge a remote snapshot. Returns True only if the record changed."""
        latest = self.store.load()
        merged = apply_remote_snapshot(latest, raw)
        if merged is None:
            self.log.debug("Remote snapshot carried no scoreboard fields")
            return False
        if same_record(merged, latest):
            self._state = latest
            return False

        changed = sorted(key for key in merged if not same_record({key: merged[key]}, {key: latest.get(key)}))
        self.log.info("Remote update: %s", ", ".join(changed))
        self._write(merged)
        return True

    def _write(self, record: dict) -> None:
        self._state = record
        self.store.save(record)

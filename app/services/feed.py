"""In-memory log list handed to the view layer."""

import logging

from app.schemas.logs import LogRecord

logger = logging.getLogger(__name__)


class LogFeed:
    """The logs currently on screen, plus whether they came from the cache.

    Never persisted; the local store remains the source of truth offline.
    """

    def __init__(self):
        self._records: dict[int, LogRecord] = {}
        self.is_offline = False

    def replace(self, records: list[LogRecord], is_offline: bool) -> None:
        """Swap in a freshly loaded list."""
        self._records = {record.id: record for record in records}
        self.is_offline = is_offline

    def add(self, record: LogRecord) -> bool:
        """Append a log unless one with the same id is already shown."""
        if record.id in self._records:
            return False
        self._records[record.id] = record
        logger.debug(f"Log {record.id} added to feed")
        return True

    def remove(self, log_id: int) -> None:
        self._records.pop(log_id, None)

    def snapshot(self) -> list[LogRecord]:
        return list(self._records.values())

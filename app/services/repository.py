"""Offline-first log repository - coordinates the log server and the local cache."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Protocol, TypeVar

from app.core.exceptions import LogValidationError, NetworkUnavailableError
from app.schemas.logs import LogRecord, NewLogRequest
from app.services.local_store import LocalStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteLogSource(Protocol):
    """The log server operations the repository depends on."""

    async def get_logs(self) -> list[LogRecord]: ...

    async def get_log(self, log_id: int) -> LogRecord: ...

    async def create_log(self, new_log: NewLogRequest) -> LogRecord: ...

    async def delete_log(self, log_id: int) -> LogRecord: ...

    async def get_all_logs(self) -> list[LogRecord]: ...


@dataclass
class ListLogsResult:
    records: list[LogRecord]
    is_offline: bool


def validate_new_log(new_log: NewLogRequest) -> None:
    """Reject a new log missing date, a positive amount, or type."""
    missing = []
    if not new_log.date:
        missing.append("date")
    if not math.isfinite(new_log.amount) or new_log.amount <= 0:
        missing.append("amount")
    if not new_log.kind:
        missing.append("type")
    if missing:
        raise LogValidationError(f"Please fill required fields ({', '.join(missing)})")


class LogRepository:
    """Reads go to the server first and fall back to the local cache.

    Writes (create, delete) are online only: they are never queued, and the
    cache is only touched after the server confirms. Reports read straight
    from the server and are unavailable offline.
    """

    def __init__(self, store: LocalStore, remote: RemoteLogSource, timeout: float = 3.0):
        self.store = store
        self.remote = remote
        self.timeout = timeout

    async def _call_remote(self, call: Awaitable[T], context: str) -> T:
        """Await a server call, treating the local timeout as a network failure."""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"{context}: no response within {self.timeout}s")
            raise NetworkUnavailableError(f"{context}: request timeout - server unreachable") from e

    async def list_logs(self) -> ListLogsResult:
        """
        Fetch the log list, mirroring it into the cache.

        Falls back to the cached logs when the server can't be reached.
        Raises the original NetworkUnavailableError if the cache is empty too.
        """
        try:
            records = await self._call_remote(self.remote.get_logs(), "Failed to fetch logs")
        except NetworkUnavailableError:
            logger.warning("Online fetch failed, loading logs from local store")
            cached = await self.store.get_all()
            if cached:
                return ListLogsResult(records=cached, is_offline=True)
            raise

        for record in records:
            await self.store.upsert(record)
        logger.info(f"Saved {len(records)} logs to local store")
        return ListLogsResult(records=records, is_offline=False)

    async def get_log(self, log_id: int) -> LogRecord:
        """
        Fetch one log's detail, caching it and marking it as fetched.

        Offline, the cached copy is only returned if this log's detail was
        fetched online before. Logs that reached the cache through the list
        or a push are not trusted at detail level.
        """
        try:
            record = await self._call_remote(self.remote.get_log(log_id), f"Failed to fetch log {log_id}")
        except NetworkUnavailableError:
            logger.warning(f"Online fetch of log {log_id} failed, checking if detail was previously fetched")
            if await self.store.is_fetched(log_id):
                cached = await self.store.get_by_id(log_id)
                if cached is not None:
                    logger.info(f"Returning cached detail for log {log_id}")
                    return cached
            raise

        await self.store.upsert(record)
        await self.store.mark_fetched(log_id)
        logger.info(f"Log {log_id} detail saved to local store")
        return record

    async def create_log(self, new_log: NewLogRequest) -> LogRecord:
        """Create a log on the server and cache the result. Requires connectivity."""
        validate_new_log(new_log)
        record = await self._call_remote(self.remote.create_log(new_log), "Failed to create log")
        await self.store.upsert(record)
        logger.info(f"Created log {record.id}")
        return record

    async def delete_log(self, log_id: int) -> LogRecord:
        """Delete a log on the server, then drop it from the cache. Requires connectivity."""
        record = await self._call_remote(self.remote.delete_log(log_id), f"Failed to delete log {log_id}")
        await self.store.delete_by_id(log_id)
        logger.info(f"Deleted log {log_id}")
        return record

    async def list_all_logs(self) -> list[LogRecord]:
        """Fetch every log for reports. Never reads or writes the cache."""
        records = await self._call_remote(self.remote.get_all_logs(), "Failed to fetch all logs")
        logger.info(f"Fetched {len(records)} logs for reports (not cached)")
        return records

    async def ingest_pushed(self, record: LogRecord) -> None:
        """Cache a log pushed by the server. Pushed logs are not marked as fetched."""
        await self.store.upsert(record)
        logger.info(f"Log {record.id} added to local store from push")

    async def load_cached(self) -> list[LogRecord]:
        """Return whatever the cache holds, for showing something before the first fetch."""
        cached = await self.store.get_all()
        if cached:
            logger.info(f"Loaded {len(cached)} logs from local store on startup")
        return cached

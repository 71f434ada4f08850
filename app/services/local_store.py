"""SQLite-backed local cache of log records."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import Base
from app.models.database import LogEntry, FetchedLog
from app.schemas.logs import LogRecord

logger = logging.getLogger(__name__)


def _to_record(row: LogEntry) -> LogRecord:
    return LogRecord(
        id=row.id,
        date=row.date,
        amount=row.amount,
        kind=row.kind,
        category=row.category,
        description=row.description,
    )


class LocalStore:
    """Persists cached logs and the set of individually fetched log ids.

    Every call runs in its own session and commits before returning. Writes
    against the same id are serialized; writes against different ids are not.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self._id_locks: dict[int, asyncio.Lock] = {}
        self._id_lock_users: dict[int, int] = {}

    async def init(self) -> None:
        """Create the cache tables if they don't exist. Safe to call repeatedly."""
        async with self._init_lock:
            async with self.session_maker() as session:
                conn = await session.connection()
                await conn.run_sync(Base.metadata.create_all)
                await session.commit()
            if not self._initialized:
                logger.info("Local log store initialized")
            self._initialized = True

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.init()

    @asynccontextmanager
    async def _locked(self, log_id: int) -> AsyncIterator[None]:
        """Hold the write lock for one id. The lock is dropped once nobody holds or awaits it."""
        lock = self._id_locks.get(log_id)
        if lock is None:
            lock = self._id_locks[log_id] = asyncio.Lock()
        self._id_lock_users[log_id] = self._id_lock_users.get(log_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._id_lock_users[log_id] -= 1
            if self._id_lock_users[log_id] == 0:
                del self._id_lock_users[log_id]
                del self._id_locks[log_id]

    async def upsert(self, record: LogRecord) -> None:
        """Insert a log or replace every field of the stored log with the same id."""
        await self._ensure_initialized()
        data = {
            "id": record.id,
            "date": record.date,
            "amount": record.amount,
            "type": record.kind,
            "category": record.category,
            "description": record.description,
        }
        table = LogEntry.__table__
        stmt = insert(table).values(**data)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={c: stmt.excluded[c.name] for c in table.c if c.name != "id"},
        )

        async with self._locked(record.id):
            async with self.session_maker() as session:
                await session.execute(stmt)
                await session.commit()
        logger.debug(f"Upserted log {record.id}")

    async def get_all(self) -> list[LogRecord]:
        """Return every cached log, ordered by id."""
        await self._ensure_initialized()
        async with self.session_maker() as session:
            result = await session.execute(select(LogEntry).order_by(LogEntry.id))
            rows = result.scalars().all()
        logger.debug(f"Loaded {len(rows)} logs from local store")
        return [_to_record(row) for row in rows]

    async def get_by_id(self, log_id: int) -> Optional[LogRecord]:
        """Return the cached log with this id, or None."""
        await self._ensure_initialized()
        async with self.session_maker() as session:
            row = await session.get(LogEntry, log_id)
        return _to_record(row) if row else None

    async def delete_by_id(self, log_id: int) -> None:
        """Remove the cached log with this id. No-op if absent."""
        await self._ensure_initialized()
        async with self._locked(log_id):
            async with self.session_maker() as session:
                await session.execute(delete(LogEntry).where(LogEntry.id == log_id))
                await session.commit()
        logger.debug(f"Deleted log {log_id}")

    async def mark_fetched(self, log_id: int) -> None:
        """Record that this log's detail was fetched from the server."""
        await self._ensure_initialized()
        stmt = insert(FetchedLog.__table__).values(id=log_id).on_conflict_do_nothing(
            index_elements=["id"],
        )
        async with self.session_maker() as session:
            await session.execute(stmt)
            await session.commit()
        logger.debug(f"Marked log {log_id} as fetched")

    async def is_fetched(self, log_id: int) -> bool:
        """Whether this log's detail was ever fetched individually."""
        await self._ensure_initialized()
        async with self.session_maker() as session:
            row = await session.get(FetchedLog, log_id)
        return row is not None

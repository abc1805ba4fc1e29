"""Background task delivering storage events from other processes."""

import asyncio
import logging

from medportal_identity.exceptions import TransientStorageError
from medportal_identity.infrastructure.storage.sqlalchemy.store import SqlKeyValueStore

logger = logging.getLogger(__name__)


class StorageEventRelay:
    """Periodically asks a ``SqlKeyValueStore`` for foreign changes.

    The background task reads the table in a worker thread and dispatches
    the resulting events on the event loop.
    """

    def __init__(self, store: SqlKeyValueStore, interval: float = 0.5):
        self._store = store
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="storage-event-relay")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    def tick(self) -> int:
        """Deliver pending changes once. Returns the number of events."""
        try:
            return len(self._store.poll_changes())
        except TransientStorageError as e:
            logger.debug("Storage unavailable, skipping tick: %s", e)
            return 0

    async def deliver(self) -> int:
        """Like ``tick`` without blocking the event loop on the database."""
        try:
            writes, table = await asyncio.to_thread(self._store.read_table)
        except TransientStorageError as e:
            logger.debug("Storage unavailable, skipping delivery: %s", e)
            return 0
        return len(self._store.apply_table(writes, table))

    async def _run(self) -> None:
        while True:
            await self.deliver()
            await asyncio.sleep(self._interval)

    async def __aenter__(self) -> "StorageEventRelay":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

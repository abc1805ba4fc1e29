"""Live lists - local copies of a table kept in step with its changes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from medportal.application.ports import RowChange, RowStore, Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[list[T]]]
ItemsListener = Callable[[list[T]], None]


class LiveList(Generic[T]):
    """Holds the latest result of ``fetch`` and refetches on table changes.

    Changes arriving while a fetch is running are coalesced into one more
    fetch once the current one completes.
    """

    def __init__(self, store: RowStore, tables: list[str] | str, fetch: Fetcher):
        self._store = store
        self._tables = [tables] if isinstance(tables, str) else list(tables)
        self._fetch = fetch

        self._items: list[T] = []
        self._error: Exception | None = None
        self._loaded = False
        self._listeners: list[ItemsListener] = []
        self._subscriptions: list[Subscription] = []
        self._task: asyncio.Task | None = None
        self._stale = False

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def error(self) -> Exception | None:
        """The last fetch failure, cleared by the next successful fetch."""
        return self._error

    @property
    def loaded(self) -> bool:
        return self._loaded

    def subscribe(self, listener: ItemsListener) -> Subscription:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    async def start(self) -> list[T]:
        """Subscribe to the tables and load the first snapshot."""
        if not self._subscriptions:
            self._subscriptions = [
                self._store.subscribe(table, self._on_change) for table in self._tables
            ]
        await self.refresh()
        return self.items

    async def refresh(self) -> None:
        try:
            items = await self._fetch()
        except Exception as e:
            logger.warning(
                "Refreshing %s failed (%s): %s",
                ",".join(self._tables),
                type(e).__name__,
                e,
            )
            self._error = e
            return

        self._items = list(items)
        self._error = None
        self._loaded = True
        for listener in list(self._listeners):
            try:
                listener(self.items)
            except Exception:
                logger.exception("Live list listener failed")

    async def wait_idle(self) -> None:
        """Wait until no refetch triggered by a change is pending."""
        while self._task is not None:
            await self._task

    async def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []
        self._listeners.clear()
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def __aenter__(self) -> LiveList[T]:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _on_change(self, change: RowChange) -> None:
        logger.debug("%s on %s, refetching", change.change_type.value, change.table)
        if self._task is not None:
            self._stale = True
            return
        self._task = asyncio.get_running_loop().create_task(self._refetch())

    async def _refetch(self) -> None:
        try:
            while True:
                self._stale = False
                await self.refresh()
                if not self._stale:
                    break
        finally:
            self._task = None

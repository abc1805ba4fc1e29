"""SQLAlchemy implementation of the KeyValueStore port.

Every process that opens the same database is one window of the same
origin. Changes written by other windows are detected by
``poll_changes`` (driven by ``StorageEventRelay``) and handed to
subscribers as storage events; a window's own writes never are.
"""

import logging

from sqlalchemy import Engine, create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from medportal_identity.application.ports import (
    KeyValueStore,
    StorageEvent,
    StorageListener,
    Subscription,
)
from medportal_identity.exceptions import TransientStorageError
from medportal_identity.infrastructure.storage.sqlalchemy.models import (
    StorageBase,
    StorageItemModel,
)

logger = logging.getLogger(__name__)


class SqlKeyValueStore(KeyValueStore):
    """Key-value store backed by a single SQL table."""

    def __init__(self, engine: Engine):
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        self._listeners: list[StorageListener] = []
        self._snapshot: dict[str, str] = {}
        self._writes = 0

        try:
            StorageBase.metadata.create_all(engine)
            self._snapshot = self._read_all()
        except (SQLAlchemyError, TransientStorageError) as e:
            logger.warning("Storage not ready at startup: %s", e)

    @classmethod
    def from_url(cls, url: str) -> "SqlKeyValueStore":
        return cls(create_engine(url))

    def get_item(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                model = session.get(StorageItemModel, key)
                return model.value if model is not None else None
        except SQLAlchemyError as e:
            raise TransientStorageError(f"Storage read failed: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        try:
            with self._session_factory.begin() as session:
                self._upsert(session, key, value)
        except SQLAlchemyError as e:
            raise TransientStorageError(f"Storage write failed: {e}") from e
        self._writes += 1
        self._snapshot[key] = value
        logger.debug("Stored key %s", key)

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(StorageItemModel).where(StorageItemModel.key == key))
        except SQLAlchemyError as e:
            raise TransientStorageError(f"Storage write failed: {e}") from e
        self._writes += 1
        self._snapshot.pop(key, None)
        logger.debug("Removed key %s", key)

    def subscribe(self, listener: StorageListener) -> Subscription:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    def poll_changes(self) -> list[StorageEvent]:
        """Diff the table against what this window last saw and dispatch.

        Raises ``TransientStorageError`` when the table cannot be read.
        """
        return self.apply_table(*self.read_table())

    def read_table(self) -> tuple[int, dict[str, str]]:
        """Read every row, tagged with this window's write count.

        Only touches the database, so it may run in a worker thread.
        """
        return self._writes, self._read_all()

    def apply_table(self, writes: int, current: dict[str, str]) -> list[StorageEvent]:
        """Dispatch the differences between ``current`` and the last snapshot."""
        if writes != self._writes:
            # A local write landed after the read; the next poll covers it
            return []
        events = [
            StorageEvent(key=key, old_value=self._snapshot.get(key), new_value=value)
            for key, value in current.items()
            if self._snapshot.get(key) != value
        ]
        events.extend(
            StorageEvent(key=key, old_value=old_value, new_value=None)
            for key, old_value in self._snapshot.items()
            if key not in current
        )
        self._snapshot = current

        for event in events:
            self._dispatch(event)
        return events

    def dispose(self) -> None:
        self._engine.dispose()

    def _read_all(self) -> dict[str, str]:
        try:
            with self._session_factory() as session:
                rows = session.execute(
                    select(StorageItemModel.key, StorageItemModel.value)
                ).all()
        except SQLAlchemyError as e:
            raise TransientStorageError(f"Storage read failed: {e}") from e
        return {key: value for key, value in rows}

    def _upsert(self, session: Session, key: str, value: str) -> None:
        model = session.get(StorageItemModel, key)
        if model is None:
            session.add(StorageItemModel(key=key, value=value))
        else:
            model.value = value

    def _dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Storage listener failed for key %s", event.key)

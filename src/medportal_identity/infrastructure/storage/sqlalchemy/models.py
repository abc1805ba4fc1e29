"""SQLAlchemy model for persisted key-value items."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class StorageBase(DeclarativeBase):
    """Base class for storage models."""


class StorageItemModel(StorageBase):
    """One key of the shared portal storage."""

    __tablename__ = "storage_items"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utc_now,
        onupdate=_utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<StorageItemModel(key={self.key})>"

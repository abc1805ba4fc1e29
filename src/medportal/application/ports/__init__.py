"""Application ports - interfaces the records side depends on."""

from medportal.application.ports.identity import CurrentActor
from medportal.application.ports.row_store import (
    ChangeType,
    OrderBy,
    Row,
    RowChange,
    RowChangeCallback,
    RowStore,
)
from medportal.application.ports.subscription import Subscription

__all__ = [
    "ChangeType",
    "CurrentActor",
    "OrderBy",
    "Row",
    "RowChange",
    "RowChangeCallback",
    "RowStore",
    "Subscription",
]

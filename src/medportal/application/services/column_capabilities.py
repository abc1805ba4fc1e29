"""Per-table memory of optional columns the backend turned out not to have."""

import logging

logger = logging.getLogger(__name__)


class ColumnCapabilities:
    """Remembers missing columns so later queries skip the failing lookup.

    Older deployments of the portal schema lack some columns (for example
    ``help_requests.hospital_id``). Every column is assumed present until a
    query proves otherwise.
    """

    def __init__(self) -> None:
        self._missing: dict[str, set[str]] = {}

    def supports(self, table: str, column: str) -> bool:
        return column not in self._missing.get(table, set())

    def mark_missing(self, table: str, column: str) -> None:
        missing = self._missing.setdefault(table, set())
        if column not in missing:
            logger.info("Column %s.%s not available, filtering locally", table, column)
            missing.add(column)

    def reset(self, table: str | None = None) -> None:
        """Forget what was learned, for one table or all of them."""
        if table is None:
            self._missing.clear()
        else:
            self._missing.pop(table, None)

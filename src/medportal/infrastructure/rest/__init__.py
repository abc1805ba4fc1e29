from medportal.infrastructure.rest.postgrest_row_store import (
    MISSING_COLUMN_CODES,
    PostgrestRowStore,
)

__all__ = ["MISSING_COLUMN_CODES", "PostgrestRowStore"]

from medportal.infrastructure.memory.memory_row_store import InMemoryRowStore

__all__ = ["InMemoryRowStore"]

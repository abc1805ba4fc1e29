from medportal.infrastructure.memory import InMemoryRowStore
from medportal.infrastructure.portal_context import PortalContext
from medportal.infrastructure.rest import PostgrestRowStore

__all__ = ["InMemoryRowStore", "PortalContext", "PostgrestRowStore"]

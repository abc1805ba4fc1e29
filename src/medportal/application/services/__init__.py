from medportal.application.services.column_capabilities import ColumnCapabilities
from medportal.application.services.live_list import LiveList

__all__ = ["ColumnCapabilities", "LiveList"]

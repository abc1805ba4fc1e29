"""medportal - hospital portal records and their live views.

The records side (departments, queues, blood bank, doctors, reviews and
help requests) depends only on its own ports. Identity comes in through
``CurrentActor``, produced by the identity adapter from medportal_identity.
"""

from medportal.application.ports import CurrentActor, RowStore
from medportal.application.services import ColumnCapabilities, LiveList
from medportal.domain.shared import DomainException, ErrorCode

__all__ = [
    "ColumnCapabilities",
    "CurrentActor",
    "DomainException",
    "ErrorCode",
    "LiveList",
    "RowStore",
]

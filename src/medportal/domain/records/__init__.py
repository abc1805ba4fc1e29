"""Portal records as stored by the hosted backend.

Table names are part of the backend schema and must not change.
"""

from medportal.domain.records.blood_bank import BloodStock, StockStatus
from medportal.domain.records.department import (
    Department,
    DepartmentQueue,
    QueueStatus,
    queue_status,
)
from medportal.domain.records.doctor import UNKNOWN_DEPARTMENT, Doctor
from medportal.domain.records.facility import (
    DEFAULT_FACILITY,
    KNOWN_FACILITIES,
    MOHAMMED_6,
    SANIAT_RMEL,
    Facility,
    facility_name,
)
from medportal.domain.records.help_request import HelpRequest, HelpRequestStatus
from medportal.domain.records.review import Review, validate_rating
from medportal.domain.records.waiting_list import WaitingListEntry, WaitingStatus

BLOOD_BANK_TABLE = "blood_bank"
DEPARTMENTS_TABLE = "departments"
DOCTORS_TABLE = "doctors"
HELP_REQUESTS_TABLE = "help_requests"
REVIEWS_TABLE = "reviews"
WAITING_LIST_TABLE = "waiting_list"

__all__ = [
    "BLOOD_BANK_TABLE",
    "DEFAULT_FACILITY",
    "DEPARTMENTS_TABLE",
    "DOCTORS_TABLE",
    "HELP_REQUESTS_TABLE",
    "KNOWN_FACILITIES",
    "MOHAMMED_6",
    "REVIEWS_TABLE",
    "SANIAT_RMEL",
    "UNKNOWN_DEPARTMENT",
    "WAITING_LIST_TABLE",
    "BloodStock",
    "Department",
    "DepartmentQueue",
    "Doctor",
    "Facility",
    "HelpRequest",
    "HelpRequestStatus",
    "QueueStatus",
    "Review",
    "StockStatus",
    "WaitingListEntry",
    "WaitingStatus",
    "facility_name",
    "queue_status",
    "validate_rating",
]

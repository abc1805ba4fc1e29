"""Read-side queries over portal records."""

from medportal.application.queries.blood_bank_query import BloodBankInventoryQuery
from medportal.application.queries.department_queries import (
    ListDepartmentsQuery,
    ListWaitingListQuery,
    WaitingCountsQuery,
)
from medportal.application.queries.doctors_query import ALL_DEPARTMENTS, ListDoctorsQuery
from medportal.application.queries.help_requests_query import ListHelpRequestsQuery
from medportal.application.queries.reviews_query import ListReviewsQuery

__all__ = [
    "ALL_DEPARTMENTS",
    "BloodBankInventoryQuery",
    "ListDepartmentsQuery",
    "ListDoctorsQuery",
    "ListHelpRequestsQuery",
    "ListReviewsQuery",
    "ListWaitingListQuery",
    "WaitingCountsQuery",
]

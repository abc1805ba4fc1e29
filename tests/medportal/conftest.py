"""
Pytest configuration for medportal records tests.

Provides an in-memory row store seeded with two departments, a few
doctors and blood stocks, and actors for every role.
"""

import pytest

from medportal.application.ports import CurrentActor
from medportal.infrastructure import InMemoryRowStore, PortalContext

CARDIOLOGY = {
    "id": "dep-cardio",
    "name": "Cardiology",
    "capacity": 10,
    "description": "Heart care",
}
EMERGENCY = {"id": "dep-er", "name": "Emergency", "capacity": 4, "description": None}


@pytest.fixture
def patient() -> CurrentActor:
    return CurrentActor(identifier="alice@saniatrmel.hospital", user_id="u-alice")


@pytest.fixture
def admin() -> CurrentActor:
    return CurrentActor(
        identifier="admin@mohammed6.hospital",
        user_id="admin-mohammed6-id",
        is_admin=True,
        facility_id="mohammed-6",
        facility_name="Mohammed 6 Hospital",
    )


@pytest.fixture
def anonymous() -> CurrentActor:
    return CurrentActor.anonymous()


@pytest.fixture
def row_store() -> InMemoryRowStore:
    store = InMemoryRowStore()
    store.seed("departments", [EMERGENCY, CARDIOLOGY])
    store.seed(
        "doctors",
        [
            {
                "id": "doc-2",
                "name": "Dr. Yassine Amrani",
                "specialization": "Emergency Medicine",
                "department_id": "dep-er",
                "available": True,
            },
            {
                "id": "doc-1",
                "name": "Dr. Salma Bennani",
                "specialization": "Cardiologist",
                "department_id": "dep-cardio",
                "available": False,
            },
            {
                "id": "doc-3",
                "name": "Dr. Omar Idrissi",
                "specialization": "General Practice",
                "department_id": "dep-gone",
                "available": True,
            },
        ],
    )
    store.seed(
        "blood_bank",
        [
            {"id": "b1", "blood_type": "O-", "units": 3},
            {"id": "b2", "blood_type": "A+", "units": 25},
            {"id": "b3", "blood_type": "B+", "units": 7},
        ],
    )
    return store


@pytest.fixture
def make_context(row_store):
    """Portal context acting as the given actor."""

    def _make(actor: CurrentActor | None = None, store=None) -> PortalContext:
        return PortalContext(
            store or row_store,
            actor=lambda: actor or CurrentActor.anonymous(),
        )

    return _make

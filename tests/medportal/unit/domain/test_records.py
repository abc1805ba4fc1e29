"""Tests for portal record types."""

from datetime import datetime, timezone

import pytest

from medportal.domain.records import (
    BloodStock,
    Department,
    DepartmentQueue,
    Doctor,
    HelpRequest,
    HelpRequestStatus,
    QueueStatus,
    Review,
    StockStatus,
    WaitingListEntry,
    WaitingStatus,
    facility_name,
    queue_status,
)
from medportal.domain.shared import ErrorCode, ValidationError


class TestQueueStatus:
    @pytest.mark.parametrize(
        ("count", "capacity", "expected"),
        [
            (0, 10, QueueStatus.GOOD),
            (4, 10, QueueStatus.GOOD),
            (5, 10, QueueStatus.WARNING),
            (7, 10, QueueStatus.WARNING),
            (8, 10, QueueStatus.CRITICAL),
            (12, 10, QueueStatus.CRITICAL),
            (0, 0, QueueStatus.GOOD),
            (1, 0, QueueStatus.CRITICAL),
        ],
    )
    def test_thresholds(self, count, capacity, expected):
        assert queue_status(count, capacity) == expected

    def test_department_queue(self):
        queue = DepartmentQueue(Department("d", "Cardiology", capacity=4), waiting=6)
        assert queue.status == QueueStatus.CRITICAL
        assert queue.fill_ratio == 1.0


class TestBloodStock:
    @pytest.mark.parametrize(
        ("units", "expected"),
        [
            (0, StockStatus.CRITICAL),
            (4, StockStatus.CRITICAL),
            (5, StockStatus.LOW),
            (9, StockStatus.LOW),
            (10, StockStatus.GOOD),
        ],
    )
    def test_stock_status(self, units, expected):
        assert BloodStock(id=None, blood_type="O+", units=units).stock_status == expected


class TestDoctor:
    def test_unknown_department(self):
        doctor = Doctor.from_row(
            {"id": 1, "name": "Dr. X", "specialization": "GP", "department_id": 9},
            {"1": "Cardiology"},
        )
        assert doctor.department_id == "9"
        assert doctor.department_name == "Unknown"

    def test_matches(self):
        doctor = Doctor("1", "Dr. Salma", "Cardiologist", department_id="d1")
        assert doctor.matches()
        assert doctor.matches("d1", "salma")
        assert doctor.matches(search="CARDIO")
        assert not doctor.matches("d2")
        assert not doctor.matches(search="surgeon")


class TestReview:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError) as exc_info:
            Review(None, "saniat-rmel", "alice", rating, "ok")
        assert exc_info.value.code == ErrorCode.INVALID_RATING

    @pytest.mark.parametrize("stored", [None, 0])
    def test_unrated_row(self, stored):
        review = Review.from_row(
            {"id": "r1", "hospital_id": "saniat-rmel", "rating": stored, "content": "ok"}
        )
        assert review.rating is None


class TestWaitingListEntry:
    def test_from_row(self):
        entry = WaitingListEntry.from_row(
            {
                "id": 5,
                "user_id": "u-1",
                "patient_name": "Alice",
                "department_id": "dep-er",
                "status": "in-progress",
                "created_at": "2024-03-01T10:00:00Z",
            }
        )
        assert entry.id == "5"
        assert entry.status == WaitingStatus.IN_PROGRESS
        assert entry.created_at == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            WaitingStatus.parse("lost")

    def test_unrecognised_stored_status(self):
        entry = WaitingListEntry.from_row(
            {"id": "w1", "department_id": "dep-er", "status": "transferred"}
        )
        assert entry.status == WaitingStatus.UNKNOWN

    def test_unknown_is_not_accepted_as_input(self):
        with pytest.raises(ValidationError):
            WaitingStatus.parse("unknown")


class TestHelpRequest:
    def test_insert_row_has_no_generated_columns(self):
        request = HelpRequest(None, "saniat-rmel", "alice", "Need a wheelchair")
        row = request.to_insert_row()
        assert row["status"] == "pending"
        assert "id" not in row
        assert "created_at" not in row

    def test_from_row_defaults_to_pending(self):
        request = HelpRequest.from_row({"id": "h1", "patient_name": "bob"})
        assert request.status == HelpRequestStatus.PENDING
        assert request.hospital_id is None

    def test_unrecognised_stored_status(self, caplog):
        with caplog.at_level("WARNING"):
            request = HelpRequest.from_row(
                {"id": "h1", "patient_name": "bob", "status": "escalated"}
            )
        assert request.status == HelpRequestStatus.UNKNOWN
        assert "escalated" in caplog.text


def test_facility_name():
    assert facility_name("mohammed-6") == "Mohammed 6 Hospital"
    assert facility_name("elsewhere") == "elsewhere"

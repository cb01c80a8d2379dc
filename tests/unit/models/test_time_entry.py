"""Tests for TimeEntry and NewTimeEntry models."""

import datetime as dt

import pytest
from pydantic import ValidationError

from timebudget.models.time_entry import NewTimeEntry, TimeEntry


class TestTimeEntry:
    """Test stored time entries."""

    def test_create_entry(self):
        """Test creating a valid time entry."""
        entry = TimeEntry(
            project_id="p-1",
            phase_code="schetsontwerp",
            occurred_on=dt.date(2024, 9, 20),
            minutes=270,
        )

        assert entry.id is None
        assert entry.minutes == 270
        assert entry.notes is None

    def test_date_string_is_parsed(self):
        """Test that ISO date strings are coerced to dates."""
        entry = TimeEntry(
            project_id="p-1",
            phase_code="uitvoering",
            occurred_on="2024-09-20",
            minutes=30,
        )
        assert entry.occurred_on == dt.date(2024, 9, 20)

    @pytest.mark.parametrize("minutes", [0, -15])
    def test_non_positive_minutes_rejected(self, minutes):
        """Test that an entry must last at least one minute."""
        with pytest.raises(ValidationError):
            TimeEntry(
                project_id="p-1",
                phase_code="uitvoering",
                occurred_on=dt.date(2024, 9, 20),
                minutes=minutes,
            )


class TestNewTimeEntry:
    """Test the creation payload."""

    def test_payload_shape(self):
        """Test the payload sent to the backend."""
        entry = NewTimeEntry(
            project_id="p-1",
            phase_code="schetsontwerp",
            occurred_on="2024-09-20",
            minutes=150,
            notes="Eerste schetsen",
        )

        assert entry.to_payload() == {
            "project_id": "p-1",
            "phase_code": "schetsontwerp",
            "occurred_on": "2024-09-20",
            "minutes": 150,
            "notes": "Eerste schetsen",
        }

    def test_blank_notes_become_none(self):
        """Test that whitespace-only notes are sent as null."""
        entry = NewTimeEntry(
            project_id="p-1",
            phase_code="schetsontwerp",
            occurred_on="2024-09-20",
            minutes=60,
            notes="   ",
        )
        assert entry.notes is None

    def test_date_must_be_iso(self):
        """Test that the payload date must be YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            NewTimeEntry(
                project_id="p-1",
                phase_code="schetsontwerp",
                occurred_on="20-09-2024",
                minutes=60,
            )

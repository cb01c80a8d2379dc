"""Tests for backend record adapters."""

import datetime as dt

import pytest
from pydantic import ValidationError

from timebudget.services.record_adapter import (
    project_from_record,
    projects_from_records,
    time_entries_from_records,
    time_entry_from_record,
)


class TestProjectFromRecord:
    """Tests for project_from_record."""

    def test_full_record(self):
        """Test a complete fixed-price project record."""
        project = project_from_record(
            {
                "id": 7,
                "name": "Kantoor Rotterdam",
                "city": "Rotterdam",
                "client_name": "Havenbedrijf",
                "billing_type": "fixed",
                "default_rate_cents": 9500,
                "phase_budgets": {"schetsontwerp": "150000", "uitvoering": 300000},
                "archived_at": None,
                "created_at": "2024-01-01T00:00:00Z",
            }
        )

        assert project.id == "7"
        assert project.billing_type == "fixed"
        assert project.phase_budgets == {"schetsontwerp": 150000, "uitvoering": 300000}
        assert project.total_budget_cents == 450000
        assert project.archived is False

    def test_defaults_for_missing_billing(self):
        """Test missing billing fields default to an hourly project at 0."""
        project = project_from_record(
            {"id": "p-1", "name": "Villa", "billing_type": None, "default_rate_cents": None}
        )

        assert project.is_hourly
        assert project.default_rate_cents == 0
        assert project.phase_budgets == {}

    def test_archived_derived_from_timestamp(self):
        """Test archived is true when only archived_at is present."""
        project = project_from_record(
            {"id": "p-1", "name": "Villa", "archived_at": "2024-06-01T12:00:00"}
        )

        assert project.archived
        assert project.archived_at == dt.datetime(2024, 6, 1, 12, 0)

    def test_bad_budget_values_skipped(self):
        """Test blank and non-numeric budgets are dropped."""
        project = project_from_record(
            {
                "id": "p-1",
                "name": "Villa",
                "billing_type": "fixed",
                "phase_budgets": {"schetsontwerp": "", "uitvoering": "veel", "do": 100},
            }
        )

        assert project.phase_budgets == {"do": 100}

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", float("nan")])
    def test_non_finite_budgets_skipped(self, value):
        """Test NaN and infinite budgets are dropped instead of failing the record."""
        project = project_from_record(
            {
                "id": "p-1",
                "name": "Villa",
                "billing_type": "fixed",
                "phase_budgets": {"schetsontwerp": value, "do": 100},
            }
        )

        assert project.phase_budgets == {"do": 100}

    def test_missing_name_raises(self):
        """Test a record without name is invalid."""
        with pytest.raises(ValidationError):
            project_from_record({"id": "p-1"})


class TestTimeEntryFromRecord:
    """Tests for time_entry_from_record."""

    def test_flat_record(self):
        """Test a record with project_id and minutes."""
        entry = time_entry_from_record(
            {
                "id": 3,
                "project_id": 12,
                "phase_code": "uitvoering",
                "occurred_on": "2024-09-20",
                "minutes": 90,
                "notes": "Bouwplaats",
            }
        )

        assert entry.id == "3"
        assert entry.project_id == "12"
        assert entry.occurred_on == dt.date(2024, 9, 20)
        assert entry.minutes == 90

    @pytest.mark.parametrize(
        "key,nested",
        [
            ("project", {"id": 12, "name": "Villa"}),
            ("projects", {"id": 12, "name": "Villa"}),
            ("projects", [{"id": 12, "name": "Villa"}]),
        ],
    )
    def test_embedded_project(self, key, nested):
        """Test every embedded project shape resolves to the same id."""
        entry = time_entry_from_record(
            {
                key: nested,
                "phase_code": "uitvoering",
                "occurred_on": "2024-09-20",
                "minutes": 30,
            }
        )
        assert entry.project_id == "12"

    def test_hours_instead_of_minutes(self):
        """Test durations reported in hours are converted."""
        entry = time_entry_from_record(
            {
                "project_id": "p-1",
                "phase_code": "uitvoering",
                "occurred_on": "2024-09-20",
                "hours": "2.25",
            }
        )
        assert entry.minutes == 135

    def test_nested_phase_and_timestamp_date(self):
        """Test phase objects and timestamp dates are flattened."""
        entry = time_entry_from_record(
            {
                "project_id": "p-1",
                "phase": {"code": "schetsontwerp", "name": "Schetsontwerp"},
                "occurred_on": "2024-09-20T00:00:00+00:00",
                "minutes": 60,
            }
        )

        assert entry.phase_code == "schetsontwerp"
        assert entry.occurred_on == dt.date(2024, 9, 20)

    def test_missing_project_raises(self):
        """Test a record without any project reference is invalid."""
        with pytest.raises(ValidationError):
            time_entry_from_record(
                {"phase_code": "uitvoering", "occurred_on": "2024-09-20", "minutes": 30}
            )


class TestBulkAdapters:
    """Tests for the list adapters."""

    def test_invalid_records_are_skipped(self):
        """Test bad records are dropped and the rest kept."""
        projects = projects_from_records(
            [{"id": "p-1", "name": "Villa"}, {"id": "p-2", "name": ""}]
        )
        assert [p.id for p in projects] == ["p-1"]

    def test_non_finite_budget_keeps_project(self):
        """Test one unusable budget value doesn't stop the project list."""
        projects = projects_from_records(
            [
                {"id": "p-1", "name": "Villa", "phase_budgets": {"do": "Infinity"}},
                {"id": "p-2", "name": "Kantoor", "phase_budgets": {"do": "NaN"}},
            ]
        )
        assert [p.id for p in projects] == ["p-1", "p-2"]

    def test_invalid_entries_are_skipped(self):
        """Test entries with zero minutes are dropped."""
        entries = time_entries_from_records(
            [
                {"project_id": "p-1", "phase_code": "do", "occurred_on": "2024-09-20", "minutes": 0},
                {"project_id": "p-1", "phase_code": "do", "occurred_on": "2024-09-20", "minutes": 5},
            ]
        )
        assert [e.minutes for e in entries] == [5]

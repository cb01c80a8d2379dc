"""Tests for import session state and its pure operations."""

import dataclasses

import pytest

from timebudget.importers.import_session import (
    ImportSession,
    ImportSummary,
    UnknownRowError,
    apply_edit,
    build_rows,
    importable_rows,
    raw_fields,
    visible_rows,
    with_filter,
)
from timebudget.validators.row_validator import ImportRowValidator

RAW_ROWS = [
    {
        "project_name": "Villa Amsterdam",
        "phase_name": "Schetsontwerp",
        "date_value": "2024-09-20",
        "hours_value": "2,5",
    },
    {
        "project_name": "Onbekend",
        "phase_name": "DO",
        "date_value": "2024-09-21",
        "hours_value": "1",
    },
    {
        "project_name": "Kantoor Rotterdam",
        "phase_name": "VO",
        "date_value": "2024-09-22",
        "hours_value": "3",
    },
]


@pytest.fixture
def validator(sample_projects, catalog):
    return ImportRowValidator(sample_projects, catalog)


@pytest.fixture
def session(validator, catalog):
    return ImportSession(rows=build_rows(RAW_ROWS, validator, catalog), source_name="uren.csv")


class TestBuildRows:
    """Test building the session rows."""

    def test_rows_numbered_from_one(self, session):
        """Test rows keep their 1-based source position."""
        assert [row.row_number for row in session.rows] == [1, 2, 3]

    def test_counts(self, session):
        """Test valid and invalid counts."""
        assert session.valid_count == 2
        assert session.invalid_count == 1

    def test_row_lookup(self, session):
        """Test finding a row by number."""
        assert session.row(2).project_name == "Onbekend"

    def test_unknown_row(self, session):
        """Test looking up a missing row raises."""
        with pytest.raises(UnknownRowError, match="Row 9 is not part of this import"):
            session.row(9)

    def test_session_is_immutable(self, session):
        """Test the session cannot be changed in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            session.project_filter = "Villa Amsterdam"


class TestFiltering:
    """Test the project filter."""

    def test_no_filter_shows_all_rows(self, session):
        """Test every row is visible without a filter."""
        assert len(visible_rows(session)) == 3

    def test_filter_by_matched_project(self, session):
        """Test only rows matched to the project are visible."""
        filtered = with_filter(session, "villa amsterdam")

        assert [row.row_number for row in visible_rows(filtered)] == [1]
        assert session.project_filter is None

    def test_clear_filter(self, session):
        """Test an empty filter shows everything again."""
        filtered = with_filter(with_filter(session, "Villa Amsterdam"), "")

        assert filtered.project_filter is None
        assert len(visible_rows(filtered)) == 3

    def test_importable_rows(self, session):
        """Test only visible valid rows are importable."""
        assert [row.row_number for row in importable_rows(session)] == [1, 3]
        filtered = with_filter(session, "Kantoor Rotterdam")
        assert [row.row_number for row in importable_rows(filtered)] == [3]


class TestApplyEdit:
    """Test inline edits."""

    def test_edit_fixes_row(self, session, validator, catalog):
        """Test correcting the project name makes the row valid."""
        edited = apply_edit(session, 2, {"project_name": "Woning Utrecht"}, validator, catalog)

        row = edited.row(2)
        assert row.is_valid
        assert row.project_id == "p-woning"
        assert row.phase_code == "definitief-ontwerp"
        assert edited.valid_count == 3
        assert session.row(2).is_valid is False

    def test_edit_renormalizes(self, session, validator, catalog):
        """Test edited raw values are normalized again."""
        edited = apply_edit(session, 1, {"hours_value": "0,5", "date_value": "1-10-24"}, validator, catalog)

        row = edited.row(1)
        assert row.minutes == 30
        assert row.occurred_on == "2024-10-01"

    def test_edit_can_invalidate(self, session, validator, catalog):
        """Test an edit that breaks a valid row."""
        edited = apply_edit(session, 3, {"hours_value": ""}, validator, catalog)

        assert edited.row(3).errors == ["Ongeldige of ontbrekende uren"]

    def test_other_rows_untouched(self, session, validator, catalog):
        """Test only the edited row is replaced."""
        edited = apply_edit(session, 1, {"notes": "Nieuw"}, validator, catalog)

        assert edited.rows[1] is session.rows[1]
        assert edited.rows[2] is session.rows[2]

    def test_unknown_row(self, session, validator, catalog):
        """Test editing a missing row raises."""
        with pytest.raises(UnknownRowError):
            apply_edit(session, 4, {"notes": "x"}, validator, catalog)

    def test_derived_fields_not_editable(self, session, validator, catalog):
        """Test only raw fields can be edited."""
        with pytest.raises(ValueError, match="Cannot edit minutes"):
            apply_edit(session, 1, {"minutes": 60}, validator, catalog)

    def test_raw_fields(self, session):
        """Test the raw values of a row."""
        assert raw_fields(session.row(1)) == {
            "project_name": "Villa Amsterdam",
            "phase_name": "Schetsontwerp",
            "date_value": "2024-09-20",
            "hours_value": "2,5",
            "notes": "",
        }


class TestImportSummary:
    """Test the commit summary."""

    def test_message(self):
        """Test the Dutch summary line."""
        summary = ImportSummary(total=3, successful=2, failed=1, errors=["Rij 2: fout"])
        assert summary.message == "2 van 3 rijen geïmporteerd"

    def test_defaults(self):
        """Test an empty summary."""
        summary = ImportSummary()
        assert (summary.total, summary.successful, summary.failed, summary.errors) == (0, 0, 0, [])

"""Tests for the row normalizer."""

import datetime as dt
import math
from decimal import Decimal

import pandas as pd
import pytest

from timebudget.models.phase import Phase, PhaseCatalog
from timebudget.normalizers.row_normalizer import (
    normalize_date,
    normalize_hours,
    normalize_phase_label,
    normalize_row,
)


class TestNormalizeDate:
    """Tests for normalize_date."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("2024-09-20", "2024-09-20"),
            ("20-04-23", "2023-04-20"),
            ("20-04-2023", "2023-04-20"),
            ("5/1/2024", "2024-01-05"),
            ("05.01.24", "2024-01-05"),
            ("  2024-09-20  ", "2024-09-20"),
        ],
    )
    def test_text_dates(self, raw, expected):
        """Test ISO and day-first text dates."""
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize("year", [0, 23, 99])
    def test_two_digit_year_maps_to_2000s(self, year):
        """Test that every two-digit year is read as 2000 + year."""
        assert normalize_date(f"1-6-{year:02d}") == f"{2000 + year}-06-01"

    @pytest.mark.parametrize(
        "serial,expected",
        [
            (45000, "2023-03-15"),
            (45555, "2024-09-20"),
            (45555.75, "2024-09-20"),
        ],
    )
    def test_spreadsheet_serials(self, serial, expected):
        """Test spreadsheet day serials, ignoring the time fraction."""
        assert normalize_date(serial) == expected

    def test_date_objects(self):
        """Test date, datetime and Timestamp cells."""
        assert normalize_date(dt.date(2024, 9, 20)) == "2024-09-20"
        assert normalize_date(dt.datetime(2024, 9, 20, 14, 30)) == "2024-09-20"
        assert normalize_date(pd.Timestamp("2024-09-20 08:00")) == "2024-09-20"

    @pytest.mark.parametrize(
        "raw",
        [
            None, "", "   ", "geen datum", "2024-02-30", "31-13-2024",
            "today", "now", "Yesterday", float("nan"), 0, -5, True,
        ],
    )
    def test_unparseable_dates_are_empty(self, raw):
        """Test that unreadable values degrade to an empty string."""
        assert normalize_date(raw) == ""

    def test_not_a_time(self):
        """Test that pandas' missing timestamp is treated as empty."""
        assert normalize_date(pd.NaT) == ""


class TestNormalizeHours:
    """Tests for normalize_hours."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("3,25", 3.25),
            ("1.234,5", 1234.5),
            ("4.5", 4.5),
            ("8", 8.0),
            (" 2,0 ", 2.0),
            ("1.234.567", 1234567.0),
            (6, 6.0),
            (2.75, 2.75),
            (Decimal("1.5"), 1.5),
        ],
    )
    def test_notations(self, raw, expected):
        """Test NL and US notation and numeric cells."""
        assert normalize_hours(raw) == expected

    @pytest.mark.parametrize(
        "raw", [None, "", "  ", "veel", "1,2,3x", float("nan"), float("inf"), True]
    )
    def test_unparseable_hours_are_zero(self, raw):
        """Test that unreadable values degrade to 0."""
        assert normalize_hours(raw) == 0.0

    def test_negative_hours_pass_through(self):
        """Test that negative numbers are kept for the validator to reject."""
        assert normalize_hours("-2,5") == -2.5

    def test_result_is_finite_float(self):
        """Test the return type."""
        value = normalize_hours("7,5")
        assert isinstance(value, float)
        assert math.isfinite(value)


class TestNormalizePhaseLabel:
    """Tests for normalize_phase_label."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("3 - Definitief ontwerp", "definitief-ontwerp"),
            ("1 - Schets ontwerp", "schetsontwerp"),
            ("DO", "definitief-ontwerp"),
            ("vo", "voorlopig-ontwerp"),
            ("VO tekeningen", "vo-tekeningen"),
            ("  Bouw   voorbereiding ", "bouwvoorbereiding"),
            ("Oplevering/nazorg", "oplevering-nazorg"),
            ("uitvoeringstekeningen", "uitvoering-tekeningen"),
        ],
    )
    def test_known_labels(self, raw, expected):
        """Test known Dutch phase labels map to canonical codes."""
        assert normalize_phase_label(raw) == expected

    def test_unknown_label_is_slugified(self):
        """Test that unmapped labels become lowercase hyphenated codes."""
        assert normalize_phase_label("Extra werk") == "extra-werk"
        assert normalize_phase_label("12 - Meer Werk") == "meer-werk"

    def test_catalog_names_and_codes(self):
        """Test that catalog names and codes are recognized."""
        catalog = PhaseCatalog(
            [Phase(code="interieur", name="Interieur advies", sort_order=1)]
        )

        assert normalize_phase_label("Interieur Advies", catalog) == "interieur"
        assert normalize_phase_label("interieur", catalog) == "interieur"

    @pytest.mark.parametrize("raw", [None, "", "   ", "4 - "])
    def test_empty_labels(self, raw):
        """Test that blank labels yield an empty code."""
        assert normalize_phase_label(raw) == ""


class TestNormalizeRow:
    """Tests for normalize_row."""

    def test_full_row(self, catalog):
        """Test deriving every canonical field from raw cells."""
        row = normalize_row(
            {
                "project_name": " Villa Amsterdam ",
                "phase_name": "2 - Voorlopig ontwerp",
                "date_value": "20-09-24",
                "hours_value": "2,5",
                "notes": " Overleg ",
            },
            row_number=4,
            catalog=catalog,
        )

        assert row.row_number == 4
        assert row.project_name == "Villa Amsterdam"
        assert row.phase_name == "2 - Voorlopig ontwerp"
        assert row.phase_code == "voorlopig-ontwerp"
        assert row.occurred_on == "2024-09-20"
        assert row.hours == 2.5
        assert row.minutes == 150
        assert row.notes == "Overleg"
        assert row.is_valid is False
        assert row.errors == []

    def test_raw_values_are_kept(self):
        """Test that raw date and hours cells are preserved for editing."""
        row = normalize_row({"date_value": 45555, "hours_value": "1,5"}, row_number=1)

        assert row.date_value == 45555
        assert row.hours_value == "1,5"

    def test_empty_row_never_raises(self):
        """Test that an empty mapping degrades to empty and zero values."""
        row = normalize_row({}, row_number=1)

        assert row.project_name == ""
        assert row.phase_code == ""
        assert row.occurred_on == ""
        assert row.hours == 0.0
        assert row.minutes == 0
        assert row.date_value is None
        assert row.hours_value is None

    def test_nan_cells_become_empty(self):
        """Test that missing spreadsheet cells are treated as blank."""
        row = normalize_row(
            {"project_name": float("nan"), "notes": float("nan"), "hours_value": float("nan")},
            row_number=2,
        )

        assert row.project_name == ""
        assert row.notes == ""
        assert row.hours_value is None

    def test_negative_hours_give_zero_minutes(self):
        """Test minutes are clamped while hours keep their sign."""
        row = normalize_row({"hours_value": "-1"}, row_number=1)

        assert row.hours == -1.0
        assert row.minutes == 0

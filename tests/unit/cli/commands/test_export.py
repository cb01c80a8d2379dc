"""Tests for the export and template commands."""

import datetime as dt
from unittest.mock import Mock, patch

import pandas as pd
import pytest
from click.testing import CliRunner

from timebudget.cli import cli
from timebudget.models.phase import PhaseCatalog
from timebudget.readers.reference_data_reader import ReferenceDataReader
from timebudget.services.api_client import ApiError


class TestExportCommand:
    """Test the export command."""

    @pytest.fixture
    def runner(self):
        """Create a CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def reader(self, sample_projects, sample_entries):
        reader = Mock(spec=ReferenceDataReader)
        reader.read_projects.return_value = sample_projects
        reader.read_phase_catalog.return_value = PhaseCatalog.fallback()
        reader.read_time_entries.return_value = sample_entries
        return reader

    def _invoke(self, runner, reader, args):
        with patch(
            "timebudget.cli.commands.export.create_reference_reader", return_value=reader
        ):
            return runner.invoke(cli, ["export", *args])

    def test_csv_export(self, runner, reader, tmp_path, mock_env):
        """Test the CSV export holds one row per time entry."""
        output = tmp_path / "uren.csv"

        result = self._invoke(runner, reader, ["--output", str(output)])

        assert result.exit_code == 0
        assert f"Exported 3 time entries to {output}" in result.output
        df = pd.read_csv(output, dtype=str)
        assert list(df["Project"]) == [
            "Kantoor Rotterdam",
            "Kantoor Rotterdam",
            "Villa Amsterdam",
        ]
        assert df.loc[2, "Bedrag"] == "300.00"

    def test_xlsx_export(self, runner, reader, tmp_path, mock_env):
        """Test the Excel export has project and time-entry sheets."""
        output = tmp_path / "export.xlsx"

        result = self._invoke(runner, reader, ["--format", "xlsx", "--output", str(output)])

        assert result.exit_code == 0
        sheets = pd.read_excel(output, sheet_name=None, engine="openpyxl")
        assert set(sheets) == {"Projecten", "Uren"}
        assert len(sheets["Projecten"]) == 3
        assert len(sheets["Uren"]) == 3

    def test_default_file_name(self, runner, reader, mock_env):
        """Test the default output is a dated file in the working directory."""
        result = self._invoke(runner, reader, [])

        assert result.exit_code == 0
        assert f"urenexport-{dt.date.today().isoformat()}.csv" in result.output

    def test_backend_unavailable(self, runner, reader, mock_env):
        """Test an unreachable backend exits with its error code."""
        reader.read_time_entries.side_effect = ApiError("Backend unreachable")

        result = self._invoke(runner, reader, [])

        assert result.exit_code == 9
        assert "Backend Unreachable" in result.output


class TestTemplateCommand:
    """Test the template command."""

    @pytest.fixture
    def runner(self):
        """Create a CLI test runner."""
        return CliRunner()

    def test_writes_template(self, runner, tmp_path, mock_env):
        """Test the template is written with the import columns."""
        output = tmp_path / "template.csv"

        result = runner.invoke(cli, ["template", "--output", str(output)])

        assert result.exit_code == 0
        assert f"Template written to {output}" in result.output
        assert "Columns: Project, Fase, Datum, Uren, Omschrijving" in result.output
        df = pd.read_csv(output, dtype=str)
        assert list(df.columns) == ["Project", "Fase", "Datum", "Uren", "Omschrijving"]
        assert len(df) == 3

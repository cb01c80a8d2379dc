"""Export generation for time entries and projects.

This module builds the export DataFrames (time-entry CSV, full workbook with
``Projecten`` and ``Uren`` sheets) and the CSV template for spreadsheet
imports, and writes them to disk.
"""

import csv
import datetime as dt
import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from timebudget.calculators.budget_calculator import calculate_spent_cents
from timebudget.calculators.time_utils import minutes_to_hours
from timebudget.models.phase import PhaseCatalog
from timebudget.models.project import Project
from timebudget.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

UNKNOWN_PROJECT = "Onbekend"

TIME_ENTRY_COLUMNS = [
    "Project",
    "Fase",
    "Datum",
    "Uren",
    "Omschrijving",
    "Uurtarief",
    "Bedrag",
]
WORKBOOK_ENTRY_COLUMNS = ["Entry ID", "Project ID"] + TIME_ENTRY_COLUMNS
PROJECT_COLUMNS = [
    "Project ID",
    "Naam",
    "Stad",
    "Opdrachtgever",
    "Facturering",
    "Uurtarief",
    "Budget",
    "Status",
    "Gearchiveerd op",
]

TEMPLATE_COLUMNS = ["Project", "Fase", "Datum", "Uren", "Omschrijving"]
TEMPLATE_ROWS = [
    ["Villa Amsterdam", "Schetsontwerp", "2024-09-20", "4.5", "Eerste schetsen"],
    ["Kantoor Rotterdam", "VO", "2024-09-21", "6", "Voorlopig ontwerp"],
    ["Woning Utrecht", "DO", "2024-09-22", "3.25", "Definitief ontwerp tekeningen"],
]

_CENT = Decimal("0.01")


def _euros(cents: Union[int, Decimal]) -> float:
    return float((Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP))


def _hours(minutes: int) -> float:
    return float(minutes_to_hours(minutes).quantize(_CENT, rounding=ROUND_HALF_UP))


def default_export_name(prefix: str, extension: str, today: Optional[dt.date] = None) -> str:
    """File name like ``urenexport-2024-09-20.csv``."""
    today = today or dt.date.today()
    return f"{prefix}-{today.isoformat()}.{extension.lstrip('.')}"


@dataclass
class ExportData:
    """Container for the workbook export.

    Attributes:
        projects: One row per project (sheet ``Projecten``)
        time_entries: One row per time entry (sheet ``Uren``)
    """

    projects: pd.DataFrame
    time_entries: pd.DataFrame


class ExportGenerator:
    """Generate export DataFrames from projects and time entries.

    Amounts are in euros with two decimals; spend per entry is hours x the
    project's hourly rate. Entries of unknown projects are exported under
    "Onbekend" with a zero rate.

    Example:
        >>> generator = ExportGenerator(projects, entries)
        >>> df = generator.time_entries_frame()
        >>> list(df.columns)
        ['Project', 'Fase', 'Datum', 'Uren', 'Omschrijving', 'Uurtarief', 'Bedrag']
    """

    def __init__(
        self,
        projects: Iterable[Project],
        entries: Iterable[TimeEntry],
        catalog: Optional[PhaseCatalog] = None,
    ):
        self.projects: Dict[str, Project] = {p.id: p for p in projects}
        self.entries: List[TimeEntry] = list(entries)
        self.catalog = catalog or PhaseCatalog.fallback()

    def generate(self) -> ExportData:
        return ExportData(
            projects=self.projects_frame(),
            time_entries=self.time_entries_frame(include_ids=True),
        )

    def time_entries_frame(self, include_ids: bool = False) -> pd.DataFrame:
        """Build the time-entry table, in the order entries were given."""
        columns = WORKBOOK_ENTRY_COLUMNS if include_ids else TIME_ENTRY_COLUMNS
        rows = [self._entry_row(entry) for entry in self.entries]
        return pd.DataFrame(rows, columns=columns)

    def projects_frame(self) -> pd.DataFrame:
        rows = [self._project_row(project) for project in self.projects.values()]
        return pd.DataFrame(rows, columns=PROJECT_COLUMNS)

    def _entry_row(self, entry: TimeEntry) -> Dict[str, object]:
        project = self.projects.get(entry.project_id)
        rate_cents = project.default_rate_cents if project else 0
        return {
            "Entry ID": entry.id or "",
            "Project ID": entry.project_id,
            "Project": project.name if project else UNKNOWN_PROJECT,
            "Fase": self.catalog.name_for(entry.phase_code),
            "Datum": entry.occurred_on.isoformat(),
            "Uren": _hours(entry.minutes),
            "Omschrijving": entry.notes or "",
            "Uurtarief": _euros(rate_cents),
            "Bedrag": _euros(calculate_spent_cents(entry.minutes, rate_cents)),
        }

    def _project_row(self, project: Project) -> Dict[str, object]:
        return {
            "Project ID": project.id,
            "Naam": project.name,
            "Stad": project.city or "",
            "Opdrachtgever": project.client_name or "",
            "Facturering": "Uurtarief" if project.is_hourly else "Vaste prijs",
            "Uurtarief": _euros(project.default_rate_cents),
            "Budget": _euros(project.total_budget_cents),
            "Status": "Gearchiveerd" if project.archived else "Actief",
            "Gearchiveerd op": (
                project.archived_at.date().isoformat() if project.archived_at else ""
            ),
        }


def write_time_entries_csv(df: pd.DataFrame, path: PathLike) -> Path:
    """Write the time-entry table as a fully quoted UTF-8 CSV."""
    path = Path(path)
    df.to_csv(
        path,
        index=False,
        encoding="utf-8",
        quoting=csv.QUOTE_ALL,
        float_format="%.2f",
    )
    logger.info(f"Wrote {len(df)} time entries to {path}")
    return path


def write_workbook(data: ExportData, path: PathLike) -> Path:
    """Write the ``Projecten`` and ``Uren`` sheets to an ``.xlsx`` file."""
    path = Path(path)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        data.projects.to_excel(writer, sheet_name="Projecten", index=False)
        data.time_entries.to_excel(writer, sheet_name="Uren", index=False)
    logger.info(
        f"Wrote workbook {path} ({len(data.projects)} projects, "
        f"{len(data.time_entries)} time entries)"
    )
    return path


def template_frame() -> pd.DataFrame:
    return pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_COLUMNS)


def write_template(path: PathLike) -> Path:
    """Write the spreadsheet import template CSV."""
    path = Path(path)
    template_frame().to_csv(path, index=False, encoding="utf-8")
    logger.info(f"Wrote import template to {path}")
    return path

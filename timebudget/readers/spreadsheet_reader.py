"""Spreadsheet reader for import files.

This module reads ``.xlsx``/``.xlsm`` workbooks and ``.csv`` files into
plain row mappings keyed by the canonical import fields (``project_name``,
``phase_name``, ``date_value``, ``hours_value``, ``notes``). Header names are
matched case-insensitively against a list of Dutch and English aliases.
"""

import io
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes]

SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm", ".csv")

COLUMN_ALIASES: Dict[str, tuple] = {
    "project_name": ("project", "projectnaam", "project naam", "project_name"),
    "phase_name": ("fase", "phase", "fase code", "phase code", "phase_code"),
    "date_value": ("datum", "date", "occurred_on"),
    "hours_value": ("uren", "aantal uur", "aantal uren", "hours", "tijd"),
    "notes": ("omschrijving", "description", "notes", "opmerkingen"),
}


class UnsupportedFileError(ValueError):
    """Raised when an import file has an extension no reader handles."""


def file_extension(name: Union[str, Path]) -> str:
    return Path(str(name)).suffix.lower()


def resolve_columns(columns: Iterable[Any]) -> Dict[Any, str]:
    """Map sheet headers to canonical field names.

    The first header matching an alias claims that field; later duplicates
    are ignored.

    Example:
        >>> resolve_columns(["Datum", "PROJECT", "Aantal uren", "Extra"])
        {'Datum': 'date_value', 'PROJECT': 'project_name', 'Aantal uren': 'hours_value'}
    """
    resolved: Dict[Any, str] = {}
    claimed = set()
    for column in columns:
        header = " ".join(str(column).split()).casefold()
        for field, aliases in COLUMN_ALIASES.items():
            if field not in claimed and header in aliases:
                resolved[column] = field
                claimed.add(field)
                break
    return resolved


def _is_blank(value: Any) -> bool:
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _detect_separator(text: str) -> str:
    header = text.split("\n", 1)[0]
    return ";" if header.count(";") > header.count(",") else ","


class SpreadsheetReader:
    """Reader for spreadsheet import files.

    All sheets of a workbook are read in order and concatenated. Rows whose
    recognized cells are all empty are skipped. Excel cells keep their
    native types (numbers, datetimes) so the normalizer can tell a date
    serial from text; CSV cells are always text.

    Example:
        >>> reader = SpreadsheetReader()
        >>> rows = reader.read("uren-september.xlsx")
        >>> rows[0]["project_name"]
        'Villa Amsterdam'
    """

    def read(self, source: Source, file_name: Optional[str] = None) -> List[Dict[str, Any]]:
        """Read a spreadsheet into canonical row mappings.

        Args:
            source: Path to the file, or its raw bytes
            file_name: Original file name; required when ``source`` is bytes

        Returns:
            List of mappings with canonical field keys

        Raises:
            UnsupportedFileError: If the extension is not a spreadsheet type
        """
        name = file_name or (str(source) if not isinstance(source, bytes) else "")
        extension = file_extension(name)
        if extension not in SPREADSHEET_EXTENSIONS:
            raise UnsupportedFileError(
                f"Unsupported spreadsheet type '{extension or name}'; "
                f"expected one of {', '.join(SPREADSHEET_EXTENSIONS)}"
            )

        if extension == ".csv":
            frames = {"csv": self._read_csv(source)}
        else:
            frames = self._read_workbook(source)

        rows: List[Dict[str, Any]] = []
        for sheet_name, df in frames.items():
            sheet_rows = self._frame_rows(df, sheet_name)
            rows.extend(sheet_rows)

        logger.info(f"Read {len(rows)} row(s) from {name} ({len(frames)} sheet(s))")
        return rows

    def _read_csv(self, source: Source) -> pd.DataFrame:
        if isinstance(source, bytes):
            text = source.decode("utf-8-sig")
        else:
            text = Path(source).read_text(encoding="utf-8-sig")
        if not text.strip():
            return pd.DataFrame()
        return pd.read_csv(
            io.StringIO(text),
            sep=_detect_separator(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )

    def _read_workbook(self, source: Source) -> Dict[str, pd.DataFrame]:
        handle = io.BytesIO(source) if isinstance(source, bytes) else source
        return pd.read_excel(handle, sheet_name=None, engine="openpyxl")

    def _frame_rows(self, df: pd.DataFrame, sheet_name: str) -> List[Dict[str, Any]]:
        if df.empty:
            logger.debug(f"Sheet '{sheet_name}' is empty")
            return []

        mapping = resolve_columns(df.columns)
        if not mapping:
            logger.warning(
                f"Sheet '{sheet_name}' has no recognized columns: {list(df.columns)}"
            )
            return []

        unknown = [c for c in df.columns if c not in mapping]
        if unknown:
            logger.debug(f"Ignoring columns in '{sheet_name}': {unknown}")

        rows = []
        for record in df.to_dict("records"):
            row = {field: record[column] for column, field in mapping.items()}
            if all(_is_blank(value) for value in row.values()):
                continue
            rows.append(row)
        return rows

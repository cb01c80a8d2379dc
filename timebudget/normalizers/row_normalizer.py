"""Row normalizer for imported spreadsheet and calendar cells.

This module converts heterogeneous raw cell values into canonical fields:
- Dates: spreadsheet serials, ISO strings, day-first strings, date objects
- Hours: numbers, NL notation ("1.234,5") and US notation ("4.5")
- Phase labels: "3 - Definitief ontwerp", "DO", "vo tekeningen", ...

Nothing here raises on bad input. Unparseable values degrade to an empty
string or zero so the row validator can report a row-scoped error instead
of aborting the whole import.
"""

import datetime as dt
import logging
import math
import numbers
import re
from decimal import Decimal
from typing import Any, Mapping, Optional

import pandas as pd

from timebudget.calculators.time_utils import hours_to_minutes
from timebudget.models.import_row import ImportRow
from timebudget.models.phase import PhaseCatalog

logger = logging.getLogger(__name__)

# Serial day 1 is 1900-01-01; spreadsheets also count the non-existent
# 1900-02-29, hence the 2-day correction.
SPREADSHEET_EPOCH = dt.date(1900, 1, 1)
SPREADSHEET_SERIAL_CORRECTION = 2

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DAY_FIRST_DATE = re.compile(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{2}|\d{4})$")
_GROUPED_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3}){2,}$")
_PHASE_PREFIX = re.compile(r"^\s*\d+\s*-\s*")

PHASE_LABEL_MAP = {
    "schetsontwerp": "schetsontwerp",
    "schets ontwerp": "schetsontwerp",
    "schets": "schetsontwerp",
    "so": "schetsontwerp",
    "voorlopig ontwerp": "voorlopig-ontwerp",
    "vo": "voorlopig-ontwerp",
    "vo tekeningen": "vo-tekeningen",
    "definitief ontwerp": "definitief-ontwerp",
    "do": "definitief-ontwerp",
    "do tekeningen": "do-tekeningen",
    "bouwvoorbereiding": "bouwvoorbereiding",
    "bouw voorbereiding": "bouwvoorbereiding",
    "bv": "bouwvoorbereiding",
    "bv tekeningen": "bv-tekeningen",
    "uitvoering": "uitvoering",
    "ut": "uitvoering",
    "uitvoering tekeningen": "uitvoering-tekeningen",
    "uitvoeringstekeningen": "uitvoering-tekeningen",
    "oplevering": "oplevering-nazorg",
    "oplevering nazorg": "oplevering-nazorg",
    "oplevering/nazorg": "oplevering-nazorg",
    "nazorg": "oplevering-nazorg",
}


def _is_missing(raw: Any) -> bool:
    if raw is None or raw is pd.NaT:
        return True
    return isinstance(raw, float) and math.isnan(raw)


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (numbers.Real, Decimal)) and not isinstance(raw, bool)


def _safe_date(year: int, month: int, day: int) -> str:
    try:
        return dt.date(year, month, day).isoformat()
    except ValueError:
        return ""


def normalize_date(raw: Any) -> str:
    """Normalize a raw date cell to an ISO ``YYYY-MM-DD`` string.

    Accepts spreadsheet serial numbers, ISO strings, day-first strings with
    ``-``, ``/`` or ``.`` separators (two-digit years map to 2000 + year),
    date/datetime objects and any other string pandas can parse.

    Args:
        raw: The raw cell value

    Returns:
        ISO date string, or "" when the value cannot be read as a date

    Example:
        >>> normalize_date("20-04-23")
        '2023-04-20'
        >>> normalize_date(45000)
        '2023-03-15'
        >>> normalize_date("geen datum")
        ''
    """
    if _is_missing(raw) or isinstance(raw, bool):
        return ""

    if isinstance(raw, dt.datetime):
        return raw.date().isoformat()
    if isinstance(raw, dt.date):
        return raw.isoformat()

    if _is_number(raw):
        serial = float(raw)
        if not math.isfinite(serial) or serial < 1:
            return ""
        try:
            day = SPREADSHEET_EPOCH + dt.timedelta(
                days=int(serial) - SPREADSHEET_SERIAL_CORRECTION
            )
        except OverflowError:
            return ""
        return day.isoformat()

    text = str(raw).strip()
    if not text:
        return ""

    iso = _ISO_DATE.match(text)
    if iso:
        return _safe_date(int(iso.group(1)), int(iso.group(2)), int(iso.group(3)))

    day_first = _DAY_FIRST_DATE.match(text)
    if day_first:
        day, month, year = (int(part) for part in day_first.groups())
        if year < 100:
            year += 2000
        return _safe_date(year, month, day)

    # pandas reads words like "today" and "now" as the current moment
    if not any(ch.isdigit() for ch in text):
        logger.debug(f"Could not parse date value '{text}'")
        return ""

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.debug(f"Could not parse date value '{text}'")
        return ""
    return parsed.date().isoformat()


def normalize_hours(raw: Any) -> float:
    """Normalize a raw hours cell to a float.

    Numbers pass through. In strings a comma marks NL notation: dots are
    thousands separators and the comma is the decimal point. Strings without
    a comma use US notation, unless the dots group thousands ("1.234.567").

    Args:
        raw: The raw cell value

    Returns:
        Hours as float; 0 when unparseable (callers must treat 0 as invalid)

    Example:
        >>> normalize_hours("3,25")
        3.25
        >>> normalize_hours("1.234,5")
        1234.5
        >>> normalize_hours("4.5")
        4.5
        >>> normalize_hours("")
        0.0
    """
    if _is_missing(raw) or isinstance(raw, bool):
        return 0.0

    if _is_number(raw):
        value = float(raw)
        return value if math.isfinite(value) else 0.0

    text = str(raw).strip().replace(" ", "")
    if not text:
        return 0.0

    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif _GROUPED_THOUSANDS.match(text):
        text = text.replace(".", "")

    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def normalize_phase_label(raw: Any, catalog: Optional[PhaseCatalog] = None) -> str:
    """Map a free-text phase label to a canonical phase code.

    Strips a leading "N - " numbering prefix, lowercases and trims, then looks
    the label up among known Dutch variants and (when given) the catalog's
    names and codes. Unknown labels are slugified as a best-effort code.

    Example:
        >>> normalize_phase_label("3 - Definitief ontwerp")
        'definitief-ontwerp'
        >>> normalize_phase_label("DO")
        'definitief-ontwerp'
        >>> normalize_phase_label("Extra werk")
        'extra-werk'
    """
    if _is_missing(raw):
        return ""

    label = _PHASE_PREFIX.sub("", str(raw))
    label = " ".join(label.lower().split())
    if not label:
        return ""

    if label in PHASE_LABEL_MAP:
        return PHASE_LABEL_MAP[label]

    if catalog is not None:
        for phase in catalog:
            if label in (phase.code, phase.name.lower()):
                return phase.code

    return label.replace(" ", "-")


def _clean_text(raw: Any) -> str:
    if _is_missing(raw):
        return ""
    return str(raw).strip()


def normalize_row(
    raw: Mapping[str, Any],
    row_number: int,
    catalog: Optional[PhaseCatalog] = None,
) -> ImportRow:
    """Build an unvalidated ``ImportRow`` from canonical raw fields.

    Args:
        raw: Mapping with any of ``project_name``, ``phase_name``,
            ``date_value``, ``hours_value`` and ``notes``, plus an optional
            ``chosen_project_id``
        row_number: 1-based position of the row in its source
        catalog: Phase catalog consulted for phase labels

    Returns:
        ImportRow with raw and derived canonical fields filled in
    """
    phase_name = _clean_text(raw.get("phase_name"))
    hours = normalize_hours(raw.get("hours_value"))

    return ImportRow(
        row_number=row_number,
        project_name=_clean_text(raw.get("project_name")),
        phase_name=phase_name,
        date_value=None if _is_missing(raw.get("date_value")) else raw.get("date_value"),
        hours_value=None if _is_missing(raw.get("hours_value")) else raw.get("hours_value"),
        notes=_clean_text(raw.get("notes")),
        chosen_project_id=_clean_text(raw.get("chosen_project_id")) or None,
        phase_code=normalize_phase_label(phase_name, catalog),
        occurred_on=normalize_date(raw.get("date_value")),
        hours=hours,
        minutes=hours_to_minutes(hours),
    )

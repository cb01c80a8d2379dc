"""Calendar reader for ``.ics`` exports.

This module extracts ``VEVENT`` blocks from an iCalendar file and turns each
event into a candidate import row for a single, user-chosen project.
"""

import datetime as dt
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

CALENDAR_EXTENSIONS = (".ics",)

UNTITLED_EVENT = "(geen titel)"

_UTC_STAMP = re.compile(r"^\d{8}T\d{6}Z$")
_LOCAL_STAMP = re.compile(r"^\d{8}T\d{6}$")
_DATE_STAMP = re.compile(r"^\d{8}$")


@dataclass
class CalendarEvent:
    """A single calendar appointment.

    Attributes:
        summary: Event title, "(geen titel)" when absent
        start: Start moment
        end: End moment
        location: Optional location text
    """

    summary: str
    start: dt.datetime
    end: dt.datetime
    location: Optional[str] = None

    @property
    def minutes(self) -> int:
        return event_minutes(self.start, self.end)

    @property
    def note(self) -> str:
        if self.location:
            return f"{self.summary} @ {self.location}"
        return self.summary


def parse_ical_datetime(value: str) -> Optional[dt.datetime]:
    """Parse an iCalendar date or date-time value.

    Supported forms are UTC stamps (``20240920T083000Z``, returned timezone
    aware), floating local stamps (``20240920T083000``) and all-day dates
    (``20240920``, returned as midnight). Any ``;PARAM=...`` prefix must have
    been stripped already.

    Returns:
        The parsed datetime, or None when the value has another form
    """
    value = value.strip()
    try:
        if _UTC_STAMP.match(value):
            return dt.datetime.strptime(value, "%Y%m%dT%H%M%SZ").replace(
                tzinfo=dt.timezone.utc
            )
        if _LOCAL_STAMP.match(value):
            return dt.datetime.strptime(value, "%Y%m%dT%H%M%S")
        if _DATE_STAMP.match(value):
            return dt.datetime.strptime(value, "%Y%m%d")
    except ValueError:
        logger.debug(f"Impossible calendar date-time '{value}'")
        return None
    return None


def event_minutes(start: dt.datetime, end: dt.datetime) -> int:
    """Whole minutes between two moments, never negative.

    A floating (naive) moment compared with an aware one is taken to be in
    the machine's local timezone.
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.astimezone() if start.tzinfo is None else start
        end = end.astimezone() if end.tzinfo is None else end
    seconds = (end - start).total_seconds()
    return max(0, int(round(seconds / 60)))


def unfold_lines(text: str) -> List[str]:
    """Split content into logical lines, joining folded continuations."""
    lines: List[str] = []
    for line in re.split(r"\r?\n", text):
        if line[:1] in (" ", "\t") and lines:
            lines[-1] += line[1:]
        else:
            lines.append(line)
    return lines


def _split_property(line: str):
    name_part, sep, value = line.partition(":")
    if not sep:
        return None, None
    name = name_part.split(";", 1)[0].strip().upper()
    return name, value


def _unescape(value: str) -> str:
    return (
        value.replace("\\n", " ")
        .replace("\\N", " ")
        .replace("\\,", ",")
        .replace("\\;", ";")
        .replace("\\\\", "\\")
        .strip()
    )


def parse_ics(text: str) -> List[CalendarEvent]:
    """Parse every ``VEVENT`` in an iCalendar document.

    Events lacking a readable ``DTSTART`` or ``DTEND`` are skipped.

    Example:
        >>> events = parse_ics(open("agenda.ics").read())
        >>> events[0].summary, events[0].minutes
        ('Overleg aannemer', 90)
    """
    events: List[CalendarEvent] = []
    current: Optional[Dict[str, str]] = None
    skipped = 0

    for line in unfold_lines(text):
        stripped = line.strip()
        if stripped.upper() == "BEGIN:VEVENT":
            current = {}
            continue
        if stripped.upper() == "END:VEVENT":
            if current is not None:
                event = _build_event(current)
                if event is None:
                    skipped += 1
                else:
                    events.append(event)
            current = None
            continue
        if current is None:
            continue

        name, value = _split_property(line)
        if name in ("SUMMARY", "DTSTART", "DTEND", "LOCATION") and name not in current:
            current[name] = value

    if skipped:
        logger.warning(f"Skipped {skipped} calendar event(s) without start or end")
    logger.debug(f"Parsed {len(events)} calendar event(s)")
    return events


def _build_event(props: Dict[str, str]) -> Optional[CalendarEvent]:
    start = parse_ical_datetime(props.get("DTSTART", ""))
    end = parse_ical_datetime(props.get("DTEND", ""))
    if start is None or end is None:
        return None
    summary = _unescape(props.get("SUMMARY", "")) or UNTITLED_EVENT
    location = _unescape(props.get("LOCATION", "")) or None
    return CalendarEvent(summary=summary, start=start, end=end, location=location)


class CalendarReader:
    """Reader turning an ``.ics`` file into candidate import rows.

    Every event becomes one row on the chosen project with a placeholder
    phase; the row then goes through the regular normalize/validate path.

    Example:
        >>> reader = CalendarReader(phase_code="agenda")
        >>> rows = reader.read("agenda.ics", project_name="Villa Amsterdam")
        >>> rows[0]["notes"]
        'Overleg aannemer @ Bouwplaats'
    """

    def __init__(self, phase_code: str = "agenda"):
        """Initialize the calendar reader.

        Args:
            phase_code: Phase assigned to every imported event
        """
        self.phase_code = phase_code

    def read_events(self, source: Union[str, Path, bytes]) -> List[CalendarEvent]:
        if isinstance(source, bytes):
            text = source.decode("utf-8-sig")
        else:
            text = Path(source).read_text(encoding="utf-8-sig")
        return parse_ics(text)

    def read(
        self,
        source: Union[str, Path, bytes],
        project_name: str,
        project_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Read events as canonical row mappings.

        Args:
            source: Path to the ``.ics`` file, or its raw bytes
            project_name: Name of the project all events are booked on
            project_id: Id of that project; binds the rows to it by id

        Returns:
            List of mappings with canonical field keys
        """
        events = self.read_events(source)
        logger.info(f"Read {len(events)} calendar event(s) for project {project_name}")
        return [self.event_to_row(event, project_name, project_id) for event in events]

    def event_to_row(
        self, event: CalendarEvent, project_name: str, project_id: Optional[str] = None
    ) -> Dict[str, Any]:
        row = {
            "project_name": project_name,
            "phase_name": self.phase_code,
            "date_value": event.start.date(),
            "hours_value": event.minutes / 60,
            "notes": event.note,
        }
        if project_id:
            row["chosen_project_id"] = project_id
        return row

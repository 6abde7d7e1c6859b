"""Report period selection: turn a report request into an inclusive date window.

Two request shapes are supported:
- custom range: optional ISO ``startDate`` / ``endDate`` strings, a missing
  side leaves the window unbounded on that side
- calendar year: ``[Jan 1, Dec 31]`` of the given year

Both bounds are inclusive. Dates have day granularity, so a yearly window is
the same as ``[Jan 1 00:00:00, Dec 31 23:59:59]``.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from homeledger.api.errors import InvalidDateError, InvalidWindowError

logger = logging.getLogger(__name__)

OPEN_START_LABEL = "Beginning"
OPEN_END_LABEL = "Now"


def _as_date(value: date | datetime) -> date:
    # datetime is a date subclass but does not compare with plain dates
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range; ``None`` on a side means unbounded."""

    start: date | None = None
    end: date | None = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", _as_date(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", _as_date(self.end))
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvalidWindowError(
                f"Start date {self.start.isoformat()} is after end date {self.end.isoformat()}"
            )

    def contains(self, day: date | datetime) -> bool:
        """Return True when ``day`` lies inside the window (bounds included)."""
        day = _as_date(day)
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def is_full_year(self) -> bool:
        """Return True when the window is exactly Jan 1 - Dec 31 of one year."""
        if self.start is None or self.end is None:
            return False
        year = self.start.year
        return self.start == date(year, 1, 1) and self.end == date(year, 12, 31)

    @property
    def year(self) -> int | None:
        """Calendar year of a full-year window, otherwise None."""
        return self.start.year if self.is_full_year() else None

    def start_label(self) -> str:
        return self.start.isoformat() if self.start is not None else OPEN_START_LABEL

    def end_label(self) -> str:
        return self.end.isoformat() if self.end is not None else OPEN_END_LABEL


def parse_report_date(value: str | None, field: str = "date") -> date | None:
    """Parse an ISO date (or ISO datetime) string into a calendar date.

    Args:
        value: Raw query value; None or blank means "not supplied"
        field: Parameter name used in the error message

    Returns:
        Parsed date, or None when no value was supplied

    Raises:
        InvalidDateError: If the value is not a valid calendar date
    """
    if value is None or not value.strip():
        return None

    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        logger.warning("Rejected %s=%r: not an ISO date", field, raw)
        raise InvalidDateError(f"Invalid {field}: {raw!r} is not a valid date")


def custom_window(start_date: str | None = None, end_date: str | None = None) -> DateWindow:
    """Build a window from optional ISO start/end strings.

    Raises:
        InvalidDateError: If either string does not parse
        InvalidWindowError: If start is after end
    """
    return DateWindow(
        start=parse_report_date(start_date, "startDate"),
        end=parse_report_date(end_date, "endDate"),
    )


def year_window(year: int) -> DateWindow:
    """Build the full calendar-year window for ``year``.

    Raises:
        InvalidDateError: If the year is outside 1..9999
    """
    try:
        return DateWindow(start=date(year, 1, 1), end=date(year, 12, 31))
    except (TypeError, ValueError):
        logger.warning("Rejected report year %r", year)
        raise InvalidDateError(f"Invalid year: {year!r}")


def resolve_window(
    start_date: str | None = None,
    end_date: str | None = None,
    year: int | None = None,
) -> DateWindow:
    """Resolve either request shape into a DateWindow.

    A year takes precedence; start/end strings are ignored when it is given.
    """
    if year is not None:
        return year_window(year)
    return custom_window(start_date, end_date)


__all__ = [
    "DateWindow",
    "OPEN_START_LABEL",
    "OPEN_END_LABEL",
    "parse_report_date",
    "custom_window",
    "year_window",
    "resolve_window",
]

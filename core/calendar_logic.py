"""Day-order calendar: which dates carry which day order, and which are off.

Every date is compared through one canonical key, ``YYYY-MM-DD`` of the date
component, so a datetime late in the evening never slides onto the next day.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta

from core.logging import get_logger
from core.models import HOLIDAY_SENTINEL, CalendarDayEntry
from utils.calendar_parser import parse_calendar_text

log = get_logger(__name__)

MIN_FIELDS = 5
WEEKEND_NAMES = ("Sat", "Sun")


# ==============================
# CORE HELPERS
# ==============================

def to_date(value) -> date:
    """Date component of a date, datetime or ISO "YYYY-MM-DD" string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # "2025-03-03T18:30" or "2025-03-03 18:30" -> date part only
    for sep in ("T", " "):
        if sep in text:
            text = text.split(sep, 1)[0]
    return date.fromisoformat(text)


def date_to_str(value) -> str:
    return to_date(value).isoformat()


def is_weekend(value) -> bool:
    return to_date(value).weekday() >= 5  # Saturday or Sunday


def dates_in_range(start, end) -> list[date]:
    """
    Every date from start to end, both inclusive.
    Empty when start is after end.
    """
    days = []
    current = to_date(start)
    last = to_date(end)

    while current <= last:
        days.append(current)
        current += timedelta(days=1)

    return days


# ==============================
# CALENDAR INDEX
# ==============================

class CalendarIndex:
    """Date-keyed lookup over the day-order calendar.

    Built once from the raw table and read-only afterwards. Rows that cannot
    be used are not fatal: they are skipped, counted in ``dropped_rows`` and
    logged, so callers and tests can see exactly what was lost.
    """

    def __init__(self, entries=(), dropped_rows=0):
        self._by_date: dict[str, CalendarDayEntry] = {}
        self._by_month: dict[str, list[CalendarDayEntry]] = defaultdict(list)

        for entry in entries:
            key = entry.date.isoformat()
            if key in self._by_date:
                continue
            self._by_date[key] = entry
            self._by_month[entry.month].append(entry)

        self.dropped_rows = dropped_rows

    @classmethod
    def build(cls, rows) -> "CalendarIndex":
        """
        Builds the index from raw rows:
        (month, day-of-month, ISO date, day order or "-", weekday name).
        Row 0 is the header and is always skipped.
        """
        entries = []
        seen = set()
        dropped = 0

        for line_no, row in enumerate(rows):
            if line_no == 0:
                continue

            fields = [str(field).strip() for field in row]

            if len(fields) < MIN_FIELDS:
                dropped += 1
                log.warning(
                    "calendar_row_dropped",
                    line=line_no,
                    reason="too_few_fields",
                    fields=len(fields),
                )
                continue

            month, day, iso_date, day_order, day_name = fields[:MIN_FIELDS]

            try:
                parsed = date.fromisoformat(iso_date)
            except ValueError:
                dropped += 1
                log.warning(
                    "calendar_row_dropped",
                    line=line_no,
                    reason="bad_date",
                    value=iso_date,
                )
                continue

            if parsed in seen:
                dropped += 1
                log.warning(
                    "calendar_row_dropped",
                    line=line_no,
                    reason="duplicate_date",
                    value=iso_date,
                )
                continue
            seen.add(parsed)

            entries.append(
                CalendarDayEntry(
                    date=parsed,
                    day_order=day_order,
                    day_name=day_name,
                    month=month,
                    day=day,
                    is_holiday=(
                        day_order == HOLIDAY_SENTINEL or day_name in WEEKEND_NAMES
                    ),
                )
            )

        log.info("calendar_index_built", entries=len(entries), dropped=dropped)
        return cls(entries, dropped_rows=dropped)

    @classmethod
    def from_text(cls, calendar_text) -> "CalendarIndex":
        return cls.build(parse_calendar_text(calendar_text))

    def __len__(self):
        return len(self._by_date)

    def __contains__(self, value):
        return self.lookup(value) is not None

    def lookup(self, value) -> CalendarDayEntry | None:
        return self._by_date.get(date_to_str(value))

    def is_holiday_or_weekend(self, value) -> bool:
        """
        Holiday flag from the calendar when the date is known,
        otherwise a plain Saturday/Sunday check.
        """
        entry = self.lookup(value)
        if entry is not None:
            return entry.is_holiday
        return is_weekend(value)

    def day_order_for(self, value) -> str | None:
        entry = self.lookup(value)
        if entry is None or not entry.has_day_order:
            return None
        return entry.day_order

    def months(self) -> list[str]:
        """Month labels in the order they first appear in the table."""
        return list(self._by_month)

    def entries_for_month(self, month) -> list[CalendarDayEntry]:
        return list(self._by_month.get(month, []))

    def dates_in_range(self, start, end) -> list[date]:
        return dates_in_range(start, end)

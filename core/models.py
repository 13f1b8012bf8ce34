"""Pydantic models for calendar, timetable, attendance and prediction data.

All data structures use Pydantic v2 for validation and serialization.
Calendar, timetable and attendance models are frozen once loaded.
"""

import math
import re
import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

HOLIDAY_SENTINEL = "-"

_SLOT_START = re.compile(r"^\s*(\d{1,2}):(\d{2})")


# ==============================
# CALENDAR
# ==============================

class CalendarDayEntry(BaseModel):
    """One row of the day-order calendar."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    day_order: str  # "1".."5" or "-" for no instructional day order
    day_name: str  # "Mon", "Tue", ...
    month: str = ""  # "Mar"
    day: str = ""  # "3"
    is_holiday: bool = False

    @property
    def has_day_order(self) -> bool:
        return bool(self.day_order) and self.day_order != HOLIDAY_SENTINEL


# ==============================
# TIMETABLE
# ==============================

class CourseOccurrence(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    code: str | None = None
    room: str | None = None


class TimetableSlot(BaseModel):
    """A time slot within a day order, e.g. "08:00 - 08:50"."""

    model_config = ConfigDict(frozen=True)

    label: str = ""
    courses: tuple[CourseOccurrence, ...] = ()

    @property
    def is_empty(self) -> bool:
        return len(self.courses) == 0

    @property
    def start_time(self) -> str:
        """
        Start of the slot as a zero-padded "HH:MM" sort key.
        Labels without a time prefix sort by their text before "-".
        """
        head = self.label.split("-")[0].strip()
        match = _SLOT_START.match(head)
        if not match:
            return head
        return f"{int(match.group(1)):02d}:{match.group(2)}"


class Timetable(BaseModel):
    """Day order label ("Day 3") -> slot label -> slot."""

    model_config = ConfigDict(frozen=True)

    days: dict[str, dict[str, TimetableSlot]] = Field(default_factory=dict)

    def day(self, day_label: str) -> dict[str, TimetableSlot] | None:
        return self.days.get(day_label)


# ==============================
# ATTENDANCE
# ==============================

class AttendanceRecord(BaseModel):
    """Attendance for one course as reported by the academic record system."""

    model_config = ConfigDict(frozen=True)

    course_code: str
    course_title: str
    faculty: str = ""
    hours_conducted: int = Field(ge=0)
    hours_absent: int = Field(ge=0)
    attendance_percentage: float = 0.0

    @model_validator(mode="after")
    def _absent_within_conducted(self) -> "AttendanceRecord":
        if self.hours_absent > self.hours_conducted:
            raise ValueError(
                f"hours_absent ({self.hours_absent}) exceeds "
                f"hours_conducted ({self.hours_conducted})"
            )
        return self

    @property
    def hours_attended(self) -> int:
        return self.hours_conducted - self.hours_absent

    @property
    def margin(self) -> int:
        """Attended hours above (or below, if negative) the 75% line."""
        return self.hours_attended - math.ceil(self.hours_conducted * 0.75)

    @property
    def category(self) -> str:
        code = self.course_code
        if "T" in code or ("P" not in code and "L" not in code):
            return "Theory"
        return "Practical"


class CourseLinks(BaseModel):
    """Attendance courses joined against the timetable."""

    matched: dict[str, bool] = Field(default_factory=dict)  # course_code -> found
    unmatched: list[str] = Field(default_factory=list)  # course titles

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched)


# ==============================
# PREDICTION
# ==============================

class PredictionState(str, Enum):
    IDLE = "Idle"
    COURSE_SELECTED = "CourseSelected"
    RANGE_SELECTED = "RangeSelected"
    RECOMPUTED = "Recomputed"


class DateRange(BaseModel):
    """Inclusive range of leave dates."""

    model_config = ConfigDict(frozen=True)

    start: dt.date
    end: dt.date


class PredictionInput(BaseModel):
    """Snapshot of what the student has picked, tagged with a revision."""

    model_config = ConfigDict(frozen=True)

    course_title: str | None = None
    date_range: DateRange | None = None
    additional_absences: int = Field(default=0, ge=0)
    revision: int = 0


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_percentage: str  # two fractional digits, e.g. "75.00"
    classes_needed: int = Field(ge=0)
    can_skip: int = Field(ge=0)
    is_above_75: bool
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def percentage(self) -> float:
        return float(self.current_percentage)


class LeaveDay(BaseModel):
    """One date of a leave range and whether it costs the course a class."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    day_order: str | None = None
    is_holiday: bool = False
    affects: bool = False

    @property
    def day_order_label(self) -> str | None:
        return f"D.O {self.day_order}" if self.day_order else None


class PredictionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: PredictionState
    result: PredictionResult | None = None
    missed_from_range: int = 0
    additional_absences: int = 0
    leave_days: tuple[LeaveDay, ...] = ()
    revision: int = 0

    @property
    def total_missed(self) -> int:
        return self.missed_from_range + self.additional_absences

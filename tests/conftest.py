import pytest

from core.calendar_logic import CalendarIndex
from core.models import AttendanceRecord
from core.schedule_logic import ScheduleMatcher

MARCH_CALENDAR = "\n".join([
    "Month\tDay\tDate\tDO\tDayName",
    "Mar\t1\t2025-03-01\t-\tSat",
    "Mar\t2\t2025-03-02\t-\tSun",
    "Mar\t3\t2025-03-03\t5\tMon",
    "Mar\t4\t2025-03-04\t1\tTue",
    "Mar\t5\t2025-03-05\t2\tWed",
    "Mar\t6\t2025-03-06\t3\tThu",
    "Mar\t7\t2025-03-07\t4\tFri",
    "Mar\t8\t2025-03-08\t-\tSat",
    "Mar\t9\t2025-03-09\t-\tSun",
    "Mar\t10\t2025-03-10\t1\tMon",
])

TIMETABLE = {
    "Day 1": {
        "09:45 - 10:35": {"courses": [{"title": "Chemistry", "code": "21CYB101J", "room": "TP 401"}]},
        "08:00 - 08:50": {"courses": [{"title": "Calculus And Linear Algebra", "code": "21MAB101T"}]},
        "12:30 - 01:20": {"courses": []},
    },
    "Day 2": {
        "08:00 - 08:50": {"courses": [{"title": "Programming For Problem Solving", "code": "21CSS101J"}]},
    },
    "Day 3": {
        "08:00 - 08:50": {"courses": [{"title": "Chem.", "code": "21CYB101J"}]},
    },
    "Day 4": {
        "08:00 - 08:50": {},
    },
    "Day 5": {
        "08:00 - 08:50": {"courses": [{"title": "Calculus And Linear Algebra", "code": "21MAB101T"}]},
    },
}


@pytest.fixture
def calendar():
    return CalendarIndex.from_text(MARCH_CALENDAR)


@pytest.fixture
def matcher():
    return ScheduleMatcher(TIMETABLE)


@pytest.fixture
def chemistry():
    return AttendanceRecord(
        course_code="21CYB101J",
        course_title="Chemistry",
        faculty="Dr. Rao",
        hours_conducted=30,
        hours_absent=4,
        attendance_percentage=86.67,
    )


@pytest.fixture
def calculus():
    return AttendanceRecord(
        course_code="21MAB101T",
        course_title="Calculus And Linear Algebra",
        faculty="Dr. Iyer",
        hours_conducted=40,
        hours_absent=10,
        attendance_percentage=75.0,
    )


@pytest.fixture
def philosophy():
    return AttendanceRecord(
        course_code="21LEM101T",
        course_title="Philosophy Of Engineering",
        faculty="Dr. Menon",
        hours_conducted=12,
        hours_absent=1,
        attendance_percentage=91.67,
    )


@pytest.fixture
def records(chemistry, calculus, philosophy):
    return [chemistry, calculus, philosophy]

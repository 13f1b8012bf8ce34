import re

import pandas as pd

from core.errors import TimetableFormatError
from core.models import CourseOccurrence, Timetable, TimetableSlot

FRAME_COLUMNS = ["day", "day_order", "time", "start", "title", "code", "room"]


def day_label(day_order):
    """ "5" or 5 -> "Day 5" """
    return f"Day {str(day_order).strip()}"


def extract_day_order(label):
    match = re.match(r"\s*Day\s+(\d+)\s*$", str(label), re.IGNORECASE)
    return match.group(1) if match else None


def _verbatim(value):
    """Join keys are kept exactly as given; blank means missing."""
    if value is None or not str(value).strip():
        return None
    return str(value)


def _clean(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_course(raw, where):
    if isinstance(raw, CourseOccurrence):
        return raw
    if not isinstance(raw, dict):
        raise TimetableFormatError(f"{where}: course entry is not a mapping: {raw!r}")

    title = _verbatim(raw.get("title"))
    if title is None:
        raise TimetableFormatError(f"{where}: course entry has no title")

    return CourseOccurrence(
        title=title,
        code=_verbatim(raw.get("code")),
        room=_clean(raw.get("room")),
    )


def parse_timetable(raw):
    """
    Reads the portal timetable:
        {"Day 1": {"08:00 - 08:50": {"courses": [{"title", "code", "room"}]}}}

    A slot without "courses" (or with null) is an empty slot.
    """
    if isinstance(raw, Timetable):
        return raw
    if not isinstance(raw, dict):
        raise TimetableFormatError("timetable must be a mapping of day order to slots")

    days = {}

    for day, slots in raw.items():
        if not isinstance(slots, dict):
            raise TimetableFormatError(f"{day}: slots must be a mapping of time to slot")

        parsed_slots = {}
        for time_label, slot in slots.items():
            where = f"{day} / {time_label}"
            courses = (slot or {}).get("courses") if isinstance(slot, dict) else None
            parsed_slots[str(time_label)] = TimetableSlot(
                label=str(time_label),
                courses=tuple(_parse_course(c, where) for c in (courses or [])),
            )

        days[str(day)] = parsed_slots

    return Timetable(days=days)


def timetable_frame(timetable):
    """
    One row per course occurrence:
    day, day_order, time, start, title, code, room
    """
    schedule = []

    for day, slots in timetable.days.items():
        for time_label, slot in slots.items():
            for course in slot.courses:
                schedule.append({
                    "day": day,
                    "day_order": extract_day_order(day),
                    "time": time_label,
                    "start": slot.start_time,
                    "title": course.title,
                    "code": course.code,
                    "room": course.room,
                })

    return pd.DataFrame(schedule, columns=FRAME_COLUMNS)

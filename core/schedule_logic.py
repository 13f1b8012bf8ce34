"""Which courses meet on which day order.

The timetable is flattened once into an index of day order -> titles and
day order -> codes. Queries are plain set lookups after that.
"""

from collections import defaultdict

from core.logging import get_logger
from core.models import CourseLinks
from utils.timetable_parser import day_label, parse_timetable, timetable_frame

log = get_logger(__name__)


class ScheduleMatcher:
    """Answers "does this course meet on day order n?" for one timetable."""

    def __init__(self, timetable):
        self.timetable = parse_timetable(timetable)
        self.frame = timetable_frame(self.timetable)

        self._titles = defaultdict(set)
        self._codes = defaultdict(set)

        for _, row in self.frame.iterrows():
            self._titles[row["day"]].add(row["title"])
            if isinstance(row["code"], str) and row["code"]:
                self._codes[row["day"]].add(row["code"])

        log.info(
            "timetable_index_built",
            days=len(self.timetable.days),
            occurrences=len(self.frame),
        )

    def is_course_scheduled_on_day_order(self, course_title, day_order, course_code=None) -> bool:
        """
        True if any slot of "Day {day_order}" lists the course,
        matched by title OR by the selected course's code.
        Unknown day orders are simply not scheduled.
        """
        key = day_label(day_order)

        if key not in self.timetable.days:
            return False

        if course_title in self._titles.get(key, ()):
            return True

        return bool(course_code) and course_code in self._codes.get(key, ())

    def is_record_scheduled_on_day_order(self, record, day_order) -> bool:
        return self.is_course_scheduled_on_day_order(
            record.course_title, day_order, record.course_code
        )

    def day_orders_for(self, record) -> list[str]:
        """Day order labels on which the course meets."""
        return [
            day for day in self.timetable.days
            if record.course_title in self._titles.get(day, ())
            or (record.course_code and record.course_code in self._codes.get(day, ()))
        ]

    def sorted_slots(self, day):
        """
        Slots of one day order in chronological order.
        Accepts "Day 3" or just the day order.
        """
        key = day if str(day).strip().lower().startswith("day") else day_label(day)
        slots = self.timetable.day(key) or {}
        return sorted(slots.values(), key=lambda slot: slot.start_time)

    def link_courses(self, records) -> CourseLinks:
        """
        Joins attendance records to the timetable by title, then by code.
        Courses that never appear are reported as unmatched.
        """
        links = CourseLinks()
        all_titles = set(self.frame["title"])
        all_codes = set(self.frame["code"].dropna())

        for record in records:
            found = record.course_title in all_titles or record.course_code in all_codes
            links.matched[record.course_code] = found
            if not found:
                links.unmatched.append(record.course_title)

        log.info(
            "courses_linked",
            courses=len(links.matched),
            unmatched=links.unmatched_count,
        )
        if links.unmatched:
            log.warning("courses_unmatched", titles=links.unmatched)

        return links

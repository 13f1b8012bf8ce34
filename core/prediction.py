"""Leave planning: what a date range of absences does to a course.

compute_prediction() is the whole pipeline, course -> leave dates -> missed
sessions -> projection, evaluated from scratch for one input snapshot.
PredictionSession wraps it for an event-driven consumer and makes sure only
the newest snapshot's outcome is ever kept.
"""

import pandas as pd

from core.attendance_logic import project
from core.calendar_logic import dates_in_range, to_date
from core.config import get_config
from core.logging import get_logger
from core.models import (
    DateRange,
    LeaveDay,
    PredictionInput,
    PredictionOutcome,
    PredictionState,
)

log = get_logger(__name__)


def leave_days(course, date_range, calendar, matcher):
    """
    Every date of the range, with its day order and whether
    the course loses a class that day.
    """
    if course is None or date_range is None:
        return []

    days = []
    for day in dates_in_range(date_range.start, date_range.end):
        holiday = calendar.is_holiday_or_weekend(day)
        day_order = calendar.day_order_for(day)

        affects = (
            not holiday
            and day_order is not None
            and matcher.is_course_scheduled_on_day_order(
                course.course_title, day_order, course.course_code
            )
        )

        days.append(
            LeaveDay(date=day, day_order=day_order, is_holiday=holiday, affects=affects)
        )

    return days


def missed_from_range(course, date_range, calendar, matcher):
    return sum(1 for day in leave_days(course, date_range, calendar, matcher) if day.affects)


def compute_prediction(
    course,
    date_range,
    additional_absences,
    calendar,
    matcher,
    future_sessions=None,
    revision=0,
):
    """
    Prediction for one course given planned leave and extra absences.

    - no course: Idle, no result
    - course only: baseline from recorded hours
    - range and/or extra absences: recorded hours plus the future
      horizon, minus every missed session
    """
    if course is None:
        return PredictionOutcome(state=PredictionState.IDLE, revision=revision)

    if additional_absences < 0:
        raise ValueError("additional_absences must be non-negative")

    if future_sessions is None:
        future_sessions = get_config().future_sessions

    if date_range is None and additional_absences == 0:
        result = project(course.hours_conducted, course.hours_attended)
        return PredictionOutcome(
            state=PredictionState.COURSE_SELECTED,
            result=result,
            revision=revision,
        )

    days = leave_days(course, date_range, calendar, matcher)
    missed = sum(1 for day in days if day.affects)

    total_missed = missed + additional_absences
    total_classes = course.hours_conducted + future_sessions
    attended_classes = course.hours_attended - total_missed

    result = project(total_classes, attended_classes)

    state = (
        PredictionState.RECOMPUTED if additional_absences
        else PredictionState.RANGE_SELECTED
    )

    log.debug(
        "prediction_computed",
        course=course.course_code,
        state=state.value,
        missed_from_range=missed,
        additional_absences=additional_absences,
        percentage=result.current_percentage,
        valid=result.is_valid,
    )

    return PredictionOutcome(
        state=state,
        result=result,
        missed_from_range=missed,
        additional_absences=additional_absences,
        leave_days=tuple(days),
        revision=revision,
    )


def leave_summary_frame(outcome):
    """Date summary of a leave range: D.O label and Affects / No Effect."""
    rows = [
        {
            "Date": day.date,
            "Day Order": day.day_order_label,
            "Holiday": day.is_holiday,
            "Effect": "Affects" if day.affects else "No Effect",
        }
        for day in outcome.leave_days
    ]
    return pd.DataFrame(rows, columns=["Date", "Day Order", "Holiday", "Effect"])


# ==============================
# SESSION
# ==============================

class PredictionSession:
    """
    Holds the three datasets and the student's current picks.

    Every event (course, range, absences) replaces the input snapshot with a
    new revision and recomputes everything from it. An outcome computed
    for an older revision is discarded by commit().
    """

    def __init__(self, attendance, calendar, matcher, future_sessions=None):
        self.calendar = calendar
        self.matcher = matcher
        self.future_sessions = future_sessions

        self._courses = {}
        for record in attendance:
            self._courses.setdefault(record.course_title, record)

        self.links = matcher.link_courses(list(self._courses.values()))

        self._revision = 0
        self.input = PredictionInput()
        self.outcome = PredictionOutcome(state=PredictionState.IDLE)

    @property
    def courses(self):
        return list(self._courses)

    @property
    def state(self):
        return self.outcome.state

    @property
    def result(self):
        return self.outcome.result

    @property
    def course(self):
        if self.input.course_title is None:
            return None
        return self._courses.get(self.input.course_title)

    # ---- events ----

    def select_course(self, course_title):
        return self._update(course_title=course_title)

    def select_range(self, start, end):
        return self._update(date_range=DateRange(start=to_date(start), end=to_date(end)))

    def clear_range(self):
        return self._update(date_range=None)

    def set_additional_absences(self, count):
        return self._update(additional_absences=count)

    # ---- recomputation ----

    def snapshot(self, **changes):
        """New input snapshot with the next revision number."""
        data = self.input.model_dump()
        data.update(changes)
        self._revision += 1
        data["revision"] = self._revision
        # re-validate so bad values never reach compute()
        return PredictionInput.model_validate(data)

    def compute(self, snapshot):
        course = self._courses.get(snapshot.course_title) if snapshot.course_title else None
        return compute_prediction(
            course,
            snapshot.date_range,
            snapshot.additional_absences,
            self.calendar,
            self.matcher,
            future_sessions=self.future_sessions,
            revision=snapshot.revision,
        )

    def commit(self, snapshot, outcome):
        """
        Keeps the outcome only if it belongs to the latest snapshot.
        Returns True when it was kept.
        """
        if snapshot.revision != self.input.revision or outcome.revision != snapshot.revision:
            log.debug(
                "stale_prediction_discarded",
                revision=outcome.revision,
                latest=self.input.revision,
            )
            return False

        self.outcome = outcome
        return True

    def _update(self, **changes):
        snapshot = self.snapshot(**changes)
        self.input = snapshot
        self.commit(snapshot, self.compute(snapshot))
        return self.outcome

import math

import pandas as pd

from core.config import get_config
from core.logging import get_logger
from core.models import PredictionResult

log = get_logger(__name__)

THRESHOLD = 75
INVALID_INPUT = "Invalid input values."
UNREACHABLE = "Threshold unreachable within search limit."


# ==============================
# ATTENDANCE CALCULATIONS
# ==============================

def percent(attended, total):
    return 100 * attended / total


def classes_needed(attended, total, max_steps=None):
    """
    Smallest k such that attending the next k classes
    brings attendance to 75% or more.

    Returns None if k would exceed max_steps.
    """
    if max_steps is None:
        max_steps = get_config().max_search_steps

    k = 0
    # 100 * (a + k) / (t + k) >= 75, kept in integers
    while 100 * (attended + k) < THRESHOLD * (total + k):
        k += 1
        if k > max_steps:
            return None

    return k


def can_skip(attended, total):
    """
    Classes (out of those already conducted) that could have been missed
    while keeping the current ratio at or above 75%.
    Does not look at future classes.
    """
    return max(0, math.floor(attended - 0.75 * total))


def project(total_classes, attended_classes, max_steps=None):
    """
    Attendance projection for one course.

    Returns a PredictionResult; bad input never raises, it comes back
    zeroed with result.error set.
    """
    if total_classes <= 0 or attended_classes < 0:
        log.warning(
            "projection_invalid_input",
            total=total_classes,
            attended=attended_classes,
        )
        return PredictionResult(
            current_percentage="0.00",
            classes_needed=0,
            can_skip=0,
            is_above_75=False,
            error=INVALID_INPUT,
        )

    if max_steps is None:
        max_steps = get_config().max_search_steps

    current = percent(attended_classes, total_classes)
    needed = classes_needed(attended_classes, total_classes, max_steps)
    error = None

    if needed is None:
        log.warning(
            "projection_search_capped",
            total=total_classes,
            attended=attended_classes,
            max_steps=max_steps,
        )
        needed = max_steps
        error = UNREACHABLE

    return PredictionResult(
        current_percentage=f"{current:.2f}",
        classes_needed=needed,
        can_skip=can_skip(attended_classes, total_classes),
        is_above_75=current >= THRESHOLD,
        error=error,
    )


# ==============================
# COURSE OVERVIEW
# ==============================

def attendance_overview(records):
    """
    One row per course with the current standing:
    percent, margin, classes needed and classes that can be skipped.
    """
    rows = []

    for record in records:
        if record.hours_conducted > 0:
            result = project(record.hours_conducted, record.hours_attended)
            needed, skip = result.classes_needed, result.can_skip
            pct = result.percentage
            status = "Safe" if result.is_above_75 else "At Risk"
        else:
            needed, skip, pct, status = 0, 0, 0.0, "Not Started"

        rows.append({
            "Subject": record.course_title,
            "Code": record.course_code,
            "Category": record.category,
            "Attended": record.hours_attended,
            "Conducted": record.hours_conducted,
            "Attendance %": pct,
            "Margin": record.margin,
            "Classes Needed": needed,
            "Can Skip": skip,
            "Status": status,
        })

    return pd.DataFrame(
        rows,
        columns=[
            "Subject", "Code", "Category", "Attended", "Conducted",
            "Attendance %", "Margin", "Classes Needed", "Can Skip", "Status",
        ],
    )

import pytest

from core.attendance_logic import (
    INVALID_INPUT,
    UNREACHABLE,
    attendance_overview,
    can_skip,
    classes_needed,
    project,
)
from core.models import AttendanceRecord


def test_exactly_at_threshold():
    result = project(40, 30)

    assert result.current_percentage == "75.00"
    assert result.classes_needed == 0
    assert result.can_skip == 0
    assert result.is_above_75 is True
    assert result.is_valid


def test_below_threshold_needs_a_tight_number_of_classes():
    result = project(40, 28)

    assert result.current_percentage == "70.00"
    assert result.is_above_75 is False

    k = result.classes_needed
    assert k > 0
    assert 100 * (28 + k) / (40 + k) >= 75
    assert 100 * (28 + k - 1) / (40 + k - 1) < 75


@pytest.mark.parametrize("total, attended", [(0, 0), (-3, 1), (10, -1)])
def test_invalid_input_is_marked_not_raised(total, attended):
    result = project(total, attended)

    assert result.error == INVALID_INPUT
    assert not result.is_valid
    assert result.current_percentage == "0.00"
    assert result.classes_needed == 0
    assert result.can_skip == 0
    assert result.is_above_75 is False


@pytest.mark.parametrize("total", [1, 3, 7, 40, 61, 133, 160, 320])
def test_percentage_matches_rounding(total):
    for attended in range(total + 1):
        result = project(total, attended)
        assert result.percentage == round(100 * attended / total, 2)


@pytest.mark.parametrize("total", [4, 20, 57])
def test_classes_needed_is_non_increasing(total):
    needed = [project(total, a).classes_needed for a in range(total + 1)]

    assert all(later <= earlier for earlier, later in zip(needed, needed[1:]))
    for attended, k in enumerate(needed):
        if 100 * attended / total >= 75:
            assert k == 0


def test_zero_attended_still_reaches_threshold():
    # 100k / (10 + k) >= 75  ->  k >= 30
    assert project(10, 0).classes_needed == 30


def test_search_cap_reports_unreachable():
    result = project(1000, 0, max_steps=50)

    assert result.error == UNREACHABLE
    assert result.classes_needed == 50
    assert classes_needed(0, 1000, max_steps=50) is None


def test_can_skip_is_never_negative():
    for total in range(1, 30):
        for attended in range(total + 1):
            assert can_skip(attended, total) >= 0
            assert can_skip(attended, total) == can_skip(attended, total)


def test_can_skip_ignores_future_classes():
    # floor(36 - 30) = 6, whatever the horizon
    assert can_skip(36, 40) == 6
    assert project(40, 36).can_skip == 6
    assert project(40, 31).can_skip == 1
    assert project(40, 29).can_skip == 0


def test_attendance_overview(records):
    frame = attendance_overview(records)

    assert list(frame["Subject"]) == [
        "Chemistry",
        "Calculus And Linear Algebra",
        "Philosophy Of Engineering",
    ]
    chem = frame.iloc[0]
    assert chem["Attendance %"] == 86.67
    assert chem["Category"] == "Theory"
    assert chem["Margin"] == 26 - 23
    assert chem["Status"] == "Safe"

    calc = frame.iloc[1]
    assert calc["Category"] == "Theory"
    assert calc["Classes Needed"] == 0
    assert calc["Can Skip"] == 0


def test_attendance_overview_not_started():
    frame = attendance_overview([
        AttendanceRecord(course_code="X", course_title="New", hours_conducted=0, hours_absent=0)
    ])

    assert frame.iloc[0]["Status"] == "Not Started"
    assert frame.iloc[0]["Attendance %"] == 0.0


@pytest.mark.parametrize(
    "code, category",
    [
        ("21MAB101T", "Theory"),
        ("21CYB101J", "Theory"),
        ("18CSC201L", "Practical"),
        ("21CSP101P", "Practical"),
        ("21PHT101L", "Theory"),
    ],
)
def test_course_category(code, category):
    record = AttendanceRecord(
        course_code=code, course_title="Any", hours_conducted=1, hours_absent=0
    )

    assert record.category == category


def test_margin_can_go_negative():
    record = AttendanceRecord(
        course_code="X", course_title="Any", hours_conducted=20, hours_absent=8
    )

    # 12 attended, 15 required
    assert record.margin == -3


@pytest.mark.parametrize(
    "total, attended, expected",
    [(160, 23, "14.38"), (160, 49, "30.62"), (320, 46, "14.38")],
)
def test_half_way_percentages(total, attended, expected):
    result = project(total, attended)

    assert result.current_percentage == expected
    assert result.percentage == round(100 * attended / total, 2)


@pytest.mark.parametrize("code", ["21mab101t", "18csc201l", "21csp101p"])
def test_category_is_case_sensitive(code):
    record = AttendanceRecord(
        course_code=code, course_title="Any", hours_conducted=1, hours_absent=0
    )

    # no upper-case T/P/L at all
    assert record.category == "Theory"

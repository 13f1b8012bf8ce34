import pandas as pd

from core.errors import AttendanceFormatError
from core.models import AttendanceRecord

REQUIRED_COLUMNS = [
    "course_code",
    "course_title",
    "hours_conducted",
    "hours_absent",
]

# Column headers as they appear on the attendance page export
HEADER_ALIASES = {
    "Course Code": "course_code",
    "Course Title": "course_title",
    "Faculty Name": "faculty",
    "Faculty": "faculty",
    "Hours Conducted": "hours_conducted",
    "Hours Absent": "hours_absent",
    "Attn %": "attendance_percentage",
    "Attendance %": "attendance_percentage",
}


def parse_attendance_frame(df):
    """
    Attendance DataFrame -> list[AttendanceRecord]
    Accepts either snake_case columns or the export headers.
    """
    clean = df.rename(columns=HEADER_ALIASES)
    # "Faculty Name" and "Faculty" both map to faculty: first one wins
    clean = clean.loc[:, ~clean.columns.duplicated()].copy()

    missing = [c for c in REQUIRED_COLUMNS if c not in clean.columns]
    if missing:
        raise AttendanceFormatError(
            f"attendance table is missing columns: {', '.join(missing)}"
        )

    incomplete = clean[REQUIRED_COLUMNS].isna().any(axis=1)
    if incomplete.any():
        rows = list(clean.index[incomplete])
        raise AttendanceFormatError(f"attendance rows with missing values: {rows}")

    if "faculty" not in clean.columns:
        clean["faculty"] = ""
    clean["faculty"] = clean["faculty"].fillna("").astype(str)

    clean["hours_conducted"] = clean["hours_conducted"].astype(int)
    clean["hours_absent"] = clean["hours_absent"].astype(int)

    if "attendance_percentage" not in clean.columns:
        clean["attendance_percentage"] = [
            round((c - a) / c * 100, 2) if c > 0 else 0.0
            for c, a in zip(clean["hours_conducted"], clean["hours_absent"])
        ]

    records = []
    for _, row in clean.iterrows():
        records.append(
            AttendanceRecord(
                course_code=str(row["course_code"]),
                course_title=str(row["course_title"]),
                faculty=row["faculty"].strip(),
                hours_conducted=int(row["hours_conducted"]),
                hours_absent=int(row["hours_absent"]),
                attendance_percentage=float(row["attendance_percentage"]),
            )
        )

    return records


def parse_attendance(data):
    """
    Attendance from the portal JSON (list of dicts) or a DataFrame.
    """
    if isinstance(data, pd.DataFrame):
        return parse_attendance_frame(data)

    if not data:
        return []

    return parse_attendance_frame(pd.DataFrame(list(data)))

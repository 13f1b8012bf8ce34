"""Error hierarchy for the input adapters.

The engine itself never raises for bad data: malformed calendar rows are
dropped and counted, unknown dates fall back to a weekday check and invalid
projections come back as a marked result. Only the adapters in ``utils/``
raise these, when a whole dataset is unusable.
"""


class PredictorError(Exception):
    """Base exception for all predictor errors."""

    pass


class DataFormatError(PredictorError):
    """An input dataset does not have the expected shape."""

    pass


class AttendanceFormatError(DataFormatError):
    """Attendance table is missing required columns or fields."""

    pass


class TimetableFormatError(DataFormatError):
    """Timetable mapping cannot be read as day order -> slot -> courses."""

    pass

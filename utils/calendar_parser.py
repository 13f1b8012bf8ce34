def parse_calendar_text(calendar_text):
    """
    Splits the tab-separated day-order calendar into rows of fields.

    Expected layout (header first):
        Month  Day  Date        DO  DayName
        Mar    3    2025-03-03  5   Mon

    Rows are returned as-is (header included, short rows included);
    CalendarIndex.build decides what to keep.
    """
    if not calendar_text:
        return []

    rows = []
    for line in calendar_text.strip().split("\n"):
        line = line.rstrip("\r")
        rows.append([field.strip() for field in line.split("\t")])

    return rows

"""Plain-text rendering of a TimetableView for the command line."""

from timetable.models import Lesson, TimetableView, ViewMode, Week

EMPTY_MESSAGE = "(no lessons scheduled)"


def format_view(view: TimetableView) -> str:
    """Render whichever shape the view was built in."""
    if view.view_mode is ViewMode.LIST:
        return format_list(view)
    return format_grid(view)


def format_grid(view: TimetableView) -> str:
    """One table per week: a row per time slot, a column per day.

    Break rows carry their label in the time column and empty cells.
    """
    return "\n\n".join(_format_week(view, week) for week in view.weeks)


def format_list(view: TimetableView) -> str:
    """One row per lesson, in the order of view.days.

    Columns: Date | Time | Lesson | Class | Location | Status
    Today's date is marked with a trailing "*".
    """
    if not view.days:
        return EMPTY_MESSAGE

    headers = ["Date", "Time", "Lesson", "Class", "Location", "Status"]
    rows = []
    for lesson_day in view.days:
        for lesson in lesson_day.lessons:
            date_cell = lesson_day.day.isoformat() + (" *" if lesson_day.is_today else "")
            rows.append(
                [
                    date_cell,
                    _time_range(lesson),
                    lesson.display_title,
                    lesson.class_name or "-",
                    lesson.location or ("online" if lesson.is_virtual else "-"),
                    lesson.status.value,
                ]
            )

    return _format_table(headers, rows)


def _format_week(view: TimetableView, week: Week) -> str:
    headers = ["Time"] + [
        f"{column.short_name} {column.day_of_month} {column.month_name}"
        + (" *" if column.is_today else "")
        for column in week.days
    ]

    rows = []
    for slot in view.time_slots:
        if slot.is_break:
            rows.append([f"{slot.start} {slot.label}"] + [""] * len(week.days))
            continue
        row = [f"{slot.start}-{slot.end}"]
        for column in week.days:
            lessons = column.lessons_at(slot.start)
            row.append(", ".join(lesson.display_title for lesson in lessons) or "-")
        rows.append(row)

    return f"{week.label}\n{_format_table(headers, rows)}"


def _time_range(lesson: Lesson) -> str:
    if lesson.end_time:
        return f"{lesson.start_time}-{lesson.end_time}"
    return lesson.start_time


def _format_table(headers: list[str], rows: list[list[str]]) -> str:
    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)

    row_lines = []
    for row in rows:
        row_lines.append(
            " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        )

    return "\n".join([header_line.rstrip(), separator, *row_lines])

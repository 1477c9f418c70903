"""Error hierarchy for timetable building.

Individual lesson records that cannot be normalized raise MalformedLessonError,
which the builder catches and reports as a skipped record. Input of the wrong
overall shape raises LessonContractError, which propagates to the caller.

Example:
    try:
        lesson = normalize_lesson(record)
    except MalformedLessonError as exc:
        skipped.append(SkippedLesson(index=i, reason=str(exc)))
"""


class TimetableError(Exception):
    """Base exception for all timetable errors."""

    pass


class MalformedLessonError(TimetableError):
    """A single lesson record cannot be turned into a Lesson.

    Examples: unparseable lesson date, record that is not a mapping.
    Never escapes build_timetable().
    """

    pass


class LessonContractError(TimetableError, TypeError):
    """The lessons argument is not a sequence of records at all.

    Examples: None, an int, a single dict passed instead of a list.
    Not recoverable by skipping records, so it is raised to the caller.
    """

    pass

"""Flatten raw lesson records into Lesson models.

The lesson source hands back rows in a few shapes: flat snake_case rows,
camelCase rows from the API layer, and rows with the class-subject join still
nested (class_subject -> subject_offering -> subject). All of that is resolved
here, once, so the builder only ever sees flat Lesson records.
"""

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from typing import Any

from pydantic import ValidationError

from timetable.errors import LessonContractError, MalformedLessonError
from timetable.logging import get_logger
from timetable.models import Lesson, LessonStatus, SkippedLesson

log = get_logger(__name__)

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})")
# Calendar dates only; week dates and basic-format "20261018" are rejected
_DATE_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})")

# Used when a lesson has no usable start time; matches no teaching slot
DEFAULT_START_TIME = "00:00"


def normalize_lessons(records: Iterable[Any]) -> tuple[list[Lesson], list[SkippedLesson]]:
    """Normalize every record, keeping input order.

    Args:
        records: Raw lesson rows (mappings) and/or Lesson instances.

    Returns:
        (lessons, skipped): the usable lessons, and one SkippedLesson per
        record that could not be normalized.

    Raises:
        LessonContractError: If `records` is not an iterable of records.
    """
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(
        records, Iterable
    ):
        raise LessonContractError(
            f"lessons must be an iterable of lesson records, got {type(records).__name__}"
        )

    lessons: list[Lesson] = []
    skipped: list[SkippedLesson] = []
    for index, record in enumerate(records):
        try:
            lessons.append(normalize_lesson(record))
        except MalformedLessonError as exc:
            log.warning("lesson_skipped", index=index, reason=str(exc))
            skipped.append(SkippedLesson(index=index, reason=str(exc)))

    return lessons, skipped


def normalize_lesson(record: Lesson | Mapping[str, Any]) -> Lesson:
    """Turn one raw lesson row into a Lesson.

    Args:
        record: A Lesson (returned unchanged) or a mapping from the lesson source.

    Returns:
        Flat Lesson with a parsed date and HH:MM times.

    Raises:
        MalformedLessonError: If the record is not a mapping or its date is unusable.
    """
    if isinstance(record, Lesson):
        return record
    if not isinstance(record, Mapping):
        raise MalformedLessonError(f"lesson record must be a mapping, got {type(record).__name__}")

    lesson_date = _parse_lesson_date(_first(record, "lesson_date", "lessonDate", "date"))
    start_time = _parse_time(_first(record, "start_time", "startTime")) or DEFAULT_START_TIME
    end_time = _parse_time(_first(record, "end_time", "endTime"))

    subject_name = _text(
        _first(record, "subject_name", "subjectName")
        or _nested(record, "class_subject", "subject_offering", "subject", "subject_name")
    )
    class_name = _text(
        _first(record, "class_name", "className")
        or _nested(record, "class_subject", "class", "class_name")
    )

    lesson_id = _first(record, "lesson_id", "lessonId", "id")

    try:
        return Lesson(
            lesson_date=lesson_date,
            start_time=start_time,
            end_time=end_time,
            title=_text(_first(record, "lesson_title", "lessonTitle", "title")),
            topic=_text(record.get("topic")),
            location=_text(record.get("location")),
            subject_name=subject_name,
            class_name=class_name,
            lesson_id=str(lesson_id) if lesson_id is not None else None,
            status=_parse_status(record.get("status")),
            is_virtual=_first(record, "session_id", "sessionId") is not None,
        )
    except ValidationError as exc:
        raise MalformedLessonError(f"invalid lesson fields: {exc.error_count()} error(s)") from exc


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present with a non-empty value."""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _nested(record: Mapping[str, Any], *path: str) -> Any:
    value: Any = record
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_lesson_date(value: Any) -> date:
    """Accept a date, a datetime, or a string starting with YYYY-MM-DD."""
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _DATE_RE.match(value)
        if match:
            try:
                return date.fromisoformat(match.group(1))
            except ValueError:
                pass
    raise MalformedLessonError(f"unparseable lesson date {value!r}")


def _parse_time(value: Any) -> str | None:
    """Extract zero-padded HH:MM from "8:00", "08:00:00", a time, etc."""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def _parse_status(value: Any) -> LessonStatus:
    if value is None:
        return LessonStatus.SCHEDULED
    try:
        return LessonStatus(str(value).strip().upper())
    except ValueError:
        return LessonStatus.SCHEDULED

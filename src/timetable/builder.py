"""Timetable builder - turns a flat lesson list into a renderable view model.

Lessons go through one normalization pass (timetable.normalize), are filtered
to the in-scope date range, and are grouped into a date -> sorted lessons map.
Both view modes read that same map:

  GRID: week pages, Sunday first. Each date holds one bucket per teaching slot;
        a lesson lands in the bucket whose start equals its start_time exactly.
        Lessons starting anywhere else (including on a break) are kept apart in
        DayColumn.unslotted and never appear in a slot bucket.
  LIST: dates ascending, lessons within a date by start_time.

The build is pure: no I/O, no clock reads beyond the single `now` per call,
and the input records are never modified.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any

from timetable.logging import get_logger
from timetable.models import DayColumn, Lesson, LessonDay, TimetableView, ViewMode, Week
from timetable.normalize import normalize_lessons
from timetable.slots import SCHOOL_DAY_SLOTS, teaching_slots

log = get_logger(__name__)


def week_start(day: date) -> date:
    """Return the Sunday on or before `day`."""
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_dates(start: date) -> list[date]:
    """Seven consecutive dates beginning at `start`."""
    return [start + timedelta(days=offset) for offset in range(7)]


def group_by_date(lessons: Iterable[Lesson]) -> dict[date, list[Lesson]]:
    """Group lessons by date.

    Keys are in ascending date order. Lessons within a date are sorted by
    start_time; the sort is stable, so lessons sharing a start keep input order.
    """
    grouped: dict[date, list[Lesson]] = {}
    for lesson in lessons:
        grouped.setdefault(lesson.lesson_date, []).append(lesson)

    return {
        day: sorted(grouped[day], key=lambda lesson: lesson.start_time)
        for day in sorted(grouped)
    }


def lessons_for_day(lessons: Iterable[Any], day: date) -> list[Lesson]:
    """Lessons on `day` in start-time order (the "today's lessons" panel).

    Args:
        lessons: Raw lesson records or Lesson instances.
        day: The date to select.

    Returns:
        Matching lessons; malformed records are ignored.
    """
    normalized, _skipped = normalize_lessons(lessons)
    return group_by_date(lesson for lesson in normalized if lesson.lesson_date == day).get(day, [])


def build_timetable(
    lessons: Iterable[Any],
    *,
    view_mode: ViewMode | str = ViewMode.GRID,
    upcoming_only: bool = True,
    reference_date: date | None = None,
    now: datetime | None = None,
) -> TimetableView:
    """Build the timetable view model for a set of lessons.

    Args:
        lessons: Raw lesson records (mappings) or Lesson instances, any order.
        view_mode: GRID for week pages, LIST for a date-grouped list.
        upcoming_only: Drop lessons dated before today.
        reference_date: Pin the first displayed week to the week containing
            this date. Lessons before that week are left out of the build.
            Without it the grid starts at the current week, or earlier if
            an in-scope lesson is earlier.
        now: Clock reading used for "today". Defaults to the local clock,
            read once.

    Returns:
        TimetableView with `weeks` (GRID) or `days` (LIST) filled in, and any
        records that could not be normalized listed in `skipped`.

    Raises:
        LessonContractError: If `lessons` is not an iterable of records.
        ValueError: If `view_mode` is not a known view mode.
    """
    view_mode = ViewMode(view_mode)
    if now is None:
        now = datetime.now()
    today = now.date()

    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    first_week = week_start(reference_date) if reference_date is not None else None

    normalized, skipped = normalize_lessons(lessons)
    in_scope = [
        lesson
        for lesson in normalized
        if not (upcoming_only and lesson.lesson_date < today)
        and not (first_week is not None and lesson.lesson_date < first_week)
    ]
    by_date = group_by_date(in_scope)

    weeks: list[Week] = []
    days: list[LessonDay] = []
    if view_mode is ViewMode.LIST:
        days = [
            LessonDay(day=day, is_today=day == today, lessons=day_lessons)
            for day, day_lessons in by_date.items()
        ]
    else:
        weeks = _build_weeks(by_date, today, first_week)

    log.debug(
        "timetable_built",
        view_mode=view_mode.value,
        lessons=len(in_scope),
        filtered=len(normalized) - len(in_scope),
        skipped=len(skipped),
        weeks=len(weeks),
        days=len(days),
    )

    return TimetableView(
        view_mode=view_mode,
        generated_at=now,
        time_slots=list(SCHOOL_DAY_SLOTS),
        weeks=weeks,
        days=days,
        skipped=skipped,
    )


def _build_weeks(
    by_date: dict[date, list[Lesson]],
    today: date,
    first_week: date | None,
) -> list[Week]:
    """Week pages from the first week through the week of the latest lesson."""
    if first_week is None:
        # Current week, pulled back to the earliest lesson when past lessons are shown.
        # by_date keys are ascending.
        first_week = week_start(today)
        if by_date:
            first_week = min(first_week, week_start(next(iter(by_date))))
    last_week = max(week_start(max(by_date)), first_week) if by_date else first_week

    weeks: list[Week] = []
    start = first_week
    while start <= last_week:
        columns = [_build_day(day, by_date.get(day, []), today) for day in week_dates(start)]
        weeks.append(
            Week(start=start, days=columns, contains_today=any(c.is_today for c in columns))
        )
        start += timedelta(days=7)

    return weeks


def _build_day(day: date, lessons: list[Lesson], today: date) -> DayColumn:
    slots: dict[str, list[Lesson]] = {slot.start: [] for slot in teaching_slots()}
    unslotted: list[Lesson] = []
    for lesson in lessons:
        bucket = slots.get(lesson.start_time)
        if bucket is None:
            unslotted.append(lesson)
        else:
            bucket.append(lesson)

    return DayColumn(day=day, is_today=day == today, slots=slots, unslotted=unslotted)

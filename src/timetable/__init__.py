"""Timetable view-model builder.

Turns a flat list of lesson records into week-paged grid pages or a
date-grouped list, ready for a renderer.
"""

from timetable.builder import build_timetable, group_by_date, lessons_for_day, week_dates, week_start
from timetable.errors import LessonContractError, MalformedLessonError, TimetableError
from timetable.models import (
    DayColumn,
    Lesson,
    LessonDay,
    LessonStatus,
    SkippedLesson,
    TimeSlot,
    TimetableView,
    ViewMode,
    Week,
)
from timetable.normalize import normalize_lesson, normalize_lessons
from timetable.slots import SCHOOL_DAY_SLOTS, slot_for_start, teaching_slots

__all__ = [
    "build_timetable",
    "group_by_date",
    "lessons_for_day",
    "week_dates",
    "week_start",
    "normalize_lesson",
    "normalize_lessons",
    "SCHOOL_DAY_SLOTS",
    "slot_for_start",
    "teaching_slots",
    "DayColumn",
    "Lesson",
    "LessonDay",
    "LessonStatus",
    "SkippedLesson",
    "TimeSlot",
    "TimetableView",
    "ViewMode",
    "Week",
    "LessonContractError",
    "MalformedLessonError",
    "TimetableError",
]

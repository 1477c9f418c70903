"""Pydantic models for timetable data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Lesson is the flat record produced by timetable.normalize; the remaining models
form the view model handed to a renderer.
"""

from datetime import date, datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# English names, independent of the process locale
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class ViewMode(str, Enum):
    """Output shape of a timetable build."""

    GRID = "grid"
    LIST = "list"


class LessonStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Lesson(BaseModel):
    """A single scheduled lesson, flattened from whatever shape the lesson source returned.

    Lessons are grouped by (lesson_date, start_time). That pair is not unique:
    parallel classes legitimately share a slot.
    """

    model_config = ConfigDict(frozen=True)

    lesson_date: date
    start_time: str = "00:00"  # zero-padded "HH:MM"
    end_time: str | None = None
    title: str | None = None
    topic: str | None = None
    location: str | None = None
    subject_name: str | None = None
    class_name: str | None = None
    lesson_id: str | None = None
    status: LessonStatus = LessonStatus.SCHEDULED
    is_virtual: bool = False  # has an attached online session

    @property
    def display_title(self) -> str:
        """Subject name if known, else the lesson title, else "Lesson"."""
        return self.subject_name or self.title or "Lesson"

    def is_past(self, today: date) -> bool:
        return self.lesson_date < today


class TimeSlot(BaseModel):
    """One row of the school day. Break rows never hold lessons."""

    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    is_break: bool = False
    period: int | None = None
    name: str | None = None  # "Break" / "Lunch" for break rows

    @property
    def label(self) -> str:
        if self.is_break:
            return self.name or "Break"
        return f"Period {self.period}"


class SkippedLesson(BaseModel):
    """A raw record left out of the build, with its position in the input."""

    index: int
    reason: str


class DayColumn(BaseModel):
    """One date of a grid week: a bucket of lessons per teaching slot."""

    day: date
    is_today: bool = False
    slots: dict[str, list[Lesson]] = Field(default_factory=dict)  # slot start -> lessons
    unslotted: list[Lesson] = Field(default_factory=list)

    @computed_field
    @property
    def short_name(self) -> str:
        return _DAY_NAMES[self.day.weekday()][:3]

    @computed_field
    @property
    def full_name(self) -> str:
        return _DAY_NAMES[self.day.weekday()]

    @computed_field
    @property
    def month_name(self) -> str:
        return _MONTH_NAMES[self.day.month - 1][:3]

    @property
    def day_of_month(self) -> int:
        return self.day.day

    def lessons_at(self, start: str) -> list[Lesson]:
        """Lessons bucketed under the slot starting at `start` (empty if none)."""
        return self.slots.get(start, [])

    @property
    def lesson_count(self) -> int:
        return sum(len(bucket) for bucket in self.slots.values())


class Week(BaseModel):
    """Seven consecutive dates, Sunday first. One page of the grid view."""

    start: date
    days: list[DayColumn]
    contains_today: bool = False

    @computed_field
    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    @computed_field
    @property
    def label(self) -> str:
        """Header text, e.g. "October 18 - October 24"."""
        return f"{_long_date(self.start)} - {_long_date(self.end)}"

    @property
    def dates(self) -> list[date]:
        return [column.day for column in self.days]


class LessonDay(BaseModel):
    """One date of the list view, lessons in start-time order."""

    day: date
    is_today: bool = False
    lessons: list[Lesson]


class TimetableView(BaseModel):
    """Output of build_timetable().

    GRID builds fill `weeks`, LIST builds fill `days`. Records that could not
    be normalized are reported in `skipped` rather than raised.
    """

    view_mode: ViewMode
    generated_at: datetime
    time_slots: list[TimeSlot]
    weeks: list[Week] = Field(default_factory=list)
    days: list[LessonDay] = Field(default_factory=list)
    skipped: list[SkippedLesson] = Field(default_factory=list)

    @computed_field
    @property
    def is_empty(self) -> bool:
        if self.view_mode is ViewMode.LIST:
            return not self.days
        return all(column.lesson_count == 0 for week in self.weeks for column in week.days)


def _long_date(day: date) -> str:
    return f"{_MONTH_NAMES[day.month - 1]} {day.day}"

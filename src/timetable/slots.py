"""The fixed school-day schedule.

Ten rows from 08:00 to 15:15: eight 45-minute periods, a short break at 09:30
and lunch at 12:15. This is the institution's school day, not derived from data.
"""

from timetable.models import TimeSlot

SCHOOL_DAY_SLOTS: tuple[TimeSlot, ...] = (
    TimeSlot(start="08:00", end="08:45", period=1),
    TimeSlot(start="08:45", end="09:30", period=2),
    TimeSlot(start="09:30", end="10:00", is_break=True, name="Break"),
    TimeSlot(start="10:00", end="10:45", period=3),
    TimeSlot(start="10:45", end="11:30", period=4),
    TimeSlot(start="11:30", end="12:15", period=5),
    TimeSlot(start="12:15", end="13:00", is_break=True, name="Lunch"),
    TimeSlot(start="13:00", end="13:45", period=6),
    TimeSlot(start="13:45", end="14:30", period=7),
    TimeSlot(start="14:30", end="15:15", period=8),
)


def teaching_slots() -> list[TimeSlot]:
    """Non-break slots in schedule order."""
    return [slot for slot in SCHOOL_DAY_SLOTS if not slot.is_break]


def slot_for_start(start: str) -> TimeSlot | None:
    """Return the slot (break or not) whose start is exactly `start`, if any."""
    for slot in SCHOOL_DAY_SLOTS:
        if slot.start == start:
            return slot
    return None

from models.weekday import Weekday
from models.schedule_entry import ScheduleEntry
from models.raw_items import (
    CalendarEvent,
    CalendarTask,
    RawCalendarItem,
    RawScheduleEntry,
)

__all__ = [
    "Weekday",
    "ScheduleEntry",
    "RawScheduleEntry",
    "RawCalendarItem",
    "CalendarEvent",
    "CalendarTask",
]

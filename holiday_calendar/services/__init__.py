from .calendar_store import CalendarDataError, CalendarStore
from .holiday_service import HolidayService
from .region_filter import filter_by_region
from .weekdays import weekday_name

__all__ = [
    "CalendarDataError",
    "CalendarStore",
    "HolidayService",
    "filter_by_region",
    "weekday_name",
]

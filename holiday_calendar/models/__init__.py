from .holiday import (
    ALL_REGIONS,
    ApiModel,
    ApiResponse,
    BusinessDays,
    CountryCalendar,
    ErrorKind,
    HolidayCheck,
    HolidayEntry,
    HolidayError,
    HolidayItem,
    HolidayList,
    HolidayRef,
    NextHoliday,
    RegionList,
    ResponseMeta,
)

__all__ = [
    "ALL_REGIONS",
    "ApiModel",
    "ApiResponse",
    "BusinessDays",
    "CountryCalendar",
    "ErrorKind",
    "HolidayCheck",
    "HolidayEntry",
    "HolidayError",
    "HolidayItem",
    "HolidayList",
    "HolidayRef",
    "NextHoliday",
    "RegionList",
    "ResponseMeta",
]

from datetime import date, timedelta
from typing import Callable, Optional, Union

import structlog

from holiday_calendar.models import (
    ALL_REGIONS,
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
)
from .calendar_store import CalendarStore
from .region_filter import filter_by_region, is_all_regions
from .weekdays import DAY_NAMES, is_weekend, weekday_name

logger = structlog.get_logger()


class HolidayService:
    """
    Answers holiday and business-day queries over the calendar store.

    Every query returns either its result model or a HolidayError describing
    an expected failure (unknown country, missing year, bad range, nothing
    upcoming). Only a broken dataset raises.
    """

    def __init__(
        self,
        store: CalendarStore,
        locale: str = "de",
        today: Callable[[], date] = date.today,
        max_range_days: Optional[int] = None,
    ):
        if locale not in DAY_NAMES:
            raise ValueError(f"Unsupported weekday locale: {locale!r}")
        self.store = store
        self.locale = locale
        self.today = today
        self.max_range_days = max_range_days

    def _calendar(self, country: str) -> Union[CountryCalendar, HolidayError]:
        """Resolve a country, refusing unknown codes before any dataset access."""
        calendar = self.store.load(country)
        if calendar is None:
            supported = ", ".join(self.store.supported_countries)
            return HolidayError(
                kind=ErrorKind.UNKNOWN_COUNTRY,
                message=f"Invalid country code. Supported: {supported}",
            )
        return calendar

    def _entries(self, calendar: CountryCalendar, year: int, region: Optional[str]) -> Optional[list[HolidayEntry]]:
        entries = calendar.entries_for(year)
        if entries is None:
            return None
        return filter_by_region(entries, region)

    def _weekday(self, day: date) -> str:
        return weekday_name(day, self.locale)

    @staticmethod
    def _region_label(region: Optional[str]) -> str:
        return ALL_REGIONS if is_all_regions(region) else region

    def list_holidays(
        self, country: str, year: Optional[int] = None, region: Optional[str] = None
    ) -> Union[HolidayList, HolidayError]:
        """
        Get the holidays of a country for one year.

        Args:
            country: Country code (case-insensitive).
            year: Calendar year. Defaults to the current year.
            region: Optional region code; "all" or None keeps every entry.
        """
        calendar = self._calendar(country)
        if isinstance(calendar, HolidayError):
            return calendar

        if year is None:
            year = self.today().year

        entries = self._entries(calendar, year, region)
        if entries is None:
            first, last = calendar.year_range
            return HolidayError(
                kind=ErrorKind.YEAR_NOT_AVAILABLE,
                message=f"No data available for year {year}. Available: {first}-{last}",
            )

        return HolidayList(
            country=calendar.name,
            country_code=country.lower(),
            year=year,
            state=self._region_label(region),
            holidays=[
                HolidayItem(
                    date=entry.date,
                    name=entry.name,
                    type=entry.type,
                    day_of_week=self._weekday(entry.date),
                )
                for entry in entries
            ],
            count=len(entries),
        )

    def is_holiday(
        self, country: str, day: date, region: Optional[str] = None
    ) -> Union[HolidayCheck, HolidayError]:
        """
        Check whether a date is a holiday.

        A year the dataset does not cover is answered as "not a holiday"
        rather than rejected.
        """
        calendar = self._calendar(country)
        if isinstance(calendar, HolidayError):
            return calendar

        entries = self._entries(calendar, day.year, region) or []
        match = next((entry for entry in entries if entry.date == day), None)

        return HolidayCheck(
            date=day,
            is_holiday=match is not None,
            holiday=HolidayRef(name=match.name, type=match.type) if match else None,
            day_of_week=self._weekday(day),
        )

    def next_holiday(
        self, country: str, from_date: Optional[date] = None, region: Optional[str] = None
    ) -> Union[NextHoliday, HolidayError]:
        """
        Find the first holiday strictly after a date.

        The search covers the year of the reference date and the following
        year only.
        """
        calendar = self._calendar(country)
        if isinstance(calendar, HolidayError):
            return calendar

        if from_date is None:
            from_date = self.today()

        candidates: list[HolidayEntry] = []
        for year in (from_date.year, from_date.year + 1):
            entries = self._entries(calendar, year, region)
            if entries:
                candidates.extend(entry for entry in entries if entry.date > from_date)

        if not candidates:
            return HolidayError(
                kind=ErrorKind.NO_UPCOMING_HOLIDAY,
                message="No upcoming holidays found",
            )

        upcoming = sorted(candidates, key=lambda entry: entry.date)[0]
        return NextHoliday(
            date=upcoming.date,
            name=upcoming.name,
            type=upcoming.type,
            day_of_week=self._weekday(upcoming.date),
            days_until=(upcoming.date - from_date).days,
        )

    def business_days(
        self, country: str, start: date, end: date, region: Optional[str] = None
    ) -> Union[BusinessDays, HolidayError]:
        """
        Count business, weekend and holiday days in an inclusive date range.

        A holiday falling on a weekend is counted as a weekend day, so the
        three counts always add up to the total.
        """
        if start > end:
            return HolidayError(
                kind=ErrorKind.INVALID_RANGE,
                message="Start date must be before end date",
            )

        calendar = self._calendar(country)
        if isinstance(calendar, HolidayError):
            return calendar

        total_span = (end - start).days + 1
        if self.max_range_days is not None and total_span > self.max_range_days:
            return HolidayError(
                kind=ErrorKind.INVALID_RANGE,
                message=f"Date range too long: {total_span} days (maximum {self.max_range_days})",
            )

        holiday_dates: set[date] = set()
        for year in range(start.year, end.year + 1):
            entries = self._entries(calendar, year, region)
            if entries:
                holiday_dates.update(entry.date for entry in entries)

        business = weekend = holidays = 0
        # offsets never step past end, which may be date.max
        for offset in range(total_span):
            current = start + timedelta(days=offset)
            if is_weekend(current):
                weekend += 1
            elif current in holiday_dates:
                holidays += 1
            else:
                business += 1

        logger.debug(
            "business_days_counted",
            country=country,
            start=start.isoformat(),
            end=end.isoformat(),
            business_days=business,
        )

        return BusinessDays(
            start_date=start,
            end_date=end,
            country=calendar.name,
            state=self._region_label(region),
            business_days=business,
            total_days=total_span,
            weekend_days=weekend,
            holiday_days=holidays,
        )

    def get_regions(self, country: str) -> Union[RegionList, HolidayError]:
        """Get the region codes declared for a country."""
        calendar = self._calendar(country)
        if isinstance(calendar, HolidayError):
            return calendar

        return RegionList(
            country=calendar.name,
            country_code=country.lower(),
            states=list(calendar.region_codes),
        )

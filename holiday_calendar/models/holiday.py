from datetime import date
from enum import Enum
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


ALL_REGIONS = "all"

T = TypeVar("T")


class HolidayEntry(BaseModel):
    """A single observed holiday as stored in a country dataset."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: date
    name: str
    type: str
    regions: tuple[str, ...] = Field(default=(ALL_REGIONS,), alias="states")

    @property
    def is_universal(self) -> bool:
        return ALL_REGIONS in self.regions


class CountryCalendar(BaseModel):
    """Read-only holiday dataset for one country."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    region_codes: tuple[str, ...] = Field(default=(), alias="states")
    years: dict[int, tuple[HolidayEntry, ...]]

    def entries_for(self, year: int) -> Optional[tuple[HolidayEntry, ...]]:
        return self.years.get(year)

    @property
    def year_range(self) -> tuple[int, int]:
        return min(self.years), max(self.years)


class ErrorKind(str, Enum):
    UNKNOWN_COUNTRY = "unknown_country"
    YEAR_NOT_AVAILABLE = "year_not_available"
    INVALID_RANGE = "invalid_range"
    NO_UPCOMING_HOLIDAY = "no_upcoming_holiday"


class HolidayError(BaseModel):
    """Expected failure of a calendar query."""
    kind: ErrorKind
    message: str


class ApiModel(BaseModel):
    """Base for response payloads, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HolidayItem(ApiModel):
    date: date
    name: str
    type: str
    day_of_week: str = Field(description="Localized weekday name (e.g., 'Montag')")


class HolidayList(ApiModel):
    """Holidays of one country and year, optionally narrowed to a region."""
    country: str
    country_code: str
    year: int
    state: str
    holidays: list[HolidayItem]
    count: int


class HolidayRef(ApiModel):
    name: str
    type: str


class HolidayCheck(ApiModel):
    date: date
    is_holiday: bool
    holiday: Optional[HolidayRef] = None
    day_of_week: str


class NextHoliday(ApiModel):
    date: date
    name: str
    type: str
    day_of_week: str
    days_until: int = Field(description="Whole days from the reference date to the holiday")


class BusinessDays(ApiModel):
    start_date: date
    end_date: date
    country: str
    state: str
    business_days: int
    total_days: int
    weekend_days: int
    holiday_days: int


class RegionList(ApiModel):
    country: str
    country_code: str
    states: list[str]


class ResponseMeta(ApiModel):
    requested_at: str
    endpoint: str


class ApiResponse(ApiModel, Generic[T]):
    """Success envelope shared by every endpoint."""
    success: bool = True
    data: T
    meta: ResponseMeta

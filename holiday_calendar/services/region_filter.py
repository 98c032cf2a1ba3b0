from typing import Iterable, Optional

from holiday_calendar.models import ALL_REGIONS, HolidayEntry


def is_all_regions(region: Optional[str]) -> bool:
    """True when no specific region was requested."""
    return not region or region.strip().lower() == ALL_REGIONS


def filter_by_region(entries: Iterable[HolidayEntry], region: Optional[str] = None) -> list[HolidayEntry]:
    """
    Narrow holiday entries to those observed in a region.

    Entries observed everywhere always survive. Region codes are compared
    case-insensitively and are not validated; an unknown code simply leaves
    the nationwide entries.
    """
    if is_all_regions(region):
        return list(entries)

    wanted = region.strip().upper()
    return [
        entry for entry in entries
        if entry.is_universal or wanted in (code.upper() for code in entry.regions)
    ]

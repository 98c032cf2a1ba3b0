import json
from datetime import date

import pytest

from holiday_calendar.config import DEFAULT_DATA_DIR
from holiday_calendar.services import CalendarStore, HolidayService

SAMPLE_CALENDAR = {
    "name": "Testland",
    "states": ["AA", "BB", "CC"],
    "years": {
        "2025": [
            {"date": "2025-01-01", "name": "New Year", "type": "public", "states": ["all"]},
            {"date": "2025-03-14", "name": "Founders Day", "type": "regional", "states": ["AA"]},
            {"date": "2025-03-14", "name": "Spring Fair", "type": "regional", "states": ["BB"]},
            {"date": "2025-05-17", "name": "Saturday Feast", "type": "public", "states": ["all"]},
            {"date": "2025-12-25", "name": "Winter Day", "type": "public", "states": ["all"]},
        ],
        "2026": [
            {"date": "2026-01-01", "name": "New Year", "type": "public", "states": ["all"]},
            {"date": "2026-02-10", "name": "Valley Day", "type": "regional", "states": ["CC"]},
        ],
    },
}


@pytest.fixture
def data_dir(tmp_path):
    """A data directory holding the sample calendar under code 'tl'."""
    with open(tmp_path / "holidays-tl.json", "w", encoding="utf-8") as f:
        json.dump(SAMPLE_CALENDAR, f)
    return tmp_path


@pytest.fixture
def store(data_dir) -> CalendarStore:
    return CalendarStore(data_dir, ["tl", "zz"])


@pytest.fixture
def service(store) -> HolidayService:
    """Service over the sample calendar with the clock fixed to 2025-03-01."""
    return HolidayService(store, locale="en", today=lambda: date(2025, 3, 1))


@pytest.fixture
def dach_service() -> HolidayService:
    """Service over the packaged DACH datasets."""
    store = CalendarStore(DEFAULT_DATA_DIR, ["de", "at", "ch"])
    return HolidayService(store, today=lambda: date(2025, 6, 1))

import json
import threading
from pathlib import Path
from typing import Iterable, Optional

import structlog
from cachetools import LRUCache, cachedmethod
from pydantic import ValidationError

from holiday_calendar.models import CountryCalendar

logger = structlog.get_logger()


class CalendarDataError(Exception):
    """A country dataset exists but cannot be parsed."""


class CalendarStore:
    """
    Read-only access to the per-country holiday datasets.

    Datasets live in ``<data_dir>/holidays-<code>.json``. Parsed calendars are
    kept for the lifetime of the store; loading is idempotent, so a fresh store
    always yields equal calendars.
    """

    def __init__(self, data_dir: Path, supported_countries: Iterable[str]):
        self.data_dir = Path(data_dir)
        self.supported_countries: tuple[str, ...] = tuple(c.lower() for c in supported_countries)
        self._cache: LRUCache = LRUCache(maxsize=max(len(self.supported_countries), 1))
        self._lock = threading.Lock()

    def supports(self, country: str) -> bool:
        """Check the closed set of country codes; never touches the disk."""
        return bool(country) and country.lower() in self.supported_countries

    def dataset_path(self, country: str) -> Path:
        return self.data_dir / f"holidays-{country.lower()}.json"

    def load(self, country: str) -> Optional[CountryCalendar]:
        """
        Get the calendar for a country.

        Returns:
            The parsed calendar, or None if the code is unsupported or has no dataset.

        Raises:
            CalendarDataError: If the dataset file is malformed.
        """
        if not self.supports(country):
            return None
        return self._read(country.lower())

    @cachedmethod(lambda self: self._cache, lock=lambda self: self._lock)
    def _read(self, country: str) -> Optional[CountryCalendar]:
        path = self.dataset_path(country)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError:
            logger.warning("calendar_missing", country=country, path=str(path))
            return None
        except json.JSONDecodeError as e:
            raise CalendarDataError(f"Malformed holiday dataset {path}: {e}") from e

        try:
            calendar = CountryCalendar.model_validate(raw)
        except ValidationError as e:
            raise CalendarDataError(f"Invalid holiday dataset {path}: {e}") from e
        if not calendar.years:
            raise CalendarDataError(f"Holiday dataset {path} contains no years")

        first, last = calendar.year_range
        logger.info("calendar_loaded", country=country, years=f"{first}-{last}")
        return calendar

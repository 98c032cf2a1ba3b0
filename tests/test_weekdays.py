from datetime import date

import pytest

from holiday_calendar.services.weekdays import is_weekend, weekday_name


class TestWeekdayName:
    def test_default_locale_is_german(self):
        # 2025-01-01 was a Wednesday
        assert weekday_name(date(2025, 1, 1)) == "Mittwoch"

    @pytest.mark.parametrize(
        "locale,expected",
        [("de", "Sonntag"), ("en", "Sunday"), ("fr", "dimanche"), ("it", "domenica")],
    )
    def test_locales(self, locale, expected):
        assert weekday_name(date(2025, 1, 5), locale) == expected

    def test_matches_python_weekday_for_a_full_week(self):
        names = [weekday_name(date(2025, 1, day), "en") for day in range(6, 13)]
        assert names == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

    def test_unknown_locale(self):
        with pytest.raises(ValueError, match="xx"):
            weekday_name(date(2025, 1, 1), "xx")


class TestIsWeekend:
    def test_saturday_and_sunday(self):
        assert is_weekend(date(2025, 1, 4))
        assert is_weekend(date(2025, 1, 5))

    def test_weekday(self):
        assert not is_weekend(date(2025, 1, 3))

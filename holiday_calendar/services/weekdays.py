from datetime import date


# Indexed like date.weekday(): Monday is 0
DAY_NAMES = {
    "de": ("Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"),
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "fr": ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    "it": ("lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica"),
}

SATURDAY = 5
SUNDAY = 6


def is_weekend(day: date) -> bool:
    return day.weekday() in (SATURDAY, SUNDAY)


def weekday_name(day: date, locale: str = "de") -> str:
    """Render the weekday of a calendar date in the given locale."""
    try:
        names = DAY_NAMES[locale]
    except KeyError:
        raise ValueError(f"Unsupported weekday locale: {locale!r}") from None
    return names[day.weekday()]

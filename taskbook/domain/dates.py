import re
from datetime import date, datetime
from taskbook.domain.errors import ParseError

RECORD_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%b %d %Y"

# strptime przyjmuje też `2024-1-5`; rekord musi mieć dokładnie yyyy-MM-dd
_RECORD_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_date(text: str) -> date:
    """Parsuje datę w formacie `yyyy-MM-dd` (np. `2024-03-01`).

    Tylko ścisły format: bez spacji i bez skróconych miesięcy/dni.

    :raises ParseError: Gdy tekst nie jest poprawną datą.
    """
    if not isinstance(text, str) or not _RECORD_DATE_RE.fullmatch(text):
        raise ParseError(str(text), "oczekiwano daty w formacie yyyy-MM-dd")
    try:
        return datetime.strptime(text, RECORD_DATE_FORMAT).date()
    except ValueError:
        raise ParseError(text, "oczekiwano daty w formacie yyyy-MM-dd")


def format_record_date(day: date) -> str:
    return day.strftime(RECORD_DATE_FORMAT)


def format_display_date(day: date) -> str:
    """`Mar 01 2024`"""
    return day.strftime(DISPLAY_DATE_FORMAT)

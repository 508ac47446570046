"""Text helpers for writing Omnivore data into notes."""

import logging
import re
from datetime import date, datetime, time, timedelta

logger = logging.getLogger(__name__)

DATE_FORMAT_W_OUT_SECONDS = "%Y-%m-%dT%H:%M"
DATE_FORMAT = f"{DATE_FORMAT_W_OUT_SECONDS}:%S"
_DATE_TIME_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?")

_MARKDOWN_REPLACEMENTS = {
    "*": "\\*",
    "#": "\\#",
    "/": "\\/",
    "(": "\\(",
    ")": "\\)",
    "[": "\\[",
    "]": "\\]",
    "<": "&lt;",
    ">": "&gt;",
    "_": "\\_",
    "`": "\\`",
}
_MARKDOWN_CHARS = re.compile("|".join(re.escape(c) for c in _MARKDOWN_REPLACEMENTS))


def _escape(text: str) -> str:
    return _MARKDOWN_CHARS.sub(lambda m: _MARKDOWN_REPLACEMENTS[m.group(0)], text)


def markdown_escape(text: str) -> str:
    """Escape characters that markdown would interpret.

    Returns ``text`` unchanged if escaping fails for any reason.
    """
    try:
        return _escape(text)
    except Exception:
        logger.exception("markdown_escape error")
        return text


def escape_quotation_marks(text: str) -> str:
    return text.replace('"', '\\"')


def parse_date_time(value: str) -> datetime | None:
    """Parse ``YYYY-MM-DDTHH:MM[:SS]``.

    Returns None when the value matches neither format.
    """
    if not isinstance(value, str) or not _DATE_TIME_SHAPE.fullmatch(value):
        return None
    for fmt in (DATE_FORMAT, DATE_FORMAT_W_OUT_SECONDS):
        try:
            return datetime.strptime(value, fmt)
        except (TypeError, ValueError):
            continue
    return None


# date-fns style tokens (en-US): quoted literals, ordinals, then letter runs.
_TOKEN = re.compile(r"''|'(?:[^']|'')*'?|[dDMwI]o|([A-Za-z])\1*")

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _local_week_year(day: date) -> int:
    # Weeks start on Sunday and week 1 is the one containing January 1st.
    if day >= _start_of_week(date(day.year + 1, 1, 1)):
        return day.year + 1
    return day.year


def _local_week(day: date) -> int:
    first = _start_of_week(date(_local_week_year(day), 1, 1))
    return (_start_of_week(day) - first).days // 7 + 1


def _year(value: int, width: int) -> str:
    if width == 2:
        return f"{value % 100:02d}"
    return f"{value:0{width}d}"


def _format_token(token: str, dt: datetime) -> str:
    if token.startswith("'"):
        if token == "''":
            return "'"
        inner = token[1:-1] if len(token) > 1 and token.endswith("'") else token[1:]
        return inner.replace("''", "'")

    if token.endswith("o") and len(token) == 2:
        value = {
            "d": dt.day,
            "D": dt.timetuple().tm_yday,
            "M": dt.month,
            "w": _local_week(dt.date()),
            "I": dt.isocalendar()[1],
        }[token[0]]
        return _ordinal(value)

    letter, width = token[0], len(token)
    if letter == "y":
        return _year(dt.year, width)
    if letter == "Y":
        return _year(_local_week_year(dt.date()), width)
    if letter == "R":
        return _year(dt.isocalendar()[0], width)
    if letter == "M":
        if width >= 5:
            return _MONTHS[dt.month - 1][0]
        if width == 4:
            return _MONTHS[dt.month - 1]
        if width == 3:
            return _MONTHS[dt.month - 1][:3]
        return f"{dt.month:0{width}d}"
    if letter == "d":
        return f"{dt.day:0{width}d}"
    if letter == "D":
        return f"{dt.timetuple().tm_yday:0{width}d}"
    if letter == "E":
        name = _WEEKDAYS[dt.weekday()]
        if width >= 5:
            return name[0]
        if width == 4:
            return name
        return name[:3]
    if letter == "w":
        return f"{_local_week(dt.date()):0{width}d}"
    if letter == "I":
        return f"{dt.isocalendar()[1]:0{width}d}"
    if letter == "a":
        return "AM" if dt.hour < 12 else "PM"
    if letter == "H":
        return f"{dt.hour:0{width}d}"
    if letter == "h":
        return f"{dt.hour % 12 or 12:0{width}d}"
    if letter == "m":
        return f"{dt.minute:0{width}d}"
    if letter == "s":
        return f"{dt.second:0{width}d}"
    return token


def format_date(value: date, preferred_date_format: str) -> str:
    """Render ``value`` as a page link, e.g. ``[[2023-01-05]]``.

    ``preferred_date_format`` uses date-fns tokens, the same ones Logseq
    offers for its journal titles (``MMM do, yyyy``, ``yyyy-MM-dd``, ...).
    ``YYYY``/``YY`` are the week-numbering year and ``D``/``DD`` the day of
    the year.
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time())
    rendered = _TOKEN.sub(lambda m: _format_token(m.group(0), value), preferred_date_format)
    return f"[[{rendered}]]"

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from datetime import date, datetime

from clinic_calendar.models.calendar import FormatOptions, JalaliDate
from clinic_calendar.models.errors import CalendarError
from clinic_calendar.utils.dates import gregorian_to_jalali, to_datetime
from clinic_calendar.utils.numeric import to_persian_digits

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "jYYYY/jMM/jDD"
INVALID_DATE_TEXT = "تاریخ نامعتبر"
INVALID_TIME_TEXT = "زمان نامعتبر"

# Alternation order is the match priority: longer tokens first.
_TOKEN_RE = re.compile(r"jYYYY|jYY|jMMMM|jMMM|jMM|jM|jDD|jD")

_LONG_PERSIAN = FormatOptions(format="long", locale="fa")
_EXCEL_DATE = FormatOptions(separator="/", locale="en")

PatternOrOptions = str | FormatOptions | Mapping[str, object] | None


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _token_values(jalali: JalaliDate) -> dict[str, str]:
    year = str(jalali.year)
    return {
        "jYYYY": year,
        "jYY": year[-2:],
        "jMMMM": jalali.month_name,
        "jMMM": jalali.month_name[:3],
        "jMM": f"{jalali.month:02d}",
        "jM": str(jalali.month),
        "jDD": f"{jalali.day:02d}",
        "jD": str(jalali.day),
    }


def render_pattern(jalali: JalaliDate, pattern: str) -> str:
    values = _token_values(jalali)
    return _TOKEN_RE.sub(lambda match: values[match.group(0)], pattern)


def render_options(jalali: JalaliDate, options: FormatOptions) -> str:
    persian = options.is_persian
    digits = to_persian_digits if persian else str
    name = jalali.month_name if persian else jalali.month_name_en
    year = digits(str(jalali.year))
    month = digits(f"{jalali.month:02d}")
    day = digits(f"{jalali.day:02d}")
    sep = options.separator

    if options.format == "long":
        return f"{day} {name} {year}"
    if options.format == "short":
        return f"{day} {name[:3]} {year}"
    if options.include_month_name:
        return f"{year}{sep}{month} ({name}){sep}{day}"
    return f"{year}{sep}{month}{sep}{day}"


def _coerce_options(
    options: FormatOptions | Mapping[str, object] | None,
) -> FormatOptions:
    if options is None:
        return FormatOptions()
    if isinstance(options, FormatOptions):
        return options
    if isinstance(options, Mapping):
        return FormatOptions.from_mapping(options)
    raise TypeError(f"Unsupported format options: {options!r}")


def format_jalali(
    value: object,
    pattern_or_options: PatternOrOptions = None,
) -> str:
    """Render a civil date value as Jalali text.

    A string second argument is a token pattern (``jYYYY``, ``jMM``, ...);
    anything else is treated as format options. Returns an empty string
    when the value cannot be rendered.
    """
    if _is_blank(value):
        return ""
    try:
        jalali = gregorian_to_jalali(value)
        if isinstance(pattern_or_options, str):
            return render_pattern(jalali, pattern_or_options)
        return render_options(jalali, _coerce_options(pattern_or_options))
    except (CalendarError, ValueError, TypeError):
        logger.warning("Failed to format Jalali date from %r", value)
        return ""


def to_jalali(value: object, pattern: str = DEFAULT_PATTERN) -> str:
    return format_jalali(value, pattern)


def format_jalali_date(
    value: object,
    options: FormatOptions | Mapping[str, object] | None = None,
) -> str:
    return format_jalali(value, options or FormatOptions())


def format_jalali_datetime(
    value: object,
    pattern_or_options: PatternOrOptions = None,
    with_seconds: bool = False,
) -> str:
    if _is_blank(value):
        return ""
    try:
        dt = to_datetime(value)
    except CalendarError:
        logger.warning("Failed to format Jalali datetime from %r", value)
        return ""
    date_text = format_jalali(dt, pattern_or_options)
    if not date_text:
        return ""
    clock = f"{dt:%H:%M:%S}" if with_seconds else f"{dt:%H:%M}"
    return f"{date_text} {clock}"


def format_date(value: object) -> str:
    if _is_blank(value):
        return ""
    return format_jalali(value, _LONG_PERSIAN) or INVALID_DATE_TEXT


def format_date_time(value: object) -> str:
    if _is_blank(value):
        return ""
    try:
        dt = to_datetime(value)
    except CalendarError:
        logger.warning("Failed to format datetime from %r", value)
        return INVALID_DATE_TEXT
    date_text = format_jalali(dt, _LONG_PERSIAN)
    if not date_text:
        return INVALID_DATE_TEXT
    return f"{date_text} - {dt:%H:%M}"


def format_time(value: object) -> str:
    if _is_blank(value):
        return ""
    try:
        dt = to_datetime(value)
    except CalendarError:
        logger.warning("Failed to format time from %r", value)
        return INVALID_TIME_TEXT
    return f"{dt:%H:%M}"


def format_date_for_input(value: object) -> str:
    if _is_blank(value):
        return ""
    try:
        dt = to_datetime(value)
    except CalendarError:
        logger.warning("Failed to format input date from %r", value)
        return ""
    return dt.date().isoformat()


def format_date_for_excel(value: object) -> str:
    return format_jalali(value, _EXCEL_DATE)


def format_datetime_for_excel(value: object) -> str:
    return format_jalali_datetime(value, _EXCEL_DATE, with_seconds=True)


def current_jalali_date(
    pattern: str = DEFAULT_PATTERN, today: date | None = None
) -> str:
    return format_jalali(today or date.today(), pattern)


def relative_time(value: object, now: datetime | None = None) -> str:
    if _is_blank(value):
        return ""
    try:
        dt = to_datetime(value)
        reference = now or datetime.now(dt.tzinfo)
        seconds = math.floor((reference - dt).total_seconds())
    except (CalendarError, TypeError):
        logger.warning("Failed to compute relative time for %r", value)
        return ""

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30
    years = days // 365

    if seconds < 60:
        return "همین الان"
    if minutes < 60:
        return f"{minutes} دقیقه پیش"
    if hours < 24:
        return f"{hours} ساعت پیش"
    if days < 30:
        return f"{days} روز پیش"
    if months < 12:
        return f"{months} ماه پیش"
    return f"{years} سال پیش"

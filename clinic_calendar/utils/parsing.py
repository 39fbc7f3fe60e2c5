from __future__ import annotations

import logging
import re
from datetime import date

from clinic_calendar.models.calendar import CivilDate
from clinic_calendar.models.errors import JalaliParseError, ParseErrorKind
from clinic_calendar.utils.dates import jalali_to_gregorian
from clinic_calendar.utils.numeric import to_english_digits

logger = logging.getLogger(__name__)

MIN_JALALI_YEAR = 1300
MAX_JALALI_YEAR = 1500

_NUMBER_RE = re.compile(r"\d+", re.ASCII)


def parse_jalali_civil(text: str) -> CivilDate:
    """Turn ``YYYY/MM/DD`` Jalali text into a real civil date.

    The range check is deliberately coarse: day 31 is accepted for any
    month, and the converter carries it into the next month.
    """
    if text is None or not str(text).strip():
        raise JalaliParseError(ParseErrorKind.EMPTY, "")
    raw = str(text)
    parts = [part.strip() for part in to_english_digits(raw).split("/")]
    if len(parts) != 3 or not all(_NUMBER_RE.fullmatch(p) for p in parts):
        raise JalaliParseError(ParseErrorKind.MALFORMED, raw)

    year, month, day = (int(part) for part in parts)
    if (
        year < MIN_JALALI_YEAR
        or year > MAX_JALALI_YEAR
        or month < 1
        or month > 12
        or day < 1
        or day > 31
    ):
        raise JalaliParseError(ParseErrorKind.OUT_OF_RANGE, raw)

    civil = jalali_to_gregorian(year, month, day)
    try:
        civil.to_date()
    except ValueError as exc:
        raise JalaliParseError(ParseErrorKind.INVALID_RESULT, raw) from exc
    return civil


def parse_jalali(text: str) -> str:
    """Return the Gregorian ISO date for Jalali text, or ``""``."""
    try:
        return parse_jalali_civil(text).isoformat()
    except JalaliParseError as exc:
        if exc.kind is ParseErrorKind.INVALID_RESULT:
            logger.warning("Jalali date %r has no Gregorian match", text)
        else:
            logger.debug("Rejected Jalali date %r (%s)", text, exc.kind.value)
        return ""
    except Exception:  # noqa: BLE001
        logger.exception("Error parsing Jalali date %r", text)
        return ""


def parse_jalali_date(text: str) -> date | None:
    iso = parse_jalali(text)
    return date.fromisoformat(iso) if iso else None


def to_gregorian(text: str) -> date:
    """Like :func:`parse_jalali_date` but falls back to today."""
    return parse_jalali_date(text) or date.today()

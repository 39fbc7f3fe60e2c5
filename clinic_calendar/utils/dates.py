from __future__ import annotations

import math
from datetime import date, datetime

from clinic_calendar.models.calendar import CivilDate, JalaliDate
from clinic_calendar.models.errors import JalaliDateError
from clinic_calendar.utils.calendar_tables import (
    PERSIAN_DAYS,
    PERSIAN_MONTHS,
    PERSIAN_MONTHS_EN,
    sunday_first_index,
)
from clinic_calendar.utils.leap import is_gregorian_leap, is_jalali_leap
from clinic_calendar.utils.numeric import to_english_digits

_G_DAYS_BEFORE_MONTH = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def _gregorian_to_jalali(gy: int, gm: int, gd: int) -> tuple[int, int, int]:
    if gm < 1 or gm > 12:
        raise JalaliDateError(f"Gregorian month out of range: {gm}")

    if gy > 1600:
        jy = 979
        gy -= 1600
    else:
        jy = 0
        gy -= 621

    gy2 = gy + 1 if gm > 2 else gy
    days = (
        365 * gy
        + (gy2 + 3) // 4
        - (gy2 + 99) // 100
        + (gy2 + 399) // 400
        - 80
        + gd
        + _G_DAYS_BEFORE_MONTH[gm - 1]
    )

    jy += 33 * (days // 12053)
    days %= 12053
    jy += 4 * (days // 1461)
    days %= 1461

    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365

    if days < 186:
        jm = 1 + days // 31
        jd = 1 + days % 31
    else:
        jm = 7 + (days - 186) // 30
        jd = 1 + (days - 186) % 30

    return jy, jm, jd


def _jalali_to_gregorian(jy: int, jm: int, jd: int) -> tuple[int, int, int]:
    if jy > 979:
        gy = 1600
        jy -= 979
    else:
        gy = 621

    days = (
        365 * jy
        + (jy // 33) * 8
        + ((jy % 33) + 3) // 4
        + 78
        + jd
    )
    if jm < 7:
        days += (jm - 1) * 31
    else:
        days += ((jm - 7) * 30) + 186

    gy += 400 * (days // 146097)
    days %= 146097

    if days > 36524:
        days -= 1
        gy += 100 * (days // 36524)
        days %= 36524
        if days >= 365:
            days += 1

    gy += 4 * (days // 1461)
    days %= 1461

    if days > 365:
        gy += (days - 1) // 365
        days = (days - 1) % 365

    gd = days + 1
    g_d_m = [
        0,
        31,
        29 if is_gregorian_leap(gy) else 28,
        31,
        30,
        31,
        30,
        31,
        31,
        30,
        31,
        30,
        31,
    ]
    gm = 1
    while gm <= 12 and gd > g_d_m[gm]:
        gd -= g_d_m[gm]
        gm += 1

    return gy, gm, gd


def jalali_month_days(jy: int, jm: int) -> int:
    if jm <= 6:
        return 31
    if jm <= 11:
        return 30
    return 30 if is_jalali_leap(jy) else 29


def to_datetime(value: object) -> datetime:
    if value is None:
        raise JalaliDateError("No date value")
    if isinstance(value, (tuple, list)):
        value = to_civil_date(value)
    if isinstance(value, CivilDate):
        try:
            return datetime(value.year, value.month, value.day)
        except ValueError as exc:
            raise JalaliDateError(str(exc)) from exc
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise JalaliDateError(f"Unsupported date value: {value!r}")
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise JalaliDateError(f"Invalid timestamp: {value!r}")
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as exc:
            raise JalaliDateError(f"Invalid timestamp: {value!r}") from exc
    if isinstance(value, str):
        text = to_english_digits(value).strip()
        if not text:
            raise JalaliDateError("Empty date string")
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise JalaliDateError(f"Unparseable date: {value!r}") from exc
    raise JalaliDateError(f"Unsupported date value: {value!r}")


def to_civil_date(value: object) -> CivilDate:
    if isinstance(value, CivilDate):
        return value
    if isinstance(value, (tuple, list)):
        if len(value) != 3:
            raise JalaliDateError(f"Expected (year, month, day): {value!r}")
        try:
            year, month, day = (int(part) for part in value)
        except (TypeError, ValueError) as exc:
            raise JalaliDateError(f"Non-numeric date part: {value!r}") from exc
        return CivilDate(year, month, day)
    dt = to_datetime(value)
    return CivilDate(dt.year, dt.month, dt.day)


def gregorian_to_jalali(value: object) -> JalaliDate:
    civil = to_civil_date(value)
    jy, jm, jd = _gregorian_to_jalali(civil.year, civil.month, civil.day)
    return JalaliDate(
        year=jy,
        month=jm,
        day=jd,
        month_name=PERSIAN_MONTHS[jm - 1],
        month_name_en=PERSIAN_MONTHS_EN[jm - 1],
    )


def jalali_to_gregorian(jy: int, jm: int, jd: int) -> CivilDate:
    """Map a Jalali year/month/day to a civil date.

    Components are not range-checked; out-of-range input gives an
    out-of-range result. Use the parser for user-typed text.
    """
    return CivilDate(*_jalali_to_gregorian(jy, jm, jd))


def jalali_today(today: date | None = None) -> JalaliDate:
    return gregorian_to_jalali(today or date.today())


def persian_day_name(value: object) -> str:
    civil = to_civil_date(value)
    try:
        weekday = civil.to_date().weekday()
    except ValueError as exc:
        raise JalaliDateError(str(exc)) from exc
    return PERSIAN_DAYS[sunday_first_index(weekday)]

from __future__ import annotations

PERSIAN_MONTHS = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)

PERSIAN_MONTHS_EN = (
    "Farvardin",
    "Ordibehesht",
    "Khordad",
    "Tir",
    "Mordad",
    "Shahrivar",
    "Mehr",
    "Aban",
    "Azar",
    "Dey",
    "Bahman",
    "Esfand",
)

# Sunday first.
PERSIAN_DAYS = (
    "یکشنبه",
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنج‌شنبه",
    "جمعه",
    "شنبه",
)

PERSIAN_DAYS_SHORT = ("ی", "د", "س", "چ", "پ", "ج", "ش")


def persian_month_name(month: int, locale: str = "en") -> str:
    if month < 1 or month > 12:
        raise ValueError("Month number must be between 1 and 12")
    names = PERSIAN_MONTHS if locale == "fa" else PERSIAN_MONTHS_EN
    return names[month - 1]


def sunday_first_index(python_weekday: int) -> int:
    return (python_weekday + 1) % 7

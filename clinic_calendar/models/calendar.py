from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from clinic_calendar.utils.leap import is_jalali_leap

FORMAT_KINDS = ("numeric", "short", "long")

_LOCALE_ALIASES = {
    "fa": "fa",
    "persian": "fa",
    "farsi": "fa",
    "en": "en",
    "english": "en",
}


def normalize_locale(value: str) -> str:
    key = (value or "").strip().lower()
    if key not in _LOCALE_ALIASES:
        raise ValueError(f"Unsupported numeral locale: {value!r}")
    return _LOCALE_ALIASES[key]


@dataclass(frozen=True)
class CivilDate:
    """Proleptic Gregorian year/month/day, never validated on creation."""

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "CivilDate":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class JalaliDate:
    year: int
    month: int
    day: int
    month_name: str
    month_name_en: str

    @property
    def is_leap(self) -> bool:
        return is_jalali_leap(self.year)

    def as_tuple(self) -> tuple[int, int, int]:
        return self.year, self.month, self.day


@dataclass(frozen=True)
class FormatOptions:
    separator: str = "/"
    locale: str = "fa"
    format: str = "numeric"
    include_month_name: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "locale", normalize_locale(self.locale))

    @property
    def is_persian(self) -> bool:
        return self.locale == "fa"

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "FormatOptions":
        include = data.get("include_month_name")
        if include is None:
            include = data.get("includeMonthName", False)
        return cls(
            separator=str(data.get("separator", "/")),
            locale=str(data.get("locale", "fa")),
            format=str(data.get("format", "numeric")),
            include_month_name=bool(include),
        )

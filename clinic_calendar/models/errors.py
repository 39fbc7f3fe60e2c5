from __future__ import annotations

from enum import Enum


class CalendarError(Exception):
    pass


class JalaliDateError(CalendarError, ValueError):
    """Raised when a value cannot be turned into a civil date."""


class ParseErrorKind(str, Enum):
    EMPTY = "empty"
    MALFORMED = "malformed"
    OUT_OF_RANGE = "out_of_range"
    INVALID_RESULT = "invalid_result"


class JalaliParseError(CalendarError, ValueError):
    def __init__(self, kind: ParseErrorKind, text: str = "") -> None:
        self.kind = kind
        self.text = text
        super().__init__(f"{kind.value}: {text!r}")


class ExportError(CalendarError):
    pass

import logging
from datetime import date

import pytest

from clinic_calendar.models.calendar import CivilDate
from clinic_calendar.models.errors import JalaliParseError, ParseErrorKind
from clinic_calendar.utils.formatting import to_jalali
from clinic_calendar.utils.parsing import (
    parse_jalali,
    parse_jalali_civil,
    parse_jalali_date,
    to_gregorian,
)


def test_parse_ascii_digits():
    assert parse_jalali("1402/07/11") == "2023-10-03"
    assert parse_jalali("1400/01/01") == "2021-03-21"


def test_persian_and_arabic_digits_match_ascii():
    expected = parse_jalali("1402/07/11")
    assert parse_jalali("۱۴۰۲/۰۷/۱۱") == expected
    assert parse_jalali("١٤٠٢/٠٧/١١") == expected


def test_whitespace_and_unpadded_parts():
    assert parse_jalali(" 1402 / 7 / 11 ") == "2023-10-03"


def test_leap_day():
    assert parse_jalali("1403/12/30") == "2025-03-20"


@pytest.mark.parametrize(
    "text",
    [
        "1402/13/01",
        "1402/00/10",
        "1402/07/00",
        "1402/07/32",
        "1299/12/29",
        "1501/01/01",
    ],
)
def test_out_of_range_rejected(text):
    assert parse_jalali(text) == ""


def test_range_bounds_are_inclusive():
    assert parse_jalali("1300/01/01") != ""
    assert parse_jalali("1500/12/29") != ""


@pytest.mark.parametrize(
    "text",
    ["", "   ", "1402-07-11", "1402/07", "1402/07/11/01", "1402/07/aa",
     "1402/-7/11", "1402//11", None],
)
def test_malformed_rejected(text):
    assert parse_jalali(text) == ""


def test_coarse_day_check_rolls_into_next_month():
    # Mehr has 30 days; day 31 is accepted and lands on 1 Aban.
    assert parse_jalali("1402/07/31") == parse_jalali("1402/08/01")


def test_error_kinds():
    with pytest.raises(JalaliParseError) as empty:
        parse_jalali_civil("")
    assert empty.value.kind is ParseErrorKind.EMPTY

    with pytest.raises(JalaliParseError) as malformed:
        parse_jalali_civil("1402.07.11")
    assert malformed.value.kind is ParseErrorKind.MALFORMED

    with pytest.raises(JalaliParseError) as out_of_range:
        parse_jalali_civil("1402/13/01")
    assert out_of_range.value.kind is ParseErrorKind.OUT_OF_RANGE


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_jalali_civil("nope")


def test_rejections_are_logged_at_debug(caplog):
    logger_name = "clinic_calendar.utils.parsing"
    with caplog.at_level(logging.DEBUG, logger=logger_name):
        parse_jalali("1402/13/01")
    assert any(record.levelno == logging.DEBUG for record in caplog.records)


def test_parse_jalali_civil_returns_civil_date():
    assert parse_jalali_civil("1400/01/01") == CivilDate(2021, 3, 21)


def test_parse_then_format_round_trip():
    for text in ("1399/12/30", "1401/06/31", "1404/07/11", "1478/11/30"):
        assert to_jalali(parse_jalali(text)) == text


def test_parse_jalali_date():
    assert parse_jalali_date("1400/01/01") == date(2021, 3, 21)
    assert parse_jalali_date("bad") is None


def test_to_gregorian_falls_back_to_today():
    assert to_gregorian("1400/01/01") == date(2021, 3, 21)
    assert to_gregorian("bad") == date.today()

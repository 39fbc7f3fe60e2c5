from datetime import date, datetime

import pytest
from openpyxl import load_workbook

from clinic_calendar.models.errors import ExportError
from clinic_calendar.utils.excel import (
    autofit_columns,
    ensure_sheet_ltr,
    export_rows_excel,
)


@pytest.fixture
def appointment_rows():
    return [
        {
            "Patient Name": "Ali Rezaei",
            "Date": date(2021, 3, 21),
            "Created At": datetime(2021, 3, 21, 8, 15, 0),
        },
        {
            "Patient Name": "Sara Ahmadi",
            "Date": None,
            "Created At": datetime(2025, 3, 20, 23, 59, 59),
        },
    ]


def test_export_renders_jalali_columns(tmp_path, appointment_rows):
    path = tmp_path / "appointments.xlsx"
    export_rows_excel(
        path,
        appointment_rows,
        date_columns=["Date"],
        datetime_columns=["Created At"],
        sheet_name="Appointments",
    )

    ws = load_workbook(path)["Appointments"]
    assert [cell.value for cell in ws[1]] == [
        "Patient Name",
        "Date",
        "Created At",
    ]
    assert ws["A2"].value == "Ali Rezaei"
    assert ws["B2"].value == "1400/01/01"
    assert ws["C2"].value == "1400/01/01 08:15:00"
    assert ws["C3"].value == "1403/12/30 23:59:59"
    assert ws.sheet_view.rightToLeft


def test_export_sets_column_widths(tmp_path, appointment_rows):
    path = tmp_path / "widths.xlsx"
    export_rows_excel(path, appointment_rows, date_columns=["Date"])
    ws = load_workbook(path).active
    assert ws.column_dimensions["A"].width >= 12


def test_export_left_to_right(tmp_path, appointment_rows):
    path = tmp_path / "ltr.xlsx"
    export_rows_excel(path, appointment_rows, right_to_left=False)
    assert not load_workbook(path).active.sheet_view.rightToLeft


def test_sheet_title_is_sanitized(tmp_path, appointment_rows):
    path = tmp_path / "title.xlsx"
    export_rows_excel(path, appointment_rows, sheet_name="1404/01: report")
    assert load_workbook(path).sheetnames == ["1404_01_ report"]


def test_export_without_rows_fails(tmp_path):
    with pytest.raises(ExportError, match="No data to export"):
        export_rows_excel(tmp_path / "empty.xlsx", [])


def test_export_unknown_column_fails(tmp_path, appointment_rows):
    with pytest.raises(ExportError):
        export_rows_excel(
            tmp_path / "bad.xlsx", appointment_rows, date_columns=["Missing"]
        )


def test_post_processing_skips_missing_file(tmp_path):
    missing = tmp_path / "missing.xlsx"
    ensure_sheet_ltr(missing)
    autofit_columns(missing)
    assert not missing.exists()

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import pandas as pd
from openpyxl import load_workbook

from clinic_calendar.models.errors import ExportError
from clinic_calendar.utils.formatting import (
    format_date_for_excel,
    format_datetime_for_excel,
)

logger = logging.getLogger(__name__)


def _ensure_sheet_direction(path: str | Path, right_to_left: bool) -> None:
    try:
        workbook = load_workbook(path)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to open %s for sheet direction", path)
        return
    for worksheet in workbook.worksheets:
        worksheet.sheet_view.rightToLeft = right_to_left
    try:
        workbook.save(path)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to save sheet direction for %s", path)


def ensure_sheet_ltr(path: str | Path) -> None:
    _ensure_sheet_direction(path, right_to_left=False)


def ensure_sheet_rtl(path: str | Path) -> None:
    _ensure_sheet_direction(path, right_to_left=True)


def autofit_columns(
    path: str | Path, min_width: int = 8, max_width: int = 50
) -> None:
    try:
        workbook = load_workbook(path)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to open %s for column auto-fit", path)
        return
    for worksheet in workbook.worksheets:
        for column_cells in worksheet.columns:
            max_len = 0
            column_letter = column_cells[0].column_letter
            for cell in column_cells:
                value = cell.value
                if value is None:
                    continue
                text_len = len(str(value).replace("\n", " "))
                if text_len > max_len:
                    max_len = text_len
            if max_len == 0:
                continue
            width = min(max(max_len + 2, min_width), max_width)
            worksheet.column_dimensions[column_letter].width = width
    try:
        workbook.save(path)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to save column widths for %s", path)


def _sanitize_sheet_title(value: str) -> str:
    invalid = set(r"[]:*?/\\")
    cleaned = "".join("_" if ch in invalid else ch for ch in value)
    cleaned = cleaned.strip()
    return cleaned[:31] if cleaned else "Sheet1"


def _render_column(series: pd.Series, renderer) -> pd.Series:  # noqa: ANN001
    return series.map(lambda value: "" if pd.isna(value) else renderer(value))


def export_rows_excel(
    file_path: str | Path,
    rows: Iterable[Mapping[str, object]],
    *,
    date_columns: Iterable[str] = (),
    datetime_columns: Iterable[str] = (),
    sheet_name: str = "Sheet1",
    right_to_left: bool = True,
) -> None:
    """Write rows to an .xlsx file with the given columns shown as Jalali.

    Stored values stay Gregorian; only the exported text is converted.
    """
    records = [dict(row) for row in rows]
    if not records:
        raise ExportError("No data to export")

    df = pd.DataFrame.from_records(records)
    for columns, renderer in (
        (date_columns, format_date_for_excel),
        (datetime_columns, format_datetime_for_excel),
    ):
        for column in columns:
            if column not in df.columns:
                raise ExportError(f"Unknown date column: {column}")
            df[column] = _render_column(df[column].astype(object), renderer)

    try:
        df.to_excel(
            file_path,
            index=False,
            sheet_name=_sanitize_sheet_title(sheet_name),
            engine="openpyxl",
        )
    except OSError as exc:
        raise ExportError(f"Failed to write {file_path}: {exc}") from exc

    _ensure_sheet_direction(file_path, right_to_left)
    autofit_columns(file_path, min_width=12, max_width=60)

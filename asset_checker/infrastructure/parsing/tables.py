"""Readers turning spreadsheet files into raw tables (header row + data rows)."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pandas as pd

from asset_checker.domain.repositories import RawTable

ENGINES = {".xlsx": "openpyxl", ".xlsm": "openpyxl", ".xls": "xlrd"}


def detect_format(name: str | Path) -> str:
    suffix = Path(str(name)).suffix.lower()
    if suffix == ".csv":
        return ".csv"
    if suffix in ENGINES:
        return suffix
    raise ValueError(f"Unsupported table format: {suffix or name!r}")


def _list_sheets(source: BytesIO, engine: str) -> list[str]:
    xls = pd.ExcelFile(source, engine=engine)
    return xls.sheet_names


def _pick_sheet(source: BytesIO, engine: str, preferred: str | None) -> str | int:
    sheets = _list_sheets(source, engine)
    if not sheets:
        raise ValueError("Workbook has no sheets")
    if not preferred:
        return sheets[0]
    if preferred in sheets:
        return preferred
    lower_map = {name.lower(): name for name in sheets}
    if preferred.lower() in lower_map:
        return lower_map[preferred.lower()]
    for name in sheets:
        if preferred.lower() in name.lower():
            return name
    return sheets[0]


def _frame_to_table(frame: pd.DataFrame) -> list[list[object]]:
    return frame.values.tolist()


def read_table(data: bytes, file_format: str, sheet_name: str | None = None) -> RawTable:
    if file_format == ".csv":
        frame = pd.read_csv(BytesIO(data), header=None, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        return _frame_to_table(frame)

    engine = ENGINES[file_format]
    sheet = _pick_sheet(BytesIO(data), engine, sheet_name)
    frame = pd.read_excel(
        BytesIO(data),
        sheet_name=sheet,
        engine=engine,
        header=None,
        dtype=str,
        keep_default_na=False,
    )
    return _frame_to_table(frame)

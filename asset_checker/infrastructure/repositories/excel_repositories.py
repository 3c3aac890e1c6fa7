"""Spreadsheet-backed repositories for roster and daily report tables."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

from asset_checker.domain.repositories import (
    RawTable,
    ReportsTableRepository,
    RosterTableRepository,
)
from asset_checker.infrastructure.parsing.tables import detect_format, read_table
from asset_checker.infrastructure.parsing.utils import ensure_bytes


class _SpreadsheetSource:
    def __init__(
        self,
        source: BytesIO | Path | bytes | str,
        file_format: str | None = None,
        sheet_name: str | None = None,
    ) -> None:
        if isinstance(source, str):
            source = Path(source)
        if file_format is None:
            if not isinstance(source, Path):
                raise ValueError("file_format is required for in-memory sources")
            file_format = detect_format(source)
        self._source = ensure_bytes(source)
        self._format = file_format
        self._sheet_name = sheet_name

    def _read(self) -> RawTable:
        return read_table(self._source, self._format, self._sheet_name)


class SpreadsheetRosterRepository(_SpreadsheetSource, RosterTableRepository):
    def get_roster_table(self) -> RawTable:
        return self._read()


class SpreadsheetReportsRepository(_SpreadsheetSource, ReportsTableRepository):
    def get_reports_table(self) -> RawTable:
        return self._read()

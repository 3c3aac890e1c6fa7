"""In-memory table repositories, for callers that already hold the rows."""
from __future__ import annotations

from asset_checker.domain.repositories import (
    RawTable,
    ReportsTableRepository,
    RosterTableRepository,
)


class InMemoryRosterRepository(RosterTableRepository):
    def __init__(self, table: RawTable) -> None:
        self._table = [list(row) for row in table]

    def get_roster_table(self) -> RawTable:
        return self._table


class InMemoryReportsRepository(ReportsTableRepository):
    def __init__(self, table: RawTable) -> None:
        self._table = [list(row) for row in table]

    def get_reports_table(self) -> RawTable:
        return self._table

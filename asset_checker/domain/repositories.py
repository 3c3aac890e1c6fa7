"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

RawTable = Sequence[Sequence[object]]


class RosterTableRepository(Protocol):
    """Provides the roster table: a header row followed by assignment rows."""

    def get_roster_table(self) -> RawTable:
        ...


class ReportsTableRepository(Protocol):
    """Provides the daily reports table: a header row followed by submissions."""

    def get_reports_table(self) -> RawTable:
        ...

"""Application-level DTOs for the daily asset report."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from asset_checker.application.filters import StatusFilter, filter_rows
from asset_checker.domain.results import CombinedRow, ReconciliationSummary


@dataclass(slots=True, frozen=True)
class AssetsReportRequest:
    target_date: date
    status: StatusFilter = StatusFilter.ALL
    name: str = ""


@dataclass(slots=True, frozen=True)
class AssetsReportResponse:
    target_date: date
    rows: Sequence[CombinedRow]
    visible_rows: Sequence[CombinedRow]
    summary: ReconciliationSummary

    @classmethod
    def build(cls, request: AssetsReportRequest, rows: Sequence[CombinedRow]) -> "AssetsReportResponse":
        return cls(
            target_date=request.target_date,
            rows=tuple(rows),
            visible_rows=tuple(filter_rows(rows, request.status, request.name)),
            summary=ReconciliationSummary.from_rows(rows),
        )

    @property
    def is_filtered(self) -> bool:
        return len(self.visible_rows) != len(self.rows)

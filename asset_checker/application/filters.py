"""Row filters used by dashboards and the CLI."""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from asset_checker.domain.results import CombinedRow


class StatusFilter(str, Enum):
    ALL = "all"
    NO_REPORT = "no-report"
    ANOMALIES = "anomalies"
    BOTH = "both"

    def matches(self, row: CombinedRow) -> bool:
        if self is StatusFilter.NO_REPORT:
            return not row.has_report
        if self is StatusFilter.ANOMALIES:
            return row.has_report and row.result.has_anomalies()
        if self is StatusFilter.BOTH:
            return not row.has_report or row.result.has_anomalies()
        return True


def filter_rows(
    rows: Sequence[CombinedRow],
    status: StatusFilter | str = StatusFilter.ALL,
    name: str = "",
) -> list[CombinedRow]:
    status = StatusFilter(status)
    needle = name.strip().casefold()
    return [
        row
        for row in rows
        if (not needle or needle in row.metadata.full_name.casefold()) and status.matches(row)
    ]

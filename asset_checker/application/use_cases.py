"""Application services orchestrating the daily asset report workflow."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from asset_checker.config import SETTINGS, Settings
from asset_checker.domain.models import ReportRecord
from asset_checker.domain.repositories import (
    RawTable,
    ReportsTableRepository,
    RosterTableRepository,
)
from asset_checker.domain.results import CombinedRow
from asset_checker.domain.services import RowComposer
from asset_checker.infrastructure.parsing.normalizer import normalize_assignments, normalize_reports
from asset_checker.infrastructure.parsing.utils import local_date

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AssetsReportContext:
    roster_repository: RosterTableRepository
    reports_repository: ReportsTableRepository
    composer: RowComposer = field(default_factory=RowComposer)
    settings: Settings = SETTINGS


def _as_date(target: date) -> date:
    return target.date() if isinstance(target, datetime) else target


def filter_reports_by_date(
    reports: Sequence[ReportRecord],
    target: date,
    timezone_name: str | None = None,
) -> list[ReportRecord]:
    """Keep reports submitted on ``target``, compared by local calendar day."""
    target = _as_date(target)
    return [
        report
        for report in reports
        if report.submitted_at is not None and local_date(report.submitted_at, timezone_name) == target
    ]


class FetchAssetsReportUseCase:
    def __init__(self, context: AssetsReportContext) -> None:
        self._context = context

    def _fetch_tables(self) -> tuple[RawTable, RawTable]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            roster_future = executor.submit(self._context.roster_repository.get_roster_table)
            reports_future = executor.submit(self._context.reports_repository.get_reports_table)
            return roster_future.result(), reports_future.result()

    def execute(self, target: date) -> list[CombinedRow]:
        target = _as_date(target)
        settings = self._context.settings
        roster_table, reports_table = self._fetch_tables()

        assignments = normalize_assignments(roster_table, settings=settings)
        all_reports = normalize_reports(reports_table, settings=settings)
        reports = filter_reports_by_date(all_reports, target, settings.local_timezone)
        logger.info(
            "Reconciling %d roster entries against %d of %d report(s) for %s",
            len(assignments),
            len(reports),
            len(all_reports),
            target.isoformat(),
        )
        return self._context.composer.compose(assignments, reports)


def fetch_assets_report_table_data(target: date | str, context: AssetsReportContext) -> list[CombinedRow]:
    if isinstance(target, str):
        target = date.fromisoformat(target)
    return FetchAssetsReportUseCase(context).execute(target)

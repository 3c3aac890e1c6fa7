"""Domain services implementing reconciliation and row composition."""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .models import AnomalyType, AssetSet, AssignmentRecord, FieldAnomaly, ReportRecord
from .results import CombinedRow, ReconciliationResult
from .rules import RECONCILIATION_RULES, FieldRule

logger = logging.getLogger(__name__)


class AssetReconciler:
    """Compares one person's assignment with their report for a single date."""

    def __init__(self, rules: Sequence[FieldRule] | None = None) -> None:
        self._rules = tuple(RECONCILIATION_RULES if rules is None else rules)

    def reconcile(self, assignment: AssignmentRecord, report: ReportRecord | None) -> ReconciliationResult:
        if report is None:
            return ReconciliationResult.no_report()

        assigned = assignment.assigned_assets
        if assigned is None:
            logger.warning(
                "Assignment for %s has no asset set; skipping field checks",
                assignment.personal_number,
            )
            return ReconciliationResult(anomalies=(), field_anomalies={}, has_report=True)

        reported = report.values
        anomalies: list[AnomalyType] = []
        field_anomalies: dict[str, FieldAnomaly] = {}
        for rule in self._rules:
            if not rule.evaluate(assigned, reported):
                continue
            anomalies.append(rule.anomaly)
            field_anomalies[rule.field] = FieldAnomaly(
                type=rule.anomaly,
                message=rule.message(assigned.get(rule.field), reported.get(rule.field)),
            )

        return ReconciliationResult(
            anomalies=tuple(anomalies),
            field_anomalies=field_anomalies,
            has_report=True,
        )


class RowComposer:
    """Joins roster assignments with the reports of one date."""

    def __init__(self, reconciler: AssetReconciler | None = None) -> None:
        self._reconciler = reconciler or AssetReconciler()

    def compose(self, assignments: Sequence[AssignmentRecord], reports: Sequence[ReportRecord]) -> list[CombinedRow]:
        report_map = self._to_map(reports)
        rows: list[CombinedRow] = []
        for assignment in assignments:
            report = report_map.get(assignment.personal_number)
            rows.append(
                CombinedRow(
                    metadata=assignment.metadata,
                    assigned_assets=assignment.assigned_assets,
                    reported_assets=report.values if report is not None else AssetSet.empty(),
                    result=self._reconciler.reconcile(assignment, report),
                )
            )

        dropped = len(report_map.keys() - {a.personal_number for a in assignments})
        if dropped:
            logger.info("Dropped %d report(s) with no matching roster entry", dropped)
        return rows

    @staticmethod
    def _to_map(reports: Sequence[ReportRecord]) -> Mapping[str, ReportRecord]:
        return {report.personal_number: report for report in reports}


def reconcile(assignment: AssignmentRecord, report: ReportRecord | None) -> ReconciliationResult:
    return AssetReconciler().reconcile(assignment, report)


def compose(assignments: Sequence[AssignmentRecord], reports: Sequence[ReportRecord]) -> list[CombinedRow]:
    return RowComposer().compose(assignments, reports)

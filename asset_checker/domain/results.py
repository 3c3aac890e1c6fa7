"""Domain-level results for asset reconciliation."""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from .models import AnomalyType, AssetSet, FieldAnomaly, PersonMetadata


@dataclass(frozen=True)
class ReconciliationResult:
    anomalies: tuple[AnomalyType, ...] = ()
    field_anomalies: Mapping[str, FieldAnomaly] = field(default_factory=dict)
    has_report: bool = True

    @classmethod
    def no_report(cls) -> "ReconciliationResult":
        return cls(anomalies=(AnomalyType.NO_REPORT,), field_anomalies={}, has_report=False)

    def has_anomalies(self) -> bool:
        return bool(self.anomalies)


@dataclass(frozen=True)
class CombinedRow:
    """One person's assignment, report and reconciliation outcome."""

    metadata: PersonMetadata
    assigned_assets: AssetSet | None
    reported_assets: AssetSet
    result: ReconciliationResult

    @property
    def personal_number(self) -> str:
        return self.metadata.personal_number

    @property
    def anomalies(self) -> tuple[AnomalyType, ...]:
        return self.result.anomalies

    @property
    def field_anomalies(self) -> Mapping[str, FieldAnomaly]:
        return self.result.field_anomalies

    @property
    def has_report(self) -> bool:
        return self.result.has_report


@dataclass(frozen=True)
class ReconciliationSummary:
    total: int
    reported: int
    with_anomalies: int
    unreported: int
    completion_percentage: int
    anomaly_counts: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, rows: Sequence[CombinedRow]) -> "ReconciliationSummary":
        total = len(rows)
        reported = sum(1 for row in rows if row.has_report)
        counts: Counter[str] = Counter()
        for row in rows:
            counts.update(AnomalyType(kind).value for kind in row.anomalies)
        return cls(
            total=total,
            reported=reported,
            with_anomalies=sum(1 for row in rows if row.anomalies),
            unreported=total - reported,
            completion_percentage=math.floor(reported * 100 / total + 0.5) if total else 0,
            anomaly_counts=dict(counts),
        )

    def has_issues(self) -> bool:
        return self.with_anomalies > 0


def iter_unreported(rows: Iterable[CombinedRow]) -> Iterable[CombinedRow]:
    yield from (row for row in rows if not row.has_report)

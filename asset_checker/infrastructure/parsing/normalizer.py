"""Raw table normalizer producing canonical assignment and report records.

A raw table is a header row followed by data rows, as returned by a sheet
export. Columns are located through ``HeaderAliases`` so their order and
spelling may vary between sources.
"""
from __future__ import annotations

import logging
from typing import Callable, Sequence, TypeVar

from asset_checker.config import SETTINGS, Settings
from asset_checker.domain.models import (
    ASSET_FIELDS,
    AssetSet,
    AssignmentRecord,
    FieldKind,
    PersonMetadata,
    Quantity,
    ReportRecord,
)
from asset_checker.domain.repositories import RawTable
from asset_checker.exceptions import MalformedRowError
from asset_checker.infrastructure.parsing.headers import ColumnMapping, HeaderAliases
from asset_checker.infrastructure.parsing.utils import (
    parse_flag,
    parse_identifier,
    parse_quantity,
    parse_text,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

ROSTER_REQUIRED = ("personal_number", "full_name")
REPORTS_REQUIRED = ("personal_number",)

T = TypeVar("T")


def _extract_assets(
    row: Sequence[object],
    columns: ColumnMapping,
    quantity_default: Quantity | None,
    settings: Settings,
) -> AssetSet:
    values: dict[str, object] = {}
    for spec in ASSET_FIELDS:
        raw = columns.value(row, spec.name)
        if spec.kind is FieldKind.IDENTIFIER:
            values[spec.name] = parse_identifier(raw)
        elif spec.kind is FieldKind.FLAG:
            values[spec.name] = parse_flag(raw, settings.affirmative_tokens)
        else:
            values[spec.name] = parse_quantity(raw, quantity_default)
    return AssetSet(**values)


def _normalize(
    table: RawTable,
    required: Sequence[str],
    build: Callable[[Sequence[object], ColumnMapping], T | None],
    aliases: HeaderAliases | None,
    settings: Settings,
    kind: str,
) -> list[T]:
    if not table or len(table) < 2:
        logger.warning("No %s data or insufficient rows", kind)
        return []

    resolver = aliases or HeaderAliases(settings.header_aliases)
    columns = resolver.resolve(table[0], required=required)

    records: list[T] = []
    for idx, row in enumerate(table[1:], start=1):
        if not row:
            continue
        try:
            record = build(row, columns)
        except ValueError as exc:
            logger.error("Error transforming %s row %d: %r", kind, idx, list(row))
            raise MalformedRowError(idx, row, str(exc)) from exc
        if record is not None:
            records.append(record)
    logger.info("Normalized %d %s record(s) from %d data row(s)", len(records), kind, len(table) - 1)
    return records


def normalize_assignments(
    table: RawTable,
    aliases: HeaderAliases | None = None,
    settings: Settings = SETTINGS,
) -> list[AssignmentRecord]:
    """Turn a roster table into assignment records; unassigned counts become 0."""

    def build(row: Sequence[object], columns: ColumnMapping) -> AssignmentRecord | None:
        personal_number = parse_text(columns.value(row, "personal_number"))
        full_name = parse_text(columns.value(row, "full_name"))
        if not personal_number or not full_name:
            return None
        return AssignmentRecord(
            metadata=PersonMetadata(
                full_name=full_name,
                personal_number=personal_number,
                phone_number=parse_text(columns.value(row, "phone_number")),
            ),
            assigned_assets=_extract_assets(row, columns, 0, settings),
        )

    return _normalize(table, ROSTER_REQUIRED, build, aliases, settings, "roster")


def normalize_reports(
    table: RawTable,
    aliases: HeaderAliases | None = None,
    settings: Settings = SETTINGS,
) -> list[ReportRecord]:
    """Turn a reports table into report records; unreported counts stay ``None``."""

    def build(row: Sequence[object], columns: ColumnMapping) -> ReportRecord | None:
        personal_number = parse_text(columns.value(row, "personal_number"))
        if not personal_number:
            return None
        timestamp = parse_text(columns.value(row, "timestamp"))
        return ReportRecord(
            personal_number=personal_number,
            timestamp=timestamp,
            values=_extract_assets(row, columns, None, settings),
            submitted_at=parse_timestamp(timestamp, dayfirst=settings.timestamp_dayfirst),
        )

    return _normalize(table, REPORTS_REQUIRED, build, aliases, settings, "reports")

"""Discrepancy report generators for reconciled rows."""
from __future__ import annotations

import csv
import html
import io
from typing import Sequence

from asset_checker.domain.results import CombinedRow

STATUS_REPORTED = "reported"
STATUS_ANOMALY = "anomaly"
STATUS_MISSING = "missing"


def row_status(row: CombinedRow) -> str:
    if not row.has_report:
        return STATUS_MISSING
    if row.anomalies:
        return STATUS_ANOMALY
    return STATUS_REPORTED


def rows_to_records(rows: Sequence[CombinedRow]) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    for row in rows:
        metadata = row.metadata
        details = "; ".join(f"{name}: {anomaly.message}" for name, anomaly in row.field_anomalies.items())
        records.append(
            {
                "personal_number": metadata.personal_number,
                "full_name": metadata.full_name,
                "phone_number": metadata.phone_number,
                "status": row_status(row),
                "anomalies": ",".join(str(kind) for kind in row.anomalies),
                "details": details,
            }
        )
    return records


def render_csv(rows: Sequence[CombinedRow]) -> bytes:
    records = rows_to_records(rows)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(records[0].keys()) if records else [])
    if records:
        writer.writeheader()
        writer.writerows(records)
    return buffer.getvalue().encode("utf-8")


def render_html(rows: Sequence[CombinedRow]) -> str:
    records = rows_to_records(rows)
    if not records:
        return "<p>No rows to display.</p>"
    header = "".join(f"<th>{html.escape(col)}</th>" for col in records[0].keys())
    body_parts = []
    for record in records:
        cells = "".join(f"<td>{html.escape(value)}</td>" for value in record.values())
        body_parts.append(f'<tr class="{record["status"]}">{cells}</tr>')
    body_html = "".join(body_parts)
    return f'<table dir="rtl"><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>'

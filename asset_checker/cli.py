"""Command-line entrypoint for the daily asset report."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from asset_checker.application.dto import AssetsReportRequest, AssetsReportResponse
from asset_checker.application.filters import StatusFilter
from asset_checker.application.use_cases import AssetsReportContext, FetchAssetsReportUseCase
from asset_checker.config import SETTINGS
from asset_checker.exceptions import AssetCheckerError
from asset_checker.infrastructure.repositories.excel_repositories import (
    SpreadsheetReportsRepository,
    SpreadsheetRosterRepository,
)
from asset_checker.presentation.diff_report import render_csv, render_html
from asset_checker.presentation.messages import unreported_message

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile daily asset reports against the roster assignments")
    parser.add_argument("roster", type=str, help="Path to the roster file (.xlsx, .xls or .csv)")
    parser.add_argument("reports", type=str, help="Path to the daily reports file (.xlsx, .xls or .csv)")
    parser.add_argument("--date", type=str, help="Report date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--roster-sheet", type=str, help="Roster sheet name")
    parser.add_argument("--reports-sheet", type=str, help="Reports sheet name")
    parser.add_argument(
        "--status",
        choices=[s.value for s in StatusFilter],
        default=StatusFilter.ALL.value,
        help="Only show rows with this status",
    )
    parser.add_argument("--name", type=str, default="", help="Only show people whose name contains this text")
    parser.add_argument("--format", choices=["text", "csv", "html"], default="text")
    parser.add_argument("--output", type=str, help="Write csv/html output to this path instead of stdout")
    parser.add_argument("--unreported-message", action="store_true", help="Print the reminder for people who did not report")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def _print_text(response: AssetsReportResponse) -> None:
    summary = response.summary
    print(f"Asset Report {response.target_date.isoformat()}")
    print("=======================")
    print(f"Roster size: {summary.total}")
    print(f"Reported: {summary.reported} ({summary.completion_percentage}%)")
    print(f"Not reported: {summary.unreported}")
    print(f"With anomalies: {summary.with_anomalies}")
    if response.is_filtered:
        print(f"Showing {len(response.visible_rows)} of {len(response.rows)} rows")

    flagged = [row for row in response.visible_rows if row.anomalies]
    if not flagged:
        print("\nNo discrepancies detected.")
        return
    print("\nDiscrepancies detected:")
    for row in flagged:
        metadata = row.metadata
        if not row.has_report:
            print(f"- {metadata.full_name} ({metadata.personal_number}): no report")
            continue
        for field_name, anomaly in row.field_anomalies.items():
            print(f"- {metadata.full_name} ({metadata.personal_number}) {anomaly.type} on {field_name}: {anomaly.message}")


def _write(payload: bytes, output: str | None) -> None:
    if output:
        Path(output).write_bytes(payload)
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    target = date.fromisoformat(args.date) if args.date else date.today()

    context = AssetsReportContext(
        roster_repository=SpreadsheetRosterRepository(args.roster, sheet_name=args.roster_sheet),
        reports_repository=SpreadsheetReportsRepository(args.reports, sheet_name=args.reports_sheet),
    )
    request = AssetsReportRequest(target_date=target, status=StatusFilter(args.status), name=args.name)
    try:
        rows = FetchAssetsReportUseCase(context).execute(request.target_date)
    except AssetCheckerError as exc:
        logger.error("Reconciliation failed: %s", exc.to_dict())
        print(f"Error: {exc.message}", file=sys.stderr)
        return 2
    response = AssetsReportResponse.build(request, rows)

    if args.format == "csv":
        _write(render_csv(response.visible_rows), args.output)
    elif args.format == "html":
        _write(render_html(response.visible_rows).encode("utf-8"), args.output)
    else:
        _print_text(response)

    if args.unreported_message:
        print()
        print(unreported_message(response.rows, target, SETTINGS))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

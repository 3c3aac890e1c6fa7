from datetime import date, datetime
from io import BytesIO
from pathlib import Path

import pytest
from openpyxl import Workbook

from asset_checker.application.use_cases import AssetsReportContext, fetch_assets_report_table_data
from asset_checker.cli import main
from asset_checker.infrastructure.parsing.normalizer import normalize_assignments, normalize_reports
from asset_checker.infrastructure.parsing.tables import _pick_sheet
from asset_checker.infrastructure.repositories.excel_repositories import (
    SpreadsheetReportsRepository,
    SpreadsheetRosterRepository,
)

ROSTER_ROWS = [
    ["fullName", "personalNumber", "phoneNumber", "personalWeaponNumber", "hasCompass", "actiq"],
    ["Dana Levi", 1001, "0501111111", 123, True, 2],
    ["Noa Cohen", 1002, "0502222222", None, False, 0],
]

REPORT_ROWS = [
    ["timestamp", "personalNumber", "personalWeaponNumber", "hasCompass", "actiq"],
    [datetime(2024, 5, 1, 10, 0), 1001, 123, True, 3],
    [datetime(2024, 4, 30, 9, 0), 1002, None, False, 0],
]


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    workbook = Workbook()
    summary = workbook.active
    summary.title = "Summary"
    summary.append(["generated", "2024-05-01"])
    summary.append(["people", 2])
    for title, rows in (("Roster 2024", ROSTER_ROWS), ("Reports", REPORT_ROWS)):
        sheet = workbook.create_sheet(title)
        for row in rows:
            sheet.append(row)
    path = tmp_path / "company.xlsx"
    workbook.save(path)
    return path


@pytest.mark.parametrize(
    "preferred, expected",
    [
        ("Reports", "Reports"),
        ("reports", "Reports"),
        ("roster", "Roster 2024"),
        ("archive", "Summary"),
        (None, "Summary"),
    ],
)
def test_pick_sheet(workbook_path: Path, preferred, expected):
    source = BytesIO(workbook_path.read_bytes())

    assert _pick_sheet(source, "openpyxl", preferred) == expected


def test_typed_cells_are_read_and_normalized(workbook_path: Path):
    roster_table = SpreadsheetRosterRepository(workbook_path, sheet_name="roster").get_roster_table()
    reports_table = SpreadsheetReportsRepository(str(workbook_path), sheet_name="REPORTS").get_reports_table()

    assert roster_table[1][:4] == ["Dana Levi", "1001", "0501111111", "123"]

    dana, noa = normalize_assignments(roster_table)
    assert dana.personal_number == "1001"
    assert dana.assigned_assets.personal_weapon_number == "123"
    assert dana.assigned_assets.has_compass is True
    assert dana.assigned_assets.actiq == 2
    assert noa.assigned_assets.personal_weapon_number is None
    assert noa.assigned_assets.has_compass is False

    first, _ = normalize_reports(reports_table)
    assert first.personal_number == "1001"
    assert first.submitted_at == datetime(2024, 5, 1, 10, 0)
    assert first.values.actiq == 3


def test_workbook_sources_feed_the_report(workbook_path: Path):
    context = AssetsReportContext(
        roster_repository=SpreadsheetRosterRepository(workbook_path, sheet_name="Roster 2024"),
        reports_repository=SpreadsheetReportsRepository(workbook_path.read_bytes(), ".xlsx", "Reports"),
    )

    dana, noa = fetch_assets_report_table_data(date(2024, 5, 1), context)

    assert dana.anomalies == ("excess_quantity",)
    assert not noa.has_report


def test_cli_selects_sheets(workbook_path: Path, capsys):
    exit_code = main(
        [
            str(workbook_path),
            str(workbook_path),
            "--date",
            "2024-05-01",
            "--roster-sheet",
            "roster",
            "--reports-sheet",
            "reports",
        ]
    )

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Roster size: 2" in out
    assert "Reported: 1 (50%)" in out
    assert "excess_quantity on actiq" in out
    assert "unexpected_item" not in out
    assert "Noa Cohen (1002): no report" in out


def test_cli_without_sheet_options_reads_first_sheet(workbook_path: Path, capsys):
    exit_code = main([str(workbook_path), str(workbook_path), "--date", "2024-05-01"])

    assert exit_code == 2
    assert "Missing required column(s)" in capsys.readouterr().err

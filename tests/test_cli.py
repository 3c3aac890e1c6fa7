import csv
from pathlib import Path

import pytest

from asset_checker.cli import main
from asset_checker.infrastructure.repositories.excel_repositories import (
    SpreadsheetReportsRepository,
    SpreadsheetRosterRepository,
)


def write_csv(path: Path, rows: list[list[str]]) -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        csv.writer(handle).writerows(rows)
    return path


@pytest.fixture
def files(tmp_path: Path) -> tuple[Path, Path]:
    roster = write_csv(
        tmp_path / "roster.csv",
        [
            ["fullName", "personalNumber", "phoneNumber", "personalWeaponNumber", "actiq"],
            ["Dana Levi", "1001", "0501111111", "123", "2"],
            ["Noa Cohen", "1002", "0502222222", "0", "0"],
        ],
    )
    reports = write_csv(
        tmp_path / "reports.csv",
        [
            ["timestamp", "personalNumber", "personalWeaponNumber", "actiq"],
            ["2024-05-01 17:00:00", "1001", "", "5"],
        ],
    )
    return roster, reports


def test_csv_repositories_read_raw_tables(files):
    roster, reports = files

    roster_table = SpreadsheetRosterRepository(roster).get_roster_table()
    reports_table = SpreadsheetReportsRepository(str(reports)).get_reports_table()

    assert roster_table[0][0] == "fullName"
    assert roster_table[2] == ["Noa Cohen", "1002", "0502222222", "0", "0"]
    assert reports_table[1][3] == "5"


def test_in_memory_source_requires_format():
    with pytest.raises(ValueError):
        SpreadsheetRosterRepository(b"fullName,personalNumber\n")


def test_unsupported_extension(tmp_path: Path):
    path = tmp_path / "roster.txt"
    path.write_text("x", encoding="utf-8")

    with pytest.raises(ValueError):
        SpreadsheetRosterRepository(path)


def test_text_output(files, capsys):
    roster, reports = files

    exit_code = main([str(roster), str(reports), "--date", "2024-05-01"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Roster size: 2" in out
    assert "Reported: 1 (50%)" in out
    assert "missing_required on personal_weapon_number" in out
    assert "excess_quantity on actiq" in out
    assert "Noa Cohen (1002): no report" in out


def test_status_filter_and_csv_output(files, tmp_path: Path):
    roster, reports = files
    output = tmp_path / "out.csv"

    exit_code = main(
        [str(roster), str(reports), "--date", "2024-05-01", "--status", "no-report", "--format", "csv", "--output", str(output)]
    )

    lines = output.read_text(encoding="utf-8").strip().splitlines()
    assert exit_code == 0
    assert len(lines) == 2
    assert lines[1].startswith("1002,Noa Cohen")


def test_unreported_message_is_printed(files, capsys):
    roster, reports = files

    main([str(roster), str(reports), "--date", "2024-05-01", "--unreported-message"])

    assert "1. Noa Cohen" in capsys.readouterr().out


def test_malformed_input_exits_with_error(tmp_path: Path, capsys):
    roster = write_csv(tmp_path / "roster.csv", [["fullName", "personalNumber", "actiq"], ["Dana", "1", "lots"]])
    reports = write_csv(tmp_path / "reports.csv", [["timestamp", "personalNumber"]])

    exit_code = main([str(roster), str(reports), "--date", "2024-05-01"])

    assert exit_code == 2
    assert "Malformed row 1" in capsys.readouterr().err

from asset_checker.domain.models import AssetSet, AssignmentRecord, PersonMetadata, ReportRecord
from asset_checker.domain.services import RowComposer, compose


def make_assignment(personal_number: str, name: str, **assets) -> AssignmentRecord:
    return AssignmentRecord(
        metadata=PersonMetadata(full_name=name, personal_number=personal_number, phone_number=""),
        assigned_assets=AssetSet(**assets),
    )


def make_report(personal_number: str, timestamp: str = "2024-05-01 08:00", **values) -> ReportRecord:
    return ReportRecord(personal_number=personal_number, timestamp=timestamp, values=AssetSet(**values))


def test_rows_follow_roster_order_and_length():
    roster = [
        make_assignment("3", "Carmel"),
        make_assignment("1", "Avi"),
        make_assignment("2", "Bar"),
    ]
    reports = [make_report("1"), make_report("99"), make_report("2"), make_report("42")]

    rows = compose(roster, reports)

    assert [row.personal_number for row in rows] == ["3", "1", "2"]
    assert len(rows) == len(roster)


def test_person_without_report_gets_sentinel_and_no_report():
    rows = compose([make_assignment("1", "Avi", personal_weapon_number="7")], [])

    row = rows[0]
    assert row.has_report is False
    assert row.anomalies == ("no_report",)
    assert row.field_anomalies == {}
    assert row.reported_assets == AssetSet.empty()
    assert all(value is None for value in row.reported_assets.as_dict().values())
    assert row.assigned_assets.personal_weapon_number == "7"


def test_last_duplicate_report_wins():
    roster = [make_assignment("1", "Avi", actiq=1)]
    reports = [
        make_report("1", "2024-05-01 08:00", actiq=5),
        make_report("1", "2024-05-01 09:00", actiq=1),
    ]

    row = RowComposer().compose(roster, reports)[0]

    assert row.reported_assets.actiq == 1
    assert row.anomalies == ()
    assert row.has_report


def test_empty_roster_yields_no_rows():
    assert compose([], [make_report("1")]) == []

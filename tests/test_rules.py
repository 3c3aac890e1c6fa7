from asset_checker.domain.models import ASSET_FIELD_NAMES, AnomalyType, AssetSet
from asset_checker.domain.rules import RECONCILIATION_RULES, format_quantity, rules_for


def test_every_rule_targets_an_asset_field():
    assert {rule.field for rule in RECONCILIATION_RULES} == set(ASSET_FIELD_NAMES)


def test_rule_phases_follow_documented_order():
    kinds = [rule.anomaly for rule in RECONCILIATION_RULES]
    expected = (
        ["missing_required", "unexpected_item"] * 4
        + ["missing_required"]
        + ["unexpected_item"] * 5
        + ["excess_quantity"] * 5
        + ["invalid_value"] * 5
    )

    assert kinds == expected
    assert AnomalyType.NO_REPORT not in kinds


def test_identifier_rules_per_field():
    rules = rules_for("personal_sights_number")

    assert [rule.anomaly for rule in rules] == ["missing_required", "unexpected_item", "unexpected_item"]


def test_quantity_rules_end_with_negative_check():
    rules = rules_for("midazolam")

    assert [rule.anomaly for rule in rules] == ["excess_quantity", "invalid_value"]


def test_rule_evaluation_against_asset_sets():
    missing, mismatch, unassigned = rules_for("binoculars_number")
    assigned = AssetSet(binoculars_number="10")

    assert missing.evaluate(assigned, AssetSet())
    assert not mismatch.evaluate(assigned, AssetSet())
    assert mismatch.evaluate(assigned, AssetSet(binoculars_number="11"))
    assert unassigned.evaluate(AssetSet(), AssetSet(binoculars_number="11"))
    assert not unassigned.evaluate(assigned, AssetSet(binoculars_number="11"))


def test_format_quantity():
    assert format_quantity(5) == "5"
    assert format_quantity(5.0) == "5"
    assert format_quantity(2.5) == "2.5"

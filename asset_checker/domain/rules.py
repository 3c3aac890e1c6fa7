"""Ordered reconciliation rule table.

Rules are evaluated in the order of ``RECONCILIATION_RULES``. Every rule
whose predicate holds contributes its anomaly type to the result, and the
per-field anomaly map keeps the last applicable rule for each field. The
order is:

1. identifiers: assigned but not reported, or reported with another number
2. compass: assigned but not reported
3. identifiers: reported without being assigned
4. compass: reported without being assigned
5. quantities: reported more than assigned
6. quantities: reported a negative count

Phase 6 runs after phase 5, so a negative count is reported as
``invalid_value`` even when the excess check also fired for that field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import (
    FLAG_FIELDS,
    IDENTIFIER_FIELDS,
    QUANTITY_FIELDS,
    AnomalyType,
    AssetField,
    AssetSet,
    Quantity,
)

Predicate = Callable[[object, object], bool]
MessageBuilder = Callable[[object, object], str]


@dataclass(frozen=True)
class FieldRule:
    field: str
    anomaly: AnomalyType
    applies: Predicate
    message: MessageBuilder

    def evaluate(self, assigned: AssetSet, reported: AssetSet) -> bool:
        return self.applies(assigned.get(self.field), reported.get(self.field))


def _text(value: object) -> str:
    return str(value).strip()


def _quantity(value: object) -> Quantity:
    return value or 0


def format_quantity(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _identifier_rules(spec: AssetField) -> tuple[FieldRule, ...]:
    missing = FieldRule(
        field=spec.name,
        anomaly=AnomalyType.MISSING_REQUIRED,
        applies=lambda assigned, reported: bool(assigned) and not reported,
        message=lambda assigned, reported: f"חסר מספר {spec.label}",
    )
    mismatch = FieldRule(
        field=spec.name,
        anomaly=AnomalyType.UNEXPECTED_ITEM,
        applies=lambda assigned, reported: bool(assigned) and bool(reported) and _text(assigned) != _text(reported),
        message=lambda assigned, reported: f"{spec.wrong_label} - דווח {_text(reported)}, מוקצה {_text(assigned)}",
    )
    return missing, mismatch


def _unassigned_identifier_rule(spec: AssetField) -> FieldRule:
    return FieldRule(
        field=spec.name,
        anomaly=AnomalyType.UNEXPECTED_ITEM,
        applies=lambda assigned, reported: not assigned and bool(reported),
        message=lambda assigned, reported: f"{spec.label} לא מוקצה",
    )


def _missing_flag_rule(spec: AssetField) -> FieldRule:
    return FieldRule(
        field=spec.name,
        anomaly=AnomalyType.MISSING_REQUIRED,
        applies=lambda assigned, reported: bool(assigned) and not reported,
        message=lambda assigned, reported: f"חסר {spec.label}",
    )


def _unassigned_flag_rule(spec: AssetField) -> FieldRule:
    return FieldRule(
        field=spec.name,
        anomaly=AnomalyType.UNEXPECTED_ITEM,
        applies=lambda assigned, reported: not assigned and bool(reported),
        message=lambda assigned, reported: f"{spec.label} לא מוקצה",
    )


def _excess_rule(spec: AssetField) -> FieldRule:
    return FieldRule(
        field=spec.name,
        anomaly=AnomalyType.EXCESS_QUANTITY,
        applies=lambda assigned, reported: _quantity(assigned) < _quantity(reported),
        message=lambda assigned, reported: (
            f"עודף {spec.label} - דווח {format_quantity(reported)}, מוקצה {format_quantity(_quantity(assigned))}"
        ),
    )


def _negative_rule(spec: AssetField) -> FieldRule:
    return FieldRule(
        field=spec.name,
        anomaly=AnomalyType.INVALID_VALUE,
        applies=lambda assigned, reported: _quantity(reported) < 0,
        message=lambda assigned, reported: "ערך שלילי",
    )


def build_rules() -> tuple[FieldRule, ...]:
    rules: list[FieldRule] = []
    for spec in IDENTIFIER_FIELDS:
        rules.extend(_identifier_rules(spec))
    rules.extend(_missing_flag_rule(spec) for spec in FLAG_FIELDS)
    rules.extend(_unassigned_identifier_rule(spec) for spec in IDENTIFIER_FIELDS)
    rules.extend(_unassigned_flag_rule(spec) for spec in FLAG_FIELDS)
    rules.extend(_excess_rule(spec) for spec in QUANTITY_FIELDS)
    rules.extend(_negative_rule(spec) for spec in QUANTITY_FIELDS)
    return tuple(rules)


RECONCILIATION_RULES: tuple[FieldRule, ...] = build_rules()


def rules_for(field_name: str) -> tuple[FieldRule, ...]:
    return tuple(rule for rule in RECONCILIATION_RULES if rule.field == field_name)

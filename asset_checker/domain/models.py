"""Domain models for the daily asset accountability pipeline.

These dataclasses capture the canonical schema for normalized roster
assignments, daily reports and the anomalies found between them.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Union

Quantity = Union[int, float]


class FieldKind(str, Enum):
    IDENTIFIER = "identifier"
    FLAG = "flag"
    QUANTITY = "quantity"


class AnomalyType(str, Enum):
    """Discrepancy kinds; members compare equal to their string values."""

    MISSING_REQUIRED = "missing_required"
    UNEXPECTED_ITEM = "unexpected_item"
    EXCESS_QUANTITY = "excess_quantity"
    INVALID_VALUE = "invalid_value"
    NO_REPORT = "no_report"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AssetField:
    """Catalog entry describing one equipment field and how it is worded."""

    name: str
    kind: FieldKind
    label: str
    wrong_label: str = ""


ASSET_FIELDS: tuple[AssetField, ...] = (
    AssetField("personal_weapon_number", FieldKind.IDENTIFIER, "נשק אישי", "נשק שגוי"),
    AssetField("personal_sights_number", FieldKind.IDENTIFIER, "כוונת", "כוונת שגויה"),
    AssetField("night_vision_number", FieldKind.IDENTIFIER, "ראיית לילה", "ראיית לילה שגויה"),
    AssetField("binoculars_number", FieldKind.IDENTIFIER, "משקפת", "משקפת שגויה"),
    AssetField("has_compass", FieldKind.FLAG, "מצפן"),
    AssetField("actiq", FieldKind.QUANTITY, "אקטיק"),
    AssetField("morphine", FieldKind.QUANTITY, "מורפיום"),
    AssetField("midazolam", FieldKind.QUANTITY, "מידזולאם"),
    AssetField("ketamine_50mg", FieldKind.QUANTITY, 'קטמין 50מ"ג'),
    AssetField("ketamine_10mg", FieldKind.QUANTITY, 'קטמין 10מ"ג'),
)

IDENTIFIER_FIELDS = tuple(f for f in ASSET_FIELDS if f.kind is FieldKind.IDENTIFIER)
FLAG_FIELDS = tuple(f for f in ASSET_FIELDS if f.kind is FieldKind.FLAG)
QUANTITY_FIELDS = tuple(f for f in ASSET_FIELDS if f.kind is FieldKind.QUANTITY)


@dataclass(frozen=True)
class AssetSet:
    """Equipment held or assigned. ``None`` means the field is absent."""

    personal_weapon_number: str | None = None
    personal_sights_number: str | None = None
    night_vision_number: str | None = None
    binoculars_number: str | None = None
    has_compass: bool | None = None
    actiq: Quantity | None = None
    morphine: Quantity | None = None
    midazolam: Quantity | None = None
    ketamine_50mg: Quantity | None = None
    ketamine_10mg: Quantity | None = None

    @classmethod
    def empty(cls) -> "AssetSet":
        return cls()

    def get(self, name: str) -> str | bool | Quantity | None:
        return getattr(self, name)

    def as_dict(self) -> dict[str, str | bool | Quantity | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


ASSET_FIELD_NAMES = frozenset(f.name for f in fields(AssetSet))


@dataclass(frozen=True)
class PersonMetadata:
    full_name: str
    personal_number: str
    phone_number: str = ""


@dataclass(frozen=True)
class AssignmentRecord:
    """A roster entry: who the person is and what they are responsible for."""

    metadata: PersonMetadata
    assigned_assets: AssetSet | None

    @property
    def personal_number(self) -> str:
        return self.metadata.personal_number


@dataclass(frozen=True)
class ReportRecord:
    """A single daily report submission."""

    personal_number: str
    timestamp: str
    values: AssetSet
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class FieldAnomaly:
    type: AnomalyType
    message: str

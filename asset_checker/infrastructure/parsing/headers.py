"""Header row resolution against an explicit alias table."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from asset_checker.exceptions import HeaderMappingError
from asset_checker.infrastructure.storage.alias_store import normalize_label


class HeaderAliases:
    """Maps normalized header labels onto canonical field names."""

    def __init__(self, aliases: Mapping[str, Iterable[str]]) -> None:
        lookup: dict[str, str] = {}
        for field_name, labels in aliases.items():
            for label in (field_name, *labels):
                key = normalize_label(label)
                if not key:
                    continue
                owner = lookup.get(key)
                if owner is not None and owner != field_name:
                    raise HeaderMappingError(
                        f"Alias {key!r} is claimed by both {owner!r} and {field_name!r}",
                        context={"alias": key, "fields": [owner, field_name]},
                    )
                lookup[key] = field_name
        self._lookup = lookup

    def field_for(self, label: object) -> str | None:
        return self._lookup.get(normalize_label(label))

    def resolve(self, header: Sequence[object], required: Iterable[str] = ()) -> "ColumnMapping":
        columns: dict[str, int] = {}
        for index, label in enumerate(header):
            field_name = self.field_for(label)
            if field_name is None:
                continue
            if field_name in columns:
                raise HeaderMappingError(
                    f"Columns {columns[field_name]} and {index} both map to {field_name!r}",
                    context={"field": field_name, "columns": [columns[field_name], index]},
                )
            columns[field_name] = index

        missing = [name for name in required if name not in columns]
        if missing:
            raise HeaderMappingError(
                f"Missing required column(s): {', '.join(missing)}",
                context={"missing": missing, "header": [str(label) for label in header]},
            )
        return ColumnMapping(columns)


@dataclass(frozen=True)
class ColumnMapping:
    columns: Mapping[str, int]

    def value(self, row: Sequence[object], field_name: str) -> object:
        index = self.columns.get(field_name)
        if index is None or index >= len(row):
            return None
        return row[index]

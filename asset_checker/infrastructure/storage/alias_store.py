"""Storage helpers for header alias overrides."""
from __future__ import annotations

from pathlib import Path
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).resolve().parents[2] / "header_aliases.json"

DEFAULT_ALIASES: dict[str, list[str]] = {
    "full_name": ["fullName", "full_name", "full name", "שם מלא"],
    "personal_number": ["personalNumber", "personal_number", "personal number", "מספר אישי"],
    "phone_number": ["phoneNumber", "phone_number", "phone", "טלפון", "מספר טלפון"],
    "timestamp": ["timestamp", "חותמת זמן"],
    "personal_weapon_number": ["personalWeaponNumber", "personal_weapon_number", "מספר נשק אישי"],
    "personal_sights_number": ["personalSightsNumber", "personal_sights_number", "מספר כוונת"],
    "night_vision_number": ["nightVisionNumber", "night_vision_number", "מספר ראיית לילה"],
    "binoculars_number": ["binocularsNumber", "binoculars_number", "מספר משקפת"],
    "has_compass": ["hasCompass", "has_compass", "מצפן"],
    "actiq": ["actiq", "אקטיק"],
    "morphine": ["morphine", "מורפיום"],
    "midazolam": ["midazolam", "מידזולאם"],
    "ketamine_50mg": ["ketamine50mg", "ketamine_50mg"],
    "ketamine_10mg": ["ketamine10mg", "ketamine_10mg"],
}


def normalize_label(label: object) -> str:
    return "" if label is None else str(label).strip().casefold()


def _normalize_aliases(raw: dict[str, Any] | None) -> dict[str, list[str]]:
    normalized: dict[str, list[str]] = {}
    if not isinstance(raw, dict):
        return normalized
    for key, values in raw.items():
        if key is None:
            continue
        key_str = str(key).strip()
        if not key_str:
            continue
        if isinstance(values, str):
            values = [values]
        labels: list[str] = []
        for value in values or []:
            label = normalize_label(value)
            if label and label not in labels:
                labels.append(label)
        normalized[key_str] = labels
    return normalized


def _merge(base: dict[str, list[str]], override: dict[str, list[str]]) -> dict[str, list[str]]:
    merged = {key: list(values) for key, values in base.items()}
    for key, values in override.items():
        target = merged.setdefault(key, [])
        target.extend(label for label in values if label not in target)
    return merged


def load_aliases(path: Path | None = None) -> dict[str, list[str]]:
    override_path = path or DEFAULT_PATH
    default_aliases = _normalize_aliases(DEFAULT_ALIASES)
    if not override_path.exists():
        return default_aliases
    try:
        data = json.loads(override_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable header alias override at %s", override_path)
        return default_aliases
    return _merge(default_aliases, _normalize_aliases(data))


def save_aliases(aliases: dict[str, list[str]], path: Path | None = None) -> dict[str, list[str]]:
    override_path = path or DEFAULT_PATH
    normalized = _normalize_aliases(aliases)
    override_path.write_text(
        json.dumps(normalized, ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return _merge(_normalize_aliases(DEFAULT_ALIASES), normalized)

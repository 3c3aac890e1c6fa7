"""Central configuration for the asset checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from asset_checker.infrastructure.storage.alias_store import load_aliases

ENV_PREFIX = "ASSET_CHECKER_"

AFFIRMATIVE_TOKENS = frozenset({"true", "יש"})


@dataclass(slots=True, frozen=True)
class Settings:
    # None means the interpreter's local timezone.
    local_timezone: str | None = None
    timestamp_dayfirst: bool = False
    country_code: str = "972"
    reminder_phone: str = ""
    report_form_url: str = ""
    reminder_deadline: str = "18:00"
    header_aliases: Mapping[str, list[str]] = field(default_factory=load_aliases)
    affirmative_tokens: frozenset[str] = AFFIRMATIVE_TOKENS


def _env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings() -> Settings:
    return Settings(
        local_timezone=_env("TIMEZONE"),
        timestamp_dayfirst=(_env("DAYFIRST", "false") or "").lower() in {"1", "true", "yes"},
        country_code=_env("COUNTRY_CODE", "972") or "972",
        reminder_phone=_env("REMINDER_PHONE", "") or "",
        report_form_url=_env("REPORT_FORM_URL", "") or "",
        reminder_deadline=_env("REMINDER_DEADLINE", "18:00") or "18:00",
    )


SETTINGS = load_settings()

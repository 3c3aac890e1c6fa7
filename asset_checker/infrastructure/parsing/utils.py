"""Shared parsing utilities for roster and report ingestion."""
from __future__ import annotations

from datetime import date, datetime
from io import BytesIO
from pathlib import Path
from typing import Collection
from zoneinfo import ZoneInfo
import math

import pandas as pd

from asset_checker.config import AFFIRMATIVE_TOKENS
from asset_checker.domain.models import Quantity
from asset_checker.domain.rules import format_quantity


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def parse_text(value: object) -> str:
    """Render a cell as text; integral floats from typed sheets lose their ``.0``."""
    return "" if is_blank(value) else format_quantity(value).strip()


def parse_identifier(value: object) -> str | None:
    s = parse_text(value)
    if not s or s == "0":
        return None
    return s


def parse_flag(value: object, tokens: Collection[str] = AFFIRMATIVE_TOKENS) -> bool:
    if is_blank(value):
        return False
    return str(value).strip().casefold() in tokens


def parse_quantity(value: object, default: Quantity | None) -> Quantity | None:
    """Coerce a cell to a count; raises ValueError for non-numeric content."""
    if is_blank(value):
        return default
    if isinstance(value, bool):
        return int(value)
    s = str(value).strip()
    try:
        number = float(s)
    except ValueError:
        raise ValueError(f"not a number: {s!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {s!r}")
    if number.is_integer():
        return int(number)
    return number


def parse_timestamp(value: object, dayfirst: bool = False) -> datetime | None:
    if is_blank(value):
        return None
    parsed = pd.to_datetime(str(value).strip(), errors="coerce", dayfirst=dayfirst)
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def local_date(moment: datetime, timezone_name: str | None = None) -> date:
    if moment.tzinfo is None:
        return moment.date()
    if timezone_name:
        return moment.astimezone(ZoneInfo(timezone_name)).date()
    return moment.astimezone().date()

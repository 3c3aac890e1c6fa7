"""WhatsApp message and link builders for reminders and assignment summaries."""
from __future__ import annotations

import re
from datetime import date
from typing import Sequence
from urllib.parse import quote

from asset_checker.config import SETTINGS, Settings
from asset_checker.domain.models import IDENTIFIER_FIELDS
from asset_checker.domain.results import CombinedRow, iter_unreported
from asset_checker.exceptions import MissingPhoneNumberError

WHATSAPP_URL = "https://wa.me/{phone}?text={text}"

HEBREW_WEEKDAYS = ("שני", "שלישי", "רביעי", "חמישי", "שישי", "שבת", "ראשון")
HEBREW_MONTHS = (
    "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
    "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
)

ASSET_LINE_LABELS = {
    "personal_weapon_number": "נשק אישי",
    "personal_sights_number": "כוונת",
    "night_vision_number": "אמר״ל",
    "binoculars_number": "משקפת",
}


def format_hebrew_date(value: date) -> str:
    weekday = HEBREW_WEEKDAYS[value.weekday()]
    month = HEBREW_MONTHS[value.month - 1]
    return f"יום {weekday}, {value.day} ב{month} {value.year}"


def normalize_phone(phone: str, country_code: str) -> str:
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return ""
    if digits.startswith("00"):
        return digits[2:]
    if digits.startswith(country_code):
        return digits
    if digits.startswith("0"):
        digits = digits[1:]
    return country_code + digits


def whatsapp_link(phone: str, text: str) -> str:
    return WHATSAPP_URL.format(phone=phone, text=quote(text, safe=""))


def personal_reminder_link(row: CombinedRow, settings: Settings = SETTINGS) -> str:
    phone = normalize_phone(row.metadata.phone_number, settings.country_code)
    if not phone:
        raise MissingPhoneNumberError(row.metadata.full_name)
    text = f"ערב טוב. אנא מלא דו״ח צל״מ עד השעה {settings.reminder_deadline}. תודה"
    return whatsapp_link(phone, text)


def unreported_message(rows: Sequence[CombinedRow], target: date, settings: Settings = SETTINGS) -> str:
    names = "\n".join(f"{idx}. {row.metadata.full_name}" for idx, row in enumerate(iter_unreported(rows), start=1))
    message = f"{format_hebrew_date(target)}\n\nלא דיווחו דו״ח צל״מ:\n{names}\n\n*נא לדווח בהקדם*"
    if settings.report_form_url:
        message += f"\n\nקישור לדיווח:\n{settings.report_form_url}"
    return message


def company_assets_message(rows: Sequence[CombinedRow]) -> str:
    message = "דוח צל״ם מוקצה לפלוגה:\n\n"
    for row in rows:
        message += f"{row.metadata.full_name}:\n"
        assigned = row.assigned_assets
        lines: list[str] = []
        if assigned is not None:
            for spec in IDENTIFIER_FIELDS:
                value = assigned.get(spec.name)
                if value:
                    lines.append(f"{ASSET_LINE_LABELS[spec.name]}: {value}")
            if assigned.has_compass:
                lines.append("מצפן: יש")
        if lines:
            message += "\n".join(lines) + "\n\n"
        else:
            message += "אין צל״ם מוקצה\n\n"
    return message


def group_message_link(text: str, settings: Settings = SETTINGS, phone: str | None = None) -> str:
    recipient = normalize_phone(phone or settings.reminder_phone, settings.country_code)
    if not recipient:
        raise MissingPhoneNumberError("group recipient")
    return whatsapp_link(recipient, text)

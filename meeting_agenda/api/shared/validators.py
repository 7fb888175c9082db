"""
Meeting Agenda Validators

Format checks for the raw strings received by the whitelisted endpoints.
Domain rules (time ranges, conflicts) live in meeting_agenda.scheduling.
"""

import re
from datetime import datetime
from typing import List, Optional

import frappe
import pytz
from frappe import _


def validate_date_string(date_str: str, field_name: str = "date") -> str:
    """
    Validate date string format (YYYY-MM-DD).

    Args:
        date_str: Date string to validate
        field_name: Name of field for error messages

    Returns:
        str: Validated date string

    Raises:
        frappe.ValidationError: If date format is invalid
    """
    if not date_str:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    date_str = str(date_str).strip()

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        frappe.throw(
            _(f"Invalid {field_name} format. Use YYYY-MM-DD"), frappe.ValidationError
        )

    _ensure_calendar_value(date_str, "%Y-%m-%d", field_name)

    return date_str


def validate_time_string(time_str: str, field_name: str = "time") -> str:
    """
    Validate time string format (HH:MM or HH:MM:SS).

    Returns:
        str: Validated time string, always HH:MM:SS
    """
    if not time_str:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    time_str = str(time_str).strip()

    match = re.match(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$", time_str)
    if not match:
        frappe.throw(
            _(f"Invalid {field_name} format. Use HH:MM:SS"), frappe.ValidationError
        )

    hours, minutes, seconds = match.group(1), match.group(2), match.group(3) or "00"
    return f"{hours}:{minutes}:{seconds}"


def validate_datetime_string(datetime_str: str, field_name: str = "datetime") -> str:
    """
    Validate datetime string format (YYYY-MM-DD HH:MM:SS).

    Args:
        datetime_str: Datetime string to validate
        field_name: Name of field for error messages

    Returns:
        str: Validated datetime string

    Raises:
        frappe.ValidationError: If datetime format is invalid
    """
    if not datetime_str:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    datetime_str = str(datetime_str).strip()

    if not re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", datetime_str):
        frappe.throw(
            _(f"Invalid {field_name} format. Use YYYY-MM-DD HH:MM:SS"),
            frappe.ValidationError,
        )

    _ensure_calendar_value(datetime_str, "%Y-%m-%d %H:%M:%S", field_name)

    return datetime_str


def validate_docname(name: str, field_name: str = "name") -> str:
    """
    Validate a document name (ID).

    Ensures the name is not too long and doesn't contain injection patterns.

    Args:
        name: Document name to validate
        field_name: Name of field for error messages

    Returns:
        str: Validated document name

    Raises:
        frappe.ValidationError: If name is invalid
    """
    if not name:
        frappe.throw(_(f"{field_name} is required"), frappe.ValidationError)

    name = str(name).strip()

    if len(name) > 140:
        frappe.throw(_(f"{field_name} is too long"), frappe.ValidationError)

    # Block obvious injection attempts
    dangerous_patterns = [
        r"<script",
        r"javascript:",
        r"onclick",
        r"onerror",
        r"SELECT\s+",
        r"INSERT\s+",
        r"UPDATE\s+",
        r"DELETE\s+",
        r"DROP\s+",
        r"UNION\s+",
        r"--",
        r";",
    ]

    name_lower = name.lower()
    for pattern in dangerous_patterns:
        if re.search(pattern, name_lower, re.IGNORECASE):
            frappe.throw(_(f"Invalid {field_name}"), frappe.ValidationError)

    return name


def validate_docname_list(value, field_name: str = "participants") -> List[str]:
    """
    Parse a list of document names.

    Accepts a list, a JSON array string ('["a@x.com", "b@x.com"]') or a
    comma separated string. Empty values give an empty list.

    Returns:
        list: Validated names, in the order received
    """
    if not value:
        return []

    if isinstance(value, str):
        value = value.strip()
        if value.startswith("["):
            value = frappe.parse_json(value)
        else:
            value = [part for part in value.split(",") if part.strip()]

    if not isinstance(value, (list, tuple)):
        frappe.throw(_(f"Invalid {field_name}: expected a list"), frappe.ValidationError)

    return [validate_docname(item, field_name) for item in value]


def validate_timezone(tz_name: Optional[str], field_name: str = "timezone") -> Optional[str]:
    """
    Validate an IANA timezone name (e.g. "America/Bogota").

    Returns:
        str | None: The timezone name, or None when not provided
    """
    if not tz_name:
        return None

    tz_name = str(tz_name).strip()
    if tz_name not in pytz.all_timezones_set:
        frappe.throw(_(f"Invalid {field_name}: {tz_name}"), frappe.ValidationError)

    return tz_name


def _ensure_calendar_value(value: str, fmt: str, field_name: str) -> None:
    """Rejects well-shaped but impossible values such as 2026-02-30 or 10:61:00."""
    try:
        datetime.strptime(value, fmt)
    except ValueError:
        frappe.throw(_(f"Invalid {field_name}: {value}"), frappe.ValidationError)

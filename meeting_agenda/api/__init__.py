"""
Meeting Agenda API

Structure:
    api/
    ├── __init__.py              # This file
    ├── meetings/                # Meetings domain
    │   ├── __init__.py          # Re-exports from endpoints
    │   └── endpoints.py         # Whitelisted endpoints
    └── shared/                  # Shared utilities
        ├── __init__.py          # Re-exports
        ├── security.py          # Rate limiting, sanitization
        └── validators.py        # Input format validators

Usage:
    frappe.call("meeting_agenda.api.meetings.create_meeting", ...)
    frappe.call("meeting_agenda.api.meetings.endpoints.create_meeting", ...)
"""

from . import meetings
from . import shared

__all__ = [
    "meetings",
    "shared",
]

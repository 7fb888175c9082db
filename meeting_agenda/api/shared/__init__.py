"""
Shared utilities for Meeting Agenda API.

Rate limiting, sanitization and input validators used by the endpoints.
"""

from .security import (
    # Rate limiting
    check_rate_limit,
    get_client_ip,
    # Sanitization
    sanitize_string,
)

from .validators import (
    validate_date_string,
    validate_datetime_string,
    validate_docname,
    validate_docname_list,
    validate_time_string,
    validate_timezone,
)

__all__ = [
    "check_rate_limit",
    "get_client_ip",
    "sanitize_string",
    "validate_date_string",
    "validate_datetime_string",
    "validate_docname",
    "validate_docname_list",
    "validate_time_string",
    "validate_timezone",
]

"""
Security Utilities for Meeting Agenda APIs

Provides rate limiting and input sanitization for the read endpoints
(availability and free windows) that can be polled by calendar widgets.
"""

import re
import frappe
from frappe import _
from frappe.utils import cint


# ===================
# Rate Limiting
# ===================

def check_rate_limit(action: str, limit: int = 30, seconds: int = 60) -> None:
    """
    Check rate limit for an action by IP address and session user.

    Uses Frappe's cache (Redis) to track request counts.

    Args:
        action: Identifier for the action being rate limited
        limit: Maximum number of requests allowed
        seconds: Time window in seconds

    Raises:
        frappe.TooManyRequestsError: If rate limit exceeded
    """
    ip = get_client_ip()
    cache_key = f"rate_limit:meeting_agenda:{action}:{frappe.session.user}:{ip}"

    current = cint(frappe.cache.get_value(cache_key) or 0)

    if current >= limit:
        frappe.log_error(
            title=_("Rate Limit Exceeded"),
            message=f"User: {frappe.session.user}, IP: {ip}, Action: {action}, Limit: {limit}/{seconds}s"
        )
        frappe.throw(
            _("Too many requests. Please wait a moment and try again."),
            frappe.TooManyRequestsError
        )

    frappe.cache.set_value(cache_key, current + 1, expires_in_sec=seconds)


def get_client_ip() -> str:
    """
    Get the real client IP address, handling proxies.

    Outside an HTTP request (bench console, tests, background jobs)
    returns "local".

    Returns:
        str: Client IP address
    """
    request = getattr(frappe.local, "request", None)
    if request is None:
        return "local"

    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip.strip()

    return request.remote_addr or "unknown"


# ===================
# Input Sanitization
# ===================

def sanitize_string(value: str, max_length: int = 500) -> str:
    """
    General string sanitization.

    Args:
        value: String to sanitize
        max_length: Maximum allowed length

    Returns:
        str: Sanitized string ("" when empty)
    """
    if not value:
        return ""

    value = str(value).strip()

    if len(value) > max_length:
        value = value[:max_length]

    # Remove null bytes and other control characters
    value = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", value)

    return value

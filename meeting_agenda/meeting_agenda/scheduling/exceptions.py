"""
Scheduling Exceptions

Errores tipados del core. Heredan de las excepciones de Frappe para que la
capa HTTP les asigne el status code correcto (404, 409, 417).
"""

from datetime import datetime
from typing import Optional, Tuple

import frappe


class SchedulingError(frappe.ValidationError):
	"""Base para todos los errores del core de agendamiento."""
	pass


class NotFound(SchedulingError, frappe.DoesNotExistError):
	http_status_code = 404

	def __init__(self, doctype: str, name: str) -> None:
		super().__init__(f"{doctype} {name} not found")
		self.doctype = doctype
		self.name = name


class InvalidTimeRange(SchedulingError):
	def __init__(self, start: datetime, end: datetime) -> None:
		super().__init__(f"Start ({start}) must be before end ({end})")
		self.start = start
		self.end = end


class SchedulingConflict(SchedulingError):
	http_status_code = 409

	def __init__(
		self,
		user_id: str,
		window: Tuple[datetime, datetime],
		meeting_id: Optional[str] = None
	) -> None:
		super().__init__(
			f"{user_id} already has a meeting scheduled between {window[0]} and {window[1]}"
		)
		self.user_id = user_id
		self.window = window
		self.meeting_id = meeting_id


class DuplicateResource(SchedulingError, frappe.DuplicateEntryError):
	# Reservado para la gestión de cuentas de usuario; el core no lo lanza.
	http_status_code = 409

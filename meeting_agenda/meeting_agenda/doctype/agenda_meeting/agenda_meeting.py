# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Agenda Meeting DocType

Persists meetings created by the Scheduler. Conflict detection and agenda
projection live in scheduling/scheduler.py; this controller only keeps the
record itself consistent.
"""

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import get_datetime


class AgendaMeeting(Document):
	"""
	Agenda Meeting with data integrity validations.

	Validations:
	- organizer required
	- start_datetime < end_datetime
	- participants unique by user, organizer excluded
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_organizer()
		self._validate_datetime_consistency()
		self._validate_participants()

	def _validate_organizer(self) -> None:
		"""Valida que organizer esté presente."""
		if not self.organizer:
			frappe.throw(_("Organizer es requerido"))

	def _validate_datetime_consistency(self) -> None:
		"""Valida que start_datetime < end_datetime."""
		if not self.start_datetime or not self.end_datetime:
			frappe.throw(_("Start DateTime y End DateTime son requeridos"))

		start = get_datetime(self.start_datetime)
		end = get_datetime(self.end_datetime)

		if start >= end:
			frappe.throw(_("Start DateTime debe ser menor que End DateTime"))

	def _validate_participants(self) -> None:
		"""
		Deja una sola fila por usuario y quita al organizador.

		La membresía es un set keyed por user id; filas repetidas se descartan
		en silencio en lugar de bloquear el guardado.
		"""
		seen = set()
		rows = []

		for row in self.participants:
			if not row.user:
				frappe.throw(_(f"Fila {row.idx}: User es requerido"))

			if row.user == self.organizer or row.user in seen:
				continue

			seen.add(row.user)
			rows.append(row)

		if len(rows) != len(self.participants):
			self.set("participants", rows)

# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Agenda Entry DocType

Registro FREE/BUSY en la agenda de un usuario:
- Con meeting: proyectado por el AgendaProjector
- Sin meeting: creado manualmente
"""

from datetime import datetime

import frappe
from frappe import _
from frappe.model.document import Document
from frappe.utils import get_time, getdate


class AgendaEntry(Document):
	"""
	Agenda Entry with validations.

	Validations:
	- user, date, start_time, end_time required
	- end_date defaults to date and can't be before it
	- (date, start_time) < (end_date, end_time)
	"""

	def validate(self) -> None:
		"""
		Validación antes de guardar.
		"""
		self._validate_required_fields()
		self._set_end_date()
		self._validate_window()

	def _validate_required_fields(self) -> None:
		"""Valida campos requeridos."""
		if not self.user:
			frappe.throw(_("User es requerido"))

		if not self.date:
			frappe.throw(_("Date es requerido"))

		if not self.start_time or not self.end_time:
			frappe.throw(_("Start Time y End Time son requeridos"))

	def _set_end_date(self) -> None:
		"""end_date vacío = la entrada termina el mismo día."""
		if not self.end_date:
			self.end_date = self.date

		if getdate(self.end_date) < getdate(self.date):
			frappe.throw(_("End Date no puede ser anterior a Date"))

	def _validate_window(self) -> None:
		"""Valida que el inicio sea anterior al fin (comparando fecha + hora)."""
		start = datetime.combine(getdate(self.date), get_time(self.start_time))
		end = datetime.combine(getdate(self.end_date), get_time(self.end_time))

		if start >= end:
			frappe.throw(
				_(f"El inicio ({start.strftime('%Y-%m-%d %H:%M')}) debe ser menor que el fin ({end.strftime('%Y-%m-%d %H:%M')})")
			)

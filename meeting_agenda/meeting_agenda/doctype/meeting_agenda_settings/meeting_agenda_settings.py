# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

"""
Meeting Agenda Settings DocType

Single con los flags del Scheduler (ver scheduling/config.py).
Con todos los flags apagados se reproduce el comportamiento legacy.
"""

from frappe.model.document import Document


class MeetingAgendaSettings(Document):
	pass

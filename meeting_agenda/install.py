"""
Installation hooks.
"""

import frappe


def after_install() -> None:
	"""
	Guarda Meeting Agenda Settings con sus defaults.

	Un Single sin guardar lee sus Check como 0, lo que activaría el
	comportamiento legacy sin que nadie lo haya elegido.
	"""
	settings = frappe.get_single("Meeting Agenda Settings")
	settings.validate_added_participants = 1
	settings.sync_agenda_entries = 1
	settings.check_conflicts_on_update = 1
	settings.save(ignore_permissions=True)

"""
Scheduled Tasks

Background tasks that run periodically:
- cleanup_orphan_agenda_entries: Deletes Agenda Entries whose meeting is gone
"""

import frappe


def cleanup_orphan_agenda_entries() -> int:
	"""
	Elimina Agenda Entries que apuntan a un Agenda Meeting inexistente.
	Se ejecuta diariamente vía scheduler_events (configurado en hooks.py).

	Solo quedan huérfanas si sync_agenda_entries está apagado (comportamiento
	legacy): delete_meeting no borra las entradas proyectadas.

	Algoritmo:
		1. Buscar Agenda Entries con meeting != NULL cuyo meeting no existe
		2. Eliminar cada una (las entradas manuales no se tocan)
		3. Log cantidad eliminada

	Returns:
		int: Cantidad de entradas eliminadas
	"""
	# 1. Buscar entradas huérfanas
	orphans = frappe.db.sql("""
		SELECT entry.name, entry.user, entry.meeting
		FROM `tabAgenda Entry` entry
		LEFT JOIN `tabAgenda Meeting` meeting ON meeting.name = entry.meeting
		WHERE entry.meeting IS NOT NULL
		AND entry.meeting != ''
		AND meeting.name IS NULL
	""", as_dict=True)

	deleted_count = 0

	# 2. Eliminar cada entrada huérfana
	for orphan in orphans:
		try:
			frappe.delete_doc("Agenda Entry", orphan.name, ignore_permissions=True)
			deleted_count += 1

		except Exception as e:
			frappe.log_error(
				f"Error al eliminar Agenda Entry huérfana {orphan.name} "
				f"(User: {orphan.user}, Meeting: {orphan.meeting}): {str(e)}",
				"Agenda Cleanup"
			)
			# Continuar con las demás entradas
			continue

	# 3. Log cantidad eliminada
	if deleted_count > 0:
		frappe.logger("meeting_agenda").info(
			f"cleanup_orphan_agenda_entries: {deleted_count} entradas huérfanas eliminadas"
		)

	frappe.db.commit()

	return deleted_count

"""
Scheduling Configuration

Flags that decide whether the core reproduces the legacy behaviour (all off)
or keeps agendas and conflicts consistent on every mutation (all on, default).
Stored in the single DocType "Meeting Agenda Settings".
"""

from dataclasses import dataclass

import frappe
from frappe.utils import cint


SETTINGS_DOCTYPE = "Meeting Agenda Settings"


@dataclass(frozen=True)
class SchedulingConfig:
	# add_participant valida conflictos y proyecta entrada BUSY
	validate_added_participants: bool = True
	# update/remove/delete mantienen las Agenda Entries sincronizadas
	sync_agenda_entries: bool = True
	# update_meeting vuelve a validar conflictos de todos los involucrados
	check_conflicts_on_update: bool = True


def get_scheduling_config() -> SchedulingConfig:
	"""
	Lee Meeting Agenda Settings y construye un SchedulingConfig.

	Returns:
		SchedulingConfig con los flags del sitio actual
	"""
	settings = frappe.get_cached_doc(SETTINGS_DOCTYPE)

	return SchedulingConfig(
		validate_added_participants=bool(cint(settings.validate_added_participants)),
		sync_agenda_entries=bool(cint(settings.sync_agenda_entries)),
		check_conflicts_on_update=bool(cint(settings.check_conflicts_on_update)),
	)

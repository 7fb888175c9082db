"""
User Deletion Cascade

Removes every trace of a user from meetings and agendas before the user
itself is deleted.
"""

from typing import Dict, List, Optional

import frappe

from .config import SchedulingConfig, get_scheduling_config
from .projector import AgendaProjector
from .stores.base import Store
from .stores.factory import get_store


class UserCascade:
	"""
	Orden de borrado:
	(a) quitar al usuario de las reuniones donde participa
	(b) borrar sus Agenda Entries
	(c) borrar las reuniones que organiza
	(d) borrar el usuario
	"""

	def __init__(self, store: Store, config: Optional[SchedulingConfig] = None) -> None:
		self.store = store
		self.config = config or SchedulingConfig()
		self.projector = AgendaProjector(store)

	def delete_user_cascade(self, user_id: str) -> Dict[str, int]:
		"""
		Ejecuta (a)-(d).

		Returns:
			dict: contadores {"meetings_left", "entries_deleted", "meetings_deleted"}

		Raises:
			NotFound: si el usuario no existe
		"""
		user = self.store.get_user(user_id)

		with self.store.lock_meetings(self._meeting_ids(user.id)):
			with self.store.lock_users([user.id]):
				with self.store.transaction():
					result = self._release(user.id)
					self.store.delete_user(user.id)

		frappe.logger("meeting_agenda").info(
			f"Usuario eliminado en cascada: {user.id} ({result})"
		)

		return result

	def release_user(self, user_id: str) -> Dict[str, int]:
		"""
		Ejecuta (a)-(c) sin borrar el usuario.

		Se usa desde el hook on_trash de User, donde Frappe borra el usuario.
		"""
		with self.store.lock_meetings(self._meeting_ids(user_id)):
			with self.store.lock_users([user_id]):
				with self.store.transaction():
					return self._release(user_id)

	def _meeting_ids(self, user_id: str) -> List[str]:
		"""Reuniones que el cascade va a tocar; se bloquean antes que el usuario."""
		meetings = self.store.meetings_by_participant(user_id) + self.store.meetings_by_organizer(user_id)
		return [meeting.id for meeting in meetings]

	def _release(self, user_id: str) -> Dict[str, int]:
		# (a) Quitar de reuniones como participante (por id)
		participating = self.store.meetings_by_participant(user_id)
		for meeting in participating:
			meeting.participants.pop(user_id, None)
			self.store.save_meeting(meeting)

		# (b) Borrar entradas de agenda del usuario
		entries = self.store.entries_by_user(user_id)
		if entries:
			self.store.delete_agenda_entries(entries)

		# (c) Borrar reuniones organizadas
		organized = self.store.meetings_by_organizer(user_id)
		for meeting in organized:
			if self.config.sync_agenda_entries:
				self.projector.purge(meeting.id)
			self.store.delete_meeting(meeting.id)

		return {
			"meetings_left": len(participating),
			"entries_deleted": len(entries),
			"meetings_deleted": len(organized),
		}


def on_user_trash(doc, method=None) -> None:
	"""
	doc_events hook (User.on_trash): libera reuniones y agenda del usuario
	antes de que Frappe lo elimine. Configurado en hooks.py.
	"""
	UserCascade(get_store("frappe"), get_scheduling_config()).release_user(doc.name)

"""
Agenda Projection Service

Derives one BUSY Agenda Entry per (meeting, involved user) pair.
"""

from datetime import datetime

from .models import AgendaEntry, AgendaStatus, Meeting, User
from .stores.base import Store


class AgendaProjector:
	"""
	Mantiene las Agenda Entries que provienen de reuniones.

	project() es construcción pura + una escritura. sync/retract/purge se
	usan cuando la reunión cambia después de creada.
	"""

	def __init__(self, store: Store) -> None:
		self.store = store

	def project(
		self,
		user: User,
		meeting_start: datetime,
		meeting_end: datetime,
		meeting: Meeting
	) -> AgendaEntry:
		"""
		Crea y persiste la entrada BUSY de `user` para `meeting`.

		Returns:
			AgendaEntry persistida
		"""
		entry = AgendaEntry(
			user_id=user.id,
			meeting_id=meeting.id,
			date=meeting_start.date(),
			start_time=meeting_start.time(),
			end_date=meeting_end.date(),
			end_time=meeting_end.time(),
			status=AgendaStatus.BUSY,
		)
		return self.store.save_agenda_entry(entry)

	def sync(self, meeting: Meeting) -> None:
		"""
		Re-sincroniza las entradas de una reunión con su estado actual.

		Algoritmo:
			1. Entradas de usuarios que ya no participan -> eliminar
			2. Entradas existentes -> actualizar ventana
			3. Usuarios involucrados sin entrada -> proyectar
		"""
		involved = meeting.involved_user_ids
		seen = set()
		stale = []

		for entry in self.store.entries_by_meeting(meeting.id):
			# Una sola entrada por (user, meeting); duplicados se descartan
			if entry.user_id not in involved or entry.user_id in seen:
				stale.append(entry)
				continue

			seen.add(entry.user_id)
			entry.date = meeting.start.date()
			entry.start_time = meeting.start.time()
			entry.end_date = meeting.end.date()
			entry.end_time = meeting.end.time()
			entry.status = AgendaStatus.BUSY
			self.store.save_agenda_entry(entry)

		if stale:
			self.store.delete_agenda_entries(stale)

		users = dict(meeting.participants)
		users[meeting.organizer.id] = meeting.organizer
		for user_id in involved:
			if user_id not in seen:
				self.project(users[user_id], meeting.start, meeting.end, meeting)

	def retract(self, meeting_id: str, user_id: str) -> None:
		"""Elimina la entrada de un usuario para una reunión."""
		entries = [
			entry for entry in self.store.entries_by_meeting(meeting_id)
			if entry.user_id == user_id
		]
		if entries:
			self.store.delete_agenda_entries(entries)

	def purge(self, meeting_id: str) -> None:
		"""Elimina todas las entradas de una reunión."""
		entries = self.store.entries_by_meeting(meeting_id)
		if entries:
			self.store.delete_agenda_entries(entries)

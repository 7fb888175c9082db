"""
Base Store

Defines the persistence interface the scheduling core depends on.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Iterator, List, Optional

from ..exceptions import NotFound
from ..models import AgendaEntry, Meeting, User


class Store(ABC):
	"""
	Interfaz de persistencia para Users, Meetings y Agenda Entries.

	Los métodos find_* retornan None si el registro no existe; el core se
	encarga de convertir eso en NotFound.
	"""

	def get_user(self, user_id: str) -> User:
		user = self.find_user(user_id)
		if not user:
			raise NotFound("User", user_id)
		return user

	def get_meeting(self, meeting_id: str) -> Meeting:
		meeting = self.find_meeting(meeting_id)
		if not meeting:
			raise NotFound("Agenda Meeting", meeting_id)
		return meeting

	def get_agenda_entry(self, entry_id: str) -> AgendaEntry:
		entry = self.find_agenda_entry(entry_id)
		if not entry:
			raise NotFound("Agenda Entry", entry_id)
		return entry

	# ===== USERS =====

	@abstractmethod
	def find_user(self, user_id: str) -> Optional[User]:
		pass

	@abstractmethod
	def delete_user(self, user_id: str) -> None:
		pass

	# ===== MEETINGS =====

	@abstractmethod
	def find_meeting(self, meeting_id: str) -> Optional[Meeting]:
		pass

	@abstractmethod
	def save_meeting(self, meeting: Meeting) -> Meeting:
		"""
		Inserta o actualiza una reunión en una sola escritura.

		Returns:
			Meeting: la reunión persistida (con id asignado)
		"""
		pass

	@abstractmethod
	def delete_meeting(self, meeting_id: str) -> None:
		pass

	@abstractmethod
	def meetings_by_organizer(self, user_id: str) -> List[Meeting]:
		pass

	@abstractmethod
	def meetings_by_participant(self, user_id: str) -> List[Meeting]:
		pass

	# ===== AGENDA ENTRIES =====

	@abstractmethod
	def find_agenda_entry(self, entry_id: str) -> Optional[AgendaEntry]:
		pass

	@abstractmethod
	def save_agenda_entry(self, entry: AgendaEntry) -> AgendaEntry:
		pass

	@abstractmethod
	def entries_by_user_and_date(self, user_id: str, target_date: date) -> List[AgendaEntry]:
		"""Entradas del usuario cuyo rango [date, end_date] incluye target_date."""
		pass

	@abstractmethod
	def entries_by_user(self, user_id: str) -> List[AgendaEntry]:
		pass

	@abstractmethod
	def entries_by_meeting(self, meeting_id: str) -> List[AgendaEntry]:
		pass

	@abstractmethod
	def delete_agenda_entries(self, entries: Iterable[AgendaEntry]) -> None:
		pass

	# ===== CONSISTENCY =====

	@abstractmethod
	@contextmanager
	def transaction(self) -> Iterator[None]:
		"""Todo o nada: si el bloque falla no queda ninguna escritura."""
		pass

	@abstractmethod
	@contextmanager
	def lock_meetings(self, meeting_ids: Iterable[str]) -> Iterator[None]:
		"""
		Serializa cambios sobre las reuniones dadas.

		Se toma antes que lock_users; quien la tiene debe recargar la reunión
		dentro del bloque antes de validar y guardar.
		"""
		pass

	@abstractmethod
	@contextmanager
	def lock_users(self, user_ids: Iterable[str]) -> Iterator[None]:
		"""
		Serializa operaciones sobre los usuarios dados.

		Se mantiene durante validación + commit para cerrar la carrera
		check-then-write entre dos create_meeting concurrentes.
		"""
		pass


class StoreError(Exception):
	"""Excepción para backends de persistencia mal configurados."""
	pass

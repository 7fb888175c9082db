"""
Overlap Detection Service

Detects scheduling conflicts between a proposed window and the existing
commitments of a user, where commitments are:
- Meetings the user organizes
- Meetings the user participates in
"""

from datetime import datetime
from typing import Dict, List, Optional

from .models import Meeting
from .stores.base import Store


def windows_overlap(
	start_a: datetime,
	end_a: datetime,
	start_b: datetime,
	end_b: datetime
) -> bool:
	"""
	Condición de overlap para ventanas semiabiertas [start, end).

	Ventanas adyacentes (end_a == start_b) NO se solapan.
	"""
	return start_a < end_b and end_a > start_b


class ConflictChecker:
	"""
	Consulta pura: nunca escribe en el store.
	"""

	def __init__(self, store: Store) -> None:
		self.store = store

	def get_commitments(self, user_id: str) -> List[Meeting]:
		"""
		Une reuniones organizadas y reuniones como participante.

		Returns:
			list[Meeting]: ordenadas por start, sin duplicados (keyed por meeting id)
		"""
		commitments: Dict[str, Meeting] = {}

		for meeting in self.store.meetings_by_organizer(user_id):
			commitments[meeting.id] = meeting

		for meeting in self.store.meetings_by_participant(user_id):
			commitments.setdefault(meeting.id, meeting)

		return sorted(commitments.values(), key=lambda m: m.start)

	def find_conflict(
		self,
		user_id: str,
		start: datetime,
		end: datetime,
		exclude_meeting: Optional[str] = None
	) -> Optional[Meeting]:
		"""
		Retorna la primera reunión del usuario que se solapa con [start, end).

		Args:
			user_id: usuario a validar
			start: inicio de la ventana propuesta
			end: fin de la ventana propuesta
			exclude_meeting: id de reunión a ignorar (para ediciones)

		Returns:
			Meeting | None
		"""
		for meeting in self.get_commitments(user_id):
			if exclude_meeting and meeting.id == exclude_meeting:
				continue

			if windows_overlap(start, end, meeting.start, meeting.end):
				return meeting

		return None

	def has_conflict(
		self,
		user_id: str,
		start: datetime,
		end: datetime,
		exclude_meeting: Optional[str] = None
	) -> bool:
		return self.find_conflict(user_id, start, end, exclude_meeting) is not None

"""
Meeting Scheduler

Orchestrates meeting creation, updates and participant changes:
proposed -> validated -> persisted -> projected.

Any validation failure aborts before the first write.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

import frappe

from .config import SchedulingConfig
from .exceptions import InvalidTimeRange, SchedulingConflict
from .models import Meeting, User
from .overlap import ConflictChecker
from .projector import AgendaProjector
from .stores.base import Store


class Scheduler:
	"""
	Servicio de agendamiento de reuniones.

	Flujo de create_meeting:
	1. Validar start < end
	2. Resolver organizador y validar conflictos
	3. Resolver cada participante y validar conflictos (el primero gana)
	4. Persistir Meeting + Agenda Entries en una sola transacción

	Los pasos 2-4 corren con los usuarios involucrados bloqueados.
	"""

	def __init__(
		self,
		store: Store,
		config: Optional[SchedulingConfig] = None,
		checker: Optional[ConflictChecker] = None,
		projector: Optional[AgendaProjector] = None
	) -> None:
		self.store = store
		self.config = config or SchedulingConfig()
		self.checker = checker or ConflictChecker(store)
		self.projector = projector or AgendaProjector(store)

	# ===== COMMANDS =====

	def create_meeting(
		self,
		title: str,
		description: str,
		start: datetime,
		end: datetime,
		organizer_id: str,
		participant_ids: Optional[Iterable[str]] = None
	) -> Meeting:
		"""
		Crea una reunión y proyecta una entrada BUSY por usuario involucrado.

		Args:
			title: título de la reunión
			description: descripción (opcional)
			start: inicio
			end: fin
			organizer_id: id del organizador
			participant_ids: ids de participantes (el organizador se descarta)

		Returns:
			Meeting persistida

		Raises:
			InvalidTimeRange: si start >= end
			NotFound: si el organizador o algún participante no existe
			SchedulingConflict: si algún involucrado ya tiene una reunión solapada
		"""
		self._validate_time_range(start, end)
		participant_ids = self._normalize_participants(organizer_id, participant_ids)

		with self.store.lock_users([organizer_id] + participant_ids):
			organizer = self.store.get_user(organizer_id)
			self._ensure_free(organizer.id, start, end)

			participants: Dict[str, User] = {}
			for participant_id in participant_ids:
				participant = self.store.get_user(participant_id)
				self._ensure_free(participant.id, start, end)
				participants[participant.id] = participant

			meeting = Meeting(
				title=title,
				description=description or "",
				start=start,
				end=end,
				organizer=organizer,
				participants=participants,
			)

			with self.store.transaction():
				meeting = self.store.save_meeting(meeting)
				self.projector.project(organizer, start, end, meeting)
				for participant in participants.values():
					self.projector.project(participant, start, end, meeting)

		frappe.logger("meeting_agenda").info(
			f"Meeting creado: {meeting.id} "
			f"(Organizer: {organizer.id}, Participants: {len(participants)}, "
			f"{start} - {end})"
		)

		return meeting

	def update_meeting(
		self,
		meeting_id: str,
		title: str,
		description: str,
		start: datetime,
		end: datetime
	) -> Meeting:
		"""
		Sobrescribe título, descripción y horario de una reunión.

		Con check_conflicts_on_update se re-validan todos los involucrados
		(excluyendo la propia reunión). Con sync_agenda_entries las entradas
		ya proyectadas se mueven al nuevo horario.
		"""
		self._validate_time_range(start, end)

		with self.store.lock_meetings([meeting_id]):
			meeting = self.store.get_meeting(meeting_id)

			with self.store.lock_users(meeting.involved_user_ids):
				if self.config.check_conflicts_on_update:
					for user_id in meeting.involved_user_ids:
						self._ensure_free(user_id, start, end, exclude_meeting=meeting.id)

				meeting.title = title
				meeting.description = description or ""
				meeting.start = start
				meeting.end = end

				with self.store.transaction():
					meeting = self.store.save_meeting(meeting)
					if self.config.sync_agenda_entries:
						self.projector.sync(meeting)

		frappe.logger("meeting_agenda").info(
			f"Meeting actualizado: {meeting.id} ({start} - {end})"
		)

		return meeting

	def add_participant(self, meeting_id: str, user_id: str) -> Meeting:
		"""
		Agrega un participante. Idempotente si ya está involucrado.

		Con validate_added_participants sigue el mismo camino que la creación:
		validar conflicto -> persistir -> proyectar. Sin él solo persiste.
		"""
		user = self.store.get_user(user_id)

		with self.store.lock_meetings([meeting_id]):
			meeting = self.store.get_meeting(meeting_id)

			if meeting.involves(user.id):
				return meeting

			if not self.config.validate_added_participants:
				meeting.participants[user.id] = user
				return self.store.save_meeting(meeting)

			with self.store.lock_users([user.id]):
				self._ensure_free(user.id, meeting.start, meeting.end, exclude_meeting=meeting.id)
				meeting.participants[user.id] = user

				with self.store.transaction():
					meeting = self.store.save_meeting(meeting)
					self.projector.project(user, meeting.start, meeting.end, meeting)

		return meeting

	def remove_participant(self, meeting_id: str, user_id: str) -> Meeting:
		"""Quita un participante por id. Idempotente."""
		user = self.store.get_user(user_id)

		with self.store.lock_meetings([meeting_id]):
			meeting = self.store.get_meeting(meeting_id)
			meeting.participants.pop(user.id, None)

			with self.store.transaction():
				meeting = self.store.save_meeting(meeting)
				if self.config.sync_agenda_entries:
					self.projector.retract(meeting.id, user.id)

		return meeting

	def delete_meeting(self, meeting_id: str) -> None:
		with self.store.lock_meetings([meeting_id]):
			meeting = self.store.get_meeting(meeting_id)

			with self.store.transaction():
				if self.config.sync_agenda_entries:
					self.projector.purge(meeting.id)
				self.store.delete_meeting(meeting.id)

		frappe.logger("meeting_agenda").info(f"Meeting eliminado: {meeting.id}")

	# ===== QUERIES =====

	def get_meeting(self, meeting_id: str) -> Meeting:
		return self.store.get_meeting(meeting_id)

	def meetings_by_organizer(self, user_id: str) -> List[Meeting]:
		self.store.get_user(user_id)
		return self.store.meetings_by_organizer(user_id)

	def meetings_by_participant(self, user_id: str) -> List[Meeting]:
		self.store.get_user(user_id)
		return self.store.meetings_by_participant(user_id)

	def meetings_for_user(self, user_id: str) -> List[Meeting]:
		"""Reuniones donde el usuario organiza o participa, sin duplicados."""
		self.store.get_user(user_id)
		return self.checker.get_commitments(user_id)

	# ===== HELPERS =====

	def _validate_time_range(self, start: datetime, end: datetime) -> None:
		if start >= end:
			raise InvalidTimeRange(start, end)

	def _ensure_free(
		self,
		user_id: str,
		start: datetime,
		end: datetime,
		exclude_meeting: Optional[str] = None
	) -> None:
		conflict = self.checker.find_conflict(user_id, start, end, exclude_meeting)
		if conflict:
			raise SchedulingConflict(user_id, (conflict.start, conflict.end), conflict.id)

	def _normalize_participants(
		self,
		organizer_id: str,
		participant_ids: Optional[Iterable[str]]
	) -> List[str]:
		"""Quita duplicados y al organizador, preservando el orden."""
		normalized = []
		for participant_id in participant_ids or []:
			if participant_id == organizer_id or participant_id in normalized:
				continue
			normalized.append(participant_id)
		return normalized

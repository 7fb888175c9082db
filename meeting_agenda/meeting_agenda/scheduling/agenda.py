"""
Agenda Service

Manual agenda entries (not tied to a meeting) and agenda reads.
"""

from datetime import date, datetime, time
from typing import List, Optional, Union

from .exceptions import InvalidTimeRange
from .models import AgendaEntry, AgendaStatus
from .stores.base import Store


class AgendaService:
	def __init__(self, store: Store) -> None:
		self.store = store

	def create_entry(
		self,
		user_id: str,
		entry_date: date,
		start_time: time,
		end_time: time,
		status: Union[AgendaStatus, str] = AgendaStatus.BUSY
	) -> AgendaEntry:
		"""
		Crea una entrada manual (sin reunión) en la agenda del usuario.

		Raises:
			NotFound: si el usuario no existe
			InvalidTimeRange: si start_time >= end_time
		"""
		user = self.store.get_user(user_id)
		self._validate_times(entry_date, start_time, end_time)

		entry = AgendaEntry(
			user_id=user.id,
			date=entry_date,
			start_time=start_time,
			end_time=end_time,
			status=AgendaStatus(status),
		)
		return self.store.save_agenda_entry(entry)

	def update_entry(
		self,
		entry_id: str,
		entry_date: date,
		start_time: time,
		end_time: time,
		status: Union[AgendaStatus, str]
	) -> AgendaEntry:
		"""Sobrescribe fecha, horario y estado de una entrada (una sola fecha)."""
		entry = self.store.get_agenda_entry(entry_id)
		self._validate_times(entry_date, start_time, end_time)

		entry.date = entry_date
		entry.end_date = entry_date
		entry.start_time = start_time
		entry.end_time = end_time
		entry.status = AgendaStatus(status)

		return self.store.save_agenda_entry(entry)

	def delete_entry(self, entry_id: str) -> None:
		entry = self.store.get_agenda_entry(entry_id)
		self.store.delete_agenda_entries([entry])

	def get_entry(self, entry_id: str) -> AgendaEntry:
		return self.store.get_agenda_entry(entry_id)

	def entries_for_user(self, user_id: str, target_date: Optional[date] = None) -> List[AgendaEntry]:
		self.store.get_user(user_id)
		if target_date:
			return self.store.entries_by_user_and_date(user_id, target_date)
		return self.store.entries_by_user(user_id)

	def _validate_times(self, entry_date: date, start_time: time, end_time: time) -> None:
		if start_time >= end_time:
			raise InvalidTimeRange(
				datetime.combine(entry_date, start_time),
				datetime.combine(entry_date, end_time)
			)

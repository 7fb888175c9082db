"""
In-Memory Store

Store backed by dicts. Used by the unit tests and by scripts that exercise
the scheduling core without a site.
"""

import copy
import itertools
from contextlib import contextmanager
from datetime import date
from threading import Lock, RLock
from typing import Dict, Iterable, Iterator, List, Optional

from ..models import AgendaEntry, Meeting, User
from .base import Store


class MemoryStore(Store):
	"""
	Store en memoria.

	Retorna copias de los registros: modificar un Meeting sin guardarlo no
	altera lo persistido, igual que con un backend real.
	"""

	def __init__(self) -> None:
		self._users: Dict[str, User] = {}
		self._meetings: Dict[str, Meeting] = {}
		self._entries: Dict[str, AgendaEntry] = {}
		self._meeting_seq = itertools.count(1)
		self._entry_seq = itertools.count(1)

		self._lock = RLock()
		self._user_locks: Dict[str, Lock] = {}
		self._meeting_locks: Dict[str, Lock] = {}

	# ===== USERS =====

	def add_user(self, user_id: str, full_name: str = "") -> User:
		user = User(id=user_id, full_name=full_name or user_id)
		with self._lock:
			self._users[user_id] = user
		return user

	def find_user(self, user_id: str) -> Optional[User]:
		return self._users.get(user_id)

	def delete_user(self, user_id: str) -> None:
		with self._lock:
			self._users.pop(user_id, None)

	# ===== MEETINGS =====

	def find_meeting(self, meeting_id: str) -> Optional[Meeting]:
		meeting = self._meetings.get(meeting_id)
		return copy.deepcopy(meeting) if meeting else None

	def save_meeting(self, meeting: Meeting) -> Meeting:
		with self._lock:
			if not meeting.id:
				meeting.id = f"MTG-{next(self._meeting_seq):05d}"
			self._meetings[meeting.id] = copy.deepcopy(meeting)
		return meeting

	def delete_meeting(self, meeting_id: str) -> None:
		with self._lock:
			self._meetings.pop(meeting_id, None)

	def meetings_by_organizer(self, user_id: str) -> List[Meeting]:
		return self._select_meetings(lambda m: m.organizer.id == user_id)

	def meetings_by_participant(self, user_id: str) -> List[Meeting]:
		return self._select_meetings(lambda m: user_id in m.participants)

	def _select_meetings(self, predicate) -> List[Meeting]:
		with self._lock:
			selected = [copy.deepcopy(m) for m in self._meetings.values() if predicate(m)]
		selected.sort(key=lambda m: m.start)
		return selected

	# ===== AGENDA ENTRIES =====

	def find_agenda_entry(self, entry_id: str) -> Optional[AgendaEntry]:
		entry = self._entries.get(entry_id)
		return copy.deepcopy(entry) if entry else None

	def save_agenda_entry(self, entry: AgendaEntry) -> AgendaEntry:
		with self._lock:
			if not entry.id:
				entry.id = f"AGE-{next(self._entry_seq):05d}"
			self._entries[entry.id] = copy.deepcopy(entry)
		return entry

	def entries_by_user_and_date(self, user_id: str, target_date: date) -> List[AgendaEntry]:
		return self._select_entries(
			lambda e: e.user_id == user_id and e.covers_date(target_date)
		)

	def entries_by_user(self, user_id: str) -> List[AgendaEntry]:
		return self._select_entries(lambda e: e.user_id == user_id)

	def entries_by_meeting(self, meeting_id: str) -> List[AgendaEntry]:
		return self._select_entries(lambda e: e.meeting_id == meeting_id)

	def delete_agenda_entries(self, entries: Iterable[AgendaEntry]) -> None:
		with self._lock:
			for entry in entries:
				self._entries.pop(entry.id, None)

	def _select_entries(self, predicate) -> List[AgendaEntry]:
		with self._lock:
			selected = [copy.deepcopy(e) for e in self._entries.values() if predicate(e)]
		selected.sort(key=lambda e: e.start)
		return selected

	# ===== CONSISTENCY =====

	@contextmanager
	def transaction(self) -> Iterator[None]:
		with self._lock:
			snapshot = (
				copy.deepcopy(self._users),
				copy.deepcopy(self._meetings),
				copy.deepcopy(self._entries),
			)
			try:
				yield
			except Exception:
				self._users, self._meetings, self._entries = snapshot
				raise

	def lock_meetings(self, meeting_ids: Iterable[str]) -> Iterator[None]:
		return self._hold(self._meeting_locks, meeting_ids)

	def lock_users(self, user_ids: Iterable[str]) -> Iterator[None]:
		return self._hold(self._user_locks, user_ids)

	@contextmanager
	def _hold(self, registry: Dict[str, Lock], ids: Iterable[str]) -> Iterator[None]:
		# Orden fijo para evitar deadlocks entre operaciones que comparten ids
		keys = sorted(set(key for key in ids if key))
		with self._lock:
			locks = [registry.setdefault(key, Lock()) for key in keys]

		acquired = []
		try:
			for lock in locks:
				lock.acquire()
				acquired.append(lock)
			yield
		finally:
			for lock in reversed(acquired):
				lock.release()

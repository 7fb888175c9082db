"""
Frappe Store

Store backed by the app DocTypes:
- User (core DocType)
- Agenda Meeting + Agenda Meeting Participant (child table)
- Agenda Entry
"""

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Iterator, List, Optional, Union

import frappe
from frappe.utils import get_datetime, get_time, getdate

from ..models import DATETIME_FORMAT, AgendaEntry, Meeting, User
from .base import Store


MEETING_DOCTYPE = "Agenda Meeting"
PARTICIPANT_DOCTYPE = "Agenda Meeting Participant"
ENTRY_DOCTYPE = "Agenda Entry"

ENTRY_FIELDS = ["name", "user", "meeting", "date", "end_date", "start_time", "end_time", "status"]


def _to_time(time_value: Union[time, timedelta, str]) -> time:
	"""
	Convierte diferentes formatos de tiempo a datetime.time.

	Args:
		time_value: puede ser time, timedelta (desde medianoche, así lo
			retorna MariaDB), o string

	Returns:
		datetime.time object
	"""
	if isinstance(time_value, time):
		return time_value
	elif isinstance(time_value, timedelta):
		return (datetime.min + time_value).time()
	elif isinstance(time_value, str):
		return get_time(time_value)
	else:
		raise ValueError(f"Cannot convert {type(time_value)} to time")


class FrappeStore(Store):
	"""
	Store sobre la base de datos del sitio.

	No hace commit: la transacción la maneja el request (o el test). Los
	locks de usuario son row locks (SELECT ... FOR UPDATE) y se liberan con
	el commit/rollback de esa transacción.
	"""

	# ===== USERS =====

	def find_user(self, user_id: str) -> Optional[User]:
		if not user_id:
			return None

		row = frappe.db.get_value("User", user_id, ["name", "full_name"], as_dict=True)
		if not row:
			return None

		return User(id=row.name, full_name=row.full_name or row.name)

	def delete_user(self, user_id: str) -> None:
		frappe.delete_doc("User", user_id, ignore_permissions=True)

	# ===== MEETINGS =====

	def find_meeting(self, meeting_id: str) -> Optional[Meeting]:
		if not meeting_id or not frappe.db.exists(MEETING_DOCTYPE, meeting_id):
			return None
		return self._to_meeting(frappe.get_doc(MEETING_DOCTYPE, meeting_id))

	def save_meeting(self, meeting: Meeting) -> Meeting:
		if meeting.id and frappe.db.exists(MEETING_DOCTYPE, meeting.id):
			doc = frappe.get_doc(MEETING_DOCTYPE, meeting.id)
		else:
			doc = frappe.new_doc(MEETING_DOCTYPE)

		doc.update({
			"title": meeting.title,
			"description": meeting.description,
			"start_datetime": meeting.start.strftime(DATETIME_FORMAT),
			"end_datetime": meeting.end.strftime(DATETIME_FORMAT),
			"organizer": meeting.organizer.id,
		})
		doc.set("participants", [
			{"user": user.id, "full_name": user.full_name}
			for user in meeting.participants.values()
		])
		doc.save(ignore_permissions=True)

		meeting.id = doc.name
		return meeting

	def delete_meeting(self, meeting_id: str) -> None:
		# force: las Agenda Entries pueden seguir apuntando a la reunión
		# cuando sync_agenda_entries está apagado
		frappe.delete_doc(MEETING_DOCTYPE, meeting_id, ignore_permissions=True, force=True)

	def meetings_by_organizer(self, user_id: str) -> List[Meeting]:
		names = frappe.get_all(
			MEETING_DOCTYPE,
			filters={"organizer": user_id},
			pluck="name",
			order_by="start_datetime asc"
		)
		return [self._to_meeting(frappe.get_doc(MEETING_DOCTYPE, name)) for name in names]

	def meetings_by_participant(self, user_id: str) -> List[Meeting]:
		names = frappe.get_all(
			PARTICIPANT_DOCTYPE,
			filters={"user": user_id, "parenttype": MEETING_DOCTYPE},
			pluck="parent",
			distinct=True
		)
		meetings = [self._to_meeting(frappe.get_doc(MEETING_DOCTYPE, name)) for name in names]
		meetings.sort(key=lambda m: m.start)
		return meetings

	def _to_meeting(self, doc: Any) -> Meeting:
		organizer = User(id=doc.organizer, full_name=doc.organizer_name or doc.organizer)

		participants = {}
		for row in doc.participants:
			participants[row.user] = User(id=row.user, full_name=row.full_name or row.user)

		return Meeting(
			id=doc.name,
			title=doc.title,
			description=doc.description or "",
			start=get_datetime(doc.start_datetime),
			end=get_datetime(doc.end_datetime),
			organizer=organizer,
			participants=participants,
		)

	# ===== AGENDA ENTRIES =====

	def find_agenda_entry(self, entry_id: str) -> Optional[AgendaEntry]:
		if not entry_id:
			return None

		row = frappe.db.get_value(ENTRY_DOCTYPE, entry_id, ENTRY_FIELDS, as_dict=True)
		return self._to_entry(row) if row else None

	def save_agenda_entry(self, entry: AgendaEntry) -> AgendaEntry:
		if entry.id and frappe.db.exists(ENTRY_DOCTYPE, entry.id):
			doc = frappe.get_doc(ENTRY_DOCTYPE, entry.id)
		else:
			doc = frappe.new_doc(ENTRY_DOCTYPE)

		doc.update({
			"user": entry.user_id,
			"meeting": entry.meeting_id,
			"date": entry.date.isoformat(),
			"end_date": entry.end_date.isoformat(),
			"start_time": entry.start_time.strftime("%H:%M:%S"),
			"end_time": entry.end_time.strftime("%H:%M:%S"),
			"status": entry.status.value,
		})
		doc.save(ignore_permissions=True)

		entry.id = doc.name
		return entry

	def entries_by_user_and_date(self, user_id: str, target_date: date) -> List[AgendaEntry]:
		return self._select_entries([
			["user", "=", user_id],
			["date", "<=", target_date],
			["end_date", ">=", target_date],
		])

	def entries_by_user(self, user_id: str) -> List[AgendaEntry]:
		return self._select_entries({"user": user_id})

	def entries_by_meeting(self, meeting_id: str) -> List[AgendaEntry]:
		return self._select_entries({"meeting": meeting_id})

	def delete_agenda_entries(self, entries: Iterable[AgendaEntry]) -> None:
		for entry in entries:
			frappe.delete_doc(ENTRY_DOCTYPE, entry.id, ignore_permissions=True)

	def _select_entries(self, filters: Any) -> List[AgendaEntry]:
		rows = frappe.get_all(
			ENTRY_DOCTYPE,
			filters=filters,
			fields=ENTRY_FIELDS,
			order_by="date asc, start_time asc"
		)
		return [self._to_entry(row) for row in rows]

	def _to_entry(self, row: Any) -> AgendaEntry:
		return AgendaEntry(
			id=row.name,
			user_id=row.user,
			meeting_id=row.meeting or None,
			date=getdate(row.date),
			end_date=getdate(row.end_date or row.date),
			start_time=_to_time(row.start_time),
			end_time=_to_time(row.end_time),
			status=row.status,
		)

	# ===== CONSISTENCY =====

	@contextmanager
	def transaction(self) -> Iterator[None]:
		save_point = f"meeting_agenda_{frappe.generate_hash(length=8)}"
		frappe.db.savepoint(save_point)
		try:
			yield
		except Exception:
			frappe.db.rollback(save_point=save_point)
			raise
		else:
			frappe.db.release_savepoint(save_point)

	@contextmanager
	def lock_meetings(self, meeting_ids: Iterable[str]) -> Iterator[None]:
		self._lock_rows(MEETING_DOCTYPE, meeting_ids)
		yield

	@contextmanager
	def lock_users(self, user_ids: Iterable[str]) -> Iterator[None]:
		self._lock_rows("User", user_ids)
		yield

	def _lock_rows(self, doctype: str, names: Iterable[str]) -> None:
		keys = sorted(set(name for name in names if name))
		if keys:
			frappe.db.get_values(
				doctype,
				{"name": ["in", keys]},
				"name",
				order_by="name asc",
				for_update=True
			)

"""
Tests for scheduling/stores/frappe_store.py

Runs the scheduling core against the site database: persistence of
meetings and agenda entries, rollback on conflict and user cascade.
"""

import frappe
from frappe.tests.utils import FrappeTestCase
from datetime import date, datetime, time

from meeting_agenda.meeting_agenda.scheduling.agenda import AgendaService
from meeting_agenda.meeting_agenda.scheduling.availability import AvailabilityQuery
from meeting_agenda.meeting_agenda.scheduling.cascade import UserCascade
from meeting_agenda.meeting_agenda.scheduling.config import SchedulingConfig
from meeting_agenda.meeting_agenda.scheduling.exceptions import NotFound, SchedulingConflict
from meeting_agenda.meeting_agenda.scheduling.models import AgendaStatus
from meeting_agenda.meeting_agenda.scheduling.scheduler import Scheduler
from meeting_agenda.meeting_agenda.scheduling.stores.factory import get_store
from meeting_agenda.meeting_agenda.scheduling.stores.frappe_store import FrappeStore


def make_user(email, first_name):
	if not frappe.db.exists("User", email):
		frappe.get_doc({
			"doctype": "User",
			"email": email,
			"first_name": first_name,
			"send_welcome_email": 0
		}).insert(ignore_permissions=True)
	return email


def dt(hour, minute=0, day=2):
	return datetime(2030, 3, day, hour, minute)


class TestFrappeStore(FrappeTestCase):
	"""Tests for FrappeStore."""

	def setUp(self):
		self.org = make_user("org.store@example.com", "Org")
		self.ana = make_user("ana.store@example.com", "Ana")
		self.luis = make_user("luis.store@example.com", "Luis")

		self.store = get_store("frappe")
		self.scheduler = Scheduler(self.store, SchedulingConfig())

	def tearDown(self):
		frappe.db.rollback()

	def test_factory_returns_frappe_store(self):
		self.assertIsInstance(self.store, FrappeStore)

	def test_find_user(self):
		user = self.store.find_user(self.ana)

		self.assertEqual(user.id, self.ana)
		self.assertEqual(user.full_name, "Ana")
		self.assertIsNone(self.store.find_user("ghost.store@example.com"))

	def test_create_meeting_persists_doc_and_entries(self):
		meeting = self.scheduler.create_meeting(
			"Planning", "desc", dt(10), dt(11), self.org, [self.ana, self.luis]
		)

		doc = frappe.get_doc("Agenda Meeting", meeting.id)
		self.assertEqual(doc.organizer, self.org)
		self.assertEqual([row.user for row in doc.participants], [self.ana, self.luis])

		entries = frappe.get_all(
			"Agenda Entry",
			filters={"meeting": meeting.id},
			fields=["user", "status"]
		)
		self.assertEqual(sorted(e.user for e in entries), sorted([self.org, self.ana, self.luis]))
		self.assertTrue(all(e.status == "BUSY" for e in entries))

	def test_round_trip_meeting(self):
		meeting = self.scheduler.create_meeting("Planning", "", dt(10), dt(11), self.org, [self.ana])

		loaded = self.store.get_meeting(meeting.id)

		self.assertEqual(loaded.start, dt(10))
		self.assertEqual(loaded.end, dt(11))
		self.assertEqual(loaded.participant_ids, [self.ana])
		self.assertEqual([m.id for m in self.store.meetings_by_participant(self.ana)], [meeting.id])

	def test_conflict_writes_nothing(self):
		self.scheduler.create_meeting("First", "", dt(10), dt(11), self.luis, [])

		with self.assertRaises(SchedulingConflict):
			self.scheduler.create_meeting(
				"Second", "", dt(10, 30), dt(11, 30), self.org, [self.ana, self.luis]
			)

		self.assertFalse(frappe.db.exists("Agenda Meeting", {"title": "Second"}))
		self.assertFalse(frappe.db.exists("Agenda Entry", {"user": self.ana}))

	def test_transaction_rolls_back(self):
		with self.assertRaises(RuntimeError):
			with self.store.transaction():
				self.scheduler.create_meeting("Lost", "", dt(12), dt(13), self.org, [])
				raise RuntimeError("boom")

		self.assertFalse(frappe.db.exists("Agenda Meeting", {"title": "Lost"}))

	def test_entry_crossing_midnight(self):
		self.scheduler.create_meeting("Late", "", dt(23), dt(1, day=3), self.org, [self.ana])

		entries = self.store.entries_by_user_and_date(self.ana, date(2030, 3, 3))
		self.assertEqual(len(entries), 1)
		self.assertEqual(entries[0].end, dt(1, day=3))

		query = AvailabilityQuery(self.store)
		self.assertFalse(query.is_available(self.ana, dt(0, 30, day=3), dt(2, day=3)))

	def test_manual_entry(self):
		entry = AgendaService(self.store).create_entry(
			self.ana, date(2030, 3, 4), time(9), time(10), AgendaStatus.FREE
		)

		loaded = self.store.get_agenda_entry(entry.id)
		self.assertEqual(loaded.start_time, time(9))
		self.assertEqual(loaded.status, AgendaStatus.FREE)
		self.assertIsNone(loaded.meeting_id)

	def test_remove_participant_deletes_entry(self):
		meeting = self.scheduler.create_meeting("Planning", "", dt(10), dt(11), self.org, [self.ana])

		self.scheduler.remove_participant(meeting.id, self.ana)

		self.assertFalse(frappe.db.exists("Agenda Entry", {"user": self.ana, "meeting": meeting.id}))
		self.assertEqual(frappe.get_doc("Agenda Meeting", meeting.id).participants, [])

	def test_meeting_lock_inside_transaction(self):
		"""Row locks on meetings and users can be taken together and nested in a savepoint."""
		meeting = self.scheduler.create_meeting("Planning", "", dt(10), dt(11), self.org, [self.ana])

		with self.store.lock_meetings([meeting.id, meeting.id, None]):
			with self.store.lock_users([self.luis, self.org]):
				with self.store.transaction():
					loaded = self.store.get_meeting(meeting.id)
					luis = self.store.get_user(self.luis)
					loaded.participants[luis.id] = luis
					self.store.save_meeting(loaded)

		self.assertEqual(
			[row.user for row in frappe.get_doc("Agenda Meeting", meeting.id).participants],
			[self.ana, self.luis]
		)

	def test_delete_meeting_removes_entries(self):
		meeting = self.scheduler.create_meeting("Planning", "", dt(10), dt(11), self.org, [self.ana])

		self.scheduler.delete_meeting(meeting.id)

		self.assertFalse(frappe.db.exists("Agenda Meeting", meeting.id))
		self.assertFalse(frappe.db.exists("Agenda Entry", {"meeting": meeting.id}))

	def test_release_user(self):
		joined = self.scheduler.create_meeting("Joined", "", dt(9), dt(10), self.org, [self.ana])
		organized = self.scheduler.create_meeting("Own", "", dt(14), dt(15), self.ana, [self.luis])

		result = UserCascade(self.store).release_user(self.ana)

		self.assertEqual(result["meetings_deleted"], 1)
		self.assertEqual(frappe.get_doc("Agenda Meeting", joined.id).participants, [])
		self.assertFalse(frappe.db.exists("Agenda Meeting", organized.id))
		self.assertFalse(frappe.db.exists("Agenda Entry", {"user": self.ana}))
		self.assertFalse(frappe.db.exists("Agenda Entry", {"meeting": organized.id}))

	def test_delete_user_cascade(self):
		temp = make_user("temp.store@example.com", "Temp")
		self.scheduler.create_meeting("Temp", "", dt(16), dt(17), temp, [self.ana])

		UserCascade(self.store).delete_user_cascade(temp)

		self.assertFalse(frappe.db.exists("User", temp))
		self.assertFalse(frappe.db.exists("Agenda Meeting", {"organizer": temp}))

	def test_get_missing_meeting(self):
		with self.assertRaises(NotFound):
			self.store.get_meeting("MTG-99999")

"""
Tests for scheduling/tasks.py

Tests scheduled tasks like cleanup_orphan_agenda_entries.
"""

from datetime import date, datetime, time
from unittest.mock import patch

import frappe
from frappe.tests.utils import FrappeTestCase

from meeting_agenda.meeting_agenda.scheduling.agenda import AgendaService
from meeting_agenda.meeting_agenda.scheduling.config import SchedulingConfig
from meeting_agenda.meeting_agenda.scheduling.scheduler import Scheduler
from meeting_agenda.meeting_agenda.scheduling.stores.factory import get_store
from meeting_agenda.meeting_agenda.scheduling.tasks import cleanup_orphan_agenda_entries


def make_user(email, first_name):
	if not frappe.db.exists("User", email):
		frappe.get_doc({
			"doctype": "User",
			"email": email,
			"first_name": first_name,
			"send_welcome_email": 0
		}).insert(ignore_permissions=True)
	return email


class TestTasks(FrappeTestCase):
	"""Tests for scheduled task functions."""

	def setUp(self):
		self.org = make_user("org.tasks@example.com", "Org")
		self.ana = make_user("ana.tasks@example.com", "Ana")
		self.store = get_store("frappe")

		# sync apagado: delete_meeting deja las entradas huérfanas
		self.legacy = Scheduler(self.store, SchedulingConfig(sync_agenda_entries=False))

		# El task hace commit; en tests se deja todo para el rollback
		commit = patch.object(frappe.local.db, "commit")
		commit.start()
		self.addCleanup(commit.stop)

	def tearDown(self):
		frappe.db.rollback()

	def test_cleanup_returns_count(self):
		result = cleanup_orphan_agenda_entries()

		self.assertIsInstance(result, int)
		self.assertGreaterEqual(result, 0)

	def test_cleanup_deletes_orphans(self):
		meeting = self.legacy.create_meeting(
			"Orphan", "", datetime(2030, 6, 3, 10), datetime(2030, 6, 3, 11), self.org, [self.ana]
		)
		self.legacy.delete_meeting(meeting.id)
		self.assertEqual(frappe.db.count("Agenda Entry", {"meeting": meeting.id}), 2)

		deleted = cleanup_orphan_agenda_entries()

		self.assertGreaterEqual(deleted, 2)
		self.assertEqual(frappe.db.count("Agenda Entry", {"meeting": meeting.id}), 0)

	def test_cleanup_keeps_manual_and_live_entries(self):
		manual = AgendaService(self.store).create_entry(self.ana, date(2030, 6, 4), time(9), time(10))
		live = self.legacy.create_meeting(
			"Live", "", datetime(2030, 6, 4, 14), datetime(2030, 6, 4, 15), self.org, [self.ana]
		)

		cleanup_orphan_agenda_entries()

		self.assertTrue(frappe.db.exists("Agenda Entry", manual.id))
		self.assertEqual(frappe.db.count("Agenda Entry", {"meeting": live.id}), 2)

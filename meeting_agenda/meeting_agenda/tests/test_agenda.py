"""
Tests for scheduling/agenda.py

Tests manual agenda entries and agenda reads.
"""

import unittest
from datetime import date, datetime, time

from meeting_agenda.meeting_agenda.scheduling.agenda import AgendaService
from meeting_agenda.meeting_agenda.scheduling.exceptions import InvalidTimeRange, NotFound
from meeting_agenda.meeting_agenda.scheduling.models import AgendaStatus
from meeting_agenda.meeting_agenda.scheduling.scheduler import Scheduler
from meeting_agenda.meeting_agenda.scheduling.stores.memory import MemoryStore


MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)


class TestAgendaService(unittest.TestCase):
	"""Tests for AgendaService."""

	def setUp(self):
		self.store = MemoryStore()
		self.user = self.store.add_user("ana@example.com", "Ana")
		self.service = AgendaService(self.store)

	def test_create_manual_entry(self):
		entry = self.service.create_entry(self.user.id, MONDAY, time(9), time(10), "FREE")

		self.assertIsNotNone(entry.id)
		self.assertIsNone(entry.meeting_id)
		self.assertEqual(entry.status, AgendaStatus.FREE)
		self.assertEqual(entry.end_date, MONDAY)

	def test_create_default_status_busy(self):
		entry = self.service.create_entry(self.user.id, MONDAY, time(9), time(10))

		self.assertTrue(entry.is_busy)

	def test_create_invalid_times(self):
		with self.assertRaises(InvalidTimeRange):
			self.service.create_entry(self.user.id, MONDAY, time(10), time(9))

	def test_create_unknown_user(self):
		with self.assertRaises(NotFound):
			self.service.create_entry("ghost@example.com", MONDAY, time(9), time(10))

	def test_update_entry(self):
		entry = self.service.create_entry(self.user.id, MONDAY, time(9), time(10))

		updated = self.service.update_entry(entry.id, TUESDAY, time(11), time(12), AgendaStatus.FREE)

		stored = self.service.get_entry(entry.id)
		self.assertEqual(updated.id, entry.id)
		self.assertEqual(stored.date, TUESDAY)
		self.assertEqual(stored.end_date, TUESDAY)
		self.assertEqual(stored.start_time, time(11))
		self.assertEqual(stored.status, AgendaStatus.FREE)

	def test_delete_entry(self):
		entry = self.service.create_entry(self.user.id, MONDAY, time(9), time(10))

		self.service.delete_entry(entry.id)

		with self.assertRaises(NotFound):
			self.service.get_entry(entry.id)

	def test_entries_for_user_by_date(self):
		self.service.create_entry(self.user.id, MONDAY, time(9), time(10))
		self.service.create_entry(self.user.id, TUESDAY, time(9), time(10))

		self.assertEqual(len(self.service.entries_for_user(self.user.id)), 2)
		self.assertEqual(
			[e.date for e in self.service.entries_for_user(self.user.id, TUESDAY)],
			[TUESDAY]
		)

	def test_entry_crossing_midnight_listed_on_both_dates(self):
		organizer = self.store.add_user("org@example.com")
		Scheduler(self.store).create_meeting(
			"Late", "", datetime(2026, 3, 2, 23), datetime(2026, 3, 3, 1),
			organizer.id, [self.user.id]
		)

		self.assertEqual(len(self.service.entries_for_user(self.user.id, MONDAY)), 1)
		self.assertEqual(len(self.service.entries_for_user(self.user.id, TUESDAY)), 1)

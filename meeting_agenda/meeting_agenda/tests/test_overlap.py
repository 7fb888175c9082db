"""
Tests for scheduling/overlap.py

Tests the half-open overlap rule and commitment lookup.
"""

import unittest
from datetime import datetime

from meeting_agenda.meeting_agenda.scheduling.models import Meeting
from meeting_agenda.meeting_agenda.scheduling.overlap import ConflictChecker, windows_overlap
from meeting_agenda.meeting_agenda.scheduling.stores.base import StoreError
from meeting_agenda.meeting_agenda.scheduling.stores.factory import get_store
from meeting_agenda.meeting_agenda.scheduling.stores.memory import MemoryStore


def dt(hour, minute=0, day=2):
	return datetime(2026, 3, day, hour, minute)


class TestWindowsOverlap(unittest.TestCase):
	"""Tests for windows_overlap."""

	def test_partial_overlap(self):
		self.assertTrue(windows_overlap(dt(10), dt(11), dt(10, 30), dt(11, 30)))
		self.assertTrue(windows_overlap(dt(10, 30), dt(11, 30), dt(10), dt(11)))

	def test_containment(self):
		self.assertTrue(windows_overlap(dt(9), dt(12), dt(10), dt(11)))
		self.assertTrue(windows_overlap(dt(10), dt(11), dt(9), dt(12)))

	def test_identical_windows(self):
		self.assertTrue(windows_overlap(dt(10), dt(11), dt(10), dt(11)))

	def test_adjacent_windows_do_not_overlap(self):
		"""end == start is not a conflict."""
		self.assertFalse(windows_overlap(dt(10), dt(11), dt(11), dt(12)))
		self.assertFalse(windows_overlap(dt(11), dt(12), dt(10), dt(11)))

	def test_disjoint_windows(self):
		self.assertFalse(windows_overlap(dt(8), dt(9), dt(10), dt(11)))

	def test_across_days(self):
		self.assertTrue(windows_overlap(dt(23), dt(1, day=3), dt(0, 30, day=3), dt(2, day=3)))


class TestConflictChecker(unittest.TestCase):
	"""Tests for ConflictChecker."""

	def setUp(self):
		self.store = MemoryStore()
		self.alice = self.store.add_user("alice@example.com", "Alice")
		self.bob = self.store.add_user("bob@example.com", "Bob")
		self.carol = self.store.add_user("carol@example.com", "Carol")
		self.checker = ConflictChecker(self.store)

	def _save(self, title, start, end, organizer, participants=()):
		meeting = Meeting(
			title=title,
			start=start,
			end=end,
			organizer=organizer,
			participants={u.id: u for u in participants},
		)
		return self.store.save_meeting(meeting)

	def test_commitments_union_organized_and_participating(self):
		organized = self._save("Organized", dt(14), dt(15), self.alice)
		joined = self._save("Joined", dt(9), dt(10), self.bob, [self.alice])

		commitments = self.checker.get_commitments(self.alice.id)

		self.assertEqual([m.id for m in commitments], [joined.id, organized.id])

	def test_commitments_without_duplicates(self):
		"""A meeting listed both as organized and participating counts once."""
		meeting = self._save("Both", dt(9), dt(10), self.alice, [self.alice, self.bob])

		commitments = self.checker.get_commitments(self.alice.id)

		self.assertEqual(len(commitments), 1)
		self.assertEqual(commitments[0].id, meeting.id)

	def test_find_conflict_returns_overlapping_meeting(self):
		existing = self._save("Existing", dt(10), dt(11), self.bob, [self.carol])

		conflict = self.checker.find_conflict(self.carol.id, dt(10, 30), dt(11, 30))

		self.assertIsNotNone(conflict)
		self.assertEqual(conflict.id, existing.id)

	def test_no_conflict_for_adjacent_window(self):
		self._save("Existing", dt(10), dt(11), self.bob)

		self.assertFalse(self.checker.has_conflict(self.bob.id, dt(11), dt(12)))

	def test_exclude_meeting(self):
		existing = self._save("Existing", dt(10), dt(11), self.bob)

		self.assertFalse(
			self.checker.has_conflict(self.bob.id, dt(10), dt(11), exclude_meeting=existing.id)
		)

	def test_unrelated_user_has_no_conflict(self):
		self._save("Existing", dt(10), dt(11), self.bob)

		self.assertFalse(self.checker.has_conflict(self.alice.id, dt(10), dt(11)))


class TestStoreFactory(unittest.TestCase):
	"""Tests for get_store."""

	def test_memory_backend(self):
		self.assertIsInstance(get_store("memory"), MemoryStore)

	def test_unsupported_backend(self):
		with self.assertRaises(StoreError):
			get_store("redis")

# Copyright (c) 2026, Sebastian Ortiz Valencia and Contributors
# See license.txt

"""
Tests for Agenda Meeting DocType

Tests record-level validations.
"""

import frappe
from frappe.tests.utils import FrappeTestCase


def make_user(email, first_name):
	if not frappe.db.exists("User", email):
		frappe.get_doc({
			"doctype": "User",
			"email": email,
			"first_name": first_name,
			"send_welcome_email": 0
		}).insert(ignore_permissions=True)
	return email


class TestAgendaMeeting(FrappeTestCase):
	"""Tests for Agenda Meeting DocType."""

	def setUp(self):
		self.org = make_user("org.doctype@example.com", "Org")
		self.ana = make_user("ana.doctype@example.com", "Ana")

	def tearDown(self):
		frappe.db.rollback()

	def _meeting(self, **kwargs):
		values = {
			"doctype": "Agenda Meeting",
			"title": "Planning",
			"organizer": self.org,
			"start_datetime": "2030-04-01 10:00:00",
			"end_datetime": "2030-04-01 11:00:00",
		}
		values.update(kwargs)
		return frappe.get_doc(values)

	def test_validate_datetime_consistency(self):
		"""start_datetime must be before end_datetime."""
		meeting = self._meeting(end_datetime="2030-04-01 10:00:00")

		with self.assertRaises(frappe.ValidationError):
			meeting.insert(ignore_permissions=True)

	def test_participants_deduplicated(self):
		"""Repeated rows and the organizer are dropped."""
		meeting = self._meeting(participants=[
			{"user": self.ana},
			{"user": self.org},
			{"user": self.ana},
		])
		meeting.insert(ignore_permissions=True)

		self.assertEqual([row.user for row in meeting.participants], [self.ana])

	def test_naming_series(self):
		meeting = self._meeting()
		meeting.insert(ignore_permissions=True)

		self.assertTrue(meeting.name.startswith("MTG-"))

	def test_organizer_name_fetched(self):
		meeting = self._meeting()
		meeting.insert(ignore_permissions=True)

		self.assertEqual(meeting.organizer_name, frappe.db.get_value("User", self.org, "full_name"))

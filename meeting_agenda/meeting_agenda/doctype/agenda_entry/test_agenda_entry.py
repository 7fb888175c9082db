# Copyright (c) 2026, Sebastian Ortiz Valencia and Contributors
# See license.txt

"""
Tests for Agenda Entry DocType

Tests record-level validations.
"""

import frappe
from frappe.tests.utils import FrappeTestCase


class TestAgendaEntry(FrappeTestCase):
	"""Tests for Agenda Entry DocType."""

	def tearDown(self):
		frappe.db.rollback()

	def _entry(self, **kwargs):
		values = {
			"doctype": "Agenda Entry",
			"user": "Administrator",
			"date": "2030-04-01",
			"start_time": "09:00:00",
			"end_time": "10:00:00",
		}
		values.update(kwargs)
		return frappe.get_doc(values)

	def test_end_date_defaults_to_date(self):
		entry = self._entry()
		entry.insert(ignore_permissions=True)

		self.assertEqual(str(entry.end_date), "2030-04-01")
		self.assertEqual(entry.status, "BUSY")

	def test_start_after_end(self):
		with self.assertRaises(frappe.ValidationError):
			self._entry(start_time="11:00:00").insert(ignore_permissions=True)

	def test_crossing_midnight(self):
		"""23:00 -> 01:00 is valid when end_date is the next day."""
		entry = self._entry(start_time="23:00:00", end_time="01:00:00", end_date="2030-04-02")
		entry.insert(ignore_permissions=True)

		self.assertTrue(entry.name.startswith("AGE-"))

	def test_end_date_before_date(self):
		with self.assertRaises(frappe.ValidationError):
			self._entry(end_date="2030-03-31").insert(ignore_permissions=True)

# Copyright (c) 2026, Sebastian Ortiz Valencia and contributors
# For license information, please see license.txt

from frappe.model.document import Document


class AgendaMeetingParticipant(Document):
	pass

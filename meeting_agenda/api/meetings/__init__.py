"""
Meetings API Domain

Meetings, participants, availability, agenda entries and user removal.
"""

from meeting_agenda.api.meetings.endpoints import (
    # Meetings
    create_meeting,
    update_meeting,
    delete_meeting,
    add_participant,
    remove_participant,
    get_meeting,
    get_user_meetings,
    # Availability
    check_availability,
    get_free_windows,
    # Agenda Entries
    get_user_agenda,
    create_agenda_entry,
    update_agenda_entry,
    delete_agenda_entry,
    # Users
    delete_user,
)

__all__ = [
    # Meetings
    "create_meeting",
    "update_meeting",
    "delete_meeting",
    "add_participant",
    "remove_participant",
    "get_meeting",
    "get_user_meetings",
    # Availability
    "check_availability",
    "get_free_windows",
    # Agenda Entries
    "get_user_agenda",
    "create_agenda_entry",
    "update_agenda_entry",
    "delete_agenda_entry",
    # Users
    "delete_user",
]

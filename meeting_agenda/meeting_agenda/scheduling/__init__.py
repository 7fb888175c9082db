"""
Scheduling Services Module

This module provides core business logic for meeting scheduling:
- Data model (models.py) and typed errors (exceptions.py)
- Overlap detection (overlap.py)
- Agenda projection (projector.py)
- Meeting orchestration (scheduler.py)
- Availability queries (availability.py)
- User deletion cascade (cascade.py)
- Manual agenda entries (agenda.py)
- Scheduled tasks (tasks.py)
"""

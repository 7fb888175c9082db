"""
Scheduling Data Model

Plain dataclasses shared by the scheduling core and the stores:
- User: referencia inmutable (id + nombre para mostrar)
- Meeting: reunión con organizador y participantes (keyed por user id)
- AgendaEntry: registro derivado FREE/BUSY en la agenda de un usuario
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Optional


DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class AgendaStatus(str, Enum):
	FREE = "FREE"
	BUSY = "BUSY"


@dataclass(frozen=True)
class User:
	id: str
	full_name: str = ""

	def as_dict(self) -> Dict[str, Any]:
		return {"id": self.id, "full_name": self.full_name}


@dataclass
class Meeting:
	"""
	Reunión entre un organizador y un conjunto de participantes.

	`participants` es un dict user_id -> User: la membresía se resuelve por id,
	nunca por igualdad de objetos. Por convención el organizador no forma parte
	de los participantes.
	"""

	title: str
	start: datetime
	end: datetime
	organizer: User
	description: str = ""
	participants: Dict[str, User] = field(default_factory=dict)
	id: Optional[str] = None

	@property
	def participant_ids(self) -> List[str]:
		return list(self.participants)

	@property
	def involved_user_ids(self) -> List[str]:
		"""Organizador primero, luego participantes (sin duplicados)."""
		ids = [self.organizer.id]
		ids.extend(uid for uid in self.participants if uid != self.organizer.id)
		return ids

	def involves(self, user_id: str) -> bool:
		return user_id == self.organizer.id or user_id in self.participants

	def as_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"title": self.title,
			"description": self.description,
			"start": self.start.strftime(DATETIME_FORMAT),
			"end": self.end.strftime(DATETIME_FORMAT),
			"organizer": self.organizer.as_dict(),
			"participants": [user.as_dict() for user in self.participants.values()],
		}


@dataclass
class AgendaEntry:
	"""
	Entrada de agenda de un usuario.

	`date` + `start_time` marcan el inicio y `end_date` + `end_time` el fin, de
	modo que una ventana que cruza medianoche sigue siendo representable.
	`meeting_id` es None para entradas creadas manualmente.
	"""

	user_id: str
	date: date
	start_time: time
	end_time: time
	status: AgendaStatus = AgendaStatus.BUSY
	meeting_id: Optional[str] = None
	end_date: Optional[date] = None
	id: Optional[str] = None

	def __post_init__(self) -> None:
		if self.end_date is None:
			self.end_date = self.date
		self.status = AgendaStatus(self.status)

	@property
	def start(self) -> datetime:
		return datetime.combine(self.date, self.start_time)

	@property
	def end(self) -> datetime:
		return datetime.combine(self.end_date, self.end_time)

	@property
	def is_busy(self) -> bool:
		return self.status == AgendaStatus.BUSY

	def covers_date(self, target_date: date) -> bool:
		return self.date <= target_date <= self.end_date

	def as_dict(self) -> Dict[str, Any]:
		return {
			"id": self.id,
			"user": self.user_id,
			"meeting": self.meeting_id,
			"date": self.date.isoformat(),
			"end_date": self.end_date.isoformat(),
			"start_time": self.start_time.strftime("%H:%M:%S"),
			"end_time": self.end_time.strftime("%H:%M:%S"),
			"status": self.status.value,
		}

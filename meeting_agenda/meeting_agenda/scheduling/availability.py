"""
Availability Service

Read-only queries over a user's agenda:
- is_available: whether a window is free of BUSY entries
- free_windows: the free sub-intervals of a window

Windows are compared as full datetimes, so a window that crosses
midnight is checked against the agenda of every date it touches.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List

from .exceptions import InvalidTimeRange
from .models import AgendaEntry
from .overlap import windows_overlap
from .stores.base import Store


class AvailabilityQuery:
	"""
	Consultas de disponibilidad. No pasa por el Scheduler ni escribe.
	"""

	def __init__(self, store: Store) -> None:
		self.store = store

	def is_available(self, user_id: str, start: datetime, end: datetime) -> bool:
		"""
		Indica si el usuario está libre en [start, end).

		Args:
			user_id: usuario a consultar
			start: inicio de la ventana
			end: fin de la ventana

		Returns:
			bool: True si ninguna entrada BUSY se solapa con la ventana

		Raises:
			NotFound: si el usuario no existe
			InvalidTimeRange: si start >= end
		"""
		self.store.get_user(user_id)
		if start >= end:
			raise InvalidTimeRange(start, end)

		return not any(
			windows_overlap(entry.start, entry.end, start, end)
			for entry in self._busy_entries(user_id, start, end)
		)

	def free_windows(self, user_id: str, start: datetime, end: datetime) -> List[Dict[str, datetime]]:
		"""
		Calcula los intervalos libres del usuario dentro de [start, end).

		Algoritmo:
			1. Obtener entradas BUSY de las fechas que toca la ventana
			2. Merge de bloques solapados/adyacentes
			3. Restar cada bloque de la ventana

		Returns:
			list[dict]: [{"start": datetime, "end": datetime}, ...] ordenados
		"""
		self.store.get_user(user_id)
		if start >= end:
			raise InvalidTimeRange(start, end)

		blocks = _merge_intervals([
			{"start": entry.start, "end": entry.end}
			for entry in self._busy_entries(user_id, start, end)
		])

		free = [{"start": start, "end": end}]
		for block in blocks:
			remaining = []
			for interval in free:
				remaining.extend(_interval_subtract(interval, block))
			free = remaining

		return free

	def _busy_entries(self, user_id: str, start: datetime, end: datetime) -> List[AgendaEntry]:
		"""Entradas BUSY del usuario en cada fecha entre start y end (sin duplicados)."""
		entries: Dict[str, AgendaEntry] = {}

		for target_date in _dates_between(start, end):
			for entry in self.store.entries_by_user_and_date(user_id, target_date):
				if entry.is_busy:
					entries.setdefault(entry.id, entry)

		return list(entries.values())


def _dates_between(start: datetime, end: datetime) -> List[date]:
	"""
	Fechas calendario que toca [start, end).

	Un end exactamente a medianoche no cuenta el día siguiente.
	"""
	last = end.date()
	if end.time() == datetime.min.time() and last > start.date():
		last -= timedelta(days=1)

	dates = []
	current = start.date()
	while current <= last:
		dates.append(current)
		current += timedelta(days=1)
	return dates


def _merge_intervals(intervals: List[Dict[str, datetime]]) -> List[Dict[str, datetime]]:
	"""
	Une intervalos adyacentes o solapados.

	Args:
		intervals: lista de intervalos {"start": datetime, "end": datetime}

	Returns:
		list: intervalos merged, ordenados por start
	"""
	merged: List[Dict[str, datetime]] = []

	for current in sorted(intervals, key=lambda x: x["start"]):
		if merged and current["start"] <= merged[-1]["end"]:
			merged[-1]["end"] = max(merged[-1]["end"], current["end"])
		else:
			merged.append(dict(current))

	return merged


def _interval_subtract(
	interval: Dict[str, datetime],
	block: Dict[str, datetime]
) -> List[Dict[str, datetime]]:
	"""
	Resta un bloqueo de un intervalo.

	Returns:
		list: 0, 1 o 2 intervalos resultantes
	"""
	# Sin overlap -> intervalo original
	if block["end"] <= interval["start"] or block["start"] >= interval["end"]:
		return [interval]

	result = []

	# Parte inicial libre
	if block["start"] > interval["start"]:
		result.append({"start": interval["start"], "end": block["start"]})

	# Parte final libre
	if block["end"] < interval["end"]:
		result.append({"start": block["end"], "end": interval["end"]})

	return result

"""
Meeting Agenda API Endpoints

Whitelisted functions for frontend/external use. All endpoints require a
logged-in session:
- Input validation before touching the scheduling core
- Rate limiting on availability reads
- Optional timezone conversion (IANA name) to the site timezone
- Typed scheduling errors mapped to HTTP status codes (404, 409, 417)
"""

import frappe
from frappe import _
from frappe.utils import get_datetime, get_system_timezone, get_time, getdate
from typing import Dict, List, Any, Optional
import pytz

from meeting_agenda.meeting_agenda.scheduling.agenda import AgendaService
from meeting_agenda.meeting_agenda.scheduling.availability import AvailabilityQuery
from meeting_agenda.meeting_agenda.scheduling.cascade import UserCascade
from meeting_agenda.meeting_agenda.scheduling.config import get_scheduling_config
from meeting_agenda.meeting_agenda.scheduling.exceptions import SchedulingError
from meeting_agenda.meeting_agenda.scheduling.models import DATETIME_FORMAT, AgendaStatus
from meeting_agenda.meeting_agenda.scheduling.scheduler import Scheduler
from meeting_agenda.meeting_agenda.scheduling.stores.factory import get_store
from meeting_agenda.meeting_agenda.scheduling.stores.frappe_store import MEETING_DOCTYPE

from meeting_agenda.api.shared import (
	check_rate_limit,
	sanitize_string,
	validate_date_string,
	validate_datetime_string,
	validate_docname,
	validate_docname_list,
	validate_time_string,
	validate_timezone,
)


# ===================
# Helpers
# ===================

def _scheduler() -> Scheduler:
	return Scheduler(get_store("frappe"), get_scheduling_config())


def _to_site_datetime(value: str, field_name: str, timezone: Optional[str] = None):
	"""
	Valida y parsea un datetime. Si se indica timezone, el valor se interpreta
	en esa zona y se convierte a la zona del sitio (naive).
	"""
	dt = get_datetime(validate_datetime_string(value, field_name))
	if not timezone:
		return dt

	site_tz = pytz.timezone(get_system_timezone())
	return pytz.timezone(timezone).localize(dt).astimezone(site_tz).replace(tzinfo=None)


def _from_site_datetime(dt, timezone: Optional[str] = None) -> str:
	"""Inverso de _to_site_datetime, formateado como YYYY-MM-DD HH:MM:SS."""
	if timezone:
		site_tz = pytz.timezone(get_system_timezone())
		dt = site_tz.localize(dt).astimezone(pytz.timezone(timezone)).replace(tzinfo=None)
	return dt.strftime(DATETIME_FORMAT)


def _validate_status(status: str) -> AgendaStatus:
	status = str(status or AgendaStatus.BUSY.value).strip().upper()
	if status not in AgendaStatus.__members__:
		frappe.throw(_(f"Invalid status: {status}. Use FREE or BUSY"), frappe.ValidationError)
	return AgendaStatus(status)


def _ensure_self_or_manager(user: str) -> None:
	"""Solo el propio usuario o un System Manager pueden actuar sobre su agenda o en su nombre."""
	if user != frappe.session.user and "System Manager" not in frappe.get_roles():
		frappe.throw(_("No autorizado para actuar en nombre de otro usuario"), frappe.PermissionError)


def _ensure_organizer_or_manager(meeting: str) -> None:
	"""
	Solo el organizador o un System Manager pueden modificar una reunión.
	Una reunión inexistente se deja pasar para que el core responda NotFound.
	"""
	organizer = frappe.db.get_value(MEETING_DOCTYPE, meeting, "organizer")
	if organizer:
		_ensure_self_or_manager(organizer)


def _report(e: SchedulingError) -> None:
	"""Deja el mensaje del error tipado en la respuesta; el caller re-lanza."""
	frappe.msgprint(_(str(e)), title=_("Scheduling Error"), indicator="red")


# ===================
# Meetings
# ===================

@frappe.whitelist(methods=['POST'])
def create_meeting(
	title: str,
	start_datetime: str,
	end_datetime: str,
	participants=None,
	description: str = None,
	organizer: str = None,
	timezone: str = None
) -> Dict[str, Any]:
	"""
	Crea una reunión, valida conflictos de todos los involucrados y proyecta
	una entrada BUSY en la agenda de cada uno.

	Args:
		title: Título de la reunión
		start_datetime: Inicio (YYYY-MM-DD HH:MM:SS)
		end_datetime: Fin (YYYY-MM-DD HH:MM:SS)
		participants: Lista de user ids (JSON array o separados por coma)
		description: Descripción opcional
		organizer: User id del organizador (default: usuario en sesión)
		timezone: Zona IANA de start/end (default: zona del sitio)

	Returns:
		Dict: La reunión creada (id, title, start, end, organizer, participants)

	Raises:
		NotFound (404): organizador o participante inexistente
		SchedulingConflict (409): algún involucrado ya tiene una reunión solapada
		InvalidTimeRange (417): start >= end

	Example:
		```javascript
		frappe.call({
			method: "meeting_agenda.api.meetings.create_meeting",
			args: {
				title: "Planning",
				start_datetime: "2026-03-02 10:00:00",
				end_datetime: "2026-03-02 11:00:00",
				participants: ["ana@example.com", "luis@example.com"]
			}
		})
		```
	"""
	title = sanitize_string(title, max_length=140)
	if not title:
		frappe.throw(_("title is required"), frappe.ValidationError)

	timezone = validate_timezone(timezone)
	start = _to_site_datetime(start_datetime, "start_datetime", timezone)
	end = _to_site_datetime(end_datetime, "end_datetime", timezone)
	organizer = validate_docname(organizer or frappe.session.user, "organizer")
	_ensure_self_or_manager(organizer)
	participant_ids = validate_docname_list(participants, "participants")

	try:
		meeting = _scheduler().create_meeting(
			title=title,
			description=sanitize_string(description, max_length=5000),
			start=start,
			end=end,
			organizer_id=organizer,
			participant_ids=participant_ids
		)
	except SchedulingError as e:
		_report(e)
		raise

	return meeting.as_dict()


@frappe.whitelist(methods=['POST'])
def update_meeting(
	meeting: str,
	title: str,
	start_datetime: str,
	end_datetime: str,
	description: str = None,
	timezone: str = None
) -> Dict[str, Any]:
	"""
	Sobrescribe título, descripción y horario de una reunión.

	Según Meeting Agenda Settings, re-valida conflictos de los involucrados y
	mueve sus entradas de agenda al nuevo horario.

	Returns:
		Dict: La reunión actualizada
	"""
	meeting = validate_docname(meeting, "meeting")
	_ensure_organizer_or_manager(meeting)
	title = sanitize_string(title, max_length=140)
	if not title:
		frappe.throw(_("title is required"), frappe.ValidationError)

	timezone = validate_timezone(timezone)
	start = _to_site_datetime(start_datetime, "start_datetime", timezone)
	end = _to_site_datetime(end_datetime, "end_datetime", timezone)

	try:
		updated = _scheduler().update_meeting(
			meeting_id=meeting,
			title=title,
			description=sanitize_string(description, max_length=5000),
			start=start,
			end=end
		)
	except SchedulingError as e:
		_report(e)
		raise

	return updated.as_dict()


@frappe.whitelist(methods=['POST'])
def delete_meeting(meeting: str) -> Dict[str, Any]:
	"""
	Elimina una reunión (y sus entradas de agenda si la sincronización está activa).

	Returns:
		Dict: {"success": True, "meeting": ..., "message": ...}
	"""
	meeting = validate_docname(meeting, "meeting")
	_ensure_organizer_or_manager(meeting)

	try:
		_scheduler().delete_meeting(meeting)
	except SchedulingError as e:
		_report(e)
		raise

	return {
		"success": True,
		"meeting": meeting,
		"message": _("Reunión eliminada")
	}


@frappe.whitelist(methods=['POST'])
def add_participant(meeting: str, user: str) -> Dict[str, Any]:
	"""
	Agrega un participante a una reunión existente. Idempotente.

	Returns:
		Dict: La reunión actualizada
	"""
	meeting = validate_docname(meeting, "meeting")
	user = validate_docname(user, "user")
	_ensure_organizer_or_manager(meeting)

	try:
		updated = _scheduler().add_participant(meeting, user)
	except SchedulingError as e:
		_report(e)
		raise

	return updated.as_dict()


@frappe.whitelist(methods=['POST'])
def remove_participant(meeting: str, user: str) -> Dict[str, Any]:
	"""
	Quita un participante de una reunión. Idempotente.

	Returns:
		Dict: La reunión actualizada
	"""
	meeting = validate_docname(meeting, "meeting")
	user = validate_docname(user, "user")

	# Un participante puede salirse por su cuenta
	if user != frappe.session.user:
		_ensure_organizer_or_manager(meeting)

	try:
		updated = _scheduler().remove_participant(meeting, user)
	except SchedulingError as e:
		_report(e)
		raise

	return updated.as_dict()


@frappe.whitelist(methods=['GET'])
def get_meeting(meeting: str) -> Dict[str, Any]:
	"""Obtiene una reunión por id."""
	meeting = validate_docname(meeting, "meeting")

	try:
		return _scheduler().get_meeting(meeting).as_dict()
	except SchedulingError as e:
		_report(e)
		raise


@frappe.whitelist(methods=['GET'])
def get_user_meetings(user: str = None, role: str = "all") -> List[Dict[str, Any]]:
	"""
	Lista las reuniones de un usuario ordenadas por inicio.

	Args:
		user: User id (default: usuario en sesión)
		role: "all" (organiza o participa), "organizer" o "participant"

	Returns:
		List[Dict]: Reuniones sin duplicados
	"""
	user = validate_docname(user or frappe.session.user, "user")
	scheduler = _scheduler()

	queries = {
		"all": scheduler.meetings_for_user,
		"organizer": scheduler.meetings_by_organizer,
		"participant": scheduler.meetings_by_participant,
	}
	if role not in queries:
		frappe.throw(_(f"Invalid role: {role}. Use all, organizer or participant"), frappe.ValidationError)

	try:
		meetings = queries[role](user)
	except SchedulingError as e:
		_report(e)
		raise

	return [m.as_dict() for m in meetings]


# ===================
# Availability
# ===================

@frappe.whitelist(methods=['GET'])
def check_availability(
	user: str,
	start_datetime: str,
	end_datetime: str,
	timezone: str = None
) -> Dict[str, Any]:
	"""
	Indica si un usuario está libre en una ventana (según sus entradas BUSY).

	Rate limited: 30 requests per minute.

	Returns:
		Dict: {"user": ..., "available": bool}
	"""
	check_rate_limit("check_availability", limit=30, seconds=60)

	user = validate_docname(user, "user")
	timezone = validate_timezone(timezone)
	start = _to_site_datetime(start_datetime, "start_datetime", timezone)
	end = _to_site_datetime(end_datetime, "end_datetime", timezone)

	try:
		available = AvailabilityQuery(get_store("frappe")).is_available(user, start, end)
	except SchedulingError as e:
		_report(e)
		raise

	return {"user": user, "available": available}


@frappe.whitelist(methods=['GET'])
def get_free_windows(
	user: str,
	start_datetime: str,
	end_datetime: str,
	timezone: str = None
) -> List[Dict[str, str]]:
	"""
	Calcula los intervalos libres de un usuario dentro de una ventana.

	Rate limited: 30 requests per minute.

	Returns:
		List[Dict]: [{"start": "YYYY-MM-DD HH:MM:SS", "end": "..."}], en la
		timezone pedida si se indicó una

	Example Response:
		```json
		[
			{"start": "2026-03-02 09:00:00", "end": "2026-03-02 10:00:00"},
			{"start": "2026-03-02 11:00:00", "end": "2026-03-02 18:00:00"}
		]
		```
	"""
	check_rate_limit("get_free_windows", limit=30, seconds=60)

	user = validate_docname(user, "user")
	timezone = validate_timezone(timezone)
	start = _to_site_datetime(start_datetime, "start_datetime", timezone)
	end = _to_site_datetime(end_datetime, "end_datetime", timezone)

	try:
		windows = AvailabilityQuery(get_store("frappe")).free_windows(user, start, end)
	except SchedulingError as e:
		_report(e)
		raise

	return [
		{
			"start": _from_site_datetime(w["start"], timezone),
			"end": _from_site_datetime(w["end"], timezone),
		}
		for w in windows
	]


# ===================
# Agenda Entries
# ===================

@frappe.whitelist(methods=['GET'])
def get_user_agenda(user: str = None, date: str = None) -> List[Dict[str, Any]]:
	"""
	Lista las entradas de agenda de un usuario, opcionalmente para una fecha.

	Args:
		user: User id (default: usuario en sesión)
		date: YYYY-MM-DD; incluye entradas que empiezan antes y cruzan a esa fecha

	Returns:
		List[Dict]: Entradas ordenadas por fecha y hora de inicio
	"""
	user = validate_docname(user or frappe.session.user, "user")
	target_date = getdate(validate_date_string(date, "date")) if date else None

	try:
		entries = AgendaService(get_store("frappe")).entries_for_user(user, target_date)
	except SchedulingError as e:
		_report(e)
		raise

	return [entry.as_dict() for entry in entries]


@frappe.whitelist(methods=['POST'])
def create_agenda_entry(
	date: str,
	start_time: str,
	end_time: str,
	status: str = "BUSY",
	user: str = None
) -> Dict[str, Any]:
	"""
	Crea una entrada manual (sin reunión) en la agenda de un usuario.

	Args:
		date: YYYY-MM-DD
		start_time: HH:MM[:SS]
		end_time: HH:MM[:SS]
		status: FREE o BUSY
		user: User id (default: usuario en sesión)

	Returns:
		Dict: La entrada creada
	"""
	user = validate_docname(user or frappe.session.user, "user")
	_ensure_self_or_manager(user)

	entry_date = getdate(validate_date_string(date, "date"))
	start = get_time(validate_time_string(start_time, "start_time"))
	end = get_time(validate_time_string(end_time, "end_time"))

	try:
		entry = AgendaService(get_store("frappe")).create_entry(
			user, entry_date, start, end, _validate_status(status)
		)
	except SchedulingError as e:
		_report(e)
		raise

	return entry.as_dict()


@frappe.whitelist(methods=['POST'])
def update_agenda_entry(
	entry: str,
	date: str,
	start_time: str,
	end_time: str,
	status: str = "BUSY"
) -> Dict[str, Any]:
	"""
	Sobrescribe fecha, horario y estado de una entrada de agenda.

	Returns:
		Dict: La entrada actualizada
	"""
	entry = validate_docname(entry, "entry")
	entry_date = getdate(validate_date_string(date, "date"))
	start = get_time(validate_time_string(start_time, "start_time"))
	end = get_time(validate_time_string(end_time, "end_time"))
	service = AgendaService(get_store("frappe"))

	try:
		_ensure_self_or_manager(service.get_entry(entry).user_id)
		updated = service.update_entry(entry, entry_date, start, end, _validate_status(status))
	except SchedulingError as e:
		_report(e)
		raise

	return updated.as_dict()


@frappe.whitelist(methods=['POST'])
def delete_agenda_entry(entry: str) -> Dict[str, Any]:
	"""
	Elimina una entrada de agenda.

	Returns:
		Dict: {"success": True, "entry": ..., "message": ...}
	"""
	entry = validate_docname(entry, "entry")
	service = AgendaService(get_store("frappe"))

	try:
		_ensure_self_or_manager(service.get_entry(entry).user_id)
		service.delete_entry(entry)
	except SchedulingError as e:
		_report(e)
		raise

	return {
		"success": True,
		"entry": entry,
		"message": _("Entrada de agenda eliminada")
	}


# ===================
# Users
# ===================

@frappe.whitelist(methods=['POST'])
def delete_user(user: str) -> Dict[str, Any]:
	"""
	Elimina un usuario en cascada: lo quita de las reuniones donde participa,
	borra su agenda, borra las reuniones que organiza y finalmente el usuario.

	Solo System Manager.

	Returns:
		Dict: {"success": True, "user": ..., "meetings_left": n,
		"entries_deleted": n, "meetings_deleted": n}
	"""
	frappe.only_for("System Manager")
	user = validate_docname(user, "user")

	if user in ("Administrator", "Guest", frappe.session.user):
		frappe.throw(_(f"No se puede eliminar el usuario {user}"), frappe.PermissionError)

	try:
		result = UserCascade(get_store("frappe"), get_scheduling_config()).delete_user_cascade(user)
	except SchedulingError as e:
		_report(e)
		raise
	except Exception as e:
		frappe.log_error(f"Error in delete_user ({user}): {str(e)}", "API Error")
		raise

	return {"success": True, "user": user, **result}

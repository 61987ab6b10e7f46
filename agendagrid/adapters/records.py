"""
Conversion of raw appointment records into domain Appointments.

Records come either in the engine's own shape (``date``, ``start_time``,
``end_time``) or in the booking API's shape (``dataAgendamento``,
``horaInicio``/``horaFim``, optionally nested under ``blocoHorario``).
"""

from typing import Any, Dict

from ..domain.models import Appointment, AppointmentStatus

# Status values used by the booking API
STATUS_ALIASES = {
    "agendado": AppointmentStatus.SCHEDULED,
    "confirmado": AppointmentStatus.CONFIRMED,
    "cancelado": AppointmentStatus.CANCELED,
    "concluido": AppointmentStatus.COMPLETED,
    "cancelled": AppointmentStatus.CANCELED,
}

KIND_ALIASES = {
    "online": "online",
    "presencial": "in_person",
}


def parse_status(value: Any) -> AppointmentStatus:
    """Map a status string to AppointmentStatus; unknown values fall back to scheduled."""
    if isinstance(value, AppointmentStatus):
        return value
    key = str(value or "").strip().lower()
    if key in STATUS_ALIASES:
        return STATUS_ALIASES[key]
    try:
        return AppointmentStatus(key)
    except ValueError:
        return AppointmentStatus.SCHEDULED


def appointment_from_record(record: Dict[str, Any]) -> Appointment:
    """
    Build an Appointment from a JSON record.

    Dates and times are passed through untouched; validation happens in the
    layout engine so bad records surface as diagnostics instead of being lost.

    Raises:
        KeyError: If the record has no id
    """
    block = record.get("blocoHorario") or {}
    student = record.get("aluno") or {}

    kind = record.get("kind", record.get("tipo"))
    if isinstance(kind, str):
        kind = KIND_ALIASES.get(kind.lower(), kind)

    return Appointment(
        id=str(record["id"]),
        date=record.get("date", record.get("dataAgendamento", "")),
        start_time=_first(record, block, "start_time", "horaInicio"),
        end_time=_first(record, block, "end_time", "horaFim"),
        status=parse_status(record.get("status")),
        title=record.get("title") or student.get("nome"),
        kind=kind,
        notes=record.get("notes", record.get("observacoes")),
    )


def _first(record: Dict[str, Any], block: Dict[str, Any], key: str, alias: str) -> str:
    for value in (record.get(key), record.get(alias), block.get(alias)):
        if value:
            return value
    return ""

"""
Appointment source reading a JSON fixture file.
"""

import json
import logging
from pathlib import Path
from typing import List

from ..domain.exceptions import AppointmentSourceError, InvalidDate
from ..domain.models import Appointment, DateRangeHint
from ..domain.period_selector import parse_calendar_date
from .records import appointment_from_record

logger = logging.getLogger(__name__)


class JsonAppointmentSource:
    """
    Loads appointments from a JSON file holding a list of records.

    Useful for demos and tests without access to the booking API. Records
    are re-read on every fetch so edits to the file show up on refresh.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load_records(self) -> list:
        if not self.path.exists():
            raise AppointmentSourceError(f"Appointment file not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise AppointmentSourceError(f"Invalid JSON in {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("appointments", [])
        if not isinstance(data, list):
            raise AppointmentSourceError(
                f"{self.path} must contain a list of appointments"
            )
        return data

    def fetch_appointments(self, hint: DateRangeHint) -> List[Appointment]:
        """
        Return appointments within the hinted range.

        Records with an unparseable date are kept so the layout engine can
        report them; records without an id are skipped.
        """
        appointments: List[Appointment] = []

        for record in self._load_records():
            try:
                appointment = appointment_from_record(record)
            except (KeyError, TypeError, AttributeError) as exc:
                logger.warning("Skipping appointment record without id: %s", exc)
                continue

            try:
                day = parse_calendar_date(appointment.date, appointment.id)
            except InvalidDate:
                appointments.append(appointment)
                continue

            if hint.contains(day):
                appointments.append(appointment)

        return appointments

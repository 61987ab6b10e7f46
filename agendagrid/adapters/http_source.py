"""
Booking API client for fetching appointments over HTTP.
"""

import logging
from typing import Any, Dict, List

import requests

from ..domain.exceptions import AppointmentSourceError
from ..domain.models import Appointment, DateRangeHint
from .records import appointment_from_record

logger = logging.getLogger(__name__)


class HttpAppointmentSource:
    """
    Client for the booking API's appointment listing.

    Uses ``GET /api/admin/agendamentos`` with the ``dataInicio``/``dataFim``
    filters, so only the visible span is transferred.
    """

    APPOINTMENTS_PATH = "/api/admin/agendamentos"

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: int = 30,
        token: str | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the booking API, e.g. https://example.com
            session: Optional requests session (connection reuse, testing)
            timeout: Request timeout in seconds
            token: Optional bearer token
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def fetch_appointments(self, hint: DateRangeHint) -> List[Appointment]:
        """
        Fetch appointments between the hint's start and end dates.

        Raises:
            AppointmentSourceError: If the request fails or the payload is not a list
        """
        url = f"{self.base_url}{self.APPOINTMENTS_PATH}"
        params = {
            "dataInicio": hint.start.to_date_string(),
            "dataFim": hint.end.to_date_string(),
        }

        try:
            response = self.session.get(
                url,
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise AppointmentSourceError(f"Failed to fetch appointments from {url}: {e}") from e
        except ValueError as e:
            raise AppointmentSourceError(f"Invalid JSON from {url}: {e}") from e

        return self._parse_response(data)

    def _parse_response(self, data: Any) -> List[Appointment]:
        """
        Parse the listing into domain appointments.

        Response format:
        [
            {
                "id": "...",
                "dataAgendamento": "2024-11-25",
                "status": "agendado",
                "tipo": "presencial",
                "observacoes": null,
                "aluno": {"nome": "..."},
                "blocoHorario": {"horaInicio": "09:00:00", "horaFim": "10:00:00"}
            }
        ]
        """
        if isinstance(data, dict) and "error" in data:
            raise AppointmentSourceError(f"Booking API error: {data['error']}")
        if not isinstance(data, list):
            raise AppointmentSourceError("Booking API returned an unexpected payload")

        appointments: List[Appointment] = []
        for record in data:
            try:
                appointments.append(appointment_from_record(record))
            except (KeyError, TypeError, AttributeError) as e:
                logger.warning("Could not parse appointment record %r: %s", record, e)
                continue

        return appointments

    def test_connection(self) -> Dict[str, Any]:
        """Request the listing once to check reachability and credentials."""
        url = f"{self.base_url}{self.APPOINTMENTS_PATH}"
        try:
            response = self.session.get(url, headers=self.headers, timeout=10)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise AppointmentSourceError(f"Connection test failed: {e}") from e
        return {"url": url, "status": response.status_code}

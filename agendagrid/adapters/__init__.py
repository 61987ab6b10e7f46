"""
Adapters layer - Appointment data sources (booking API, JSON fixtures).
"""

from .http_source import HttpAppointmentSource
from .json_source import JsonAppointmentSource
from .records import appointment_from_record, parse_status

__all__ = ["HttpAppointmentSource", "JsonAppointmentSource", "appointment_from_record", "parse_status"]

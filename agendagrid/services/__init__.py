"""
Service layer helpers that orchestrate data sources and domain logic.
"""

from .calendar_layout import AppointmentSourceProtocol, CalendarLayoutService
from .controller import AppointmentTarget, CalendarController, EmptySlotTarget

__all__ = [
    "AppointmentSourceProtocol",
    "CalendarLayoutService",
    "AppointmentTarget",
    "CalendarController",
    "EmptySlotTarget",
]

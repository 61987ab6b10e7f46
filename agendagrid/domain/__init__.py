"""
Domain layer - Pure layout and navigation logic without external dependencies.
"""

from .exceptions import (
    AgendaError,
    AppointmentError,
    AppointmentSourceError,
    InvalidDate,
    MalformedInterval,
    OutOfBoundsDay,
    OutsideTimeline,
)
from .labels import CalendarLabeler, PendulumLabeler, period_title
from .models import (
    Appointment,
    AppointmentStatus,
    CalendarLayout,
    ColumnSlot,
    CurrentTimeMarker,
    DateRangeHint,
    DayBuckets,
    DayLayout,
    Diagnostic,
    DiagnosticReason,
    Geometry,
    Granularity,
    NavigationLimits,
    PeriodState,
    Placement,
    Severity,
    TimedAppointment,
    TimelineBounds,
)
from .navigator import NavigationAction, PeriodNavigator
from .overlap_resolver import OverlapResolver
from .period_selector import PeriodSelector, parse_calendar_date
from .time_grid import TimeGridMapper, minutes_to_clock, parse_clock_time

__all__ = [
    "AgendaError",
    "AppointmentError",
    "AppointmentSourceError",
    "InvalidDate",
    "MalformedInterval",
    "OutOfBoundsDay",
    "OutsideTimeline",
    "CalendarLabeler",
    "PendulumLabeler",
    "period_title",
    "Appointment",
    "AppointmentStatus",
    "CalendarLayout",
    "ColumnSlot",
    "CurrentTimeMarker",
    "DateRangeHint",
    "DayBuckets",
    "DayLayout",
    "Diagnostic",
    "DiagnosticReason",
    "Geometry",
    "Granularity",
    "NavigationLimits",
    "PeriodState",
    "Placement",
    "Severity",
    "TimedAppointment",
    "TimelineBounds",
    "NavigationAction",
    "PeriodNavigator",
    "OverlapResolver",
    "PeriodSelector",
    "parse_calendar_date",
    "TimeGridMapper",
    "minutes_to_clock",
    "parse_clock_time",
]

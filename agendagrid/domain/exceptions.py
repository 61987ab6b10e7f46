"""
Domain-specific exception hierarchy for the calendar layout engine.
"""

from __future__ import annotations

from .models import Diagnostic, DiagnosticReason, Severity


class AgendaError(Exception):
    """Base class for all application-level errors."""


class AppointmentError(AgendaError):
    """
    Raised for a single appointment that cannot be laid out.

    These errors never abort a render: the layout service catches them,
    excludes the appointment and reports a ``Diagnostic`` instead.
    """

    reason = DiagnosticReason.MALFORMED_INTERVAL
    severity = Severity.ERROR

    def __init__(self, appointment_id: str, message: str):
        super().__init__(message)
        self.appointment_id = appointment_id
        self.message = message

    def to_diagnostic(self) -> Diagnostic:
        """Convert the error into the record handed back to callers."""
        return Diagnostic(
            appointment_id=self.appointment_id,
            reason=self.reason,
            message=self.message,
            severity=self.severity,
        )


class MalformedInterval(AppointmentError):
    """Start/end time does not parse as HH:MM or the end is not after the start."""

    reason = DiagnosticReason.MALFORMED_INTERVAL


class InvalidDate(AppointmentError):
    """The appointment date is not a valid calendar date."""

    reason = DiagnosticReason.INVALID_DATE


class OutsideTimeline(AppointmentError):
    """The appointment lies entirely outside the visible hours."""

    reason = DiagnosticReason.OUTSIDE_TIMELINE
    severity = Severity.WARNING


class OutOfBoundsDay(AgendaError):
    """Raised when navigation would leave the configured date limits."""


class AppointmentSourceError(AgendaError):
    """Raised when appointment data cannot be fetched or parsed."""

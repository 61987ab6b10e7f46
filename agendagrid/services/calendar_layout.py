"""
Application service that turns appointments and a period into placements.

The service wires the domain components together in the order
selector -> mapper -> resolver and keeps the appointment data source behind
a small protocol, so the CLI stays thin and tests can plug in a stub.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Protocol, Sequence

import pendulum
from pendulum import Date, DateTime

from ..domain.exceptions import AppointmentError
from ..domain.labels import CalendarLabeler, PendulumLabeler, period_title
from ..domain.models import (
    Appointment,
    CalendarLayout,
    DateRangeHint,
    DayLayout,
    Diagnostic,
    DiagnosticReason,
    Geometry,
    PeriodState,
    Placement,
    Severity,
    TimedAppointment,
)
from ..domain.overlap_resolver import OverlapResolver
from ..domain.period_selector import PeriodSelector, as_date
from ..domain.time_grid import TimeGridMapper

logger = logging.getLogger(__name__)


class AppointmentSourceProtocol(Protocol):
    """Protocol describing the data source behaviour needed by the service."""

    def fetch_appointments(self, hint: DateRangeHint) -> List[Appointment]:
        """Return appointments, ideally limited to the hinted date range."""


class CalendarLayoutService:
    """
    Orchestrates period selection, geometry mapping and overlap resolution.

    Every call recomputes from scratch; nothing is cached between passes.
    """

    def __init__(
        self,
        mapper: TimeGridMapper,
        resolver: OverlapResolver | None = None,
        selector: PeriodSelector | None = None,
        labeler: CalendarLabeler | None = None,
        clock: Callable[[], DateTime] | None = None,
    ) -> None:
        self._mapper = mapper
        self._resolver = resolver or OverlapResolver()
        self._selector = selector or PeriodSelector()
        self._labeler = labeler or PendulumLabeler()
        self._clock = clock or pendulum.now

    @property
    def bounds(self):
        return self._mapper.bounds

    @property
    def selector(self) -> PeriodSelector:
        return self._selector

    def fetch_hint(self, state: PeriodState) -> DateRangeHint:
        """Date range covering every visible day of the period."""
        days = self._selector.select_visible_days(state)
        return DateRangeHint(start=days[0], end=days[-1])

    def fetch_and_layout(
        self,
        source: AppointmentSourceProtocol,
        state: PeriodState,
    ) -> CalendarLayout:
        """Fetch appointments for the visible span and lay them out."""
        appointments = source.fetch_appointments(self.fetch_hint(state))
        return self.layout(appointments, state)

    def layout(
        self,
        appointments: Sequence[Appointment],
        state: PeriodState,
    ) -> CalendarLayout:
        """
        Compute placements for all visible days.

        Args:
            appointments: Full appointment collection, in any order
            state: Period to display

        Returns:
            CalendarLayout with placements per visible day, the current-time
            marker and a diagnostic for every excluded appointment
        """
        now = self._clock()
        today = as_date(now)
        visible_days = self._selector.select_visible_days(state)
        active_first, active_last = self._selector.active_period(state)

        bucketing = self._selector.bucket_by_day(appointments, visible_days)
        diagnostics: List[Diagnostic] = list(bucketing.diagnostics)
        seen_ids: set[str] = set()

        days: List[DayLayout] = []
        for day in visible_days:
            placements = self._layout_day(day, bucketing.buckets[day], seen_ids, diagnostics)
            days.append(
                DayLayout(
                    day=day,
                    placements=placements,
                    is_today=day == today,
                    in_active_period=active_first <= day <= active_last,
                )
            )

        layout = CalendarLayout(
            state=state,
            days=days,
            diagnostics=diagnostics,
            marker=self._selector.current_time_marker(visible_days, self.bounds, now),
            title=period_title(state, visible_days, self._labeler),
        )

        logger.debug(
            "Laid out %d appointment(s) over %d day(s), %d diagnostic(s)",
            len(layout.all_placements()),
            len(days),
            len(diagnostics),
        )
        return layout

    def _layout_day(
        self,
        day: Date,
        appointments: Sequence[Appointment],
        seen_ids: set[str],
        diagnostics: List[Diagnostic],
    ) -> List[Placement]:
        """Validate, resolve lanes and assemble placements for one day."""
        timed: List[TimedAppointment] = []
        geometry: Dict[str, Geometry] = {}

        for appointment in appointments:
            if appointment.id in seen_ids:
                diagnostics.append(self._duplicate(appointment))
                continue

            try:
                start, end = self._mapper.parse_interval(appointment)
                geometry[appointment.id] = self._mapper.geometry_for_minutes(
                    appointment.id, start, end
                )
            except AppointmentError as exc:
                logger.warning("Skipping appointment %s: %s", appointment.id, exc.message)
                diagnostics.append(exc.to_diagnostic())
                continue

            seen_ids.add(appointment.id)
            timed.append(
                TimedAppointment(
                    appointment=appointment,
                    day=day,
                    start_minutes=start,
                    end_minutes=end,
                )
            )

        slots = self._resolver.resolve(timed)

        placements = [
            Placement(
                appointment_id=item.id,
                top_offset=geometry[item.id].top_offset,
                height=geometry[item.id].height,
                column_index=slots[item.id].column_index,
                column_count=slots[item.id].column_count,
                appointment=item.appointment,
            )
            for item in timed
        ]
        placements.sort(key=lambda p: (p.top_offset, p.column_index, p.appointment_id))
        return placements

    @staticmethod
    def _duplicate(appointment: Appointment) -> Diagnostic:
        message = f"Appointment id {appointment.id} appears more than once"
        logger.warning("Skipping appointment %s: %s", appointment.id, message)
        return Diagnostic(
            appointment_id=appointment.id,
            reason=DiagnosticReason.DUPLICATE_ID,
            message=message,
            severity=Severity.WARNING,
        )

"""
Controller owning the single PeriodState of a calendar view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

from pendulum import Date

from ..domain.models import Appointment, CalendarLayout, Granularity, PeriodState, Placement
from ..domain.navigator import NavigationAction, PeriodNavigator
from ..domain.period_selector import as_date
from ..domain.time_grid import minutes_to_clock
from .calendar_layout import AppointmentSourceProtocol, CalendarLayoutService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppointmentTarget:
    appointment_id: str


@dataclass(frozen=True)
class EmptySlotTarget:
    day: Date
    time: str


class CalendarController:
    """
    Holds the current period, recomputes the layout on every change and
    reports which region of the grid a click landed on.

    The controller never edits appointments or navigates elsewhere; it only
    hands targets to the injected handlers.
    """

    def __init__(
        self,
        service: CalendarLayoutService,
        navigator: PeriodNavigator,
        source: AppointmentSourceProtocol | None = None,
        state: PeriodState | None = None,
        on_appointment_activated: Callable[[str], None] | None = None,
        on_empty_slot_activated: Callable[[Date, str], None] | None = None,
        slot_minutes: int = 60,
    ) -> None:
        if slot_minutes <= 0:
            raise ValueError("slot_minutes must be greater than zero")

        self._service = service
        self._navigator = navigator
        self._source = source
        self._appointments: List[Appointment] = []
        self.state = state or navigator.initial_state()
        self.on_appointment_activated = on_appointment_activated
        self.on_empty_slot_activated = on_empty_slot_activated
        self.slot_minutes = slot_minutes
        self.layout: CalendarLayout | None = None

    # Navigation

    def dispatch(self, action: NavigationAction) -> PeriodState:
        self._commit(self._navigator.apply(self.state, action))
        return self.state

    def next(self) -> PeriodState:
        return self.dispatch(NavigationAction.NEXT)

    def previous(self) -> PeriodState:
        return self.dispatch(NavigationAction.PREVIOUS)

    def today(self) -> PeriodState:
        return self.dispatch(NavigationAction.TODAY)

    def set_granularity(self, granularity: Granularity) -> PeriodState:
        self._commit(self._navigator.set_granularity(self.state, granularity))
        return self.state

    # Data

    def set_appointments(self, appointments: Sequence[Appointment]) -> CalendarLayout:
        """Replace the appointment collection (e.g. a live update) and relayout."""
        self._appointments = list(appointments)
        return self.recompute()

    def refresh(self) -> CalendarLayout:
        """Re-fetch from the data source for the visible span and relayout."""
        if self._source is None:
            return self.recompute()
        return self._commit(self.state)

    def recompute(self) -> CalendarLayout:
        """Lay out the current collection again, e.g. on a "now" tick."""
        self.layout = self._service.layout(self._appointments, self.state)
        return self.layout

    def _commit(self, state: PeriodState) -> CalendarLayout:
        """
        Fetch and lay out ``state``, then make it current.

        State, appointments and layout change together; if the source fails
        the controller keeps showing the previous period.
        """
        appointments = self._appointments
        if self._source is not None:
            hint = self._service.fetch_hint(state)
            appointments = list(self._source.fetch_appointments(hint))

        layout = self._service.layout(appointments, state)
        self.state, self._appointments, self.layout = state, appointments, layout
        return layout

    # Hit testing

    def hit_test(
        self,
        day: Date,
        minute_offset: float,
        lane_fraction: float = 0.0,
    ) -> AppointmentTarget | EmptySlotTarget | None:
        """
        Resolve a point of the grid to the appointment or empty slot under it.

        Args:
            day: Day column that was targeted
            minute_offset: Vertical position in minutes since the window start
            lane_fraction: Horizontal position inside the day column, 0..1

        Returns:
            AppointmentTarget, EmptySlotTarget, or None if the point is off-grid
        """
        layout = self.layout or self.recompute()
        day = as_date(day)
        day_layout = layout.day_layout(day)
        window = self._service.bounds.window_minutes

        if day_layout is None or not 0 <= minute_offset < window:
            return None

        # Later placements are drawn on top
        for placement in reversed(day_layout.placements):
            if self._contains(placement, minute_offset, lane_fraction):
                return AppointmentTarget(appointment_id=placement.appointment_id)

        clock = self._service.bounds.start_minutes + int(minute_offset)
        slot_start = clock - clock % self.slot_minutes
        return EmptySlotTarget(day=day, time=minutes_to_clock(slot_start))

    def activate(
        self,
        day: Date,
        minute_offset: float,
        lane_fraction: float = 0.0,
    ) -> AppointmentTarget | EmptySlotTarget | None:
        """Hit-test a click and forward it to the matching handler."""
        target = self.hit_test(day, minute_offset, lane_fraction)

        if isinstance(target, AppointmentTarget) and self.on_appointment_activated:
            self.on_appointment_activated(target.appointment_id)
        elif isinstance(target, EmptySlotTarget) and self.on_empty_slot_activated:
            self.on_empty_slot_activated(target.day, target.time)
        elif target is None:
            logger.debug("Click on %s at offset %s is outside the grid", day, minute_offset)

        return target

    @staticmethod
    def _contains(placement: Placement, minute_offset: float, lane_fraction: float) -> bool:
        left = placement.left_fraction
        return (
            placement.top_offset <= minute_offset < placement.bottom_offset
            and left <= lane_fraction < left + placement.width_fraction
        )

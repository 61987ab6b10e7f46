"""
Period navigation: pure transitions over PeriodState.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Callable

import pendulum
from pendulum import Date, DateTime

from .exceptions import OutOfBoundsDay
from .models import Granularity, NavigationLimits, PeriodState
from .period_selector import as_date, period_span

logger = logging.getLogger(__name__)


class NavigationAction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    TODAY = "today"


class PeriodNavigator:
    """
    State machine over (anchor date, granularity).

    Every transition is a pure function of the given state; the navigator
    itself holds only configuration (limits, week start, clock). A transition
    that would leave the configured limits returns the state unchanged so the
    host can show a "no further navigation" affordance.
    """

    def __init__(
        self,
        limits: NavigationLimits | None = None,
        clock: Callable[[], DateTime] | None = None,
        week_start: int = 0,
    ):
        self.limits = limits or NavigationLimits()
        self.clock = clock or pendulum.now
        self.week_start = week_start

    def today(self) -> Date:
        return as_date(self.clock())

    def initial_state(
        self,
        granularity: Granularity = Granularity.DAY,
        anchor: Date | None = None,
    ) -> PeriodState:
        """Starting state: today (or ``anchor``) in the given granularity."""
        anchor_date = as_date(anchor) if anchor is not None else self.today()
        return PeriodState(anchor_date=anchor_date, granularity=granularity)

    def next(self, state: PeriodState) -> PeriodState:
        return self._transition(state, self._shift(state, 1))

    def previous(self, state: PeriodState) -> PeriodState:
        return self._transition(state, self._shift(state, -1))

    def go_to_today(self, state: PeriodState) -> PeriodState:
        """Move the anchor to today without touching the granularity."""
        return self._transition(state, replace(state, anchor_date=self.today()))

    def set_granularity(self, state: PeriodState, granularity: Granularity) -> PeriodState:
        """Switch the zoom level; the anchor stays where it is."""
        return replace(state, granularity=Granularity(granularity))

    def apply(self, state: PeriodState, action: NavigationAction) -> PeriodState:
        """Reducer form: (state, action) -> new state."""
        action = NavigationAction(action)
        if action == NavigationAction.NEXT:
            return self.next(state)
        if action == NavigationAction.PREVIOUS:
            return self.previous(state)
        return self.go_to_today(state)

    def ensure_within_limits(self, state: PeriodState) -> PeriodState:
        """
        Validate that the period of ``state`` touches the allowed range.

        Raises:
            OutOfBoundsDay: If the whole period lies outside the limits
        """
        first, last = period_span(state, self.week_start)
        if not self.limits.intersects(first, last):
            raise OutOfBoundsDay(
                f"Period {first} - {last} is outside the navigation limits "
                f"{self.limits.min_date or '-inf'} - {self.limits.max_date or '+inf'}"
            )
        return state

    def _transition(self, current: PeriodState, target: PeriodState) -> PeriodState:
        try:
            return self.ensure_within_limits(target)
        except OutOfBoundsDay as exc:
            logger.info("Navigation rejected: %s", exc)
            return current

    @staticmethod
    def _shift(state: PeriodState, step: int) -> PeriodState:
        anchor = state.anchor_date

        if state.granularity == Granularity.DAY:
            target = anchor.add(days=step)
        elif state.granularity == Granularity.WEEK:
            target = anchor.add(days=7 * step)
        else:
            # Land on the 1st so short months never produce invalid dates
            target = anchor.start_of("month").add(months=step)

        return replace(state, anchor_date=target)

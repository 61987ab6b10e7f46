"""
Locale-aware day and month names for calendar headers.

The engine never hard-codes names; a labeler is injected by the caller.
"""

from typing import Protocol, Sequence

from pendulum import Date

from .models import Granularity, PeriodState


class CalendarLabeler(Protocol):
    """Lookup of localized weekday and month names."""

    def weekday_name(self, day: Date, short: bool = False) -> str:
        """Return the weekday name of ``day``."""

    def month_name(self, day: Date, short: bool = False) -> str:
        """Return the month name of ``day``."""


class PendulumLabeler:
    """Labeler backed by pendulum's locale tables."""

    def __init__(self, locale: str = "en"):
        self.locale = locale

    def weekday_name(self, day: Date, short: bool = False) -> str:
        return day.format("ddd" if short else "dddd", locale=self.locale)

    def month_name(self, day: Date, short: bool = False) -> str:
        return day.format("MMM" if short else "MMMM", locale=self.locale)


def period_title(
    state: PeriodState,
    visible_days: Sequence[Date],
    labeler: CalendarLabeler,
) -> str:
    """
    Header text for the current period.

    Day: "Monday, 19 October"; week: "19 Oct - 25 Oct"; month: "October 2026".
    """
    anchor = state.anchor_date

    if state.granularity == Granularity.DAY:
        return f"{labeler.weekday_name(anchor)}, {anchor.day} {labeler.month_name(anchor)}"

    if state.granularity == Granularity.WEEK:
        first, last = visible_days[0], visible_days[-1]
        return (
            f"{first.day} {labeler.month_name(first, short=True)} - "
            f"{last.day} {labeler.month_name(last, short=True)}"
        )

    return f"{labeler.month_name(anchor)} {anchor.year}"

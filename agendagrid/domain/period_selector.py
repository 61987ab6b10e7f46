"""
Selection of the visible days for a period and bucketing of appointments
into those days.
"""

import logging
import re
from datetime import date
from typing import Dict, List, Sequence, Tuple

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidDate
from .models import (
    Appointment,
    CurrentTimeMarker,
    DayBuckets,
    Granularity,
    PeriodState,
    TimelineBounds,
)
from .time_grid import TimeGridMapper

logger = logging.getLogger(__name__)

# A full calendar day, optionally followed by a time part
_FULL_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}(?:$|[T ])")


def as_date(value: date) -> Date:
    """Normalise any ``datetime.date`` (or datetime) to a pendulum Date."""
    return pendulum.date(value.year, value.month, value.day)


def parse_calendar_date(value: date | str, appointment_id: str = "") -> Date:
    """
    Turn an appointment's stored date into a calendar day.

    Accepts date objects, ``YYYY-MM-DD`` strings and ISO datetimes. A datetime
    keeps its own local calendar day; it is never converted to another time
    zone, so appointments do not drift across midnight.

    Raises:
        InvalidDate: If the value is not a valid calendar date
    """
    if isinstance(value, date):
        return as_date(value)

    if not isinstance(value, str) or not value.strip():
        raise InvalidDate(appointment_id, f"Missing or non-text date: {value!r}")

    text = value.strip()
    if not _FULL_DATE_PATTERN.match(text):
        raise InvalidDate(appointment_id, f"Invalid date {value!r}, expected YYYY-MM-DD")

    try:
        parsed = pendulum.parse(text, exact=True)
    except (ValueError, TypeError) as exc:
        raise InvalidDate(appointment_id, f"Invalid date {value!r}: {exc}") from exc

    if isinstance(parsed, DateTime):
        return parsed.date()
    if isinstance(parsed, Date):
        return parsed

    raise InvalidDate(appointment_id, f"Value {value!r} is not a calendar date")


def week_start_of(day: Date, week_start: int = 0) -> Date:
    """First day of the week containing ``day``; 0=Monday ... 6=Sunday."""
    return day.subtract(days=(day.weekday() - week_start) % 7)


def period_span(state: PeriodState, week_start: int = 0) -> Tuple[Date, Date]:
    """Inclusive first and last day of the period the anchor belongs to."""
    anchor = state.anchor_date

    if state.granularity == Granularity.DAY:
        return anchor, anchor

    if state.granularity == Granularity.WEEK:
        first = week_start_of(anchor, week_start)
        return first, first.add(days=6)

    return anchor.start_of("month"), anchor.end_of("month")


class PeriodSelector:
    """
    Derives which days are visible for a period and which appointments
    belong to each of them.
    """

    def __init__(self, week_start: int = 0):
        if week_start not in range(7):
            raise ValueError(f"week_start must be between 0 and 6, got {week_start}")
        self.week_start = week_start

    def active_period(self, state: PeriodState) -> Tuple[Date, Date]:
        """The period proper, without the padding days of the month grid."""
        return period_span(state, self.week_start)

    def select_visible_days(self, state: PeriodState) -> List[Date]:
        """
        Ordered days to display.

        Day view yields one day, week view seven days from the week start,
        month view whole weeks covering the month so the grid is rectangular.
        """
        first, last = self.active_period(state)

        if state.granularity == Granularity.MONTH:
            first = week_start_of(first, self.week_start)
            last = week_start_of(last, self.week_start).add(days=6)

        days: List[Date] = []
        current = first
        while current <= last:
            days.append(current)
            current = current.add(days=1)

        return days

    def bucket_by_day(
        self,
        appointments: Sequence[Appointment],
        visible_days: Sequence[Date],
    ) -> DayBuckets:
        """
        Group appointments by calendar day.

        Every visible day gets an entry (possibly empty). Appointments on days
        that are not visible are ignored; appointments whose date does not
        parse are reported as diagnostics.
        """
        buckets: Dict[Date, List[Appointment]] = {day: [] for day in visible_days}
        result = DayBuckets(buckets=buckets)

        for appointment in appointments:
            try:
                day = parse_calendar_date(appointment.date, appointment.id)
            except InvalidDate as exc:
                logger.warning("Skipping appointment %s: %s", appointment.id, exc.message)
                result.diagnostics.append(exc.to_diagnostic())
                continue

            if day in buckets:
                buckets[day].append(appointment)

        return result

    def current_time_marker(
        self,
        visible_days: Sequence[Date],
        bounds: TimelineBounds,
        now: DateTime,
    ) -> CurrentTimeMarker:
        """
        Position of the "now" line, visible only when today is displayed and
        the current hour lies inside the visible window.
        """
        today = as_date(now)

        if today not in visible_days:
            return CurrentTimeMarker(visible=False)

        if not bounds.start_hour <= now.hour < bounds.end_hour:
            return CurrentTimeMarker(visible=False, day=today)

        mapper = TimeGridMapper(bounds)
        top_offset = mapper.map_clock_to_offset(now.hour * 60 + now.minute)
        return CurrentTimeMarker(visible=True, day=today, top_offset=top_offset)

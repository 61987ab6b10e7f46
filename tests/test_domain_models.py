"""
Tests for domain models.
"""

import pendulum

from agendagrid.domain.exceptions import InvalidDate, MalformedInterval, OutsideTimeline
from agendagrid.domain.models import (
    Appointment,
    CalendarLayout,
    CurrentTimeMarker,
    DateRangeHint,
    DayLayout,
    DiagnosticReason,
    Granularity,
    NavigationLimits,
    PeriodState,
    Placement,
    Severity,
    TimedAppointment,
)

DAY = pendulum.date(2024, 11, 25)


def _timed(start: int, end: int, appointment_id: str = "a") -> TimedAppointment:
    appointment = Appointment(id=appointment_id, date=DAY, start_time="", end_time="")
    return TimedAppointment(appointment=appointment, day=DAY, start_minutes=start, end_minutes=end)


class TestTimedAppointment:
    """Tests for the half-open overlap test."""

    def test_overlaps(self):
        first = _timed(540, 600)
        second = _timed(570, 630)
        touching = _timed(600, 660)

        assert first.overlaps(second)
        assert second.overlaps(first)
        assert not first.overlaps(touching)
        assert not touching.overlaps(first)

    def test_contained_interval_overlaps(self):
        assert _timed(540, 720).overlaps(_timed(600, 610))


class TestPlacement:
    """Tests for Placement lane helpers."""

    def test_fractions(self):
        placement = Placement(appointment_id="a", top_offset=60, height=30, column_index=2, column_count=4)

        assert placement.width_fraction == 0.25
        assert placement.left_fraction == 0.5
        assert placement.bottom_offset == 90

    def test_equality_ignores_source_appointment(self):
        appointment = Appointment(id="a", date=DAY, start_time="09:00", end_time="10:00")

        with_source = Placement("a", 60, 60, 0, 1, appointment=appointment)

        assert with_source == Placement("a", 60, 60, 0, 1)


class TestRangesAndLimits:
    """Tests for date range helpers."""

    def test_hint_contains(self):
        hint = DateRangeHint(start=DAY, end=DAY.add(days=6))

        assert hint.contains(DAY)
        assert hint.contains(DAY.add(days=6))
        assert not hint.contains(DAY.add(days=7))

    def test_unbounded_limits(self):
        assert NavigationLimits().intersects(pendulum.date(1900, 1, 1), pendulum.date(1900, 1, 1))

    def test_limits_intersection(self):
        limits = NavigationLimits(min_date=DAY, max_date=DAY.add(days=10))

        assert limits.intersects(DAY.subtract(days=3), DAY)
        assert not limits.intersects(DAY.subtract(days=3), DAY.subtract(days=1))
        assert not limits.intersects(DAY.add(days=11), DAY.add(days=12))


class TestCalendarLayout:
    """Tests for CalendarLayout accessors."""

    def test_lookup_by_day(self):
        placement = Placement("a", 0, 60, 0, 1)
        layout = CalendarLayout(
            state=PeriodState(DAY, Granularity.DAY),
            days=[DayLayout(day=DAY, placements=[placement])],
            diagnostics=[],
            marker=CurrentTimeMarker(visible=False),
        )

        assert layout.placements_for(DAY) == [placement]
        assert layout.placements_for(DAY.add(days=1)) == []
        assert layout.all_placements() == [placement]
        assert layout.visible_span == (DAY, DAY)


class TestDiagnostics:
    """Tests for converting per-appointment errors into diagnostics."""

    def test_malformed_interval(self):
        diagnostic = MalformedInterval("a1", "bad times").to_diagnostic()

        assert diagnostic.appointment_id == "a1"
        assert diagnostic.reason == DiagnosticReason.MALFORMED_INTERVAL
        assert diagnostic.severity == Severity.ERROR
        assert diagnostic.message == "bad times"

    def test_invalid_date(self):
        assert InvalidDate("a2", "bad date").to_diagnostic().reason == DiagnosticReason.INVALID_DATE

    def test_outside_timeline_is_warning(self):
        diagnostic = OutsideTimeline("a3", "too early").to_diagnostic()

        assert diagnostic.reason == DiagnosticReason.OUTSIDE_TIMELINE
        assert diagnostic.severity == Severity.WARNING

"""
Tests for the overlap resolver.
"""

import itertools

import pendulum

from agendagrid.domain.models import Appointment, TimedAppointment
from agendagrid.domain.overlap_resolver import OverlapResolver
from agendagrid.domain.time_grid import parse_clock_time

DAY = pendulum.date(2024, 11, 25)


def _timed(appointment_id: str, start: str, end: str) -> TimedAppointment:
    appointment = Appointment(id=appointment_id, date=DAY, start_time=start, end_time=end)
    return TimedAppointment(
        appointment=appointment,
        day=DAY,
        start_minutes=parse_clock_time(start),
        end_minutes=parse_clock_time(end),
    )


class TestOverlapResolver:
    """Tests for OverlapResolver column packing."""

    def setup_method(self):
        self.resolver = OverlapResolver()

    def test_empty_day(self):
        """Test that no appointments yield no slots."""
        assert self.resolver.resolve([]) == {}

    def test_single_appointment_gets_full_width(self):
        """Test that an isolated appointment is column 0 of 1."""
        slots = self.resolver.resolve([_timed("a", "09:00", "10:00")])

        assert slots["a"].column_index == 0
        assert slots["a"].column_count == 1

    def test_two_overlapping_appointments(self):
        """Test 09:00-10:00 and 09:30-10:30 share two lanes in start order."""
        slots = self.resolver.resolve([
            _timed("second", "09:30", "10:30"),
            _timed("first", "09:00", "10:00"),
        ])

        assert (slots["first"].column_index, slots["first"].column_count) == (0, 2)
        assert (slots["second"].column_index, slots["second"].column_count) == (1, 2)

    def test_back_to_back_appointments_do_not_overlap(self):
        """Test that touching endpoints keep every appointment in its own cluster."""
        slots = self.resolver.resolve([
            _timed("a", "08:00", "09:00"),
            _timed("b", "09:00", "10:00"),
            _timed("c", "10:00", "11:00"),
        ])

        for appointment_id in ("a", "b", "c"):
            assert slots[appointment_id].column_index == 0
            assert slots[appointment_id].column_count == 1

    def test_bridge_joins_touching_appointments(self):
        """Test that a bridging appointment merges two touching ones into one cluster."""
        slots = self.resolver.resolve([
            _timed("a", "09:00", "10:00"),
            _timed("b", "10:00", "11:00"),
            _timed("bridge", "09:30", "10:30"),
        ])

        assert {slot.column_count for slot in slots.values()} == {3}
        assert slots["a"].column_index == 0
        assert slots["bridge"].column_index == 1
        assert slots["b"].column_index == 2

    def test_staggered_chain_uses_component_size(self):
        """Test that a transitive chain counts every member, not the max depth."""
        slots = self.resolver.resolve([
            _timed("a", "09:00", "10:00"),
            _timed("b", "09:45", "11:00"),
            _timed("c", "10:30", "12:00"),
        ])

        assert [slots[i].column_count for i in ("a", "b", "c")] == [3, 3, 3]
        assert [slots[i].column_index for i in ("a", "b", "c")] == [0, 1, 2]

    def test_equal_start_tie_broken_by_id(self):
        """Test that simultaneous starts are ordered by id deterministically."""
        slots = self.resolver.resolve([
            _timed("b", "09:00", "10:00"),
            _timed("a", "09:00", "09:30"),
        ])

        assert slots["a"].column_index == 0
        assert slots["b"].column_index == 1
        assert slots["a"].column_count == slots["b"].column_count == 2

    def test_independent_clusters(self):
        """Test that the column count is per cluster, not per day."""
        slots = self.resolver.resolve([
            _timed("m1", "09:00", "10:00"),
            _timed("m2", "09:15", "09:45"),
            _timed("alone", "13:00", "14:00"),
        ])

        assert slots["m1"].column_count == 2
        assert slots["m2"].column_count == 2
        assert (slots["alone"].column_index, slots["alone"].column_count) == (0, 1)

    def test_no_visual_overlap(self):
        """Test that intersecting appointments never share a lane."""
        intervals = [
            _timed("a", "08:00", "09:30"),
            _timed("b", "08:30", "09:00"),
            _timed("c", "09:00", "10:00"),
            _timed("d", "09:15", "09:45"),
            _timed("e", "11:00", "12:00"),
            _timed("f", "11:00", "11:30"),
        ]
        slots = self.resolver.resolve(intervals)

        assert len(slots) == len(intervals)
        for left, right in itertools.combinations(intervals, 2):
            if left.overlaps(right):
                assert slots[left.id].column_count == slots[right.id].column_count
                assert slots[left.id].column_index != slots[right.id].column_index

        for slot in slots.values():
            assert 0 <= slot.column_index < slot.column_count

    def test_result_independent_of_input_order(self):
        """Test that shuffling the input does not change the result."""
        intervals = [
            _timed("a", "09:00", "10:00"),
            _timed("b", "09:30", "10:30"),
            _timed("c", "10:15", "11:00"),
            _timed("d", "13:00", "14:00"),
        ]

        expected = self.resolver.resolve(intervals)

        assert self.resolver.resolve(list(reversed(intervals))) == expected

    def test_clusters_are_ordered(self):
        """Test the exposed cluster partition."""
        clusters = self.resolver.clusters([
            _timed("late", "15:00", "16:00"),
            _timed("b", "09:30", "10:30"),
            _timed("a", "09:00", "10:00"),
        ])

        assert [[member.id for member in cluster] for cluster in clusters] == [["a", "b"], ["late"]]

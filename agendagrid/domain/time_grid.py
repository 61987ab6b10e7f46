"""
Mapping of clock times onto the vertical axis of a daily timeline.

All results are minutes since the start of the visible window; scaling to
pixels is left to the renderer.
"""

import re

from .exceptions import MalformedInterval, OutsideTimeline
from .models import Appointment, Geometry, TimelineBounds

# HH:MM with an optional :SS suffix (SQL time columns), seconds ignored
_CLOCK_PATTERN = re.compile(r"^([0-9]{2}):([0-9]{2})(?::([0-9]{2}))?$")


def parse_clock_time(text: str) -> int:
    """
    Parse an ``HH:MM`` wall-clock time into minutes since midnight.

    Raises:
        ValueError: If the text is not a valid time of day
    """
    if not isinstance(text, str):
        raise ValueError(f"Expected HH:MM string, got {text!r}")

    match = _CLOCK_PATTERN.match(text.strip())
    if not match:
        raise ValueError(f"Invalid time {text!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = match.group(3)
    if hours > 23 or minutes > 59 or (seconds is not None and int(seconds) > 59):
        raise ValueError(f"Time out of range: {text!r}")

    return hours * 60 + minutes


def minutes_to_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeGridMapper:
    """
    Converts an appointment's start/end time into a top offset and height
    within a fixed-bounds daily timeline.
    """

    def __init__(self, bounds: TimelineBounds):
        self.bounds = bounds

    def parse_interval(self, appointment: Appointment) -> tuple[int, int]:
        """
        Parse the appointment's clock times into minutes since midnight.

        Raises:
            MalformedInterval: If a time does not parse or end <= start
        """
        try:
            start = parse_clock_time(appointment.start_time)
            end = parse_clock_time(appointment.end_time)
        except ValueError as exc:
            raise MalformedInterval(appointment.id, str(exc)) from exc

        if end <= start:
            raise MalformedInterval(
                appointment.id,
                f"End time {appointment.end_time} must be after start time {appointment.start_time}",
            )
        return start, end

    def map_clock_to_offset(self, minutes: int) -> int:
        """Offset of a clock time (minutes since midnight) from the window start."""
        return minutes - self.bounds.start_minutes

    def map_to_geometry(self, appointment: Appointment) -> Geometry:
        """
        Compute the clipped vertical geometry of an appointment.

        Raises:
            MalformedInterval: If the interval is malformed
            OutsideTimeline: If the interval does not touch the visible window
        """
        start, end = self.parse_interval(appointment)
        return self.geometry_for_minutes(appointment.id, start, end)

    def geometry_for_minutes(self, appointment_id: str, start: int, end: int) -> Geometry:
        """Geometry for an already parsed interval."""
        window = self.bounds.window_minutes

        if end <= self.bounds.start_minutes or start >= self.bounds.end_minutes:
            raise OutsideTimeline(
                appointment_id,
                f"Interval {minutes_to_clock(start)}-{minutes_to_clock(end)} lies outside "
                f"the visible hours {self.bounds.start_hour:02d}:00-{self.bounds.end_hour:02d}:00",
            )

        top_offset = max(self.map_clock_to_offset(start), 0)
        raw_end = min(self.map_clock_to_offset(end), window)
        height = max(raw_end - top_offset, self.bounds.minimum_visual_height)

        # Floor height may overrun the window at the bottom edge
        if top_offset + height > window:
            top_offset = window - height

        return Geometry(top_offset=top_offset, height=height)

"""
Domain models for appointments, timeline geometry and calendar periods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Tuple

from pendulum import Date


class AppointmentStatus(str, Enum):
    """Display state of an appointment. Used for styling only."""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"
    COMPLETED = "completed"


class Granularity(str, Enum):
    """Temporal zoom level of the calendar view."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class DiagnosticReason(str, Enum):
    MALFORMED_INTERVAL = "malformed_interval"
    INVALID_DATE = "invalid_date"
    OUTSIDE_TIMELINE = "outside_timeline"
    DUPLICATE_ID = "duplicate_id"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Appointment:
    """
    An appointment as delivered by the data source.

    ``date`` and the clock times are kept raw; they are validated by the
    layout engine, which excludes and reports anything it cannot place.
    """
    id: str
    date: date | str
    start_time: str
    end_time: str
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    title: str | None = None
    kind: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class TimelineBounds:
    """
    Visible daily window, e.g. 08:00 - 20:00.

    Invariant: start_hour < end_hour and the minimum visual height fits
    inside the window.
    """
    start_hour: int = 8
    end_hour: int = 20
    minimum_visual_height: int = 15

    def __post_init__(self):
        if not 0 <= self.start_hour <= 23:
            raise ValueError(f"start_hour must be between 0 and 23, got {self.start_hour}")
        if not 1 <= self.end_hour <= 24:
            raise ValueError(f"end_hour must be between 1 and 24, got {self.end_hour}")
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"Start hour {self.start_hour} must be before end hour {self.end_hour}"
            )
        if not 0 < self.minimum_visual_height <= self.window_minutes:
            raise ValueError(
                f"minimum_visual_height must be between 1 and {self.window_minutes}, "
                f"got {self.minimum_visual_height}"
            )

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60

    @property
    def window_minutes(self) -> int:
        """Length of the visible window in minutes."""
        return (self.end_hour - self.start_hour) * 60


@dataclass(frozen=True)
class TimedAppointment:
    """An appointment whose date and clock times have been validated."""
    appointment: Appointment
    day: Date
    start_minutes: int
    end_minutes: int

    @property
    def id(self) -> str:
        return self.appointment.id

    def overlaps(self, other: "TimedAppointment") -> bool:
        """Half-open overlap test: touching endpoints do not overlap."""
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes


@dataclass(frozen=True)
class Geometry:
    """Vertical position inside the timeline, in minutes since the window start."""
    top_offset: int
    height: int


@dataclass(frozen=True)
class ColumnSlot:
    column_index: int
    column_count: int


@dataclass(frozen=True)
class Placement:
    """
    Final layout record for one appointment.

    Offsets are minutes; renderers scale them by their own pixels-per-hour.
    """
    appointment_id: str
    top_offset: int
    height: int
    column_index: int
    column_count: int
    appointment: Appointment | None = field(default=None, compare=False, repr=False)

    @property
    def width_fraction(self) -> float:
        """Share of the day column occupied by this appointment's lane."""
        return 1 / self.column_count

    @property
    def left_fraction(self) -> float:
        """Horizontal offset of the lane as a share of the day column."""
        return self.column_index / self.column_count

    @property
    def bottom_offset(self) -> int:
        return self.top_offset + self.height


@dataclass(frozen=True)
class Diagnostic:
    """Why an appointment was left out of the layout."""
    appointment_id: str
    reason: DiagnosticReason
    message: str
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class PeriodState:
    """The only mutable state of the engine, replaced on every transition."""
    anchor_date: Date
    granularity: Granularity = Granularity.DAY


@dataclass(frozen=True)
class NavigationLimits:
    """Optional hard limits for navigation; ``None`` means unbounded."""
    min_date: Date | None = None
    max_date: Date | None = None

    def __post_init__(self):
        if self.min_date and self.max_date and self.min_date > self.max_date:
            raise ValueError(
                f"min_date {self.min_date} must not be after max_date {self.max_date}"
            )

    def intersects(self, first: Date, last: Date) -> bool:
        """Check whether the span [first, last] touches the allowed range."""
        if self.min_date is not None and last < self.min_date:
            return False
        if self.max_date is not None and first > self.max_date:
            return False
        return True


@dataclass(frozen=True)
class DateRangeHint:
    """Inclusive date span a data source may use to avoid over-fetching."""
    start: Date
    end: Date

    def contains(self, day: Date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CurrentTimeMarker:
    """The "now" line; ``top_offset`` is only set when the marker is visible."""
    visible: bool
    day: Date | None = None
    top_offset: int | None = None


@dataclass
class DayBuckets:
    """Appointments grouped per visible day plus the ones rejected on the way."""
    buckets: Dict[Date, List[Appointment]]
    diagnostics: List[Diagnostic] = field(default_factory=list)


@dataclass
class DayLayout:
    day: Date
    placements: List[Placement]
    is_today: bool = False
    in_active_period: bool = True


@dataclass
class CalendarLayout:
    """
    Everything a renderer needs for one pass: the period, the placements per
    visible day, the current-time marker and the diagnostics.
    """
    state: PeriodState
    days: List[DayLayout]
    diagnostics: List[Diagnostic]
    marker: CurrentTimeMarker
    title: str = ""

    @property
    def visible_span(self) -> Tuple[Date, Date]:
        return self.days[0].day, self.days[-1].day

    def day_layout(self, day: Date) -> DayLayout | None:
        for day_layout in self.days:
            if day_layout.day == day:
                return day_layout
        return None

    def placements_for(self, day: Date) -> List[Placement]:
        day_layout = self.day_layout(day)
        return day_layout.placements if day_layout else []

    def all_placements(self) -> List[Placement]:
        return [p for day_layout in self.days for p in day_layout.placements]

"""
Rich renderables for a computed CalendarLayout.

This is the only place where minute offsets are turned into pixels.
"""

from typing import List

from rich.table import Table
from rich.text import Text

from ..domain.labels import CalendarLabeler
from ..domain.models import (
    AppointmentStatus,
    CalendarLayout,
    DayLayout,
    Granularity,
    Placement,
    TimelineBounds,
)
from ..domain.time_grid import minutes_to_clock

STATUS_STYLES = {
    AppointmentStatus.SCHEDULED: "bold blue",
    AppointmentStatus.CONFIRMED: "bold green",
    AppointmentStatus.CANCELED: "bold red",
    AppointmentStatus.COMPLETED: "dim",
}


def to_pixels(minutes: int, pixels_per_hour: int) -> int:
    """Scale a minute offset to pixels."""
    return round(minutes * pixels_per_hour / 60)


def _time_range(placement: Placement, bounds: TimelineBounds) -> str:
    appointment = placement.appointment
    if appointment is not None:
        return f"{appointment.start_time[:5]}-{appointment.end_time[:5]}"
    start = bounds.start_minutes + placement.top_offset
    return f"{minutes_to_clock(start)}-{minutes_to_clock(start + placement.height)}"


def day_table(
    day_layout: DayLayout,
    bounds: TimelineBounds,
    pixels_per_hour: int,
    labeler: CalendarLabeler,
) -> Table:
    """One table per day listing placements top to bottom."""
    day = day_layout.day
    title = f"{labeler.weekday_name(day)} {day.to_date_string()}"
    if day_layout.is_today:
        title += " (today)"

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Time", style="bold yellow")
    table.add_column("Lane")
    table.add_column("Top (px)", justify="right")
    table.add_column("Height (px)", justify="right")
    table.add_column("Status")
    table.add_column("Title", style="dim")

    for placement in day_layout.placements:
        appointment = placement.appointment
        status = appointment.status if appointment else AppointmentStatus.SCHEDULED
        table.add_row(
            _time_range(placement, bounds),
            f"{placement.column_index + 1}/{placement.column_count}",
            str(to_pixels(placement.top_offset, pixels_per_hour)),
            str(to_pixels(placement.height, pixels_per_hour)),
            Text(status.value, style=STATUS_STYLES[status]),
            (appointment.title if appointment else None) or "N/A",
        )

    return table


def month_table(layout: CalendarLayout, labeler: CalendarLabeler) -> Table:
    """Rectangular month grid with the number of appointments per day."""
    table = Table(title=layout.title, show_header=True, header_style="bold cyan", show_lines=True)

    for day_layout in layout.days[:7]:
        table.add_column(labeler.weekday_name(day_layout.day, short=True), justify="center")

    for week_start in range(0, len(layout.days), 7):
        cells: List[Text] = []
        for day_layout in layout.days[week_start:week_start + 7]:
            count = len(day_layout.placements)
            label = f"{day_layout.day.day}\n{count} appt" if count else f"{day_layout.day.day}\n"
            style = "bold blue" if day_layout.is_today else ""
            if not day_layout.in_active_period:
                style = "dim"
            cells.append(Text(label, style=style))
        table.add_row(*cells)

    return table


def render_layout(
    layout: CalendarLayout,
    bounds: TimelineBounds,
    pixels_per_hour: int,
    labeler: CalendarLabeler,
) -> List[Table]:
    """Renderables for the whole layout, depending on the granularity."""
    if layout.state.granularity == Granularity.MONTH:
        return [month_table(layout, labeler)]
    return [day_table(day_layout, bounds, pixels_per_hour, labeler) for day_layout in layout.days]

"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from ..adapters.http_source import HttpAppointmentSource
from ..adapters.json_source import JsonAppointmentSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import AgendaError
from ..domain.labels import PendulumLabeler
from ..domain.models import CalendarLayout, Granularity, Severity
from ..domain.navigator import PeriodNavigator
from ..domain.overlap_resolver import OverlapResolver
from ..domain.period_selector import PeriodSelector
from ..domain.time_grid import TimeGridMapper, minutes_to_clock
from ..services.calendar_layout import AppointmentSourceProtocol, CalendarLayoutService
from ..services.controller import CalendarController
from .render import render_layout

app = typer.Typer(
    name="agendagrid",
    help="Lay out appointments in day, week and month calendar views",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        # Defaults are enough when a data file is given on the command line
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_source(config: AppConfig, data_file: Optional[Path]) -> AppointmentSourceProtocol:
    if data_file is not None:
        return JsonAppointmentSource(data_file)

    if config.source.kind == "http":
        return HttpAppointmentSource(
            base_url=config.source.base_url,
            timeout=config.source.timeout,
            token=config.source.token,
        )

    if config.source.path is None:
        raise typer.BadParameter("No appointment data: pass --data or set source.path in the config.")
    return JsonAppointmentSource(config.source.path)


def _build_controller(
    config: AppConfig,
    source: AppointmentSourceProtocol,
    granularity: Granularity,
    anchor: Optional[pendulum.Date] = None,
    step: int = 0,
) -> CalendarController:
    """Wire the engine from configuration and move to the requested period."""
    def clock():
        return pendulum.now(config.timezone)

    service = CalendarLayoutService(
        mapper=TimeGridMapper(config.timeline.to_bounds()),
        resolver=OverlapResolver(),
        selector=PeriodSelector(week_start=config.week_start),
        labeler=PendulumLabeler(config.locale),
        clock=clock,
    )
    navigator = PeriodNavigator(
        limits=config.navigation.to_limits(),
        clock=clock,
        week_start=config.week_start,
    )

    state = navigator.initial_state(granularity, anchor)
    for _ in range(abs(step)):
        state = navigator.next(state) if step > 0 else navigator.previous(state)

    return CalendarController(
        service=service,
        navigator=navigator,
        source=source,
        state=state,
        slot_minutes=config.timeline.slot_minutes,
    )


def _print_layout(layout: CalendarLayout, config: AppConfig) -> None:
    labeler = PendulumLabeler(config.locale)
    bounds = config.timeline.to_bounds()

    console.print(f"\n[bold cyan]🗓️  {layout.title}[/bold cyan]\n")

    for table in render_layout(layout, bounds, config.timeline.pixels_per_hour, labeler):
        console.print(table)
        console.print()

    if layout.marker.visible:
        now_clock = minutes_to_clock(bounds.start_minutes + layout.marker.top_offset)
        console.print(f"[bold red]● Now[/bold red] {now_clock} on {layout.marker.day.to_date_string()}")

    if not layout.all_placements():
        console.print("[yellow]⚠ No appointments in this period.[/yellow]")

    for diagnostic in layout.diagnostics:
        colour = "yellow" if diagnostic.severity == Severity.WARNING else "red"
        console.print(
            f"[{colour}]✗ {diagnostic.appointment_id}[/{colour}] "
            f"({diagnostic.reason.value}): {diagnostic.message}"
        )
    console.print()


@app.command()
def show(
    view: Annotated[Optional[Granularity], typer.Option("--view", "-v", help="day, week or month")] = None,
    on: Annotated[Optional[str], typer.Option("--date", help="Anchor date (YYYY-MM-DD), defaults to today")] = None,
    step: Annotated[int, typer.Option("--step", help="Move this many periods forward (negative: backward)")] = 0,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    data_file: Annotated[Optional[Path], typer.Option("--data", help="JSON file with appointments, overrides the configured source")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging")] = False,
):
    """
    Show the calendar layout for a period.

    Examples:

        agendagrid show --data appointments.json

        agendagrid show --view week --date 2024-11-25 --data appointments.json

        agendagrid show --view month --step -1
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        source = _build_source(config, data_file)

        anchor = None
        if on:
            try:
                anchor = pendulum.from_format(on, "YYYY-MM-DD").date()
            except ValueError as e:
                console.print(f"[red]Could not parse date {on!r}: {e}[/red]")
                raise typer.Exit(1)

        controller = _build_controller(config, source, view or config.default_view, anchor, step)
        layout = controller.refresh()
        _print_layout(layout, config)

    except (FileNotFoundError, ValueError, AgendaError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def test_source(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    Test the connection to the configured booking API.
    """
    try:
        config = AppConfig.load_from_yaml(config_file or get_default_config_path())

        if config.source.kind != "http":
            console.print("[yellow]Configured source is a JSON file; nothing to test.[/yellow]")
            return

        source = HttpAppointmentSource(
            base_url=config.source.base_url,
            timeout=config.source.timeout,
            token=config.source.token,
        )
        info = source.test_connection()

        console.print(Panel.fit(
            f"[bold green]✓ Booking API reachable[/bold green]\n\n"
            f"[bold]URL:[/bold] {info['url']}\n"
            f"[bold]Status:[/bold] {info['status']}",
            title="✓ Connection test"
        ))

    except (FileNotFoundError, ValueError, AgendaError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}\n")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]agendagrid[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

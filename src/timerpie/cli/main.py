"""CLI entry point for timerpie.

Uses Click to expose the ``timerpie`` command group. ``parse`` and ``dial``
are one-shot inspections of the parser and the dial geometry; ``run`` drives
a live timer in the terminal, with the background watchdog enabled.
"""

from __future__ import annotations

import logging
import sys
import time
from datetime import datetime

import click

import timerpie
from timerpie.core.dial import ANALOG, DIGITAL, DialConfig, compose
from timerpie.core.display import format_overtime, window_title
from timerpie.core.modes import Mode
from timerpie.core.parser import TimeSpec, end_clock_label, parse
from timerpie.core.timer import Timer, TimerPhase, TimerState
from timerpie.settings import DEFAULT_COLOR, FRAME_RATE

_MODE_OPTION = click.option(
    "--mode",
    type=click.Choice([m.value for m in Mode]),
    default=Mode.CCW.value,
    show_default=True,
    help="ccw/cw: TEXT is a duration in minutes. end: TEXT is a clock time.",
)


def _ring_bell(state: TimerState) -> None:
    click.echo("\a", nl=False)


def _parse_or_exit(text: str, mode: Mode) -> TimeSpec:
    """Parse *text*, printing an error to stderr and exiting 1 on failure."""
    spec = parse(text, mode, datetime.now())
    if spec is None:
        click.echo(f"Cannot parse {text!r} in {mode.value} mode", err=True)
        sys.exit(1)
    return spec


@click.group()
@click.version_option(version=timerpie.__version__, prog_name="timerpie")
@click.option("-v", "--verbose", is_flag=True, help="Log timer transitions.")
def cli(verbose: bool) -> None:
    """timerpie: a radial countdown timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("parse")
@click.argument("text")
@_MODE_OPTION
def parse_command(text: str, mode: str) -> None:
    """Show how TEXT would be interpreted."""
    spec = _parse_or_exit(text, Mode(mode))
    message = f"{spec.total_minutes:g} minutes"
    if spec.target_clock_minute is not None:
        message += f", ends at {end_clock_label(spec.total_minutes, datetime.now())}"
    click.echo(message)


@cli.command()
@click.argument("minutes", type=float)
@_MODE_OPTION
@click.option(
    "--display",
    type=click.Choice([ANALOG, DIGITAL]),
    default=ANALOG,
    show_default=True,
)
@click.option("--color", default=DEFAULT_COLOR, show_default=True, help="Wedge color as #rrggbb.")
def dial(minutes: float, mode: str, display: str, color: str) -> None:
    """Print the ring geometry for MINUTES remaining."""
    now = datetime.now()
    config = DialConfig(color=color, mode=Mode(mode), display=display)
    target = None
    if config.mode is Mode.END:
        target = (now.minute + now.second / 60 + minutes) % 60
    wedges = compose(minutes, config, target, now, running=True)
    if not wedges:
        click.echo("No rings")
        return
    for wedge in wedges:
        ring = wedge.segment
        click.echo(
            f"{ring.tier.value:<6} {ring.value:6.2f} min "
            f"{wedge.angles.start:8.2f} -> {wedge.angles.end:8.2f} "
            f"r={wedge.radius:g}/{wedge.inner_radius:g} {wedge.color}"
            f"{' full' if ring.is_full else ''}"
        )


@cli.command()
@click.argument("text")
@_MODE_OPTION
@click.option("--fps", type=click.IntRange(1, 120), default=FRAME_RATE, show_default=True)
def run(text: str, mode: str, fps: int) -> None:
    """Run a timer for TEXT until it completes or Ctrl-C."""
    selected = Mode(mode)
    spec = _parse_or_exit(text, selected)

    timer = Timer(mode=selected)
    timer.add_listener(_ring_bell)
    timer.watchdog.start()
    try:
        timer.start(spec)
        while timer.phase != TimerPhase.COMPLETED:
            remaining = timer.tick()
            click.echo(f"\r{window_title(timer.phase, remaining):<24}", nl=False)
            time.sleep(1 / fps)
        click.echo(f"\rTimer completed {format_overtime(timer.overtime()):<12}")
    except KeyboardInterrupt:
        timer.reset()
        click.echo("\nTimer cancelled", err=True)
        sys.exit(130)
    finally:
        timer.watchdog.stop()

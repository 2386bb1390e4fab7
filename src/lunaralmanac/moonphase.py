"""Moon phase computation: Julian day conversion and octant classification."""

import calendar
import math
from collections.abc import Callable
from datetime import date, datetime, timedelta

from lunaralmanac.models import MoonPhaseSample

# Julian day of the new moon of 2000-01-06 (18:14 UT).
_EPOCH_NEW_MOON_JD = 2451550.1
# Mean synodic month in days.
_SYNODIC_MONTH_DAYS = 29.530588853

# (exclusive upper bound, phase name, illumination as a function of phase fraction)
_OCTANTS: tuple[tuple[float, str, Callable[[float], float]], ...] = (
    (0.0625, "New Moon", lambda p: 0.0),
    (0.1875, "Waxing Crescent", lambda p: p * 4),
    (0.3125, "First Quarter", lambda p: 0.5),
    (0.4375, "Waxing Gibbous", lambda p: 0.5 + (p - 0.25) * 2),
    (0.5625, "Full Moon", lambda p: 1.0),
    (0.6875, "Waning Gibbous", lambda p: 1 - (p - 0.5) * 2),
    (0.8125, "Last Quarter", lambda p: 0.5),
    (1.0, "Waning Crescent", lambda p: 0.5 - (p - 0.75) * 2),
)

PHASE_NAMES: tuple[str, ...] = tuple(name for _, name, _ in _OCTANTS)


def julian_day_number(year: int, month: int, day: int) -> int:
    """Convert a proleptic Gregorian date to its Julian Day Number.

    Python's ``//`` floors toward negative infinity, so the formula holds for
    negative intermediate values without extra handling.
    """
    a = (14 - month) // 12
    y = year + 4800 - a
    m = month + 12 * a - 3
    return (
        day
        + (153 * m + 2) // 5
        + 365 * y
        + y // 4
        - y // 100
        + y // 400
        - 32045
    )


def phase_fraction(jdn: int) -> float:
    """Position of a Julian day within the synodic cycle, in [0, 1)."""
    raw = math.fmod((jdn - _EPOCH_NEW_MOON_JD) / _SYNODIC_MONTH_DAYS, 1.0)
    if raw < 0:
        raw += 1.0
    # A tiny negative remainder plus 1.0 can round up to exactly 1.0.
    if raw >= 1.0:
        raw = 0.0
    return raw


def classify_phase(fraction: float) -> tuple[str, float]:
    """Map a phase fraction to its octant name and clamped illumination.

    Args:
        fraction: Phase fraction in [0, 1).

    Returns:
        (phase name, illumination in [0, 1]).
    """
    for upper, name, illumination in _OCTANTS:
        if fraction < upper:
            break
    return name, max(0.0, min(1.0, illumination(fraction)))


def compute_phase(day: date) -> MoonPhaseSample:
    """Compute the moon phase for a calendar date.

    Total over every date ``datetime.date`` can represent. A ``datetime`` is
    accepted and its time of day is ignored.

    Args:
        day: Calendar date.

    Returns:
        MoonPhaseSample for that date.
    """
    if isinstance(day, datetime):
        day = day.date()
    fraction = phase_fraction(julian_day_number(day.year, day.month, day.day))
    name, illumination = classify_phase(fraction)
    return MoonPhaseSample(
        date=day,
        phase_fraction=fraction,
        illumination=illumination,
        phase_name=name,
    )


def current_phase(today: date | None = None) -> MoonPhaseSample:
    return compute_phase(today or date.today())


def month_calendar(year: int, month: int) -> tuple[MoonPhaseSample, ...]:
    """One sample per day of the given month."""
    _, n_days = calendar.monthrange(year, month)
    return tuple(compute_phase(date(year, month, d)) for d in range(1, n_days + 1))


def phase_window(start: date, days: int = 30) -> tuple[MoonPhaseSample, ...]:
    """Consecutive daily samples starting at ``start``.

    The window is cut short at ``date.max`` rather than overflowing.
    """
    samples: list[MoonPhaseSample] = []
    for offset in range(days):
        try:
            day = start + timedelta(days=offset)
        except OverflowError:
            break
        samples.append(compute_phase(day))
    return tuple(samples)

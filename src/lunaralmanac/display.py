"""Formatting helpers shared by the Streamlit panel and the CLI."""

from datetime import datetime, time

_PHASE_ICONS: dict[str, str] = {
    "New Moon": "🌑",
    "Waxing Crescent": "🌒",
    "First Quarter": "🌓",
    "Waxing Gibbous": "🌔",
    "Full Moon": "🌕",
    "Waning Gibbous": "🌖",
    "Last Quarter": "🌗",
    "Waning Crescent": "🌘",
}

_TIME_FORMATS = ("%H:%M:%S.%f", "%H:%M:%S", "%H:%M")


def phase_icon(phase_name: str) -> str:
    return _PHASE_ICONS.get(phase_name, "🌙")


def format_time(value: str) -> str:
    """The API reports "-" when an event does not happen that day."""
    if not value or value == "-":
        return "N/A"
    return value


def _parse_time(value: str) -> time | None:
    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    return None


def sun_status(sunrise: str, sunset: str, current_time: str) -> str:
    """Return "Day" between sunrise and sunset (inclusive), "Night" otherwise.

    "Unknown" when any of the three times is missing or unparseable
    (polar day/night reports "-").
    """
    if not sunrise or not sunset or not current_time:
        return "Unknown"
    rise = _parse_time(sunrise)
    set_ = _parse_time(sunset)
    now = _parse_time(current_time)
    if rise is None or set_ is None or now is None:
        return "Unknown"
    return "Day" if rise <= now <= set_ else "Night"


def format_degrees(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}°"


def format_sun_distance(distance_km: float | None) -> str:
    if distance_km is None:
        return "N/A"
    return f"{distance_km / 1_000_000:.2f}M km"


def format_moon_distance(distance_km: float | None) -> str:
    if distance_km is None:
        return "N/A"
    return f"{distance_km / 1000:.0f}k km"


def format_illumination(percent: float) -> str:
    return f"{percent:.1f}% illuminated"

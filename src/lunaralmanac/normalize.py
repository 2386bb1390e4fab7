"""Reshape raw ipgeolocation.io astronomy responses into NormalizedAstronomyRecord."""

import logging
import math
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from lunaralmanac.models import (
    Coordinates,
    LocationInfo,
    MoonInfo,
    NormalizedAstronomyRecord,
    ObservationTimestamp,
    SunInfo,
)

logger = logging.getLogger(__name__)

# Upstream moon phase code → display name (same names as moonphase.PHASE_NAMES)
MOON_PHASE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "NEW_MOON": "New Moon",
        "WAXING_CRESCENT": "Waxing Crescent",
        "FIRST_QUARTER": "First Quarter",
        "WAXING_GIBBOUS": "Waxing Gibbous",
        "FULL_MOON": "Full Moon",
        "WANING_GIBBOUS": "Waning Gibbous",
        "LAST_QUARTER": "Last Quarter",
        "WANING_CRESCENT": "Waning Crescent",
    }
)

_WORD_START_RE = re.compile(r"\b\w")


class MalformedCoordinate(ValueError):
    """Latitude or longitude could not be parsed as a finite real number."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Malformed {field}: {value!r}")
        self.field = field
        self.value = value


def format_moon_phase(code: str) -> str:
    """Return the display name for an upstream moon phase code.

    Unknown codes are title-cased word by word ("SUPER_BLOOD_MOON" →
    "Super Blood Moon"), so new upstream vocabulary never fails.
    """
    if code in MOON_PHASE_NAMES:
        return MOON_PHASE_NAMES[code]
    text = code.replace("_", " ").lower()
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), text)


def _text(block: Mapping[str, Any], key: str, default: str = "") -> str:
    value = block.get(key)
    if value is None or value == "":
        return default
    return str(value)


def _number(block: Mapping[str, Any], key: str) -> float | None:
    """Pass a numeric field through unconverted; None when absent or not numeric."""
    value = block.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coordinate(block: Mapping[str, Any], key: str) -> float:
    value = block.get(key)
    if isinstance(value, bool):
        raise MalformedCoordinate(key, value)
    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise MalformedCoordinate(key, value) from exc
    if not math.isfinite(parsed):
        raise MalformedCoordinate(key, value)
    return parsed


def _illumination(block: Mapping[str, Any]) -> float:
    """Magnitude of the illumination percentage. The upstream sign encodes waxing/waning."""
    value = block.get("moon_illumination_percentage")
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.warning("Unparseable moon illumination %r, using 0.0", value)
        return 0.0
    if not math.isfinite(parsed):
        logger.warning("Non-finite moon illumination %r, using 0.0", value)
        return 0.0
    return abs(parsed)


def normalize_astronomy(raw: Mapping[str, Any]) -> NormalizedAstronomyRecord:
    """Normalize one astronomy API response.

    Args:
        raw: Decoded JSON body with ``location`` and ``astronomy`` blocks.

    Returns:
        NormalizedAstronomyRecord. Missing fields take their documented fallbacks.

    Raises:
        MalformedCoordinate: When latitude or longitude is not a finite number.
    """
    location = raw.get("location") or {}
    astronomy = raw.get("astronomy") or {}

    coordinates = Coordinates(
        lat=_coordinate(location, "latitude"),
        lng=_coordinate(location, "longitude"),
    )

    return NormalizedAstronomyRecord(
        location=LocationInfo(
            city=_text(location, "city", "Unknown"),
            region=_text(location, "state_prov"),
            country=_text(location, "country_name", "Unknown"),
            coordinates=coordinates,
        ),
        sun=SunInfo(
            sunrise=_text(astronomy, "sunrise"),
            sunset=_text(astronomy, "sunset"),
            solar_noon=_text(astronomy, "solar_noon"),
            day_length=_text(astronomy, "day_length"),
            altitude=_number(astronomy, "sun_altitude"),
            azimuth=_number(astronomy, "sun_azimuth"),
            distance=_number(astronomy, "sun_distance"),
            status=_text(astronomy, "sun_status"),
        ),
        moon=MoonInfo(
            phase=format_moon_phase(_text(astronomy, "moon_phase")),
            illumination=_illumination(astronomy),
            moonrise=_text(astronomy, "moonrise"),
            moonset=_text(astronomy, "moonset"),
            altitude=_number(astronomy, "moon_altitude"),
            azimuth=_number(astronomy, "moon_azimuth"),
            distance=_number(astronomy, "moon_distance"),
            parallactic_angle=_number(astronomy, "moon_parallactic_angle"),
            angle=_number(astronomy, "moon_angle"),
            status=_text(astronomy, "moon_status"),
        ),
        timestamp=ObservationTimestamp(
            date=_text(astronomy, "date"),
            current_time=_text(astronomy, "current_time"),
        ),
    )

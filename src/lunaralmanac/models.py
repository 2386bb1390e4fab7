"""Records passed between the phase calculator, the normalizer, and the renderers."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MoonPhaseSample:
    """Moon phase for a single calendar day. Computed on demand, never mutated."""

    date: date  # Calendar date (time of day ignored)
    phase_fraction: float  # Position in the synodic cycle, [0, 1), 0 = new moon
    illumination: float  # Lit fraction of the disk, clamped to [0, 1]
    phase_name: str  # One of the 8 canonical phase names


@dataclass(frozen=True)
class Coordinates:
    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)


@dataclass(frozen=True)
class LocationInfo:
    """Where the astronomy data was computed for."""

    city: str  # "Unknown" when the source omits it
    region: str  # State/province, "" when absent
    country: str  # "Unknown" when the source omits it
    coordinates: Coordinates


@dataclass(frozen=True)
class SunInfo:
    """Solar timings and geometry. Times are opaque strings from the API."""

    sunrise: str
    sunset: str
    solar_noon: str
    day_length: str
    altitude: float | None  # Degrees
    azimuth: float | None  # Degrees
    distance: float | None  # API-native unit (km), unconverted
    status: str


@dataclass(frozen=True)
class MoonInfo:
    """Lunar timings, geometry and phase."""

    phase: str  # Human-readable phase name
    illumination: float  # Percentage, sign discarded
    moonrise: str
    moonset: str
    altitude: float | None  # Degrees
    azimuth: float | None  # Degrees
    distance: float | None  # API-native unit (km), unconverted
    parallactic_angle: float | None  # Degrees
    angle: float | None  # Moon angle as reported upstream
    status: str


@dataclass(frozen=True)
class ObservationTimestamp:
    date: str  # Source-reported date, verbatim
    current_time: str  # Source-reported local time, verbatim


@dataclass(frozen=True)
class NormalizedAstronomyRecord:
    """Canonical form of one astronomy API response. The sole input to the sun/moon panel."""

    location: LocationInfo
    sun: SunInfo
    moon: MoonInfo
    timestamp: ObservationTimestamp

"""
aerotransit — Aircraft Transit Prediction Across the Moon and Sun
===================================================================

A pure-NumPy library that predicts when an aircraft will appear in front
of (or close to) the Moon or the Sun as seen by a fixed ground observer,
early enough to aim a camera.

Each detection pass turns absolute positions into the observer's
horizontal frame and searches a short look-ahead window::

    AircraftState ──extrapolate──▶ (lat, lon, h) ──horizontal──▶ alt/az ─┐
                                                                        ├─▶ separation ─▶ min ─▶ confidence
    CelestialPositionProvider ─────────────────────────────▶ alt/az ────┘

Coordinate Conventions
----------------------
- Latitude/longitude/azimuth/altitude angles are in **degrees**.
- Azimuth: 0 = North, 90 = East, range [0, 360).
- Altitude (elevation angle): 0 = horizon, negative = below.
- Heights are metres; ground speed m/s; timestamps Unix seconds.

Components
----------
- ``horizon``     — horizontal coordinate transform, angular separation
- ``trajectory``  — aircraft state and great-circle dead reckoning
- ``celestial``   — Celestial Position Providers (analytic Sun/Moon, static),
                    rise/set search
- ``confidence``  — multiplicative confidence score
- ``detector``    — window search, detection pass, formatting
- ``monitor``     — polling loop that re-runs detection on a cadence
- ``config``      — ``TransitConfig`` tunables and JSON loading
"""

from .horizon import (
    Observer, HorizontalPosition,
    haversine_distance_km, initial_bearing,
    horizontal_coordinates, aircraft_horizontal,
    angular_separation, separation_between,
    topocentric_azel,
)

from .trajectory import (
    AircraftState,
    destination_point,
    extrapolate,
    synthetic_crossing_aircraft,
)

from .celestial import (
    MOON, SUN, BODIES,
    CelestialPosition,
    CelestialPositionProvider,
    EphemerisProvider,
    StaticPositionProvider,
    RiseSet, rise_set_times,
)

from .confidence import (
    compute_confidence,
    separation_factor, disk_bonus, speed_factor,
    freshness_factor, visibility_factor,
)

from .config import TransitConfig, load_config, save_config

from .detector import (
    ClosestApproach, TransitPrediction, TransitDetector,
    sample_offsets, find_closest_approach, predict_transit,
    detect, detect_all,
    format_time_to_transit, format_predictions,
)

from .monitor import TransitMonitor

from .utils import (
    R_EARTH_KM,
    unix_to_jd, jd_to_unix, gmst,
    wrap_degrees, wrap_longitude,
)

__version__ = "1.0.0"
__all__ = [
    # ── Constants ──
    "R_EARTH_KM", "MOON", "SUN", "BODIES",
    # ── Horizontal geometry ──
    "Observer", "HorizontalPosition",
    "haversine_distance_km", "initial_bearing",
    "horizontal_coordinates", "aircraft_horizontal",
    "angular_separation", "separation_between", "topocentric_azel",
    # ── Trajectory ──
    "AircraftState", "destination_point", "extrapolate",
    "synthetic_crossing_aircraft",
    # ── Celestial providers ──
    "CelestialPosition", "CelestialPositionProvider",
    "EphemerisProvider", "StaticPositionProvider",
    "RiseSet", "rise_set_times",
    # ── Confidence ──
    "compute_confidence", "separation_factor", "disk_bonus",
    "speed_factor", "freshness_factor", "visibility_factor",
    # ── Configuration ──
    "TransitConfig", "load_config", "save_config",
    # ── Detection ──
    "ClosestApproach", "TransitPrediction", "TransitDetector",
    "sample_offsets", "find_closest_approach", "predict_transit",
    "detect", "detect_all",
    "format_time_to_transit", "format_predictions",
    # ── Scheduling ──
    "TransitMonitor",
    # ── Utilities ──
    "unix_to_jd", "jd_to_unix", "gmst",
    "wrap_degrees", "wrap_longitude",
]

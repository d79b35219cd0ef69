"""
aerotransit.celestial — Celestial Position Providers
======================================================

The transit search never computes an ephemeris itself.  It asks a
``CelestialPositionProvider`` for the body's horizontal position at each
sampled instant.  A provider is bound to one body, so the same search
serves the Moon and the Sun without branching on a body name.

Providers
---------
- ``EphemerisProvider`` — analytic Sun/Moon positions from ``sun`` and
  ``moon``, rotated to ECEF and viewed topocentrically (includes lunar
  parallax).
- ``StaticPositionProvider`` — returns one fixed position; for tests,
  replays, or positions supplied by an external ephemeris.

A provider must be deterministic for a given (observer, timestamp) and
safe to call repeatedly.  Returning ``None`` means "value unavailable";
the search skips that sample.

Planning
--------
``rise_set_times`` scans any provider for horizon crossings over a span of
days, so a photographer knows when the body is up at all.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .horizon import Observer, topocentric_azel
from .moon import (
    moon_position_eci, moon_angular_radius,
    moon_illumination_fraction, moon_phase_name,
)
from .sun import sun_position_eci, sun_angular_radius
from .utils import (
    DAILY_SECONDS, ecef_to_eci, eci_to_ecef, lla_to_ecef,
    right_ascension_declination, unix_to_jd,
)

MOON = "Moon"
SUN = "Sun"
BODIES = (MOON, SUN)

RISE_SET_SCAN_STEP = 600.0      # [s] between altitude samples
RISE_SET_TOLERANCE = 1.0        # [s] bisection stop


@dataclass(frozen=True)
class CelestialPosition:
    """Apparent position of a body as seen by an observer.

    body : str — body name ('Moon' or 'Sun')
    altitude : float — elevation above horizon [deg]
    azimuth : float — compass bearing [deg], 0..360
    angular_diameter : float — apparent disk diameter [deg]
    distance : float — observer-body distance [km]
    right_ascension, declination : float or None — topocentric equatorial
        coordinates of date [deg]
    illumination : float or None — illuminated fraction (Moon only)
    phase : str or None — phase name (Moon only)
    """
    body: str
    altitude: float
    azimuth: float
    angular_diameter: float
    distance: float
    right_ascension: Optional[float] = None
    declination: Optional[float] = None
    illumination: Optional[float] = None
    phase: Optional[str] = None

    @property
    def angular_radius(self) -> float:
        return self.angular_diameter / 2.0

    @property
    def above_horizon(self) -> bool:
        return self.altitude > 0.0


class CelestialPositionProvider(ABC):
    """Yields a body's horizontal position for an observer and instant."""

    body: str = ""

    @abstractmethod
    def position_of(self, observer: Observer,
                    timestamp: float) -> Optional[CelestialPosition]:
        """Position at ``timestamp`` [Unix s], or None if unavailable."""

    def __call__(self, observer: Observer,
                 timestamp: float) -> Optional[CelestialPosition]:
        return self.position_of(observer, timestamp)


class EphemerisProvider(CelestialPositionProvider):
    """Analytic low-precision Sun or Moon positions.

    Parameters
    ----------
    body : str — 'Moon' or 'Sun' (case-insensitive)
    """

    def __init__(self, body: str = MOON):
        name = body.capitalize()
        if name not in BODIES:
            raise ValueError(f"Unknown body '{body}'. Choose from {BODIES}.")
        self.body = name

    def __repr__(self) -> str:
        return f"EphemerisProvider({self.body!r})"

    def position_of(self, observer: Observer,
                    timestamp: float) -> CelestialPosition:
        jd = unix_to_jd(timestamp)
        if self.body == MOON:
            r_eci = moon_position_eci(jd)
        else:
            r_eci = sun_position_eci(jd)

        lat, lon = np.deg2rad(observer.lat), np.deg2rad(observer.lon)
        r_obs = lla_to_ecef(lat, lon, observer.elevation)
        az, el, rng = topocentric_azel(r_obs, lat, lon, eci_to_ecef(r_eci, jd))
        ra, dec = right_ascension_declination(r_eci - ecef_to_eci(r_obs, jd))

        if self.body == MOON:
            radius = moon_angular_radius(rng)
            illumination = moon_illumination_fraction(jd)
            phase = moon_phase_name(jd)
        else:
            radius = sun_angular_radius(rng)
            illumination = phase = None

        return CelestialPosition(
            body=self.body,
            altitude=float(np.rad2deg(el)),
            azimuth=float(np.rad2deg(az)),
            angular_diameter=float(np.rad2deg(2.0 * radius)),
            distance=rng / 1000.0,
            right_ascension=float(np.rad2deg(ra)),
            declination=float(np.rad2deg(dec)),
            illumination=illumination,
            phase=phase,
        )


class StaticPositionProvider(CelestialPositionProvider):
    """Returns the same position for every observer and timestamp."""

    def __init__(self, position: Optional[CelestialPosition]):
        self.position = position
        self.body = position.body if position is not None else ""

    def __repr__(self) -> str:
        return f"StaticPositionProvider({self.position!r})"

    def position_of(self, observer: Observer,
                    timestamp: float) -> Optional[CelestialPosition]:
        return self.position


# ════════════════════════════════════════════════════════════════════════════
#  Rise / Set Search
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RiseSet:
    """First rise and set of a body inside a search span.

    rise_time, set_time : float or None — Unix timestamps [s]
    always_up, always_down : bool — no horizon crossing in the span and the
        body stayed above / at-or-below the horizon
    """
    rise_time: Optional[float]
    set_time: Optional[float]
    always_up: bool = False
    always_down: bool = False


def _altitude(provider, observer, timestamp) -> Optional[float]:
    pos = provider.position_of(observer, timestamp)
    return None if pos is None else pos.altitude


def _bisect_crossing(provider, observer, t0, t1, up0, tol) -> float:
    """Narrow a bracketing interval down to ``tol`` seconds."""
    while t1 - t0 > tol:
        mid = 0.5 * (t0 + t1)
        alt = _altitude(provider, observer, mid)
        if alt is None:
            break
        if (alt > 0.0) == up0:
            t0 = mid
        else:
            t1 = mid
    return 0.5 * (t0 + t1)


def rise_set_times(
    provider: CelestialPositionProvider,
    observer: Observer,
    start: float,
    days: float = 1.0,
    step: float = RISE_SET_SCAN_STEP,
    tol: float = RISE_SET_TOLERANCE,
) -> RiseSet:
    """Find the first rise and set of the provider's body after ``start``.

    Altitude is sampled every ``step`` seconds; each sign change of the
    body's centre against the geometric horizon is refined by bisection.
    Refraction and the disk's upper limb are ignored, so events land a few
    minutes later (rise) or earlier (set) than almanac times.  Samples where
    the provider has no value break the scan into independent stretches.

    Parameters
    ----------
    provider : CelestialPositionProvider
    observer : Observer
    start : float — beginning of the span [Unix s]
    days : float — length of the span [days]
    step : float — coarse sampling step [s]
    tol : float — crossing time tolerance [s]

    Returns
    -------
    RiseSet
    """
    end = start + days * DAILY_SECONDS
    rise = set_ = None

    t = t_prev = start
    alt_prev = first_alt = _altitude(provider, observer, start)
    while t < end and (rise is None or set_ is None):
        t = min(t + step, end)
        alt = _altitude(provider, observer, t)
        if first_alt is None:
            first_alt = alt
        if alt is not None and alt_prev is not None:
            up_prev, up = alt_prev > 0.0, alt > 0.0
            if up != up_prev:
                crossing = _bisect_crossing(provider, observer,
                                            t_prev, t, up_prev, tol)
                if up and rise is None:
                    rise = crossing
                elif not up and set_ is None:
                    set_ = crossing
        t_prev, alt_prev = t, alt

    if rise is None and set_ is None:
        up = first_alt is not None and first_alt > 0.0
        return RiseSet(None, None, always_up=up,
                       always_down=first_alt is not None and not up)
    return RiseSet(rise, set_)

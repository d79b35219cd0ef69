"""
aerotransit.horizon — Observer-Relative Horizontal Coordinates
================================================================

Converts geodetic target positions into the altitude/azimuth frame of a
ground observer and measures angular separation between two directions.

Two transforms live here:

- ``horizontal_coordinates`` — flat small-angle model used for aircraft.
  Ground distance is the haversine great-circle distance on a spherical
  Earth (R = 6371 km), azimuth is the initial great-circle bearing, and the
  elevation angle is ``atan2(Δh, distance)``.  Refraction and the curvature
  drop beyond the geometric horizon are ignored; aircraft of interest are
  within tens of kilometres.
- ``topocentric_azel`` — rigorous ECEF → SEZ rotation, used for bodies at
  astronomical distance.

All angles crossing the public API are in **degrees**.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .utils import R_EARTH_KM, wrap_degrees


# ════════════════════════════════════════════════════════════════════════════
#  Value Types
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Observer:
    """Fixed ground observer.

    Parameters
    ----------
    lat : float — geodetic latitude [deg], [-90, 90]
    lon : float — geodetic longitude [deg], [-180, 180]
    elevation : float — height above the reference surface [m]
    """
    lat: float
    lon: float
    elevation: float = 0.0


@dataclass(frozen=True)
class HorizontalPosition:
    """Direction from an observer.

    altitude : float — elevation above horizon [deg], negative = below
    azimuth : float — compass bearing [deg], [0, 360), 0=North, 90=East
    distance_km : float or None — great-circle ground distance to the
        target [km]
    slant_range_km : float or None — straight-line range through the air,
        ``hypot(distance, Δh)`` [km]
    """
    altitude: float
    azimuth: float
    distance_km: Optional[float] = None
    slant_range_km: Optional[float] = None

    @property
    def above_horizon(self) -> bool:
        return self.altitude > 0.0


# ════════════════════════════════════════════════════════════════════════════
#  Spherical-Earth Geodesy
# ════════════════════════════════════════════════════════════════════════════

def haversine_distance_km(lat1: float, lon1: float,
                          lat2: float, lon2: float) -> float:
    """Great-circle distance between two lat/lon points [km]."""
    phi1, phi2 = np.deg2rad(lat1), np.deg2rad(lat2)
    d_phi = np.deg2rad(lat2 - lat1)
    d_lam = np.deg2rad(lon2 - lon1)

    a = np.sin(d_phi / 2.0)**2 \
        + np.cos(phi1) * np.cos(phi2) * np.sin(d_lam / 2.0)**2
    a = min(max(a, 0.0), 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return float(R_EARTH_KM * c)


def initial_bearing(lat1: float, lon1: float,
                    lat2: float, lon2: float) -> float:
    """Initial great-circle bearing (forward azimuth) [deg, 0..360).

    Coincident points give 0.
    """
    phi1, phi2 = np.deg2rad(lat1), np.deg2rad(lat2)
    d_lam = np.deg2rad(lon2 - lon1)

    y = np.sin(d_lam) * np.cos(phi2)
    x = np.cos(phi1) * np.sin(phi2) - np.sin(phi1) * np.cos(phi2) * np.cos(d_lam)
    return wrap_degrees(np.rad2deg(np.arctan2(y, x)))


# ════════════════════════════════════════════════════════════════════════════
#  Horizontal Coordinate Transform
# ════════════════════════════════════════════════════════════════════════════

def horizontal_coordinates(
    observer: Observer, lat: float, lon: float, altitude: float,
) -> HorizontalPosition:
    """Observer-relative altitude/azimuth of a target near the observer.

    Parameters
    ----------
    observer : Observer
    lat, lon : float — target geodetic latitude/longitude [deg]
    altitude : float — target absolute altitude [m]

    Returns
    -------
    HorizontalPosition with altitude [deg], azimuth [deg], ground
    distance [km] and slant range [km].  Total on all finite inputs; a
    target directly above the observer has azimuth 0 and altitude ±90.
    """
    distance_km = haversine_distance_km(observer.lat, observer.lon, lat, lon)
    azimuth = initial_bearing(observer.lat, observer.lon, lat, lon)

    height = altitude - observer.elevation
    elevation = np.rad2deg(np.arctan2(height, distance_km * 1000.0))

    return HorizontalPosition(
        altitude=float(elevation),
        azimuth=azimuth,
        distance_km=distance_km,
        slant_range_km=float(np.hypot(distance_km, height / 1000.0)),
    )


def aircraft_horizontal(observer: Observer, aircraft) -> HorizontalPosition:
    """Current horizontal position of an ``AircraftState``."""
    return horizontal_coordinates(
        observer, aircraft.lat, aircraft.lon, aircraft.altitude
    )


def topocentric_azel(
    r_observer_ecef: NDArray, lat: float, lon: float,
    r_target_ecef: NDArray,
) -> tuple[float, float, float]:
    """Compute azimuth, elevation, and range from observer to target.

    Parameters
    ----------
    r_observer_ecef : (3,) — observer ECEF position [m]
    lat, lon : float — observer geodetic latitude/longitude [rad]
    r_target_ecef : (3,) — target ECEF position [m]

    Returns
    -------
    az : float — azimuth [rad], 0=North, π/2=East
    el : float — elevation [rad], 0=horizon, π/2=zenith
    rng : float — slant range [m]
    """
    delta = r_target_ecef - r_observer_ecef
    rng = np.linalg.norm(delta)

    # SEZ (South-East-Zenith) rotation
    sin_lat, cos_lat = np.sin(lat), np.cos(lat)
    sin_lon, cos_lon = np.sin(lon), np.cos(lon)

    S = (sin_lat * cos_lon * delta[0]
         + sin_lat * sin_lon * delta[1]
         - cos_lat * delta[2])
    E = (-sin_lon * delta[0] + cos_lon * delta[1])
    Z = (cos_lat * cos_lon * delta[0]
         + cos_lat * sin_lon * delta[1]
         + sin_lat * delta[2])

    el = np.arctan2(Z, np.sqrt(S**2 + E**2))
    az = np.arctan2(E, -S) % (2.0 * np.pi)  # -S because S points South

    return float(az), float(el), float(rng)


# ════════════════════════════════════════════════════════════════════════════
#  Angular Separation
# ════════════════════════════════════════════════════════════════════════════

def angular_separation(alt1: float, az1: float,
                       alt2: float, az2: float) -> float:
    """Great-circle angle between two horizontal directions [deg, 0..180].

    Haversine on (altitude, azimuth) treated as latitude/longitude on the
    unit sphere.  Symmetric; zero for identical inputs.
    """
    phi1, phi2 = np.deg2rad(alt1), np.deg2rad(alt2)
    d_phi = phi2 - phi1
    d_theta = np.deg2rad(az2 - az1)

    a = np.sin(d_phi / 2.0)**2 \
        + np.cos(phi1) * np.cos(phi2) * np.sin(d_theta / 2.0)**2
    a = min(max(a, 0.0), 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return float(np.rad2deg(c))


def separation_between(p: HorizontalPosition, q) -> float:
    """Angular separation between two objects exposing altitude/azimuth."""
    return angular_separation(p.altitude, p.azimuth, q.altitude, q.azimuth)

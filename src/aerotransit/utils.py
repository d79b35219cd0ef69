"""
aerotransit.utils — Foundational Utilities
============================================

Constants, vector helpers, time conversions, and the Earth-fixed ↔ inertial
rotations used by the analytic ephemeris.  All functions are pure NumPy.
"""

import numpy as np
from numpy.typing import NDArray

# ── Physical Constants ──────────────────────────────────────────────────────
R_EARTH_KM = 6371.0             # Mean spherical Earth radius      [km]
R_EARTH = 6_378_137.0           # WGS-84 semi-major axis          [m]
F_EARTH = 1.0 / 298.257223563  # WGS-84 flattening
E2_EARTH = 2 * F_EARTH - F_EARTH ** 2  # First eccentricity squared

DAILY_SECONDS = 86400.0
JD_UNIX_EPOCH = 2_440_587.5     # Julian Date of 1970-01-01T00:00:00Z


# ── Vector Helpers ──────────────────────────────────────────────────────────

def normalize(v: NDArray) -> NDArray:
    """Return the unit vector along ``v``."""
    v = np.asarray(v, dtype=np.float64)
    mag = np.linalg.norm(v)
    if mag < 1e-15:
        raise ValueError("Cannot normalize a near-zero vector.")
    return v / mag


def wrap_degrees(angle: float) -> float:
    """Wrap an angle into [0, 360) degrees."""
    return float((angle % 360.0 + 360.0) % 360.0)


def wrap_longitude(lon: float) -> float:
    """Wrap a longitude into [-180, 180) degrees."""
    return float((lon + 180.0) % 360.0 - 180.0)


def right_ascension_declination(r_eci: NDArray) -> tuple[float, float]:
    """Right ascension and declination of an equatorial vector [rad].

    Returns
    -------
    ra : float — right ascension [rad, 0..2π)
    dec : float — declination [rad, -π/2..π/2]
    """
    ra = np.arctan2(r_eci[1], r_eci[0]) % (2 * np.pi)
    dec = np.arcsin(np.clip(r_eci[2] / np.linalg.norm(r_eci), -1.0, 1.0))
    return float(ra), float(dec)


# ── Time Utilities ──────────────────────────────────────────────────────────

def unix_to_jd(timestamp: float) -> float:
    """Julian Date from a Unix timestamp [s since 1970-01-01 UTC]."""
    return JD_UNIX_EPOCH + timestamp / DAILY_SECONDS


def jd_to_unix(jd: float) -> float:
    """Unix timestamp [s] from a Julian Date."""
    return (jd - JD_UNIX_EPOCH) * DAILY_SECONDS


def gmst(jd: float) -> float:
    """Greenwich Mean Sidereal Time [rad] from Julian Date.

    Uses the IAU 1982 model (accurate to ~0.1 arcsec for dates near J2000).
    """
    T = (jd - 2_451_545.0) / 36_525.0
    # GMST in seconds of time at 0h UT
    theta_sec = 67310.54841 + (876600.0 * 3600.0 + 8640184.812866) * T \
                + 0.093104 * T**2 - 6.2e-6 * T**3
    theta_deg = (theta_sec / 240.0) % 360.0  # convert seconds→degrees
    return np.deg2rad(theta_deg)


# ── Coordinate Conversions ──────────────────────────────────────────────────

def _earth_rotation(jd: float) -> NDArray:
    theta = gmst(jd)
    c, s = np.cos(theta), np.sin(theta)
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def eci_to_ecef(r_eci: NDArray, jd: float) -> NDArray:
    """Rotate an ECI position vector to ECEF given Julian Date.

    Parameters
    ----------
    r_eci : (3,) array — position in ECI [m]
    jd : float — Julian Date (UTC, ignoring polar motion / UT1−UTC)

    Returns
    -------
    r_ecef : (3,) array [m]
    """
    return _earth_rotation(jd) @ np.asarray(r_eci, dtype=np.float64)


def ecef_to_eci(r_ecef: NDArray, jd: float) -> NDArray:
    """Rotate an ECEF position vector to ECI given Julian Date."""
    return _earth_rotation(jd).T @ np.asarray(r_ecef, dtype=np.float64)


def lla_to_ecef(lat: float, lon: float, alt: float = 0.0) -> NDArray:
    """Geodetic LLA → ECEF [m].

    Parameters
    ----------
    lat, lon : float — geodetic latitude / longitude [rad]
    alt : float — altitude above WGS-84 ellipsoid [m]
    """
    sin_lat, cos_lat = np.sin(lat), np.cos(lat)
    sin_lon, cos_lon = np.sin(lon), np.cos(lon)
    N = R_EARTH / np.sqrt(1.0 - E2_EARTH * sin_lat**2)
    x = (N + alt) * cos_lat * cos_lon
    y = (N + alt) * cos_lat * sin_lon
    z = (N * (1.0 - E2_EARTH) + alt) * sin_lat
    return np.array([x, y, z])

"""
aerotransit.sun — Low-Precision Solar Ephemeris
=================================================

Analytical geocentric Sun position from the low-precision formulae of
Meeus (1998) / the Astronomical Almanac, accurate to ~0.01° in ecliptic
longitude.  Ample for locating the solar disk (~0.53° across) when
screening for aircraft transits; not a substitute for a full ephemeris.

Reference
---------
Meeus, J. (1998). *Astronomical Algorithms*, 2nd ed., Willmann-Bell, Ch. 25.
"""

import numpy as np
from numpy.typing import NDArray

# ── Constants ───────────────────────────────────────────────────────────────
AU = 149_597_870_700.0          # Astronomical Unit [m]
R_SUN = 696_000_000.0           # Solar radius [m]


def sun_position_eci(jd: float) -> NDArray:
    """Geocentric Sun position, mean equator of date.

    Parameters
    ----------
    jd : float — Julian Date (TDB ≈ UTC for this precision)

    Returns
    -------
    r_sun : (3,) ndarray — Sun position vector [m]
    """
    T = (jd - 2_451_545.0) / 36_525.0

    # Mean anomaly and mean longitude [deg]
    M = np.deg2rad((357.5291092 + 35999.0502909 * T) % 360.0)
    L0 = (280.46646 + 36000.76983 * T + 0.0003032 * T**2) % 360.0

    # Equation of center [deg]
    C = (1.9146 - 0.004817 * T - 0.000014 * T**2) * np.sin(M) \
      + (0.019993 - 0.000101 * T) * np.sin(2 * M) \
      + 0.00029 * np.sin(3 * M)

    sun_lon = np.deg2rad((L0 + C) % 360.0)

    # Distance [AU]
    e_sun = 0.016708634 - 0.000042037 * T - 0.0000001267 * T**2
    nu = M + np.deg2rad(C)
    R_au = 1.000001018 * (1.0 - e_sun**2) / (1.0 + e_sun * np.cos(nu))

    eps = np.deg2rad(23.439291 - 0.0130042 * T - 1.64e-7 * T**2 + 5.04e-7 * T**3)

    r_m = R_au * AU
    return np.array([
        r_m * np.cos(sun_lon),
        r_m * np.cos(eps) * np.sin(sun_lon),
        r_m * np.sin(eps) * np.sin(sun_lon),
    ])


def sun_angular_radius(distance_m: float) -> float:
    """Apparent angular radius of the Sun at a given distance [rad]."""
    return float(np.arcsin(min(1.0, R_SUN / distance_m)))

"""
aerotransit.moon — Low-Precision Lunar Ephemeris
==================================================

Analytical geocentric Moon position (accurate to ~0.3° in longitude,
~0.2° in latitude over ±50 years from J2000), apparent size, and phase.

The series are the principal periodic terms of the truncated Brown
theory as presented in Meeus (1998).  Positions are referred to the mean
equator and equinox of date, which is the frame GMST rotates into ECEF.

Reference
---------
Meeus, J. (1998). *Astronomical Algorithms*, 2nd ed., Willmann-Bell, Ch. 47.
Montenbruck, O. & Gill, E. (2000). *Satellite Orbits*, §3.3.2.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import normalize

# ── Constants ───────────────────────────────────────────────────────────────
R_MOON = 1_737_400.0                   # Mean lunar radius [m]
SYNODIC_MONTH = 29.530588853           # [days]
JD_NEW_MOON_REF = 2451550.26           # New Moon, 2000 Jan 6 18:14 UTC

# ── Periodic terms ──────────────────────────────────────────────────────────
# Columns: multiples of (D, M, M', F), coefficient.
# Longitude/latitude coefficients in 1e-6 deg (sine series),
# distance coefficients in 1e-3 km (cosine series).
_LON_TERMS = np.array([
    (0, 0, 1, 0, 6288774),
    (2, 0, -1, 0, 1274027),
    (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618),
    (0, 1, 0, 0, -185116),
    (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793),
    (2, -1, -1, 0, 57066),
    (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758),
    (0, 1, -1, 0, -40923),
    (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383),
    (2, 0, 0, -2, 15327),
    (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980),
    (4, 0, -1, 0, 10675),
    (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548),
    (2, 1, -1, 0, -7888),
], dtype=np.float64)

_LAT_TERMS = np.array([
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
], dtype=np.float64)

_DIST_TERMS = np.array([
    (0, 0, 1, 0, -20905355),
    (2, 0, -1, 0, -3699111),
    (2, 0, 0, 0, -2955968),
    (0, 0, 2, 0, -569925),
    (0, 1, 0, 0, 48888),
    (0, 0, 0, 2, -3149),
    (2, 0, -2, 0, 246158),
    (2, -1, -1, 0, -152138),
    (2, 0, 1, 0, -170733),
    (2, -1, 0, 0, -204586),
    (0, 1, -1, 0, -129620),
    (1, 0, 0, 0, 108743),
    (0, 1, 1, 0, 104755),
    (2, 0, 0, -2, 10321),
], dtype=np.float64)


def _series(terms: NDArray, args: NDArray, fn) -> float:
    """Sum ``coeff × fn(k · args)`` over a term table."""
    return float(np.sum(terms[:, 4] * fn(terms[:, :4] @ args)))


# ════════════════════════════════════════════════════════════════════════════
#  Lunar Ephemeris
# ════════════════════════════════════════════════════════════════════════════

def moon_position_eci(jd: float) -> NDArray:
    """Geocentric Moon position, mean equator of date.

    Parameters
    ----------
    jd : float — Julian Date (TDB ≈ UTC for this precision)

    Returns
    -------
    r_moon : (3,) ndarray — Moon position vector [m]
    """
    T = (jd - 2_451_545.0) / 36_525.0  # Julian centuries from J2000

    # Fundamental arguments [deg]
    Lp = 218.3164477 + 481267.88123421 * T \
         - 0.0015786 * T**2 + T**3 / 538841.0 - T**4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T \
        - 0.0018819 * T**2 + T**3 / 545868.0 - T**4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T \
        - 0.0001536 * T**2 + T**3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T \
         + 0.0087414 * T**2 + T**3 / 69699.0 - T**4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T \
        - 0.0036539 * T**2 - T**3 / 3526000.0 + T**4 / 863310000.0

    args = np.deg2rad(np.array([D, M, Mp, F]) % 360.0)

    lam = Lp + _series(_LON_TERMS, args, np.sin) * 1e-6    # [deg]
    beta = _series(_LAT_TERMS, args, np.sin) * 1e-6        # [deg]
    dist_m = (385000.56 + _series(_DIST_TERMS, args, np.cos) * 1e-3) * 1000.0

    lam_r = np.deg2rad(lam % 360.0)
    beta_r = np.deg2rad(beta)
    eps_r = np.deg2rad(23.439291 - 0.0130042 * T)

    cos_b = np.cos(beta_r)
    x_ecl = dist_m * cos_b * np.cos(lam_r)
    y_ecl = dist_m * cos_b * np.sin(lam_r)
    z_ecl = dist_m * np.sin(beta_r)

    # Ecliptic → equatorial
    cos_e, sin_e = np.cos(eps_r), np.sin(eps_r)
    return np.array([
        x_ecl,
        cos_e * y_ecl - sin_e * z_ecl,
        sin_e * y_ecl + cos_e * z_ecl,
    ])


def moon_angular_radius(distance_m: float) -> float:
    """Apparent angular radius of the Moon at a given distance [rad]."""
    return float(np.arcsin(min(1.0, R_MOON / distance_m)))


# ════════════════════════════════════════════════════════════════════════════
#  Moon Illumination & Phase
# ════════════════════════════════════════════════════════════════════════════

def moon_phase_angle(jd: float) -> float:
    """Phase angle at the Moon between Sun and Earth [rad].

    0° = full Moon (opposition), 180° = new Moon (conjunction).
    """
    from .sun import sun_position_eci
    r_moon = moon_position_eci(jd)
    r_sun = sun_position_eci(jd)

    moon_to_sun = normalize(r_sun - r_moon)
    moon_to_earth = normalize(-r_moon)
    return float(np.arccos(np.clip(np.dot(moon_to_sun, moon_to_earth), -1.0, 1.0)))


def moon_illumination_fraction(jd: float) -> float:
    """Fraction of the Moon's disk that is illuminated [0..1]."""
    return float((1.0 + np.cos(moon_phase_angle(jd))) / 2.0)


def moon_age_days(jd: float) -> float:
    """Days since the last mean new Moon [0..29.53], ±0.5 day."""
    return float((jd - JD_NEW_MOON_REF) % SYNODIC_MONTH)


_PHASE_BOUNDS = (
    (1.85, "New Moon"),
    (7.38, "Waxing Crescent"),
    (9.23, "First Quarter"),
    (14.77, "Waxing Gibbous"),
    (16.61, "Full Moon"),
    (22.15, "Waning Gibbous"),
    (23.99, "Last Quarter"),
    (27.68, "Waning Crescent"),
)


def moon_phase_name(jd: float) -> str:
    """Human-readable lunar phase name."""
    age = moon_age_days(jd)
    for upper, name in _PHASE_BOUNDS:
        if age < upper:
            return name
    return "New Moon"

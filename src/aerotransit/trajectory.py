"""
aerotransit.trajectory — Aircraft State & Short-Horizon Extrapolation
=======================================================================

First-order dead reckoning for aircraft: constant ground speed, constant
true track along a great circle on a spherical Earth (R = 6371 km), and a
constant climb/descent rate.  No turns or accelerations are modelled, so
accuracy degrades with look-ahead; callers bound the horizon.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .utils import R_EARTH_KM, wrap_degrees, wrap_longitude


# ════════════════════════════════════════════════════════════════════════════
#  Aircraft State
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AircraftState:
    """Snapshot of one aircraft as reported by a surveillance feed.

    Parameters
    ----------
    icao24 : str — transponder address / unique identifier
    lat, lon : float — position [deg]
    altitude : float — barometric altitude [m]
    velocity : float — ground speed [m/s]
    heading : float — true track [deg], 0..360
    vertical_rate : float — climb (+) / descent (−) rate [m/s]
    last_update : float — time of last observation [Unix s]
    callsign : str or None — display label
    """
    icao24: str
    lat: float
    lon: float
    altitude: float
    velocity: float = 0.0
    heading: float = 0.0
    vertical_rate: float = 0.0
    last_update: float = 0.0
    callsign: Optional[str] = None

    @property
    def label(self) -> str:
        return self.callsign or self.icao24

    def data_age(self, now: float) -> float:
        """Seconds elapsed since ``last_update`` at time ``now``."""
        return now - self.last_update


# ════════════════════════════════════════════════════════════════════════════
#  Great-Circle Dead Reckoning
# ════════════════════════════════════════════════════════════════════════════

def destination_point(lat: float, lon: float, bearing: float,
                      distance_km: float) -> tuple[float, float]:
    """Point reached after travelling ``distance_km`` on an initial bearing.

    Parameters
    ----------
    lat, lon : float — start point [deg]
    bearing : float — initial true bearing [deg]
    distance_km : float — great-circle distance [km]

    Returns
    -------
    (lat, lon) : destination [deg], longitude wrapped to [-180, 180)
    """
    delta = distance_km / R_EARTH_KM
    theta = np.deg2rad(bearing)
    phi1 = np.deg2rad(lat)
    lam1 = np.deg2rad(lon)

    sin_phi2 = (np.sin(phi1) * np.cos(delta)
                + np.cos(phi1) * np.sin(delta) * np.cos(theta))
    phi2 = np.arcsin(np.clip(sin_phi2, -1.0, 1.0))
    lam2 = lam1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(phi1),
        np.cos(delta) - np.sin(phi1) * np.sin(phi2),
    )

    return float(np.rad2deg(phi2)), wrap_longitude(np.rad2deg(lam2))


def extrapolate(aircraft: AircraftState,
                seconds_ahead: float) -> tuple[float, float, float]:
    """Predict an aircraft's position ``seconds_ahead`` into the future.

    Returns
    -------
    (lat, lon, altitude) : [deg], [deg], [m]
    """
    distance_km = aircraft.velocity * seconds_ahead / 1000.0
    lat, lon = destination_point(aircraft.lat, aircraft.lon,
                                 aircraft.heading, distance_km)
    altitude = aircraft.altitude + aircraft.vertical_rate * seconds_ahead
    return lat, lon, float(altitude)


def synthetic_crossing_aircraft(
    observer,
    body_position,
    now: float,
    velocity: float = 100.0,
    seconds_before_crossing: float = 15.0,
    distance_km: float = 20.0,
    icao24: Optional[str] = None,
) -> AircraftState:
    """Build an aircraft that will cross ``body_position`` shortly.

    The aircraft is placed ``distance_km`` from the observer, offset in
    azimuth by the angle it covers in ``seconds_before_crossing``, flying
    perpendicular to the line of sight at the altitude that puts it at the
    body's elevation angle.  Useful for demos and end-to-end tests.

    Parameters
    ----------
    observer : Observer
    body_position : CelestialPosition — target body as seen now
    now : float — Unix timestamp used as the observation time
    velocity : float — ground speed [m/s]
    seconds_before_crossing : float — lead time before the crossing [s]
    distance_km : float — ground distance from the observer [km]
    icao24 : str or None — identifier (default derived from the body)
    """
    lead_angle = np.rad2deg(np.arctan(
        velocity * seconds_before_crossing / (distance_km * 1000.0)
    ))
    azimuth = wrap_degrees(body_position.azimuth - lead_angle)
    heading = wrap_degrees(body_position.azimuth + 90.0)

    lat, lon = destination_point(observer.lat, observer.lon, azimuth, distance_km)
    altitude = observer.elevation \
        + np.tan(np.deg2rad(body_position.altitude)) * distance_km * 1000.0

    callsign = f"{body_position.body.upper()}XING"
    return AircraftState(
        icao24=icao24 or callsign.lower(),
        callsign=callsign,
        lat=lat,
        lon=lon,
        altitude=float(altitude),
        velocity=velocity,
        heading=heading,
        vertical_rate=0.0,
        last_update=now,
    )

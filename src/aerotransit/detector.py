"""
aerotransit.detector — Transit Search Engine
==============================================

Predicts when an aircraft will pass angularly close to the Moon or Sun as
seen by a ground observer.

Pipeline (per aircraft, per pass)
---------------------------------
1. **Precondition**: the aircraft's current elevation angle must not be
   negative; otherwise it is skipped before any provider call.
2. **Window scan**: sample look-ahead offsets ``s = 0, Δt, 2Δt, … ≤ W``.
   At each sample extrapolate the aircraft, ask the provider for the body
   at ``now + s``, and skip the sample if either is at or below the
   horizon (or the provider has no value).
3. **Closest approach**: keep the running minimum of angular separation
   with a strict ``<`` so the earliest sample wins ties.
4. **Acceptance**: no valid sample, or a minimum above
   ``max_angular_separation``, means no transit.  Otherwise score it.

``detect`` runs the search for every aircraft, drops predictions below
``min_confidence_score`` and orders the rest soonest first.  A pass is a
pure function of its inputs: with a fixed ``now`` it is idempotent, and it
holds no state between calls.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from .celestial import CelestialPosition, CelestialPositionProvider
from .confidence import compute_confidence
from .config import TransitConfig
from .horizon import (
    Observer, HorizontalPosition, aircraft_horizontal,
    horizontal_coordinates, separation_between,
)
from .trajectory import AircraftState, extrapolate

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Data Structures
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ClosestApproach:
    """Minimum-separation sample found inside the look-ahead window."""
    seconds_ahead: float
    separation: float               # [deg]
    body: CelestialPosition
    aircraft: HorizontalPosition


@dataclass(frozen=True)
class TransitPrediction:
    """A scored, predicted transit of one aircraft across one body."""
    aircraft: AircraftState
    transit_time: float             # Unix timestamp of closest approach
    angular_separation: float       # [deg]
    confidence: float               # [0, 1]
    body: str
    body_altitude: float            # [deg] at closest approach
    body_azimuth: float             # [deg]
    body_angular_diameter: float    # [deg]
    aircraft_altitude: float        # [deg] at closest approach
    aircraft_azimuth: float         # [deg]
    time_to_transit: float          # [s], negative once past

    @property
    def crosses_disk(self) -> bool:
        """True when the closest approach falls inside the body's disk."""
        return self.angular_separation <= self.body_angular_diameter / 2.0

    def seconds_remaining(self, now: float) -> float:
        """Live countdown to the transit from ``now``."""
        return self.transit_time - now

    def to_dict(self) -> dict:
        return {
            "icao24": self.aircraft.icao24,
            "callsign": self.aircraft.callsign,
            "body": self.body,
            "transit_time": self.transit_time,
            "time_to_transit": round(self.time_to_transit, 1),
            "separation_deg": round(self.angular_separation, 4),
            "confidence": round(self.confidence, 3),
            "crosses_disk": self.crosses_disk,
            "body_alt_deg": round(self.body_altitude, 3),
            "body_az_deg": round(self.body_azimuth, 3),
            "aircraft_alt_deg": round(self.aircraft_altitude, 3),
            "aircraft_az_deg": round(self.aircraft_azimuth, 3),
        }


# ════════════════════════════════════════════════════════════════════════════
#  Window Search
# ════════════════════════════════════════════════════════════════════════════

def sample_offsets(window: float, step: float) -> list[float]:
    """Look-ahead offsets ``0, step, …`` up to and including ``window`` [s].

    A non-positive window or step yields no samples.
    """
    if window <= 0 or step <= 0:
        return []
    n = int(math.floor(window / step + 1e-9))
    return [k * step for k in range(n + 1)]


def find_closest_approach(
    observer: Observer,
    aircraft: AircraftState,
    provider: CelestialPositionProvider,
    now: float,
    config: TransitConfig,
) -> Optional[ClosestApproach]:
    """Scan the look-ahead window for the minimum angular separation.

    Samples where the provider has no value, or where the body or the
    extrapolated aircraft is at or below the horizon, are skipped; the scan
    continues because either may rise again later in the window.

    Returns
    -------
    ClosestApproach or None if no sample was valid
    """
    best = None

    for s in sample_offsets(config.prediction_window_seconds,
                            config.time_step_seconds):
        body = provider.position_of(observer, now + s)
        if body is None or body.altitude <= 0.0:
            continue

        lat, lon, alt = extrapolate(aircraft, s)
        plane = horizontal_coordinates(observer, lat, lon, alt)
        if plane.altitude <= 0.0:
            continue

        sep = separation_between(plane, body)
        if best is None or sep < best.separation:
            best = ClosestApproach(seconds_ahead=s, separation=sep,
                                   body=body, aircraft=plane)

    return best


def predict_transit(
    observer: Observer,
    aircraft: AircraftState,
    provider: CelestialPositionProvider,
    now: float,
    config: Optional[TransitConfig] = None,
) -> Optional[TransitPrediction]:
    """Predict a transit of ``aircraft`` across the provider's body.

    The confidence filter is *not* applied here; see ``detect``.

    Returns
    -------
    TransitPrediction or None when the aircraft is below the horizon, no
    valid sample exists, or the closest approach exceeds the maximum
    separation.
    """
    cfg = (config or TransitConfig()).for_body(provider.body)
    return _predict_with(observer, aircraft, provider, now, cfg)


def _predict_with(observer, aircraft, provider, now, cfg):
    """``predict_transit`` with ``cfg`` already resolved for the body."""
    current = aircraft_horizontal(observer, aircraft)
    if current.altitude < 0.0:
        logger.debug("%s below horizon (%.2f°), skipped",
                     aircraft.label, current.altitude)
        return None

    approach = find_closest_approach(observer, aircraft, provider, now, cfg)
    if approach is None or approach.separation > cfg.max_angular_separation:
        return None

    confidence = compute_confidence(
        separation=approach.separation,
        angular_diameter=approach.body.angular_diameter,
        velocity=aircraft.velocity,
        data_age=aircraft.data_age(now),
        current_altitude=current.altitude,
        max_separation=cfg.max_angular_separation,
        disk_fraction=cfg.disk_bonus_fraction,
    )

    return TransitPrediction(
        aircraft=aircraft,
        transit_time=now + approach.seconds_ahead,
        angular_separation=approach.separation,
        confidence=confidence,
        body=approach.body.body or provider.body,
        body_altitude=approach.body.altitude,
        body_azimuth=approach.body.azimuth,
        body_angular_diameter=approach.body.angular_diameter,
        aircraft_altitude=approach.aircraft.altitude,
        aircraft_azimuth=approach.aircraft.azimuth,
        time_to_transit=approach.seconds_ahead,
    )


# ════════════════════════════════════════════════════════════════════════════
#  Detection Pass
# ════════════════════════════════════════════════════════════════════════════

def detect(
    observer: Observer,
    aircraft: Iterable[AircraftState],
    provider: CelestialPositionProvider,
    now: Optional[float] = None,
    config: Optional[TransitConfig] = None,
) -> list[TransitPrediction]:
    """Run one detection pass over a snapshot of aircraft.

    Parameters
    ----------
    observer : Observer
    aircraft : iterable of AircraftState
    provider : CelestialPositionProvider — bound to the target body
    now : float or None — pass timestamp [Unix s] (default: wall clock)
    config : TransitConfig or None

    Returns
    -------
    predictions : list[TransitPrediction], soonest first, each with
        confidence ≥ the body's ``min_confidence_score``
    """
    if now is None:
        now = time.time()
    cfg = (config or TransitConfig()).for_body(provider.body)

    predictions = []
    for ac in aircraft:
        pred = _predict_with(observer, ac, provider, now, cfg)
        if pred is None:
            continue
        if pred.confidence < cfg.min_confidence_score:
            logger.debug("%s rejected: confidence %.3f < %.3f",
                         ac.label, pred.confidence, cfg.min_confidence_score)
            continue
        predictions.append(pred)

    predictions.sort(key=lambda p: p.time_to_transit)
    logger.debug("%s pass: %d prediction(s)", provider.body, len(predictions))
    return predictions


def detect_all(
    observer: Observer,
    aircraft: Iterable[AircraftState],
    providers: Iterable[CelestialPositionProvider],
    now: Optional[float] = None,
    config: Optional[TransitConfig] = None,
) -> list[TransitPrediction]:
    """``detect`` against several bodies, merged soonest first."""
    if now is None:
        now = time.time()
    snapshot = list(aircraft)
    merged = []
    for provider in providers:
        merged.extend(detect(observer, snapshot, provider, now, config))
    merged.sort(key=lambda p: p.time_to_transit)
    return merged


class TransitDetector:
    """Holds a ``TransitConfig`` and runs detection passes with it.

    >>> det = TransitDetector(max_angular_separation=1.0)
    >>> det.get_config().prediction_window_seconds
    600.0
    """

    def __init__(self, config: Optional[TransitConfig] = None, **overrides):
        base = config.copy() if config is not None else TransitConfig()
        self._config = base.merged(**overrides)

    def get_config(self) -> TransitConfig:
        """A copy of the current configuration."""
        return self._config.copy()

    def set_config(self, **overrides) -> None:
        """Replace selected configuration fields."""
        self._config = self._config.merged(**overrides)

    def detect(self, observer: Observer, aircraft: Iterable[AircraftState],
               provider: CelestialPositionProvider,
               now: Optional[float] = None) -> list[TransitPrediction]:
        return detect(observer, aircraft, provider, now, self._config)

    def detect_all(self, observer: Observer, aircraft: Iterable[AircraftState],
                   providers: Iterable[CelestialPositionProvider],
                   now: Optional[float] = None) -> list[TransitPrediction]:
        return detect_all(observer, aircraft, providers, now, self._config)


# ════════════════════════════════════════════════════════════════════════════
#  Formatting
# ════════════════════════════════════════════════════════════════════════════

def format_time_to_transit(seconds: float) -> str:
    """Countdown string: ``30s``, ``1m 30s``, ``1h 0m``.

    The value is rounded half-up to whole seconds before formatting, so
    59.6 s reads ``1m 0s``.  Past transits get a leading ``-``.
    """
    sign = "-" if seconds < 0 else ""
    total = int(math.floor(abs(seconds) + 0.5))
    if total < 60:
        return f"{sign}{total}s"
    if total < 3600:
        return f"{sign}{total // 60}m {total % 60}s"
    return f"{sign}{total // 3600}h {(total % 3600) // 60}m"


def format_predictions(predictions: list[TransitPrediction],
                       observer: Observer,
                       now: Optional[float] = None) -> str:
    """Format predictions as a human-readable report.

    Parameters
    ----------
    predictions : list[TransitPrediction]
    observer : Observer
    now : float or None — countdowns run from this instant [Unix s];
        None shows each prediction's ``time_to_transit`` as computed

    Returns
    -------
    report : str
    """
    lines = []
    lines.append("=" * 78)
    lines.append("  TRANSIT PREDICTIONS")
    lines.append(f"  Observer: {observer.lat:.4f}°N, {observer.lon:.4f}°E, "
                 f"{observer.elevation:.0f}m")
    lines.append("=" * 78)

    if not predictions:
        lines.append("\n  No transits predicted.")
    else:
        lines.append(f"\n  {'#':>3s}  {'Flight':<10s}  {'Body':<4s}  {'In':>8s}  "
                     f"{'Sep':>6s}  {'Conf':>5s}  {'Alt':>5s}  {'Az':>6s}  Disk")
        lines.append("  " + "-" * 74)
        for k, p in enumerate(predictions):
            remaining = p.time_to_transit if now is None else p.seconds_remaining(now)
            lines.append(
                f"  {k+1:3d}  {p.aircraft.label[:10]:<10s}  {p.body:<4s}  "
                f"{format_time_to_transit(remaining):>8s}  "
                f"{p.angular_separation:6.3f}  {p.confidence:5.2f}  "
                f"{p.aircraft_altitude:5.1f}  {p.aircraft_azimuth:6.1f}  "
                f"{'yes' if p.crosses_disk else 'no'}"
            )

    lines.append("\n" + "=" * 78)
    return "\n".join(lines)

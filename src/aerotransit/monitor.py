"""
aerotransit.monitor — Polling Loop Around the Detection Pass
==============================================================

The detection engine has no timers.  ``TransitMonitor`` is the scheduler
that owns the cadence: each tick it pulls a fresh aircraft snapshot from
an injected feed, runs a stateless ``detect_all`` pass for every provider,
and publishes the ordered predictions.

Feed and provider failures propagate out of ``poll``.  ``run`` is the
long-lived loop: it logs a failed pass, keeps the error on
``last_error``, hands it to ``on_error`` if given, and keeps polling.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from .celestial import CelestialPositionProvider
from .config import TransitConfig
from .detector import TransitPrediction, detect_all
from .horizon import Observer
from .trajectory import AircraftState

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 60.0    # [s], aircraft feed cadence

AircraftFeed = Callable[[Observer], Iterable[AircraftState]]


class TransitMonitor:
    """Re-run transit detection on a fixed cadence.

    Parameters
    ----------
    observer : Observer
    feed : callable(observer) → iterable of AircraftState
    providers : iterable of CelestialPositionProvider
    config : TransitConfig or None
    interval : float — seconds between passes
    on_update : callable(list[TransitPrediction]) or None
    on_error : callable(Exception) or None
    clock : callable() → float — Unix time source
    sleep : callable(float) — blocking wait between passes
    """

    def __init__(
        self,
        observer: Observer,
        feed: AircraftFeed,
        providers: Iterable[CelestialPositionProvider],
        config: Optional[TransitConfig] = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        on_update: Optional[Callable[[list], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.observer = observer
        self.feed = feed
        self.providers = list(providers)
        self.config = config or TransitConfig()
        self.interval = interval
        self.on_update = on_update
        self.on_error = on_error
        self.clock = clock
        self.sleep = sleep

        self.predictions: list[TransitPrediction] = []
        self.last_update: Optional[float] = None
        self.last_error: Optional[Exception] = None
        self.passes = 0

    def set_observer(self, observer: Observer) -> None:
        """New geolocation fix; takes effect on the next pass."""
        self.observer = observer

    def poll(self) -> list[TransitPrediction]:
        """Run a single pass now and publish its result."""
        now = self.clock()
        aircraft = list(self.feed(self.observer))
        predictions = detect_all(self.observer, aircraft, self.providers,
                                 now, self.config)

        self.predictions = predictions
        self.last_update = now
        self.last_error = None
        self.passes += 1
        logger.info("pass %d: %d aircraft, %d transit(s)",
                    self.passes, len(aircraft), len(predictions))

        if self.on_update is not None:
            self.on_update(predictions)
        return predictions

    def run(self, iterations: Optional[int] = None) -> None:
        """Poll every ``interval`` seconds, ``iterations`` times or forever."""
        count = 0
        while iterations is None or count < iterations:
            try:
                self.poll()
            except Exception as exc:
                self.last_error = exc
                logger.exception("transit pass failed")
                if self.on_error is not None:
                    self.on_error(exc)
            count += 1
            if iterations is None or count < iterations:
                self.sleep(self.interval)

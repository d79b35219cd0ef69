"""
example_transit_pass.py — Demonstration of the aerotransit Library
===================================================================

Places a synthetic aircraft on a crossing course with whichever of the
Moon or Sun is up, then runs a detection pass and a short monitor loop.
"""

import logging
import time

from aerotransit import (
    Observer, AircraftState,
    EphemerisProvider, MOON, SUN,
    TransitConfig, TransitMonitor,
    aircraft_horizontal, detect_all, format_predictions,
    format_time_to_transit, rise_set_times, synthetic_crossing_aircraft,
)


def main():
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    print("=" * 70)
    print("  aerotransit — Moon/Sun Transit Prediction Demo")
    print("=" * 70)

    observer = Observer(lat=40.7128, lon=-74.0060, elevation=10.0)
    now = time.time()
    providers = [EphemerisProvider(MOON), EphemerisProvider(SUN)]

    # ── 1. Where are the bodies? ────────────────────────────────────────
    print("\n1. BODY POSITIONS")
    print("-" * 40)
    visible = None
    for provider in providers:
        pos = provider.position_of(observer, now)
        print(f"  {pos.body:<4s}  alt {pos.altitude:6.2f}°  az {pos.azimuth:6.2f}°  "
              f"diam {pos.angular_diameter:.3f}°  dist {pos.distance:,.0f} km")
        print(f"        RA {pos.right_ascension:7.3f}°  Dec {pos.declination:+7.3f}°")
        if pos.phase is not None:
            print(f"        phase {pos.phase} ({pos.illumination*100:.0f}% lit)")
        events = rise_set_times(provider, observer, now)
        if events.always_up or events.always_down:
            print(f"        {'up' if events.always_up else 'down'} for the next 24 h")
        else:
            for label, t in (("rises", events.rise_time), ("sets", events.set_time)):
                if t is not None:
                    print(f"        {label} in {format_time_to_transit(t - now)}")
        if visible is None and pos.altitude > 1.0:
            visible = pos

    if visible is None:
        print("\n  Neither body is above the horizon; nothing to demo.")
        return

    # ── 2. Aircraft snapshot ────────────────────────────────────────────
    print("\n2. AIRCRAFT")
    print("-" * 40)
    crossing = synthetic_crossing_aircraft(observer, visible, now)
    cruise = AircraftState(
        icao24="a1b2c3", callsign="DAL42",
        lat=40.80, lon=-73.90, altitude=10_500.0,
        velocity=230.0, heading=250.0, vertical_rate=0.0,
        last_update=now - 12.0,
    )
    aircraft = [crossing, cruise]
    for ac in aircraft:
        hp = aircraft_horizontal(observer, ac)
        print(f"  {ac.label:<10s}  alt {hp.altitude:6.2f}°  az {hp.azimuth:6.2f}°  "
              f"range {hp.distance_km:6.1f} km")

    # ── 3. Single detection pass ────────────────────────────────────────
    print("\n3. DETECTION PASS")
    config = TransitConfig(body_overrides={SUN: {"max_angular_separation": 0.4}})
    predictions = detect_all(observer, aircraft, providers, now, config)
    print(format_predictions(predictions, observer, now))

    # ── 4. Monitor loop ─────────────────────────────────────────────────
    print("\n4. MONITOR (3 passes)")
    monitor = TransitMonitor(
        observer, lambda obs: aircraft, providers,
        config=config, interval=1.0,
    )
    monitor.run(iterations=3)
    print(f"  passes run: {monitor.passes}, last result: "
          f"{len(monitor.predictions)} transit(s)")


if __name__ == "__main__":
    main()

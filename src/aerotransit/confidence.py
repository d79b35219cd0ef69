"""
aerotransit.confidence — Transit Confidence Scoring
=====================================================

Turns the raw geometry of a predicted closest approach, plus data
freshness and visibility, into a bounded score used to filter and rank
predictions.

Score Model
-----------
The confidence for a closest approach is a product of factors::

    score = clip(separation × disk × speed × freshness × visibility, 0, 1)

where::

    separation  = 1 − θ_min / θ_max
    disk        = 1.2  if θ_min ≤ diameter × disk_fraction   else 1.0
    speed       = 1.0  if 0 < v < 1000 m/s                  else 0.8
    freshness   = 1.0 (age < 10 s), 0.9 (age < 30 s), 0.7 otherwise
    visibility  = 1.1 (alt > 10°), 1.0 (alt > 5°), 0.8 otherwise

``alt`` is the aircraft's *current* elevation angle, not the predicted one.
The multiplication is order-independent.
"""

DISK_BONUS = 1.2
MAX_PLAUSIBLE_SPEED = 1000.0    # [m/s]


def separation_factor(separation: float, max_separation: float) -> float:
    """Linear closeness factor: 1 at zero separation, 0 at the maximum."""
    if max_separation <= 0:
        return 0.0
    return 1.0 - separation / max_separation


def disk_bonus(separation: float, angular_diameter: float,
               disk_fraction: float = 0.5) -> float:
    """1.2 when the approach falls within the body's visible disk."""
    if separation <= angular_diameter * disk_fraction:
        return DISK_BONUS
    return 1.0


def speed_factor(velocity: float) -> float:
    """Penalise missing or implausible ground-speed readings."""
    if 0.0 < velocity < MAX_PLAUSIBLE_SPEED:
        return 1.0
    return 0.8


def freshness_factor(data_age: float) -> float:
    """Penalise stale surveillance data.

    Parameters
    ----------
    data_age : float — seconds since the aircraft was last observed
    """
    if data_age < 10.0:
        return 1.0
    elif data_age < 30.0:
        return 0.9
    return 0.7


def visibility_factor(current_altitude: float) -> float:
    """Favour aircraft well above the horizon [deg]."""
    if current_altitude > 10.0:
        return 1.1
    elif current_altitude > 5.0:
        return 1.0
    return 0.8


def compute_confidence(
    separation: float,
    angular_diameter: float,
    velocity: float,
    data_age: float,
    current_altitude: float,
    max_separation: float = 0.5,
    disk_fraction: float = 0.5,
) -> float:
    """Confidence score for a predicted transit.

    Parameters
    ----------
    separation : float — minimum angular separation found [deg]
    angular_diameter : float — body diameter at closest approach [deg]
    velocity : float — aircraft ground speed [m/s]
    data_age : float — now − last observation [s]
    current_altitude : float — aircraft elevation angle now [deg]
    max_separation : float — configured maximum separation [deg]
    disk_fraction : float — fraction of the diameter treated as the disk

    Returns
    -------
    score : float in [0, 1]
    """
    score = separation_factor(separation, max_separation)
    score *= disk_bonus(separation, angular_diameter, disk_fraction)
    score *= speed_factor(velocity)
    score *= freshness_factor(data_age)
    score *= visibility_factor(current_altitude)
    return min(max(score, 0.0), 1.0)

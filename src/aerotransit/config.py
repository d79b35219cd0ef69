"""
aerotransit.config — Transit Search Configuration
===================================================

``TransitConfig`` is a plain dataclass of tunables with defaults.  Values
are not validated: an out-of-range value degrades the search gracefully
(e.g. a zero or negative window samples nothing and predicts nothing).

Per-body overrides let the Sun use stricter thresholds than the Moon
without a second code path::

    cfg = TransitConfig(body_overrides={"Sun": {"max_angular_separation": 0.3}})
    cfg.for_body("Sun").max_angular_separation   # 0.3
"""

import json
from dataclasses import dataclass, field as dc_field, fields, replace
from pathlib import Path
from typing import Union

DEFAULT_MAX_ANGULAR_SEPARATION = 0.5    # [deg]
DEFAULT_PREDICTION_WINDOW = 600.0       # [s]
DEFAULT_MIN_CONFIDENCE = 0.3
DEFAULT_TIME_STEP = 5.0                 # [s]
DEFAULT_DISK_BONUS_FRACTION = 0.5       # of angular diameter → disk radius


@dataclass
class TransitConfig:
    """Tunables for the transit search and confidence filter.

    max_angular_separation : float — largest closest-approach angle that
        still counts as a transit [deg]
    prediction_window_seconds : float — look-ahead horizon [s]
    min_confidence_score : float — predictions below this are dropped
    time_step_seconds : float — sampling step inside the window [s]
    disk_bonus_fraction : float — a closest approach within
        ``angular_diameter × disk_bonus_fraction`` earns the disk bonus
    body_overrides : dict — {body name: {field: value}} applied by ``for_body``
    """
    max_angular_separation: float = DEFAULT_MAX_ANGULAR_SEPARATION
    prediction_window_seconds: float = DEFAULT_PREDICTION_WINDOW
    min_confidence_score: float = DEFAULT_MIN_CONFIDENCE
    time_step_seconds: float = DEFAULT_TIME_STEP
    disk_bonus_fraction: float = DEFAULT_DISK_BONUS_FRACTION
    body_overrides: dict = dc_field(default_factory=dict)

    def copy(self) -> "TransitConfig":
        return replace(self, body_overrides={
            k: dict(v) for k, v in self.body_overrides.items()
        })

    def merged(self, **overrides) -> "TransitConfig":
        """Return a copy with the given fields replaced."""
        _check_keys(overrides)
        cfg = self.copy()
        for key, value in overrides.items():
            setattr(cfg, key, value)
        return cfg

    def for_body(self, body: str) -> "TransitConfig":
        """Effective configuration for one body."""
        overrides = self.body_overrides.get(body)
        if not overrides:
            return self
        return self.merged(**overrides)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "TransitConfig":
        _check_keys(data)
        return cls(**data)


def _check_keys(data: dict) -> None:
    known = {f.name for f in fields(TransitConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")


def load_config(path: Union[str, Path]) -> TransitConfig:
    """Read a ``TransitConfig`` from a JSON file; missing keys keep defaults."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return TransitConfig.from_dict(data)


def save_config(config: TransitConfig, path: Union[str, Path]) -> None:
    """Write a ``TransitConfig`` to a JSON file."""
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(config.to_dict(), fh, indent=2)

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

# Keep these structures stable: tests and the demo tuning keys depend on them.
NUMERIC_CONTROLS: list[tuple[str, float, float]] = [
    ("max_rise_speed", 0.0, 60.0),
    ("max_jump_height", 0.0, 60.0),
    ("fall_gravity_scale", 0.0, 100.0),
    ("air_acceleration", 0.0, 500.0),
    ("air_control", 0.0, 1.0),
    ("air_drag", 0.0, 100.0),
    ("max_air_speed", 0.0, 60.0),
    ("jump_cutoff", 0.0, 1.0),
]

TOGGLE_CONTROLS: list[str] = [
    "enable_variable_height",
]

# Fields feeding the ascent gravity derivation; editing any of them marks the solver dirty.
FORMULA_FIELDS: frozenset[str] = frozenset({"max_rise_speed", "max_jump_height"})

FIELD_LABELS: dict[str, str] = {
    "max_rise_speed": "max rise speed",
    "max_jump_height": "max jump height",
    "fall_gravity_scale": "fall gravity scale",
    "air_acceleration": "air acceleration",
    "air_control": "air control (0..1)",
    "air_drag": "air drag",
    "max_air_speed": "max air speed",
    "jump_cutoff": "jump cutoff (0..1)",
    "enable_variable_height": "variable jump height",
}

_RANGES: dict[str, tuple[float, float]] = {name: (lo, hi) for name, lo, hi in NUMERIC_CONTROLS}


def is_tuning_field(name: str) -> bool:
    return name in _RANGES or name in TOGGLE_CONTROLS


def clamp_tuning_value(name: str, value: object) -> float | bool:
    """
    Normalize a config-panel value for `name`.

    Toggles coerce to bool. Numeric fields clamp into their control range; non-finite input
    collapses to the range minimum so a bad edit can never reach the solver as NaN/inf.
    """

    if name in TOGGLE_CONTROLS:
        return bool(value)
    if name not in _RANGES:
        raise KeyError(f"Unknown tuning field: {name}")
    lo, hi = _RANGES[name]
    try:
        v = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.debug("tuning %s: non-numeric value %r, using %s", name, value, lo)
        return lo
    if not math.isfinite(v):
        logger.debug("tuning %s: non-finite value %r, using %s", name, value, lo)
        return lo
    out = max(lo, min(hi, v))
    if out != v:
        logger.debug("tuning %s: clamped %s -> %s", name, v, out)
    return out

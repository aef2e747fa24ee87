from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Below these, the derivation is considered degenerate and the previous scale is kept.
MIN_RISE_SPEED = 0.1
MIN_JUMP_HEIGHT = 0.1
MIN_GRAVITY = 0.001
DEFAULT_GRAVITY_SCALE = 1.0


def derive_rise_gravity_scale(
    *,
    max_rise_speed: float,
    max_jump_height: float,
    gravity: float,
    previous: float = DEFAULT_GRAVITY_SCALE,
) -> float:
    """
    Gravity scale that decelerates `max_rise_speed` to zero exactly at `max_jump_height`.

    From v^2 = 2 g h: g_req = v^2 / (2 h), then scale = g_req / |gravity|.
    Degenerate speed/height keeps `previous`; near-zero gravity falls back to 1.0.
    """

    v = float(max_rise_speed)
    h = float(max_jump_height)
    if not (h > MIN_JUMP_HEIGHT and v > MIN_RISE_SPEED):
        return float(previous)
    required = (v * v) / (2.0 * h)
    base = abs(float(gravity))
    if not base > MIN_GRAVITY:
        return DEFAULT_GRAVITY_SCALE
    return required / base


class RiseGravitySolver:
    """Holds the last valid ascent gravity scale and recomputes it on demand."""

    def __init__(self, *, scale: float = DEFAULT_GRAVITY_SCALE) -> None:
        self._scale = float(scale)
        self._dirty = True
        self._last_gravity: float | None = None
        self._last_inputs: tuple[float, float] | None = None

    @property
    def scale(self) -> float:
        return float(self._scale)

    @property
    def dirty(self) -> bool:
        return bool(self._dirty)

    def mark_dirty(self) -> None:
        self._dirty = True

    def recompute(self, max_rise_speed: float, max_jump_height: float, gravity: float) -> float:
        degenerate = not (float(max_jump_height) > MIN_JUMP_HEIGHT and float(max_rise_speed) > MIN_RISE_SPEED)
        if degenerate:
            logger.debug(
                "rise gravity: degenerate rise_speed=%s jump_height=%s, keeping scale=%s",
                max_rise_speed,
                max_jump_height,
                self._scale,
            )
        elif not abs(float(gravity)) > MIN_GRAVITY:
            logger.debug(
                "rise gravity: gravity magnitude %s too small, using scale=%s",
                gravity,
                DEFAULT_GRAVITY_SCALE,
            )
        self._scale = derive_rise_gravity_scale(
            max_rise_speed=max_rise_speed,
            max_jump_height=max_jump_height,
            gravity=gravity,
            previous=self._scale,
        )
        self._dirty = False
        self._last_gravity = float(gravity)
        self._last_inputs = (float(max_rise_speed), float(max_jump_height))
        return float(self._scale)

    def ensure(self, *, max_rise_speed: float, max_jump_height: float, gravity: float) -> float:
        """Recompute if marked dirty or if speed, height or gravity differ from the last run."""

        if (
            self._dirty
            or self._last_gravity != float(gravity)
            or self._last_inputs != (float(max_rise_speed), float(max_jump_height))
        ):
            return self.recompute(max_rise_speed, max_jump_height, gravity)
        return float(self._scale)

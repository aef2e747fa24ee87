from __future__ import annotations

import math

from panda3d.core import LVector2f

from jumparc.physics.motion.config import RiseGravitySolver
from jumparc.physics.motion.intent import JumpIntent
from jumparc.physics.motion.state import AirState, HostBody
from jumparc.physics.tuning import JumpTuning

# Jump trigger treats |vel_y| below this as standing on something.
GROUND_VEL_EPSILON = 0.05
# Horizontal air steering only runs with |vel_y| above this.
AIRBORNE_VEL_EPSILON = 0.01


def move_toward(current: float, target: float, max_delta: float) -> float:
    """Linear approach that never overshoots `target`."""

    d = float(target) - float(current)
    step = max(0.0, float(max_delta))
    if abs(d) <= step:
        return float(target)
    return float(current) + math.copysign(step, d)


def _finite(value: float) -> float:
    v = float(value)
    return v if math.isfinite(v) else 0.0


class JumpMotionSolver:
    """Single authority for jump launch, cutoff, gravity regime and air steering."""

    def __init__(self, *, tuning: JumpTuning, rise: RiseGravitySolver | None = None) -> None:
        self.tuning = tuning
        self.rise = rise if rise is not None else RiseGravitySolver()

    @property
    def ascent_gravity_scale(self) -> float:
        return self.rise.scale

    def sync(self, *, gravity: float) -> float:
        """Bring the ascent scale up to date before it is used for a step."""

        return self.rise.ensure(
            max_rise_speed=float(self.tuning.max_rise_speed),
            max_jump_height=float(self.tuning.max_jump_height),
            gravity=float(gravity),
        )

    @staticmethod
    def air_state(vel_y: float) -> AirState:
        # Velocity heuristic only: also reports GROUNDED at the apex of a jump.
        if abs(_finite(vel_y)) < GROUND_VEL_EPSILON:
            return AirState.GROUNDED
        return AirState.AIRBORNE

    def apply_frame_input(self, *, body: HostBody, intent: JumpIntent) -> bool:
        """
        Consume this frame's jump edges. Returns True when a jump was launched.

        Press is handled before release so a tap within one frame launches and is cut at once.
        """

        vel = LVector2f(_finite(body.vel.x), _finite(body.vel.y))
        jumped = False
        if intent.jump_pressed and self.air_state(vel.y) is AirState.GROUNDED:
            vel.y = float(self.tuning.max_rise_speed)
            jumped = True

        if bool(self.tuning.enable_variable_height) and intent.jump_released and vel.y > 0.0:
            cutoff = max(0.0, min(1.0, float(self.tuning.jump_cutoff)))
            vel.y *= 1.0 - cutoff

        body.vel = vel
        return jumped

    def apply_vertical(self, *, body: HostBody, vel: LVector2f) -> None:
        if vel.y > 0.0:
            body.gravity_scale = self.ascent_gravity_scale
            # Derived gravity shapes deceleration only; injected speed above the cap is cut here.
            rise_cap = float(self.tuning.max_rise_speed)
            if vel.y > rise_cap:
                vel.y = rise_cap
        else:
            # Terminal fall speed belongs to whoever clamps descent downstream.
            body.gravity_scale = float(self.tuning.fall_gravity_scale)

    def apply_horizontal(self, *, vel: LVector2f, move_x: float, dt: float) -> None:
        if abs(vel.y) <= AIRBORNE_VEL_EPSILON:
            return
        dt = max(0.0, float(dt))
        vel_x = float(vel.x)
        if move_x == 0:
            vel.x = move_toward(vel_x, 0.0, max(0.0, float(self.tuning.air_drag)) * dt)
            return

        max_air = max(0.0, float(self.tuning.max_air_speed))
        same_dir = (float(move_x) * vel_x) > 0.0
        over_speed = abs(vel_x) >= max_air
        # At the cap we only refuse further push in the current direction; braking stays available.
        if over_speed and same_dir:
            return
        target = float(move_x) * max_air
        accel = max(0.0, float(self.tuning.air_acceleration)) * max(0.0, min(1.0, float(self.tuning.air_control)))
        vel.x = move_toward(vel_x, target, accel * dt)

    def fixed_step(self, *, body: HostBody, dt: float, move_x: float) -> LVector2f:
        self.sync(gravity=float(body.gravity))
        vel = LVector2f(_finite(body.vel.x), _finite(body.vel.y))
        self.apply_vertical(body=body, vel=vel)
        self.apply_horizontal(vel=vel, move_x=move_x, dt=dt)
        body.vel = vel
        return LVector2f(vel)

from __future__ import annotations

from panda3d.core import LVector2f

from jumparc.physics.motion.state import DEFAULT_GRAVITY


class ReferenceBody:
    """
    Minimal stand-in for a host 2D rigid body.

    Acceleration is constant within a step, so the position update is exact for it:
    the arc a step traces lies on the true parabola and apex checks do not depend on dt.
    An optional flat floor zeroes downward velocity on contact, which is what the
    jump trigger's velocity heuristic relies on.
    """

    def __init__(
        self,
        *,
        pos: LVector2f | None = None,
        vel: LVector2f | None = None,
        gravity: float = DEFAULT_GRAVITY,
        floor_y: float | None = 0.0,
    ) -> None:
        self.pos = LVector2f(pos) if pos is not None else LVector2f(0.0, 0.0)
        self.vel = LVector2f(vel) if vel is not None else LVector2f(0.0, 0.0)
        self.gravity_scale = 1.0
        self.gravity = float(gravity)
        self.floor_y = None if floor_y is None else float(floor_y)

    def on_floor(self) -> bool:
        return self.floor_y is not None and self.pos.y <= self.floor_y + 1e-9

    def integrate(self, dt: float) -> None:
        dt = max(0.0, float(dt))
        accel_y = -abs(float(self.gravity)) * float(self.gravity_scale)
        v0 = LVector2f(self.vel)
        self.vel.y = v0.y + accel_y * dt
        self.pos.x += v0.x * dt
        self.pos.y += 0.5 * (v0.y + self.vel.y) * dt

        if self.floor_y is not None and self.pos.y <= self.floor_y:
            self.pos.y = self.floor_y
            if self.vel.y < 0.0:
                self.vel.y = 0.0

from __future__ import annotations

from dataclasses import asdict

from panda3d.core import LVector2f

from jumparc.physics.motion.config import RiseGravitySolver
from jumparc.physics.motion.intent import JumpIntent
from jumparc.physics.motion.solver import JumpMotionSolver
from jumparc.physics.motion.state import AirState, BodyState, HostBody
from jumparc.physics.tuning import JumpTuning
from jumparc.physics.tuning_schema import FORMULA_FIELDS, clamp_tuning_value, is_tuning_field


class JumpController:
    """
    Per-body jump/air controller.

    Frame side: `on_frame(intent)` samples horizontal input and handles jump press/release edges.
    Fixed side: `fixed_step(dt)` picks the gravity regime, clamps ascent and steers in the air.

    The controller only writes `vel` and `gravity_scale` on the body; the host integrates position
    and applies `gravity_scale * gravity` itself.
    """

    def __init__(self, *, tuning: JumpTuning | None = None, body: HostBody | None = None) -> None:
        self.tuning = tuning if tuning is not None else JumpTuning()
        self.body: HostBody = body if body is not None else BodyState()
        self._rise = RiseGravitySolver()
        self.solver = JumpMotionSolver(tuning=self.tuning, rise=self._rise)
        self._move_x = 0
        self.solver.sync(gravity=float(self.body.gravity))

    @property
    def ascent_gravity_scale(self) -> float:
        return self._rise.scale

    @property
    def move_x(self) -> int:
        return int(self._move_x)

    def air_state(self) -> AirState:
        return self.solver.air_state(float(self.body.vel.y))

    def mark_dirty(self) -> None:
        self._rise.mark_dirty()

    def set_tuning_value(self, name: str, value: object) -> float | bool:
        if not is_tuning_field(name):
            raise KeyError(f"Unknown tuning field: {name}")
        v = clamp_tuning_value(name, value)
        setattr(self.tuning, name, v)
        if name in FORMULA_FIELDS:
            self._rise.mark_dirty()
        return v

    def apply_tuning(self, tuning: JumpTuning) -> None:
        self.tuning = tuning
        self.solver.tuning = tuning
        self._rise.mark_dirty()

    def snapshot(self) -> dict[str, float | bool]:
        out: dict[str, float | bool] = {}
        for key, value in asdict(self.tuning).items():
            out[key] = value if isinstance(value, bool) else float(value)
        return out

    def on_frame(self, intent: JumpIntent) -> bool:
        self._move_x = max(-1, min(1, int(intent.move_x)))
        return self.solver.apply_frame_input(body=self.body, intent=intent)

    def fixed_step(self, dt: float) -> LVector2f:
        return self.solver.fixed_step(body=self.body, dt=float(dt), move_x=self._move_x)

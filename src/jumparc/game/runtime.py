from __future__ import annotations

import logging

from panda3d.core import LVector2f

from jumparc.common.error_log import ErrorLog
from jumparc.game.arc_metrics import ArcMetrics
from jumparc.physics.jump_controller import JumpController
from jumparc.physics.motion.intent import JumpIntent
from jumparc.physics.reference_body import ReferenceBody

logger = logging.getLogger(__name__)

# Physics2D default fixed timestep.
DEFAULT_FIXED_DT = 0.02
# Per-frame cap on catch-up steps after a hitch.
MAX_STEPS_PER_FRAME = 8


class JumpRuntime:
    """
    Frame/fixed-step driver for one controller + body.

    Each `frame()` consumes that frame's input edges first, then runs the fixed steps the
    accumulated time allows. The body integrates right after the controller writes to it.
    """

    def __init__(
        self,
        *,
        controller: JumpController,
        body: ReferenceBody,
        fixed_dt: float = DEFAULT_FIXED_DT,
        error_log: ErrorLog | None = None,
        metrics: ArcMetrics | None = None,
    ) -> None:
        if controller.body is not body:
            raise ValueError("JumpRuntime: controller must drive the same body the runtime integrates")
        self.controller = controller
        self.body = body
        self.fixed_dt = max(1e-4, float(fixed_dt))
        self.error_log = error_log if error_log is not None else ErrorLog(max_items=30)
        self.metrics = metrics if metrics is not None else ArcMetrics()
        self.sim_time = 0.0
        self.steps_total = 0
        self._accum = 0.0

    def frame(self, *, dt: float, intent: JumpIntent) -> int:
        """Advance one rendered frame. Returns the number of fixed steps run."""

        try:
            return self._frame(dt=float(dt), intent=intent)
        except Exception as exc:
            self.error_log.log_exception(context="runtime.frame", exc=exc, sim_time=self.sim_time)
            return 0

    def _frame(self, *, dt: float, intent: JumpIntent) -> int:
        if self.controller.on_frame(intent):
            logger.debug("jump launched at t=%.3f vel=%s", self.sim_time, self.body.vel)
        self._accum += max(0.0, dt)
        steps = 0
        while self._accum + 1e-9 >= self.fixed_dt and steps < MAX_STEPS_PER_FRAME:
            self._accum -= self.fixed_dt
            self.step()
            steps += 1
        if steps >= MAX_STEPS_PER_FRAME and self._accum >= self.fixed_dt:
            logger.debug("runtime: dropping %.3fs of backlog", self._accum)
            self._accum = 0.0
        return steps

    def step(self) -> None:
        pre_pos_y = float(self.body.pos.y)
        pre_vel = LVector2f(self.body.vel)
        self.controller.fixed_step(self.fixed_dt)
        self.body.integrate(self.fixed_dt)
        self.sim_time += self.fixed_dt
        self.steps_total += 1
        self.metrics.record_tick(
            now=self.sim_time,
            dt=self.fixed_dt,
            pre_pos_y=pre_pos_y,
            pre_vel=pre_vel,
            pos_y=float(self.body.pos.y),
            post_vel=LVector2f(self.body.vel),
        )


def run_scripted_jump(
    *,
    controller: JumpController,
    body: ReferenceBody,
    hold_seconds: float | None = None,
    move_x: int = 0,
    fixed_dt: float = DEFAULT_FIXED_DT,
    max_seconds: float = 30.0,
) -> JumpRuntime:
    """
    Headless harness: press jump on the first frame, release after `hold_seconds`
    (None = hold until landing), run until the jump lands or `max_seconds` passes.
    """

    rt = JumpRuntime(controller=controller, body=body, fixed_dt=fixed_dt)
    rt.frame(dt=0.0, intent=JumpIntent(move_x=move_x, jump_pressed=True))
    released = False
    while rt.sim_time < max_seconds:
        release = (not released) and hold_seconds is not None and rt.sim_time >= float(hold_seconds)
        released = released or release
        rt.frame(dt=rt.fixed_dt, intent=JumpIntent(move_x=move_x, jump_released=release))
        if rt.metrics.jumps_total > 0:
            break
    return rt

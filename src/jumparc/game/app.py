from __future__ import annotations

from dataclasses import dataclass

from direct.gui.OnscreenText import OnscreenText
from direct.showbase.ShowBase import ShowBase
from panda3d.core import ClockObject, LVector2f, LVector3, TextNode, loadPrcFileData

from jumparc.common.error_log import ErrorLog
from jumparc.game.input_system import sample_jump_intent
from jumparc.game.runtime import JumpRuntime
from jumparc.physics.jump_controller import JumpController
from jumparc.physics.reference_body import ReferenceBody
from jumparc.physics.tuning import JumpTuning
from jumparc.physics.tuning_schema import FIELD_LABELS
from jumparc.state import update_state


@dataclass(frozen=True)
class RunConfig:
    smoke: bool = False
    # Persist live tuning edits on F5.
    allow_save: bool = True


# key -> (tuning field, delta)
_TUNING_KEYS: list[tuple[str, str, float]] = [
    ("bracketleft", "max_jump_height", -0.5),
    ("bracketright", "max_jump_height", 0.5),
    ("semicolon", "max_rise_speed", -0.5),
    ("apostrophe", "max_rise_speed", 0.5),
    ("comma", "fall_gravity_scale", -1.0),
    ("period", "fall_gravity_scale", 1.0),
    ("minus", "jump_cutoff", -0.05),
    ("equal", "jump_cutoff", 0.05),
]


class JumpArcApp(ShowBase):
    def __init__(self, cfg: RunConfig, *, tuning: JumpTuning) -> None:
        # Keep audio from being a dependency for early smoke runs / CI.
        loadPrcFileData("", "audio-library-name null")
        if cfg.smoke:
            loadPrcFileData("", "window-type offscreen")

        super().__init__()
        self.cfg = cfg
        self.disableMouse()

        self.error_log = ErrorLog(max_items=30)
        self.body = ReferenceBody(pos=LVector2f(0.0, 0.0), floor_y=0.0)
        self.controller = JumpController(tuning=tuning, body=self.body)
        self.runtime = JumpRuntime(controller=self.controller, body=self.body, error_log=self.error_log)
        self._prev_jump_down = False
        self._clock = ClockObject.getGlobalClock()

        self._setup_scene()
        self._setup_input()
        self._hud = OnscreenText(
            text="",
            parent=self.aspect2d,
            pos=(-1.32, 0.9),
            align=TextNode.ALeft,
            scale=0.045,
            fg=(1, 1, 1, 1),
            shadow=(0, 0, 0, 0.6),
        )

        self.taskMgr.add(self._update, "jumparc-update")
        if cfg.smoke:
            self._frames_left = 8
            self.taskMgr.add(self._smoke_task, "smoke-exit")

    def _setup_scene(self) -> None:
        floor = self.loader.loadModel("models/box")
        floor.reparentTo(self.render)
        floor.setScale(40.0, 1.0, 0.5)
        floor.setPos(-20.0, -0.5, -0.5)

        self.body_model = self.loader.loadModel("models/box")
        self.body_model.reparentTo(self.render)
        self.body_model.setScale(0.8)

        self.camera.setPos(0, -40, 6)
        self.camera.lookAt(LVector3(0, 0, 6))

    def _setup_input(self) -> None:
        for key, name, delta in _TUNING_KEYS:
            self.accept(key, self._adjust_tuning, [name, delta])
        self.accept("r", self._reset_body)
        self.accept("f5", self._save_tuning)

    def _adjust_tuning(self, name: str, delta: float) -> None:
        current = float(getattr(self.controller.tuning, name))
        self.controller.set_tuning_value(name, current + float(delta))

    def _reset_body(self) -> None:
        self.body.pos = LVector2f(0.0, 0.0)
        self.body.vel = LVector2f(0.0, 0.0)

    def _save_tuning(self) -> None:
        if not self.cfg.allow_save:
            return
        try:
            update_state(tuning_overrides=self.controller.snapshot())
        except OSError as exc:
            self.error_log.log_exception(context="state.save", exc=exc, sim_time=self.runtime.sim_time)

    def _update(self, task):  # type: ignore[no-untyped-def]
        dt = min(float(self._clock.getDt()), 0.1)
        intent = sample_jump_intent(self)
        self.runtime.frame(dt=dt, intent=intent)

        self.body_model.setPos(self.body.pos.x - 0.4, -0.4, self.body.pos.y)
        self._update_hud()
        return task.cont

    def _update_hud(self) -> None:
        t = self.controller.tuning
        lines = [
            "A/D or arrows steer | Space jump | R reset | F5 save",
            "[ ] height | ; ' rise speed | , . fall gravity | - = cutoff",
            "",
            f"{FIELD_LABELS['max_jump_height']}: {t.max_jump_height:.2f}",
            f"{FIELD_LABELS['max_rise_speed']}: {t.max_rise_speed:.2f}",
            f"{FIELD_LABELS['fall_gravity_scale']}: {t.fall_gravity_scale:.1f}",
            f"{FIELD_LABELS['jump_cutoff']}: {t.jump_cutoff:.2f}",
            f"ascent gravity scale: {self.controller.ascent_gravity_scale:.4f}",
            f"vel: ({self.body.vel.x:.2f}, {self.body.vel.y:.2f})  state: {self.controller.air_state().value}",
            self.runtime.metrics.summary_line(),
        ]
        latest = self.error_log.latest()
        if latest is not None:
            lines.append(f"error: {latest.summary_line()}")
        self._hud.setText("\n".join(lines))

    def _smoke_task(self, task):  # type: ignore[no-untyped-def]
        self._frames_left -= 1
        if self._frames_left <= 0:
            self.userExit()
            return task.done
        return task.cont


def run(*, tuning: JumpTuning, smoke: bool = False) -> None:
    app = JumpArcApp(RunConfig(smoke=smoke, allow_save=not smoke), tuning=tuning)
    app.run()

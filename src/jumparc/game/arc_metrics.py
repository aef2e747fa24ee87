from __future__ import annotations

from dataclasses import dataclass, field

from panda3d.core import LVector2f

# Matches the jump trigger's ground heuristic.
_TAKEOFF_VEL = 0.05


@dataclass(frozen=True)
class JumpSample:
    takeoff_time: float
    launch_speed: float
    apex_height: float
    rise_time: float
    air_time: float


@dataclass
class ArcMetrics:
    """Per-jump arc measurements: apex above takeoff, time to apex, total air time."""

    max_samples: int = 16
    jumps_total: int = 0
    samples: list[JumpSample] = field(default_factory=list)

    _airborne: bool = False
    _takeoff_time: float = 0.0
    _takeoff_y: float = 0.0
    _launch_speed: float = 0.0
    _apex_y: float = 0.0
    _apex_time: float = 0.0

    def in_flight(self) -> bool:
        return bool(self._airborne)

    def record_tick(
        self,
        *,
        now: float,
        dt: float,
        pre_pos_y: float,
        pre_vel: LVector2f,
        pos_y: float,
        post_vel: LVector2f,
    ) -> JumpSample | None:
        """
        Feed one fixed step (`now` is the time at the end of it).

        Returns the finished sample on the tick a jump lands back at its takeoff height.
        """

        if not self._airborne:
            if float(pre_vel.y) > _TAKEOFF_VEL:
                self._airborne = True
                self._takeoff_time = float(now) - float(dt)
                self._takeoff_y = float(pre_pos_y)
                self._launch_speed = float(pre_vel.y)
                self._apex_y = float(pre_pos_y)
                self._apex_time = self._takeoff_time
            else:
                return None

        if float(pos_y) > self._apex_y:
            self._apex_y = float(pos_y)
            self._apex_time = float(now)

        if abs(float(post_vel.y)) < _TAKEOFF_VEL and float(pos_y) <= self._takeoff_y + 1e-6:
            sample = JumpSample(
                takeoff_time=self._takeoff_time,
                launch_speed=self._launch_speed,
                apex_height=self._apex_y - self._takeoff_y,
                rise_time=self._apex_time - self._takeoff_time,
                air_time=float(now) - self._takeoff_time,
            )
            self._airborne = False
            self.jumps_total += 1
            self.samples.append(sample)
            if len(self.samples) > max(1, int(self.max_samples)):
                self.samples = self.samples[-max(1, int(self.max_samples)) :]
            return sample
        return None

    def last(self) -> JumpSample | None:
        return self.samples[-1] if self.samples else None

    def summary_line(self) -> str:
        s = self.last()
        if s is None:
            return "arc | no jumps yet"
        return (
            "arc | "
            f"jumps={self.jumps_total} "
            f"launch={s.launch_speed:.2f} "
            f"apex={s.apex_height:.3f} "
            f"rise={s.rise_time:.2f}s "
            f"air={s.air_time:.2f}s"
        )

from __future__ import annotations

import logging
import math

import pytest
from panda3d.core import LVector2f

from jumparc.physics.jump_controller import JumpController
from jumparc.physics.motion.config import RiseGravitySolver, derive_rise_gravity_scale
from jumparc.physics.reference_body import ReferenceBody
from jumparc.physics.tuning import JumpTuning


def test_derivation_matches_v_squared_over_2gh() -> None:
    scale = derive_rise_gravity_scale(max_rise_speed=5.0, max_jump_height=9.0, gravity=9.81)
    assert math.isclose(scale, 25.0 / (2.0 * 9.0 * 9.81), rel_tol=1e-9)


def test_derivation_uses_gravity_magnitude_not_sign() -> None:
    up = derive_rise_gravity_scale(max_rise_speed=4.0, max_jump_height=2.0, gravity=9.81)
    down = derive_rise_gravity_scale(max_rise_speed=4.0, max_jump_height=2.0, gravity=-9.81)
    assert math.isclose(up, down, rel_tol=1e-12)


@pytest.mark.parametrize(
    ("speed", "height"),
    [(5.0, 0.0), (5.0, 0.1), (0.0, 9.0), (0.1, 9.0), (-3.0, 4.0)],
)
def test_degenerate_speed_or_height_keeps_previous_scale(speed: float, height: float) -> None:
    scale = derive_rise_gravity_scale(max_rise_speed=speed, max_jump_height=height, gravity=9.81, previous=0.42)
    assert scale == 0.42


def test_near_zero_gravity_falls_back_to_unit_scale() -> None:
    scale = derive_rise_gravity_scale(max_rise_speed=5.0, max_jump_height=9.0, gravity=0.0005, previous=0.42)
    assert scale == 1.0


def test_solver_starts_dirty_and_recomputes_once() -> None:
    rise = RiseGravitySolver()
    assert rise.dirty is True
    assert rise.scale == 1.0

    first = rise.ensure(max_rise_speed=5.0, max_jump_height=9.0, gravity=9.81)
    assert rise.dirty is False
    assert math.isclose(first, 25.0 / (18.0 * 9.81), rel_tol=1e-9)
    assert rise.ensure(max_rise_speed=5.0, max_jump_height=9.0, gravity=9.81) == first


def test_solver_recomputes_when_speed_or_height_change_without_dirty_flag() -> None:
    rise = RiseGravitySolver()
    rise.ensure(max_rise_speed=5.0, max_jump_height=9.0, gravity=9.81)

    lower = rise.ensure(max_rise_speed=5.0, max_jump_height=4.0, gravity=9.81)
    assert math.isclose(lower, 25.0 / (8.0 * 9.81), rel_tol=1e-9)

    faster = rise.ensure(max_rise_speed=10.0, max_jump_height=4.0, gravity=9.81)
    assert math.isclose(faster, 100.0 / (8.0 * 9.81), rel_tol=1e-9)


def test_near_zero_gravity_fallback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    rise = RiseGravitySolver()
    with caplog.at_level(logging.DEBUG, logger="jumparc.physics.motion.config"):
        scale = rise.recompute(5.0, 9.0, 0.0)

    assert scale == 1.0
    assert any("too small" in r.getMessage() for r in caplog.records)


def test_solver_recomputes_when_marked_dirty_or_gravity_changes() -> None:
    rise = RiseGravitySolver()
    rise.ensure(max_rise_speed=5.0, max_jump_height=9.0, gravity=9.81)

    rise.mark_dirty()
    scale = rise.ensure(max_rise_speed=5.0, max_jump_height=4.0, gravity=9.81)
    assert math.isclose(scale, 25.0 / (8.0 * 9.81), rel_tol=1e-9)

    moon = rise.ensure(max_rise_speed=5.0, max_jump_height=4.0, gravity=1.62)
    assert math.isclose(moon, 25.0 / (8.0 * 1.62), rel_tol=1e-9)


def test_solver_keeps_last_valid_value_for_zero_height() -> None:
    rise = RiseGravitySolver()
    valid = rise.recompute(5.0, 9.0, 9.81)
    after = rise.recompute(5.0, 0.0, 9.81)
    assert after == valid
    assert math.isfinite(after)


@pytest.mark.parametrize(
    ("speed", "height", "gravity"),
    [
        (5.0, 9.0, 9.81),
        (20.0, 0.5, 9.81),
        (3.0, 2.0, 1.62),
        (12.0, 4.0, 30.0),
    ],
)
def test_pure_ascent_peaks_at_configured_height(speed: float, height: float, gravity: float) -> None:
    dt = 1.0 / 1000.0
    body = ReferenceBody(vel=LVector2f(0.0, speed), gravity=gravity, floor_y=None)
    controller = JumpController(tuning=JumpTuning(max_rise_speed=speed, max_jump_height=height), body=body)

    peak = 0.0
    for _ in range(200_000):
        controller.fixed_step(dt)
        body.integrate(dt)
        peak = max(peak, float(body.pos.y))
        if body.vel.y <= 0.0:
            break

    assert body.vel.y <= 0.0
    assert math.isclose(peak, height, rel_tol=2e-3, abs_tol=2e-3)

from __future__ import annotations

import argparse
import logging

from jumparc.game.runtime import run_scripted_jump
from jumparc.physics.jump_controller import JumpController
from jumparc.physics.reference_body import ReferenceBody
from jumparc.state import load_state, tuning_from_overrides, update_state


def _overrides_from_args(args: argparse.Namespace) -> dict[str, float | bool]:
    out: dict[str, float | bool] = {}
    for attr, field_name in (
        ("rise_speed", "max_rise_speed"),
        ("jump_height", "max_jump_height"),
        ("fall_gravity", "fall_gravity_scale"),
        ("cutoff", "jump_cutoff"),
    ):
        value = getattr(args, attr)
        if value is not None:
            out[field_name] = float(value)
    return out


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="jumparc", description="jumparc jump arc controller")
    parser.add_argument(
        "--window",
        action="store_true",
        help="Open the Panda3D demo window instead of printing a headless arc report.",
    )
    parser.add_argument(
        "--smoke",
        action="store_true",
        help="Run briefly and exit (offscreen when combined with --window).",
    )
    parser.add_argument("--rise-speed", type=float, default=None, help="Override max_rise_speed.")
    parser.add_argument("--jump-height", type=float, default=None, help="Override max_jump_height.")
    parser.add_argument("--fall-gravity", type=float, default=None, help="Override fall_gravity_scale.")
    parser.add_argument("--cutoff", type=float, default=None, help="Override jump_cutoff.")
    parser.add_argument(
        "--hold",
        type=float,
        default=None,
        help="Headless report: release jump after this many seconds (default: hold until landing).",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Persist the overrides given on the command line as tuning defaults.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    overrides = dict(load_state().tuning_overrides)
    cli_overrides = _overrides_from_args(args)
    overrides.update(cli_overrides)
    if args.save and cli_overrides:
        update_state(tuning_overrides=cli_overrides)
    tuning = tuning_from_overrides(overrides)

    if args.window:
        from jumparc.game.app import run

        run(tuning=tuning, smoke=args.smoke)
        return

    body = ReferenceBody()
    controller = JumpController(tuning=tuning, body=body)
    rt = run_scripted_jump(
        controller=controller,
        body=body,
        hold_seconds=args.hold,
        max_seconds=5.0 if args.smoke else 60.0,
    )
    print(f"ascent gravity scale: {controller.ascent_gravity_scale:.6f}")
    print(rt.metrics.summary_line())
    for item in rt.error_log.items():
        print(f"error: {item.summary_line()}")


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
import logging
import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path

from jumparc.physics.tuning import JumpTuning
from jumparc.physics.tuning_schema import clamp_tuning_value, is_tuning_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpArcState:
    tuning_overrides: dict[str, float | bool] = field(default_factory=dict)


def state_dir() -> Path:
    """
    Directory for small persistent user state.

    Override for tests/dev via `JUMPARC_STATE_DIR`.
    """

    override = os.environ.get("JUMPARC_STATE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".jumparc"


def state_path() -> Path:
    return state_dir() / "state.json"


def clean_tuning_overrides(raw: object) -> dict[str, float | bool]:
    out: dict[str, float | bool] = {}
    if not isinstance(raw, dict):
        return out
    for key, value in raw.items():
        if not isinstance(key, str) or not is_tuning_field(key):
            continue
        if isinstance(value, bool):
            out[key] = value
        elif isinstance(value, (int, float)):
            out[key] = float(value)
    return out


def load_state() -> JumpArcState:
    p = state_path()
    if not p.exists():
        return JumpArcState()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("state: ignoring unreadable %s: %s", p, exc)
        return JumpArcState()

    if not isinstance(payload, dict):
        logger.warning("state: ignoring %s (expected a JSON object)", p)
        return JumpArcState()
    return JumpArcState(
        tuning_overrides=clean_tuning_overrides(payload.get("tuning_overrides")),
    )


def save_state(state: JumpArcState) -> None:
    d = state_dir()
    d.mkdir(parents=True, exist_ok=True)
    p = state_path()
    # Unique tmp name so parallel smoke runs cannot clobber each other's partial writes.
    tmp = p.with_name(f"{p.name}.{os.getpid()}.{secrets.token_hex(6)}.tmp")
    tmp.write_text(
        json.dumps(
            {
                "tuning_overrides": state.tuning_overrides,
            },
            indent=2,
            sort_keys=True,
        )
        + "\n",
        encoding="utf-8",
    )
    tmp.replace(p)


def update_state(*, tuning_overrides: dict[str, float | bool] | None = None) -> JumpArcState:
    s = load_state()
    merged = dict(s.tuning_overrides)
    if tuning_overrides is not None:
        merged.update(clean_tuning_overrides(tuning_overrides))
    out = JumpArcState(
        tuning_overrides=merged,
    )
    save_state(out)
    return out


def tuning_from_overrides(overrides: dict[str, float | bool]) -> JumpTuning:
    tuning = JumpTuning()
    for key, value in clean_tuning_overrides(overrides).items():
        setattr(tuning, key, clamp_tuning_value(key, value))
    return tuning

from __future__ import annotations

from pathlib import Path

import pytest

from jumparc.physics.tuning import JumpTuning
from jumparc.state import (
    JumpArcState,
    clean_tuning_overrides,
    load_state,
    save_state,
    state_path,
    tuning_from_overrides,
    update_state,
)


@pytest.fixture(autouse=True)
def _state_dir(tmp_path: Path, monkeypatch) -> Path:
    d = tmp_path / "state"
    monkeypatch.setenv("JUMPARC_STATE_DIR", str(d))
    return d


def test_state_roundtrip() -> None:
    assert load_state() == JumpArcState()
    s = JumpArcState(tuning_overrides={"max_jump_height": 4.0, "enable_variable_height": False})
    save_state(s)
    assert load_state() == s
    assert not list(state_path().parent.glob("*.tmp"))


def test_corrupt_state_file_loads_defaults() -> None:
    p = state_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("{not json", encoding="utf-8")
    assert load_state() == JumpArcState()

    p.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_state() == JumpArcState()


def test_update_state_merges_and_drops_unknown_keys() -> None:
    update_state(tuning_overrides={"max_rise_speed": 7.0})
    update_state(tuning_overrides={"enable_variable_height": False, "gravity": 3.0, "air_drag": "x"})

    s = load_state()
    assert s.tuning_overrides == {"max_rise_speed": 7.0, "enable_variable_height": False}


def test_clean_tuning_overrides_ignores_non_dict_payload() -> None:
    assert clean_tuning_overrides(None) == {}
    assert clean_tuning_overrides(["max_rise_speed"]) == {}
    assert clean_tuning_overrides({"jump_cutoff": 1}) == {"jump_cutoff": 1.0}


def test_tuning_from_overrides_clamps_values() -> None:
    tuning = tuning_from_overrides({"air_control": 4.0, "max_jump_height": 3.0})
    assert tuning.air_control == 1.0
    assert tuning.max_jump_height == 3.0
    assert tuning.max_rise_speed == JumpTuning().max_rise_speed

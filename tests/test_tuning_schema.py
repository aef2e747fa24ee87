from __future__ import annotations

import pytest

from jumparc.physics.tuning import JumpTuning
from jumparc.physics.tuning_schema import (
    FIELD_LABELS,
    FORMULA_FIELDS,
    NUMERIC_CONTROLS,
    TOGGLE_CONTROLS,
    clamp_tuning_value,
    is_tuning_field,
)


def test_schema_covers_every_tuning_field() -> None:
    names = {name for name, _lo, _hi in NUMERIC_CONTROLS} | set(TOGGLE_CONTROLS)
    assert names == set(JumpTuning.__annotations__)
    assert set(FIELD_LABELS) == names
    assert FORMULA_FIELDS <= names


def test_defaults_sit_inside_control_ranges() -> None:
    tuning = JumpTuning()
    for name, lo, hi in NUMERIC_CONTROLS:
        assert lo <= float(getattr(tuning, name)) <= hi, name


def test_fractions_clamp_to_unit_range() -> None:
    assert clamp_tuning_value("air_control", 1.5) == 1.0
    assert clamp_tuning_value("jump_cutoff", -0.2) == 0.0
    assert clamp_tuning_value("jump_cutoff", 0.684) == 0.684


def test_bad_numbers_collapse_to_range_minimum() -> None:
    assert clamp_tuning_value("max_jump_height", float("nan")) == 0.0
    assert clamp_tuning_value("max_rise_speed", float("inf")) == 0.0
    assert clamp_tuning_value("air_drag", "fast") == 0.0


def test_toggles_coerce_to_bool() -> None:
    assert clamp_tuning_value("enable_variable_height", 1) is True
    assert clamp_tuning_value("enable_variable_height", 0) is False


def test_unknown_field_raises_key_error() -> None:
    assert is_tuning_field("gravity") is False
    with pytest.raises(KeyError):
        clamp_tuning_value("gravity", 9.81)

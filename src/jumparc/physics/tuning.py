from __future__ import annotations

from dataclasses import dataclass


@dataclass
class JumpTuning:
    # Jump arc invariants.
    # Ascent gravity is derived from rise speed + peak height; descent uses its own scale.
    max_rise_speed: float = 5.0
    max_jump_height: float = 9.0
    fall_gravity_scale: float = 25.0

    # Air steering (only applied while airborne).
    air_acceleration: float = 150.0
    # Fraction of air_acceleration granted to steering (0 = no steering, 1 = full authority).
    air_control: float = 0.037
    air_drag: float = 1.0
    max_air_speed: float = 8.0

    # Early release truncates the remaining ascent velocity by this fraction.
    enable_variable_height: bool = True
    jump_cutoff: float = 0.684

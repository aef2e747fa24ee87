from __future__ import annotations

from dataclasses import dataclass


@dataclass
class JumpIntent:
    """Input snapshot for one rendered frame."""

    # -1 (left), 0, +1 (right).
    move_x: int = 0
    # Edges: true only on the frame the jump control went down / up.
    jump_pressed: bool = False
    jump_released: bool = False

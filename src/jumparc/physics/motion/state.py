from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from panda3d.core import LVector2f

# Physics2D default world gravity magnitude.
DEFAULT_GRAVITY = 9.81


class AirState(str, Enum):
    GROUNDED = "grounded"
    AIRBORNE = "airborne"


class HostBody(Protocol):
    """What the controller needs from the host rigid body."""

    vel: LVector2f
    gravity_scale: float
    gravity: float


@dataclass
class BodyState:
    vel: LVector2f = field(default_factory=lambda: LVector2f(0.0, 0.0))
    gravity_scale: float = 1.0
    gravity: float = DEFAULT_GRAVITY

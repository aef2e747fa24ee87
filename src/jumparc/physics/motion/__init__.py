"""Jump arc derivation, solver, and intent/state contracts."""

from jumparc.physics.motion.config import RiseGravitySolver, derive_rise_gravity_scale
from jumparc.physics.motion.intent import JumpIntent
from jumparc.physics.motion.solver import JumpMotionSolver, move_toward
from jumparc.physics.motion.state import AirState, BodyState, HostBody

__all__ = [
    "AirState",
    "BodyState",
    "HostBody",
    "JumpIntent",
    "JumpMotionSolver",
    "RiseGravitySolver",
    "derive_rise_gravity_scale",
    "move_toward",
]

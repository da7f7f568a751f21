"""
Planar FABRIK Inverse Kinematics Module

Forward And Backward Reaching Inverse Kinematics solver for a 2D chain of
fixed-length segments anchored at a root point.

Modules:
    - fabrik_solver: Chain, the stateful solver (use this for IK solving)
    - fabrik_chain_config: ChainConfig and InvalidConfigError
    - fabrik_initialization: Straight rest pose (cold start)
    - fabrik_iteration: Single FABRIK iteration (forward + backward pass)
    - fabrik_vector: Point2D value type
"""

from .fabrik_vector import Point2D
from .fabrik_chain_config import ChainConfig, InvalidConfigError
from .fabrik_initialization import FabrikInitialization
from .fabrik_iteration import FabrikIteration
from .fabrik_solver import Chain

__all__ = [
    'Chain',
    'ChainConfig',
    'InvalidConfigError',
    'Point2D',
    'FabrikInitialization',
    'FabrikIteration'
]

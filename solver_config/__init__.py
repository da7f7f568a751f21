"""
Solver Configuration Package
============================

Centralized default parameters for the planar FABRIK solver.
All parameters are organized into logical modules:

- physical: Chain geometry, bounds and adjustment steps
- motion: FABRIK iteration parameters

Usage:
    from solver_config import physical, motion

    # Or import specific values
    from solver_config.physical import SEGMENT_COUNT, SEGMENT_LENGTH
    from solver_config.motion import FABRIK_TOLERANCE

These values are tuning constants for presentation layers, not algorithmic
contracts. Callers wanting other values pass an explicit ChainConfig.
"""

from . import physical
from . import motion

__version__ = '1.0.0'
__all__ = ['physical', 'motion']

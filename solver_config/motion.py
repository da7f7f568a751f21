"""
Motion Parameters
=================
Parameters for the FABRIK iteration loop.
"""

# =============================================================================
# FABRIK IK SOLVER
# =============================================================================

FABRIK_TOLERANCE = 0.5
"""Convergence tolerance: effector-to-target distance that counts as reached"""

FABRIK_MAX_ITERATIONS = 10
"""Maximum forward/backward iterations per solve call"""

FABRIK_COLLINEAR_BEND_ANGLE = 0.08726646259971647  # math.radians(5)
"""Rotation (radians) given to the first forward-pass segment when chain and target are collinear"""

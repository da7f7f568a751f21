"""
Chain Physical Parameters
=========================
Default geometry of a planar chain and the bounds used when adjusting it.

Lengths are in caller units (pixels, cells, meters); the solver never
converts them.
"""

# =============================================================================
# CHAIN GEOMETRY
# =============================================================================

SEGMENT_COUNT = 8
"""Default number of segments in a chain"""

SEGMENT_LENGTH = 50.0
"""Default rest length of every segment"""

INITIAL_DIRECTION = (0.0, 1.0)
"""Unit direction of the straight rest pose, from root toward effector (+y)"""

# =============================================================================
# ADJUSTMENT BOUNDS
# =============================================================================

MIN_SEGMENT_COUNT = 1
"""Smallest segment count a chain can be adjusted down to"""

MIN_SEGMENT_LENGTH = 0.0
"""Smallest segment length a chain can be adjusted down to"""

SEGMENT_COUNT_STEP = 1
"""Default increment/decrement applied to the segment count"""

SEGMENT_LENGTH_STEP = 5.0
"""Default increment/decrement applied to the segment length"""

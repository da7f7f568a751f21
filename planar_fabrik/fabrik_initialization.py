#!/usr/bin/env python3
"""
FABRIK Initialization Module

Generates the straight rest pose of a chain (cold start) and measures
segment lengths of an existing pose.
"""

import numpy as np

from solver_config import physical as phys_config
from .fabrik_vector import Point2D
from .fabrik_chain_config import ChainConfig


class FabrikInitialization:
    """Initialization of the planar FABRIK chain."""

    INITIAL_DIRECTION = np.array(phys_config.INITIAL_DIRECTION, dtype=np.float64)

    @staticmethod
    def create_straight_chain(root: Point2D,
                              segment_count: int,
                              segment_length: float,
                              direction: np.ndarray = None) -> np.ndarray:
        """
        Create joints in a straight line from root.

        Args:
            root: Anchor of the chain (joint 0)
            segment_count: Number of segments
            segment_length: Distance between consecutive joints
            direction: Unit direction of the line (default INITIAL_DIRECTION)

        Returns:
            Array of shape (segment_count+1, 2) with joint 0 to joint segment_count
        """
        if direction is None:
            direction = FabrikInitialization.INITIAL_DIRECTION

        offsets = np.arange(segment_count + 1, dtype=np.float64) * segment_length
        return root.to_array() + offsets[:, np.newaxis] * direction

    @staticmethod
    def calculate_joint_distances(joints: np.ndarray) -> np.ndarray:
        """
        Calculate distances between consecutive joints.

        Args:
            joints: Array of shape (num_joints, 2)

        Returns:
            Array of distances of shape (num_joints-1,)
        """
        deltas = np.diff(joints, axis=0)
        return np.hypot(deltas[:, 0], deltas[:, 1])

    @staticmethod
    def validate_joints(joints: np.ndarray,
                        root: Point2D,
                        segment_length: float,
                        atol: float = 1e-6) -> bool:
        """Check shape, finiteness, root anchoring and segment lengths of a pose."""
        if joints.ndim != 2 or joints.shape[1] != 2:
            return False
        if joints.shape[0] < 2:
            return False
        if not np.all(np.isfinite(joints)):
            return False
        if not np.allclose(joints[0], root.to_array(), atol=atol):
            return False
        distances = FabrikInitialization.calculate_joint_distances(joints)
        return bool(np.allclose(distances, segment_length, atol=atol))

    @staticmethod
    def cold_start(root: Point2D, config: ChainConfig) -> tuple:
        """
        Initialize a chain with cold start (straight line along INITIAL_DIRECTION).

        Returns:
            tuple: (joints, segment_lengths)
                - joints: Array of shape (segment_count+1, 2)
                - segment_lengths: Array of shape (segment_count,)
        """
        joints = FabrikInitialization.create_straight_chain(
            root, config.segment_count, config.segment_length
        )
        segment_lengths = np.full(config.segment_count, config.segment_length, dtype=np.float64)
        return joints, segment_lengths

#!/usr/bin/env python3
"""
FABRIK Iteration Module

Implements forward and backward passes for the planar FABRIK solver.

Forward pass: effector is pinned to the target and joints are pulled toward
it, from the effector back to the root.
Backward pass: root is re-anchored and joints are pushed out from the root
to the effector.

Every joint is placed at exactly its segment length from the joint placed
before it, so both passes preserve segment lengths by construction.
"""

import numpy as np

from .fabrik_initialization import FabrikInitialization


class FabrikIteration:
    """FABRIK iteration with forward and backward passes."""

    @staticmethod
    def unit_direction(vector: np.ndarray, fallback: np.ndarray) -> np.ndarray:
        """
        Normalize vector, or return fallback when the vector has zero length.

        The vector is scaled by its largest component before normalizing, so
        huge finite displacements do not overflow the norm.

        Args:
            vector: Displacement, shape (2,)
            fallback: Unit direction used for coincident points, shape (2,)

        Returns:
            Unit vector of shape (2,)
        """
        scale = np.max(np.abs(vector))
        if scale == 0.0:
            return fallback
        scaled = vector / scale
        return scaled / np.linalg.norm(scaled)

    @staticmethod
    def distance(a: np.ndarray, b: np.ndarray) -> float:
        """Euclidean distance between two points, without intermediate overflow."""
        return float(np.hypot(a[0] - b[0], a[1] - b[1]))

    @staticmethod
    def rotate(direction: np.ndarray, angle_rad: float) -> np.ndarray:
        """Rotate a 2D direction counter-clockwise by angle_rad."""
        cos_angle = np.cos(angle_rad)
        sin_angle = np.sin(angle_rad)
        return np.array([
            cos_angle * direction[0] - sin_angle * direction[1],
            sin_angle * direction[0] + cos_angle * direction[1]
        ])

    @staticmethod
    def is_collinear(joints: np.ndarray, target: np.ndarray, atol: float = 1e-9) -> bool:
        """
        Check whether every joint and the target lie on one straight line.

        A collinear chain keeps folding back onto its own line, so the solver
        bends it once before iterating.

        Args:
            joints: Joint positions, shape (num_joints, 2)
            target: Target position, shape (2,)
            atol: Tolerance on the normalized cross product

        Returns:
            True when all points are on a common line (or coincide)
        """
        offsets = np.vstack([joints, target]) - joints[0]
        scale = np.max(np.abs(offsets))
        if scale == 0.0:
            return True
        offsets = offsets / scale

        # Line axis: the offset furthest from joint 0
        lengths = np.hypot(offsets[:, 0], offsets[:, 1])
        axis = offsets[np.argmax(lengths)] / np.max(lengths)
        cross = offsets[:, 0] * axis[1] - offsets[:, 1] * axis[0]
        return bool(np.all(np.abs(cross) <= atol))

    @staticmethod
    def forward_pass(joints: np.ndarray,
                     target: np.ndarray,
                     joint_distances: np.ndarray,
                     bend_angle_rad: float = 0.0) -> np.ndarray:
        """
        Perform forward pass: pin the effector to target, pull joints toward it.

        Args:
            joints: Current joint positions, shape (num_joints, 2)
            target: Target effector position, shape (2,)
            joint_distances: Distances between consecutive joints, shape (num_joints-1,)
            bend_angle_rad: Rotation applied to the first placed segment (default 0)

        Returns:
            f_joints: Joint positions after forward pass, shape (num_joints, 2)
        """
        num_joints = len(joints)
        f_joints = joints.copy()

        # Step 1: Move effector to target
        f_joints[-1] = target

        # Step 2: Loop from second-to-last joint down to the root
        # Coincident points reuse the last placed direction (root-ward of initial pose first)
        direction = -FabrikInitialization.INITIAL_DIRECTION
        for i in range(num_joints - 2, -1, -1):
            direction = FabrikIteration.unit_direction(joints[i] - f_joints[i + 1], direction)
            if i == num_joints - 2 and bend_angle_rad != 0.0:
                direction = FabrikIteration.rotate(direction, bend_angle_rad)
            f_joints[i] = f_joints[i + 1] + direction * joint_distances[i]

        return f_joints

    @staticmethod
    def backward_pass(forward_joints: np.ndarray,
                      root: np.ndarray,
                      joint_distances: np.ndarray) -> np.ndarray:
        """
        Perform backward pass: re-anchor the root, push joints out toward the effector.

        Args:
            forward_joints: Joint positions after forward pass, shape (num_joints, 2)
            root: Fixed root position, shape (2,)
            joint_distances: Distances between consecutive joints, shape (num_joints-1,)

        Returns:
            b_joints: Joint positions after backward pass, shape (num_joints, 2)
        """
        num_joints = len(forward_joints)
        b_joints = forward_joints.copy()

        # Step 1: Fix root position
        b_joints[0] = root

        # Step 2: Loop from joint 1 to the effector
        direction = FabrikInitialization.INITIAL_DIRECTION
        for i in range(1, num_joints):
            direction = FabrikIteration.unit_direction(forward_joints[i] - b_joints[i - 1], direction)
            b_joints[i] = b_joints[i - 1] + direction * joint_distances[i - 1]

        return b_joints

    @staticmethod
    def iterate_once(joints: np.ndarray,
                     target: np.ndarray,
                     root: np.ndarray,
                     joint_distances: np.ndarray,
                     bend_angle_rad: float = 0.0) -> np.ndarray:
        """
        Perform one complete FABRIK iteration (forward + backward).

        Args:
            joints: Current joint positions
            target: Target position
            root: Fixed root position
            joint_distances: Fixed distances between joints
            bend_angle_rad: Rotation of the first segment placed by the forward pass

        Returns:
            Updated joint positions after one iteration
        """
        f_joints = FabrikIteration.forward_pass(joints, target, joint_distances, bend_angle_rad)
        return FabrikIteration.backward_pass(f_joints, root, joint_distances)

    @staticmethod
    def stretch_toward(root: np.ndarray,
                       target: np.ndarray,
                       joint_distances: np.ndarray) -> np.ndarray:
        """
        Lay the chain out straight from root toward target.

        Used when the target is at or beyond full reach: every joint lies on the
        root-target line and the effector is the furthest joint from the root.

        Args:
            root: Fixed root position, shape (2,)
            target: Target position, shape (2,)
            joint_distances: Distances between consecutive joints, shape (num_joints-1,)

        Returns:
            Joint positions of shape (num_joints, 2)
        """
        direction = FabrikIteration.unit_direction(target - root, FabrikInitialization.INITIAL_DIRECTION)
        offsets = np.concatenate(([0.0], np.cumsum(joint_distances)))
        return root + offsets[:, np.newaxis] * direction

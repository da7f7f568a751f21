#!/usr/bin/env python3
"""
FABRIK Solver - Chain
=====================
Stateful planar chain that owns its joints and configuration.
Encapsulates the rest pose, reachability check, iteration loop with
convergence checking, and reconfiguration/reset.
"""

import logging
from typing import Dict, Sequence, Tuple, Union

import numpy as np

from solver_config import physical as phys_config
from solver_config import motion as motion_config
from .fabrik_vector import Point2D
from .fabrik_chain_config import ChainConfig
from .fabrik_initialization import FabrikInitialization
from .fabrik_iteration import FabrikIteration

logger = logging.getLogger(__name__)

PointLike = Union[Point2D, Sequence[float], np.ndarray]


def _finite_point(value: PointLike, name: str) -> Point2D:
    point = Point2D.coerce(value)
    if not point.is_finite():
        raise ValueError(f'{name} must have finite coordinates, got {point}')
    return point


class Chain:
    """
    Planar FABRIK chain.

    The chain holds segment_count + 1 joints; joint 0 is the root and the
    last joint is the effector. The pose only changes through solve,
    set_root, the reconfiguration methods and reset.
    """

    def __init__(self, root: PointLike, config: ChainConfig = None):
        """
        Build a chain in its straight rest pose.

        Args:
            root: Anchor point of the chain
            config: Chain configuration (default ChainConfig())
        """
        self._root = _finite_point(root, 'root')
        self._config = config if config is not None else ChainConfig()
        self._joints, self._segment_lengths = FabrikInitialization.cold_start(self._root, self._config)

    def __repr__(self) -> str:
        return f'Chain(root={self._root!r}, config={self._config!r})'

    # -------------------------------------------------------------------------
    # Solving
    # -------------------------------------------------------------------------

    def solve(self, target: PointLike) -> Dict:
        """
        Move the chain toward target using FABRIK.

        Args:
            target: Target effector position

        Returns:
            Dictionary containing:
                - 'converged': bool - Whether the effector is within tolerance
                - 'reachable': bool - Whether the target is inside full reach
                - 'iterations': int - Number of iterations used
                - 'final_error': float - Effector-to-target distance
        """
        target_point = _finite_point(target, 'target')
        target_arr = target_point.to_array()
        root_arr = self._root.to_array()
        tolerance = self._config.tolerance

        # Unreachable (or exactly at full stretch): point straight at the target
        reachable = self._root.distance(target_point) < self.total_reach
        iterations_used = 0

        if not reachable:
            self._joints = FabrikIteration.stretch_toward(root_arr, target_arr, self._segment_lengths)
        else:
            joints = self._joints
            for iteration in range(self._config.max_iterations):
                if FabrikIteration.distance(joints[-1], target_arr) <= tolerance:
                    break
                # A straight chain on the target's line folds back onto itself; bend it once
                bend = 0.0
                if FabrikIteration.is_collinear(joints, target_arr):
                    bend = motion_config.FABRIK_COLLINEAR_BEND_ANGLE
                joints = FabrikIteration.iterate_once(joints, target_arr, root_arr,
                                                      self._segment_lengths, bend)
                iterations_used = iteration + 1
            self._joints = joints

        final_error = FabrikIteration.distance(self._joints[-1], target_arr)
        converged = final_error <= tolerance

        if reachable and not converged:
            logger.debug('Did not converge after %d iterations, error: %.4f',
                         iterations_used, final_error)
        else:
            logger.debug('Solved target (%.3f, %.3f): reachable=%s, iterations=%d, error: %.4f',
                         target_point.x, target_point.y, reachable, iterations_used, final_error)

        return {
            'converged': converged,
            'reachable': reachable,
            'iterations': iterations_used,
            'final_error': final_error,
        }

    # -------------------------------------------------------------------------
    # Reconfiguration
    # -------------------------------------------------------------------------

    def reconfigure(self, config: ChainConfig):
        """Replace the configuration and rebuild the rest pose at the current root."""
        self._config = config
        self._joints, self._segment_lengths = FabrikInitialization.cold_start(self._root, config)
        logger.debug('Rebuilt chain: %d segments of length %.3f',
                     config.segment_count, config.segment_length)

    def set_segment_count(self, segment_count: int):
        """
        Change the number of segments and rebuild.

        Raises:
            InvalidConfigError: If segment_count < 1
        """
        self.reconfigure(self._config.replace(segment_count=segment_count))

    def set_segment_length(self, segment_length: float):
        """
        Change the length of every segment and rebuild.

        Raises:
            InvalidConfigError: If segment_length is negative or not finite
        """
        self.reconfigure(self._config.replace(segment_length=segment_length))

    def increment_segment_count(self, step: int = phys_config.SEGMENT_COUNT_STEP):
        self.set_segment_count(max(phys_config.MIN_SEGMENT_COUNT, self.segment_count + step))

    def decrement_segment_count(self, step: int = phys_config.SEGMENT_COUNT_STEP):
        self.set_segment_count(max(phys_config.MIN_SEGMENT_COUNT, self.segment_count - step))

    def increment_segment_length(self, step: float = phys_config.SEGMENT_LENGTH_STEP):
        self.set_segment_length(max(phys_config.MIN_SEGMENT_LENGTH, self.segment_length + step))

    def decrement_segment_length(self, step: float = phys_config.SEGMENT_LENGTH_STEP):
        self.set_segment_length(max(phys_config.MIN_SEGMENT_LENGTH, self.segment_length - step))

    def reset(self):
        """Restore the default configuration and rebuild at the current root."""
        self.reconfigure(ChainConfig())

    def set_root(self, root: PointLike):
        """
        Move the anchor of the chain.

        The whole pose is translated with the root, so segment lengths are kept.
        """
        new_root = _finite_point(root, 'root')
        self._joints = self._joints + (new_root.to_array() - self._root.to_array())
        self._joints[0] = new_root.to_array()
        self._root = new_root

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Point2D:
        return self._root

    @property
    def effector(self) -> Point2D:
        return Point2D.from_array(self._joints[-1])

    @property
    def config(self) -> ChainConfig:
        return self._config

    @property
    def joints(self) -> Tuple[Point2D, ...]:
        """Joint positions, index 0 is the root and the last is the effector."""
        return tuple(Point2D(x, y) for x, y in self._joints)

    @property
    def segment_count(self) -> int:
        return self._config.segment_count

    @property
    def segment_length(self) -> float:
        return self._config.segment_length

    @property
    def joint_count(self) -> int:
        return len(self._joints)

    @property
    def total_reach(self) -> float:
        """Maximum distance the effector can be from the root."""
        return self._config.total_reach

    def joint_array(self) -> np.ndarray:
        """Copy of the joint positions as an array of shape (joint_count, 2)."""
        return self._joints.copy()

    def segment_lengths(self) -> np.ndarray:
        """Measured distance of every adjacent joint pair in the current pose."""
        return FabrikInitialization.calculate_joint_distances(self._joints)

#!/usr/bin/env python3
"""
FABRIK Chain Configuration Module

ChainConfig bundles the four values that define a chain and its solve loop.
Invalid values are rejected at construction time with InvalidConfigError;
a config that exists is always usable by the solver.
"""

import dataclasses
import math
import numbers
from dataclasses import dataclass

from solver_config import physical as phys_config
from solver_config import motion as motion_config


class InvalidConfigError(ValueError):
    """Raised when a ChainConfig field is out of its valid range."""


@dataclass(frozen=True)
class ChainConfig:
    """
    Immutable chain configuration.

    Attributes:
        segment_count: Number of rigid segments (>= 1)
        segment_length: Rest length shared by every segment (>= 0)
        max_iterations: Iteration cap for one solve call (>= 1)
        tolerance: Effector-to-target distance counted as converged (>= 0)
    """

    segment_count: int = phys_config.SEGMENT_COUNT
    segment_length: float = phys_config.SEGMENT_LENGTH
    max_iterations: int = motion_config.FABRIK_MAX_ITERATIONS
    tolerance: float = motion_config.FABRIK_TOLERANCE

    def __post_init__(self):
        self._check_count('segment_count', self.segment_count, 1)
        self._check_count('max_iterations', self.max_iterations, 1)
        self._check_float('segment_length', self.segment_length)
        self._check_float('tolerance', self.tolerance)

        object.__setattr__(self, 'segment_count', int(self.segment_count))
        object.__setattr__(self, 'max_iterations', int(self.max_iterations))
        object.__setattr__(self, 'segment_length', float(self.segment_length))
        object.__setattr__(self, 'tolerance', float(self.tolerance))

    @staticmethod
    def _check_count(name: str, value, minimum: int):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidConfigError(f'{name} must be an integer, got {value!r}')
        if value < minimum:
            raise InvalidConfigError(f'{name} must be >= {minimum}, got {value}')

    @staticmethod
    def _check_float(name: str, value):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidConfigError(f'{name} must be a number, got {value!r}')
        if not math.isfinite(value):
            raise InvalidConfigError(f'{name} must be finite, got {value}')
        if value < 0:
            raise InvalidConfigError(f'{name} must be >= 0, got {value}')

    @classmethod
    def default(cls) -> 'ChainConfig':
        """Config built from the solver_config defaults."""
        return cls()

    @property
    def total_reach(self) -> float:
        """Maximum distance the effector can be from the root."""
        return self.segment_count * self.segment_length

    @property
    def joint_count(self) -> int:
        return self.segment_count + 1

    def replace(self, **changes) -> 'ChainConfig':
        """Return a validated copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

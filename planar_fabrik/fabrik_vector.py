#!/usr/bin/env python3
"""
FABRIK Vector Module

Point2D value type: a planar coordinate that doubles as a displacement vector.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np


@dataclass(frozen=True)
class Point2D:
    """Immutable 2D point/vector."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        # Normalize ints and numpy scalars so equality and repr stay plain floats
        object.__setattr__(self, 'x', float(self.x))
        object.__setattr__(self, 'y', float(self.y))

    @classmethod
    def from_array(cls, value: Union[Sequence[float], np.ndarray]) -> 'Point2D':
        """
        Build a point from any length-2 sequence or array.

        Raises:
            ValueError: If value does not hold exactly two coordinates
        """
        coords = np.asarray(value, dtype=np.float64).reshape(-1)
        if coords.shape != (2,):
            raise ValueError(f'Expected 2 coordinates, got {coords.size}')
        return cls(coords[0], coords[1])

    @classmethod
    def coerce(cls, value: Union['Point2D', Sequence[float], np.ndarray]) -> 'Point2D':
        """Return value unchanged if it is a Point2D, otherwise convert it."""
        if isinstance(value, cls):
            return value
        return cls.from_array(value)

    def to_array(self) -> np.ndarray:
        """Return the point as a float64 array of shape (2,)."""
        return np.array([self.x, self.y], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def add(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x + other.x, self.y + other.y)

    def sub(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> 'Point2D':
        return Point2D(self.x * k, self.y * k)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        if not isinstance(other, Point2D):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        if not isinstance(other, Point2D):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, k: float) -> 'Point2D':
        if isinstance(k, Point2D):
            return NotImplemented
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> 'Point2D':
        return Point2D(-self.x, -self.y)

    def length(self) -> float:
        """Euclidean norm of the vector."""
        return math.hypot(self.x, self.y)

    def distance(self, other: 'Point2D') -> float:
        """Euclidean distance between two points."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self) -> 'Point2D':
        """
        Unit vector with the same direction.

        Returns the zero vector when the length is zero, so callers never
        see a division by zero or NaN coordinates.
        """
        norm = self.length()
        if norm == 0.0:
            return Point2D.ZERO
        return Point2D(self.x / norm, self.y / norm)

    def direction(self, other: 'Point2D') -> 'Point2D':
        """
        Unit vector from self toward other.

        Coincident points give the zero vector; this is a normal outcome,
        not an error.
        """
        return other.sub(self).normalize()

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)


Point2D.ZERO = Point2D(0.0, 0.0)

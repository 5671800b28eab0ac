"""
Vector3 class for 3D math operations.

Used throughout the tracer for:
- Points in 3D space
- Direction vectors
- RGB color values

Arithmetic follows IEEE-754: dividing by zero or normalizing a zero vector
produces inf/NaN components instead of raising.
"""

from __future__ import annotations
from typing import Optional, Union
import numpy as np


_default_rng = np.random.default_rng()


def default_rng() -> np.random.Generator:
    """Return the generator used when a caller does not supply one."""
    return _default_rng


class Vec3:
    """A 3D vector backed by a numpy array.

    Components are exposed as x, y, z for geometry and r, g, b for colors.
    Every arithmetic operation returns a new vector; item assignment is the
    only in-place mutation.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.asarray(arr, dtype=np.float64)
        return v

    @classmethod
    def from_color(cls, r: float, g: float, b: float) -> Vec3:
        return cls(r, g, b)

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    __hash__ = None  # item assignment makes Vec3 mutable

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data + other._data)
        return Vec3.from_array(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return Vec3.from_array(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data - other._data)
        return Vec3.from_array(self._data - other)

    def __rsub__(self, other: float) -> Vec3:
        return Vec3.from_array(other - self._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data * other._data)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: Union[Vec3, float]) -> Vec3:
        with np.errstate(divide='ignore', invalid='ignore'):
            if isinstance(other, Vec3):
                return Vec3.from_array(self._data / other._data)
            return Vec3.from_array(self._data / np.float64(other))

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < 3:
            raise IndexError(f"Vec3 index out of range: {index}")
        return float(self._data[index])

    def __setitem__(self, index: int, value: float):
        if not 0 <= index < 3:
            raise IndexError(f"Vec3 index out of range: {index}")
        self._data[index] = value

    def __iter__(self):
        return iter(float(c) for c in self._data)

    def length(self) -> float:
        """Return the Euclidean length of the vector."""
        return float(np.sqrt(self.squared_length()))

    def squared_length(self) -> float:
        """Return the squared length (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    length_squared = squared_length

    def unit_vector(self) -> Vec3:
        """Return this vector divided by its length.

        A zero vector gives NaN components; callers must avoid them.
        """
        return self / self.length()

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect this vector about the given normal: v - 2*dot(v,n)*n."""
        return self - normal * (2.0 * self.dot(normal))

    def gamma2_on_color(self) -> Vec3:
        """Apply gamma 2 display correction (component-wise square root)."""
        with np.errstate(invalid='ignore'):
            return Vec3.from_array(np.sqrt(self._data))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    @staticmethod
    def random(min_val: float = 0.0, max_val: float = 1.0,
               rng: Optional[np.random.Generator] = None) -> Vec3:
        """Generate a random vector with components in [min_val, max_val)."""
        rng = rng if rng is not None else _default_rng
        return Vec3.from_array(min_val + (max_val - min_val) * rng.random(3))

    @staticmethod
    def random_in_unit_sphere(rng: Optional[np.random.Generator] = None) -> Vec3:
        """Rejection-sample a point inside the unit ball.

        Candidates are drawn from the [-1, 1) cube until one has squared
        length <= 1. The loop is unbounded; it takes about two draws on
        average.
        """
        rng = rng if rng is not None else _default_rng
        while True:
            p = Vec3.from_array(2.0 * rng.random(3) - 1.0)
            if p.squared_length() <= 1.0:
                return p


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def unit_vector(v: Vec3) -> Vec3:
    return v.unit_vector()


def reflect(v: Vec3, n: Vec3) -> Vec3:
    return v.reflect(n)


# Convenience type aliases
Point3 = Vec3
Color = Vec3

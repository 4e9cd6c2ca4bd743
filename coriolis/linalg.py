"""
Fixed-size 3-vector / 3x3 matrix algebra.

Row-vector convention throughout: a vector is transformed as ``v' = v . M``,
so ``a.apply(b)`` on matrices yields a transform that applies ``a`` first and
``b`` second. Mutating operations take an optional ``out`` destination that
defaults to the receiver.
"""

import math
from typing import Iterator, Optional, Tuple

import numpy as np


def mat_mul(a: "Matrix3", b: "Matrix3", out: Optional["Matrix3"] = None) -> "Matrix3":
    if out is None:
        out = Matrix3()
    # out may alias a or b; the product is formed before it is written.
    out.m[:] = a.m @ b.m
    return out


def vec_mat(v: "Vector3", m: "Matrix3", out: Optional["Vector3"] = None) -> "Vector3":
    if out is None:
        out = Vector3()
    out.v[:] = v.v @ m.m
    return out


def rotation_x(angle: float, out: Optional["Matrix3"] = None) -> "Matrix3":
    """Rotation about the x (latitude) axis, radians."""
    if out is None:
        out = Matrix3()
    s = math.sin(angle)
    c = math.cos(angle)
    out.m[:] = (
        (1.0, 0.0, 0.0),
        (0.0, c, s),
        (0.0, -s, c),
    )
    return out


def rotation_y(angle: float, out: Optional["Matrix3"] = None) -> "Matrix3":
    """Rotation about the y (longitude / spin) axis, radians."""
    if out is None:
        out = Matrix3()
    s = math.sin(angle)
    c = math.cos(angle)
    out.m[:] = (
        (c, 0.0, -s),
        (0.0, 1.0, 0.0),
        (s, 0.0, c),
    )
    return out


class Vector3:
    __slots__ = ("v",)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.v = np.array((x, y, z), dtype=np.float64)

    @property
    def x(self) -> float:
        return float(self.v[0])

    @property
    def y(self) -> float:
        return float(self.v[1])

    @property
    def z(self) -> float:
        return float(self.v[2])

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return bool(np.array_equal(self.v, other.v))

    __hash__ = None

    def __add__(self, other: "Vector3") -> "Vector3":
        return self.add(other, Vector3())

    def __sub__(self, other: "Vector3") -> "Vector3":
        return self.sub(other, Vector3())

    def __mul__(self, factor: float) -> "Vector3":
        return self.scale(factor, Vector3())

    __rmul__ = __mul__

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def clone(self) -> "Vector3":
        out = Vector3()
        out.v[:] = self.v
        return out

    def set(self, x: float, y: float, z: float) -> "Vector3":
        self.v[:] = (x, y, z)
        return self

    def apply(self, mat: "Matrix3", out: Optional["Vector3"] = None) -> "Vector3":
        return vec_mat(self, mat, self if out is None else out)

    def add(self, other: "Vector3", out: Optional["Vector3"] = None) -> "Vector3":
        out = self if out is None else out
        np.add(self.v, other.v, out=out.v)
        return out

    def sub(self, other: "Vector3", out: Optional["Vector3"] = None) -> "Vector3":
        out = self if out is None else out
        np.subtract(self.v, other.v, out=out.v)
        return out

    def scale(self, factor: float, out: Optional["Vector3"] = None) -> "Vector3":
        out = self if out is None else out
        np.multiply(self.v, float(factor), out=out.v)
        return out

    def mix(self, other: "Vector3", t: float, out: Optional["Vector3"] = None) -> "Vector3":
        """Linear blend ``self*(1-t) + other*t`` with t clamped to [0, 1]."""
        out = self if out is None else out
        t = max(0.0, min(1.0, float(t)))
        out.v[:] = self.v * (1.0 - t) + other.v * t
        return out

    def length(self) -> float:
        x, y, z = self.v
        return math.sqrt(x * x + y * y + z * z)

    def distance_to(self, other: "Vector3") -> float:
        return self.sub(other, Vector3()).length()

    def normalize(self, out: Optional["Vector3"] = None) -> "Vector3":
        """Scale to unit length.

        A zero-length vector is a precondition violation; the result is
        non-finite rather than an exception.
        """
        out = self if out is None else out
        with np.errstate(divide="ignore", invalid="ignore"):
            np.divide(self.v, np.float64(self.length()), out=out.v)
        return out

    def rotate_x(self, angle: float, out: Optional["Vector3"] = None) -> "Vector3":
        return self.apply(rotation_x(angle), out)

    def rotate_y(self, angle: float, out: Optional["Vector3"] = None) -> "Vector3":
        return self.apply(rotation_y(angle), out)


class Matrix3:
    __slots__ = ("m",)

    def __init__(self):
        self.m = np.eye(3, dtype=np.float64)

    def __repr__(self) -> str:
        rows = ", ".join(str(tuple(float(c) for c in row)) for row in self.m)
        return f"Matrix3({rows})"

    def clone(self) -> "Matrix3":
        out = Matrix3()
        out.m[:] = self.m
        return out

    def clear(self) -> "Matrix3":
        self.m[:] = np.eye(3)
        return self

    def apply(self, mat: "Matrix3", out: Optional["Matrix3"] = None) -> "Matrix3":
        return mat_mul(self, mat, self if out is None else out)

    def rotate_x(self, angle: float, out: Optional["Matrix3"] = None) -> "Matrix3":
        return self.apply(rotation_x(angle), out)

    def rotate_y(self, angle: float, out: Optional["Matrix3"] = None) -> "Matrix3":
        return self.apply(rotation_y(angle), out)

    def is_identity(self, tol: float = 1e-9) -> bool:
        return bool(np.allclose(self.m, np.eye(3), atol=tol, rtol=0.0))


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vector3:
    return Vector3(x, y, z)


def mat3() -> Matrix3:
    return Matrix3()

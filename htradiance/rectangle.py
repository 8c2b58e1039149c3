"""A 2D rectangle placed and oriented in 3D space."""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = ["Rectangle"]

Vec3 = tuple[float, float, float]


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _normalize(v: Vec3) -> Vec3 | None:
    length = math.sqrt(_dot(v, v))
    if not length > 0:
        return None
    return (v[0] / length, v[1] / length, v[2] / length)


def _vec3(name: str, value: Sequence[float]) -> Vec3:
    if len(value) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(value)}")
    return (float(value[0]), float(value[1]), float(value[2]))


class Rectangle:
    """Rectangle centred on ``position`` whose normal points toward ``target``.

    ``size`` is the extent along the local X and Y axes; ``up`` is a vector
    orthogonal to the local X axis.
    """

    def __init__(
        self,
        size: Sequence[float],
        position: Sequence[float],
        target: Sequence[float],
        up: Sequence[float],
    ) -> None:
        if len(size) != 2:
            raise ValueError(f"size must have 2 components, got {len(size)}")
        sz = (float(size[0]), float(size[1]))
        pos = _vec3("position", position)
        tgt = _vec3("target", target)
        up_ = _vec3("up", up)

        if sz[0] <= 0 or sz[1] <= 0:
            raise ValueError(
                f"invalid rectangle size `{sz[0]:g} {sz[1]:g}'. It must be strictly positive"
            )

        z = _normalize(_sub(tgt, pos))
        x = _normalize(_cross(z, up_)) if z else None
        y = _normalize(_cross(z, x)) if x else None
        if z is None or x is None or y is None:
            raise ValueError(
                "invalid rectangle frame: "
                f"position = {pos[0]:g} {pos[1]:g} {pos[2]:g}, "
                f"target = {tgt[0]:g} {tgt[1]:g} {tgt[2]:g}, "
                f"up = {up_[0]:g} {up_[1]:g} {up_[2]:g}"
            )

        self._x = x
        self._y = y
        self._normal = z
        self._position = pos
        self._size = sz
        self._axis_x = tuple(c * sz[0] * 0.5 for c in x)
        self._axis_y = tuple(c * sz[1] * 0.5 for c in y)

        # World to local translation: transposed rotation applied to -position
        self._inv_translation = (
            -_dot(x, pos),
            -_dot(y, pos),
            -_dot(z, pos),
        )

    @property
    def normal(self) -> Vec3:
        return self._normal

    @property
    def center(self) -> Vec3:
        return self._position

    @property
    def size(self) -> tuple[float, float]:
        return self._size

    @property
    def transform(self) -> tuple[float, ...]:
        """Local to world affine matrix: X, Y, Z axes then translation (12 values)."""
        return (*self._x, *self._y, *self._normal, *self._position)

    @property
    def transform_inverse(self) -> tuple[float, ...]:
        """World to local affine matrix, laid out like ``transform``."""
        x, y, z = self._x, self._y, self._normal
        return (
            x[0], y[0], z[0],
            x[1], y[1], z[1],
            x[2], y[2], z[2],
            *self._inv_translation,
        )

    def sample_pos(self, sample: Sequence[float]) -> Vec3:
        """World position of the canonical sample in [0, 1[² on the rectangle."""
        sx = sample[0] * 2.0 - 1.0
        sy = sample[1] * 2.0 - 1.0
        p, ax, ay = self._position, self._axis_x, self._axis_y
        return (
            p[0] + ax[0] * sx + ay[0] * sy,
            p[1] + ax[1] * sx + ay[1] * sy,
            p[2] + ax[2] * sx + ay[2] * sy,
        )

    def world_to_local(self, point: Sequence[float]) -> Vec3:
        """Express a world space point in the rectangle frame."""
        p = _vec3("point", point)
        t = self._inv_translation
        return (
            _dot(self._x, p) + t[0],
            _dot(self._y, p) + t[1],
            _dot(self._normal, p) + t[2],
        )

    def local_to_world(self, point: Sequence[float]) -> Vec3:
        """Express a point of the rectangle frame in world space."""
        q = _vec3("point", point)
        x, y, z, p = self._x, self._y, self._normal, self._position
        return (
            x[0] * q[0] + y[0] * q[1] + z[0] * q[2] + p[0],
            x[1] * q[0] + y[1] * q[1] + z[1] * q[2] + p[1],
            x[2] * q[0] + y[2] * q[1] + z[2] * q[2] + p[2],
        )
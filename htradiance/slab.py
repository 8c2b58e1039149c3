"""Ray traversal of a slab made of one cell infinitely repeated along X and Y."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

__all__ = ["TraceCell", "trace_ray"]

# Called with the ray origin in the cell's local space, the ray direction and
# the ray range; returns whether something was hit.
TraceCell = Callable[
    [tuple[float, float, float], tuple[float, float, float], tuple[float, float]], bool
]


def _div(num: float, den: float) -> float:
    """IEEE-754 division: infinities and NaN instead of ZeroDivisionError."""
    if den != 0.0:
        return num / den
    if num == 0.0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def trace_ray(
    origin: Sequence[float],
    direction: Sequence[float],
    ray_range: Sequence[float],
    cell_low: Sequence[float],
    cell_upp: Sequence[float],
    trace_cell: TraceCell,
    max_steps: int,
) -> bool:
    """Trace a ray through the repeated cells of the slab.

    ``trace_cell`` is called for each traversed cell, at most ``max_steps``
    times, with the ray origin moved into the reference cell. Returns True as
    soon as it reports a hit, False otherwise.
    """
    org = tuple(float(x) for x in origin)
    dir_ = tuple(float(x) for x in direction)
    rng = (float(ray_range[0]), float(ray_range[1]))
    low = tuple(float(x) for x in cell_low)
    upp = tuple(float(x) for x in cell_upp)
    if not rng[0] < rng[1]:
        raise ValueError(f"invalid ray range [{rng[0]}, {rng[1]}]")

    # Check that the ray intersects the slab
    t_min_z = _div(low[2] - org[2], dir_[2])
    t_max_z = _div(upp[2] - org[2], dir_[2])
    if t_min_z > t_max_z:
        t_min_z, t_max_z = t_max_z, t_min_z
    t_min_z = t_min_z if t_min_z > rng[0] else rng[0]
    t_max_z = t_max_z if t_max_z < rng[1] else rng[1]
    if t_min_z > t_max_z:
        return False

    cell_sz = [upp[i] - low[i] for i in range(3)]

    # 2D index of the repeated cell entered first; (0, 0) is the reference cell
    xy = [
        math.floor((org[i] + t_min_z * dir_[i] - low[i]) / cell_sz[i])
        for i in range(2)
    ]
    incr = [-1 if dir_[i] < 0 else 1 for i in range(2)]

    t_max = [0.0, 0.0, t_max_z]
    t_delta = [0.0, 0.0]
    for i in range(2):
        cell_low_ws = low[i] + xy[i] * cell_sz[i]
        bound = cell_low_ws if dir_[i] < 0 else cell_low_ws + cell_sz[i]
        t_max[i] = _div(bound - org[i], dir_[i])
        t_delta[i] = _div(-cell_sz[i] if dir_[i] < 0 else cell_sz[i], dir_[i])

    for _ in range(max_steps):
        org_cs = (
            org[0] - xy[0] * cell_sz[0],
            org[1] - xy[1] * cell_sz[1],
            org[2],
        )
        if trace_cell(org_cs, dir_, rng):
            return True

        if t_max[0] < t_max[1]:
            iaxis = 0 if t_max[0] < t_max[2] else 2
        else:
            iaxis = 1 if t_max[1] < t_max[2] else 2

        if iaxis == 2:
            break  # The ray leaves the slab
        if t_max[iaxis] >= rng[1]:
            break  # Out of range

        t_max[iaxis] += t_delta[iaxis]
        xy[iaxis] += incr[iaxis]

    return False
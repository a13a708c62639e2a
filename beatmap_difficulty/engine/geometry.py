from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .constants import ANGLE_METHOD_ACOS, ANGLE_METHOD_ATAN2, DEGENERATE_ANGLE

Vector = Tuple[float, float]


def subtract(a: Vector, b: Vector) -> Vector:
    return (a[0] - b[0], a[1] - b[1])


def length(v: Vector) -> float:
    return math.hypot(v[0], v[1])


def distance(a: Vector, b: Vector) -> float:
    return length(subtract(b, a))


def _lerp(a: Vector, b: Vector, t: float) -> Vector:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def angle_between_atan2(v1: Vector, v2: Vector) -> float:
    """Unsigned angle in degrees from the difference of the two headings."""
    angle = math.degrees(abs(math.atan2(v2[1], v2[0]) - math.atan2(v1[1], v1[0])))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def angle_between_acos(v1: Vector, v2: Vector) -> float:
    """Unsigned angle in degrees from the normalised dot product."""
    ratio = (v1[0] * v2[0] + v1[1] * v2[1]) / (length(v1) * length(v2))
    # Rounding can push the ratio just outside [-1, 1].
    ratio = max(-1.0, min(1.0, ratio))
    return math.degrees(math.acos(ratio))


_ANGLE_FUNCTIONS = {
    ANGLE_METHOD_ATAN2: angle_between_atan2,
    ANGLE_METHOD_ACOS: angle_between_acos,
}


def jump_angle(
    current: Vector,
    previous: Vector,
    previous_previous: Vector,
    min_leg_length: float,
    method: str = ANGLE_METHOD_ATAN2,
) -> float:
    """
    Inner angle at ``previous`` of the triangle formed by three positions.

    Returns ``DEGENERATE_ANGLE`` when the incoming leg is shorter than
    ``min_leg_length`` (treated as a stack) or the outgoing leg has no length.
    """
    try:
        angle_fn = _ANGLE_FUNCTIONS[method]
    except KeyError as exc:
        raise ValueError(f"Unknown angle method: {method}") from exc

    v1 = subtract(previous_previous, previous)
    v2 = subtract(current, previous)
    if length(v1) < min_leg_length or length(v2) == 0.0:
        return DEGENERATE_ANGLE
    return angle_fn(v1, v2)


@dataclass
class Polyline:
    """Arc-length aware polyline used as a slider path."""

    points: Sequence[Vector]
    cumulative_lengths: Sequence[float]
    length: float

    @classmethod
    def from_points(cls, points: Iterable[Vector]) -> "Polyline":
        pts: List[Vector] = [(float(p[0]), float(p[1])) for p in points]
        if len(pts) < 2:
            raise ValueError("Polyline requires at least two points")

        cumulative: List[float] = [0.0]

        for idx in range(1, len(pts)):
            cumulative.append(cumulative[-1] + distance(pts[idx - 1], pts[idx]))

        return cls(points=tuple(pts), cumulative_lengths=tuple(cumulative), length=cumulative[-1])

    def position_at(self, distance: float) -> Vector:
        """Returns the coordinate at a distance along the polyline."""
        if distance <= 0:
            return self.points[0]
        if distance >= self.length:
            return self.points[-1]

        idx, t = self._segment_parameters(distance)
        return _lerp(self.points[idx - 1], self.points[idx], t)

    def position_at_progress(self, progress: float) -> Vector:
        """Returns the coordinate at a fraction (0..1) of the total length."""
        return self.position_at(progress * self.length)

    def _segment_parameters(self, distance: float) -> Tuple[int, float]:
        """Return segment index and interpolation factor for a given distance."""
        lo = 0
        hi = len(self.cumulative_lengths) - 1

        while lo < hi:
            mid = (lo + hi) // 2
            if self.cumulative_lengths[mid] < distance:
                lo = mid + 1
            else:
                hi = mid

        idx = max(1, lo)
        prev_dist = self.cumulative_lengths[idx - 1]
        seg_length = self.cumulative_lengths[idx] - prev_dist
        if seg_length == 0.0:
            return idx, 0.0

        t = (distance - prev_dist) / seg_length
        return idx, max(0.0, min(1.0, t))

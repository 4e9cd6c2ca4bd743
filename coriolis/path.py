"""
Great-circle polylines and arc-length lookup.

A path is built by recursive midpoint bisection between two unit vectors and
compiled into chord segments with running start/end distances, so that a
normalized travel fraction maps to a position by a linear scan.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .linalg import Vector3
from .point import Point, clone_point, midpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    a: Point
    b: Point
    length: float
    start: float
    end: float


class Path:
    def __init__(self, points: Sequence[Point]):
        if len(points) < 2:
            raise ValueError(f"A path needs at least 2 points, got {len(points)}")
        self.points: List[Point] = list(points)
        self.segments: List[Segment] = []
        self.total_length = 0.0
        self.recompile()

    def __repr__(self) -> str:
        return f"Path(points={len(self.points)}, total_length={self.total_length:.6f})"

    def recompile(self) -> "Path":
        """Rebuild segments from the current point positions."""
        segments: List[Segment] = []
        total = 0.0
        for a, b in zip(self.points, self.points[1:]):
            start = total
            distance = a.position.distance_to(b.position)
            total += distance
            segments.append(Segment(a=a, b=b, length=distance, start=start, end=total))
        self.segments = segments
        self.total_length = total
        return self


def compile_path(points: Sequence[Point]) -> Path:
    return Path(points)


def _subdivision_depth(depth: int) -> int:
    depth = int(depth)
    if depth < 0:
        logger.debug("Negative subdivision depth %d clamped to 0", depth)
        return 0
    return depth


def build_great_circle_path(a: Point, b: Point, depth: int) -> Path:
    depth = _subdivision_depth(depth)
    a = clone_point(a)
    b = clone_point(b)

    points: List[Point] = [a]

    def add_middle(p: Point, q: Point, remaining: int) -> None:
        if remaining <= 0:
            return
        m = midpoint(p, q)
        add_middle(p, m, remaining - 1)
        points.append(m)
        add_middle(m, q, remaining - 1)

    add_middle(a, b, depth)
    points.append(b)

    path = Path(points)
    logger.debug("Built great-circle path: depth=%d points=%d length=%.6f", depth, len(points), path.total_length)
    return path


def point_at_fraction(path: Path, fraction: float, out: Optional[Vector3] = None) -> Optional[Vector3]:
    """Position at ``fraction`` of the path's total length.

    The first segment whose [start, end] interval contains the target length
    wins, so a fraction landing exactly on a joint resolves to the earlier
    segment's end. Fractions outside [0, 1] match nothing: ``out`` is left
    untouched and None is returned.
    """
    fraction = float(fraction)
    if not 0.0 <= fraction <= 1.0:
        return None

    traveled = fraction * path.total_length
    if math.isnan(traveled):
        return None
    for seg in path.segments:
        if traveled < seg.start or traveled > seg.end:
            continue
        p = (traveled - seg.start) / seg.length if seg.length > 0.0 else 0.0
        if out is None:
            out = Vector3()
        return seg.a.position.mix(seg.b.position, p, out)

    return None

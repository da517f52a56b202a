# core/aabb.py
import math
from typing import Optional, Tuple
from pathtracer.core.vector import Vector3


def _reciprocal(d: float) -> float:
    # Python raises on x / 0.0; produce the IEEE 754 result instead.
    if d == 0.0:
        return math.copysign(math.inf, d)
    return 1.0 / d


class AABB:
    """
    Axis-aligned bounding box given by its minimum and maximum corners.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def hit(self, ray, t_min: float, t_max: float) -> Optional[Tuple[float, float]]:
        """
        Slab test. Returns the refined (t_min, t_max) interval in which the
        ray is inside the box, or None if the ray misses it.
        """
        origin = ray.origin
        direction = ray.direction
        for a in range(3):
            inv_d = _reciprocal(direction[a])
            t0 = (self.minimum[a] - origin[a]) * inv_d
            t1 = (self.maximum[a] - origin[a]) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            # NaN (0 * inf) compares false and leaves the bound unchanged.
            t_min = t0 if t0 > t_min else t_min
            t_max = t1 if t1 < t_max else t_max
            if t_max < t_min:
                return None
        return t_min, t_max

    def translate(self, offset: Vector3) -> "AABB":
        return AABB(self.minimum + offset, self.maximum + offset)

    def extent(self) -> Vector3:
        return self.maximum - self.minimum

    def longest_axis(self) -> int:
        d = self.extent()
        axis = 0
        if d.y > d[axis]:
            axis = 1
        if d.z > d[axis]:
            axis = 2
        return axis

    def contains(self, other: "AABB") -> bool:
        return all(self.minimum[a] <= other.minimum[a] and other.maximum[a] <= self.maximum[a]
                   for a in range(3))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __getstate__(self):
        return (self.minimum, self.maximum)

    def __setstate__(self, state):
        self.minimum, self.maximum = state

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

    @staticmethod
    def merge(box0: "AABB", box1: "AABB") -> "AABB":
        return AABB(box0.minimum.minimum(box1.minimum), box0.maximum.maximum(box1.maximum))

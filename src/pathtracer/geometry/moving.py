# geometry/moving.py
from typing import Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class LinearMove(Hittable):
    """
    Moves a wrapped object with constant velocity over the exposure, giving
    motion blur. The object sits at its own position at time 0.
    """
    def __init__(self, obj: Hittable, velocity: Vector3):
        self.object = obj
        self.velocity = velocity

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        # Moving the ray backwards is the same as moving the object forwards.
        shifted = Ray(ray.origin - self.velocity * ray.time, ray.direction, ray.time)
        rec = self.object.hit(shifted, t_min, t_max, rng)
        if rec is not None:
            rec.p = ray.at(rec.t)
        return rec

    def bounding_box(self, exposure: Tuple[float, float]) -> AABB:
        box = self.object.bounding_box(exposure)
        start, end = exposure
        return AABB.merge(box.translate(self.velocity * start),
                          box.translate(self.velocity * end))

# geometry/medium.py
import math
from typing import Optional, Tuple
from pathtracer.config import EPSILON
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource
from pathtracer.geometry.hittable import Hittable, HitRecord


class ConstantMedium(Hittable):
    """
    Homogeneous participating medium (fog, smoke) filling a closed boundary.

    A ray entering the boundary travels an exponentially distributed distance
    before it scatters; if it leaves the boundary first, the medium is missed.
    """
    def __init__(self, boundary: Hittable, phase_function, density: float):
        if density <= 0:
            raise ValueError(f"Medium density must be positive, got {density}")
        self.boundary = boundary
        self.phase_function = phase_function
        self.neg_inv_density = -1.0 / density

    def hit(self, ray: Ray, t_min: float, t_max: float, rng: RandomSource) -> Optional[HitRecord]:
        entry = self.boundary.hit(ray, -math.inf, math.inf, rng)
        if entry is None:
            return None
        exit_ = self.boundary.hit(ray, entry.t + EPSILON, math.inf, rng)
        if exit_ is None:
            return None

        t_enter = max(entry.t, t_min)
        t_exit = min(exit_.t, t_max)
        if t_enter >= t_exit:
            return None

        ray_length = ray.direction.length()
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        # 1 - u keeps the argument in (0, 1] so the log is finite.
        hit_distance = self.neg_inv_density * math.log(1.0 - rng())
        if hit_distance > distance_inside_boundary:
            return None

        t = t_enter + hit_distance / ray_length
        # Normal and uv are placeholders; isotropic scattering ignores them.
        return HitRecord(t=t, p=ray.at(t), normal=entry.normal, uv=entry.uv,
                         front_face=entry.front_face, material=self.phase_function)

    def bounding_box(self, exposure: Tuple[float, float]) -> AABB:
        return self.boundary.bounding_box(exposure)

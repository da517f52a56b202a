# geometry/hittable.py
import math
from typing import Optional, Tuple
from pathtracer.config import EPSILON
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource
from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3


class HitRecord:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("t", "p", "normal", "uv", "front_face", "material")

    def __init__(self, t: float = 0.0, p: Vector3 = None, normal: Vector3 = None,
                 uv: UV = None, front_face: bool = True, material=None):
        self.t = t                      # Ray parameter at intersection
        self.p = p                      # Intersection point
        self.normal = normal            # Unit normal, facing against the ray
        self.uv = uv if uv is not None else UV(0.0, 0.0)
        self.front_face = front_face    # Whether the ray hit the outside
        self.material = material

    @classmethod
    def from_ray(cls, ray: Ray, t: float, outward_normal: Vector3, uv: UV, material) -> "HitRecord":
        rec = cls(t=t, p=ray.at(t), uv=uv, material=material)
        rec.set_face_normal(ray, outward_normal.normalize())
        return rec

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Ensures that the normal always points against the ray.
        """
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    `rng` is a zero-argument callable returning a uniform float in [0, 1);
    only stochastic surfaces (participating media) consume it.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float, rng: RandomSource) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, exposure: Tuple[float, float]) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")

    def trace(self, ray: Ray, rng: RandomSource) -> Optional[HitRecord]:
        """Nearest hit past the self-intersection offset."""
        return self.hit(ray, EPSILON, math.inf, rng)

# geometry/sphere.py
import math
from typing import Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


def sphere_uv(n: Vector3) -> UV:
    """
    Spherical coordinates of a unit outward normal mapped into [0,1]x[0,1].
    u wraps around the y axis starting at -x, v runs from the -y pole to +y.
    """
    u = (math.atan2(-n.z, n.x) + math.pi) / (2 * math.pi)
    v = math.acos(max(-1.0, min(1.0, -n.y))) / math.pi
    return UV(u, v)


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrt_disc) / a
            if root < t_min or root > t_max:
                return None

        p = ray.at(root)
        outward_normal = ((p - self.center) / self.radius).normalize()
        rec = HitRecord(t=root, p=p, uv=sphere_uv(outward_normal), material=self.material)
        rec.set_face_normal(ray, outward_normal)
        return rec

    def bounding_box(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> AABB:
        # The bounding box of a sphere is center ± radius
        offset = Vector3(self.radius, self.radius, self.radius)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"

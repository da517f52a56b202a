# geometry/triangle.py
from typing import Optional, Tuple
from pathtracer.config import EPSILON
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Triangle(Hittable):
    """
    A triangle with per-vertex normals, interpolated across the face for
    smooth shading. Without normals the flat face normal is used at every
    vertex.
    """
    def __init__(self,
                 v0: Vector3, v1: Vector3, v2: Vector3,
                 material,
                 n0: Optional[Vector3] = None, n1: Optional[Vector3] = None, n2: Optional[Vector3] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material

        if n0 is None or n1 is None or n2 is None:
            face_normal = (v1 - v0).cross(v2 - v0).normalize()
            self.n0 = self.n1 = self.n2 = face_normal
        else:
            self.n0 = n0
            self.n1 = n1
            self.n2 = n2

    def get_normal(self, u: float, v: float) -> Vector3:
        """Interpolate normal at the given barycentric coordinates."""
        w = 1.0 - u - v
        return self.n0 * w + self.n1 * u + self.n2 * v

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        # Möller–Trumbore intersection algorithm
        edge1 = self.v1 - self.v0
        edge2 = self.v2 - self.v0
        h = ray.direction.cross(edge2)
        a = edge1.dot(h)

        # Ray is (nearly) parallel to the triangle plane
        if -EPSILON / 2 < a < EPSILON / 2:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(edge1)
        v = f * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * edge2.dot(q)
        if t < t_min or t > t_max:
            return None

        return HitRecord.from_ray(ray, t, self.get_normal(u, v), UV(u, v), self.material)

    def bounding_box(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> AABB:
        # Pad so that axis-aligned triangles still have a box with volume
        offset = Vector3.splat(EPSILON / 2)
        lo = self.v0.minimum(self.v1).minimum(self.v2)
        hi = self.v0.maximum(self.v1).maximum(self.v2)
        return AABB(lo - offset, hi + offset)

    def __repr__(self) -> str:
        return f"Triangle({self.v0!r}, {self.v1!r}, {self.v2!r})"

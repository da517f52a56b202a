# camera/camera.py
import math
from typing import Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource, random_in_unit_disk
from pathtracer.core.vector import Vector3


class Camera:
    """
    Thin-lens camera looking from `lookfrom` towards `lookat`.

    `vfov` is the vertical field of view in degrees, `focal_length` the
    distance to the plane in perfect focus and `aperture` the lens diameter.
    Rays carry a time sampled uniformly from the exposure interval.
    """
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, focal_length: float = 1.0,
                 aperture: float = 0.0, exposure: Tuple[float, float] = (0.0, 1.0)):
        w = lookfrom - lookat
        if w.near_zero():
            raise ValueError("Camera lookfrom and lookat must differ.")
        self.w = w.normalize()
        self.u = vup.cross(self.w).normalize()
        if self.u.near_zero():
            raise ValueError("Camera up vector is parallel to the view direction.")
        self.v = self.w.cross(self.u)

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        self.origin = lookfrom
        self.horizontal = self.u * (focal_length * viewport_width)
        self.vertical = self.v * (focal_length * viewport_height)
        self.lower_left_corner = (self.origin
                                  - (self.horizontal + self.vertical) / 2.0
                                  - self.w * focal_length)
        self.lens_radius = aperture / 2.0
        self.exposure = exposure

    def get_ray(self, s: float, t: float, rng: RandomSource) -> Ray:
        """Ray through the normalized image-plane point (s, t) with depth of field."""
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y
        origin = self.origin + offset
        direction = (self.lower_left_corner
                     + self.horizontal * s
                     + self.vertical * t
                     - origin)
        start, end = self.exposure
        return Ray(origin, direction, start + (end - start) * rng())

# materials/isotropic.py
from typing import Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource, random_in_unit_sphere
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material


class Isotropic(Material):
    """Phase function of a participating medium: scatters uniformly in all directions."""
    def __init__(self, albedo: Vector3):
        self.albedo = albedo

    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> Tuple[Ray, Vector3]:
        return Ray(rec.p, random_in_unit_sphere(rng), ray_in.time), self.albedo

# materials/metal.py
from typing import Optional, Tuple, Union
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource, random_in_unit_sphere, reflect
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.
    `fuzz` in [0, 1] blurs the mirror reflection.
    """
    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        self.texture = as_texture(albedo)
        self.fuzz = min(max(fuzz, 0.0), 1.0)

    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> Optional[Tuple[Ray, Vector3]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        direction = reflected + random_in_unit_sphere(rng) * self.fuzz
        if direction.near_zero():
            direction = reflected

        # Absorb the ray if the fuzz pushed it below the surface
        if direction.dot(rec.normal) < 0:
            return None

        scattered = Ray(rec.p, direction.normalize(), ray_in.time)
        return scattered, self.texture.sample(rec.uv, rec.p)

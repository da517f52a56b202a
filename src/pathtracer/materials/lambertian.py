# materials/lambertian.py
from typing import Tuple, Union
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource, random_in_unit_sphere
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Lambertian(Material):
    """
    Lambertian diffuse material with optional texture support.
    """
    def __init__(self, albedo: Union[Vector3, Texture]):
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> Tuple[Ray, Vector3]:
        """
        Scatter a ray according to a Lambertian reflection model.
        Returns (scattered_ray, attenuation).
        """
        # Normal plus a random offset approximates a cosine-weighted lobe.
        scatter_direction = rec.normal + random_in_unit_sphere(rng)

        # If scatter_direction is degenerate (very small), just use the normal.
        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        scattered = Ray(rec.p, scatter_direction, ray_in.time)
        attenuation = self.texture.sample(rec.uv, rec.p)
        return scattered, attenuation

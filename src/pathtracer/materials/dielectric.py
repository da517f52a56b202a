# materials/dielectric.py
from typing import Tuple, Union
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource, random_in_unit_sphere, reflect, refract, schlick
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Dielectric(Material):
    """
    Clear (or tinted) refractive material such as glass or water.

    Reflection versus refraction is chosen stochastically with Schlick's
    approximation of the Fresnel reflectance, and always on total internal
    reflection.
    """
    def __init__(self, ref_idx: float, albedo: Union[Vector3, Texture] = Vector3(1.0, 1.0, 1.0),
                 fuzz: float = 0.0):
        self.ref_idx = ref_idx
        self.texture = as_texture(albedo)
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> Tuple[Ray, Vector3]:
        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()
        n = rec.normal.normalize()
        cos_theta = min(-unit_direction.dot(n), 1.0)

        direction = refract(unit_direction, n, ni_over_nt)
        if direction is None or schlick(cos_theta, ni_over_nt) >= rng():
            direction = reflect(unit_direction, n)

        direction = direction + random_in_unit_sphere(rng) * self.fuzz
        if direction.near_zero():
            direction = rec.normal

        scattered = Ray(rec.p, direction.normalize(), ray_in.time)
        return scattered, self.texture.sample(rec.uv, rec.p)

# materials/diffuse_light.py
from typing import Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    The texture can be used to create patterns in the emitted light.
    """
    def __init__(self, emit: Union[Vector3, Texture], intensity: float = 1.0):
        self.texture = as_texture(emit)
        self.intensity = intensity

    def scatter(self, ray_in: Ray, rec, rng) -> None:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, rec) -> Vector3:
        """
        Return the emitted radiance: intensity times the texture at the hit.
        """
        return self.texture.sample(rec.uv, rec.p) * self.intensity

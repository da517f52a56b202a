# materials/material.py
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource
from pathtracer.core.vector import Vector3

BLACK = Vector3(0.0, 0.0, 0.0)


class Material:
    """
    Abstract material class. Subclasses implement scatter() and, if they
    glow, emitted(). Materials are immutable and shared between objects.
    """
    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, rec) -> Vector3:
        """Radiance emitted at the hit point; black unless overridden."""
        return BLACK


class Empty(Material):
    """
    Absorbs everything and emits nothing. Used on shapes that only serve as
    the boundary of a participating medium.
    """
    def scatter(self, ray_in: Ray, rec, rng: RandomSource) -> None:
        return None

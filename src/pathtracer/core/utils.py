# core/utils.py
import math
from typing import Callable, Optional
from pathtracer.core.vector import Vector3

# A random source: each call yields one uniform float in [0, 1).
RandomSource = Callable[[], float]


def random_in_unit_sphere(rng: RandomSource) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(2.0 * rng() - 1.0,
                    2.0 * rng() - 1.0,
                    2.0 * rng() - 1.0)
        if p.dot(p) < 1.0:
            return p


def random_in_unit_disk(rng: RandomSource) -> Vector3:
    """
    Returns a random point inside the unit disk in the z = 0 plane.
    """
    while True:
        p = Vector3(2.0 * rng() - 1.0, 2.0 * rng() - 1.0, 0.0)
        if p.dot(p) < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(v: Vector3, n: Vector3, ni_over_nt: float) -> Optional[Vector3]:
    """
    Snell refraction of v through a surface with unit normal n.
    Returns None on total internal reflection.
    """
    uv = v.normalize()
    cos_theta = uv.dot(n)
    d = 1.0 - ni_over_nt * ni_over_nt * (1.0 - cos_theta * cos_theta)
    if d > 0.0:
        return (uv - n * cos_theta) * ni_over_nt - n * math.sqrt(d)
    return None


def schlick(cos_theta: float, ref_idx: float) -> float:
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cos_theta, 5)

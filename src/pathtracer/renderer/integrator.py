# renderer/integrator.py
from typing import Callable
from pathtracer.config import MAX_BOUNCES
from pathtracer.core.ray import Ray
from pathtracer.core.utils import RandomSource
from pathtracer.core.vector import Vector3

# Maps a unit ray direction to the radiance arriving from the environment.
Background = Callable[[Vector3], Vector3]


def ray_color(ray: Ray, world, background: Background, rng: RandomSource,
              max_bounces: int = MAX_BOUNCES) -> Vector3:
    """
    Estimate the radiance carried back along `ray`.

    Follows a single light path: emission is accumulated at every hit,
    weighted by the product of attenuations so far. The path ends when it
    escapes to the background, is absorbed, or exceeds `max_bounces`. A path
    cut off by the bounce cap returns only what it gathered, without the
    background term.
    """
    radiance = Vector3(0.0, 0.0, 0.0)
    throughput = Vector3(1.0, 1.0, 1.0)
    bounces = 0

    while True:
        rec = world.trace(ray, rng)
        if rec is None:
            return radiance + throughput * background(ray.direction.normalize())

        radiance = radiance + throughput * rec.material.emitted(rec)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return radiance
        ray, attenuation = scattered
        throughput = throughput * attenuation

        bounces += 1
        if bounces > max_bounces:
            return radiance

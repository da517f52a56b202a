# renderer/env_map_utils.py
from pathtracer.core.vector import Vector3


class GradientSky:
    """
    Vertical sky gradient on the y component of the unit direction: `up`
    straight up, `down` straight down, linear in between.

    `up_scale` dims the upper color, as in the darker sky of the mesh scene.
    """
    def __init__(self, up: Vector3 = Vector3(1.0, 1.0, 1.0),
                 down: Vector3 = Vector3(0.5, 0.7, 1.0), up_scale: float = 1.0):
        self.up = up
        self.down = down
        self.up_scale = up_scale

    def __call__(self, direction: Vector3) -> Vector3:
        t = 0.5 * (direction.y + 1.0)
        return self.up * (t * self.up_scale) + self.down * (1.0 - t)


class SolidBackground:
    """The same radiance from every direction."""
    def __init__(self, color: Vector3):
        self.color = color

    def __call__(self, direction: Vector3) -> Vector3:
        return self.color

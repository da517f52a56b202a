# materials/textures.py
import math
from typing import Optional
import numpy as np
from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3
from pathtracer.materials.perlin import Perlin


class Texture:
    """Base class for all textures: a pure function of (uv, point) to color."""
    def sample(self, uv: UV, p: Vector3) -> Vector3:
        """Sample the texture at the given surface coordinates and world point."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")

    def __call__(self, uv: UV, p: Vector3) -> Vector3:
        return self.sample(uv, p)


class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        return self.color


class CheckerTexture(Texture):
    """
    A 3D checker pattern in world space, choosing between two sub-textures
    by the sign of sin(f*x) * sin(f*y) * sin(f*z).
    """
    def __init__(self, even: Texture, odd: Texture, frequency: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.frequency = frequency

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        f = self.frequency
        s = math.sin(f * p.x) * math.sin(f * p.y) * math.sin(f * p.z)
        if s < 0:
            return self.odd.sample(uv, p)
        return self.even.sample(uv, p)


class NoiseTexture(Texture):
    """Gray single-octave noise remapped into [0, 1]."""
    def __init__(self, perlin: Perlin, scale: float = 1.0):
        self.perlin = perlin
        self.scale = scale

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        return Vector3.splat(0.5 * (1.0 + self.perlin.noise(p * self.scale)))


class TurbulenceTexture(Texture):
    """Gray turbulence, i.e. summed noise octaves."""
    def __init__(self, perlin: Perlin, scale: float = 1.0, depth: int = 7):
        self.perlin = perlin
        self.scale = scale
        self.depth = depth

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        return Vector3.splat(self.perlin.turb(p * self.scale, self.depth))


class MarbleTexture(Texture):
    """Marble veins: a sine along z phase-shifted by turbulence."""
    def __init__(self, perlin: Perlin, scale: float = 4.0, turbulence: float = 10.0, depth: int = 7):
        self.perlin = perlin
        self.scale = scale
        self.turbulence = turbulence
        self.depth = depth

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        phase = self.scale * p.z + self.turbulence * self.perlin.turb(p, self.depth)
        return Vector3.splat(0.5 * (1.0 + math.sin(phase)))


class ImageTexture(Texture):
    """
    A texture backed by a decoded image, sampled at the nearest pixel.

    `data` is a (height, width, 3) float array in [0, 1] with row 0 at the
    top of the image; v = 1 maps to the top row.
    """
    def __init__(self, data: np.ndarray, name: Optional[str] = None):
        data = np.asarray(data, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] < 3 or data.shape[0] < 1 or data.shape[1] < 1:
            raise ValueError(f"Image texture needs a (height, width, 3) array, got {data.shape}")
        self.data = data[:, :, :3]
        self.height, self.width = self.data.shape[:2]
        self.name = name

    def sample(self, uv: UV, p: Vector3) -> Vector3:
        x = int(uv.u * (self.width - 1))
        y = int((1.0 - uv.v) * (self.height - 1))
        # Clamp coordinates that drift outside [0, 1]
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))


def as_texture(value) -> Texture:
    """Wrap a plain color as a SolidTexture; pass textures through."""
    if isinstance(value, Texture):
        return value
    if isinstance(value, Vector3):
        return SolidTexture(value)
    raise TypeError(f"Expected a Texture or a Vector3 color, got {type(value).__name__}")

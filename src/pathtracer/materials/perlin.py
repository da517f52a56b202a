# materials/perlin.py
import math
from typing import Optional
import numpy as np
from pathtracer.core.vector import Vector3


class Perlin:
    """
    Gradient (Perlin) noise over a lattice of random gradient vectors.

    Built once from a seed: `point_count` gradients drawn from [-1, 1]^3 and
    three independently shuffled permutation tables. The tables are never
    modified afterwards, so one generator can be shared by many textures and
    worker processes.
    """
    def __init__(self, seed: Optional[int] = None, point_count: int = 256):
        if point_count <= 0 or point_count & (point_count - 1):
            raise ValueError(f"point_count must be a power of two, got {point_count}")
        rng = np.random.default_rng(seed)
        self.point_count = point_count
        self.points = [tuple(g) for g in rng.uniform(-1.0, 1.0, size=(point_count, 3)).tolist()]
        self.perm_x = rng.permutation(point_count).tolist()
        self.perm_y = rng.permutation(point_count).tolist()
        self.perm_z = rng.permutation(point_count).tolist()

    def noise(self, p: Vector3) -> float:
        """Single-octave gradient noise at p."""
        fi, fj, fk = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fi, p.y - fj, p.z - fk
        # Smoothstep fade of the fractional offset
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)

        i, j, k = int(fi), int(fj), int(fk)
        mask = self.point_count - 1
        acc = 0.0
        for di in (0, 1):
            px = self.perm_x[(i + di) & mask]
            wx = uu if di else 1.0 - uu
            for dj in (0, 1):
                py = self.perm_y[(j + dj) & mask]
                wy = vv if dj else 1.0 - vv
                for dk in (0, 1):
                    gx, gy, gz = self.points[px ^ py ^ self.perm_z[(k + dk) & mask]]
                    wz = ww if dk else 1.0 - ww
                    # Gradient dotted with the offset from this corner to p
                    acc += wx * wy * wz * (gx * (u - di) + gy * (v - dj) + gz * (w - dk))
        return acc

    def turb(self, p: Vector3, depth: int = 7) -> float:
        """Sum of `depth` octaves at doubling frequency and halving weight."""
        acc = 0.0
        weight = 1.0
        for _ in range(depth):
            acc += weight * self.noise(p)
            weight *= 0.5
            p = p * 2.0
        return abs(acc)

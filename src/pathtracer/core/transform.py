# core/transform.py
import math
from typing import Iterable
import numpy as np
from pathtracer.core.vector import Vector3


class Transform:
    """
    A 4x4 homogeneous transform, used to place imported meshes in the world.
    """
    def __init__(self, matrix):
        self.matrix = np.asarray(matrix, dtype=np.float64).reshape(4, 4)

    @classmethod
    def identity(cls) -> "Transform":
        return cls(np.eye(4))

    @classmethod
    def translate(cls, t: Vector3) -> "Transform":
        m = np.eye(4)
        m[:3, 3] = (t.x, t.y, t.z)
        return cls(m)

    @classmethod
    def scale(cls, s: Vector3) -> "Transform":
        return cls(np.diag((s.x, s.y, s.z, 1.0)))

    @classmethod
    def rotate(cls, a: float, b: float, c: float) -> "Transform":
        """Rotation by a about z, then b about y, then c about x (radians)."""
        sa, ca = math.sin(a), math.cos(a)
        sb, cb = math.sin(b), math.cos(b)
        sc, cc = math.sin(c), math.cos(c)
        return cls([
            [ca * cb, ca * sb * sc - sa * cc, ca * sb * cc + sa * sc, 0.0],
            [sa * cb, sa * sb * sc + ca * cc, sa * sb * cc - ca * sc, 0.0],
            [-sb, cb * sc, cb * cc, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    @classmethod
    def stack(cls, transforms: Iterable["Transform"]) -> "Transform":
        m = np.eye(4)
        for t in transforms:
            m = m @ t.matrix
        return cls(m)

    def apply(self, p) -> np.ndarray:
        return self.matrix @ np.asarray(p, dtype=np.float64)

    def apply_point(self, p: Vector3) -> Vector3:
        x, y, z, w = self.apply((p.x, p.y, p.z, 1.0))
        return Vector3(float(x / w), float(y / w), float(z / w))

    def apply_normal(self, n: Vector3) -> Vector3:
        x, y, z, _ = self.apply((n.x, n.y, n.z, 0.0))
        return Vector3(float(x), float(y), float(z)).normalize()

    def __matmul__(self, other: "Transform") -> "Transform":
        return Transform(self.matrix @ other.matrix)

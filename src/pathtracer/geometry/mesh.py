# geometry/mesh.py
import logging
import os
from typing import List, Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.transform import Transform
from pathtracer.core.vector import Vector3
from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.triangle import Triangle

logger = logging.getLogger(__name__)


def _parse_index(token: str, count: int) -> int:
    idx = int(token)
    # OBJ indices are 1-based; negative indices count back from the end
    idx = idx - 1 if idx > 0 else count + idx
    if not 0 <= idx < count:
        raise IndexError(f"index {token} out of range ({count} defined)")
    return idx


def load_obj(filename: str, material, transform: Optional[Transform] = None) -> List[Triangle]:
    """
    Load the triangles of an OBJ file, transformed into world space.

    Positions go through the full homogeneous transform (with perspective
    divide), normals through the same matrix with w = 0 and are renormalized.
    Polygons are fan-triangulated. Texture coordinates are ignored; triangles
    are textured by their barycentric coordinates.
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"Mesh file not found: {filename}")
    if transform is None:
        transform = Transform.identity()

    vertices: List[Vector3] = []
    normals: List[Vector3] = []
    triangles: List[Triangle] = []
    missing_normals = False

    logger.debug("Opening file: %s", filename)
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            try:
                if values[0] == 'v':
                    p = Vector3(float(values[1]), float(values[2]), float(values[3]))
                    vertices.append(transform.apply_point(p))
                elif values[0] == 'vn':
                    n = Vector3(float(values[1]), float(values[2]), float(values[3]))
                    normals.append(transform.apply_normal(n))
                elif values[0] == 'f':
                    corners: List[Tuple[int, Optional[int]]] = []
                    for vertex_str in values[1:]:
                        indices = vertex_str.split('/')
                        v_idx = _parse_index(indices[0], len(vertices))
                        n_idx = None
                        if len(indices) > 2 and indices[2]:
                            n_idx = _parse_index(indices[2], len(normals))
                        corners.append((v_idx, n_idx))
                    if len(corners) < 3:
                        raise ValueError("face with fewer than 3 vertices")

                    for i in range(1, len(corners) - 1):
                        (a, na), (b, nb), (c, nc) = corners[0], corners[i], corners[i + 1]
                        if na is not None and nb is not None and nc is not None:
                            triangles.append(Triangle(vertices[a], vertices[b], vertices[c], material,
                                                      normals[na], normals[nb], normals[nc]))
                        else:
                            missing_normals = True
                            triangles.append(Triangle(vertices[a], vertices[b], vertices[c], material))
            except (IndexError, ValueError) as e:
                raise ValueError(f"{filename}:{line_num}: cannot parse {line.strip()!r}: {e}") from e

    if missing_normals:
        logger.warning("No normals found for some faces in %s; using flat face normals", filename)
    logger.info("Loaded %s: %d vertices, %d normals, %d triangles",
                filename, len(vertices), len(normals), len(triangles))
    return triangles


class Mesh(Hittable):
    """A triangle mesh kept in its own BVH, so it can act as a single object."""
    def __init__(self, triangles: List[Triangle], exposure: Tuple[float, float] = (0.0, 1.0)):
        self.triangles = triangles
        self.bvh = BVHNode(triangles, exposure)

    @classmethod
    def load(cls, filename: str, material, transform: Optional[Transform] = None,
             exposure: Tuple[float, float] = (0.0, 1.0)) -> "Mesh":
        return cls(load_obj(filename, material, transform), exposure)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        return self.bvh.hit(ray, t_min, t_max, rng)

    def bounding_box(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> AABB:
        return self.bvh.box

# geometry/bvh.py
import logging
from typing import List, Optional, Sequence, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


def _centroid_key(box: AABB, axis: int) -> float:
    # Sum rather than mean: only the ordering matters.
    return box.minimum[axis] + box.maximum[axis]


class BVHNode(Hittable):
    """
    Median-split bounding volume hierarchy over a set of hittables.

    A node is either a leaf owning a single object or an inner node with two
    children. The tree is immutable once built and safe to share between
    concurrent readers.
    """
    def __init__(self, objects: Sequence[Hittable], exposure: Tuple[float, float] = (0.0, 1.0)):
        if len(objects) == 0:
            raise ValueError("Cannot construct BVH with zero objects.")

        if len(objects) == 1:
            self.object = objects[0]
            self.left = self.right = None
            self.box = self.object.bounding_box(exposure)
            self.is_leaf = True
            return

        boxes = [obj.bounding_box(exposure) for obj in objects]
        bounds = boxes[0]
        for box in boxes[1:]:
            bounds = AABB.merge(bounds, box)
        axis = bounds.longest_axis()

        # Stable sort keeps construction deterministic for equal keys.
        order = sorted(range(len(objects)), key=lambda i: _centroid_key(boxes[i], axis))
        ordered = [objects[i] for i in order]
        mid = len(ordered) // 2

        self.object = None
        self.left = BVHNode(ordered[:mid], exposure)
        self.right = BVHNode(ordered[mid:], exposure)
        self.box = AABB.merge(self.left.box, self.right.box)
        self.is_leaf = False

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        span = self.box.hit(ray, t_min, t_max)
        if span is None:
            return None

        if self.is_leaf:
            return self.object.hit(ray, max(span[0], t_min), min(span[1], t_max), rng)

        hit_left = self.left.hit(ray, t_min, t_max, rng)

        # Only something closer than the left hit is of interest on the right
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max, rng)

        if hit_left is not None and hit_right is not None:
            return hit_left if hit_left.t <= hit_right.t else hit_right
        return hit_left if hit_left is not None else hit_right

    def bounding_box(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> AABB:
        return self.box

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def leaves(self) -> List[Hittable]:
        """Objects in left-to-right leaf order."""
        if self.is_leaf:
            return [self.object]
        return self.left.leaves() + self.right.leaves()


def build_bvh(objects: Sequence[Hittable], exposure: Tuple[float, float] = (0.0, 1.0)) -> BVHNode:
    root = BVHNode(list(objects), exposure)
    logger.info("Built BVH over %d objects (depth %d)", len(objects), root.depth())
    return root

# geometry/world.py
from typing import Iterable, List, Optional, Tuple
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.bvh import BVHNode, build_bvh
from pathtracer.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """
    A list of Hittable objects searched linearly. `build_bvh` turns the
    collection into a BVH for rendering; the list itself stays usable as a
    brute-force reference.
    """
    def __init__(self, objects: Iterable[Hittable] = ()):
        self.objects: List[Hittable] = list(objects)

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def __len__(self) -> int:
        return len(self.objects)

    def build_bvh(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> BVHNode:
        return build_bvh(self.objects, exposure)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far, rng)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, exposure: Tuple[float, float] = (0.0, 1.0)) -> AABB:
        if not self.objects:
            raise ValueError("An empty HittableList has no bounding box.")
        box = self.objects[0].bounding_box(exposure)
        for obj in self.objects[1:]:
            box = AABB.merge(box, obj.bounding_box(exposure))
        return box

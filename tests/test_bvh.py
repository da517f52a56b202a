"""Unit tests for the bounding volume hierarchy.

The BVH must return the same nearest hit as a brute-force scan.
"""

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.bvh import BVHNode, build_bvh
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian


def random_spheres(r, count, material):
    spheres = []
    for _ in range(count):
        center = Vector3(r.uniform(-10, 10), r.uniform(-10, 10), r.uniform(-10, 10))
        spheres.append(Sphere(center, r.uniform(0.2, 1.5), material))
    return spheres


def random_unit(r):
    while True:
        v = Vector3(r.uniform(-1, 1), r.uniform(-1, 1), r.uniform(-1, 1))
        if 1e-3 < v.length_squared() <= 1.0:
            return v.normalize()


class TestConstruction:
    """Tests for building the tree."""

    def test_empty_raises(self):
        """Building over no objects is an error."""
        with pytest.raises(ValueError, match="zero objects"):
            BVHNode([])

    def test_single_object_is_leaf(self, gray):
        """One object gives a leaf with that object's box."""
        sphere = Sphere(Vector3(1.0, 2.0, 3.0), 0.5, gray)
        node = BVHNode([sphere])
        assert node.is_leaf
        assert node.box == sphere.bounding_box((0.0, 1.0))

    def test_all_objects_become_leaves(self, gray):
        """Every input object ends up in exactly one leaf."""
        spheres = random_spheres(random.Random(3), 37, gray)
        root = build_bvh(spheres)
        leaves = root.leaves()
        assert len(leaves) == len(spheres)
        assert {id(s) for s in leaves} == {id(s) for s in spheres}

    def test_tree_is_balanced(self, gray):
        """Median splits keep the depth logarithmic."""
        root = build_bvh(random_spheres(random.Random(5), 64, gray))
        assert root.depth() == 7

    def test_root_box_contains_children(self, gray):
        """Each inner box contains its children's boxes."""
        root = build_bvh(random_spheres(random.Random(9), 20, gray))

        def check(node):
            if node.is_leaf:
                return
            assert node.box.contains(node.left.box)
            assert node.box.contains(node.right.box)
            check(node.left)
            check(node.right)

        check(root)


class TestQueries:
    """The BVH agrees with a linear scan."""

    def test_matches_brute_force(self):
        """Nearest hits match a linear scan over random rays."""
        r = random.Random(2024)
        material = Lambertian(Vector3(0.5, 0.5, 0.5))
        spheres = random_spheres(r, 50, material)
        bvh = build_bvh(spheres)
        brute = HittableList(spheres)

        hits = 0
        for _ in range(300):
            origin = Vector3(r.uniform(-15, 15), r.uniform(-15, 15), r.uniform(-15, 15))
            ray = Ray(origin, random_unit(r))
            expected = brute.hit(ray, 0.001, math.inf)
            actual = bvh.hit(ray, 0.001, math.inf)
            if expected is None:
                assert actual is None
                continue
            hits += 1
            assert actual is not None
            assert actual.t == pytest.approx(expected.t)
        assert hits > 0

    def test_ray_aimed_at_each_sphere(self, gray):
        """A ray aimed at a sphere center finds that sphere or a nearer one."""
        r = random.Random(99)
        spheres = random_spheres(r, 30, gray)
        bvh = build_bvh(spheres)
        brute = HittableList(spheres)
        origin = Vector3(0.0, 0.0, -30.0)
        for sphere in spheres:
            ray = Ray(origin, sphere.center - origin)
            expected = brute.trace(ray, r.random)
            actual = bvh.trace(ray, r.random)
            assert actual is not None
            assert actual.t == pytest.approx(expected.t)

    def test_respects_t_max(self, gray):
        """Hits beyond t_max are not reported."""
        bvh = build_bvh([Sphere(Vector3(0.0, 0.0, 0.0), 1.0, gray),
                         Sphere(Vector3(5.0, 0.0, 0.0), 1.0, gray)])
        ray = Ray(Vector3(0.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
        assert bvh.hit(ray, 0.001, 3.0) is None
        assert bvh.hit(ray, 0.001, 10.0).t == pytest.approx(4.0)


class TestHittableList:
    """The linear-scan collection."""

    def test_add_and_build(self, gray):
        """Objects added to a list end up in its BVH."""
        world = HittableList()
        world.add(Sphere(Vector3(0.0, 0.0, 0.0), 1.0, gray))
        world.add(Sphere(Vector3(3.0, 0.0, 0.0), 1.0, gray))
        assert len(world) == 2
        bvh = world.build_bvh()
        assert bvh.box == world.bounding_box((0.0, 1.0))

    def test_nearest_hit_wins(self, gray):
        """Overlapping objects report the closest hit."""
        near = Sphere(Vector3(0.0, 0.0, -2.0), 0.5, gray)
        far = Sphere(Vector3(0.0, 0.0, -6.0), 0.5, gray)
        world = HittableList([far, near])
        rec = world.hit(Ray(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, -1.0)), 0.001, math.inf)
        assert rec.t == pytest.approx(1.5)

    def test_empty_list_has_no_box(self):
        """An empty list cannot be bounded."""
        with pytest.raises(ValueError):
            HittableList().bounding_box((0.0, 1.0))

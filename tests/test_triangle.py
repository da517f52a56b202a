"""Unit tests for triangle intersection."""

import math

import pytest

from helpers import assert_vec_close
from pathtracer.config import EPSILON
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.triangle import Triangle


def unit_triangle(material, normals=(None, None, None)):
    return Triangle(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0),
                    material, *normals)


DOWN = Vector3(0.0, 0.0, -1.0)


class TestTriangleIntersection:
    """Tests for Moller-Trumbore intersection."""

    def test_hit_inside(self, gray):
        """A ray straight down hits with barycentric uv and the face normal."""
        rec = unit_triangle(gray).hit(Ray(Vector3(0.2, 0.2, 1.0), DOWN), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(1.0)
        assert_vec_close(rec.p, (0.2, 0.2, 0.0))
        assert rec.uv.u == pytest.approx(0.2)
        assert rec.uv.v == pytest.approx(0.2)
        assert_vec_close(rec.normal, (0.0, 0.0, 1.0))
        assert rec.front_face

    def test_hit_from_behind(self, gray):
        """From below the normal is flipped to face the ray."""
        rec = unit_triangle(gray).hit(Ray(Vector3(0.2, 0.2, -1.0), Vector3(0.0, 0.0, 1.0)), 0.001, math.inf)
        assert_vec_close(rec.normal, (0.0, 0.0, -1.0))
        assert not rec.front_face

    def test_miss_outside_edge(self, gray):
        """A ray beyond the hypotenuse misses."""
        assert unit_triangle(gray).hit(Ray(Vector3(0.8, 0.8, 1.0), DOWN), 0.001, math.inf) is None

    def test_parallel_ray_misses(self, gray):
        """A ray in the triangle's plane direction never hits."""
        ray = Ray(Vector3(0.0, 0.0, 1.0), Vector3(1.0, 0.0, 0.0))
        assert unit_triangle(gray).hit(ray, 0.001, math.inf) is None

    def test_out_of_range(self, gray):
        """Hits outside [t_min, t_max] are rejected."""
        ray = Ray(Vector3(0.2, 0.2, 1.0), DOWN)
        assert unit_triangle(gray).hit(ray, 0.001, 0.5) is None
        assert unit_triangle(gray).hit(ray, 1.5, math.inf) is None

    def test_interpolated_normals(self, gray):
        """Vertex normals are blended barycentrically and normalized."""
        normals = (Vector3(0.0, 0.0, 1.0), Vector3(1.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0))
        rec = unit_triangle(gray, normals).hit(Ray(Vector3(0.2, 0.2, 1.0), DOWN), 0.001, math.inf)
        expected = Vector3(0.2, 0.2, 0.6).normalize()
        assert_vec_close(rec.normal, expected)


class TestTriangleBounds:
    """Tests for the triangle bounding box."""

    def test_flat_triangle_box_is_padded(self, gray):
        """An axis-aligned triangle still gets a box with thickness."""
        box = unit_triangle(gray).bounding_box((0.0, 1.0))
        assert box.minimum.z == pytest.approx(-EPSILON / 2)
        assert box.maximum.z == pytest.approx(EPSILON / 2)
        assert box.minimum.x == pytest.approx(-EPSILON / 2)
        assert box.maximum.x == pytest.approx(1.0 + EPSILON / 2)

    def test_box_hit_by_perpendicular_ray(self, gray):
        """The padded box is hit by rays crossing the triangle's plane."""
        box = unit_triangle(gray).bounding_box((0.0, 1.0))
        assert box.hit(Ray(Vector3(0.2, 0.2, 1.0), DOWN), 0.0, math.inf) is not None

"""Shared fixtures for the path tracer tests.

Every test that needs randomness draws from a seeded source so failures
reproduce exactly.
"""

import random

import pytest

from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Seeded zero-argument random source."""
    return random.Random(1234).random


@pytest.fixture
def gray():
    """A mid-gray diffuse material."""
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def make_record():
    """Build a hit record at the origin with the given normal."""

    def _make(normal, material=None, front_face=True, p=None):
        return HitRecord(
            t=1.0,
            p=p if p is not None else Vector3(0.0, 0.0, 0.0),
            normal=normal,
            uv=UV(0.5, 0.5),
            front_face=front_face,
            material=material,
        )

    return _make

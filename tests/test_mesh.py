"""Unit tests for OBJ loading and meshes."""

import logging
import math

import pytest

from helpers import assert_vec_close
from pathtracer.core.ray import Ray
from pathtracer.core.transform import Transform
from pathtracer.core.vector import Vector3
from pathtracer.geometry.mesh import Mesh, load_obj

QUAD_OBJ = """\
# unit square in the z = 0 plane
v 0 0 0
v 1 0 0
v 0 1 0
v 1 1 0
vn 0 0 1

f 1//1 2//1 3//1
f 2 4 3
"""


@pytest.fixture
def quad_file(tmp_path):
    path = tmp_path / "quad.obj"
    path.write_text(QUAD_OBJ)
    return str(path)


class TestLoadObj:
    """Parsing OBJ files into triangles."""

    def test_triangles_and_normals(self, quad_file, gray):
        """Faces with normals use them; faces without get the flat normal."""
        triangles = load_obj(quad_file, gray)
        assert len(triangles) == 2
        assert all(t.material is gray for t in triangles)
        assert_vec_close(triangles[0].n0, (0.0, 0.0, 1.0))
        assert_vec_close(triangles[1].v0, (1.0, 0.0, 0.0))
        assert_vec_close(triangles[1].n0, (0.0, 0.0, 1.0))

    def test_missing_normals_warn(self, quad_file, gray, caplog):
        """Faces without normals are reported once per mesh."""
        with caplog.at_level(logging.WARNING, logger="pathtracer.geometry.mesh"):
            load_obj(quad_file, gray)
        assert "normals" in caplog.text

    def test_polygon_is_fan_triangulated(self, tmp_path, gray):
        """A quad face becomes two triangles sharing the first corner."""
        path = tmp_path / "poly.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 1 1 0\nv 0 1 0\nf 1 2 3 4\n")
        triangles = load_obj(str(path), gray)
        assert len(triangles) == 2
        assert triangles[0].v0 == triangles[1].v0

    def test_negative_indices(self, tmp_path, gray):
        """Negative indices count back from the latest vertex."""
        path = tmp_path / "neg.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n")
        assert len(load_obj(str(path), gray)) == 1

    def test_transform_applied(self, quad_file, gray):
        """Positions and normals are moved into world space."""
        transform = Transform.stack([
            Transform.translate(Vector3(0.0, 0.0, 2.0)),
            Transform.rotate(0.0, math.pi / 2, 0.0),
        ])
        triangles = load_obj(quad_file, gray, transform)
        assert_vec_close(triangles[0].v1, (0.0, 0.0, 1.0), abs_tol=1e-9)
        assert_vec_close(triangles[0].n0, (1.0, 0.0, 0.0), abs_tol=1e-9)

    def test_missing_file(self, tmp_path, gray):
        """A missing mesh raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_obj(str(tmp_path / "missing.obj"), gray)

    @pytest.mark.parametrize(
        "text, line",
        [
            ("v 0 0 0\nv 1 0 0\nf 1 2 3\n", 3),
            ("v 0 0\n", 1),
            ("v 0 0 0\nv a 0 0\n", 2),
            ("v 0 0 0\nv 1 0 0\nf 1 2\n", 3),
        ],
    )
    def test_malformed_file(self, tmp_path, gray, text, line):
        """Parse errors name the file and line."""
        path = tmp_path / "bad.obj"
        path.write_text(text)
        with pytest.raises(ValueError, match=f"bad.obj:{line}:"):
            load_obj(str(path), gray)


class TestMesh:
    """A mesh behaves as one surface."""

    def test_hit(self, quad_file, gray):
        """Rays through the square hit the mesh."""
        mesh = Mesh.load(quad_file, gray)
        rec = mesh.hit(Ray(Vector3(0.75, 0.75, 1.0), Vector3(0.0, 0.0, -1.0)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(1.0)
        assert mesh.hit(Ray(Vector3(1.5, 0.5, 1.0), Vector3(0.0, 0.0, -1.0)), 0.001, math.inf) is None

    def test_bounding_box(self, quad_file, gray):
        """The mesh box covers all of its triangles."""
        mesh = Mesh.load(quad_file, gray)
        box = mesh.bounding_box((0.0, 1.0))
        for t in mesh.triangles:
            assert box.contains(t.bounding_box((0.0, 1.0)))

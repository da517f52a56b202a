"""Unit tests for textures and image loading."""

import numpy as np
import pytest
from PIL import Image

from helpers import assert_vec_close
from pathtracer.core.uv import UV
from pathtracer.core.vector import Vector3
from pathtracer.materials.perlin import Perlin
from pathtracer.materials.texture_loader import load_image, load_texture
from pathtracer.materials.textures import (
    CheckerTexture,
    ImageTexture,
    MarbleTexture,
    NoiseTexture,
    SolidTexture,
    TurbulenceTexture,
    as_texture,
)

RED = Vector3(1.0, 0.0, 0.0)
BLUE = Vector3(0.0, 0.0, 1.0)
ORIGIN_UV = UV(0.0, 0.0)


class TestSimpleTextures:
    """Solid and checker textures."""

    def test_solid(self):
        """A solid texture ignores its inputs."""
        tex = SolidTexture(RED)
        assert tex.sample(UV(0.3, 0.9), Vector3(5.0, -2.0, 1.0)) == RED
        assert tex(ORIGIN_UV, Vector3(0.0, 0.0, 0.0)) == RED

    def test_checker_by_world_point(self):
        """The checker picks a color by the sign of the sine product at p."""
        tex = CheckerTexture(SolidTexture(RED), SolidTexture(BLUE))
        assert tex.sample(ORIGIN_UV, Vector3(0.1, 0.1, 0.1)) == RED
        assert tex.sample(ORIGIN_UV, Vector3(-0.1, 0.1, 0.1)) == BLUE

    def test_checker_ignores_uv(self):
        """The checker is a solid pattern in world space."""
        tex = CheckerTexture(RED, BLUE)
        p = Vector3(0.1, -0.2, 0.35)
        assert tex.sample(UV(0.0, 0.0), p) == tex.sample(UV(0.9, 0.1), p)

    def test_as_texture(self):
        """Colors are wrapped, textures pass through, anything else is rejected."""
        solid = SolidTexture(RED)
        assert as_texture(solid) is solid
        assert isinstance(as_texture(BLUE), SolidTexture)
        with pytest.raises(TypeError):
            as_texture("red")


class TestNoiseTextures:
    """Textures derived from gradient noise."""

    def test_marble_in_unit_range(self):
        """Marble values stay within [0, 1] and are gray."""
        tex = MarbleTexture(Perlin(1), 4.0)
        for i in range(50):
            c = tex.sample(ORIGIN_UV, Vector3(i * 0.37, i * -0.11, i * 0.23))
            assert 0.0 <= c.x <= 1.0
            assert c.x == c.y == c.z

    def test_noise_texture_centered(self):
        """Plain noise is remapped around one half."""
        tex = NoiseTexture(Perlin(1), 1.0)
        assert tex.sample(ORIGIN_UV, Vector3(2.0, 3.0, 4.0)).x == pytest.approx(0.5)

    def test_turbulence_non_negative(self):
        """Turbulence colors are never negative."""
        tex = TurbulenceTexture(Perlin(1), 0.1, 7)
        for i in range(50):
            assert tex.sample(ORIGIN_UV, Vector3(i * 1.3, i * 0.7, -i * 0.5)).x >= 0.0


class TestImageTexture:
    """Nearest-pixel image lookup."""

    @pytest.fixture
    def two_rows(self):
        # Top row red, bottom row blue
        data = np.zeros((2, 2, 3), dtype=np.float32)
        data[0, :, 0] = 1.0
        data[1, :, 2] = 1.0
        return ImageTexture(data)

    def test_v_is_flipped(self, two_rows):
        """v = 1 is the top row of the image, v = 0 the bottom."""
        assert_vec_close(two_rows.sample(UV(0.5, 1.0), Vector3(0.0, 0.0, 0.0)), RED)
        assert_vec_close(two_rows.sample(UV(0.5, 0.0), Vector3(0.0, 0.0, 0.0)), BLUE)

    def test_out_of_range_is_clamped(self, two_rows):
        """Coordinates outside the unit square use the edge pixels."""
        assert_vec_close(two_rows.sample(UV(-0.5, -1.0), Vector3(0.0, 0.0, 0.0)), BLUE)
        assert_vec_close(two_rows.sample(UV(1.5, 2.0), Vector3(0.0, 0.0, 0.0)), RED)

    def test_rejects_bad_shape(self):
        """A flat array is not an image."""
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((4, 4)))


class TestTextureLoader:
    """Loading textures from disk through Pillow."""

    def test_load_png(self, tmp_path):
        """Pixels are scaled to [0, 1] with row 0 at the top."""
        path = tmp_path / "tex.png"
        img = Image.new("RGB", (1, 2))
        img.putpixel((0, 0), (255, 0, 0))
        img.putpixel((0, 1), (0, 0, 255))
        img.save(path)

        data = load_image(str(path))
        assert data.shape == (2, 1, 3)
        assert data[0, 0, 0] == pytest.approx(1.0)

        tex = load_texture(str(path))
        assert tex.name == "tex.png"
        assert_vec_close(tex.sample(UV(0.0, 1.0), Vector3(0.0, 0.0, 0.0)), RED)

    def test_grayscale_converted(self, tmp_path):
        """Non-RGB images are converted to three channels."""
        path = tmp_path / "gray.png"
        Image.new("L", (3, 3), color=128).save(path)
        assert load_image(str(path)).shape == (3, 3, 3)

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_image(str(tmp_path / "nope.png"))

    def test_corrupt_file(self, tmp_path):
        """A file that is not an image raises ValueError."""
        path = tmp_path / "bad.png"
        path.write_text("not an image")
        with pytest.raises(ValueError):
            load_image(str(path))

# materials/texture_loader.py
import logging
import os
import numpy as np
from PIL import Image, UnidentifiedImageError
from pathtracer.materials.textures import ImageTexture

logger = logging.getLogger(__name__)


def load_image(image_path: str) -> np.ndarray:
    """
    Decode an image file into a (height, width, 3) float32 array in [0, 1].

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image cannot be decoded
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            if img.mode != 'RGB':
                img = img.convert('RGB')
            data = np.asarray(img, dtype=np.float32) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    logger.info("Loaded texture %s (%dx%d)", image_path, data.shape[1], data.shape[0])
    return data


def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture.
    """
    return ImageTexture(load_image(image_path), name=os.path.basename(image_path))


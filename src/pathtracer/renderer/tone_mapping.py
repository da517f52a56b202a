# renderer/tone_mapping.py
import numpy as np


def gamma_quantize(linear: np.ndarray) -> np.ndarray:
    """
    Convert linear radiance to 8-bit channels with a gamma of 2 (square
    root), clamped to [0, 255]. Works on any array shape.
    """
    linear = np.nan_to_num(np.asarray(linear, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    mapped = np.sqrt(np.clip(linear, 0.0, None))
    return np.clip(np.floor(255.999 * mapped), 0, 255).astype(np.uint8)


def to_rgba_bytes(linear: np.ndarray) -> bytes:
    """
    Pack a (height, width, 3) linear image into RGBA bytes, row 0 first,
    with alpha fixed to opaque.
    """
    height, width = linear.shape[:2]
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[:, :, :3] = gamma_quantize(linear)
    rgba[:, :, 3] = 0xFF
    return rgba.tobytes()

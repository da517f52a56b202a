# renderer/image.py
import logging
import os
import random
import time
from concurrent.futures import Executor, ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, TextIO
import numpy as np
from PIL import Image as PILImage
from tqdm import tqdm
from pathtracer.camera.camera import Camera
from pathtracer.config import DEFAULT_SEED, MAX_BOUNCES
from pathtracer.core.vector import Vector3
from pathtracer.renderer.integrator import Background, ray_color
from pathtracer.renderer.tone_mapping import gamma_quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderJob:
    """Everything a worker needs to render rows of one image."""
    camera: Camera
    world: object
    background: Background
    width: int
    height: int
    samples: int
    max_bounces: int = MAX_BOUNCES
    seed: Optional[int] = DEFAULT_SEED

    def __post_init__(self):
        if self.width < 2 or self.height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {self.width}x{self.height}")
        if self.samples < 1:
            raise ValueError(f"Samples per pixel must be positive, got {self.samples}")


def row_random(seed: Optional[int], y: int, pass_index: int = 0) -> random.Random:
    """
    Independent generator for one row of one pass. Seeded generators make a
    render reproducible no matter which worker draws the row.
    """
    if seed is None:
        return random.Random()
    return random.Random(f"{seed}:{pass_index}:{y}")


def render_row(job: RenderJob, y: int, pass_index: int = 0) -> np.ndarray:
    """Average `job.samples` jittered paths for every pixel of row y (y = 0 at the bottom)."""
    rng = row_random(job.seed, y, pass_index).random
    row = np.empty((job.width, 3), dtype=np.float64)
    for x in range(job.width):
        acc = Vector3(0.0, 0.0, 0.0)
        for _ in range(job.samples):
            u = (x + rng()) / (job.width - 1)
            v = (y + rng()) / (job.height - 1)
            ray = job.camera.get_ray(u, v, rng)
            acc = acc + ray_color(ray, job.world, job.background, rng, job.max_bounces)
        row[x] = (acc.x / job.samples, acc.y / job.samples, acc.z / job.samples)
    return row


# Per-process copy of the job, installed once by the pool initializer.
_worker_job: Optional[RenderJob] = None


def _init_worker(job: RenderJob):
    global _worker_job
    _worker_job = job


def _render_row_in_worker(y: int, pass_index: int):
    return y, render_row(_worker_job, y, pass_index)


def make_executor(job: RenderJob, workers: Optional[int] = None) -> ProcessPoolExecutor:
    """Process pool whose workers each hold a read-only copy of the scene."""
    return ProcessPoolExecutor(max_workers=workers, initializer=_init_worker, initargs=(job,))


def render_pixels(job: RenderJob, executor: Optional[Executor] = None, pass_index: int = 0,
                  progress: bool = False) -> np.ndarray:
    """
    Render every row of `job` into a (height, width, 3) linear array, top row
    first. Rows are scanned bottom to top; with an executor they complete in
    any order.
    """
    pixels = np.zeros((job.height, job.width, 3), dtype=np.float64)
    rows = range(job.height - 1, -1, -1)
    with tqdm(total=job.height, desc="scanlines", unit="row", disable=not progress) as bar:
        if executor is None:
            for y in rows:
                pixels[job.height - 1 - y] = render_row(job, y, pass_index)
                bar.update(1)
        else:
            futures = [executor.submit(_render_row_in_worker, y, pass_index) for y in rows]
            for future in as_completed(futures):
                y, row = future.result()
                pixels[job.height - 1 - y] = row
                bar.update(1)
    return pixels


class Image:
    """
    A rendered image: linear radiance per pixel, stored top row first.
    """
    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels, dtype=np.float64)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected a (height, width, 3) array, got {pixels.shape}")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def cast(cls, width: int, height: int, samples: int, camera: Camera, world,
             background: Background, seed: Optional[int] = DEFAULT_SEED,
             max_bounces: int = MAX_BOUNCES, progress: bool = True) -> "Image":
        """Render on the calling thread."""
        job = RenderJob(camera, world, background, width, height, samples, max_bounces, seed)
        start = time.perf_counter()
        pixels = render_pixels(job, progress=progress)
        logger.info("Rendered %dx%d at %d spp in %.2fs", width, height, samples,
                    time.perf_counter() - start)
        return cls(pixels)

    @classmethod
    def par_cast(cls, width: int, height: int, samples: int, camera: Camera, world,
                 background: Background, seed: Optional[int] = DEFAULT_SEED,
                 max_bounces: int = MAX_BOUNCES, workers: Optional[int] = None,
                 progress: bool = True) -> "Image":
        """
        Render rows in a process pool. With the same seed the result equals
        `cast`, since every row draws from its own generator.
        """
        job = RenderJob(camera, world, background, width, height, samples, max_bounces, seed)
        start = time.perf_counter()
        with make_executor(job, workers) as executor:
            pixels = render_pixels(job, executor, progress=progress)
        logger.info("Rendered %dx%d at %d spp on %s workers in %.2fs", width, height, samples,
                    workers or os.cpu_count(), time.perf_counter() - start)
        return cls(pixels)

    def to_array(self) -> np.ndarray:
        """Gamma-corrected (height, width, 3) uint8 array."""
        return gamma_quantize(self.pixels)

    def to_ppm(self) -> str:
        lines = [f"P3 {self.width} {self.height} 255"]
        for r, g, b in self.to_array().reshape(-1, 3).tolist():
            lines.append(f"{r} {g} {b}")
        return "\n".join(lines) + "\n"

    def write_ppm(self, out: TextIO):
        out.write(self.to_ppm())

    def save(self, path: str):
        """Write a .ppm raster directly; any other format goes through Pillow."""
        if path.lower().endswith(".ppm"):
            with open(path, "w") as f:
                self.write_ppm(f)
        else:
            PILImage.fromarray(self.to_array()).save(path)
        logger.info("Saved %s", path)

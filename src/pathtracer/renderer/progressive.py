# renderer/progressive.py
import logging
import threading
from dataclasses import replace
from typing import Optional, Tuple
import numpy as np
from pathtracer.renderer.image import Image, RenderJob, make_executor, render_pixels
from pathtracer.renderer.tone_mapping import to_rgba_bytes

logger = logging.getLogger(__name__)


class ProgressiveRenderer:
    """
    Keeps refining an image one sample per pixel at a time.

    A producer thread renders full one-sample passes and folds each into a
    running per-pixel average. After every pass the average is packed into an
    RGBA frame and swapped in under a lock, so readers only ever see complete
    frames.
    """
    def __init__(self, job: RenderJob, workers: Optional[int] = 1):
        self.job = replace(job, samples=1)
        self.workers = workers
        self._average = np.zeros((job.height, job.width, 3), dtype=np.float64)
        self._passes = 0
        self._frame = to_rgba_bytes(self._average)
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.job.width, self.job.height

    @property
    def passes(self) -> int:
        with self._lock:
            return self._passes

    def _accumulate(self, layer: np.ndarray):
        s = self._passes
        average = (self._average * s + layer) / (s + 1)
        frame = to_rgba_bytes(average)
        with self._lock:
            self._average = average
            self._frame = frame
            self._passes = s + 1

    def _run(self, max_passes: Optional[int], executor):
        while not self._stop.is_set():
            if max_passes is not None and self._passes >= max_passes:
                break
            layer = render_pixels(self.job, executor, pass_index=self._passes)
            self._accumulate(layer)
            logger.debug("samples per pixel: %d", self._passes)
        logger.info("Progressive render stopped after %d samples per pixel", self._passes)

    def run_passes(self, count: int, executor=None):
        """Render `count` passes on the calling thread."""
        for _ in range(count):
            self._accumulate(render_pixels(self.job, executor, pass_index=self._passes))

    def start(self, max_passes: Optional[int] = None):
        """Start the producer thread; it runs until stop() or `max_passes`."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Progressive render already running")
        self._stop.clear()

        def target():
            if self.workers == 1:
                self._run(max_passes, None)
            else:
                with make_executor(self.job, self.workers) as executor:
                    self._run(max_passes, executor)

        self._thread = threading.Thread(target=target, name="progressive-render", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """Ask the producer to finish its current pass and wait for it."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def in_progress(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def latest_frame(self) -> Tuple[bytes, int]:
        """The most recent complete RGBA frame and how many passes it averages."""
        with self._lock:
            return self._frame, self._passes

    def image(self) -> Image:
        with self._lock:
            return Image(self._average.copy())

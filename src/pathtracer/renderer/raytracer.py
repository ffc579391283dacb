# renderer/raytracer.py
import logging
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Optional

import numpy as np
from tqdm import tqdm

from pathtracer.camera.camera import Camera
from pathtracer.config import SKY_BLUE, WHITE
from pathtracer.core.color import BLACK, Color
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable

logger = logging.getLogger(__name__)

_WHITE = Vector3(*WHITE)
_SKY_BLUE = Vector3(*SKY_BLUE)


def background(ray: Ray) -> Vector3:
    """Vertical white-to-blue gradient seen by rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    a = 0.5 * (unit_direction.y + 1.0)
    return _WHITE * (1.0 - a) + _SKY_BLUE * a


def ray_color(ray: Ray, world: Hittable, depth: int, rng) -> Vector3:
    """
    Radiance arriving along ``ray``.

    The path is truncated after ``depth`` scatters and then contributes black.
    This is a fixed cutoff, not Russian roulette, so deep paths lose their
    energy rather than being reweighted.
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray)
    if rec is None:
        return background(ray)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return BLACK
    scattered_ray, attenuation = scattered
    return attenuation * ray_color(scattered_ray, world, depth - 1, rng)


def normal_color(ray: Ray, world: Hittable) -> Vector3:
    """Debug shading: maps the surface normal at the first hit to RGB."""
    rec = world.hit(ray)
    if rec is not None:
        color = Color.maybe((rec.normal + Vector3(1.0, 1.0, 1.0)) * 0.5)
        if color is not None:
            return color
    return background(ray)


def render_row(camera: Camera, world: Hittable, j: int, seed, debug_mode: bool = False) -> np.ndarray:
    """
    Renders scanline ``j`` into a (width, 3) array of linear colors in [0, 1].

    ``seed`` is anything numpy accepts for default_rng; each row owns its
    generator so rows can be rendered in any order or process.
    """
    rng = np.random.default_rng(seed)
    row = np.empty((camera.image_width, 3), dtype=np.float64)
    samples = camera.samples_per_pixel
    for i in range(camera.image_width):
        if debug_mode:
            pixel_color = normal_color(camera.pixel_ray(i, j), world)
        else:
            pixel_color = Vector3(0.0, 0.0, 0.0)
            for _ in range(samples):
                ray = camera.get_ray(i, j, rng)
                pixel_color = pixel_color + ray_color(ray, world, camera.max_depth, rng)
            pixel_color = pixel_color / samples
        row[i] = Color.clamped(pixel_color).to_tuple()
    return row


# Per-process scene, installed once by the pool initializer.
_worker_state = {}


def _init_worker(camera: Camera, world: Hittable, debug_mode: bool):
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["debug_mode"] = debug_mode


def _render_row_in_worker(task) -> np.ndarray:
    j, seed = task
    return render_row(_worker_state["camera"], _worker_state["world"], j, seed,
                      _worker_state["debug_mode"])


class Renderer:
    """
    Drives the per-pixel sampling loop over a process pool.

    Rows are farmed out to workers and reassembled in scan order, so the
    result does not depend on the number of workers. With a fixed ``seed``
    the output is bit-for-bit reproducible.
    """
    def __init__(self, camera: Camera, world: Hittable, workers: Optional[int] = None,
                 seed: Optional[int] = None, debug_mode: bool = False, progress: bool = False):
        self.camera = camera
        self.world = world
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        self.seed = seed
        self.debug_mode = debug_mode
        self.progress = progress

    def row_seeds(self) -> list:
        return np.random.SeedSequence(self.seed).spawn(self.camera.image_height)

    def render(self) -> np.ndarray:
        """Returns a (height, width, 3) float64 array of colors in [0, 1]."""
        camera = self.camera
        width, height = camera.image_width, camera.image_height
        workers = min(self.workers, height)
        logger.info("Rendering %dx%d, %d samples/pixel, depth %d, %d worker(s)",
                    width, height, camera.samples_per_pixel, camera.max_depth, workers)

        pixels = np.empty((height, width, 3), dtype=np.float64)
        tasks = list(zip(range(height), self.row_seeds()))
        start = time.perf_counter()

        if workers == 1:
            rows = (render_row(camera, self.world, j, seed, self.debug_mode) for j, seed in tasks)
            self._collect(rows, pixels)
        else:
            with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                     initargs=(camera, self.world, self.debug_mode)) as executor:
                rows = executor.map(_render_row_in_worker, tasks)
                self._collect(rows, pixels)

        logger.info("Rendered in %.2fs", time.perf_counter() - start)
        return pixels

    def _collect(self, rows, pixels: np.ndarray):
        # Rows arrive in scan order; this loop is the join point.
        bar = tqdm(rows, total=pixels.shape[0], desc="Scanlines", unit="row",
                   file=sys.stderr, disable=not self.progress)
        for j, row in enumerate(bar):
            pixels[j] = row

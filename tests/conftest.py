"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Allow running the suite from a plain checkout.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from pathtracer.camera.camera import CameraBuilder  # noqa: E402
from pathtracer.core.vector import Vector3  # noqa: E402
from pathtracer.geometry.sphere import Sphere  # noqa: E402
from pathtracer.geometry.world import HittableList  # noqa: E402
from pathtracer.materials.lambertian import Lambertian  # noqa: E402


class ScriptedRng:
    """Stands in for a numpy Generator, replaying fixed values."""

    def __init__(self, values):
        self.values = list(values)
        self.index = 0

    def _next(self):
        value = self.values[self.index % len(self.values)]
        self.index += 1
        return value

    def uniform(self, low=0.0, high=1.0):
        return self._next()

    def random(self):
        return self._next()


@pytest.fixture
def rng():
    """A seeded generator so failures reproduce."""
    return np.random.default_rng(1234)


@pytest.fixture
def gray():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def two_sphere_world(gray):
    """Small sphere at (0, 0, -1) over a large ground sphere."""
    return HittableList([
        Sphere(Vector3(0, 0, -1), 0.5, gray),
        Sphere(Vector3(0, -100.5, -1), 100, gray),
    ])


@pytest.fixture
def small_camera():
    """5x5 camera at the origin looking down -z with a 90 degree field of view."""
    return (CameraBuilder()
            .set_image_width(5)
            .set_image_height(5)
            .set_samples_per_pixel(1)
            .set_max_depth(1)
            .build())

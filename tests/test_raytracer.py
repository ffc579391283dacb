"""Tests for the color integrator and the sampling loop."""

import math

import numpy as np
import pytest

from pathtracer.camera.camera import CameraBuilder
from pathtracer.config import SKY_BLUE, WHITE
from pathtracer.core.color import ColorRangeError
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.renderer.raytracer import Renderer, background, normal_color, ray_color, render_row

BLACK = Vector3(0, 0, 0)


class Absorber(Material):
    def scatter(self, ray_in, rec, rng):
        return None


class CountingLambertian(Lambertian):
    def __init__(self, albedo):
        super().__init__(albedo)
        self.calls = 0

    def scatter(self, ray_in, rec, rng):
        self.calls += 1
        return super().scatter(ray_in, rec, rng)


class Amplifier(Material):
    """Returns an attenuation above one, which no real material does."""
    def scatter(self, ray_in, rec, rng):
        return Ray(rec.p, rec.normal, ray_in.time), Vector3(2.0, 2.0, 2.0)


class TestRayColor:

    def test_depth_zero_is_black(self, two_sphere_world, rng):
        for direction in (Vector3(0, 1, 0), Vector3(0, 0, -1), Vector3(0, -1, 0)):
            assert ray_color(Ray(Vector3(0, 0, 0), direction), two_sphere_world, 0, rng) == BLACK
            assert ray_color(Ray(Vector3(0, 0, 0), direction), HittableList(), 0, rng) == BLACK

    def test_background_endpoints(self, rng):
        empty = HittableList()
        up = ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0)), empty, 50, rng)
        down = ray_color(Ray(Vector3(0, 0, 0), Vector3(0, -3, 0)), empty, 50, rng)
        assert up.is_close(Vector3(*SKY_BLUE))
        assert down.is_close(Vector3(*WHITE))

    def test_background_is_linear_in_vertical_direction(self):
        c = background(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)))
        assert c.is_close(Vector3(0.75, 0.85, 1.0))

    def test_absorbed_ray_is_black(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -2), 1.0, Absorber())])
        assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world, 50, rng) == BLACK

    def test_attenuation_multiplies_background(self, rng):
        mirror = Metal(Vector3(0.5, 0.5, 0.5), 0.0)
        world = HittableList([Sphere(Vector3(0, -100.5, 0), 100, mirror)])
        # Straight down onto the mirror, straight back up to the sky.
        c = ray_color(Ray(Vector3(0, 0, 0), Vector3(0, -1, 0)), world, 2, rng)
        assert c.is_close(Vector3(*SKY_BLUE) * 0.5)
        # Without a bounce left the reflected ray gathers nothing.
        assert ray_color(Ray(Vector3(0, 0, 0), Vector3(0, -1, 0)), world, 1, rng) == BLACK

    @pytest.mark.parametrize("depth", [1, 2, 7, 50])
    def test_depth_bound_is_exact(self, depth, rng):
        # Inside a closed sphere every bounce hits again.
        material = CountingLambertian(Vector3(0.9, 0.9, 0.9))
        world = HittableList([Sphere(Vector3(0, 0, 0), 10.0, material)])
        c = ray_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), world, depth, rng)
        assert c == BLACK
        assert material.calls == depth

    def test_normal_shading(self, two_sphere_world):
        c = normal_color(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), two_sphere_world)
        assert c.is_close(Vector3(0.5, 0.5, 1.0))
        sky = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))
        assert normal_color(sky, two_sphere_world).is_close(background(sky))


class TestRender:

    def test_two_sphere_scene(self, small_camera, two_sphere_world):
        pixels = Renderer(small_camera, two_sphere_world, workers=1, seed=7).render()
        assert pixels.shape == (5, 5, 3)
        # One bounce: the sphere scatters into a depth-zero path.
        assert np.array_equal(pixels[2, 2], [0.0, 0.0, 0.0])
        # The top-left corner sees open sky: r = 1 - a/2, g = 1 - 3a/10, b = 1.
        r, g, b = pixels[0, 0]
        a = 2.0 * (1.0 - r)
        assert 0.5 < a < 1.0
        assert g == pytest.approx(1.0 - 0.3 * a)
        assert b == pytest.approx(1.0)

    def test_normal_debug_render_is_deterministic(self, small_camera, two_sphere_world):
        pixels = Renderer(small_camera, two_sphere_world, workers=1, debug_mode=True).render()
        assert pixels[2, 2] == pytest.approx([0.5, 0.5, 1.0])
        expected = background(small_camera.pixel_ray(0, 0))
        assert pixels[0, 0] == pytest.approx(expected.to_tuple())

    def test_pixels_stay_in_unit_range(self, two_sphere_world):
        camera = (CameraBuilder().set_image_width(8).set_image_height(6)
                  .set_samples_per_pixel(4).set_max_depth(10).build())
        pixels = Renderer(camera, two_sphere_world, workers=1, seed=3).render()
        assert pixels.min() >= 0.0
        assert pixels.max() <= 1.0

    def test_same_seed_same_image(self, two_sphere_world):
        camera = (CameraBuilder().set_image_width(6).set_image_height(4)
                  .set_samples_per_pixel(3).set_max_depth(5).build())
        first = Renderer(camera, two_sphere_world, workers=1, seed=42).render()
        second = Renderer(camera, two_sphere_world, workers=1, seed=42).render()
        other = Renderer(camera, two_sphere_world, workers=1, seed=43).render()
        assert np.array_equal(first, second)
        assert not np.array_equal(first, other)

    @pytest.mark.slow
    def test_worker_count_does_not_change_output(self, two_sphere_world):
        camera = (CameraBuilder().set_image_width(6).set_image_height(4)
                  .set_samples_per_pixel(2).set_max_depth(5).build())
        serial = Renderer(camera, two_sphere_world, workers=1, seed=11).render()
        parallel = Renderer(camera, two_sphere_world, workers=2, seed=11).render()
        assert np.array_equal(serial, parallel)

    def test_out_of_range_pixel_is_fatal(self, small_camera):
        world = HittableList([Sphere(Vector3(0, 0, -1), 0.5, Amplifier())])
        small_camera.max_depth = 2
        with pytest.raises(ColorRangeError) as excinfo:
            render_row(small_camera, world, 2, seed=0)
        assert excinfo.value.channel == "red"

    def test_invalid_worker_count(self, small_camera, two_sphere_world):
        with pytest.raises(ValueError):
            Renderer(small_camera, two_sphere_world, workers=0)

    @pytest.mark.slow
    def test_out_of_range_pixel_is_fatal_across_processes(self, small_camera):
        world = HittableList([Sphere(Vector3(0, 0, -1), 0.5, Amplifier())])
        small_camera.max_depth = 2
        with pytest.raises(ColorRangeError) as excinfo:
            Renderer(small_camera, world, workers=2, seed=0).render()
        assert excinfo.value.channel == "red"
        assert excinfo.value.value > 1.0


class TestTwoPixelScene:
    """2x1 image: the left pixel looks at the small sphere's center, the right one at open sky."""

    @pytest.fixture
    def camera(self):
        return (CameraBuilder()
                .set_image_width(2)
                .set_image_height(1)
                .set_look_from(Vector3(1, 0, 0))
                .set_look_at(Vector3(1, 0, -1))
                .set_samples_per_pixel(1)
                .set_max_depth(1)
                .build())

    def test_pixel_rays(self, camera):
        assert camera.pixel_ray(0, 0).direction.is_close(Vector3(-1, 0, -1))
        assert camera.pixel_ray(1, 0).direction.is_close(Vector3(1, 0, -1))

    def test_normal_shading(self, camera, two_sphere_world):
        pixels = Renderer(camera, two_sphere_world, workers=1, debug_mode=True).render()
        assert pixels.shape == (1, 2, 3)
        # The hit normal points back along the ray: (1, 0, 1) / sqrt(2).
        half = 0.5 + 0.5 / math.sqrt(2.0)
        assert pixels[0, 0] == pytest.approx([half, 0.5, half])
        # Horizontal ray: a = 0.5 on the sky gradient.
        assert pixels[0, 1] == pytest.approx([0.75, 0.85, 1.0])

    def test_direct_lighting_only(self, camera, two_sphere_world):
        pixels = Renderer(camera, two_sphere_world, workers=1, seed=5).render()
        for r, g, b in pixels[0]:
            # A surface hit has no bounce left and is black; an escape is sky.
            if b == 0.0:
                assert (r, g) == (0.0, 0.0)
            else:
                a = 2.0 * (1.0 - r)
                assert g == pytest.approx(1.0 - 0.3 * a)
                assert b == pytest.approx(1.0)

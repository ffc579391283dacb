# scenes.py
"""Demo scenes used by the command-line entry point."""
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from pathtracer.camera.camera import CameraBuilder
from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.presets import ColorPresets, DielectricPresets, MetalPresets


def two_spheres() -> Tuple[HittableList, CameraBuilder]:
    """A small sphere resting on a very large one."""
    ground = ColorPresets.matte(ColorPresets.GRAY)
    world = HittableList([
        Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(ColorPresets.BLUE)),
        Sphere(Vector3(0, -100.5, -1), 100, ground),
    ])
    return world, CameraBuilder()


def three_spheres() -> Tuple[HittableList, CameraBuilder]:
    """Diffuse, hollow glass and fuzzy metal spheres side by side."""
    material_ground = ColorPresets.matte(ColorPresets.GREEN)
    material_center = ColorPresets.matte(ColorPresets.BLUE)
    material_left = DielectricPresets.glass()
    material_bubble = DielectricPresets.air_bubble()
    material_right = MetalPresets.brushed()

    world = HittableList([
        Sphere(Vector3(0.0, -100.5, -1.0), 100.0, material_ground),
        Sphere(Vector3(0.0, 0.0, -1.2), 0.5, material_center),
        Sphere(Vector3(-1.0, 0.0, -1.0), 0.5, material_left),
        Sphere(Vector3(-1.0, 0.0, -1.0), 0.4, material_bubble),
        Sphere(Vector3(1.0, 0.0, -1.0), 0.5, material_right),
    ])
    camera = (CameraBuilder()
              .set_vfov(20)
              .set_look_from(Vector3(-2, 2, 1))
              .set_look_at(Vector3(0, 0, -1))
              .set_defocus_angle(10.0)
              .set_focus_dist(3.4))
    return world, camera


def bouncing_spheres(seed: Optional[int] = None) -> Tuple[HittableList, CameraBuilder]:
    """
    A field of small random spheres, the diffuse ones moving upwards during
    the shutter interval, around three large feature spheres.
    """
    rng = np.random.default_rng(seed)
    world = HittableList()
    world.add(Sphere(Vector3(0, -1000, 0), 1000, Lambertian(Vector3(0.5, 0.5, 0.5))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Vector3(*rng.random(3)) * Vector3(*rng.random(3))
                center_end = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(Sphere.moving(center, center_end, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = Vector3(*rng.uniform(0.5, 1.0, 3))
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.glass()))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    camera = (CameraBuilder()
              .set_vfov(20)
              .set_look_from(Vector3(13, 2, 3))
              .set_look_at(Vector3(0, 0, 0))
              .set_defocus_angle(0.6)
              .set_focus_dist(10.0))
    return world, camera


SCENES: Dict[str, Callable[..., Tuple[HittableList, CameraBuilder]]] = {
    "two-spheres": two_spheres,
    "three-spheres": three_spheres,
    "bouncing-spheres": bouncing_spheres,
}

# materials/lambertian.py
from typing import Tuple

from pathtracer.core.color import Color
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Lambertian(Material):
    """
    Lambertian diffuse material.
    """

    def __init__(self, albedo: Vector3):
        self.albedo = Color.validated(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Color]:
        # Normal plus a point on the unit sphere gives a cosine-weighted
        # direction.
        scatter_direction = rec.normal + random_unit_vector(rng)

        if scatter_direction.near_zero():
            scatter_direction = rec.normal

        scattered = Ray(rec.p, scatter_direction, ray_in.time)
        return scattered, self.albedo

    def __repr__(self) -> str:
        return f"Lambertian({self.albedo!r})"

# materials/metal.py
from typing import Optional, Tuple

from pathtracer.core.color import Color
from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, random_in_unit_disk
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


class Metal(Material):
    """
    Metal material with reflective properties. ``fuzz`` runs from 0 (mirror)
    to 1 (maximally rough).
    """
    def __init__(self, albedo: Vector3, fuzz: float = 0.0):
        if not 0.0 <= fuzz <= 1.0:
            raise ValueError(f"fuzz must lie in [0, 1], got {fuzz}")
        self.albedo = Color.validated(albedo)
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Color]]:
        reflected = reflect(ray_in.direction, rec.normal).normalize()
        if self.fuzz > 0:
            reflected = reflected + random_in_unit_disk(rng) * self.fuzz

        if reflected.dot(rec.normal) <= 0:
            # Fuzz pushed the reflection below the surface.
            return None
        return Ray(rec.p, reflected, ray_in.time), self.albedo

    def __repr__(self) -> str:
        return f"Metal({self.albedo!r}, fuzz={self.fuzz})"

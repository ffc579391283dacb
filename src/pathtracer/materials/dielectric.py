# materials/dielectric.py
import math
from typing import Tuple

from pathtracer.core.color import Color
from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract, reflectance
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material

# Glass doesn't absorb light.
ATTENUATION = Color(1.0, 1.0, 1.0)


class Dielectric(Material):
    """
    Clear refractive material such as glass or water. At each hit the ray
    either reflects or refracts, chosen with probability given by Schlick's
    approximation.
    """
    def __init__(self, refraction_index: float):
        if refraction_index <= 0:
            raise ValueError(f"refraction index must be positive, got {refraction_index}")
        self.refraction_index = refraction_index

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Color]:
        # Entering the front face goes from air into the material.
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ri)

        return Ray(rec.p, direction, ray_in.time), ATTENUATION

    def __repr__(self) -> str:
        return f"Dielectric({self.refraction_index})"

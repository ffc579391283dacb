# materials/material.py
from typing import Optional, Tuple

from pathtracer.core.color import Color
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials hold only their physical parameters and are never mutated
    after construction, so one instance can be shared by many shapes.
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is
        absorbed. The scattered ray keeps the incoming ray's time.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

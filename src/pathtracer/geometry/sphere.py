# geometry/sphere.py
import math
from typing import Optional

from pathtracer.config import EPSILON
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class Sphere(Hittable):
    """
    A sphere defined by its center, radius and material.

    Passing ``center_end`` makes a moving sphere whose center travels
    linearly from ``center`` at time 0 to ``center_end`` at time 1.
    """
    def __init__(self, center: Vector3, radius: float, material,
                 center_end: Optional[Vector3] = None):
        if radius <= 0:
            raise ValueError(f"sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = radius
        self.material = material
        self.is_moving = center_end is not None
        self.center_vec = center_end - center if self.is_moving else Vector3(0, 0, 0)

    @classmethod
    def moving(cls, center_start: Vector3, center_end: Vector3, radius: float, material) -> "Sphere":
        return cls(center_start, radius, material, center_end=center_end)

    def center_at(self, time: float) -> Vector3:
        if not self.is_moving:
            return self.center
        return self.center + self.center_vec * time

    def hit(self, ray: Ray, t_min: float = EPSILON, t_max: float = math.inf) -> Optional[HitRecord]:
        center = self.center_at(ray.time)
        oc = center - ray.origin
        a = ray.direction.length_squared()
        if a == 0:
            return None
        h = ray.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = h * h - a * c

        if discriminant < 0:
            return None

        sqrt_d = math.sqrt(discriminant)
        # Nearest root first, then the far one.
        root = (h - sqrt_d) / a
        if root < t_min or root > t_max:
            root = (h + sqrt_d) / a
            if root < t_min or root > t_max:
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(root)
        outward_normal = (rec.p - center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        return rec

    def __repr__(self) -> str:
        if self.is_moving:
            return f"Sphere({self.center!r} -> {self.center + self.center_vec!r}, {self.radius})"
        return f"Sphere({self.center!r}, {self.radius})"

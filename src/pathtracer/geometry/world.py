# geometry/world.py
import math
from typing import Iterable, List, Optional

from pathtracer.config import EPSILON
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class HittableList(Hittable):
    """
    The scene: an insertion-ordered list of Hittable objects.

    Rays are tested against every object in turn. The list is filled before
    rendering and only read afterwards, so worker processes can each hold a
    copy without coordination.
    """
    def __init__(self, objects: Iterable[Hittable] = ()):
        self.objects: List[Hittable] = list(objects)

    def add(self, obj: Hittable) -> "HittableList":
        self.objects.append(obj)
        return self

    def extend(self, objects: Iterable[Hittable]) -> "HittableList":
        self.objects.extend(objects)
        return self

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float = EPSILON, t_max: float = math.inf) -> Optional[HitRecord]:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            # Strict comparison keeps the earlier object on a tie.
            if rec is not None and (hit_record is None or rec.t < closest_so_far):
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

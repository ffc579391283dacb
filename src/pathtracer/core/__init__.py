from pathtracer.core.vector import Vector3, Point3
from pathtracer.core.color import Color, ColorRangeError
from pathtracer.core.ray import Ray

__all__ = ["Vector3", "Point3", "Color", "ColorRangeError", "Ray"]

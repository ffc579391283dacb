# materials/presets.py
from pathtracer.core.vector import Vector3
from pathtracer.materials.metal import Metal
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.dielectric import Dielectric


class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Vector3(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Vector3(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def brushed() -> Metal:
        return Metal(Vector3(0.8, 0.6, 0.2), fuzz=1.0)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Vector3(0.8, 0.8, 0.8), fuzz=0.0)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def air_bubble() -> Dielectric:
        # Air inside glass, for hollow-sphere interiors.
        return Dielectric(1.0 / 1.5)


class ColorPresets:
    """Common albedos for diffuse surfaces."""

    RED = Vector3(0.9, 0.2, 0.2)
    BLUE = Vector3(0.1, 0.2, 0.5)
    GREEN = Vector3(0.8, 0.8, 0.0)
    GRAY = Vector3(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)

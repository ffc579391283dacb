# camera/camera.py
import math
from typing import Optional

from pathtracer import config
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Vector3


def _extrinsic(name: str, doc: str) -> property:
    """Property whose setter recomputes the camera's derived geometry."""
    attr = "_" + name

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        old = getattr(self, attr)
        setattr(self, attr, value)
        try:
            self.update_camera()
        except ValueError:
            # Rejected values leave the camera as it was.
            setattr(self, attr, old)
            self.update_camera()
            raise

    return property(getter, setter, doc=doc)


def _count(name: str, minimum: int, doc: str) -> property:
    """Integer sampling parameter; values below ``minimum`` are rejected."""
    attr = "_" + name

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        if value < minimum:
            raise ValueError(f"{name} must be at least {minimum}, got {value}")
        setattr(self, attr, value)

    return property(getter, setter, doc=doc)


class Camera:
    """
    Pinhole or thin-lens camera looking from ``look_from`` towards
    ``look_at``.

    Every parameter is a property; assigning one recomputes the viewport
    basis immediately, so rays are never generated from stale geometry.
    """
    image_width = _extrinsic("image_width", "Rendered image width in pixels.")
    image_height = _extrinsic("image_height", "Rendered image height in pixels.")
    vfov = _extrinsic("vfov", "Vertical field of view in degrees.")
    look_from = _extrinsic("look_from", "Camera center.")
    look_at = _extrinsic("look_at", "Point the camera looks at.")
    vup = _extrinsic("vup", "World up direction.")
    defocus_angle = _extrinsic("defocus_angle", "Lens cone angle in degrees; 0 disables depth of field.")
    focus_dist = _extrinsic("focus_dist", "Distance to the plane of perfect focus; None uses |look_from - look_at|.")
    samples_per_pixel = _count("samples_per_pixel", 1, "Jittered samples averaged per pixel.")
    max_depth = _count("max_depth", 0, "Scatter bound for each camera ray; 0 renders black.")

    def __init__(self, image_width: int = config.IMAGE_WIDTH, image_height: int = config.IMAGE_HEIGHT,
                 vfov: float = config.VFOV,
                 look_from: Vector3 = Vector3(0, 0, 0), look_at: Vector3 = Vector3(0, 0, -1),
                 vup: Vector3 = Vector3(0, 1, 0),
                 defocus_angle: float = 0.0, focus_dist: Optional[float] = None,
                 samples_per_pixel: int = config.SAMPLES_PER_PIXEL, max_depth: int = config.MAX_DEPTH):
        self._image_width = image_width
        self._image_height = image_height
        self._vfov = vfov
        self._look_from = look_from
        self._look_at = look_at
        self._vup = vup
        self._defocus_angle = defocus_angle
        self._focus_dist = focus_dist
        self.samples_per_pixel = samples_per_pixel
        self.max_depth = max_depth
        self.update_camera()

    @property
    def aspect_ratio(self) -> float:
        return self._image_width / self._image_height

    @property
    def center(self) -> Vector3:
        return self._look_from

    def update_camera(self):
        """Updates the camera's basis vectors and viewport."""
        if self._image_width < 1 or self._image_height < 1:
            raise ValueError(
                f"image size must be at least 1x1, got {self._image_width}x{self._image_height}")
        view = self._look_from - self._look_at
        if view.near_zero():
            raise ValueError("look_from and look_at must be distinct points")

        self.focal_length = self._focus_dist if self._focus_dist is not None else view.length()
        if self.focal_length <= 0:
            raise ValueError(f"focus distance must be positive, got {self.focal_length}")

        theta = degrees_to_radians(self._vfov)
        viewport_height = 2.0 * math.tan(theta / 2) * self.focal_length
        viewport_width = viewport_height * self.aspect_ratio

        # Orthonormal basis: w points back towards the eye.
        self.w = view.normalize()
        u = self._vup.cross(self.w)
        if u.near_zero():
            raise ValueError("vup must not be parallel to the viewing direction")
        self.u = u.normalize()
        self.v = self.w.cross(self.u)

        # Image rows run downwards, so the vertical edge is flipped.
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self._image_width
        self.pixel_delta_v = viewport_v / self._image_height

        viewport_upper_left = (self._look_from
                               - self.w * self.focal_length
                               - viewport_u * 0.5
                               - viewport_v * 0.5)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        if self._defocus_angle > 0:
            defocus_radius = self.focal_length * math.tan(degrees_to_radians(self._defocus_angle / 2))
        else:
            defocus_radius = 0.0
        self.defocus_radius = defocus_radius
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng) -> Ray:
        """
        Returns a jittered sample ray through pixel (i, j), originating on the
        defocus disk when depth of field is enabled, at a random shutter time.
        """
        offset_x = rng.random() - 0.5
        offset_y = rng.random() - 0.5
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset_x)
                        + self.pixel_delta_v * (j + offset_y))

        if self._defocus_angle <= 0:
            ray_origin = self._look_from
        else:
            ray_origin = self.defocus_disk_sample(rng)

        return Ray(ray_origin, pixel_sample - ray_origin, rng.random())

    def pixel_ray(self, i: int, j: int) -> Ray:
        """Ray from the camera center through the exact center of pixel (i, j) at time 0."""
        pixel_center = self.pixel00_loc + self.pixel_delta_u * i + self.pixel_delta_v * j
        return Ray(self._look_from, pixel_center - self._look_from, 0.0)

    def defocus_disk_sample(self, rng) -> Vector3:
        p = random_in_unit_disk(rng)
        return self._look_from + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def __repr__(self) -> str:
        return (f"Camera({self._image_width}x{self._image_height}, vfov={self._vfov}, "
                f"look_from={self._look_from!r}, look_at={self._look_at!r}, "
                f"defocus_angle={self._defocus_angle}, focus_dist={self.focal_length})")


class CameraBuilder:
    """
    Fluent configuration for a Camera. Each setter returns the builder;
    build() resolves the geometry.
    """
    def __init__(self):
        self.image_width = config.IMAGE_WIDTH
        self.image_height = config.IMAGE_HEIGHT
        self.vfov = config.VFOV
        self.look_from = Vector3(0, 0, 0)
        self.look_at = Vector3(0, 0, -1)
        self.vup = Vector3(0, 1, 0)
        self.defocus_angle = 0.0
        self.focus_dist = None
        self.samples_per_pixel = config.SAMPLES_PER_PIXEL
        self.max_depth = config.MAX_DEPTH

    def set_image_width(self, image_width: int) -> "CameraBuilder":
        self.image_width = image_width
        return self

    def set_image_height(self, image_height: int) -> "CameraBuilder":
        self.image_height = image_height
        return self

    def set_image_width_with_aspect_ratio(self, image_width: int, aspect_ratio: float) -> "CameraBuilder":
        self.image_width = image_width
        self.image_height = max(1, int(image_width / aspect_ratio))
        return self

    def set_image_height_with_aspect_ratio(self, image_height: int, aspect_ratio: float) -> "CameraBuilder":
        self.image_height = image_height
        self.image_width = max(1, int(image_height * aspect_ratio))
        return self

    def set_vfov(self, vfov: float) -> "CameraBuilder":
        self.vfov = vfov
        return self

    def set_look_from(self, look_from: Vector3) -> "CameraBuilder":
        self.look_from = look_from
        return self

    def set_look_at(self, look_at: Vector3) -> "CameraBuilder":
        self.look_at = look_at
        return self

    def set_vup(self, vup: Vector3) -> "CameraBuilder":
        self.vup = vup
        return self

    def set_defocus_angle(self, defocus_angle: float) -> "CameraBuilder":
        self.defocus_angle = defocus_angle
        return self

    def set_focus_dist(self, focus_dist: float) -> "CameraBuilder":
        self.focus_dist = focus_dist
        return self

    def set_samples_per_pixel(self, samples_per_pixel: int) -> "CameraBuilder":
        if samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {samples_per_pixel}")
        self.samples_per_pixel = samples_per_pixel
        return self

    def set_max_depth(self, max_depth: int) -> "CameraBuilder":
        if max_depth < 0:
            raise ValueError(f"max_depth must be at least 0, got {max_depth}")
        self.max_depth = max_depth
        return self

    def build(self) -> Camera:
        return Camera(
            image_width=self.image_width,
            image_height=self.image_height,
            vfov=self.vfov,
            look_from=self.look_from,
            look_at=self.look_at,
            vup=self.vup,
            defocus_angle=self.defocus_angle,
            focus_dist=self.focus_dist,
            samples_per_pixel=self.samples_per_pixel,
            max_depth=self.max_depth,
        )

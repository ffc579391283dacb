from pathtracer.renderer.raytracer import Renderer, ray_color, render_row
from pathtracer.renderer.image import write_ppm, save_png, to_bytes

__all__ = ["Renderer", "ray_color", "render_row", "write_ppm", "save_png", "to_bytes"]

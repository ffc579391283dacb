from pathtracer.camera.camera import Camera, CameraBuilder

__all__ = ["Camera", "CameraBuilder"]

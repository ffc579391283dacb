# config.py
"""Renderer defaults and quality presets."""

# Recursion budget for ray_color. A path still bouncing after this many
# scatters contributes black.
MAX_DEPTH = 50
SAMPLES_PER_PIXEL = 100

IMAGE_WIDTH = 400
IMAGE_HEIGHT = 225
ASPECT_RATIO = 16.0 / 9.0
VFOV = 90.0

# Rays hitting closer than this are rejected to avoid shadow acne. Also the
# per-component tolerance for near-zero vectors.
EPSILON = 1e-7

# Allowed overshoot of a channel above 1.0 (or below 0.0) at the final pixel
# boundary before it is treated as a logic error.
COLOR_TOLERANCE = 1e-9

# Background gradient endpoints as RGB tuples.
WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)

QUALITY_LEVELS = {
    "preview": {"samples": 4, "bounces": 8},
    "balanced": {"samples": 32, "bounces": 20},
    "final": {"samples": SAMPLES_PER_PIXEL, "bounces": MAX_DEPTH},
}
DEFAULT_QUALITY = "final"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_LEVEL = "INFO"

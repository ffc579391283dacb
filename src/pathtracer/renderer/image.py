# renderer/image.py
import math
from typing import Iterator, TextIO, Tuple

import numpy as np
from numba import njit
from PIL import Image


@njit
def to_bytes(pixels):
    """
    Maps linear channels in [0, 1] to bytes with floor(255.999 * c).
    No gamma correction is applied.
    """
    out = np.empty(pixels.shape, dtype=np.uint8)
    flat_in = pixels.reshape(-1)
    flat_out = out.reshape(-1)
    for k in range(flat_in.size):
        flat_out[k] = np.uint8(math.floor(255.999 * flat_in[k]))
    return out


def pixel_stream(pixels: np.ndarray) -> Iterator[Tuple[int, int, int]]:
    """Yields byte triples in row-major, left-to-right, top-to-bottom order."""
    data = to_bytes(np.ascontiguousarray(pixels, dtype=np.float64))
    for row in data:
        for r, g, b in row:
            yield int(r), int(g), int(b)


def write_ppm(pixels: np.ndarray, stream: TextIO):
    """Writes the image as a plain-text P3 pixel map."""
    height, width = pixels.shape[:2]
    lines = [f"P3\n{width} {height}\n255\n"]
    lines.extend(f"{r} {g} {b}\n" for r, g, b in pixel_stream(pixels))
    # Single write so the sink receives the image all at once.
    stream.write("".join(lines))


def save_png(pixels: np.ndarray, path: str):
    data = to_bytes(np.ascontiguousarray(pixels, dtype=np.float64))
    Image.fromarray(data).save(path)

# main.py
import argparse
import logging
import sys
from typing import List, Optional

from pathtracer import config
from pathtracer.core.color import ColorRangeError
from pathtracer.logging_config import setup_logging
from pathtracer.renderer.image import save_png, write_ppm
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import SCENES

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a demo scene with a Monte-Carlo path tracer.")
    p.add_argument("--scene", choices=sorted(SCENES), default="three-spheres")
    p.add_argument("--width", type=int, default=config.IMAGE_WIDTH, help="image width in pixels")
    p.add_argument("--aspect-ratio", type=float, default=config.ASPECT_RATIO,
                   help="width / height; the height is derived from it")
    p.add_argument("--quality", choices=sorted(config.QUALITY_LEVELS), default=config.DEFAULT_QUALITY)
    p.add_argument("--samples", type=int, help="samples per pixel (overrides --quality)")
    p.add_argument("--depth", type=int, help="maximum bounces (overrides --quality)")
    p.add_argument("--workers", type=int, help="worker processes (default: one per CPU)")
    p.add_argument("--seed", type=int, help="seed for reproducible output")
    p.add_argument("--normals", action="store_true", help="shade by surface normal instead of tracing")
    p.add_argument("-o", "--output", help="write to this file (.png or .ppm); default is PPM on stdout")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("--no-progress", action="store_true")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else config.LOG_LEVEL)

    quality = config.QUALITY_LEVELS[args.quality]
    samples = args.samples if args.samples is not None else quality["samples"]
    depth = args.depth if args.depth is not None else quality["bounces"]

    try:
        if args.scene == "bouncing-spheres":
            world, builder = SCENES[args.scene](args.seed)
        else:
            world, builder = SCENES[args.scene]()
        camera = (builder
                  .set_image_width_with_aspect_ratio(args.width, args.aspect_ratio)
                  .set_samples_per_pixel(samples)
                  .set_max_depth(depth)
                  .build())
        renderer = Renderer(camera, world, workers=args.workers, seed=args.seed,
                            debug_mode=args.normals, progress=not args.no_progress)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    logger.debug("Scene %s with %d objects, %r", args.scene, len(world), camera)
    try:
        pixels = renderer.render()
    except ColorRangeError as e:
        logger.critical("Render aborted: %s", e)
        return 1

    if args.output is None:
        write_ppm(pixels, sys.stdout)
    elif args.output.lower().endswith(".png"):
        save_png(pixels, args.output)
        logger.info("Wrote %s", args.output)
    else:
        with open(args.output, "w") as f:
            write_ppm(pixels, f)
        logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

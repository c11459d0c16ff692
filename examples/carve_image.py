"""
Shrink an image by seam carving.

Removes the requested number of vertical seams (narrowing the image),
then horizontal seams (shortening it), and writes the result.

    python carve_image.py input.png output.png --width-seams 50 --height-seams 20
"""

import argparse
import logging
import sys
sys.path.insert(0, '..')

import numpy as np
from PIL import Image

from seam_carver import SeamCarver

logger = logging.getLogger(__name__)


def load_image(path: str, device='cpu') -> SeamCarver:
    """Load an image file into a carver."""
    img = Image.open(path).convert('RGB')
    return SeamCarver.from_array(np.array(img), device=device)


def save_image(carver: SeamCarver, path: str):
    """Save the carver's current image."""
    Image.fromarray(carver.to_array()).save(path)
    logger.info(f"Saved: {path}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('input', help="image to carve")
    parser.add_argument('output', help="where to write the carved image")
    parser.add_argument('--width-seams', type=int, default=0,
                        help="number of vertical seams to remove")
    parser.add_argument('--height-seams', type=int, default=0,
                        help="number of horizontal seams to remove")
    parser.add_argument('--device', default='cpu', help="torch device")
    parser.add_argument('--log-level', default='INFO',
                        help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    carver = load_image(args.input, device=args.device)
    logger.info(f"Original size: {carver.width} x {carver.height}")

    if args.width_seams >= carver.width or args.height_seams >= carver.height:
        logger.error("Cannot remove that many seams from a "
                     f"{carver.width} x {carver.height} image")
        return 1

    for i in range(args.width_seams):
        carver.remove_seam_across_width()
        if (i + 1) % 20 == 0:
            logger.info(f"  Removed {i + 1}/{args.width_seams} vertical seams")

    for i in range(args.height_seams):
        carver.remove_seam_across_height()
        if (i + 1) % 20 == 0:
            logger.info(f"  Removed {i + 1}/{args.height_seams} horizontal seams")

    logger.info(f"Carved size: {carver.width} x {carver.height}")
    save_image(carver, args.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())

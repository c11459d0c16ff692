"""
Show an image next to its energy map with the next seams overlaid.

    python visualize_energy.py input.png --output energy.png
"""

import argparse
import sys
sys.path.insert(0, '..')

import matplotlib
import numpy as np
from PIL import Image

from seam_carver import SeamCarver


def visualize_seam(image: np.ndarray, seam, direction: str = 'vertical') -> np.ndarray:
    """Paint a seam red on an (H, W, 3) uint8 image."""
    img_vis = image.copy()
    if direction == 'vertical':
        for i, col in enumerate(seam.tolist()):
            img_vis[i, col] = (255, 0, 0)
    else:
        for j, row in enumerate(seam.tolist()):
            img_vis[row, j] = (255, 0, 0)
    return img_vis


def main():
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('input', help="image to analyse")
    parser.add_argument('--output', help="save the figure instead of showing it")
    args = parser.parse_args()

    if args.output:
        matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    carver = SeamCarver.from_array(np.array(Image.open(args.input).convert('RGB')))
    image = carver.to_array()

    overlay = visualize_seam(image, carver.find_seam_across_width(), 'vertical')
    overlay = visualize_seam(overlay, carver.find_seam_across_height(), 'horizontal')

    # Border pixels sit at the sentinel value; clip them so the interior is visible
    energy = carver.energy_map()[1:-1, 1:-1].numpy()

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].imshow(overlay)
    axes[0].set_title(f"Next seams ({carver.width} x {carver.height})")
    axes[1].imshow(energy, cmap='magma')
    axes[1].set_title("Dual-gradient energy (interior)")
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()

    if args.output:
        fig.savefig(args.output, dpi=150)
        print(f"Saved: {args.output}")
    else:
        plt.show()


if __name__ == '__main__':
    main()

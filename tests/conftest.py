"""Shared test fixtures for the seam carving test suite."""

import math
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def random_image():
    """8x10 RGB image with integer colors in [0, 255]."""
    torch.manual_seed(42)
    return torch.randint(0, 256, (3, 8, 10)).double()


@pytest.fixture
def uniform_image():
    """3x3 image where every pixel has the same color."""
    return torch.full((3, 3, 3), 128.0, dtype=torch.float64)


def make_uniform_image(H, W, color=(128, 128, 128)):
    """Solid-color (3, H, W) image."""
    return torch.tensor(color, dtype=torch.float64).view(3, 1, 1).expand(3, H, W).clone()


def make_strip_image(H, W, col):
    """Black image with a one-pixel bright strip at column `col`.

    The strip's blue channel rises down the rows so the strip pixels
    themselves carry a small vertical gradient.
    """
    image = torch.zeros(3, H, W, dtype=torch.float64)
    image[0, :, col] = 200.0
    image[1, :, col] = 200.0
    image[2, :, col] = 10.0 * torch.arange(H, dtype=torch.float64)
    return image


def reference_energy(image, border_energy=1000.0):
    """Per-pixel dual-gradient energy written out with plain loops."""
    C, H, W = image.shape
    energy = torch.zeros(H, W, dtype=torch.float64)
    for y in range(H):
        for x in range(W):
            if x == 0 or y == 0 or x == W - 1 or y == H - 1:
                energy[y, x] = border_energy
                continue
            gradient = 0.0
            for c in range(C):
                gradient += (image[c, y, x + 1].item() - image[c, y, x - 1].item()) ** 2
                gradient += (image[c, y + 1, x].item() - image[c, y - 1, x].item()) ** 2
            energy[y, x] = math.sqrt(gradient)
    return energy

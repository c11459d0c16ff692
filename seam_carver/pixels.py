"""
Mutable RGB pixel grid.

Pixels are stored channel-first as a (3, H, W) float64 tensor. Coordinates
are (x, y) with x the column and y the row.
"""

import operator

import torch
from typing import Sequence, Tuple

from .errors import InvalidInputError, OutOfRangeError
from .seam import check_seam, remove_seam


class PixelStore:
    """
    Owns the width x height grid of color samples.

    Knows nothing about energy: removing a column or row only compacts
    the grid.
    """

    def __init__(self, image: torch.Tensor, device='cpu'):
        """
        Args:
            image: RGB tensor (3, H, W), any numeric dtype
            device: torch device for the stored grid
        """
        if image is None:
            raise InvalidInputError("Cannot build a pixel store from None")
        image = torch.as_tensor(image)
        if image.dim() != 3 or image.shape[0] != 3:
            raise InvalidInputError(
                f"Expected an RGB tensor of shape (3, H, W), got {tuple(image.shape)}")
        if image.shape[1] == 0 or image.shape[2] == 0:
            raise InvalidInputError("Pixel grid must have non-zero width and height")

        self._pixels = image.to(device=device, dtype=torch.float64).clone()

    @property
    def width(self) -> int:
        return self._pixels.shape[2]

    @property
    def height(self) -> int:
        return self._pixels.shape[1]

    @property
    def device(self) -> torch.device:
        return self._pixels.device

    @property
    def data(self) -> torch.Tensor:
        """The live grid. Read-only by convention; use to_tensor() for a copy."""
        return self._pixels

    def check_range(self, x: int, y: int):
        check_coordinates(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Tuple[float, float, float]:
        self.check_range(x, y)
        r, g, b = self._pixels[:, y, x].tolist()
        return r, g, b

    def set(self, x: int, y: int, color: Sequence[float]):
        self.check_range(x, y)
        color = torch.as_tensor(color, dtype=torch.float64, device=self.device)
        if color.shape != (3,):
            raise InvalidInputError(f"Color must be an (r, g, b) triple, got {tuple(color.shape)}")
        self._pixels[:, y, x] = color

    def remove_column(self, seam: torch.Tensor) -> torch.Tensor:
        """
        Drop one pixel per row at the seam's column index.

        The seam is validated before anything changes. Returns it as a
        long tensor on the grid's device.
        """
        seam = check_seam(seam, self.height, self.width).to(self.device)
        self._pixels = remove_seam(self._pixels, seam, direction='vertical')
        return seam

    def remove_row(self, seam: torch.Tensor) -> torch.Tensor:
        """Drop one pixel per column at the seam's row index; returns the validated seam."""
        seam = check_seam(seam, self.width, self.height).to(self.device)
        self._pixels = remove_seam(self._pixels, seam, direction='horizontal')
        return seam

    def to_tensor(self) -> torch.Tensor:
        return self._pixels.clone()


def check_coordinates(x, y, width: int, height: int):
    """Raise OutOfRangeError unless (x, y) are integers inside the grid."""
    try:
        x, y = operator.index(x), operator.index(y)
    except TypeError:
        raise OutOfRangeError(f"Coordinates must be integers, got ({x!r}, {y!r})") from None
    if not (0 <= x < width and 0 <= y < height):
        raise OutOfRangeError(f"({x}, {y}) is outside the {width}x{height} grid")

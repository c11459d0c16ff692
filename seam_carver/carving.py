"""
High-level carving engine and drivers.

SeamCarver owns the pixels and their energy, finds minimum seams and
removes them one at a time. Every removal leaves the cached energy equal
to a fresh computation on the shrunken image.
"""

import logging

import numpy as np
import torch
from typing import Optional

from .energy import BORDER_ENERGY, EnergyField
from .errors import InvalidInputError, InvalidSeamError
from .pixels import PixelStore
from .seam import dp_seam

logger = logging.getLogger(__name__)


class SeamCarver:
    """
    Content-aware image shrinking by repeated seam removal.

    Example:
        carver = SeamCarver(image)            # image: (3, H, W)
        for _ in range(50):
            carver.remove_seam_across_width()
        result = carver.current_image()       # (3, H, W - 50)
    """

    def __init__(self, image: torch.Tensor, border_energy: float = BORDER_ENERGY,
                 device='cpu'):
        """
        Args:
            image: RGB image tensor (3, H, W). Values are used as-is, so
                   0-255 and 0-1 ranges both work.
            border_energy: Fixed energy of border pixels
            device: torch device for all grids

        Raises:
            InvalidInputError: image is None, not (3, H, W), or empty
        """
        self.border_energy = border_energy
        self.pixels = PixelStore(image, device=device)
        self.energy = EnergyField(self.pixels, border_energy=border_energy)
        logger.debug("SeamCarver ready: %dx%d on %s", self.width, self.height,
                     self.pixels.device)

    @classmethod
    def from_array(cls, array: np.ndarray, **kwargs) -> 'SeamCarver':
        """Build from an (H, W, 3) array, the layout PIL and numpy use."""
        if array is None:
            raise InvalidInputError("Cannot build a carver from None")
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 3:
            raise InvalidInputError(
                f"Expected an array of shape (H, W, 3), got {array.shape}")
        image = torch.from_numpy(array.astype(np.float64)).permute(2, 0, 1).contiguous()
        return cls(image, **kwargs)

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    def current_image(self) -> torch.Tensor:
        """Copy of the current pixels, (3, height, width) float64."""
        return self.pixels.to_tensor()

    def to_array(self) -> np.ndarray:
        """Current pixels as an (H, W, 3) uint8 array, clipped to 0-255."""
        img_array = self.pixels.data.permute(1, 2, 0).cpu().numpy()
        return img_array.round().clip(0, 255).astype(np.uint8)

    def energy_at(self, x: int, y: int) -> float:
        return self.energy.energy_at(x, y)

    def energy_map(self) -> torch.Tensor:
        """Copy of the cached energy grid (height, width)."""
        return self.energy.to_tensor()

    def rebuild_energy(self):
        self.energy.rebuild_all()

    def find_seam_across_width(self) -> torch.Tensor:
        """
        Minimum vertical seam: one column index per row, length height.
        Removing it shrinks the width.
        """
        return dp_seam(self.energy.data, direction='vertical', seed=self.border_energy)

    def find_seam_across_height(self) -> torch.Tensor:
        """
        Minimum horizontal seam: one row index per column, length width.
        Removing it shrinks the height.
        """
        return dp_seam(self.energy.data, direction='horizontal', seed=self.border_energy)

    def remove_seam_across_width(self, seam: Optional[torch.Tensor] = None):
        """
        Remove a vertical seam, shrinking width by one.

        Args:
            seam: Column index per row. The minimum seam is used if omitted.

        Raises:
            InvalidSeamError: width is already 1, or the seam is malformed.
                Nothing is modified in that case.
        """
        if self.width <= 1:
            raise InvalidSeamError("Cannot shrink width below 1")
        if seam is None:
            seam = self.find_seam_across_width()
        seam = self.pixels.remove_column(seam)
        self.energy.remove_column(seam)
        self.energy.rebuild_along(seam, direction='vertical')
        logger.debug("Removed vertical seam, now %dx%d", self.width, self.height)

    def remove_seam_across_height(self, seam: Optional[torch.Tensor] = None):
        """
        Remove a horizontal seam, shrinking height by one.

        Args:
            seam: Row index per column. The minimum seam is used if omitted.

        Raises:
            InvalidSeamError: height is already 1, or the seam is malformed.
                Nothing is modified in that case.
        """
        if self.height <= 1:
            raise InvalidSeamError("Cannot shrink height below 1")
        if seam is None:
            seam = self.find_seam_across_height()
        seam = self.pixels.remove_row(seam)
        self.energy.remove_row(seam)
        self.energy.rebuild_along(seam, direction='horizontal')
        logger.debug("Removed horizontal seam, now %dx%d", self.width, self.height)


def carve_image(image: torch.Tensor, n_seams: int,
                direction: str = 'vertical', **kwargs) -> torch.Tensor:
    """
    Seam carving with the dual-gradient energy.

    Args:
        image: Image tensor (3, H, W)
        n_seams: Number of seams to remove
        direction: 'vertical' (shrink width) or 'horizontal' (shrink height)
        **kwargs: Passed to SeamCarver

    Returns:
        Carved image
    """
    if direction == 'vertical':
        remove = SeamCarver.remove_seam_across_width
    elif direction == 'horizontal':
        remove = SeamCarver.remove_seam_across_height
    else:
        raise ValueError(f"Invalid direction: {direction}")

    carver = SeamCarver(image, **kwargs)
    for i in range(n_seams):
        remove(carver)

    return carver.current_image()


def carve_to_size(image: torch.Tensor, target_width: Optional[int] = None,
                  target_height: Optional[int] = None, **kwargs) -> torch.Tensor:
    """
    Shrink an image to the requested size, width first.

    Either target may be omitted to leave that dimension unchanged.

    Raises:
        InvalidInputError: a target is below 1 or larger than the image
    """
    carver = SeamCarver(image, **kwargs)
    target_width = carver.width if target_width is None else target_width
    target_height = carver.height if target_height is None else target_height

    if not 1 <= target_width <= carver.width:
        raise InvalidInputError(
            f"Target width {target_width} must lie in [1, {carver.width}]")
    if not 1 <= target_height <= carver.height:
        raise InvalidInputError(
            f"Target height {target_height} must lie in [1, {carver.height}]")

    logger.debug("Carving %dx%d to %dx%d", carver.width, carver.height,
                 target_width, target_height)

    while carver.width > target_width:
        carver.remove_seam_across_width()
    while carver.height > target_height:
        carver.remove_seam_across_height()

    return carver.current_image()

"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: the square root of the summed squared
RGB central differences along x and along y. Border pixels have no
central difference and get a fixed high energy instead.
"""

import logging

import torch

from .pixels import PixelStore, check_coordinates
from .seam import remove_seam

logger = logging.getLogger(__name__)

BORDER_ENERGY = 1000.0


def dual_gradient_energy(image: torch.Tensor,
                         border_energy: float = BORDER_ENERGY) -> torch.Tensor:
    """
    Compute dual-gradient energy for every pixel of an RGB image.

    E(x, y) = sqrt(|I(x+1, y) - I(x-1, y)|^2 + |I(x, y+1) - I(x, y-1)|^2)

    where |.|^2 sums the squared differences over the color channels.

    Args:
        image: RGB image tensor (C, H, W)
        border_energy: Energy assigned to the outermost rows and columns

    Returns:
        Energy map (H, W)
    """
    C, H, W = image.shape
    energy = torch.full((H, W), border_energy, dtype=image.dtype, device=image.device)

    if H > 2 and W > 2:
        dx = image[:, 1:-1, 2:] - image[:, 1:-1, :-2]
        dy = image[:, 2:, 1:-1] - image[:, :-2, 1:-1]
        energy[1:-1, 1:-1] = torch.sqrt((dx ** 2).sum(dim=0) + (dy ** 2).sum(dim=0))

    return energy


def dual_gradient_energy_at(image: torch.Tensor, xs: torch.Tensor, ys: torch.Tensor,
                            border_energy: float = BORDER_ENERGY) -> torch.Tensor:
    """
    Dual-gradient energy at a batch of in-range coordinates.

    Gives the same values as dual_gradient_energy(image)[ys, xs] without
    touching the rest of the grid.

    Args:
        image: RGB image tensor (C, H, W)
        xs: Column indices (N,)
        ys: Row indices (N,)
        border_energy: Energy assigned to border pixels

    Returns:
        Energies (N,)
    """
    C, H, W = image.shape
    energy = torch.full(xs.shape, border_energy, dtype=image.dtype, device=image.device)

    interior = (xs > 0) & (ys > 0) & (xs < W - 1) & (ys < H - 1)
    x = xs[interior]
    y = ys[interior]

    dx = image[:, y, x + 1] - image[:, y, x - 1]
    dy = image[:, y + 1, x] - image[:, y - 1, x]
    energy[interior] = torch.sqrt((dx ** 2).sum(dim=0) + (dy ** 2).sum(dim=0))

    return energy


class EnergyField:
    """
    Cached energy map kept in step with a PixelStore.

    The grid is compacted alongside the pixels on every seam removal and
    then refreshed only where neighbors changed (rebuild_along), so the
    cached value always matches a fresh computation.
    """

    def __init__(self, pixels: PixelStore, border_energy: float = BORDER_ENERGY):
        self.pixels = pixels
        self.border_energy = border_energy
        self._energy = None
        self.rebuild_all()

    @property
    def width(self) -> int:
        return self._energy.shape[1]

    @property
    def height(self) -> int:
        return self._energy.shape[0]

    def energy_at(self, x: int, y: int) -> float:
        check_coordinates(x, y, self.width, self.height)
        return self._energy[y, x].item()

    def rebuild_all(self):
        """Recompute every pixel's energy from the current pixels."""
        self._energy = dual_gradient_energy(self.pixels.data, self.border_energy)
        logger.debug("Rebuilt energy for %dx%d grid", self.width, self.height)

    def rebuild_along(self, seam: torch.Tensor, direction: str = 'vertical'):
        """
        Refresh energies next to a seam that has just been removed.

        For every line the seam crossed, recompute the pixel now sitting
        at the seam index and its two neighbors along the removed axis.
        Neighbors that fall outside the grid are skipped.

        Args:
            seam: The removed seam, in the indices it had before removal
            direction: 'vertical' (a column was removed) or 'horizontal'
        """
        device = self._energy.device
        seam = torch.as_tensor(seam, dtype=torch.long, device=device)
        steps = torch.tensor([-1, 0, 1], dtype=torch.long, device=device)
        lines = torch.arange(seam.shape[0], device=device).unsqueeze(1).expand(-1, 3)

        if direction == 'vertical':
            xs = (seam.unsqueeze(1) + steps).reshape(-1)
            ys = lines.reshape(-1)
        elif direction == 'horizontal':
            xs = lines.reshape(-1)
            ys = (seam.unsqueeze(1) + steps).reshape(-1)
        else:
            raise ValueError(f"Invalid direction: {direction}")

        inside = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        xs = xs[inside]
        ys = ys[inside]

        self._energy[ys, xs] = dual_gradient_energy_at(
            self.pixels.data, xs, ys, self.border_energy)

    def remove_column(self, seam: torch.Tensor):
        """Compact the grid by one column; values are not recomputed."""
        self._energy = remove_seam(self._energy, seam, direction='vertical')

    def remove_row(self, seam: torch.Tensor):
        """Compact the grid by one row; values are not recomputed."""
        self._energy = remove_seam(self._energy, seam, direction='horizontal')

    def to_tensor(self) -> torch.Tensor:
        return self._energy.clone()

    @property
    def data(self) -> torch.Tensor:
        return self._energy

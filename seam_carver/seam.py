"""
Seam computation and removal.

Seams are found with an exact dynamic-programming shortest path over the
energy map. A vertical seam holds one column index per row and spans the
full height; a horizontal seam holds one row index per column.
"""

import torch
from typing import Optional, Tuple

from .errors import InvalidSeamError


def _as_layers(energy: torch.Tensor, direction: str) -> torch.Tensor:
    # Vertical seams sweep rows; horizontal seams are the transpose.
    if direction == 'vertical':
        return energy
    elif direction == 'horizontal':
        return energy.t()
    else:
        raise ValueError(f"Invalid direction: {direction}")


def cumulative_cost_map(energy: torch.Tensor, direction: str = 'vertical',
                        seed: Optional[float] = None) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Minimum cumulative energy to reach every pixel from the first layer.

    For vertical seams each row is a layer and every cell may be reached
    from the three nearest cells of the row above (x-1, x, x+1). Ties go
    to the first candidate in that order, so the output is reproducible.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'
        seed: Cost assigned to every cell of the first layer. Defaults to
              the first layer's own energy.

    Returns:
        cost: (L, N) cumulative cost, L layers of N cells. For vertical
              seams this is (H, W), for horizontal seams (W, H).
        offsets: (L, N) int8 step to the chosen predecessor in the
                 previous layer: -1, 0 or +1. The first layer is 0.
    """
    layers = _as_layers(energy, direction)
    L, N = layers.shape

    cost = torch.full((L, N), float('inf'), dtype=layers.dtype, device=layers.device)
    offsets = torch.zeros((L, N), dtype=torch.int8, device=layers.device)

    if seed is None:
        cost[0] = layers[0]
    else:
        cost[0] = seed

    inf = torch.full((1,), float('inf'), dtype=layers.dtype, device=layers.device)

    for i in range(1, L):
        prev = cost[i - 1]
        from_low = torch.cat([inf, prev[:-1]])    # predecessor at index - 1
        from_high = torch.cat([prev[1:], inf])    # predecessor at index + 1

        candidates = torch.stack([from_low, prev, from_high]) + layers[i]
        choice = torch.argmin(candidates, dim=0)

        cost[i] = candidates.gather(0, choice.unsqueeze(0)).squeeze(0)
        offsets[i] = (choice - 1).to(torch.int8)

    return cost, offsets


def dp_seam(energy: torch.Tensor, direction: str = 'vertical',
            seed: Optional[float] = None) -> torch.Tensor:
    """
    Compute the minimum-energy seam by dynamic programming.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'
        seed: First-layer cost, see cumulative_cost_map

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    cost, offsets = cumulative_cost_map(energy, direction, seed)
    L = cost.shape[0]

    # First minimum in the last layer is the endpoint
    seam = torch.zeros(L, dtype=torch.long, device=energy.device)
    seam[-1] = torch.argmin(cost[-1])

    for i in range(L - 1, 0, -1):
        seam[i - 1] = seam[i] + offsets[i, seam[i]].long()

    return seam


def seam_energy(energy: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> float:
    """Total energy of the pixels a seam passes through."""
    layers = _as_layers(energy, direction)
    seam = torch.as_tensor(seam, dtype=torch.long, device=energy.device)
    lines = torch.arange(layers.shape[0], device=energy.device)
    return layers[lines, seam].sum().item()


def check_seam(seam, length: int, extent: int) -> torch.Tensor:
    """
    Validate a seam against the grid it will be removed from.

    Args:
        seam: Seam indices, anything torch.as_tensor accepts
        length: Required number of entries (the perpendicular dimension)
        extent: Size of the dimension being shrunk

    Returns:
        The seam as a long tensor

    Raises:
        InvalidSeamError: size-1 dimension, non-integer entries, wrong
            length, index out of [0, extent), or adjacent entries more
            than one apart
    """
    if seam is None:
        raise InvalidSeamError("Seam is None")
    if extent <= 1:
        raise InvalidSeamError("Cannot remove a seam from a dimension of size 1")

    seam = torch.as_tensor(seam)
    if seam.is_floating_point():
        # Only whole-valued floats are accepted; casting would truncate
        if not torch.isfinite(seam).all() or (seam != seam.round()).any():
            raise InvalidSeamError("Seam indices must be integers")
    elif seam.is_complex() or seam.dtype == torch.bool:
        raise InvalidSeamError(f"Seam indices must be integers, got {seam.dtype}")
    seam = seam.long()

    if seam.dim() != 1 or seam.shape[0] != length:
        raise InvalidSeamError(
            f"Seam has shape {tuple(seam.shape)}, expected ({length},)")
    if (seam < 0).any() or (seam >= extent).any():
        raise InvalidSeamError(f"Seam indices must lie in [0, {extent})")
    if length > 1 and (seam[1:] - seam[:-1]).abs().max() > 1:
        raise InvalidSeamError("Adjacent seam entries differ by more than 1")

    return seam


def remove_seam(image: torch.Tensor, seam: torch.Tensor,
                direction: str = 'vertical') -> torch.Tensor:
    """
    Remove a seam from an image.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices
        direction: 'vertical' or 'horizontal'

    Returns:
        Carved image with one row/column removed
    """
    if image.dim() == 2:
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    seam = torch.as_tensor(seam, dtype=torch.long, device=image.device)

    if direction == 'vertical':
        # Remove one pixel from each row
        keep = torch.ones(H, W, dtype=torch.bool, device=image.device)
        keep[torch.arange(H, device=image.device), seam] = False
        carved = image[:, keep].reshape(C, H, W - 1)

    elif direction == 'horizontal':
        # Remove one pixel from each column; work on the transpose so the
        # boolean mask keeps row-major order within each column
        keep = torch.ones(W, H, dtype=torch.bool, device=image.device)
        keep[torch.arange(W, device=image.device), seam] = False
        carved = image.transpose(1, 2)[:, keep].reshape(C, W, H - 1).transpose(1, 2)

    else:
        raise ValueError(f"Invalid direction: {direction}")

    carved = carved.contiguous()

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved

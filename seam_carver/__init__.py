"""
Content-aware image shrinking by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007, with the dual-gradient energy function.
"""

__version__ = "0.1.0"

from .errors import SeamCarvingError, InvalidInputError, OutOfRangeError, InvalidSeamError
from .pixels import PixelStore
from .energy import BORDER_ENERGY, EnergyField, dual_gradient_energy, dual_gradient_energy_at
from .seam import cumulative_cost_map, dp_seam, seam_energy, check_seam, remove_seam
from .carving import SeamCarver, carve_image, carve_to_size

__all__ = [
    'SeamCarvingError',
    'InvalidInputError',
    'OutOfRangeError',
    'InvalidSeamError',
    'PixelStore',
    'BORDER_ENERGY',
    'EnergyField',
    'dual_gradient_energy',
    'dual_gradient_energy_at',
    'cumulative_cost_map',
    'dp_seam',
    'seam_energy',
    'check_seam',
    'remove_seam',
    'SeamCarver',
    'carve_image',
    'carve_to_size',
]

"""
Interpolation methods for grid data.

This module provides the univariate slice interpolators and the bilinear
surface used to resolve table values between grid nodes.
"""

# Base classes
from .base import Interpolator

# Bilinear surface
from .bilinear import BiLinearInterpolation

# Linear interpolation
from .linear import LinearInterpolator

__all__ = [
    # Base classes
    'Interpolator',

    # Interpolation methods
    'LinearInterpolator',
    'BiLinearInterpolation',
]

"""
The core module introduces the key building blocks of dimensional:
:class:`DimensionalArray`, which couples raw array storage with semantically
meaningful axes, and :class:`Dimension`, the common base class of those axes.
"""

from .dimensions import \
    Dimension, IdentityDimension, X, Y, Z, Time, Dim, format_dims, slicedims

from .selectors import Selector, At, Near, Between

from .indexing import IndexStyle, normalize_selection

from .storage import ArrayStorage

from .broadcast import \
    DimensionalStyle, Broadcasted, broadcast, broadcasted, find_dimensional

from .array import AbstractDimensionalArray, DimensionalArray, copyto

__all__ = [
    'Dimension', 'IdentityDimension', 'X', 'Y', 'Z', 'Time', 'Dim',
    'format_dims', 'slicedims', 'Selector', 'At', 'Near', 'Between',
    'IndexStyle', 'normalize_selection', 'ArrayStorage', 'DimensionalStyle',
    'Broadcasted', 'broadcast', 'broadcasted', 'find_dimensional',
    'AbstractDimensionalArray', 'DimensionalArray', 'copyto']

__version__ = '0.1.0'

from .errors import DimensionMismatch, DimensionalArrayNotFound

from .core import \
    Dimension, IdentityDimension, X, Y, Z, Time, Dim, Selector, At, Near, \
    Between, IndexStyle, ArrayStorage, Broadcasted, broadcast, broadcasted, \
    find_dimensional, AbstractDimensionalArray, DimensionalArray, copyto

from .log import configure as configure_logging

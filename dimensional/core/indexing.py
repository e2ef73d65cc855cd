import enum
import numbers
import numpy as np
from .selectors import Selector


class IndexStyle(enum.Enum):
    """
    The categories an index can fall into when applied to a
    :class:`~dimensional.core.DimensionalArray`.  Each category is handled in
    exactly one way, which determines whether the result is wrapped in a new
    array with updated dimensions, or returned as raw data.
    """

    # one integer per axis, the result is a single element
    SCALAR = 'scalar'
    # one index per axis (after padding), mixing integers, slices and arrays
    STANDARD = 'standard'
    # a single index into the flattened storage of an array whose number of
    # axes is not one
    LINEAR = 'linear'
    # a single, non-integer index applied to a one-dimensional array
    LINEAR_1D = 'linear_1d'


def is_integer(x):
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def is_array_selector(x):
    if isinstance(x, range):
        return True
    return hasattr(x, 'shape') and hasattr(x, 'dtype') and len(x.shape) > 0


def check_no_newaxis(selection):
    if any(s is None for s in selection):
        raise IndexError(
            'numpy.newaxis is not supported, since the new axis would have '
            'no dimension to describe it')


def coerce_axis_index(dim_sel):
    """
    Bring a single-axis index into the forms the rest of the package expects:
    lists and ranges become integer arrays, and zero-dimensional integer arrays
    (as returned by e.g. :func:`numpy.argmax`) become plain integers
    """
    if isinstance(dim_sel, (list, range)):
        return np.asarray(dim_sel)
    if isinstance(dim_sel, np.ndarray) \
            and dim_sel.ndim == 0 \
            and np.issubdtype(dim_sel.dtype, np.integer):
        return int(dim_sel)
    return dim_sel


def _expand(index, ndim):
    n_ellipsis = sum(1 for sl in index if sl is Ellipsis)
    if n_ellipsis > 1:
        raise IndexError("an index can only have a single ellipsis ('...')")

    n_explicit = len(index) - n_ellipsis
    if n_explicit > ndim:
        raise IndexError(
            'too many indices for array; expected {ndim}, got {n}'.format(
                ndim=ndim, n=n_explicit))

    for sl in index:
        if sl is Ellipsis:
            # stands in for every axis not explicitly indexed
            for _ in range(ndim - n_explicit):
                yield slice(None)
        else:
            yield sl

    if not n_ellipsis:
        # trailing axes that were left out are selected in full
        for _ in range(ndim - n_explicit):
            yield slice(None)


def expand_ellipsis(index, ndim):
    """
    Produce exactly one entry per axis, replacing an `Ellipsis` with full
    slices and selecting any axes left out at the end in full

    Raises:
        IndexError: when there are more entries than axes, or more than one
            ellipsis
    """
    if not isinstance(index, tuple):
        index = (index,)
    return tuple(_expand(index, ndim))


def axis_range(dim_sel, dim_len):
    """
    Express an integer size, slice or range as the range of integer positions
    it covers along an axis of length `dim_len`
    """
    if isinstance(dim_sel, range):
        return dim_sel
    if isinstance(dim_sel, slice):
        return range(*dim_sel.indices(dim_len))
    if is_integer(dim_sel):
        return range(dim_sel)
    raise TypeError(
        'expected an integer, slice or range, but got {t}'.format(
            t=dim_sel.__class__))


def is_orthogonal_selection(selection):
    """
    True when numpy would treat the selection as a coordinate selection, i.e.,
    when an array selector is combined with other array selectors or integers.
    Such selections must be applied axis-by-axis instead, so that each array
    selects along its own axis.
    """
    if not isinstance(selection, tuple):
        return False
    n_arrays = sum(1 for s in selection if is_array_selector(s))
    n_integers = sum(1 for s in selection if is_integer(s))
    return n_arrays > 1 or (n_arrays == 1 and n_integers > 0)


def _axis_positions(dim_sel, dim_len):
    if isinstance(dim_sel, slice):
        return np.arange(*dim_sel.indices(dim_len))
    if is_integer(dim_sel):
        return np.array([dim_sel])
    return np.asarray(dim_sel)


def orthogonal_mesh(selection, shape):
    """
    Translate a per-axis selection into an open mesh that numpy's advanced
    indexing applies axis-by-axis

    Returns:
        tuple: the mesh, and the axes selected by a single integer, which must
            be squeezed out of the result
    """
    positions = [_axis_positions(s, n) for s, n in zip(selection, shape)]
    dropped = tuple(i for i, s in enumerate(selection) if is_integer(s))
    return np.ix_(*positions), dropped


def orthogonal_read(arr, selection):
    mesh, dropped = orthogonal_mesh(selection, arr.shape)
    result = arr[mesh]
    if dropped:
        result = np.squeeze(result, axis=dropped)
    return result


def orthogonal_write(arr, selection, value):
    mesh, dropped = orthogonal_mesh(selection, arr.shape)
    kept = len(selection) - len(dropped)
    if dropped and np.ndim(value) == kept:
        value = np.expand_dims(value, dropped)
    arr[mesh] = value


def flat_index(index):
    """
    A boolean mask with the shape of the array selects from its flattened
    storage in row-major order; any other index applies to it unchanged
    """
    if isinstance(index, np.ndarray) \
            and index.dtype == np.bool_ \
            and index.ndim > 1:
        return index.ravel()
    return index


def linear_coordinates(index, shape):
    """
    Translate an index into the flattened, row-major storage of an array with
    the given shape into one integer coordinate array per axis
    """
    positions = np.arange(int(np.prod(shape)))[flat_index(index)]
    return np.unravel_index(positions, shape)


def _normalize_tuple(index, dims):
    selection = expand_ellipsis(index, len(dims))
    check_no_newaxis(selection)
    selection = tuple(
        dim.integer_based_slice(coerce_axis_index(dim_sel))
        for dim, dim_sel in zip(dims, selection))

    if all(is_integer(s) for s in selection):
        return IndexStyle.SCALAR, selection
    return IndexStyle.STANDARD, selection


def normalize_selection(index, dims):
    """
    Classify an index applied to an array with the given dimensions, and
    translate it into a selection storage can understand

    Args:
        index: the index, as passed to `__getitem__`
        dims (tuple): the dimensions of the array being indexed

    Returns:
        tuple: an :class:`IndexStyle` and the normalized selection.  For
            :attr:`IndexStyle.STANDARD` and :attr:`IndexStyle.SCALAR`
            selections, the selection is a tuple with one entry per axis, with
            coordinate selectors already resolved to integer indices.  An
            :attr:`IndexStyle.LINEAR` selection indexes the flattened storage
    """
    if isinstance(index, tuple) \
            or index is Ellipsis \
            or isinstance(index, Selector):
        return _normalize_tuple(index, dims)

    check_no_newaxis((index,))
    index = coerce_axis_index(index)

    if len(dims) != 1:
        return IndexStyle.LINEAR, index

    if is_integer(index):
        return IndexStyle.SCALAR, index
    return IndexStyle.LINEAR_1D, index

import numpy as np
from ..config import ArrayConfig
from ..errors import DimensionMismatch
from ..util import tuplify
from .indexing import is_integer
from .selectors import Selector


def _coordinates(values):
    values = np.asarray(values)
    if values.ndim != 1:
        raise ValueError(
            'coordinate values must be one-dimensional, '
            'but had shape {shape}'.format(shape=values.shape))
    return values


def _summarize(values):
    n = ArrayConfig.repr_coordinates
    if len(values) <= n * 2:
        return ', '.join(map(str, values))
    head = ', '.join(map(str, values[:n]))
    tail = ', '.join(map(str, values[-n:]))
    return '{head}, ..., {tail}'.format(**locals())


class Dimension(object):
    """
    Common base class representing one named, ordered axis of a
    :class:`~dimensional.core.DimensionalArray`.

    A dimension pairs a *kind*, the label of the axis (e.g. `"X"` or
    `"Time"`), with a one-dimensional sequence of coordinate values, one per
    item along the axis.  Dimensions are never modified once an array holds
    them; indexing derives new ones via :meth:`metaslice`.

    A dimension created without values is *unbound*.  It receives the
    coordinates `0..n-1` when it is attached to an axis of length `n`.

    Args:
        values (sequence): the coordinate values for this axis

    See Also:
        :class:`X`
        :class:`Y`
        :class:`Z`
        :class:`Time`
        :class:`Dim`
        :class:`IdentityDimension`
    """

    kind = None

    def __init__(self, values=None):
        super(Dimension, self).__init__()
        self.values = None if values is None else _coordinates(values)

    @property
    def name(self):
        return self.kind if self.kind is not None else self.__class__.__name__

    @property
    def is_bound(self):
        return self.values is not None

    def __len__(self):
        if self.values is None:
            raise TypeError(
                '{self!r} is unbound, and has no length'.format(**locals()))
        return len(self.values)

    def with_values(self, values):
        """
        Produce a new dimension of the same kind, with different coordinates
        """
        return self.__class__(values)

    def bind(self, size):
        """
        Return this dimension if it already has coordinates, or a copy of it
        with the coordinates `0..size-1` otherwise
        """
        if self.is_bound:
            return self
        return self.with_values(np.arange(size))

    def coordinate_at(self, index):
        return self.values[index]

    def metaslice(self, index):
        """
        Produce a new instance of this dimension, given an index that has
        already been applied to the corresponding axis of some storage

        Args:
            index (int, slice, range or array): the integer-based index

        Returns:
            Dimension: a new dimension of the same kind, with coordinates
                restricted to those selected by the index, or `None` when the
                index is a single integer, which eliminates the axis
        """
        if is_integer(index):
            return None
        if isinstance(index, range):
            index = np.arange(index.start, index.stop, index.step)
        return self.with_values(self.values[index])

    def reference(self, index):
        """
        Produce the dimension that records an axis eliminated by the integer
        index `index`, i.e., this dimension pinned to a single coordinate
        """
        return self.with_values(self.values[[index]])

    def integer_based_slice(self, index):
        """
        Transform a coordinate selector into integer indices that storage can
        understand.  Integer-based indices are returned unchanged.

        Args:
            index (Selector or integer-based index): the index to transform
        """
        if isinstance(index, Selector):
            return index.integer_based_slice(self.values)
        return index

    def __eq__(self, other):
        try:
            if self.kind != other.kind:
                return False
            if self.values is None or other.values is None:
                return self.values is None and other.values is None
            return np.array_equal(self.values, other.values)
        except AttributeError:
            return False

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        if self.values is None:
            return '{name}()'.format(name=self.name)
        return '{name}([{values}], len={n})'.format(
            name=self.name, values=_summarize(self.values), n=len(self))


class X(Dimension):
    kind = 'X'


class Y(Dimension):
    kind = 'Y'


class Z(Dimension):
    kind = 'Z'


class Time(Dimension):
    """
    A dimension whose coordinates are points in time, usually
    :class:`numpy.datetime64` values
    """
    kind = 'Time'


class Dim(Dimension):
    """
    A dimension with an arbitrary, user-defined kind

    Args:
        kind (str): the label of the axis
        values (sequence): the coordinate values for this axis

    Examples:
        >>> from dimensional import Dim
        >>> Dim('band', ['red', 'green', 'blue'])
        band([red, green, blue], len=3)
    """

    def __init__(self, kind, values=None):
        self.kind = kind
        super(Dim, self).__init__(values)

    def with_values(self, values):
        return Dim(self.kind, values)


class IdentityDimension(Dimension):
    """
    A dimension with no meaningful coordinates.  Its coordinates are always the
    integer positions `0..size-1`, so slicing it simply yields another
    `IdentityDimension` of the sliced length.

    Examples:
        >>> from dimensional import DimensionalArray, IdentityDimension
        >>> import numpy as np
        >>> arr = DimensionalArray(np.zeros(100), IdentityDimension(100))
        >>> arr[4:6].shape
        (2,)
    """

    kind = 'Identity'

    def __init__(self, size=None):
        values = None if size is None else np.arange(size)
        super(IdentityDimension, self).__init__(values)

    def with_values(self, values):
        return IdentityDimension(len(values))


def format_dims(shape, dims):
    """
    Normalize the dimensions supplied for data of the given shape: a single
    dimension is wrapped in a tuple, `None` becomes an
    :class:`IdentityDimension`, and dimension classes or unbound instances
    receive integer coordinates.

    Raises:
        DimensionMismatch: when the number of dimensions and axes differ
        TypeError: when an item is not a dimension
    """
    dims = tuplify(dims)

    if len(dims) != len(shape):
        raise DimensionMismatch(
            dims,
            shape,
            'data has {n} axes, but {m} dims were provided: {dims}'.format(
                n=len(shape), m=len(dims), dims=dims))

    formatted = []
    for dim, size in zip(dims, shape):
        if dim is None:
            dim = IdentityDimension(size)
        elif isinstance(dim, type) and issubclass(dim, Dimension):
            dim = dim().bind(size)
        elif isinstance(dim, Dimension):
            dim = dim.bind(size)
        else:
            raise TypeError(
                'dims must be Dimension instances, but got {t}'.format(
                    t=dim.__class__))
        formatted.append(dim)

    return tuple(formatted)


def slicedims(dims, refdims, index):
    """
    Derive the dimensions describing the result of applying `index` to an
    array with dimensions `dims`

    Args:
        dims (tuple): the dimensions of the array that was indexed
        refdims (tuple): the reference dimensions of the array that was indexed
        index (tuple): one integer-based index per dimension

    Returns:
        tuple: the new dimensions and the new reference dimensions.  Axes
            eliminated by an integer index are appended to the reference
            dimensions, in their original order
    """
    index = tuplify(index)

    if len(index) != len(dims):
        raise IndexError(
            'expected {n} indices, one per dimension, but got {m}'.format(
                n=len(dims), m=len(index)))

    new_dims = []
    new_refdims = list(refdims)

    for dim, dim_sel in zip(dims, index):
        sliced = dim.metaslice(dim_sel)
        if sliced is None:
            new_refdims.append(dim.reference(dim_sel))
        else:
            new_dims.append(sliced)

    return tuple(new_dims), tuple(new_refdims)

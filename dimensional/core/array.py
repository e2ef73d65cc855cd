import abc
import logging
import numpy as np
from ..config import ArrayConfig
from ..errors import DimensionMismatch
from ..util import tuplify
from . import storage
from .broadcast import DimensionalStyle
from .dimensions import IdentityDimension, format_dims, slicedims
from .indexing import IndexStyle, normalize_selection, axis_range, is_integer

LOGGER = logging.getLogger(__name__)


def _unwrap_index(index):
    # boolean masks produced by comparisons are dimensional arrays themselves
    if isinstance(index, tuple):
        return tuple(_unwrap_index(i) for i in index)
    if isinstance(index, DimensionalStyle):
        return np.asarray(index)
    return index


class AbstractDimensionalArray(DimensionalStyle):
    """
    Common base class for arrays that couple raw storage with one
    :class:`~dimensional.core.Dimension` per axis.

    Sub-classes provide the `data`, `dims`, `refdims` and `name` accessors, and
    :meth:`rebuild`, the single path through which every derived array is
    constructed.  Everything else (indexing, views, copies, similar arrays,
    reductions and broadcasting) is implemented here in terms of those.
    """

    @property
    @abc.abstractmethod
    def data(self):
        """The underlying storage"""

    @property
    @abc.abstractmethod
    def refdims(self):
        """Dimensions eliminated by indexing or reduction, kept for provenance"""

    @property
    @abc.abstractmethod
    def name(self):
        """A display label, propagated to derived arrays"""

    @abc.abstractmethod
    def rebuild(self, data, dims=None, refdims=None, name=None):
        """
        Produce a new array from new data, taking any of dims, refdims or name
        not provided from this instance
        """

    def rename(self, name):
        """
        Produce a new array with the same data and dimensions, but a new name
        """
        return self.rebuild(self.data, name=name)

    def rebuildsliced(self, data, index, name=None):
        """
        Produce a new array from data that resulted from applying index to this
        array's storage.  Each dimension is sliced by its own entry in index.
        Dimensions eliminated by an integer entry move to `refdims`.

        Args:
            data: the already-sliced storage
            index (tuple): one integer-based index per dimension
            name (str): the name of the new array, defaulting to this array's
        """
        dims, refdims = slicedims(self.dims, self.refdims, index)
        return self.rebuild(data, dims, refdims, name)

    @property
    def shape(self):
        return tuple(self.data.shape)

    @property
    def ndim(self):
        return len(self.shape)

    @property
    def dtype(self):
        return self.data.dtype

    @property
    def size(self):
        return int(np.prod(self.shape))

    def __len__(self):
        return len(self.data)

    def __iter__(self):
        return iter(self.data)

    def dimnum(self, kind):
        """
        Return the axis number of the dimension labeled `kind`.  Integer axis
        numbers, including negative ones, are normalized and returned.

        Raises:
            KeyError: when no dimension has the label
            IndexError: when an integer axis number is out of range
        """
        if is_integer(kind):
            axis = kind + self.ndim if kind < 0 else kind
            if not 0 <= axis < self.ndim:
                raise IndexError(
                    'axis {kind} is out of bounds for an array with {n} '
                    'dimensions'.format(kind=kind, n=self.ndim))
            return axis

        for i, dim in enumerate(self.dims):
            if dim.name == kind:
                return i

        raise KeyError(
            '{kind!r} is not one of the dims {dims}'.format(
                kind=kind, dims=self.dims))

    def dim(self, kind):
        return self.dims[self.dimnum(kind)]

    def _unwrapped(self, data, selection):
        return data

    def _sliced(self, data, selection):
        return self.rebuildsliced(data, selection)

    def _sliced_1d(self, data, selection):
        return self.rebuildsliced(data, (selection,))

    _index_handlers = {
        IndexStyle.SCALAR: _unwrapped,
        IndexStyle.STANDARD: _sliced,
        IndexStyle.LINEAR: _unwrapped,
        IndexStyle.LINEAR_1D: _sliced_1d,
    }

    def _index(self, index, access, linear_access):
        style, selection = normalize_selection(_unwrap_index(index), self.dims)
        if style is IndexStyle.LINEAR:
            data = linear_access(self.data, selection)
        else:
            data = access(self.data, selection)
        return self._index_handlers[style](self, data, selection)

    def __getitem__(self, index):
        return self._index(index, storage.read, storage.read_linear)

    def view(self, *index):
        """
        Index this array like `__getitem__` does, but return a view that shares
        memory with this array's storage wherever the storage allows it, e.g.
        `arr.view(slice(0, 5), 2)` is the view counterpart of `arr[0:5, 2]`.
        With no arguments, the view covers the entire array
        """
        if not index:
            index = Ellipsis
        elif len(index) == 1:
            index = index[0]
        return self._index(index, storage.view, storage.view_linear)

    def __setitem__(self, index, value):
        if isinstance(value, AbstractDimensionalArray):
            value = value.data
        style, selection = normalize_selection(_unwrap_index(index), self.dims)
        if style is IndexStyle.LINEAR:
            storage.write_linear(self.data, selection, value)
        else:
            storage.write(self.data, selection, value)

    def copy(self):
        """
        Produce a new array with the same dimensions and name, and an
        independent copy of this array's storage
        """
        return self.rebuild(storage.copy(self.data))

    def __copy__(self):
        return self.copy()

    def __array__(self, dtype=None, copy=None):
        arr = storage.to_numpy(self.data, dtype=dtype)
        return arr.copy() if copy else arr

    def to_numpy(self):
        return np.asarray(self)

    def similar(self, dtype=None, shape=None):
        """
        Allocate new, uninitialized storage like this array's

        Args:
            dtype (np.dtype): the element type, defaulting to this array's
            shape (tuple): When omitted, the result is a dimensional array with
                this array's dims and an empty name.  When a tuple of plain
                integers, raw storage of that shape is returned, with no
                dimensions.  When a tuple with one range or slice per axis
                (integers among them standing for `range(n)`), the result is a
                dimensional array whose dims are sliced by those ranges.

        Raises:
            DimensionMismatch: when ranges are given for the wrong number of
                axes
        """
        if shape is None:
            return self.rebuild(storage.allocate(self.data, dtype), name='')

        shape = tuplify(shape)

        if all(is_integer(s) for s in shape):
            return storage.allocate(self.data, dtype, shape)

        if len(shape) != self.ndim:
            raise DimensionMismatch(
                self.dims,
                shape,
                '{n} axis ranges were given for an array with dims '
                '{dims}'.format(n=len(shape), dims=self.dims))

        ranges = tuple(
            axis_range(s, len(dim)) for s, dim in zip(shape, self.dims))
        data = storage.allocate(
            self.data, dtype, tuple(len(r) for r in ranges))
        return self.rebuildsliced(data, ranges, name='')

    def _apply_reduction_to_dimensions(self, result, axes, keepdims):
        if not keepdims and np.ndim(result) == 0:
            return result

        reduced_axes = set(axes)
        refdims = self.refdims + tuple(
            self.dims[i] for i in sorted(reduced_axes))

        if keepdims:
            new_dims = [
                IdentityDimension(1) if i in reduced_axes else dim
                for i, dim in enumerate(self.dims)]
        else:
            new_dims = [
                dim for i, dim in enumerate(self.dims)
                if i not in reduced_axes]

        return self.rebuild(result, tuple(new_dims), refdims)

    def _reduce(self, func, axis, keepdims, out=None, **kwargs):
        if axis is None:
            axes = tuple(range(self.ndim))
        else:
            axes = tuple(self.dimnum(a) for a in tuplify(axis))

        if out is not None:
            kwargs['out'] = \
                out.data if isinstance(out, AbstractDimensionalArray) else out

        raw = storage.to_numpy(self.data)
        result = func(
            raw,
            axis=None if axis is None else axes,
            keepdims=keepdims,
            **kwargs)

        if out is not None:
            return out
        return self._apply_reduction_to_dimensions(result, axes, keepdims)

    def sum(self, axis=None, dtype=None, out=None, keepdims=False):
        return self._reduce(np.sum, axis, keepdims, out=out, dtype=dtype)

    def mean(self, axis=None, dtype=None, out=None, keepdims=False):
        return self._reduce(np.mean, axis, keepdims, out=out, dtype=dtype)

    def std(self, axis=None, dtype=None, out=None, ddof=0, keepdims=False):
        return self._reduce(
            np.std, axis, keepdims, out=out, dtype=dtype, ddof=ddof)

    def max(self, axis=None, out=None, keepdims=False):
        return self._reduce(np.max, axis, keepdims, out=out)

    def min(self, axis=None, out=None, keepdims=False):
        return self._reduce(np.min, axis, keepdims, out=out)


class DimensionalArray(AbstractDimensionalArray):
    """
    `DimensionalArray` couples raw, N-dimensional storage with one
    :class:`~dimensional.core.Dimension` per axis, so that its axes can be
    addressed by meaningful labels and coordinates.

    Dimensions are carried through indexing, views, copies, similar arrays,
    reductions and broadcasting.  Axes eliminated along the way (by an integer
    index, or by a reduction) are remembered in `refdims`.  Dimensions, reference
    dimensions and name never change once an array exists; only the values in
    its storage may be modified, via item assignment.

    Args:
        data: The storage containing the raw data for this instance, e.g. a
            :class:`numpy.ndarray`, a zarr array or an
            :class:`~dimensional.core.ArrayStorage`.  Anything else is converted
            via :func:`numpy.asarray`
        dims (Dimension or tuple): one dimension per axis of data.  A single
            dimension may be passed on its own, and `None` stands for an
            :class:`~dimensional.core.IdentityDimension`
        name (str): a display name for the array
        refdims (tuple): reference dimensions, usually only provided by
            :meth:`rebuild`

    Raises:
        DimensionMismatch: when the length of any dimension differs from the
            size of the corresponding axis of data

    Examples:
        >>> from dimensional import DimensionalArray, X, Y
        >>> import numpy as np
        >>> arr = DimensionalArray(np.zeros((10, 5)), (X(), Y()), 'temperature')
        >>> sliced = arr[3, 0:5]
        >>> sliced.dims
        (Y([0, 1, 2, 3, 4], len=5),)
        >>> sliced.refdims
        (X([3], len=1),)

    See Also:
        :class:`~dimensional.core.X`
        :class:`~dimensional.core.Dim`
        :class:`~dimensional.core.At`
    """

    def __init__(self, data, dims, name=None, refdims=()):
        super(DimensionalArray, self).__init__()
        data = storage.as_storage(data)
        shape = tuple(data.shape)
        dims = format_dims(shape, dims)

        lengths = tuple(len(dim) for dim in dims)
        if lengths != shape:
            raise DimensionMismatch(dims, shape)

        self._data = data
        self._dims = dims
        self._refdims = tuple(refdims)
        self._name = ArrayConfig.default_name if name is None else name
        LOGGER.debug('constructed %r', self)

    @classmethod
    def from_function(cls, func, dim, name=None):
        """
        Produce a one-dimensional array by applying `func` to each coordinate of
        `dim`, in order

        Args:
            func (callable): a function of a single coordinate value
            dim (Dimension): a bound dimension
            name (str): the name of the result.  Defaults to
                `"<function-name>(<dimension-name>)"`

        Examples:
            >>> from dimensional import DimensionalArray, X
            >>> import numpy as np
            >>> arr = DimensionalArray.from_function(np.sqrt, X([1, 4, 9]))
            >>> arr.name
            'sqrt(X)'
        """
        data = np.asarray([func(v) for v in dim.values])

        if name is None:
            func_name = getattr(func, '__name__', func.__class__.__name__)
            name = ArrayConfig.function_name_template.format(
                func=func_name, dim=dim.name)

        return cls(data, (dim,), name=name)

    @property
    def data(self):
        return self._data

    @property
    def dims(self):
        return self._dims

    @property
    def refdims(self):
        return self._refdims

    @property
    def name(self):
        return self._name

    def rebuild(self, data, dims=None, refdims=None, name=None):
        return self.__class__(
            data,
            self.dims if dims is None else dims,
            name=self.name if name is None else name,
            refdims=self.refdims if refdims is None else refdims)

    def __repr__(self):
        return \
            '{cls}(name={self.name!r}, dims={self.dims}, ' \
            'refdims={self.refdims}, dtype={self.dtype})'.format(
                cls=self.__class__.__name__, self=self)


def copyto(dst, src):
    """
    Copy the values of src into the storage of dst.  Either may be a
    dimensional array or raw storage; dimensions are never changed.

    Returns:
        dst

    Raises:
        DimensionMismatch: when dst and src have different shapes
    """
    if isinstance(dst, AbstractDimensionalArray):
        dst_data, dims = dst.data, dst.dims
    else:
        dst_data, dims = dst, ()

    if isinstance(src, AbstractDimensionalArray):
        src_data = src.data
    else:
        src_data = src

    dst_shape = tuple(np.shape(dst_data))
    src_shape = tuple(np.shape(src_data))
    if dst_shape != src_shape:
        raise DimensionMismatch(
            dims,
            src_shape,
            'cannot copy data of shape {src_shape} into storage of shape '
            '{dst_shape}'.format(**locals()))

    storage.write(dst_data, Ellipsis, storage.read(src_data, Ellipsis))
    return dst

"""
The storage adapter: the single place where a
:class:`~dimensional.core.DimensionalArray` touches the raw data it wraps.

Anything exposing `shape`, `dtype` and `__getitem__` can act as storage:
:class:`numpy.ndarray` instances, third-party array-likes such as zarr or h5py
arrays, and subclasses of :class:`ArrayStorage`.  Errors raised by storage are
never translated.
"""

import abc
import numpy as np
from .indexing import \
    is_orthogonal_selection, orthogonal_read, orthogonal_write, flat_index, \
    linear_coordinates


class ArrayStorage(abc.ABC):
    """
    Base class for custom storage backends, e.g. ones that read lazily from
    disk.  Sub-classes must provide `shape`, `dtype`, `__getitem__` and
    `__setitem__`, and may override :meth:`view`, :meth:`similar` and
    :meth:`copy` when they can do better than the in-memory defaults.
    """

    @property
    @abc.abstractmethod
    def shape(self):
        """The shape of the stored array"""

    @property
    @abc.abstractmethod
    def dtype(self):
        """The element type of the stored array"""

    @abc.abstractmethod
    def __getitem__(self, selection):
        """Read the items picked out by selection"""

    @abc.abstractmethod
    def __setitem__(self, selection, value):
        """Write value to the items picked out by selection"""

    @property
    def ndim(self):
        return len(self.shape)

    def __len__(self):
        return self.shape[0]

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self[...], dtype=dtype)

    def view(self, selection):
        """
        Return a view of the items picked out by selection.  Backends that
        cannot share memory with a view return a copy, which is the default
        """
        return self[selection]

    def similar(self, dtype=None, shape=None):
        """
        Allocate new, uninitialized in-memory storage
        """
        return np.empty(
            self.shape if shape is None else shape,
            dtype=self.dtype if dtype is None else dtype)

    def copy(self):
        return np.array(self[...])


def is_storage(data):
    return hasattr(data, 'shape') \
        and hasattr(data, 'dtype') \
        and hasattr(data, '__getitem__')


def as_storage(data):
    """
    Return data unchanged if it satisfies the storage interface, or convert it
    into a numpy array otherwise
    """
    if is_storage(data) and not isinstance(data, np.generic):
        return data
    return np.asarray(data)


def _orthogonal_read(storage, selection):
    accessor = getattr(storage, 'oindex', None)
    if accessor is not None:
        return accessor[selection]
    return orthogonal_read(storage, selection)


def _detach(storage, result):
    if isinstance(storage, np.ndarray) \
            and isinstance(result, np.ndarray) \
            and np.may_share_memory(result, storage):
        return result.copy()
    return result


def read(storage, selection):
    """
    Read the items picked out by selection.  The result never shares memory
    with a numpy storage array
    """
    if is_orthogonal_selection(selection):
        result = _orthogonal_read(storage, selection)
    else:
        result = storage[selection]
    return _detach(storage, result)


def view(storage, selection):
    """
    Return the items picked out by selection, sharing memory with storage
    wherever the storage and the selection allow it
    """
    if is_orthogonal_selection(selection):
        return _orthogonal_read(storage, selection)
    if isinstance(storage, ArrayStorage):
        return storage.view(selection)
    return storage[selection]


def write(storage, selection, value):
    if is_orthogonal_selection(selection):
        accessor = getattr(storage, 'oindex', None)
        if accessor is not None:
            accessor[selection] = value
        else:
            orthogonal_write(storage, selection, value)
    else:
        storage[selection] = value


def _coordinates(storage, index):
    # zero-dimensional storage has nothing to flatten
    if not len(storage.shape):
        return index
    return linear_coordinates(index, tuple(storage.shape))


def read_linear(storage, index):
    """
    Read the items picked out by an index into the flattened, row-major
    storage.  Like :func:`read`, the result never shares memory with a numpy
    storage array
    """
    return _detach(storage, storage[_coordinates(storage, index)])


def view_linear(storage, index):
    """
    Like :func:`read_linear`, but sharing memory with numpy storage whenever
    it can be flattened without a copy
    """
    if isinstance(storage, np.ndarray) and storage.ndim:
        return storage.reshape(-1)[flat_index(index)]
    return read_linear(storage, index)


def write_linear(storage, index, value):
    storage[_coordinates(storage, index)] = value


def allocate(storage, dtype=None, shape=None):
    """
    Allocate new, uninitialized storage like `storage`, optionally with a
    different element type and/or shape
    """
    if isinstance(storage, ArrayStorage):
        return storage.similar(dtype=dtype, shape=shape)
    if isinstance(storage, np.ndarray) and shape is None:
        return np.empty_like(storage, dtype=dtype)
    return np.empty(
        storage.shape if shape is None else shape,
        dtype=storage.dtype if dtype is None else dtype)


def copy(storage):
    if isinstance(storage, (np.ndarray, ArrayStorage)):
        return storage.copy()
    return np.array(storage[...])


def to_numpy(storage, dtype=None):
    return np.asarray(storage, dtype=dtype)

"""
Broadcasting support for dimensional arrays.

A broadcast expression is first built as a lazy tree of :class:`Broadcasted`
nodes, whose leaves are scalars, raw arrays and dimensional arrays.  When the
tree is materialized, the first dimensional array found in it (depth-first,
left to right) is used as the template that labels the axes of the result.
"""

import abc
import logging
import numbers
import numpy as np
from numpy.lib.mixins import NDArrayOperatorsMixin
from ..errors import DimensionMismatch, DimensionalArrayNotFound
from .storage import is_storage

LOGGER = logging.getLogger(__name__)


def _is_handled(x):
    return isinstance(x, DimensionalStyle._HANDLED_TYPES) \
        or isinstance(x, (DimensionalStyle, Broadcasted)) \
        or is_storage(x)


class DimensionalStyle(NDArrayOperatorsMixin, metaclass=abc.ABCMeta):
    """
    Marker base class for arrays that carry dimensions and so can label the
    result of a broadcast.  Instances take part in numpy ufuncs, and in all the
    arithmetic and comparison operators :class:`NDArrayOperatorsMixin`
    derives from them, via :func:`broadcast`.  Besides numbers and numpy
    arrays, any storage-like operand (see :mod:`dimensional.core.storage`) may
    take part.
    """

    _HANDLED_TYPES = (np.ndarray, np.generic, numbers.Number, list)

    @property
    @abc.abstractmethod
    def dims(self):
        pass

    @property
    @abc.abstractmethod
    def shape(self):
        pass

    @abc.abstractmethod
    def rebuildsliced(self, data, index, name=None):
        pass

    def __eq__(self, other):
        if not _is_handled(other):
            return NotImplemented
        return np.equal(self, other)

    def __ne__(self, other):
        if not _is_handled(other):
            return NotImplemented
        return np.not_equal(self, other)

    __hash__ = None

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        out = kwargs.pop('out', ())
        for x in inputs + out:
            if not _is_handled(x):
                return NotImplemented

        if method != '__call__':
            inputs = tuple(_evaluate(x) for x in inputs)
            if out:
                kwargs['out'] = tuple(_evaluate(x) for x in out)
            return getattr(ufunc, method)(*inputs, **kwargs)

        bc = broadcasted(ufunc, *inputs, **kwargs)

        if not out:
            return bc.materialize()
        if len(out) == 1:
            return bc.materialize(out=out[0])
        return NotImplemented


def _shape(x):
    if isinstance(x, (Broadcasted, DimensionalStyle)) or is_storage(x):
        return tuple(x.shape)
    return np.shape(x)


def _evaluate(x):
    if isinstance(x, Broadcasted):
        return x.evaluate()
    if isinstance(x, DimensionalStyle):
        return np.asarray(x)
    if is_storage(x) and not isinstance(x, (np.ndarray, np.generic)):
        return np.asarray(x[...])
    return x


class Broadcasted(object):
    """
    A lazy, element-wise application of `func` to `args`

    Args:
        func (callable): an element-wise function of numpy arrays, usually a
            :class:`numpy.ufunc`
        args (tuple): the arguments; scalars, arrays, dimensional arrays or
            other :class:`Broadcasted` instances
        kwargs (dict): keyword arguments passed on to func
    """

    def __init__(self, func, args, kwargs=None):
        super(Broadcasted, self).__init__()
        self.func = func
        self.args = tuple(args)
        self.kwargs = kwargs or {}

    @property
    def shape(self):
        return np.broadcast_shapes(*[_shape(a) for a in self.args])

    @property
    def ndim(self):
        return len(self.shape)

    @property
    def axes(self):
        """
        One range of integer positions per axis of the broadcast's output
        """
        return tuple(range(n) for n in self.shape)

    def evaluate(self):
        """
        Compute the raw, unlabeled result of this expression
        """
        args = [_evaluate(a) for a in self.args]
        return self.func(*args, **self.kwargs)

    def materialize(self, out=None):
        """
        Compute the result of this expression and store it in a new dimensional
        array, labeled by the first dimensional array among the arguments, or in
        `out`, when provided

        Raises:
            DimensionalArrayNotFound: when no argument carries dimensions
            DimensionMismatch: when the output shape differs from the shape of
                the labeling array
        """
        values = self.evaluate()
        if isinstance(values, tuple):
            return tuple(self._store(v) for v in values)
        return self._store(values, out)

    def _store(self, values, out=None):
        values = np.asarray(values)
        if out is None:
            out = similar(self, values.dtype)
        out[...] = values
        return out

    def __repr__(self):
        name = getattr(self.func, '__name__', repr(self.func))
        return 'Broadcasted({name}, shape={shape})'.format(
            name=name, shape=self.shape)


def broadcasted(func, *args, **kwargs):
    """
    Build a lazy broadcast expression.  Nest calls to fuse several operations
    into one expression, e.g.
    `broadcasted(np.add, a, broadcasted(np.multiply, b, 2))`
    """
    return Broadcasted(func, args, kwargs)


def broadcast(func, *args, **kwargs):
    """
    Apply `func` element-wise to `args`, returning a dimensional array labeled
    like the first dimensional array among them
    """
    return broadcasted(func, *args, **kwargs).materialize()


def _find_dimensional(x):
    if isinstance(x, DimensionalStyle):
        return x
    if isinstance(x, Broadcasted):
        for arg in x.args:
            found = _find_dimensional(arg)
            if found is not None:
                return found
    return None


def find_dimensional(bc):
    """
    Find the first dimensional array in a broadcast expression, searching its
    arguments depth-first, from left to right

    Raises:
        DimensionalArrayNotFound: when there is no dimensional array in the
            expression
    """
    found = _find_dimensional(bc)
    if found is None:
        raise DimensionalArrayNotFound(getattr(bc, 'args', (bc,)))
    return found


def similar(bc, dtype):
    """
    Allocate an uninitialized dimensional array for the output of a broadcast
    expression

    Raises:
        DimensionalArrayNotFound: when there is no dimensional array in the
            expression
        DimensionMismatch: when the broadcast output shape differs from the
            shape of the array used to label it
    """
    template = find_dimensional(bc)
    shape = bc.shape

    if tuple(template.shape) != shape:
        raise DimensionMismatch(
            template.dims,
            shape,
            'broadcast output shape {shape} differs from the dims {dims} of '
            'the labeling array; broadcasts that expand dimensions are '
            'not supported'.format(shape=shape, dims=template.dims))

    LOGGER.debug(
        'labeling broadcast of shape %s with dims %s', shape, template.dims)
    return template.rebuildsliced(
        np.empty(shape, dtype=dtype), bc.axes, name='')

import numpy as np


class Selector(object):
    """
    Common base class for selectors that pick items along an axis by coordinate
    value rather than by integer position.

    A selector is resolved by the :class:`~dimensional.core.Dimension` of the
    axis it is applied to, which hands it its coordinate values and receives an
    integer index, slice or integer array that storage can understand directly.

    See Also:
        :class:`At`
        :class:`Near`
        :class:`Between`
    """

    def __init__(self, value):
        super(Selector, self).__init__()
        self.value = value

    def integer_based_slice(self, values):
        """
        Transform this selector into an index that storage can understand

        Args:
            values (np.ndarray): the coordinate values of the selected axis
        """
        raise NotImplementedError()

    def __eq__(self, other):
        return self.__class__ == other.__class__ \
            and np.array_equal(self.value, other.value)

    def __ne__(self, other):
        return not self.__eq__(other)

    def __repr__(self):
        return '{cls}({value!r})'.format(
            cls=self.__class__.__name__, value=self.value)


class At(Selector):
    """
    Select the item(s) whose coordinates exactly match a value, or a list of
    values.  A single value eliminates the axis, just like an integer index.

    Args:
        value: a coordinate value, or a list of coordinate values
        atol (float): when provided, coordinates within this absolute tolerance
            of the value are considered a match

    Raises:
        KeyError: when a value is not present on the axis

    Examples:
        >>> from dimensional import DimensionalArray, X, At
        >>> import numpy as np
        >>> arr = DimensionalArray(np.arange(5), X([10, 20, 30, 40, 50]))
        >>> arr[At(30)]
        2
    """

    def __init__(self, value, atol=None):
        super(At, self).__init__(value)
        self.atol = atol

    def _index_of(self, values, value):
        if self.atol is None:
            matches = np.flatnonzero(values == value)
        else:
            matches = np.flatnonzero(np.isclose(values, value, atol=self.atol))

        if not len(matches):
            raise KeyError(
                '{value!r} not found in coordinates'.format(value=value))
        return int(matches[0])

    def integer_based_slice(self, values):
        if np.ndim(self.value) == 0:
            return self._index_of(values, self.value)
        return np.array(
            [self._index_of(values, v) for v in self.value], dtype=np.intp)


class Near(Selector):
    """
    Select the item(s) whose coordinates are closest to a value, or a list of
    values.  A single value eliminates the axis.
    """

    def _index_of(self, values, value):
        return int(np.argmin(np.abs(values - value)))

    def integer_based_slice(self, values):
        if np.ndim(self.value) == 0:
            return self._index_of(values, self.value)
        return np.array(
            [self._index_of(values, v) for v in self.value], dtype=np.intp)


class Between(Selector):
    """
    Select all items whose coordinates fall within the half-open interval
    `[low, high)`.

    For monotonically increasing coordinates the result is a contiguous slice,
    so views of the selection share memory with the original storage.
    Otherwise, the matching positions are returned as an integer array.

    Args:
        low: the inclusive lower bound
        high: the exclusive upper bound

    Raises:
        ValueError: when high is less than low
    """

    def __init__(self, low, high):
        if high < low:
            raise ValueError(
                'high must be greater than or equal to low, '
                'but they were {low} and {high}'.format(**locals()))
        super(Between, self).__init__((low, high))
        self.low = low
        self.high = high

    def integer_based_slice(self, values):
        if len(values) < 2 or np.all(values[1:] >= values[:-1]):
            start = np.searchsorted(values, self.low, side='left')
            stop = np.searchsorted(values, self.high, side='left')
            return slice(int(start), int(stop))

        mask = (values >= self.low) & (values < self.high)
        return np.flatnonzero(mask)

    def __repr__(self):
        return 'Between({self.low!r}, {self.high!r})'.format(**locals())

class DimensionMismatch(ValueError):
    """
    Raised when the lengths of a set of dimensions do not agree, axis by axis,
    with the shape of the data they describe

    Args:
        dims (tuple): the offending dimensions
        shape (tuple): the actual shape of the data
        message (str): an optional message, overriding the default one
    """

    def __init__(self, dims, shape, message=None):
        self.dims = tuple(dims)
        self.shape = tuple(shape)
        if message is None:
            message = \
                'dims must have same size as data.  This was not true for ' \
                '{dims} and size {shape}'.format(
                    dims=self.dims, shape=self.shape)
        super(DimensionMismatch, self).__init__(message)


class DimensionalArrayNotFound(ValueError):
    """
    Raised when a broadcast expression contains no
    :class:`~dimensional.core.DimensionalArray` that could be used to label the
    axes of its result
    """

    def __init__(self, args):
        self.broadcast_args = tuple(args)
        super(DimensionalArrayNotFound, self).__init__(
            'dimensional array not found among {n} broadcast arguments'.format(
                n=len(self.broadcast_args)))

def tuplify(a):
    """
    Ensure that a is a tuple, wrapping it in a one-tuple if it is a single item
    """
    if isinstance(a, tuple):
        return a
    if isinstance(a, list):
        return tuple(a)
    return a,

from .handy import tuplify

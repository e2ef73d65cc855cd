"""
Logging setup for the dimensional package.  Every module logs to a child of the
``dimensional`` logger, which has no handlers beyond a
:class:`logging.NullHandler` until :func:`configure` is called.
"""

import logging
import logging.handlers
from .config import LogConfig

record_fmt = '%(asctime)s %(name)-12s %(levelname)-8s %(message)s'
date_fmt = '%m-%d %H:%M'

formatter = logging.Formatter(record_fmt, datefmt=date_fmt)

# the parent logger for the entire dimensional library
root_logger = logging.getLogger('dimensional')
root_logger.addHandler(logging.NullHandler())

# handlers attached by the most recent call to configure()
_configured = []


def _level(level):
    if isinstance(level, str):
        return level.upper()
    return level


def configure(level=None, filename=None, console=True):
    """
    Attach handlers to the package's parent logger.  Calling this again
    replaces the handlers attached by the previous call, so records are never
    written twice.

    Args:
        level (str or int): the logging level, e.g. `'debug'` or
            `logging.DEBUG`.  Defaults to :attr:`LogConfig.level`
        filename (str): when provided, records are also written to a rotating
            log file at this path.  Defaults to :attr:`LogConfig.filename`
        console (bool): whether records should be written to stderr

    Returns:
        logging.Logger: the configured parent logger
    """
    level = _level(level or LogConfig.level)
    filename = filename or LogConfig.filename

    while _configured:
        handler = _configured.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if console:
        _configured.append(logging.StreamHandler())

    if filename:
        _configured.append(logging.handlers.RotatingFileHandler(
            filename,
            maxBytes=LogConfig.max_bytes,
            backupCount=LogConfig.backups))

    for handler in _configured:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    return root_logger

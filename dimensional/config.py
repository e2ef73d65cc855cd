"""
Default settings for the dimensional package.  Settings are plain class
attributes, so an application can override them before use, e.g.::

    from dimensional.config import ArrayConfig
    ArrayConfig.repr_coordinates = 5
"""

import os


class LogConfig:
    # the level of the parent logger for the entire dimensional package
    level = os.environ.get('DIMENSIONAL_LOG_LEVEL', 'WARNING')
    # the name of the most current log file, or None to log to the console only
    filename = os.environ.get('DIMENSIONAL_LOG_FILE')
    # one megabyte, in bytes
    max_bytes = int(1e6)
    # the number of old log files to keep
    backups = 5


class ArrayConfig:
    # the name given to arrays when none is provided
    default_name = ''
    # the name given to arrays produced by applying a function to a dimension
    function_name_template = '{func}({dim})'
    # the number of coordinates shown at each end of a dimension's repr
    repr_coordinates = 3

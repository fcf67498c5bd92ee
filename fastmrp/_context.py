"""
_context.py
===========
Context managers for fastmrp.

Provides context managers for temporarily changing logging state.  All of
them restore state on exit, even if exceptions occur.
"""

import logging
from contextlib import contextmanager


# ============================================================================ #
# Logging Context Managers
# ============================================================================ #


@contextmanager
def suppress_logger(logger_name: str, level: int = logging.CRITICAL):
    """
    Temporarily change a logger's level.

    Parameters
    ----------
    logger_name : str
        Name of the logger to suppress (e.g., 'fastmrp._forest').
    level : int, default logging.CRITICAL
        Temporary logging level.

    Yields
    ------
    None
        Control is yielded back to the with-block.

    Examples
    --------
    >>> # Keep the forest statistics, hide extractor chatter
    >>> with suppress_logger('fastmrp._extractor'):
    ...     forest = MRPForest(newicks)

    Notes
    -----
    - Exception-safe: Logger level restored even if exception raised
    - Nesting-safe: Can nest multiple suppress_logger contexts
    """
    logger = logging.getLogger(logger_name)
    original_level = logger.level

    try:
        logger.setLevel(level)
        yield
    finally:
        logger.setLevel(original_level)


@contextmanager
def quiet(level: int = logging.CRITICAL):
    """
    Temporarily suppress all fastmrp logging.

    Every module logger is a child of ``'fastmrp'``, so raising the level of
    the package logger silences them all.

    Parameters
    ----------
    level : int, default logging.CRITICAL
        Temporary logging level for the package logger.

    Examples
    --------
    >>> with quiet():
    ...     forest = MRPForest(newicks)

    >>> # Show only warnings during construction
    >>> with quiet(logging.WARNING):
    ...     forest = MRPForest(newicks)
    """
    with suppress_logger("fastmrp", level):
        yield

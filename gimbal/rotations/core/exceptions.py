# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Exceptions raised by the rotation routines when strict checking is requested.
"""

from typing import Any


__all__ = ['DegenerateRotationError']


class DegenerateRotationError(ValueError):
    """
    Raised when a degenerate input is given to a routine called with ``strict=True``.

    By default the rotation routines never raise for degenerate inputs (a singular matrix, a quaternion that is not
    normalized, anti-parallel vectors, ...) and instead return a documented fallback value.  Passing ``strict=True``
    turns those cases into this exception.  The value that would have been returned in non-strict mode is stored in
    :attr:`fallback` so that callers can still recover it.  The functional routines store a numpy array there while the
    methods of :class:`.Quat` and :class:`.Matrix3x3` store an instance of their own class.
    """

    def __init__(self, message: str, fallback: Any = None):
        """
        :param message: A description of the degenerate case
        :param fallback: The value the non-strict call would have returned
        """

        super().__init__(message)

        self.fallback = fallback
        """
        The legacy fallback value for the degenerate input
        """

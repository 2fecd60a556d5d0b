# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Numeric tolerances shared by every rotation representation.

These values are part of the observable behavior of the library (they decide when a quaternion counts as normalized,
when the Euler extraction treats an orientation as gimbal locked, and so on) so they are exposed as named constants
and passed explicitly as keyword arguments wherever a tolerance is accepted.
"""

__all__ = ['EPSILON', 'KINDA_SMALL_NUMBER', 'SMALL_NUMBER', 'SINGULARITY_THRESHOLD', 'SLERP_DOT_THRESHOLD',
           'QUAT_NORMALIZED_THRESHOLD']


SMALL_NUMBER: float = 1e-8
"""
A very small number used for normalization checks (squared norms) and identity comparisons.
"""

KINDA_SMALL_NUMBER: float = 1e-4
"""
The general purpose comparison tolerance.
"""

EPSILON: float = KINDA_SMALL_NUMBER
"""
Alias of :data:`KINDA_SMALL_NUMBER`.
"""

SINGULARITY_THRESHOLD: float = 0.4999995
"""
The value of :math:`zx-wy` beyond which a quaternion is considered to be at the north/south pole when extracting
euler angles.
"""

SLERP_DOT_THRESHOLD: float = 0.9999
"""
The absolute quaternion inner product at or above which slerp switches to linear interpolation of the weights.
"""

QUAT_NORMALIZED_THRESHOLD: float = 0.01
"""
The allowed deviation of the squared norm from 1 for a quaternion to be considered normalized.
"""

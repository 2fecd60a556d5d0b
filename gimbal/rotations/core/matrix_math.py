# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core 3x3 matrix routines.

All routines are implemented on numpy arrays (or array like objects) of shape 3x3.  They intentionally spell out the
closed form cofactor expressions instead of calling into :mod:`numpy.linalg` so that the degenerate cases behave
exactly as documented (for instance :func:`matrix_inverse` returns its input for a singular matrix instead of raising).
"""

import logging

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _check_matrix_array_and_shape, _check_vector_array_and_shape
from gimbal.rotations.core.exceptions import DegenerateRotationError


__all__ = ["matrix_multiply", "matrix_transpose", "matrix_determinant", "matrix_adjugate", "matrix_inverse",
           "matrix_vector_multiply"]


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logging interface for reporting degenerate matrices.
"""


def matrix_multiply(matrix_1: ARRAY_LIKE, matrix_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Computes the row by column product of two 3x3 matrices.

    .. math::
        \mathbf{C}_{ij}=\sum_k\mathbf{A}_{ik}\mathbf{B}_{kj}

    The product is not commutative.

    :param matrix_1: The left matrix
    :param matrix_2: The right matrix
    :return: The matrix product
    """

    work_1 = _check_matrix_array_and_shape(matrix_1)
    work_2 = _check_matrix_array_and_shape(matrix_2)

    out = np.zeros((3, 3), dtype=np.float64)
    for i in range(3):
        for j in range(3):
            for k in range(3):
                out[i, j] += work_1[i, k] * work_2[k, j]

    return out


def matrix_transpose(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the transpose of a 3x3 matrix as a new array.

    :param matrix: The matrix to transpose
    :return: The transposed matrix
    """

    return _check_matrix_array_and_shape(matrix).T.copy()


def matrix_determinant(matrix: ARRAY_LIKE) -> float:
    r"""
    Computes the determinant of a 3x3 matrix using cofactor expansion along the first row.

    .. math::
        |\mathbf{M}| = m_{00}(m_{11}m_{22}-m_{12}m_{21}) - m_{01}(m_{10}m_{22}-m_{12}m_{20}) +
        m_{02}(m_{10}m_{21}-m_{11}m_{20})

    :param matrix: The matrix to compute the determinant of
    :return: The signed determinant
    """

    m = _check_matrix_array_and_shape(matrix)

    return float(m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
                 - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
                 + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0]))


def matrix_adjugate(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Computes the adjugate (the transpose of the cofactor matrix) of a 3x3 matrix.

    :param matrix: The matrix to compute the adjugate of
    :return: The adjugate matrix
    """

    m = _check_matrix_array_and_shape(matrix)

    cofactors = np.array([
        [m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
         -(m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0]),
         m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0]],
        [-(m[0, 1] * m[2, 2] - m[0, 2] * m[2, 1]),
         m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
         -(m[0, 0] * m[2, 1] - m[0, 1] * m[2, 0])],
        [m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1],
         -(m[0, 0] * m[1, 2] - m[0, 2] * m[1, 0]),
         m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]]
    ])

    return cofactors.T.copy()


def matrix_inverse(matrix: ARRAY_LIKE, strict: bool = False) -> DOUBLE_ARRAY:
    r"""
    Computes the inverse of a 3x3 matrix as its adjugate divided by its determinant.

    .. math::
        \mathbf{M}^{-1} = \frac{\text{adj}(\mathbf{M})}{|\mathbf{M}|}

    .. warning::
        If the determinant is exactly 0 the matrix cannot be inverted and a copy of the input matrix is returned
        unchanged.  The result is therefore *not* an inverse in that case.  This mirrors the long standing behavior of
        this routine and is kept for compatibility; check :func:`matrix_determinant` yourself or pass ``strict=True``
        if you need to know.

    :param matrix: The matrix to invert
    :param strict: Raise a :class:`.DegenerateRotationError` for a singular matrix instead of returning the input
    :return: The inverse matrix (or the input matrix if it is singular)
    :raises DegenerateRotationError: if ``strict`` is ``True`` and the determinant is 0
    """

    work = _check_matrix_array_and_shape(matrix)

    determinant = matrix_determinant(work)

    if determinant == 0:
        # if determinant is zero the matrix cannot be inverted
        if strict:
            raise DegenerateRotationError('The matrix is singular and cannot be inverted', fallback=work)

        _LOGGER.debug('Singular matrix passed to matrix_inverse, returning the input unchanged')
        return work

    return matrix_adjugate(work) * (1.0 / determinant)


def matrix_vector_multiply(matrix: ARRAY_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Applies a 3x3 matrix to a 3 element vector using the columns of the matrix.

    .. math::
        \mathbf{r}_i = \sum_k m_{ki}v_k

    This is the row vector convention :math:`\mathbf{v}^T\mathbf{M}`, which is the same as
    :math:`\mathbf{M}^T\mathbf{v}`.  The rotation matrices produced by :func:`.euler_to_rotmat` are laid out for this
    convention.

    :param matrix: The matrix to apply
    :param vector: The vector to transform
    :return: The transformed vector
    """

    m = _check_matrix_array_and_shape(matrix)
    v = _check_vector_array_and_shape(vector)

    return np.array([m[0, 0] * v[0] + m[1, 0] * v[1] + m[2, 0] * v[2],
                     m[0, 1] * v[0] + m[1, 1] * v[1] + m[2, 1] * v[2],
                     m[0, 2] * v[0] + m[1, 2] * v[1] + m[2, 2] * v[2]])

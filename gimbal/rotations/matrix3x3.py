"""
This module provides the :class:`Matrix3x3` class, a small 3x3 matrix value type used to express rotation matrices
(and 2D homogeneous transformations).
"""

from numbers import Real

from typing import Self

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _check_array_and_shape
from gimbal.rotations.core.constants import EPSILON
from gimbal.rotations.core.exceptions import DegenerateRotationError
from gimbal.rotations.core.elementals import translate_2d, scale_2d, rotate_2d_rad, rotate_2d_deg
from gimbal.rotations.core.matrix_math import (matrix_multiply, matrix_transpose, matrix_determinant, matrix_inverse,
                                               matrix_vector_multiply)


class Matrix3x3:
    """
    A 3x3 matrix of floats stored in row major order.

    No orthonormality is enforced; callers are responsible for only treating valid rotation matrices as rotations.

    Multiplying two matrices (``a * b`` or ``a @ b``) gives the usual row by column product.  Multiplying a matrix by a
    3 element vector (``m * v``) uses the *columns* of the matrix, that is it computes ``m.T @ v``.  This is the
    convention the matrices returned by :meth:`.Rotator.matrix` are laid out for::

        >>> from gimbal.rotations import Matrix3x3
        >>> Matrix3x3() * [1, 2, 3]
        array([1., 2., 3.])

    Individual elements can be read and written with ``m[i, j]`` or ``m[i][j]``.
    """

    def __init__(self,
                 m00: float = 1.0, m01: float = 0.0, m02: float = 0.0,
                 m10: float = 0.0, m11: float = 1.0, m12: float = 0.0,
                 m20: float = 0.0, m21: float = 0.0, m22: float = 1.0):
        """
        :param m00: row 0, column 0
        :param m01: row 0, column 1
        :param m02: row 0, column 2
        :param m10: row 1, column 0
        :param m11: row 1, column 1
        :param m12: row 1, column 2
        :param m20: row 2, column 0
        :param m21: row 2, column 1
        :param m22: row 2, column 2
        """

        self.m: DOUBLE_ARRAY = np.array([[m00, m01, m02],
                                         [m10, m11, m12],
                                         [m20, m21, m22]], dtype=np.float64)
        """
        The 3x3 numpy array holding the matrix elements
        """

    @classmethod
    def from_array(cls, data: ARRAY_LIKE) -> Self:
        """
        Creates a matrix from a 9 element buffer in row major order or from a 3x3 array like.

        :param data: the matrix data
        :return: the new matrix
        :raises ValueError: if the data does not contain exactly 9 elements
        """

        work = _check_array_and_shape(data, size=9).reshape(3, 3)

        return cls(*work.ravel())

    @classmethod
    def identity(cls) -> Self:
        """
        :return: the 3x3 identity matrix
        """

        return cls()

    @classmethod
    def translate_2d(cls, x: float, y: float) -> Self:
        """
        :param x: the translation along the first axis
        :param y: the translation along the second axis
        :return: the homogeneous 2D translation matrix
        """

        return cls.from_array(translate_2d(x, y))

    @classmethod
    def scale_2d(cls, x: float, y: float) -> Self:
        """
        :param x: the scale along the first axis
        :param y: the scale along the second axis
        :return: the homogeneous 2D scaling matrix
        """

        return cls.from_array(scale_2d(x, y))

    @classmethod
    def rotation_2d_rad(cls, angle: float) -> Self:
        """
        :param angle: the rotation angle in radians
        :return: the homogeneous 2D rotation matrix
        """

        return cls.from_array(rotate_2d_rad(angle))

    @classmethod
    def rotation_2d_deg(cls, angle: float) -> Self:
        """
        :param angle: the rotation angle in degrees
        :return: the homogeneous 2D rotation matrix
        """

        return cls.from_array(rotate_2d_deg(angle))

    def as_array(self) -> DOUBLE_ARRAY:
        """
        :return: a copy of the matrix elements as a 3x3 numpy array
        """

        return self.m.copy()

    def determinant(self) -> float:
        """
        :return: the determinant of the matrix computed by cofactor expansion along the first row
        """

        return matrix_determinant(self.m)

    def inverse(self, strict: bool = False) -> 'Matrix3x3':
        """
        Returns the inverse of this matrix computed from the adjugate and the determinant.

        .. warning::
            If the determinant is exactly 0 a copy of this matrix is returned unchanged rather than an inverse (see
            :func:`.matrix_inverse`).  Pass ``strict=True`` to get a :class:`.DegenerateRotationError` instead.

        :param strict: raise for a singular matrix instead of returning a copy of it
        :return: the inverse matrix
        """

        try:
            return Matrix3x3.from_array(matrix_inverse(self.m, strict=strict))
        except DegenerateRotationError as error:
            error.fallback = Matrix3x3.from_array(error.fallback)
            raise

    def get_inverse(self) -> 'Matrix3x3':
        """
        Alias of :meth:`inverse` using the legacy fallback.
        """

        return self.inverse()

    def transpose(self) -> 'Matrix3x3':
        """
        :return: the transpose of this matrix
        """

        return Matrix3x3.from_array(matrix_transpose(self.m))

    def get_transpose(self) -> 'Matrix3x3':
        """
        Alias of :meth:`transpose`.
        """

        return self.transpose()

    def equals(self, other: 'Matrix3x3', tolerance: float = EPSILON) -> bool:
        """
        Checks whether every element of this matrix is within ``tolerance`` of the corresponding element of ``other``.

        :param other: the matrix to compare with
        :param tolerance: the absolute tolerance per element
        :return: ``True`` if the matrices are equal within the tolerance
        """

        return bool(np.all(np.abs(self.m - other.m) <= tolerance))

    def to_string(self) -> str:
        """
        :return: the matrix in bracketed row form, ``[m00 m01 m02] [m10 m11 m12] [m20 m21 m22]``
        """

        return ' '.join('[' + ' '.join(f'{value:g}' for value in row) + ']' for row in self.m)

    def __getitem__(self, key):
        return self.m[key]

    def __setitem__(self, key, value):
        self.m[key] = value

    def __mul__(self, other):

        if isinstance(other, Matrix3x3):
            return Matrix3x3.from_array(matrix_multiply(self.m, other.m))

        if isinstance(other, Real):
            return Matrix3x3.from_array(self.m * float(other))

        try:
            vector = np.asanyarray(other, dtype=np.float64)
        except (TypeError, ValueError):
            return NotImplemented

        if vector.size != 3:
            return NotImplemented

        return matrix_vector_multiply(self.m, vector)

    def __rmul__(self, other):

        if isinstance(other, Real):
            return Matrix3x3.from_array(self.m * float(other))

        return NotImplemented

    def __matmul__(self, other):

        if isinstance(other, Matrix3x3):
            return Matrix3x3.from_array(matrix_multiply(self.m, other.m))

        return NotImplemented

    def __imul__(self, other):

        if isinstance(other, Matrix3x3):
            self.m = matrix_multiply(self.m, other.m)
            return self

        return NotImplemented

    def __add__(self, other):

        if isinstance(other, Matrix3x3):
            return Matrix3x3.from_array(self.m + other.m)

        return NotImplemented

    def __sub__(self, other):

        if isinstance(other, Matrix3x3):
            return Matrix3x3.from_array(self.m - other.m)

        return NotImplemented

    def __iadd__(self, other):

        if isinstance(other, Matrix3x3):
            self.m = self.m + other.m
            return self

        return NotImplemented

    def __isub__(self, other):

        if isinstance(other, Matrix3x3):
            self.m = self.m - other.m
            return self

        return NotImplemented

    def __eq__(self, other) -> bool:

        if not isinstance(other, Matrix3x3):
            return NotImplemented

        return bool(np.array_equal(self.m, other.m))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return 'Matrix3x3({})'.format(', '.join(repr(float(value)) for value in self.m.ravel()))


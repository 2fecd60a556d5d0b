# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
This module provides the :class:`Quat` class which expresses a rotation as a unit quaternion.
"""

import copy

import logging

import math

from numbers import Real

from typing import Iterator, Self, overload

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike
from gimbal.rotations.core._helpers import _all_finite, _check_quaternion_array_and_shape
from gimbal.rotations.core.constants import (EPSILON, SMALL_NUMBER, KINDA_SMALL_NUMBER, QUAT_NORMALIZED_THRESHOLD,
                                             SLERP_DOT_THRESHOLD)
from gimbal.rotations.core.exceptions import DegenerateRotationError
from gimbal.rotations.core.conversions import (euler_to_quaternion, quaternion_to_euler, axis_angle_to_quaternion,
                                               quaternion_to_axis_angle)
from gimbal.rotations.core.quaternion_math import (IDENTITY_QUATERNION, quaternion_dot, quaternion_normalize,
                                                   quaternion_is_normalized, quaternion_inverse,
                                                   quaternion_multiplication, quaternion_rotate_vector,
                                                   quaternion_unrotate_vector, enforce_shortest_arc, angular_distance,
                                                   find_between_vectors, slerp)
from gimbal.rotations.diagnostics import nan_check_enabled
from gimbal.rotations.matrix3x3 import Matrix3x3
from gimbal.rotations.rotator import Rotator


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logging interface for reporting NaN sanitization.
"""


class Quat:
    r"""
    A rotation expressed as a quaternion :math:`w + x\mathbf{i} + y\mathbf{j} + z\mathbf{k}`.

    The quaternion is expected to be of unit length to represent a rotation, but this is not enforced on
    construction; call :meth:`normalize` after building one from raw components.

    Multiplying two quaternions composes their rotations: ``(a * b).rotate_vector(v)`` is
    ``a.rotate_vector(b.rotate_vector(v))``, that is ``b`` is applied first.  Multiplying or dividing by a scalar, and
    adding or subtracting quaternions, work component-wise.  ``a | b`` is the 4 dimensional inner product.

    The vector portion of the quaternion is laid out so that :meth:`get_axis_x` is the forward, :meth:`get_axis_y`
    the up and :meth:`get_axis_z` the right direction of the rotated frame.

        >>> from gimbal.rotations import Quat, Rotator
        >>> q = Quat.from_rotator(Rotator(0, 90, 0))
        >>> q.rotate_vector([1, 0, 0]).round(6) + 0
        array([0., 1., 0.])
    """

    def __init__(self, w: float = 1.0, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        """
        :param w: the scalar component
        :param x: the first vector component
        :param y: the second vector component
        :param z: the third vector component
        """

        self.w: float = float(w)
        """
        The scalar component
        """

        self.x: float = float(x)
        """
        The first vector component
        """

        self.y: float = float(y)
        """
        The second vector component
        """

        self.z: float = float(z)
        """
        The third vector component
        """

    # ----------------------------------------------------------------------------------------------------------------
    # construction

    @classmethod
    def from_array(cls, data: ARRAY_LIKE) -> Self:
        """
        :param data: a 4 element array like in ``[w, x, y, z]`` order
        :return: the new quaternion
        """

        return cls(*_check_quaternion_array_and_shape(data))

    @classmethod
    def identity(cls) -> Self:
        """
        :return: the identity quaternion
        """

        return cls(*IDENTITY_QUATERNION)

    @classmethod
    def from_axis_angle(cls, axis: ARRAY_LIKE, angle: float) -> Self:
        """
        Creates a quaternion rotating ``angle`` radians about ``axis``.

        See :func:`.axis_angle_to_quaternion` for the axis convention.

        :param axis: the unit rotation axis
        :param angle: the rotation angle in radians
        :return: the new quaternion
        """

        return cls._checked(axis_angle_to_quaternion(axis, angle))

    @classmethod
    def from_rotator(cls, rotator: Rotator) -> Self:
        """
        :param rotator: the rotator to convert
        :return: a quaternion describing the same orientation as ``rotator``
        """

        return cls._checked(euler_to_quaternion(rotator.pitch, rotator.yaw, rotator.roll))

    @overload
    @classmethod
    def make_from_euler(cls, eulers: ARRAY_LIKE, /) -> Self: ...

    @overload
    @classmethod
    def make_from_euler(cls, pitch: float, yaw: float, roll: float, /) -> Self: ...

    @classmethod
    def make_from_euler(cls, *args) -> Self:
        """
        Creates a quaternion from euler angles in degrees, given either as one ``(pitch, yaw, roll)`` vector or as three
        separate values.
        """

        return cls.from_rotator(Rotator.make_from_euler(*args))

    @classmethod
    def _checked(cls, components: ARRAY_LIKE) -> Self:
        out = cls(*components)
        out.diagnostic_check_nan()
        return out

    # ----------------------------------------------------------------------------------------------------------------
    # conversions

    def as_array(self) -> DOUBLE_ARRAY:
        """
        :return: the components as a ``[w, x, y, z]`` numpy array
        """

        return np.array([self.w, self.x, self.y, self.z])

    def get_rotator(self) -> Rotator:
        """
        Converts this quaternion into pitch, yaw and roll angles.

        Near pitch of :math:`\\pm 90` degrees (gimbal lock) the pitch is pinned and the roll is derived from the yaw.
        See :func:`.quaternion_to_euler`.

        When NaN checking is enabled a non finite quaternion is reset to the identity before it is converted.

        :return: the equivalent rotator
        """

        self.diagnostic_check_nan()

        out = Rotator(*quaternion_to_euler(self.as_array()))
        out.diagnostic_check_nan()

        return out

    def euler(self) -> DOUBLE_ARRAY:
        """
        :return: the equivalent ``[pitch, yaw, roll]`` angles in degrees
        """

        return self.get_rotator().euler()

    def matrix(self) -> Matrix3x3:
        """
        Returns the rotation matrix for this quaternion.

        This goes through :meth:`get_rotator` so that it always matches :meth:`.Rotator.matrix`.

        :return: the rotation matrix
        """

        return self.get_rotator().matrix()

    def vector(self) -> DOUBLE_ARRAY:
        """
        :return: the direction this rotation faces (the rotated x axis)
        """

        return self.get_axis_x()

    def get_angle(self) -> float:
        """
        :return: the rotation angle in radians, ``2 acos(w)``
        """

        return 2.0 * math.acos(min(max(self.w, -1.0), 1.0))

    def get_rotation_axis(self, tolerance: float = KINDA_SMALL_NUMBER) -> DOUBLE_ARRAY:
        """
        Returns the rotation axis of this quaternion.

        When the rotation angle is (nearly) 0 the axis is undefined and the x axis is returned.

        :param tolerance: the smallest half angle sine for which the axis is extracted
        :return: the unit rotation axis
        """

        return quaternion_to_axis_angle(self.as_array(), tolerance=tolerance)[0]

    def to_axis_and_angle(self) -> tuple[DOUBLE_ARRAY, float]:
        """
        :return: the rotation axis and angle in radians
        """

        return quaternion_to_axis_angle(self.as_array())

    # ----------------------------------------------------------------------------------------------------------------
    # rotating vectors

    def rotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: ``vector`` rotated by this quaternion
        """

        return quaternion_rotate_vector(self.as_array(), vector)

    def unrotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: ``vector`` rotated by the inverse of this quaternion
        """

        return quaternion_unrotate_vector(self.as_array(), vector)

    def get_axis_x(self) -> DOUBLE_ARRAY:
        """
        :return: the rotated x axis
        """

        return self.rotate_vector([1.0, 0.0, 0.0])

    def get_axis_y(self) -> DOUBLE_ARRAY:
        """
        :return: the rotated y axis
        """

        return self.rotate_vector([0.0, 1.0, 0.0])

    def get_axis_z(self) -> DOUBLE_ARRAY:
        """
        :return: the rotated z axis
        """

        return self.rotate_vector([0.0, 0.0, 1.0])

    get_forward_vector = get_axis_x

    get_up_vector = get_axis_y

    get_right_vector = get_axis_z

    # ----------------------------------------------------------------------------------------------------------------
    # normalization and inversion

    def size_squared(self) -> float:
        """
        :return: the squared norm of the quaternion
        """

        return self.dot(self)

    def size(self) -> float:
        """
        :return: the norm of the quaternion
        """

        return math.sqrt(self.size_squared())

    def is_normalized(self, threshold: float = QUAT_NORMALIZED_THRESHOLD) -> bool:
        """
        :param threshold: the allowed deviation of the squared norm from 1
        :return: whether the quaternion is of unit length
        """

        return quaternion_is_normalized(self.as_array(), threshold=threshold)

    def normalize(self, tolerance: float = SMALL_NUMBER, strict: bool = False) -> Self:
        """
        Scales this quaternion to unit length in place.

        If the squared norm is below ``tolerance`` this quaternion becomes the identity instead (or, if ``strict``, a
        :class:`.DegenerateRotationError` is raised and this quaternion is left unchanged).

        :param tolerance: the smallest squared norm that will be normalized
        :param strict: raise instead of falling back to the identity
        :return: self
        """

        try:
            self.w, self.x, self.y, self.z = quaternion_normalize(self.as_array(), tolerance=tolerance, strict=strict)
        except DegenerateRotationError as error:
            error.fallback = Quat(*error.fallback)
            raise

        return self

    def get_normalized(self, tolerance: float = SMALL_NUMBER) -> 'Quat':
        """
        :param tolerance: the smallest squared norm that will be normalized
        :return: a normalized copy of this quaternion
        """

        return self.copy().normalize(tolerance=tolerance)

    def inverse(self, strict: bool = False) -> 'Quat':
        """
        Returns the inverse rotation (the conjugate).

        Only normalized quaternions can be inverted.  For anything else the identity is returned, or with ``strict``
        a :class:`.DegenerateRotationError` is raised.

        :param strict: raise instead of returning the identity
        :return: the inverse quaternion
        """

        try:
            return Quat(*quaternion_inverse(self.as_array(), strict=strict))
        except DegenerateRotationError as error:
            error.fallback = Quat(*error.fallback)
            raise

    def enforce_shortest_arc_with(self, other: 'Quat') -> Self:
        """
        Negates this quaternion in place if its inner product with ``other`` is negative, so interpolating between
        them follows the shorter arc.

        :param other: the quaternion to align with
        :return: self
        """

        self.w, self.x, self.y, self.z = enforce_shortest_arc(self.as_array(), other.as_array())

        return self

    # ----------------------------------------------------------------------------------------------------------------
    # comparisons

    def dot(self, other: 'Quat') -> float:
        """
        :param other: the other quaternion
        :return: the 4 dimensional inner product
        """

        return quaternion_dot(self.as_array(), other.as_array())

    def angular_distance(self, other: 'Quat') -> float:
        """
        :param other: the other unit quaternion
        :return: the angle in radians of the rotation between this quaternion and ``other``
        """

        return angular_distance(self.as_array(), other.as_array())

    def equals(self, other: 'Quat', tolerance: float = EPSILON) -> bool:
        """
        :param other: the quaternion to compare with
        :param tolerance: the absolute tolerance per component
        :return: whether every component is within ``tolerance`` of the matching component of ``other``
        """

        return bool(np.all(np.abs(self.as_array() - other.as_array()) <= tolerance))

    def is_identity(self, tolerance: float = SMALL_NUMBER) -> bool:
        """
        :param tolerance: the absolute tolerance per component
        :return: whether this quaternion equals the identity within ``tolerance``
        """

        return self.equals(Quat.identity(), tolerance=tolerance)

    def contains_nan(self) -> bool:
        """
        :return: ``True`` if any component is NaN or infinite
        """

        return not _all_finite(self.w, self.x, self.y, self.z)

    def diagnostic_check_nan(self) -> None:
        """
        Resets this quaternion to the identity (and logs a warning) if NaN checking is enabled and a component is not
        finite.

        See :mod:`gimbal.rotations.diagnostics`.
        """

        if nan_check_enabled() and self.contains_nan():
            _LOGGER.warning(f'Quat contains NaN: {self.to_string()}')
            self.w, self.x, self.y, self.z = IDENTITY_QUATERNION

    # ----------------------------------------------------------------------------------------------------------------
    # static helpers

    @staticmethod
    def find_between_vectors(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE, strict: bool = False) -> 'Quat':
        """
        Returns the smallest rotation taking the direction of ``vector_1`` onto the direction of ``vector_2``.

        When the vectors point in opposite directions a 180 degree rotation about an axis orthogonal to ``vector_1``
        is returned (see :func:`.find_between_vectors`).

        :param vector_1: the vector to rotate from
        :param vector_2: the vector to rotate onto
        :param strict: raise a :class:`.DegenerateRotationError` for opposite vectors
        :return: the rotation quaternion
        """

        try:
            return Quat(*find_between_vectors(vector_1, vector_2, strict=strict))
        except DegenerateRotationError as error:
            error.fallback = Quat(*error.fallback)
            raise

    find_between = find_between_vectors

    @staticmethod
    def find_between_normals(normal_1: ARRAY_LIKE, normal_2: ARRAY_LIKE) -> 'Quat':
        """
        Same as :meth:`find_between_vectors` but assumes both inputs are already of unit length.

        :param normal_1: the unit vector to rotate from
        :param normal_2: the unit vector to rotate onto
        :return: the rotation quaternion
        """

        return Quat(*find_between_vectors(normal_1, normal_2, norm_product=1.0))

    @staticmethod
    def slerp(quaternion_1: 'Quat', quaternion_2: 'Quat', time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
              dot_threshold: float = SLERP_DOT_THRESHOLD) -> 'Quat':
        """
        Spherical linear interpolation along the shorter arc between two unit quaternions.

        ``time`` is either the fraction between the quaternions or, together with ``time0`` and ``time1``, an actual
        time (see :func:`.slerp`).

        :param quaternion_1: the starting quaternion
        :param quaternion_2: the ending quaternion
        :param time: the interpolation time
        :param time0: the time of the starting quaternion
        :param time1: the time of the ending quaternion
        :param dot_threshold: the absolute inner product at which linear weights are used
        :return: the normalized interpolated quaternion
        """

        return Quat._checked(slerp(quaternion_1.as_array(), quaternion_2.as_array(), time,
                                   time0=time0, time1=time1, dot_threshold=dot_threshold))

    # ----------------------------------------------------------------------------------------------------------------
    # misc

    def to_string(self) -> str:
        """
        :return: the components as ``"w=<w> x=<x> y=<y> z=<z>"``
        """

        return f'w={self.w:g} x={self.x:g} y={self.y:g} z={self.z:g}'

    def copy(self) -> 'Quat':
        """
        :return: a copy of this quaternion
        """

        return copy.copy(self)

    def __iter__(self) -> Iterator[float]:
        yield self.w
        yield self.x
        yield self.y
        yield self.z

    # ----------------------------------------------------------------------------------------------------------------
    # operators

    def __mul__(self, other):

        if isinstance(other, Quat):
            return Quat._checked(quaternion_multiplication(self.as_array(), other.as_array()))

        if isinstance(other, Real):
            return Quat._checked(self.as_array() * float(other))

        return NotImplemented

    def __rmul__(self, other):

        if isinstance(other, Real):
            return Quat._checked(self.as_array() * float(other))

        return NotImplemented

    def __imul__(self, other):

        if isinstance(other, Quat):
            self.w, self.x, self.y, self.z = quaternion_multiplication(self.as_array(), other.as_array())

        elif isinstance(other, Real):
            self.w, self.x, self.y, self.z = self.as_array() * float(other)

        else:
            return NotImplemented

        self.diagnostic_check_nan()

        return self

    def __truediv__(self, other):

        if isinstance(other, Real):
            return Quat._checked(self.as_array() / float(other))

        return NotImplemented

    def __itruediv__(self, other):

        if isinstance(other, Real):
            self.w, self.x, self.y, self.z = self.as_array() / float(other)
            self.diagnostic_check_nan()
            return self

        return NotImplemented

    def __add__(self, other):

        if isinstance(other, Quat):
            return Quat._checked(self.as_array() + other.as_array())

        return NotImplemented

    def __sub__(self, other):

        if isinstance(other, Quat):
            return Quat._checked(self.as_array() - other.as_array())

        return NotImplemented

    def __iadd__(self, other):

        if isinstance(other, Quat):
            self.w, self.x, self.y, self.z = self.as_array() + other.as_array()
            self.diagnostic_check_nan()
            return self

        return NotImplemented

    def __isub__(self, other):

        if isinstance(other, Quat):
            self.w, self.x, self.y, self.z = self.as_array() - other.as_array()
            self.diagnostic_check_nan()
            return self

        return NotImplemented

    def __neg__(self) -> 'Quat':
        return Quat(-self.w, -self.x, -self.y, -self.z)

    def __or__(self, other):

        if isinstance(other, Quat):
            return self.dot(other)

        return NotImplemented

    def __eq__(self, other) -> bool:

        if not isinstance(other, Quat):
            return NotImplemented

        return self.w == other.w and self.x == other.x and self.y == other.y and self.z == other.z

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f'Quat(w={self.w!r}, x={self.x!r}, y={self.y!r}, z={self.z!r})'

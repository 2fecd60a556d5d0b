"""
This module provides the :class:`Rotator` class which expresses a rotation as pitch, yaw and roll angles in degrees.
"""

import copy

import logging

from numbers import Real

from typing import Iterator, Self, TYPE_CHECKING, overload

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _all_finite, _check_vector_array_and_shape
from gimbal.rotations.core.constants import EPSILON
from gimbal.rotations.core.conversions import euler_to_quaternion, euler_to_rotmat, euler_to_vector
from gimbal.rotations.core.elementals import clamp_axis, normalize_axis
from gimbal.rotations.diagnostics import nan_check_enabled
from gimbal.rotations.matrix3x3 import Matrix3x3

if TYPE_CHECKING:
    from gimbal.rotations.quat import Quat


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logging interface for reporting NaN sanitization.
"""


class Rotator:
    """
    A rotation expressed as pitch, yaw and roll angles in degrees.

    * :attr:`pitch` rotates about the x axis (looking up/down)
    * :attr:`yaw` rotates about the y axis (looking left/right)
    * :attr:`roll` rotates about the z axis (tilting)

    The forward direction for a zero rotation is the x axis.

    The arithmetic operators (``+``, ``-``, ``*`` by a scalar) work component-wise on the angles.  They do **not**
    compose rotations.  To compose rotations use :meth:`combine`, which goes through the quaternion representation::

        >>> from gimbal.rotations import Rotator
        >>> r = Rotator(0, 45, 0)
        >>> Rotator.combine(r, r).equals(Rotator(0, 90, 0))
        True

    ``==`` compares the stored angles exactly, so ``Rotator(0, 0, 360) == Rotator()`` is ``False`` while
    ``Rotator(0, 0, 360).equals(Rotator())`` is ``True``.
    """

    def __init__(self, pitch: float = 0.0, yaw: float = 0.0, roll: float = 0.0):
        """
        :param pitch: the rotation about the x axis in degrees
        :param yaw: the rotation about the y axis in degrees
        :param roll: the rotation about the z axis in degrees
        """

        self.pitch: float = float(pitch)
        """
        Rotation about the x axis in degrees
        """

        self.yaw: float = float(yaw)
        """
        Rotation about the y axis in degrees
        """

        self.roll: float = float(roll)
        """
        Rotation about the z axis in degrees
        """

    @classmethod
    def zero(cls) -> Self:
        """
        :return: a new zero rotation
        """

        return cls()

    @overload
    @classmethod
    def make_from_euler(cls, eulers: ARRAY_LIKE, /) -> Self: ...

    @overload
    @classmethod
    def make_from_euler(cls, pitch: float, yaw: float, roll: float, /) -> Self: ...

    @classmethod
    def make_from_euler(cls, *args) -> Self:
        """
        Creates a rotator from euler angles in degrees, given either as one 3 element vector ``(pitch, yaw, roll)`` or
        as three separate values.
        """

        if len(args) == 1:
            return cls(*_check_vector_array_and_shape(args[0]))

        if len(args) == 3:
            return cls(*args)

        raise TypeError('make_from_euler expects either a 3 element vector or 3 angles')

    @classmethod
    def from_quaternion(cls, quaternion: 'Quat') -> Self:
        """
        Creates a rotator describing the same orientation as a quaternion.

        See :meth:`.Quat.get_rotator` for details about the conversion.

        :param quaternion: the quaternion to convert
        :return: the new rotator
        """

        out = cls(*quaternion.get_rotator())
        out.diagnostic_check_nan()

        return out

    def vector(self) -> DOUBLE_ARRAY:
        """
        Returns the unit direction vector this rotation faces.

        Only pitch and yaw matter for a direction.

        :return: ``(cos(pitch) cos(yaw), cos(pitch) sin(yaw), sin(pitch))``
        """

        return euler_to_vector(self.pitch, self.yaw)

    def quaternion(self) -> 'Quat':
        """
        :return: this rotation as a :class:`.Quat`
        """

        from gimbal.rotations.quat import Quat

        self.diagnostic_check_nan()

        return Quat(*euler_to_quaternion(self.pitch, self.yaw, self.roll))

    def euler(self) -> DOUBLE_ARRAY:
        """
        :return: the angles as a ``[pitch, yaw, roll]`` numpy array
        """

        return np.array([self.pitch, self.yaw, self.roll])

    def matrix(self) -> Matrix3x3:
        """
        Returns this rotation as a rotation matrix.

        The matrix is laid out for the column convention of ``Matrix3x3 * vector``.  See :func:`.euler_to_rotmat`.

        :return: the rotation matrix
        """

        return Matrix3x3.from_array(euler_to_rotmat(self.pitch, self.yaw, self.roll))

    def rotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: the vector rotated by the matrix form of this rotation
        """

        return self.matrix() * _check_vector_array_and_shape(vector)

    def unrotate_vector(self, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        :param vector: the vector to rotate
        :return: the vector rotated by the inverse (transposed matrix) of this rotation
        """

        return self.matrix().get_transpose() * _check_vector_array_and_shape(vector)

    def get_inverse(self) -> 'Rotator':
        """
        :return: the inverse rotation, computed through the quaternion representation
        """

        return self.quaternion().inverse().get_rotator()

    def combine(self, other: 'Rotator') -> 'Rotator':
        """
        Composes two rotations through their quaternions.

        This can be called either as ``Rotator.combine(a, b)`` or as ``a.combine(b)`` and returns
        ``(a.quaternion() * b.quaternion()).get_rotator()``.  Neither input is modified.

        Staying in quaternion space (multiplying :class:`.Quat` instances) is cheaper and avoids gimbal lock when
        many rotations are chained.

        :param other: the rotation to compose with
        :return: the composed rotation
        """

        return (self.quaternion() * other.quaternion()).get_rotator()

    clamp_axis = staticmethod(clamp_axis)

    normalize_axis = staticmethod(normalize_axis)

    def clamp(self) -> Self:
        """
        Wraps each angle of this rotator into :math:`[0, 360)` in place.

        :return: self
        """

        self.pitch = clamp_axis(self.pitch)
        self.yaw = clamp_axis(self.yaw)
        self.roll = clamp_axis(self.roll)

        return self

    def normalize(self) -> Self:
        """
        Wraps each angle of this rotator into :math:`(-180, 180]` in place.

        :return: self
        """

        self.pitch = normalize_axis(self.pitch)
        self.yaw = normalize_axis(self.yaw)
        self.roll = normalize_axis(self.roll)

        return self

    def get_clamped(self) -> 'Rotator':
        """
        :return: a copy of this rotator with the angles in :math:`[0, 360)`
        """

        return self.copy().clamp()

    def get_normalized(self) -> 'Rotator':
        """
        :return: a copy of this rotator with the angles in :math:`(-180, 180]`
        """

        return self.copy().normalize()

    def add(self, delta_pitch: float, delta_yaw: float, delta_roll: float) -> Self:
        """
        Adds to each angle of this rotator in place.  This does not compose rotations (see :meth:`combine`).

        :param delta_pitch: the change in pitch in degrees
        :param delta_yaw: the change in yaw in degrees
        :param delta_roll: the change in roll in degrees
        :return: self
        """

        self.pitch += delta_pitch
        self.yaw += delta_yaw
        self.roll += delta_roll

        self.diagnostic_check_nan()

        return self

    def is_nearly_zero(self, tolerance: float = EPSILON) -> bool:
        """
        Checks whether every normalized angle is within ``tolerance`` of 0, so a rotation of 360 degrees counts as
        zero.

        :param tolerance: the tolerance in degrees
        :return: ``True`` if the rotation is nearly zero
        """

        return (abs(normalize_axis(self.pitch)) <= tolerance
                and abs(normalize_axis(self.yaw)) <= tolerance
                and abs(normalize_axis(self.roll)) <= tolerance)

    def is_zero(self) -> bool:
        """
        :return: ``True`` if every clamped angle is exactly 0
        """

        return clamp_axis(self.pitch) == 0.0 and clamp_axis(self.yaw) == 0.0 and clamp_axis(self.roll) == 0.0

    def equals(self, other: 'Rotator', tolerance: float = EPSILON) -> bool:
        """
        Checks whether the normalized difference of each angle is within ``tolerance``, so angles that differ by a
        multiple of 360 degrees are equal.

        :param other: the rotator to compare with
        :param tolerance: the tolerance in degrees
        :return: ``True`` if the rotators are equal within the tolerance
        """

        return (abs(normalize_axis(self.pitch - other.pitch)) <= tolerance
                and abs(normalize_axis(self.yaw - other.yaw)) <= tolerance
                and abs(normalize_axis(self.roll - other.roll)) <= tolerance)

    def contains_nan(self) -> bool:
        """
        :return: ``True`` if any angle is NaN or infinite
        """

        return not _all_finite(self.pitch, self.yaw, self.roll)

    def diagnostic_check_nan(self) -> None:
        """
        Resets this rotator to zero (and logs a warning) if NaN checking is enabled and an angle is not finite.

        See :mod:`gimbal.rotations.diagnostics`.
        """

        if nan_check_enabled() and self.contains_nan():
            _LOGGER.warning(f'Rotator contains NaN: {self.to_string()}')
            self.pitch = self.yaw = self.roll = 0.0

    def to_string(self) -> str:
        """
        :return: the angles as ``"p=<pitch> y=<yaw> r=<roll>"``
        """

        return f'p={self.pitch:g} y={self.yaw:g} r={self.roll:g}'

    def copy(self) -> 'Rotator':
        """
        :return: a copy of this rotator
        """

        return copy.copy(self)

    def __iter__(self) -> Iterator[float]:
        yield self.pitch
        yield self.yaw
        yield self.roll

    def __add__(self, other: 'Rotator') -> 'Rotator':

        if isinstance(other, Rotator):
            return Rotator(self.pitch + other.pitch, self.yaw + other.yaw, self.roll + other.roll)

        return NotImplemented

    def __sub__(self, other: 'Rotator') -> 'Rotator':

        if isinstance(other, Rotator):
            return Rotator(self.pitch - other.pitch, self.yaw - other.yaw, self.roll - other.roll)

        return NotImplemented

    def __iadd__(self, other: 'Rotator') -> Self:

        if isinstance(other, Rotator):
            return self.add(other.pitch, other.yaw, other.roll)

        return NotImplemented

    def __isub__(self, other: 'Rotator') -> Self:

        if isinstance(other, Rotator):
            return self.add(-other.pitch, -other.yaw, -other.roll)

        return NotImplemented

    def __mul__(self, scale: float) -> 'Rotator':

        if isinstance(scale, Real):
            return Rotator(self.pitch * scale, self.yaw * scale, self.roll * scale)

        return NotImplemented

    __rmul__ = __mul__

    def __imul__(self, scale: float) -> Self:

        if isinstance(scale, Real):
            self.pitch *= scale
            self.yaw *= scale
            self.roll *= scale

            self.diagnostic_check_nan()

            return self

        return NotImplemented

    def __eq__(self, other) -> bool:

        if not isinstance(other, Rotator):
            return NotImplemented

        return self.pitch == other.pitch and self.yaw == other.yaw and self.roll == other.roll

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f'Rotator(pitch={self.pitch!r}, yaw={self.yaw!r}, roll={self.roll!r})'

# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between the euler angle (pitch/yaw/roll in degrees), quaternion
(``[w, x, y, z]``), rotation matrix, direction vector and axis/angle representations.
All routines are implemented purely on numpy arrays (or array like objects).
"""

import math

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _check_quaternion_array_and_shape, _check_vector_array_and_shape
from gimbal.rotations.core.constants import SINGULARITY_THRESHOLD, KINDA_SMALL_NUMBER
from gimbal.rotations.core.elementals import normalize_axis


__all__ = ['euler_to_quaternion', 'euler_to_rotmat', 'euler_to_vector',
           'quaternion_to_euler', 'quaternion_to_rotmat',
           'axis_angle_to_quaternion', 'quaternion_to_axis_angle']


def euler_to_quaternion(pitch: float, yaw: float, roll: float) -> DOUBLE_ARRAY:
    r"""
    Converts pitch, yaw and roll angles in degrees into a rotation quaternion ``[w, x, y, z]``.

    Using :math:`s_\cdot` and :math:`c_\cdot` for the sine and cosine of half of each angle:

    .. math::
        w = c_rc_pc_y + s_rs_ps_y \\
        x = c_rs_ps_y - s_rc_pc_y \\
        y = -c_rs_pc_y - s_rc_ps_y \\
        z = c_rc_ps_y - s_rs_pc_y

    which is the yaw-pitch-roll sequence ``R_z(yaw) R_y(-pitch) R_x(-roll)`` in quaternion form.

    :param pitch: the rotation about the x axis in degrees
    :param yaw: the rotation about the y axis in degrees
    :param roll: the rotation about the z axis in degrees
    :return: the rotation quaternion
    """

    half_deg_to_rad = math.pi / 180.0 / 2.0

    sp, cp = math.sin(pitch * half_deg_to_rad), math.cos(pitch * half_deg_to_rad)
    sy, cy = math.sin(yaw * half_deg_to_rad), math.cos(yaw * half_deg_to_rad)
    sr, cr = math.sin(roll * half_deg_to_rad), math.cos(roll * half_deg_to_rad)

    return np.array([cr * cp * cy + sr * sp * sy,
                     cr * sp * sy - sr * cp * cy,
                     -cr * sp * cy - sr * cp * sy,
                     cr * cp * sy - sr * sp * cy])


def euler_to_rotmat(pitch: float, yaw: float, roll: float) -> DOUBLE_ARRAY:
    """
    Converts pitch, yaw and roll angles in degrees into a 3x3 rotation matrix.

    The angles are first relabeled (the yaw is used as the matrix pitch, the negated roll as the matrix yaw and the
    pitch as the matrix roll) and then the rows of the matrix are filled with the rotated axes.  The resulting matrix is
    meant to be applied with :func:`.matrix_vector_multiply`, which uses the columns of the matrix.

    :param pitch: the rotation about the x axis in degrees
    :param yaw: the rotation about the y axis in degrees
    :param roll: the rotation about the z axis in degrees
    :return: the rotation matrix
    """

    new_pitch = math.radians(yaw)
    new_yaw = math.radians(-roll)
    new_roll = math.radians(pitch)

    sp, cp = math.sin(new_pitch), math.cos(new_pitch)
    sy, cy = math.sin(new_yaw), math.cos(new_yaw)
    sr, cr = math.sin(new_roll), math.cos(new_roll)

    return np.array([[cp * cy, cp * sy, sp],
                     [sr * sp * cy - cr * sy, sr * sp * sy + cr * cy, -sr * cp],
                     [-(cr * sp * cy + sr * sy), cy * sr - cr * sp * sy, cr * cp]])


def euler_to_vector(pitch: float, yaw: float) -> DOUBLE_ARRAY:
    """
    Converts pitch and yaw angles in degrees into the unit direction vector they face.

    The forward direction for a zero rotation is the x axis.  Roll does not change a direction so it is not an input.

    :param pitch: the rotation about the x axis in degrees
    :param yaw: the rotation about the y axis in degrees
    :return: the unit direction vector
    """

    sp, cp = math.sin(math.radians(pitch)), math.cos(math.radians(pitch))
    sy, cy = math.sin(math.radians(yaw)), math.cos(math.radians(yaw))

    return np.array([cp * cy, cp * sy, sp])


def quaternion_to_euler(quaternion: ARRAY_LIKE,
                        singularity_threshold: float = SINGULARITY_THRESHOLD) -> tuple[float, float, float]:
    r"""
    Converts a rotation quaternion ``[w, x, y, z]`` into pitch, yaw and roll angles in degrees.

    The conversion first evaluates :math:`s=zx-wy`.  Away from the poles

    .. math::
        \text{pitch} = \text{sin}^{-1}(2s) \\
        \text{yaw} = \text{atan2}(2(wz+xy), 1-2(y^2+z^2)) \\
        \text{roll} = \text{atan2}(-2(wx+yz), 1-2(x^2+y^2))

    When :math:`|s|` exceeds ``singularity_threshold`` the orientation is gimbal locked and the split between yaw and
    roll is indeterminate.  In that case the pitch is pinned to :math:`\pm 90` degrees and the roll is derived from the
    yaw and :math:`2\,\text{atan2}(x, w)` so that the returned angles still describe the same orientation.

    :param quaternion: the rotation quaternion
    :param singularity_threshold: the value of :math:`|s|` above which the orientation is treated as gimbal locked
    :return: the pitch, yaw and roll angles in degrees
    """

    w, x, y, z = _check_quaternion_array_and_shape(quaternion)

    yaw_y = 2.0 * (w * z + x * y)
    yaw_x = 1.0 - 2.0 * (y * y + z * z)
    singularity_test = z * x - w * y

    yaw = math.degrees(math.atan2(yaw_y, yaw_x))

    if singularity_test < -singularity_threshold:
        pitch = -90.0
        roll = normalize_axis(-yaw - math.degrees(2.0 * math.atan2(x, w)))

    elif singularity_test > singularity_threshold:
        pitch = 90.0
        roll = normalize_axis(yaw - math.degrees(2.0 * math.atan2(x, w)))

    else:
        pitch = math.degrees(math.asin(2.0 * singularity_test))
        roll = math.degrees(math.atan2(-2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y)))

    return float(pitch), float(yaw), float(roll)


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Converts a rotation quaternion into a rotation matrix.

    The conversion goes through the euler angles (:func:`quaternion_to_euler` followed by :func:`euler_to_rotmat`) so
    that matrices built from quaternions and from euler angles always follow the same layout.

    :param quaternion: the rotation quaternion
    :return: the rotation matrix
    """

    return euler_to_rotmat(*quaternion_to_euler(quaternion))


def axis_angle_to_quaternion(axis: ARRAY_LIKE, angle: float) -> DOUBLE_ARRAY:
    r"""
    Converts a rotation about a unit axis by an angle in radians into a rotation quaternion.

    The axis components are permuted into the quaternion vector part to match the axis convention of the euler
    angles (x forward, y up, z right):

    .. math::
        w = \text{cos}(\theta/2) \\
        x = -a_z\text{sin}(\theta/2) \\
        y = -a_x\text{sin}(\theta/2) \\
        z = a_y\text{sin}(\theta/2)

    :param axis: the rotation axis, assumed to be of unit length
    :param angle: the rotation angle in radians
    :return: the rotation quaternion
    """

    work_axis = _check_vector_array_and_shape(axis)

    half_angle = 0.5 * angle
    s, c = math.sin(half_angle), math.cos(half_angle)

    return np.array([c, s * -work_axis[2], s * -work_axis[0], s * work_axis[1]])


def quaternion_to_axis_angle(quaternion: ARRAY_LIKE, tolerance: float = KINDA_SMALL_NUMBER) -> tuple[DOUBLE_ARRAY, float]:
    """
    Converts a rotation quaternion into its rotation axis and angle in radians.

    This undoes the axis permutation of :func:`axis_angle_to_quaternion`.  When the sine of the half angle is not
    larger than ``tolerance`` the axis is arbitrary and the x axis is returned.

    :param quaternion: the rotation quaternion
    :param tolerance: the smallest half angle sine for which the axis is extracted
    :return: the unit rotation axis and the rotation angle in radians
    """

    w, x, y, z = _check_quaternion_array_and_shape(quaternion)

    angle = 2.0 * math.acos(min(max(w, -1.0), 1.0))

    # ensure we never take the square root of a negative number
    s = math.sqrt(max(1.0 - w * w, 0.0))

    if s > tolerance:
        axis = np.array([-y / s, z / s, -x / s])
    else:
        axis = np.array([1.0, 0.0, 0.0])

    return axis, angle

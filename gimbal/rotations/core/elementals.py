import math

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY
from gimbal.rotations.core._helpers import _check_vector_array_and_shape, _check_matrix_array_and_shape


__all__ = ["clamp_axis", "normalize_axis", "translate_2d", "scale_2d", "rotate_2d_rad", "rotate_2d_deg",
           "translate_4x4", "scale_4x4", "rotation_4x4"]


def clamp_axis(angle: float) -> float:
    """
    Wraps an angle in degrees into the range :math:`[0, 360)`.

    The remainder follows the C ``fmod`` convention (the sign of the result matches the sign of the input) before
    negative values are shifted up by 360.  Tiny negative angles that would round up to exactly 360 are folded to 0.

    :param angle: the angle to wrap in degrees
    :return: the wrapped angle in degrees
    """

    # get angle between (-360, 360)
    angle = math.fmod(angle, 360.0)

    # shift to [0, 360)
    if angle < 0.0:
        angle += 360.0

        if angle >= 360.0:
            angle = 0.0

    return angle


def normalize_axis(angle: float) -> float:
    """
    Wraps an angle in degrees into the range :math:`(-180, 180]`.

    :param angle: the angle to wrap in degrees
    :return: the wrapped angle in degrees
    """

    # get angle between (-360, 360)
    angle = math.fmod(angle, 360.0)

    # shift to (-180, 180]
    if angle > 180.0:
        angle -= 360.0
    elif angle < -180.0:
        angle += 360.0

    return angle


def translate_2d(x: float, y: float) -> DOUBLE_ARRAY:
    r"""
    Returns the homogeneous 2D translation matrix

    .. math::
        \left[\begin{array}{ccc} 1 & 0 & x \\ 0 & 1 & y \\ 0 & 0 & 1 \end{array}\right]

    :param x: the translation along the first axis
    :param y: the translation along the second axis
    :return: the 3x3 homogeneous translation matrix
    """

    out = np.eye(3)
    out[0, 2] = x
    out[1, 2] = y

    return out


def scale_2d(x: float, y: float) -> DOUBLE_ARRAY:
    """
    Returns the homogeneous 2D scaling matrix ``diag(x, y, 1)``.

    :param x: the scale along the first axis
    :param y: the scale along the second axis
    :return: the 3x3 homogeneous scaling matrix
    """

    return np.diag([float(x), float(y), 1.0])


def rotate_2d_rad(angle: float) -> DOUBLE_ARRAY:
    r"""
    Returns the homogeneous 2D counter-clockwise rotation matrix for an angle in radians.

    .. math::
        \left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0 \\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\ 0 & 0 & 1 \end{array}\right]

    :param angle: the rotation angle in radians
    :return: the 3x3 homogeneous rotation matrix
    """

    cangle = math.cos(angle)
    sangle = math.sin(angle)

    return np.array([[cangle, -sangle, 0.0],
                     [sangle, cangle, 0.0],
                     [0.0, 0.0, 1.0]])


def rotate_2d_deg(angle: float) -> DOUBLE_ARRAY:
    """
    Same as :func:`rotate_2d_rad` but for an angle in degrees.

    :param angle: the rotation angle in degrees
    :return: the 3x3 homogeneous rotation matrix
    """

    return rotate_2d_rad(math.radians(angle))


def translate_4x4(translation: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the 4x4 affine matrix translating by a 3 element vector.

    :param translation: the translation vector
    :return: the 4x4 translation matrix
    """

    out = np.eye(4)
    out[:3, 3] = _check_vector_array_and_shape(translation)

    return out


def scale_4x4(scale: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns the 4x4 affine matrix scaling each axis by the corresponding element of a 3 element vector.

    :param scale: the per axis scale factors
    :return: the 4x4 scaling matrix
    """

    return np.diag(np.append(_check_vector_array_and_shape(scale), 1.0))


def rotation_4x4(matrix: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Embeds a 3x3 rotation matrix into the upper left block of a 4x4 affine matrix.

    :param matrix: the 3x3 rotation matrix
    :return: the 4x4 rotation matrix
    """

    out = np.eye(4)
    out[:3, :3] = _check_matrix_array_and_shape(matrix)

    return out

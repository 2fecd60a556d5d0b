"""
Core quaternion routines.

Quaternions are handled as length 4 arrays in scalar first order ``[w, x, y, z]``.  None of the routines here modify
their inputs.
"""

import logging

import numpy as np

from gimbal._typing import ARRAY_LIKE, DOUBLE_ARRAY, DatetimeLike
from gimbal.rotations.core._helpers import _check_quaternion_array_and_shape, _check_vector_array_and_shape
from gimbal.rotations.core.constants import (SMALL_NUMBER, KINDA_SMALL_NUMBER, SLERP_DOT_THRESHOLD,
                                             QUAT_NORMALIZED_THRESHOLD)
from gimbal.rotations.core.exceptions import DegenerateRotationError


__all__ = ["IDENTITY_QUATERNION", "quaternion_dot", "quaternion_normalize", "quaternion_is_normalized",
           "quaternion_inverse", "quaternion_multiplication", "quaternion_rotate_vector",
           "quaternion_unrotate_vector", "enforce_shortest_arc", "angular_distance", "find_between_vectors",
           "nlerp", "slerp"]


_LOGGER: logging.Logger = logging.getLogger(__name__)
"""
The logging interface for reporting quaternion fallbacks.
"""


IDENTITY_QUATERNION: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
"""
The identity quaternion in ``[w, x, y, z]`` order.
"""


def _identity() -> DOUBLE_ARRAY:
    return np.array(IDENTITY_QUATERNION, dtype=np.float64)


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    """
    Returns the 4 dimensional inner product of two quaternions.

    :param quaternion_1: the first quaternion
    :param quaternion_2: the second quaternion
    :return: the inner product
    """

    return float(np.dot(_check_quaternion_array_and_shape(quaternion_1),
                        _check_quaternion_array_and_shape(quaternion_2)))


def quaternion_normalize(quaternion: ARRAY_LIKE, tolerance: float = SMALL_NUMBER, strict: bool = False) -> DOUBLE_ARRAY:
    """
    Scales a quaternion to unit length.

    If the squared norm of the quaternion is below ``tolerance`` the identity quaternion is returned instead so that
    we never divide by a (nearly) zero norm.  Unlike some conventions, the sign of the scalar term is left alone.

    :param quaternion: the quaternion to normalize
    :param tolerance: the smallest squared norm that will be normalized
    :param strict: raise a :class:`.DegenerateRotationError` instead of returning the identity
    :return: The normalized quaternion
    :raises DegenerateRotationError: if ``strict`` and the squared norm is below ``tolerance``
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    square_sum = float(np.dot(work_quaternion, work_quaternion))

    if square_sum >= tolerance:
        return work_quaternion / np.sqrt(square_sum)

    if strict:
        raise DegenerateRotationError('The quaternion is too small to be normalized', fallback=_identity())

    _LOGGER.debug(f'Unable to normalize quaternion with squared norm {square_sum}, using identity')
    return _identity()


def quaternion_is_normalized(quaternion: ARRAY_LIKE, threshold: float = QUAT_NORMALIZED_THRESHOLD) -> bool:
    """
    Checks whether the squared norm of a quaternion is within ``threshold`` of 1.

    :param quaternion: the quaternion to check
    :param threshold: the allowed deviation of the squared norm from 1
    :return: ``True`` if the quaternion is normalized
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    return abs(1.0 - float(np.dot(work_quaternion, work_quaternion))) < threshold


def quaternion_inverse(quaternion: ARRAY_LIKE, strict: bool = False) -> DOUBLE_ARRAY:
    r"""
    This function provides the inverse of a unit rotation quaternion.

    The inverse of a rotation quaternion is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I`
    where :math:`\mathbf{q}_I` is the identity quaternion.  For a unit quaternion this is the conjugate, that is the
    vector portion is negated.

    Only normalized quaternions (see :func:`quaternion_is_normalized`) are supported.  If the input is not normalized
    the identity quaternion is returned.

    :param quaternion: The rotation quaternion to be inverted
    :param strict: raise a :class:`.DegenerateRotationError` instead of returning the identity
    :return: the inverse quaternion
    :raises DegenerateRotationError: if ``strict`` and the quaternion is not normalized
    """

    # ensure the value is an array and break mutability
    work_quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    if not quaternion_is_normalized(work_quaternion):
        if strict:
            raise DegenerateRotationError('Only normalized quaternions can be inverted', fallback=_identity())

        _LOGGER.debug('Inverse requested for a quaternion that is not normalized, using identity')
        return _identity()

    # negate the vector portion
    work_quaternion[1:] *= -1

    return work_quaternion


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE, quaternion_2_in: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    The product is defined such that ``quaternion_multiplication(q_a, q_b)`` rotates a vector by ``q_b`` first and
    then by ``q_a``.  Mathematically:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\\
        q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} + \mathbf{q}_{v1}\times\mathbf{q}_{v2}\end{array}\right]

    The product is associative but not commutative.

    :param quaternion_1_in: The first quaternion to multiply
    :param quaternion_2_in: The second quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    qs1 = quaternion_1[0]
    qv1 = quaternion_1[1:]

    qs2 = quaternion_2[0]
    qv2 = quaternion_2[1:]

    return np.concatenate([[qs1 * qs2 - (qv1 * qv2).sum()],
                           qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2)])


def _rotate(scalar: float, vector_part: DOUBLE_ARRAY, vector: DOUBLE_ARRAY) -> DOUBLE_ARRAY:
    # v' = v + w(2(q x v)) + q x (2(q x v))
    temp = 2.0 * np.cross(vector_part, vector)

    return vector + scalar * temp + np.cross(vector_part, temp)


def quaternion_rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    Rotates a vector by a quaternion.

    This uses the double cross product form of :math:`\mathbf{q}\otimes\mathbf{v}\otimes\mathbf{q}^{-1}`:

    .. math::
        \mathbf{t} = 2(\mathbf{q}_v\times\mathbf{v}) \\
        \mathbf{v}' = \mathbf{v} + q_s\mathbf{t} + \mathbf{q}_v\times\mathbf{t}

    :param quaternion: the rotation quaternion
    :param vector: the vector to rotate
    :return: the rotated vector
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    return _rotate(work_quaternion[0], work_quaternion[1:], _check_vector_array_and_shape(vector))


def quaternion_unrotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Rotates a vector by the inverse of a quaternion.

    This is the same as :func:`quaternion_rotate_vector` with the vector portion of the quaternion negated.

    :param quaternion: the rotation quaternion
    :param vector: the vector to rotate
    :return: the rotated vector
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    return _rotate(work_quaternion[0], -work_quaternion[1:], _check_vector_array_and_shape(vector))


def enforce_shortest_arc(quaternion: ARRAY_LIKE, other: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Returns ``quaternion`` negated if needed so that the rotation between it and ``other`` takes the short arc.

    :param quaternion: the quaternion to align
    :param other: the quaternion to align with
    :return: the aligned quaternion
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion)

    bias = 1.0 if quaternion_dot(work_quaternion, other) >= 0.0 else -1.0

    return work_quaternion * bias


def angular_distance(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    r"""
    Returns the angle in radians of the rotation taking one unit quaternion to another.

    .. math::
        \theta = \text{cos}^{-1}(2(\mathbf{q}_1^T\mathbf{q}_2)^2-1)

    Because the inner product is squared, :math:`\mathbf{q}` and :math:`-\mathbf{q}` (which represent the same
    rotation) give the same distance.

    :param quaternion_1: the first quaternion
    :param quaternion_2: the second quaternion
    :return: the angular distance in radians
    """

    inner_product = quaternion_dot(quaternion_1, quaternion_2)

    # clip to the domain of acos (can only leave it due to numerical issues)
    return float(np.arccos(np.clip(2 * inner_product * inner_product - 1.0, -1.0, 1.0)))


def find_between_vectors(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE, norm_product: float | None = None,
                         tolerance: float = KINDA_SMALL_NUMBER, strict: bool = False) -> DOUBLE_ARRAY:
    r"""
    Computes the smallest rotation quaternion that rotates ``vector_1`` onto the direction of ``vector_2``.

    The quaternion is formed from the half angle trick

    .. math::
        q_s = \|\mathbf{a}\|\|\mathbf{b}\| + \mathbf{a}^T\mathbf{b} \\
        \mathbf{q}_v = \mathbf{a}\times\mathbf{b}

    and then normalized.  When :math:`q_s` is smaller than ``tolerance`` times the norm product the vectors are
    (nearly) opposite and the cross product is not reliable.  In that case a 180 degree rotation about an axis
    orthogonal to ``vector_1`` is returned, where the axis is built from the two largest components of ``vector_1``
    depending on whether :math:`|a_x| > |a_y|`.

    :param vector_1: the vector to rotate from
    :param vector_2: the vector to rotate onto
    :param norm_product: the product of the norms of the vectors if already known (use 1 for unit vectors)
    :param tolerance: the relative tolerance for detecting opposite vectors
    :param strict: raise a :class:`.DegenerateRotationError` for opposite vectors instead of returning the fallback
    :return: the rotation quaternion
    :raises DegenerateRotationError: if ``strict`` and the vectors are opposite
    """

    a = _check_vector_array_and_shape(vector_1)
    b = _check_vector_array_and_shape(vector_2)

    if norm_product is None:
        norm_product = float(np.sqrt(np.dot(a, a) * np.dot(b, b)))

    result_w = norm_product + float(np.dot(a, b))

    if result_w >= tolerance * norm_product:
        # calculate the quaternion normally using the cross product
        return quaternion_normalize(np.concatenate([[result_w], np.cross(a, b)]))

    # a and b are opposite so rotate 180 degrees about an axis perpendicular to a
    if abs(a[0]) > abs(a[1]):
        result = np.array([0.0, -a[2], 0.0, a[0]])
    else:
        result = np.array([0.0, 0.0, -a[2], a[1]])

    result = quaternion_normalize(result)

    if strict:
        raise DegenerateRotationError('The vectors are opposite so the rotation axis is arbitrary', fallback=result)

    _LOGGER.debug('Vectors are nearly opposite, using a 180 degree rotation about an orthogonal axis')

    return result


def _fractional_time(time: float | DatetimeLike, time0: float | DatetimeLike, time1: float | DatetimeLike) -> float:

    try:
        return float((time - time0) / (time1 - time0))  # type: ignore
    except TypeError:
        raise TypeError('time, time0, and time1 must support subtraction resulting in a type that supports true '
                        'division. Typically this means they should all be floats or all be DatetimeLike objects')


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> DOUBLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as python datetime objects.

    .. warning::
        NLERP does not perform a constant angular velocity interpolation.  Use :func:`slerp` when that matters.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :return: The interpolated quaternion
    """

    dt = _fractional_time(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    return quaternion_normalize(q0 * (1 - dt) + q1 * dt)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1,
          dot_threshold: float = SLERP_DOT_THRESHOLD) -> DOUBLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions along the short arc.

    The interpolated quaternion is a weighted sum of the inputs

    .. math::
        \omega = \text{cos}^{-1}(|\mathbf{q}_0^T\mathbf{q}_1|)\\
        \mathbf{q}=\frac{\text{sin}((1-p)\omega)}{\text{sin}(\omega)}\mathbf{q}_0 \pm
        \frac{\text{sin}(p\omega)}{\text{sin}(\omega)}\mathbf{q}_1

    where the sign of the second weight is negative when the raw inner product is negative so that the shorter of the
    two possible arcs is followed.  When :math:`|\mathbf{q}_0^T\mathbf{q}_1|` is at least ``dot_threshold`` the
    quaternions are nearly parallel and :math:`\text{sin}(\omega)` is too small to divide by, so the weights
    :math:`1-p` and :math:`p` are used instead.  The result is renormalized before it is returned.

    The inputs are expected to be normalized.  `time`, `time0` and `time1` work the same as for :func:`nlerp`.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion
    :param time1: the time corresponding to the second quaternion
    :param dot_threshold: the absolute inner product at which linear weights are used
    :return: The interpolated quaternion
    """

    dt = _fractional_time(time, time0, time1)

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    # get the cosine of the angle between the quaternions
    raw_cos_angle = float(np.dot(q0, q1))

    # align the quaternions so they take the shorter route
    cos_angle = abs(raw_cos_angle)

    if cos_angle < dot_threshold:
        omega = np.arccos(cos_angle)
        inv_sin = 1.0 / np.sin(omega)
        scale0 = np.sin((1.0 - dt) * omega) * inv_sin
        scale1 = np.sin(dt * omega) * inv_sin

    else:
        # the inputs are too close so use linear interpolation
        _LOGGER.debug('Quaternions are nearly parallel, using linear weights')
        scale0 = 1.0 - dt
        scale1 = dt

    if raw_cos_angle < 0.0:
        scale1 = -scale1

    return quaternion_normalize(scale0 * q0 + scale1 * q1)

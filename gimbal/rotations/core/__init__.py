"""
This module contains fundamental mathematical operations and utilities for rotation
calculations. It has no dependencies on other rotation modules to avoid circular imports.
All functions here are pure mathematical operations that can be used as building blocks
for higher-level rotation representations and conversions.
"""

import gimbal.rotations.core.constants
import gimbal.rotations.core.conversions
import gimbal.rotations.core.elementals
import gimbal.rotations.core.exceptions
import gimbal.rotations.core.matrix_math
import gimbal.rotations.core.quaternion_math

from gimbal.rotations.core.constants import (EPSILON, KINDA_SMALL_NUMBER, SMALL_NUMBER, SINGULARITY_THRESHOLD,
                                             SLERP_DOT_THRESHOLD, QUAT_NORMALIZED_THRESHOLD)

from gimbal.rotations.core.conversions import (euler_to_quaternion, euler_to_rotmat, euler_to_vector,
                                               quaternion_to_euler, quaternion_to_rotmat,
                                               axis_angle_to_quaternion, quaternion_to_axis_angle)

from gimbal.rotations.core.elementals import (clamp_axis, normalize_axis, translate_2d, scale_2d, rotate_2d_rad,
                                              rotate_2d_deg, translate_4x4, scale_4x4, rotation_4x4)

from gimbal.rotations.core.exceptions import DegenerateRotationError

from gimbal.rotations.core.matrix_math import (matrix_multiply, matrix_transpose, matrix_determinant, matrix_adjugate,
                                               matrix_inverse, matrix_vector_multiply)

from gimbal.rotations.core.quaternion_math import (IDENTITY_QUATERNION, quaternion_dot, quaternion_normalize,
                                                   quaternion_is_normalized, quaternion_inverse,
                                                   quaternion_multiplication, quaternion_rotate_vector,
                                                   quaternion_unrotate_vector, enforce_shortest_arc,
                                                   angular_distance, find_between_vectors, nlerp, slerp)

__all__ = ['EPSILON', 'KINDA_SMALL_NUMBER', 'SMALL_NUMBER', 'SINGULARITY_THRESHOLD', 'SLERP_DOT_THRESHOLD',
           'QUAT_NORMALIZED_THRESHOLD',
           'euler_to_quaternion', 'euler_to_rotmat', 'euler_to_vector',
           'quaternion_to_euler', 'quaternion_to_rotmat', 'axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'clamp_axis', 'normalize_axis', 'translate_2d', 'scale_2d', 'rotate_2d_rad', 'rotate_2d_deg',
           'translate_4x4', 'scale_4x4', 'rotation_4x4',
           'DegenerateRotationError',
           'matrix_multiply', 'matrix_transpose', 'matrix_determinant', 'matrix_adjugate', 'matrix_inverse',
           'matrix_vector_multiply',
           'IDENTITY_QUATERNION', 'quaternion_dot', 'quaternion_normalize', 'quaternion_is_normalized',
           'quaternion_inverse', 'quaternion_multiplication', 'quaternion_rotate_vector',
           'quaternion_unrotate_vector', 'enforce_shortest_arc', 'angular_distance', 'find_between_vectors',
           'nlerp', 'slerp']

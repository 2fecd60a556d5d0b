import gimbal.rotations.core
import gimbal.rotations.diagnostics
import gimbal.rotations.matrix3x3
import gimbal.rotations.rotator
import gimbal.rotations.quat
import gimbal.rotations.transform

from gimbal.rotations.core import *
from gimbal.rotations.diagnostics import (DiagnosticOptions, configure_diagnostics, reset_diagnostics,
                                          nan_check_enabled, nan_checking)
from gimbal.rotations.matrix3x3 import Matrix3x3
from gimbal.rotations.rotator import Rotator
from gimbal.rotations.quat import Quat
from gimbal.rotations.transform import Transform, TransformOptions

__all__ = ['EPSILON', 'KINDA_SMALL_NUMBER', 'SMALL_NUMBER', 'SINGULARITY_THRESHOLD', 'SLERP_DOT_THRESHOLD',
           'QUAT_NORMALIZED_THRESHOLD', 'DegenerateRotationError',
           'euler_to_quaternion', 'euler_to_rotmat', 'euler_to_vector', 'quaternion_to_euler', 'quaternion_to_rotmat',
           'axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'clamp_axis', 'normalize_axis', 'translate_2d', 'scale_2d', 'rotate_2d_rad', 'rotate_2d_deg',
           'translate_4x4', 'scale_4x4', 'rotation_4x4',
           'matrix_multiply', 'matrix_transpose', 'matrix_determinant', 'matrix_adjugate', 'matrix_inverse',
           'matrix_vector_multiply',
           'IDENTITY_QUATERNION', 'quaternion_dot', 'quaternion_normalize', 'quaternion_is_normalized',
           'quaternion_inverse', 'quaternion_multiplication', 'quaternion_rotate_vector', 'quaternion_unrotate_vector',
           'enforce_shortest_arc', 'angular_distance', 'find_between_vectors', 'nlerp', 'slerp',
           'DiagnosticOptions', 'configure_diagnostics', 'reset_diagnostics', 'nan_check_enabled', 'nan_checking',
           'Matrix3x3', 'Rotator', 'Quat', 'Transform', 'TransformOptions']


r"""
This package defines the rotation value types used throughout gimbal, the routines for converting between them and a
:class:`.Transform` that keeps a position, rotation and scale in sync with its model matrix.

All angles in the euler representation are in degrees, all other angles are in radians.  The axes follow the
convention x forward, y up and z right.  The rotation representations are:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion stored scalar first,
                   :math:`\mathbf{q}=\left[\begin{array}{cccc} w & x & y & z\end{array}\right]`, with
                   :math:`w=\text{cos}(\frac{\theta}{2})` and the vector portion :math:`\text{sin}(\frac{\theta}{2})`
                   times a permutation of the rotation axis (see :func:`.axis_angle_to_quaternion`).  The quaternions
                   :math:`\mathbf{q}` and :math:`-\mathbf{q}` represent the same rotation.  See :class:`.Quat`.
euler angles       Pitch, yaw and roll angles in degrees, rotations about the x, y and z axes respectively, applied in
                   the order roll, pitch, yaw.  Several angle triples represent the same rotation, and at a pitch of
                   :math:`\pm 90` degrees the yaw and roll are not independent (gimbal lock).  See :class:`.Rotator`.
rotation matrix    A :math:`3\times 3` matrix whose rows are the rotated axes.  Applying it to a vector with
                   ``matrix * vector`` uses its columns.  See :class:`.Matrix3x3`.
axis/angle         A unit rotation axis and an angle in radians about that axis.
=================  =====================================================================================================

The :class:`.Quat` is the representation to use for composing rotations (``a * b`` applies ``b`` then ``a``) and for
rotating vectors.  The :class:`.Rotator` is the human readable representation; its arithmetic operators work on the
angles and do not compose rotations.

The routines in :mod:`gimbal.rotations.core` implement the math on plain numpy arrays and are what the classes
delegate to.  :mod:`gimbal.rotations.diagnostics` enables the optional NaN sanitization of the value types.
"""

r"""
quatkit provides a quaternion rotation value type and the conversions between quaternions and the other common
rotation representations.

The rotation representations used in this package are described as follows:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion of the form
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_w\end{array}\right]`
                   stored in single precision with the vector portion first and the scalar portion last.  Note that
                   quaternions are not unique in that the rotation represented by :math:`\mathbf{q}` is the same
                   rotation represented by :math:`-\mathbf{q}`.
angle/axis         A rotation angle in radians about a 3 element axis.  :func:`.angle_axis_to_quaternion` negates the
                   angle to convert to the internal handedness.
rotation matrix    A :math:`4\times 4` homogeneous transform whose upper left :math:`3\times 3` block is the rotation
                   and whose last row and column are :math:`[0, 0, 0, 1]`.  Vectors are rotated as row vectors,
                   ``v @ m[:3, :3]``.
=================  =====================================================================================================

The :class:`.Quaternion` class is the primary tool that will be used by users.  It is an immutable value with factory
class methods for each representation, interpolation (:meth:`.Quaternion.slerp`) and basic quaternion algebra.  The
array level functions it is built on are also available directly, as is a checked layer in
:mod:`quatkit.validation` for callers who want errors instead of NaN values on degenerate input.
"""

from quatkit.conversions import (angle_axis_to_quaternion, vector_to_vector_quaternion, quaternion_to_angle_axis,
                                 rotmat_to_quaternion, quaternion_to_rotmat, VECTOR_EPSILON)
from quatkit.quaternion_math import (quaternion_dot, quaternion_norm, quaternion_normalize, quaternion_conjugate,
                                     quaternion_inverse, quaternion_multiplication, rotate_vector)
from quatkit.interpolation import slerp, nlerp, SLERP_EPSILON
from quatkit.quaternion import Quaternion
from quatkit.interpolator import Interpolator, InterpolatorOptions
from quatkit.validation import QuaternionValidator, ValidationOptions, QuaternionDomainError


__version__ = '1.0.0'

__all__ = ['angle_axis_to_quaternion', 'vector_to_vector_quaternion', 'quaternion_to_angle_axis',
           'rotmat_to_quaternion', 'quaternion_to_rotmat', 'VECTOR_EPSILON',
           'quaternion_dot', 'quaternion_norm', 'quaternion_normalize', 'quaternion_conjugate', 'quaternion_inverse',
           'quaternion_multiplication', 'rotate_vector',
           'slerp', 'nlerp', 'SLERP_EPSILON',
           'Quaternion', 'Interpolator', 'InterpolatorOptions',
           'QuaternionValidator', 'ValidationOptions', 'QuaternionDomainError']

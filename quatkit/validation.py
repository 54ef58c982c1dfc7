"""
This module provides checked versions of the :class:`.Quaternion` factories and queries.

The core quatkit functions do not check their inputs and silently return NaN or Inf values for
degenerate input.  The functions in this module layer checks on top of them.  Degenerate input raises a
:class:`QuaternionDomainError`, while quaternions that are merely not unit length trigger a warning.  On well formed
input each function returns exactly what the unchecked version returns.

The checks are performed by the :class:`QuaternionValidator` class whose tolerances are controlled by
:class:`ValidationOptions`.  The ``checked_*`` functions are shortcuts which use a validator configured with the
given options (or the defaults when no options are given).
"""

import logging

import warnings

from dataclasses import dataclass

from typing import Optional

import numpy as np

from quatkit._typing import ARRAY_LIKE, ARRAY_LIKE_2D, FLOAT_ARRAY, TimeLike
from quatkit.quaternion import Quaternion
from quatkit.interpolation import SLERP_EPSILON
from quatkit.utilities.options import UserOptions
from quatkit.utilities.mixin_classes import UserOptionConfigured


_LOGGER: logging.Logger = logging.getLogger(__name__)


class QuaternionDomainError(ValueError):
    """
    Raised when the input to a checked quaternion operation is outside the domain where the operation is defined.
    """


@dataclass
class ValidationOptions(UserOptions):
    """
    This dataclass controls the tolerances used by the :class:`.QuaternionValidator` class.
    """

    unit_tolerance: float = 1e-5
    """
    The allowed deviation of a quaternion's length from 1 before a warning is issued
    """

    orthonormal_tolerance: float = 1e-4
    """
    The allowed element wise deviation of :math:`\\mathbf{T}\\mathbf{T}^T` from the identity for a rotation matrix
    """

    zero_tolerance: float = 1e-12
    """
    Vectors shorter than this are treated as zero length
    """

    warn_long_arc: bool = True
    """
    Whether to log a warning when :meth:`.QuaternionValidator.slerp` interpolates along the long arc
    """

    def override_options(self):
        if self.unit_tolerance < 0 or self.orthonormal_tolerance < 0 or self.zero_tolerance < 0:
            raise ValueError('the tolerances must be non-negative')


class QuaternionValidator(UserOptionConfigured[ValidationOptions], ValidationOptions):
    """
    This class performs checked quaternion construction and queries.

    Each method checks its input against the configured tolerances and then defers to the corresponding
    :class:`.Quaternion` method, so that on well formed input the result is identical to the unchecked version::

        >>> from quatkit.validation import QuaternionValidator
        >>> validator = QuaternionValidator()
        >>> validator.from_angle_axis(1.0, [0, 0, 0])
        Traceback (most recent call last):
        ...
        quatkit.validation.QuaternionDomainError: axis must not be zero length
    """

    def __init__(self, options: Optional[ValidationOptions] = None):
        """
        :param options: The tolerances to use.  If ``None`` the defaults are used
        """

        super().__init__(ValidationOptions, options=options)

    def check_vector(self, vector: ARRAY_LIKE, name: str = 'vector') -> np.ndarray:
        """
        Ensure that a vector is a finite, non-zero, 3 element vector.

        :raises QuaternionDomainError: If the vector is not a finite non-zero 3 vector
        :param vector: The vector to check
        :param name: The name of the vector used in error messages
        :return: The vector as a flat float64 array
        """

        vector = np.asarray(vector, dtype=np.float64)

        if vector.size != 3:
            raise QuaternionDomainError(f'{name} must have 3 elements, got shape {vector.shape}')

        vector = vector.ravel()

        if not np.isfinite(vector).all():
            raise QuaternionDomainError(f'{name} must be finite, got {vector}')

        if np.linalg.norm(vector) <= self.zero_tolerance:
            raise QuaternionDomainError(f'{name} must not be zero length')

        return vector

    def check_quaternion(self, quaternion: ARRAY_LIKE, name: str = 'quaternion') -> np.ndarray:
        """
        Ensure that a quaternion is a finite 4 element array, warning if it is not unit length.

        :raises QuaternionDomainError: If the quaternion is not a finite 4 element array
        :param quaternion: The quaternion to check
        :param name: The name of the quaternion used in error and warning messages
        :return: The quaternion as a flat float64 array
        """

        quaternion = np.asarray(quaternion, dtype=np.float64)

        if quaternion.size != 4:
            raise QuaternionDomainError(f'{name} must have 4 elements, got shape {quaternion.shape}')

        quaternion = quaternion.ravel()

        if not np.isfinite(quaternion).all():
            raise QuaternionDomainError(f'{name} must be finite, got {quaternion}')

        length = np.linalg.norm(quaternion)

        if abs(length - 1) > self.unit_tolerance:
            warnings.warn('Non-unit length quaternion {} ({:e})'.format(name, 1 - length))

        return quaternion

    def from_angle_axis(self, angle: float, axis: ARRAY_LIKE) -> Quaternion:
        """
        Checked version of :meth:`.Quaternion.from_angle_axis`.

        :raises QuaternionDomainError: If the angle is not finite or the axis is not a finite non-zero 3 vector
        :param angle: The angle to rotate by in radians
        :param axis: The axis to rotate about
        :return: The rotation quaternion
        """

        if not np.isfinite(angle):
            raise QuaternionDomainError(f'the angle must be finite, got {angle}')

        return Quaternion.from_angle_axis(angle, self.check_vector(axis, 'axis'))

    def from_vector_to_vector(self, vec_from: ARRAY_LIKE, vec_to: ARRAY_LIKE) -> Quaternion:
        """
        Checked version of :meth:`.Quaternion.from_vector_to_vector`.

        :raises QuaternionDomainError: If either vector is not a finite non-zero 3 vector
        :param vec_from: The vector to rotate from
        :param vec_to: The vector to rotate to
        :return: The rotation quaternion
        """

        return Quaternion.from_vector_to_vector(self.check_vector(vec_from, 'vec_from'),
                                                self.check_vector(vec_to, 'vec_to'))

    def angle_axis(self, quaternion: ARRAY_LIKE) -> tuple[float, FLOAT_ARRAY]:
        """
        Checked version of :meth:`.Quaternion.angle_axis`.

        :raises QuaternionDomainError: If the quaternion is not finite or is the identity rotation (so that the axis
                                       is undefined)
        :param quaternion: The rotation quaternion
        :return: The rotation angle in radians and the unit rotation axis
        """

        quaternion = self.check_quaternion(quaternion)

        if np.linalg.norm(quaternion[:3]) <= self.zero_tolerance:
            raise QuaternionDomainError('the rotation axis of the identity rotation is undefined')

        return Quaternion.from_array(quaternion).angle_axis()

    def slerp(self, t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE, **kwargs) -> Quaternion:
        """
        Checked version of :meth:`.Quaternion.slerp`.

        Additional keyword arguments are passed through to :func:`.interpolation.slerp`.

        :raises QuaternionDomainError: If either quaternion is not finite, the quaternions are antipodal (so the
                                       interpolation path is undefined), or `t` is a non-finite number
        :param t: The fractional percent to interpolate at
        :param quaternion_from: The starting quaternion
        :param quaternion_to: The ending quaternion
        :return: The interpolated quaternion
        """

        q0 = self.check_quaternion(quaternion_from, 'quaternion_from')
        q1 = self.check_quaternion(quaternion_to, 'quaternion_to')

        if isinstance(t, (int, float, np.number)) and not np.isfinite(t):
            raise QuaternionDomainError(f'the interpolation parameter must be finite, got {t}')

        shortest_path = kwargs.get('shortest_path', False)

        cos_omega = q0 @ q1

        if not shortest_path:
            if 1 + cos_omega <= kwargs.get('epsilon', SLERP_EPSILON):
                raise QuaternionDomainError('cannot interpolate between antipodal quaternions')

            if self.warn_long_arc and cos_omega < 0:
                _LOGGER.warning('the quaternions are more than 90 degrees apart in 4-space, '
                                'interpolating along the long arc')

        return Quaternion.slerp(t, q0, q1, **kwargs)

    def from_matrix(self, matrix: ARRAY_LIKE_2D) -> Quaternion:
        """
        Checked version of :meth:`.Quaternion.from_matrix`.

        :raises QuaternionDomainError: If the matrix is not 3x3 or 4x4, is not finite, or its rotational block is not
                                       a proper (orthonormal, determinant 1) rotation
        :param matrix: The rotation matrix
        :return: The rotation quaternion
        """

        matrix = np.asarray(matrix, dtype=np.float64)

        if matrix.shape not in ((3, 3), (4, 4)):
            raise QuaternionDomainError(f'the rotation matrix must be 3x3 or 4x4, got shape {matrix.shape}')

        if not np.isfinite(matrix).all():
            raise QuaternionDomainError('the rotation matrix must be finite')

        block = matrix[:3, :3]

        if not np.allclose(block @ block.T, np.eye(3), rtol=0, atol=self.orthonormal_tolerance):
            raise QuaternionDomainError('the rotation matrix is not orthonormal')

        if np.linalg.det(block) < 0:
            raise QuaternionDomainError('the rotation matrix is a reflection')

        return Quaternion.from_matrix(matrix)


def checked_from_angle_axis(angle: float, axis: ARRAY_LIKE,
                            options: Optional[ValidationOptions] = None) -> Quaternion:
    """
    Shortcut for :meth:`.QuaternionValidator.from_angle_axis` using `options`.
    """

    return QuaternionValidator(options).from_angle_axis(angle, axis)


def checked_from_vector_to_vector(vec_from: ARRAY_LIKE, vec_to: ARRAY_LIKE,
                                  options: Optional[ValidationOptions] = None) -> Quaternion:
    """
    Shortcut for :meth:`.QuaternionValidator.from_vector_to_vector` using `options`.
    """

    return QuaternionValidator(options).from_vector_to_vector(vec_from, vec_to)


def checked_angle_axis(quaternion: ARRAY_LIKE,
                       options: Optional[ValidationOptions] = None) -> tuple[float, FLOAT_ARRAY]:
    """
    Shortcut for :meth:`.QuaternionValidator.angle_axis` using `options`.
    """

    return QuaternionValidator(options).angle_axis(quaternion)


def checked_slerp(t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE,
                  options: Optional[ValidationOptions] = None, **kwargs) -> Quaternion:
    """
    Shortcut for :meth:`.QuaternionValidator.slerp` using `options`.
    """

    return QuaternionValidator(options).slerp(t, quaternion_from, quaternion_to, **kwargs)


def checked_from_matrix(matrix: ARRAY_LIKE_2D, options: Optional[ValidationOptions] = None) -> Quaternion:
    """
    Shortcut for :meth:`.QuaternionValidator.from_matrix` using `options`.
    """

    return QuaternionValidator(options).from_matrix(matrix)

r"""
This module provides the :class:`Quaternion` class, the immutable rotation value type of quatkit.

A :class:`Quaternion` stores four single precision components in the order :math:`[q_x, q_y, q_z, q_w]` (vector
portion first, scalar portion last).  Every factory returns a fresh instance and the stored components are read
only, so instances can be freely shared.  Because the components are laid out as a plain 4-vector,
``numpy.asarray(q)`` gives the 4-vector view used for blending, and a :class:`Quaternion` can be passed to any of the
array level functions in :mod:`quatkit.conversions`, :mod:`quatkit.quaternion_math` and
:mod:`quatkit.interpolation`.

The unit length invariant of rotation quaternions is not enforced.  Quaternions built from a non-zero axis or a
rotation matrix are unit length, while direct arithmetic (for instance :meth:`Quaternion.slerp` of non-unit
inputs) can drift off the unit sphere.  See :mod:`quatkit.validation` for checked construction.
"""

from typing import Iterator, Optional, Union

import numpy as np

from quatkit._typing import ARRAY_LIKE, ARRAY_LIKE_2D, FLOAT_ARRAY, QUATERNION_DTYPE, TimeLike
from quatkit.conversions import (angle_axis_to_quaternion, vector_to_vector_quaternion, quaternion_to_angle_axis,
                                 rotmat_to_quaternion, quaternion_to_rotmat)
from quatkit.interpolation import slerp, nlerp
from quatkit.quaternion_math import (quaternion_dot, quaternion_norm, quaternion_normalize, quaternion_conjugate,
                                     quaternion_inverse, quaternion_multiplication, rotate_vector)


class Quaternion:
    """
    An immutable rotation quaternion.

    The quaternion can be built directly from its components, ``Quaternion(x, y, z, w)`` (the default is the identity
    rotation), or using one of the factories:

    * :meth:`from_angle_axis` -- a rotation of an angle about an axis
    * :meth:`from_vector_to_vector` -- the rotation taking one vector onto another
    * :meth:`from_matrix` -- the rotation of a rotation matrix
    * :meth:`slerp` / :meth:`nlerp` -- interpolation between two quaternions
    * :meth:`from_array` -- any length 4 array like

    For example::

        >>> from quatkit import Quaternion
        >>> from numpy import pi
        >>> Quaternion.from_angle_axis(pi/2, [0, 0, 1])
        Quaternion(array([-0.        , -0.        , -0.70710677,  0.70710677], dtype=float32))

    The multiplication operator performs the hamiltonian product, so ``(a * b).rotate(v)`` is the same as
    ``b.rotate(a.rotate(v))``.  The equality operator compares the components exactly; use :meth:`isclose` to compare
    rotations with a tolerance.
    """

    __slots__ = ('_components',)

    # numpy defers comparisons and arithmetic to the methods below
    __array_ufunc__ = None

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0):
        """
        :param x: The first component of the vector portion
        :param y: The second component of the vector portion
        :param z: The third component of the vector portion
        :param w: The scalar portion
        """

        components = np.array([x, y, z, w], dtype=QUATERNION_DTYPE)
        components.flags.writeable = False

        self._components: FLOAT_ARRAY = components

    @classmethod
    def from_array(cls, data: ARRAY_LIKE) -> 'Quaternion':
        """
        Create a quaternion from a length 4 array like in :math:`[q_x, q_y, q_z, q_w]` order.

        :raises ValueError: If the data does not contain exactly 4 elements
        :param data: The quaternion components
        :return: The new quaternion
        """

        data = np.asarray(data, dtype=QUATERNION_DTYPE).ravel()

        if data.size != 4:
            raise ValueError('The quaternion must be length 4')

        return cls(*data)

    @classmethod
    def identity(cls) -> 'Quaternion':
        """
        The identity rotation, :math:`[0, 0, 0, 1]`.
        """

        return cls()

    @classmethod
    def from_angle_axis(cls, angle: float, axis: Union[ARRAY_LIKE, float], y: Optional[float] = None,
                        z: Optional[float] = None) -> 'Quaternion':
        """
        Create the quaternion rotating by `angle` radians about `axis`.

        The axis can be given either as one 3 element array like or as three scalars,
        ``Quaternion.from_angle_axis(angle, x, y, z)``.  It does not need to be unit length but must not be zero.

        See :func:`.angle_axis_to_quaternion` for details.

        :param angle: The angle to rotate by in radians
        :param axis: The axis to rotate about, or its x component when `y` and `z` are also given
        :param y: The y component of the axis when it is given as scalars
        :param z: The z component of the axis when it is given as scalars
        :return: The new quaternion
        """

        if (y is None) != (z is None):
            raise ValueError('y and z must both be given when the axis is given as scalars')

        if y is not None:
            axis = [axis, y, z]

        return cls.from_array(angle_axis_to_quaternion(angle, axis))

    @classmethod
    def from_vector_to_vector(cls, vec_from: ARRAY_LIKE, vec_to: ARRAY_LIKE) -> 'Quaternion':
        """
        Create the quaternion rotating `vec_from` onto the direction of `vec_to`.

        See :func:`.vector_to_vector_quaternion` for details.

        :param vec_from: The vector to rotate from
        :param vec_to: The vector to rotate to
        :return: The new quaternion
        """

        return cls.from_array(vector_to_vector_quaternion(vec_from, vec_to))

    @classmethod
    def from_matrix(cls, matrix: ARRAY_LIKE_2D) -> 'Quaternion':
        """
        Create the quaternion from a :math:`3\\times 3` or homogeneous :math:`4\\times 4` rotation matrix.

        See :func:`.rotmat_to_quaternion` for details.

        :param matrix: The rotation matrix
        :return: The new quaternion
        """

        return cls.from_array(rotmat_to_quaternion(matrix))

    @classmethod
    def slerp(cls, t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE, **kwargs) -> 'Quaternion':
        """
        Spherically interpolate between two quaternions.

        See :func:`.interpolation.slerp` for details and the accepted keyword arguments.

        :param t: The fractional percent to interpolate at
        :param quaternion_from: The starting quaternion
        :param quaternion_to: The ending quaternion
        :return: The interpolated quaternion
        """

        return cls.from_array(slerp(t, quaternion_from, quaternion_to, **kwargs))

    @classmethod
    def nlerp(cls, t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE, **kwargs) -> 'Quaternion':
        """
        Normalized linear interpolation between two quaternions.

        See :func:`.interpolation.nlerp` for details.
        """

        return cls.from_array(nlerp(t, quaternion_from, quaternion_to, **kwargs))

    @property
    def x(self) -> float:
        return float(self._components[0])

    @property
    def y(self) -> float:
        return float(self._components[1])

    @property
    def z(self) -> float:
        return float(self._components[2])

    @property
    def w(self) -> float:
        return float(self._components[3])

    @property
    def vector(self) -> FLOAT_ARRAY:
        """
        The vector portion of the quaternion, :math:`[q_x, q_y, q_z]` (read only).
        """

        return self._components[:3]

    @property
    def scalar(self) -> float:
        """
        The scalar portion of the quaternion, :math:`q_w`.
        """

        return self.w

    def angle_axis(self) -> tuple[float, FLOAT_ARRAY]:
        """
        Returns the rotation angle (radians) and the unit rotation axis.

        The axis is NaN for the identity rotation.  See :func:`.quaternion_to_angle_axis` for details.
        """

        return quaternion_to_angle_axis(self._components)

    def as_matrix(self) -> FLOAT_ARRAY:
        """
        Returns the :math:`4\\times 4` homogeneous rotation matrix for this quaternion.

        See :func:`.quaternion_to_rotmat` for details.
        """

        return quaternion_to_rotmat(self._components)

    def as_vec4(self) -> FLOAT_ARRAY:
        """
        Returns a writeable copy of the components as a 4-vector.
        """

        return self._components.copy()

    def dot(self, other: ARRAY_LIKE) -> float:
        return quaternion_dot(self._components, other)

    def norm(self) -> float:
        return quaternion_norm(self._components)

    def normalized(self) -> 'Quaternion':
        """
        Returns a unit length copy of this quaternion.
        """

        return type(self).from_array(quaternion_normalize(self._components))

    def conjugate(self) -> 'Quaternion':
        return type(self).from_array(quaternion_conjugate(self._components))

    def inverse(self) -> 'Quaternion':
        """
        Returns the multiplicative inverse of this quaternion.  For unit quaternions this is the inverse rotation.
        """

        return type(self).from_array(quaternion_inverse(self._components))

    def rotate(self, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
        """
        Rotates a vector (or an nx3 stack of row vectors) by this quaternion.

        See :func:`.rotate_vector` for details.

        :param vector: The vector(s) to rotate
        :return: The rotated vector(s)
        """

        return rotate_vector(self._components, vector)

    def isclose(self, other: ARRAY_LIKE, atol: float = 1e-6) -> bool:
        """
        Checks whether `other` represents the same rotation as this quaternion within `atol`.

        Since :math:`\\mathbf{q}` and :math:`-\\mathbf{q}` represent the same rotation, both are considered close.

        :param other: The quaternion to compare against
        :param atol: The absolute tolerance on each component
        :return: ``True`` if the rotations are the same within the tolerance
        """

        other = np.asarray(other, dtype=np.float64).ravel()

        return bool(np.allclose(self._components, other, rtol=0, atol=atol) or
                    np.allclose(self._components, -other, rtol=0, atol=atol))

    def __mul__(self, other: 'Quaternion') -> 'Quaternion':

        if isinstance(other, Quaternion):
            return type(self).from_array(quaternion_multiplication(self._components, other._components))

        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return type(self).from_array(-self._components)

    def __eq__(self, other) -> bool:

        if not isinstance(other, Quaternion):
            try:
                other = Quaternion.from_array(other)
            except (ValueError, TypeError):
                return False

        return bool((self._components == other._components).all())

    def __hash__(self) -> int:
        return hash(tuple(self._components.tolist()))

    def __reduce__(self):
        return type(self), tuple(self._components.tolist())

    def __getitem__(self, item):
        return self._components[item]

    def __iter__(self) -> Iterator[float]:
        return iter(self._components.tolist())

    def __len__(self) -> int:
        return 4

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        same_dtype = dtype is None or np.dtype(dtype) == self._components.dtype

        if copy is False and not same_dtype:
            raise ValueError('Unable to convert the quaternion to {} without a copy'.format(np.dtype(dtype)))

        if same_dtype and not copy:
            return self._components

        return np.array(self._components, dtype=dtype)

    def __repr__(self) -> str:
        return 'Quaternion({0!r})'.format(self._components)

    def __str__(self) -> str:
        return str(self._components)

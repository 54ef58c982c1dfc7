r"""
This module provides basic algebra on rotation quaternions of the form :math:`[q_x, q_y, q_z, q_w]`.

Like :mod:`quatkit.conversions`, these functions accept any array like, compute in double precision, return single
precision arrays and never check for degenerate input.
"""

import numpy as np

from quatkit._typing import ARRAY_LIKE, FLOAT_ARRAY, QUATERNION_DTYPE
from quatkit.conversions import quaternion_to_rotmat


def quaternion_dot(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> float:
    """
    This function returns the inner product of two quaternions treated as 4-vectors.

    :param quaternion_1: The first quaternion
    :param quaternion_2: The second quaternion
    :return: The inner product
    """

    quaternion_1 = np.asarray(quaternion_1, dtype=np.float64).ravel()
    quaternion_2 = np.asarray(quaternion_2, dtype=np.float64).ravel()

    return float(quaternion_1 @ quaternion_2)


def quaternion_norm(quaternion: ARRAY_LIKE) -> float:
    """
    This function returns the Euclidean length of a quaternion.

    :param quaternion: The quaternion
    :return: The length of the quaternion
    """

    return float(np.linalg.norm(np.asarray(quaternion, dtype=np.float64).ravel()))


def quaternion_normalize(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    This function returns a unit length copy of a quaternion.

    A zero quaternion results in NaN components.

    :param quaternion: The quaternion to normalize
    :return: The unit quaternion
    """

    quaternion = np.asarray(quaternion, dtype=np.float64).ravel()

    with np.errstate(divide='ignore', invalid='ignore'):
        return (quaternion / np.linalg.norm(quaternion)).astype(QUATERNION_DTYPE)


def quaternion_conjugate(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    This function returns the conjugate of a quaternion, the quaternion with its vector portion negated.

    For unit quaternions this is also the inverse rotation.

    :param quaternion: The quaternion to conjugate
    :return: The conjugate quaternion
    """

    conjugate = np.array(quaternion, dtype=QUATERNION_DTYPE).ravel()

    conjugate[:3] *= -1

    return conjugate


def quaternion_inverse(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function returns the multiplicative inverse of a quaternion.

    .. math::
        \mathbf{q}^{-1} = \frac{\mathbf{q}^*}{\|\mathbf{q}\|^2}

    so that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=[0, 0, 0, 1]` even for non-unit quaternions.

    :param quaternion: The quaternion to invert
    :return: The inverse quaternion
    """

    quaternion = np.asarray(quaternion, dtype=np.float64).ravel()

    conjugate = np.hstack([-quaternion[:3], quaternion[3]])

    with np.errstate(divide='ignore', invalid='ignore'):
        return (conjugate / (quaternion @ quaternion)).astype(QUATERNION_DTYPE)


def quaternion_multiplication(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{w1}\mathbf{q}_{v2} + q_{w2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{w1}q_{w2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    The matrix of the product is the product of the matrices, so with row vectors the result rotates by
    `quaternion_1` first and then by `quaternion_2`.

    :param quaternion_1: The first quaternion to multiply
    :param quaternion_2: The second quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    quaternion_1 = np.asarray(quaternion_1, dtype=np.float64).ravel()
    quaternion_2 = np.asarray(quaternion_2, dtype=np.float64).ravel()

    qs1 = quaternion_1[3]
    qv1 = quaternion_1[:3]

    qs2 = quaternion_2[3]
    qv2 = quaternion_2[:3]

    return np.hstack([qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2),
                      qs1 * qs2 - qv1 @ qv2]).astype(QUATERNION_DTYPE)


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> FLOAT_ARRAY:
    """
    This function rotates a vector (or an nx3 stack of row vectors) by a rotation quaternion.

    The vectors are treated as row vectors and right multiplied by the rotational block of
    :func:`.quaternion_to_rotmat`.

    :param quaternion: The rotation quaternion
    :param vector: A 3 element vector or an nx3 array of vectors
    :return: The rotated vector(s) with the same shape as the input
    """

    return (np.asarray(vector, dtype=np.float64) @ quaternion_to_rotmat(quaternion)[:3, :3]).astype(QUATERNION_DTYPE)

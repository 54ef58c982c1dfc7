r"""
This module provides the array level conversions between rotation quaternions and the other rotation
representations used by quatkit.

All quaternions are 4 element arrays of the form

.. math::
    \mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_w\end{array}\right]

with the vector portion first and the scalar portion last.  Inputs may be any array like (including a
:class:`.Quaternion`).  The math is carried out in double precision and the results are stored in single precision
(:data:`.QUATERNION_DTYPE`).

None of these functions check their inputs.  Degenerate inputs (zero length axes, the identity rotation passed to
:func:`quaternion_to_angle_axis`) silently produce NaN or Inf values.  Use :mod:`quatkit.validation` if you need
checked versions.

Rotation matrices are :math:`4\times 4` homogeneous transforms indexed ``m[row, col]``.  Only the upper left
:math:`3\times 3` block carries the rotation and vectors are rotated as row vectors, ``v @ m[:3, :3]``.
"""

import logging

import numpy as np

from quatkit._typing import ARRAY_LIKE, ARRAY_LIKE_2D, FLOAT_ARRAY, QUATERNION_DTYPE


_LOGGER: logging.Logger = logging.getLogger(__name__)


VECTOR_EPSILON: float = 1e-5
"""
The tolerance on the cosine of the angle between two vectors used to detect coincident and opposite vectors in
:func:`vector_to_vector_quaternion`
"""

_NEXT_AXIS = (1, 2, 0)


def angle_axis_to_quaternion(angle: float, axis: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation angle (radians) about an axis into a rotation quaternion.

    The angle is first negated to convert to the internal handedness and then the quaternion is formed by:

    .. math::
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(-\frac{\theta}{2})\frac{\mathbf{x}}{\|\mathbf{x}\|} \\
        \text{cos}(-\frac{\theta}{2})\end{array}\right]

    The result has unit length for any non-zero axis, regardless of the magnitude of the axis.  Applied to row vectors
    (see :func:`quaternion_to_rotmat`) this is a right handed rotation of :math:`\theta` about :math:`\mathbf{x}`.

    .. warning::
        A zero length axis is not checked for and results in NaN vector components.

    :param angle: The angle to rotate by in radians
    :param axis: The 3 element axis to rotate about.  It does not need to be unit length
    :return: The rotation quaternion as a length 4 float32 array
    """

    axis = np.asarray(axis, dtype=np.float64).ravel()

    # convert to the internal handedness
    half_angle = -0.5 * float(angle)

    with np.errstate(divide='ignore', invalid='ignore'):
        inverse_norm = 1.0 / np.sqrt(axis @ axis)

        return np.hstack([axis * np.sin(half_angle) * inverse_norm, np.cos(half_angle)]).astype(QUATERNION_DTYPE)


def vector_to_vector_quaternion(vec_from: ARRAY_LIKE, vec_to: ARRAY_LIKE,
                                epsilon: float = VECTOR_EPSILON) -> FLOAT_ARRAY:
    r"""
    This function computes the rotation quaternion which rotates `vec_from` onto the direction of `vec_to`.

    Generally the angle comes from the dot product and the axis from the cross product of the two vectors.  The cross
    product is unstable when the vectors are nearly coincident or nearly opposite so these two cases are treated
    specially:

    * :math:`|\text{cos}\theta-1|<\epsilon`: the vectors are coincident and the identity rotation (an angle of 0 about
      :math:`[1, 0, 0]`) is returned.
    * :math:`|\text{cos}\theta+1|<\epsilon`: the vectors are opposite and the rotation is :math:`\pi` about any axis
      perpendicular to `vec_from`.  The axis is chosen deterministically as the cross product of `vec_from` with
      :math:`[1, 1, 1]` where the element at the position of the largest magnitude component of `vec_from` has been
      zeroed.
    * otherwise the rotation is :math:`\text{cos}^{-1}(\text{cos}\theta)` about :math:`\mathbf{a}\times\mathbf{b}`.

    The vectors do not need to be unit length.

    :param vec_from: The vector to rotate from
    :param vec_to: The vector to rotate to
    :param epsilon: The tolerance used to detect the coincident and opposite cases
    :return: The rotation quaternion as a length 4 float32 array
    """

    vec_from = np.asarray(vec_from, dtype=np.float64).ravel()
    vec_to = np.asarray(vec_to, dtype=np.float64).ravel()

    with np.errstate(divide='ignore', invalid='ignore'):
        cos_angle = (vec_from @ vec_to) / (np.linalg.norm(vec_from) * np.linalg.norm(vec_to))

    if abs(cos_angle - 1) < epsilon:
        _LOGGER.debug('coincident vectors, returning the identity rotation')

        return angle_axis_to_quaternion(0.0, [1.0, 0.0, 0.0])

    elif abs(cos_angle + 1) < epsilon:
        _LOGGER.debug('opposite vectors, rotating by pi about a perpendicular axis')

        helper = np.ones(3)
        helper[np.argmax(np.abs(vec_from))] = 0.0

        return angle_axis_to_quaternion(np.pi, np.cross(vec_from, helper))

    with np.errstate(invalid='ignore'):
        angle = np.arccos(cos_angle)

    return angle_axis_to_quaternion(angle, np.cross(vec_from, vec_to))


def quaternion_to_angle_axis(quaternion: ARRAY_LIKE) -> tuple[float, FLOAT_ARRAY]:
    r"""
    This function extracts the rotation angle and the unit rotation axis from a rotation quaternion.

    .. math::
        s = \|\mathbf{q}_v\| \\
        \theta = 2\text{atan2}(s, q_w) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{s}

    Since :math:`s` is never negative the angle is in :math:`[0, 2\pi]`.  Because of the handedness flip in
    :func:`angle_axis_to_quaternion`, converting ``(theta, axis)`` there and back gives ``(theta, -axis/|axis|)``
    for :math:`0<\theta<2\pi`.

    .. warning::
        For the identity rotation :math:`s=0` and the axis is NaN.  Check for an angle of 0 before relying on the axis.

    :param quaternion: The rotation quaternion
    :return: The rotation angle in radians and the 3 element float32 unit axis
    """

    quaternion = np.asarray(quaternion, dtype=np.float64).ravel()

    sin_half_angle = np.sqrt(quaternion[:3] @ quaternion[:3])

    angle = 2 * np.arctan2(sin_half_angle, quaternion[3])

    with np.errstate(divide='ignore', invalid='ignore'):
        axis = (quaternion[:3] / sin_half_angle).astype(QUATERNION_DTYPE)

    return float(angle), axis


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE_2D) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion using the trace (Shepperd) method.

    Only the upper left :math:`3\times 3` block of the matrix is used, so both :math:`3\times 3` and homogeneous
    :math:`4\times 4` matrices are accepted.

    When the trace :math:`t=m_{00}+m_{11}+m_{22}` is positive:

    .. math::
        s = \sqrt{t+1} \\
        q_w = \frac{s}{2} \\
        \mathbf{q}_v = \frac{1}{2s}\left[\begin{array}{c} m_{21}-m_{12} \\ m_{02}-m_{20} \\
        m_{10}-m_{01}\end{array}\right]

    Otherwise the largest diagonal element :math:`m_{ii}` is used, with :math:`j, k` following :math:`i` cyclically:

    .. math::
        s = \sqrt{m_{ii}-m_{jj}-m_{kk}+1} \\
        q_i = \frac{s}{2} \\
        q_w = \frac{m_{kj}-m_{jk}}{2s} \quad q_j = \frac{m_{ij}+m_{ji}}{2s} \quad q_k = \frac{m_{ik}+m_{ki}}{2s}

    which avoids the loss of precision of the trace formula when the trace is small or negative.

    This is the inverse of :func:`quaternion_to_rotmat` up to the sign of the quaternion.

    :param rotation_matrix: The rotation matrix to convert
    :return: The rotation quaternion as a length 4 float32 array
    """

    mat = np.asarray(rotation_matrix, dtype=np.float64)

    trace = mat[0, 0] + mat[1, 1] + mat[2, 2]

    quaternion = np.empty(4, dtype=np.float64)

    if trace > 0:
        scale = np.sqrt(trace + 1.0)
        quaternion[3] = scale / 2
        scale = 0.5 / scale

        quaternion[0] = (mat[2, 1] - mat[1, 2]) * scale
        quaternion[1] = (mat[0, 2] - mat[2, 0]) * scale
        quaternion[2] = (mat[1, 0] - mat[0, 1]) * scale

    else:
        # use the largest diagonal element
        i = 0
        if mat[1, 1] > mat[0, 0]:
            i = 1
        if mat[2, 2] > mat[i, i]:
            i = 2
        j = _NEXT_AXIS[i]
        k = _NEXT_AXIS[j]

        _LOGGER.debug('non-positive trace, using diagonal element %d', i)

        with np.errstate(invalid='ignore'):
            scale = np.sqrt(mat[i, i] - (mat[j, j] + mat[k, k]) + 1.0)

        quaternion[i] = scale * 0.5

        if scale != 0.0:
            scale = 0.5 / scale

        quaternion[3] = (mat[k, j] - mat[j, k]) * scale
        quaternion[j] = (mat[i, j] + mat[j, i]) * scale
        quaternion[k] = (mat[i, k] + mat[k, i]) * scale

    return quaternion.astype(QUATERNION_DTYPE)


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> FLOAT_ARRAY:
    r"""
    This function converts a rotation quaternion into its equivalent :math:`4\times 4` homogeneous rotation matrix.

    The rotational block is filled with

    .. math::
        \mathbf{T} = \left[\begin{array}{ccc}
        1-2(q_y^2+q_z^2) & 2(q_xq_y-q_wq_z) & 2(q_xq_z+q_wq_y) \\
        2(q_xq_y+q_wq_z) & 1-2(q_x^2+q_z^2) & 2(q_yq_z-q_wq_x) \\
        2(q_xq_z-q_wq_y) & 2(q_yq_z+q_wq_x) & 1-2(q_x^2+q_y^2)\end{array}\right]

    and the last row and column are set to :math:`[0, 0, 0, 1]`, i.e. there is no translation or perspective
    component.  Vectors are rotated as row vectors, ``v @ m[:3, :3]``.

    The quaternion is not normalized first.

    :param quaternion: The rotation quaternion to convert
    :return: The :math:`4\times 4` float32 rotation matrix
    """

    qx, qy, qz, qw = np.asarray(quaternion, dtype=np.float64).ravel()

    x2 = qx + qx
    y2 = qy + qy
    z2 = qz + qz

    xx = qx * x2
    xy = qx * y2
    xz = qx * z2

    yy = qy * y2
    yz = qy * z2
    zz = qz * z2

    wx = qw * x2
    wy = qw * y2
    wz = qw * z2

    return np.array([[1.0 - (yy + zz), xy - wz, xz + wy, 0.0],
                     [xy + wz, 1.0 - (xx + zz), yz - wx, 0.0],
                     [xz - wy, yz + wx, 1.0 - (xx + yy), 0.0],
                     [0.0, 0.0, 0.0, 1.0]], dtype=QUATERNION_DTYPE)

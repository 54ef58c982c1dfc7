r"""
This module provides interpolation between rotation quaternions.

Two interpolation functions are provided, :func:`slerp` (constant angular velocity) and :func:`nlerp` (normalized
linear blend).  See :mod:`quatkit.interpolator` for a configured class wrapping them.

Both functions accept the interpolation parameter either as a fractional percent ``t`` in :math:`[0, 1]` or as an
absolute time together with the keyword arguments ``time0`` and ``time1`` (the times of the first and second
quaternion).  Times may be numbers, python datetime objects or pandas timestamps.
"""

import logging

import numpy as np

from quatkit._typing import ARRAY_LIKE, FLOAT_ARRAY, QUATERNION_DTYPE, TimeLike
from quatkit.quaternion_math import quaternion_normalize


_LOGGER: logging.Logger = logging.getLogger(__name__)


SLERP_EPSILON: float = 1e-5
"""
When one minus the cosine of the angle between the quaternions is at or below this value :func:`slerp` falls back to
linear weights
"""


def _fraction(time: TimeLike, time0: TimeLike, time1: TimeLike) -> float:
    """
    Convert a time between time0 and time1 into a fractional percent.
    """

    return (time - time0) / (time1 - time0)


def slerp(t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE,
          time0: TimeLike = 0, time1: TimeLike = 1, epsilon: float = SLERP_EPSILON,
          shortest_path: bool = False) -> FLOAT_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    .. math::
        \text{cos}\,\omega = \mathbf{q}_0^T\mathbf{q}_1 \\
        \mathbf{q} = \mathbf{q}_0\frac{\text{sin}((1-t)\omega)}{\text{sin}\,\omega} +
        \mathbf{q}_1\frac{\text{sin}(t\omega)}{\text{sin}\,\omega}

    where :math:`\mathbf{q}_0` is the starting quaternion, :math:`\mathbf{q}_1` is the ending quaternion and
    :math:`t` is the fractional percent of the way from :math:`\mathbf{q}_0` to :math:`\mathbf{q}_1`.  When
    :math:`1-\text{cos}\,\omega\leq\epsilon` the quaternions are nearly identical and the weights :math:`1-t` and
    :math:`t` are used instead to avoid dividing by a nearly zero :math:`\text{sin}\,\omega`.

    The trigonometry is done in double precision.  The result is a direct blend of the two 4-vectors and is not
    renormalized, so it drifts off the unit sphere if the inputs are not unit length.

    .. warning::
        By default the sign of :math:`\text{cos}\,\omega` is not checked, so if the quaternions are more than
        90 degrees apart in 4-space the interpolation follows the long arc even though :math:`-\mathbf{q}_1`
        represents the same rotation.  Set `shortest_path` to ``True`` to negate :math:`\mathbf{q}_1` in this case.

    :param t: The fractional percent to interpolate at, or the actual time between `time0` and `time1`
    :param quaternion_from: The starting quaternion
    :param quaternion_to: The ending quaternion
    :param time0: The time corresponding to the first quaternion.  Leave at 0 if `t` is a fractional percent
    :param time1: The time corresponding to the second quaternion.  Leave at 1 if `t` is a fractional percent
    :param epsilon: The threshold on :math:`1-\text{cos}\,\omega` below which linear weights are used
    :param shortest_path: Whether to interpolate along the shorter arc when the dot product is negative
    :return: The interpolated quaternion as a length 4 float32 array
    """

    t = _fraction(t, time0, time1)

    q0 = np.asarray(quaternion_from, dtype=np.float64).ravel()
    q1 = np.asarray(quaternion_to, dtype=np.float64).ravel()

    cos_omega = q0 @ q1

    if shortest_path and cos_omega < 0:
        q1 = -q1
        cos_omega = -cos_omega

    if (1.0 - cos_omega) > epsilon:
        with np.errstate(divide='ignore', invalid='ignore'):
            omega = np.arccos(cos_omega)
            sin_omega = np.sin(omega)
            scale_from = np.sin((1.0 - t) * omega) / sin_omega
            scale_to = np.sin(t * omega) / sin_omega

    else:
        _LOGGER.debug('quaternions are nearly identical, using linear weights')
        scale_from = 1.0 - t
        scale_to = t

    return (q0 * scale_from + q1 * scale_to).astype(QUATERNION_DTYPE)


def nlerp(t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE,
          time0: TimeLike = 0, time1: TimeLike = 1, shortest_path: bool = False) -> FLOAT_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-t)+\mathbf{q}_1t}
        {\left\|\mathbf{q}_0(1-t)+\mathbf{q}_1t\right\|}

    NLERP is cheaper than :func:`slerp` but it does not interpolate at a constant angular velocity, so it is best
    suited to short intervals.  Antipodal endpoints blend to zero and give NaN components unless `shortest_path` is
    set.

    :param t: The fractional percent to interpolate at, or the actual time between `time0` and `time1`
    :param quaternion_from: The starting quaternion
    :param quaternion_to: The ending quaternion
    :param time0: The time corresponding to the first quaternion.  Leave at 0 if `t` is a fractional percent
    :param time1: The time corresponding to the second quaternion.  Leave at 1 if `t` is a fractional percent
    :param shortest_path: Whether to negate `quaternion_to` when the dot product is negative
    :return: The interpolated unit quaternion as a length 4 float32 array
    """

    t = _fraction(t, time0, time1)

    q0 = np.asarray(quaternion_from, dtype=np.float64).ravel()
    q1 = np.asarray(quaternion_to, dtype=np.float64).ravel()

    if shortest_path and q0 @ q1 < 0:
        q1 = -q1

    return quaternion_normalize(q0 * (1.0 - t) + q1 * t)

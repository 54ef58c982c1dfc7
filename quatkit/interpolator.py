"""
This module provides the :class:`Interpolator` class, which interpolates between quaternions using a stored
configuration given by :class:`InterpolatorOptions`.
"""

from dataclasses import dataclass

from typing import Optional

import numpy as np

from quatkit._typing import ARRAY_LIKE, INTERPOLATION_METHODS, TimeLike
from quatkit.interpolation import slerp, nlerp, SLERP_EPSILON
from quatkit.quaternion_math import quaternion_normalize
from quatkit.quaternion import Quaternion
from quatkit.utilities.options import UserOptions
from quatkit.utilities.mixin_classes import UserOptionConfigured


@dataclass
class InterpolatorOptions(UserOptions):
    """
    This dataclass serves as one way to control the settings for the :class:`.Interpolator` class.

    You can set any of the options on an instance of this dataclass and pass it to the :class:`.Interpolator` class at
    initialization to set the settings on the class.  :meth:`.Interpolator.reset_settings` restores them.
    """

    method: INTERPOLATION_METHODS = 'slerp'
    """
    The interpolation function to use, either ``'slerp'`` or ``'nlerp'``
    """

    epsilon: float = SLERP_EPSILON
    """
    The slerp threshold on one minus the cosine of the angle between the quaternions below which linear weights are
    used
    """

    shortest_path: bool = False
    """
    Whether to negate the second quaternion when needed to interpolate along the shorter arc (both methods)
    """

    renormalize: bool = False
    """
    Whether to normalize the slerp result to unit length
    """

    def override_options(self):
        if self.method not in ('slerp', 'nlerp'):
            raise ValueError(f'Unknown interpolation method {self.method!r}.  Must be one of slerp, nlerp')

        if self.epsilon < 0:
            raise ValueError('epsilon must be non-negative')


class Interpolator(UserOptionConfigured[InterpolatorOptions], InterpolatorOptions):
    """
    This class interpolates between :class:`.Quaternion` objects using a stored configuration.

    The configuration is given by an :class:`.InterpolatorOptions` instance and is applied as attributes of this
    class, so it can be changed on the instance directly and restored with :meth:`reset_settings`::

        >>> from quatkit import Interpolator, InterpolatorOptions, Quaternion
        >>> from numpy import pi
        >>> interp = Interpolator(InterpolatorOptions(method='slerp'))
        >>> interp(0.5, Quaternion(), Quaternion.from_angle_axis(pi, [1, 0, 0]))
        Quaternion(array([-0.70710677,  0.        ,  0.        ,  0.70710677], dtype=float32))
    """

    def __init__(self, options: Optional[InterpolatorOptions] = None):
        """
        :param options: The options to configure the interpolator with.  If ``None`` the defaults are used
        """

        super().__init__(InterpolatorOptions, options=options)

    def __call__(self, t: TimeLike, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE,
                 time0: TimeLike = 0, time1: TimeLike = 1) -> Quaternion:
        """
        Interpolate between two quaternions using the current settings.

        :param t: The fractional percent to interpolate at, or the actual time between `time0` and `time1`
        :param quaternion_from: The starting quaternion
        :param quaternion_to: The ending quaternion
        :param time0: The time corresponding to the first quaternion
        :param time1: The time corresponding to the second quaternion
        :return: The interpolated quaternion
        """

        if self.method == 'nlerp':
            return Quaternion.from_array(nlerp(t, quaternion_from, quaternion_to, time0=time0, time1=time1,
                                               shortest_path=self.shortest_path))

        elif self.method != 'slerp':
            raise ValueError(f'Unknown interpolation method {self.method!r}.  Must be one of slerp, nlerp')

        result = slerp(t, quaternion_from, quaternion_to, time0=time0, time1=time1,
                       epsilon=self.epsilon, shortest_path=self.shortest_path)

        if self.renormalize:
            result = quaternion_normalize(result)

        return Quaternion.from_array(result)

    def sample(self, quaternion_from: ARRAY_LIKE, quaternion_to: ARRAY_LIKE, count: int) -> list[Quaternion]:
        """
        Interpolate `count` evenly spaced quaternions from `quaternion_from` to `quaternion_to`, both included.

        :param quaternion_from: The starting quaternion
        :param quaternion_to: The ending quaternion
        :param count: The number of quaternions to produce
        :return: The interpolated quaternions in order
        """

        return [self(t, quaternion_from, quaternion_to) for t in np.linspace(0.0, 1.0, count)]

from typing import Union, Literal
from datetime import timedelta, datetime
from pandas import Timedelta, Timestamp

import numpy as np
import numpy.typing as npt

QUATERNION_DTYPE = np.float32
"""
Storage precision of quaternion components and rotation matrices
"""

FLOAT_ARRAY = npt.NDArray[np.float32]
ARRAY_LIKE = npt.ArrayLike
ARRAY_LIKE_2D = npt.ArrayLike

Real = Union[int, float, np.floating]

TimedeltaLike = Union[timedelta, Timedelta]
DatetimeLike = Union[datetime, Timestamp]

TimeLike = Union[Real, DatetimeLike, TimedeltaLike]

INTERPOLATION_METHODS = Literal['slerp', 'nlerp']

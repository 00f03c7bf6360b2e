from collections.abc import Sequence
from typing import Literal, Union

import numpy as np
from pandas import DataFrame, Series

__all__ = [
    "NDArray",
    "ArrayLike",
    "ArrayLike1D",
    "Float64Array",
    "Float64Array1D",
    "ICMethod",
    "SeriesLike",
]

NDArray = Union[np.ndarray]
Float64Array = np.ndarray[tuple[int, ...], np.dtype[np.float64]]  # pragma: no cover
Float64Array1D = np.ndarray[tuple[int], np.dtype[np.float64]]  # pragma: no cover

ArrayLike1D = Union[Float64Array1D, Series]
ArrayLike = Union[NDArray, DataFrame, Series]
SeriesLike = Union[Sequence[Union[float, int]], ArrayLike]
ICMethod = Literal["aic", "bic"]

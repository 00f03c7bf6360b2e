from lrvar.compat.numba import jit

from typing import Union

import numpy as np

from lrvar.typing import ArrayLike, Float64Array1D, SeriesLike
from lrvar.utility.array import series_to_array

__all__ = ["autocov"]


@jit
def _autocov_jit(em: np.ndarray) -> np.ndarray:
    nobs = em.shape[0]
    acov = np.empty(nobs)
    for j in range(nobs):
        total = 0.0
        for i in range(j, nobs):
            total += em[i] * em[i - j]
        acov[j] = total / nobs
    return acov


def autocov(x: Union[SeriesLike, ArrayLike]) -> Float64Array1D:
    r"""
    Sample autocovariances of a time series at lags 0, 1, ..., T-1

    Parameters
    ----------
    x : array_like
        The time series. Must contain at least 2 observations.

    Returns
    -------
    ndarray
        Array with T elements where element j is the lag-j autocovariance.

    Notes
    -----
    The series is always demeaned. The autocovariances use T as the
    denominator at every lag,

    .. math::

       \hat{\gamma}_j = \frac{1}{T}\sum_{t=j+1}^{T} e_t e_{t-j}

    where :math:`e_t = x_t - \bar{x}`.
    """
    em = series_to_array(x, "x")
    em = em - em.mean()
    return _autocov_jit(em)

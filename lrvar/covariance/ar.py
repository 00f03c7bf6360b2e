from functools import cached_property
from typing import NamedTuple, Optional, Union
import warnings

import numpy as np
from numpy.linalg import lstsq
import pandas as pd
from statsmodels.tsa.tsatools import lagmat

from lrvar.typing import ArrayLike, Float64Array1D, ICMethod, SeriesLike
from lrvar.utility.array import series_to_array
from lrvar.utility.exceptions import (
    InvalidCriterionError,
    InvalidOrderError,
    NearUnitRootWarning,
    invalid_criterion_error,
    invalid_order_error,
    near_unit_root_warning,
    short_series_order_error,
)

__all__ = ["ARFit", "ARSpectral", "ARSpectralEstimate", "ar_spectral_lrv"]

# Coefficient sums at or above 1 - UNIT_ROOT_TOL are treated as unit roots
UNIT_ROOT_TOL = 1e-6


class ARSpectralEstimate(NamedTuple):
    lrv: float
    order: int


class ARFit(NamedTuple):
    order: int
    ic: float
    lrv: float
    params: Float64Array1D
    sigma2: float


class ARSpectral:
    r"""
    Autoregressive spectral estimator of the long-run variance

    Parameters
    ----------
    x : array_like
        The time series.
    method : {"aic", "bic"}, default "aic"
        The information criterion used to select the AR order.
    max_lag : int, default None
        The largest AR order considered. Must be at least 1. If None,
        ``int(nobs ** (1/3))`` is used, limited so that every candidate
        model keeps residual degrees of freedom.
    center : bool, default False
        A flag indicating whether x should be demeaned before fitting.

    Notes
    -----
    For k = 0, 1, ..., max_lag, the AR(k)

    .. math::

       x_t = \sum_{i=1}^{k} \beta_i x_{t-i} + \epsilon_t

    is estimated by least squares using observations k+1, ..., T and
    :math:`s^2_k = SSR_k / (T - 2k)`. The criterion is

    .. math::

       IC_k = \ln s^2_k + k \frac{c_T}{T}

    where :math:`c_T = 2` (AIC) or :math:`\ln T` (BIC). The order minimizing
    the criterion is selected, with ties resolved to the smaller order, and
    the long-run variance is

    .. math::

       \hat{\omega}^2 = \frac{s^2_{k^*}}{\left(1 - \sum_i \hat{\beta}_i\right)^2}.

    The estimate is sensitive to AR coefficients summing to values close to
    1, where it diverges. A NearUnitRootWarning is issued when the sum is at
    least ``1 - UNIT_ROOT_TOL`` but the value is returned unchanged.
    """

    def __init__(
        self,
        x: Union[SeriesLike, ArrayLike],
        method: ICMethod = "aic",
        max_lag: Optional[int] = None,
        center: bool = False,
    ) -> None:
        self._x = series_to_array(x, "x")
        self._center = center
        if self._center:
            self._x = self._x - self._x.mean()
        if not isinstance(method, str) or method.lower() not in ("aic", "bic"):
            raise InvalidCriterionError(invalid_criterion_error.format(method=method))
        self._method = method.lower()
        nobs = self._x.shape[0]
        if max_lag is None:
            max_lag = max(1, min(int(nobs ** (1 / 3)), (nobs - 1) // 2))
        elif (
            not np.isscalar(max_lag)
            or isinstance(max_lag, (bool, np.bool_, str))
            or int(max_lag) != max_lag
            or max_lag < 1
        ):
            raise InvalidOrderError(invalid_order_error.format(max_lag=max_lag))
        max_lag = int(max_lag)
        if 2 * max_lag + 1 > nobs:
            raise InvalidOrderError(
                short_series_order_error.format(
                    max_lag=max_lag, nobs=nobs, required=2 * max_lag + 1
                )
            )
        self._max_lag = max_lag

    def __str__(self) -> str:
        out = (
            "Estimator: AR Spectral",
            f"Criterion: {self._method.upper()}",
            f"Maximum Lag: {self._max_lag}",
            f"Selected Order: {self.order}",
            f"Long-run Variance: {self.lrv}",
        )
        return "\n".join(out)

    def __repr__(self) -> str:
        return self.__str__() + f"\nID: {hex(id(self))}"

    @property
    def method(self) -> str:
        """The information criterion used for order selection"""
        return self._method

    @property
    def max_lag(self) -> int:
        """The largest AR order considered"""
        return self._max_lag

    @property
    def centered(self) -> bool:
        """Flag indicating whether the data are centered (demeaned)"""
        return self._center

    def _penalty(self, nobs: int) -> float:
        if self._method == "aic":
            return 2 / nobs
        return np.log(nobs) / nobs

    def _fit(self, order: int) -> ARFit:
        x = self._x
        nobs = x.shape[0]
        if order == 0:
            params = np.empty(0)
            sigma2 = float(x @ x) / nobs
        else:
            lags, lead = lagmat(x, order, trim="both", original="sep")
            lead = np.asarray(lead).ravel()
            params = lstsq(lags, lead, rcond=None)[0]
            resids = lead - lags @ params
            sigma2 = float(resids @ resids) / (lags.shape[0] - lags.shape[1])
        ic = np.log(sigma2) + order * self._penalty(nobs)
        lrv = sigma2 / (1.0 - np.sum(params)) ** 2
        return ARFit(order, float(ic), float(lrv), params, sigma2)

    @cached_property
    def _fits(self) -> list[ARFit]:
        return [self._fit(order) for order in range(self._max_lag + 1)]

    @cached_property
    def ic_table(self) -> pd.DataFrame:
        """
        Information criterion and implied long-run variance for each order.

        Returns
        -------
        DataFrame
            DataFrame indexed by AR order with columns "ic" and "lrv".
        """
        fits = self._fits
        index = pd.Index([fit.order for fit in fits], name="order")
        return pd.DataFrame(
            {"ic": [fit.ic for fit in fits], "lrv": [fit.lrv for fit in fits]},
            index=index,
        )

    @cached_property
    def _selected(self) -> ARFit:
        ics = np.array([fit.ic for fit in self._fits])
        selected = self._fits[int(np.argmin(ics))]
        coef_sum = float(np.sum(selected.params))
        if coef_sum >= 1 - UNIT_ROOT_TOL:
            warnings.warn(
                near_unit_root_warning.format(
                    order=selected.order, coef_sum=coef_sum, lrv=selected.lrv
                ),
                NearUnitRootWarning,
                stacklevel=3,
            )
        return selected

    @property
    def order(self) -> int:
        """The selected AR order"""
        return self._selected.order

    @property
    def params(self) -> Float64Array1D:
        """The AR coefficients at the selected order"""
        return self._selected.params

    @property
    def short_run(self) -> float:
        """The residual variance at the selected order"""
        return self._selected.sigma2

    @property
    def lrv(self) -> float:
        """The long-run variance estimate"""
        return self._selected.lrv

    @property
    def estimate(self) -> ARSpectralEstimate:
        """The long-run variance and the selected order"""
        return ARSpectralEstimate(self.lrv, self.order)


def ar_spectral_lrv(
    x: Union[SeriesLike, ArrayLike],
    method: ICMethod = "aic",
    max_lag: Optional[int] = None,
) -> ARSpectralEstimate:
    """
    Autoregressive spectral estimate of the long-run variance

    Parameters
    ----------
    x : array_like
        The time series.
    method : {"aic", "bic"}, default "aic"
        The information criterion used to select the AR order.
    max_lag : int, default None
        The largest AR order considered.

    Returns
    -------
    ARSpectralEstimate
        Named tuple containing the long-run variance and the selected order.

    See Also
    --------
    ARSpectral
    """
    return ARSpectral(x, method=method, max_lag=max_lag).estimate

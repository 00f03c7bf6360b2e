from abc import ABC, abstractmethod
from functools import cached_property
from typing import Optional, Union

import numpy as np
from pandas.util._decorators import Substitution

from lrvar.covariance.autocov import autocov
from lrvar.covariance.bandwidth import (
    BARTLETT,
    PLUG_IN_CONSTANTS,
    QUADRATIC_SPECTRAL,
    SEED_RATES,
    Automatic,
    BandwidthPolicy,
    Manual,
    _check_bandwidth,
    _check_seed,
    canonical_kernel,
    resolve_bandwidth,
    rule_of_thumb,
)
from lrvar.typing import ArrayLike, Float64Array1D, SeriesLike
from lrvar.utility.array import AbstractDocStringInheritor, series_to_array
from lrvar.utility.exceptions import InvalidInputError

__all__ = [
    "Andrews",
    "Bartlett",
    "LongRunVarianceEstimate",
    "LongRunVarianceEstimator",
    "NeweyWest",
    "QuadraticSpectral",
    "auto_bandwidth",
    "bartlett_weights",
    "kernel_weights",
    "long_run_variance",
    "quadratic_spectral_weights",
]

KERNELS = ["Bartlett", "QuadraticSpectral", "Andrews", "NeweyWest"]


def bartlett_weights(nobs: int, bandwidth: float) -> Float64Array1D:
    """
    Bartlett kernel weights for lags 0, 1, ..., nobs-1

    Weights decline linearly and are exactly 0 from lag bandwidth + 1 on.
    """
    bw = _check_bandwidth(bandwidth)
    lags = np.arange(nobs, dtype="double")
    return np.maximum(0.0, 1.0 - lags / (bw + 1))


def quadratic_spectral_weights(nobs: int, bandwidth: float) -> Float64Array1D:
    """
    Quadratic Spectral kernel weights for lags 0, 1, ..., nobs-1

    The kernel is never truncated. A bandwidth of 0 puts all weight on lag 0.
    """
    bw = _check_bandwidth(bandwidth)
    w = np.zeros(nobs)
    w[0] = 1.0
    if bw > 0:
        x = np.arange(1, nobs) / bw
        z = 6 * np.pi * x / 5
        w[1:] = 3 / z**2 * (np.sin(z) / z - np.cos(z))
    return w


def kernel_weights(nobs: int, bandwidth: float, kernel: str) -> Float64Array1D:
    """
    Kernel weights used in a long-run variance estimate

    Parameters
    ----------
    nobs : int
        The number of observations, which is also the number of weights.
    bandwidth : float
        The non-negative kernel bandwidth.
    kernel : str
        The kernel name, "bartlett" or "quadraticspectral" or an alias.

    Returns
    -------
    ndarray
        nobs weights with 1 in position 0.
    """
    kernel = canonical_kernel(kernel)
    if int(nobs) != nobs or nobs < 1:
        raise InvalidInputError(f"nobs must be a positive integer. Got {nobs}.")
    if kernel == BARTLETT:
        return bartlett_weights(int(nobs), bandwidth)
    return quadratic_spectral_weights(int(nobs), bandwidth)


class LongRunVarianceEstimate:
    r"""
    Long-run variance estimate of a univariate time series

    Parameters
    ----------
    short_run : float
        The short-run variance, the lag-0 autocovariance.
    one_sided_strict : float
        The kernel-weighted sum of autocovariances at lags 1, 2, ...
    long_run : float, default None
        The long-run variance. If not provided, computed from short_run and
        one_sided_strict.
    one_sided : float, default None
        The one-sided variance. If not provided, computed from short_run and
        one_sided_strict.

    Notes
    -----
    If :math:`\gamma_0` is the short-run variance and :math:`\lambda_1` is
    the one-sided strict variance, then the long-run variance is

    .. math::

        \omega^2 = \gamma_0 + 2 \lambda_1

    and the one-sided variance is

    .. math::

        \lambda_0 = \gamma_0 + \lambda_1.
    """

    def __init__(
        self,
        short_run: float,
        one_sided_strict: float,
    ) -> None:
        self._sr = float(short_run)
        self._oss = float(one_sided_strict)

    def __repr__(self) -> str:
        return (
            f"LongRunVarianceEstimate(long_run={self.long_run}, "
            f"short_run={self.short_run}, one_sided={self.one_sided}, "
            f"one_sided_strict={self.one_sided_strict})"
        )

    @property
    def long_run(self) -> float:
        """
        The long-run variance estimate.
        """
        return self._sr + 2 * self._oss

    @property
    def short_run(self) -> float:
        """
        The short-run variance estimate.
        """
        return self._sr

    @property
    def one_sided(self) -> float:
        """
        The one-sided variance estimate.
        """
        return self._sr + self._oss

    @property
    def one_sided_strict(self) -> float:
        """
        The one-sided strict variance estimate.
        """
        return self._oss


class LongRunVarianceEstimator(ABC):
    r"""
    %(kernel_name)s kernel long-run variance estimation.

    Parameters
    ----------
    x : array_like
        The time series. It is always demeaned.
    bandwidth : float, default None
        The kernel's bandwidth. If None, the bandwidth is selected using the
        Newey-West plug-in rule.
    seed : int, default None
        The number of autocovariances used when selecting the bandwidth. If
        None, ``int(4 * (nobs / 100) ** %(rate)s)`` is used. Ignored when
        bandwidth is provided.

    Notes
    -----
    The kernel weights are computed using

    .. math::

       %(formula)s

    where :math:`z=\frac{h}{H}, h=0, 1, \ldots, T-1` and H is the bandwidth.
    The long-run variance is

    .. math::

       \hat{\omega}^2 = \hat{\gamma}_0 + 2\sum_{h=1}^{T-1} w_h \hat{\gamma}_h
    """

    _name = ""
    _kernel = ""

    def __init__(
        self,
        x: Union[SeriesLike, ArrayLike],
        bandwidth: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        self._x = series_to_array(x, "x")
        if bandwidth is not None:
            bandwidth = _check_bandwidth(bandwidth)
        if seed is not None:
            seed = _check_seed(seed)
        self._bandwidth = bandwidth
        self._seed = seed
        self._auto_bandwidth = bandwidth is None

    def __str__(self) -> str:
        out = (
            f"Kernel: {self.name}",
            f"Bandwidth: {self.bandwidth}",
            f"Automatic Bandwidth: {self._auto_bandwidth}",
            f"Long-run Variance: {self.lrv}",
        )
        return "\n".join(out)

    def __repr__(self) -> str:
        return self.__str__() + f"\nID: {hex(id(self))}"

    @property
    def name(self) -> str:
        """
        The estimator's name.

        Returns
        -------
        str
            The estimator's name.
        """
        return self._name

    @property
    def kernel(self) -> str:
        """
        The canonical name of the kernel.
        """
        return self._kernel

    @property
    def kernel_const(self) -> float:
        """
        The constant used in optimal bandwidth calculation.

        Returns
        -------
        float
            The constant value used in the optimal bandwidth calculation.
        """
        return PLUG_IN_CONSTANTS[self._kernel][1]

    @property
    def bandwidth_scale(self) -> float:
        """
        The power used in optimal bandwidth calculation.

        Returns
        -------
        float
            The power value used in the optimal bandwidth calculation.
        """
        return float(PLUG_IN_CONSTANTS[self._kernel][0])

    @property
    def rate(self) -> float:
        """
        The rate used to set the default seed in bandwidth selection.

        Returns
        -------
        float
            The rate used in bandwidth selection.
        """
        return SEED_RATES[self._kernel]

    @property
    def policy(self) -> BandwidthPolicy:
        """
        The bandwidth policy implied by the bandwidth and seed inputs.
        """
        if self._bandwidth is not None:
            return Manual(self._bandwidth)
        seed = self._seed
        if seed is None:
            seed = rule_of_thumb(self._kernel, self._x.shape[0])
        return Automatic(seed)

    @cached_property
    def autocov(self) -> Float64Array1D:
        """
        Sample autocovariances at lags 0, 1, ..., T-1.
        """
        return autocov(self._x)

    @cached_property
    def bandwidth(self) -> float:
        """
        The bandwidth used by the estimator.

        Returns
        -------
        float
            The user-provided or automatically selected bandwidth.
        """
        return resolve_bandwidth(self._kernel, self.autocov, self.policy)

    @abstractmethod
    def _weights(self) -> Float64Array1D:
        """
        Compute the kernel's weights
        """

    @cached_property
    def kernel_weights(self) -> Float64Array1D:
        """
        Weights used in the long-run variance calculation.

        Returns
        -------
        ndarray
            The weight vector including 1 in position 0.
        """
        return self._weights()

    @cached_property
    def cov(self) -> LongRunVarianceEstimate:
        """
        The estimated variances.

        Returns
        -------
        LongRunVarianceEstimate
            Estimate instance containing 4 values:

            * long_run
            * short_run
            * one_sided
            * one_sided_strict
        """
        acov = self.autocov
        w = self.kernel_weights
        short_run = acov[0]
        one_sided_strict = float(w[1:] @ acov[1:])
        return LongRunVarianceEstimate(short_run, one_sided_strict)

    @property
    def lrv(self) -> float:
        """
        The long-run variance estimate.
        """
        return self.cov.long_run


_bartlett_formula = """\
w=\\begin{cases} 1-\\frac{h}{H+1} & h\\leq H+1 \\\\ 0 & h>H+1 \\end{cases}
"""


@Substitution(
    kernel_name="Bartlett's (Newey-West)", formula=_bartlett_formula, rate="(2 / 9)"
)
class Bartlett(LongRunVarianceEstimator, metaclass=AbstractDocStringInheritor):
    _name = "Bartlett"
    _kernel = BARTLETT

    def _weights(self) -> Float64Array1D:
        return bartlett_weights(self._x.shape[0], self.bandwidth)


_qs_name = "Quadratic-Spectral (Andrews')"
_qs_formula = """\
w=\\begin{cases} \
1 & z=0\\\\ \
\\frac{3}{x^{2}}\\left(\\frac{\\sin x}{x}-\\cos x\\right),x=\\frac{6\\pi z}{5} & z>0 \
\\end{cases} \
"""


@Substitution(kernel_name=_qs_name, formula=_qs_formula, rate="(2 / 25)")
class QuadraticSpectral(
    LongRunVarianceEstimator, metaclass=AbstractDocStringInheritor
):
    _name = "Quadratic Spectral"
    _kernel = QUADRATIC_SPECTRAL

    def _weights(self) -> Float64Array1D:
        return quadratic_spectral_weights(self._x.shape[0], self.bandwidth)


class Andrews(QuadraticSpectral):
    """
    Alternative name of the QuadraticSpectral long-run variance estimator.

    See Also
    --------
    QuadraticSpectral
    """


class NeweyWest(Bartlett):
    """
    Alternative name for Bartlett long-run variance estimator.

    See Also
    --------
    Bartlett
    """


_ESTIMATORS: dict[str, type[LongRunVarianceEstimator]] = {
    BARTLETT: Bartlett,
    QUADRATIC_SPECTRAL: QuadraticSpectral,
}


def long_run_variance(
    x: Union[SeriesLike, ArrayLike],
    kernel: str = "bartlett",
    policy: Optional[BandwidthPolicy] = None,
) -> float:
    """
    Kernel estimate of the long-run variance of a time series

    Parameters
    ----------
    x : array_like
        The time series.
    kernel : str, default "bartlett"
        The kernel, "bartlett" or "quadraticspectral" or an alias.
    policy : {Manual, Automatic}, default None
        How the bandwidth is chosen. If None, the Newey-West plug-in rule is
        used with the default seed.

    Returns
    -------
    float
        The long-run variance estimate.

    Examples
    --------
    >>> from lrvar.covariance.bandwidth import Manual
    >>> round(long_run_variance([1, 2, 3, 4, 5], "bartlett", Manual(2)), 3)
    2.933
    """
    estimator = _ESTIMATORS[canonical_kernel(kernel)]
    if policy is None:
        return estimator(x).lrv
    if isinstance(policy, Manual):
        return estimator(x, bandwidth=policy.bandwidth).lrv
    if isinstance(policy, Automatic):
        return estimator(x, seed=policy.seed).lrv
    raise TypeError("policy must be a Manual or Automatic instance.")


def auto_bandwidth(
    x: Union[SeriesLike, ArrayLike], kernel: str = "bartlett", scale: float = 4.0
) -> float:
    """
    Automatic bandwidth selection of Newey & West (1994).

    Parameters
    ----------
    x : array_like
        Data on which to apply the bandwidth selection
    kernel : str, default "bartlett"
        The kernel function to use for selecting the bandwidth

        - "ba", "bartlett", "nw": Bartlett kernel (default)
        - "qs", "andrews":  Quadratic Spectral kernel
    scale : float, default 4.0
        Multiplier in the rule that sets the number of autocovariances used.

    Returns
    -------
    float
        The estimated optimal bandwidth.
    """
    kernel = canonical_kernel(kernel)
    acov = autocov(x)
    seed = rule_of_thumb(kernel, acov.shape[0], scale=scale)
    return resolve_bandwidth(kernel, acov, Automatic(seed))

"""
Bandwidth rules and Newey-West automatic bandwidth selection
"""

from typing import NamedTuple, Union

import numpy as np

from lrvar.typing import ArrayLike1D, Float64Array1D
from lrvar.utility.exceptions import (
    InsufficientLagsError,
    InvalidBandwidthError,
    InvalidBandwidthSeedError,
    InvalidInputError,
    InvalidKernelError,
    insufficient_lags_error,
    invalid_bandwidth_error,
    invalid_kernel_error,
    invalid_seed_error,
)

__all__ = [
    "Automatic",
    "BandwidthPolicy",
    "Manual",
    "bartlett_auto_seed",
    "bartlett_manual_bandwidth",
    "canonical_kernel",
    "qs_auto_seed",
    "qs_manual_bandwidth",
    "resolve_bandwidth",
    "rule_of_thumb",
    "select_bandwidth",
]

BARTLETT = "bartlett"
QUADRATIC_SPECTRAL = "quadraticspectral"

KERNEL_ALIASES: dict[str, str] = {
    "bartlett": BARTLETT,
    "ba": BARTLETT,
    "nw": BARTLETT,
    "neweywest": BARTLETT,
    "quadraticspectral": QUADRATIC_SPECTRAL,
    "qs": QUADRATIC_SPECTRAL,
    "andrews": QUADRATIC_SPECTRAL,
}

# kernel -> (q, kernel constant) in the Newey-West plug-in rule
PLUG_IN_CONSTANTS: dict[str, tuple[int, float]] = {
    BARTLETT: (1, 1.1447),
    QUADRATIC_SPECTRAL: (2, 1.3221),
}

SEED_RATES: dict[str, float] = {
    BARTLETT: 2 / 9,
    QUADRATIC_SPECTRAL: 2 / 25,
}


class Manual(NamedTuple):
    """User-provided bandwidth"""

    bandwidth: float


class Automatic(NamedTuple):
    """Newey-West plug-in bandwidth using seed lags of autocovariances"""

    seed: int


BandwidthPolicy = Union[Manual, Automatic]


def _normalize_name(name: str) -> str:
    name = name.replace("-", "").replace("_", "").replace(" ", "")
    name = name.lower()
    return name


def canonical_kernel(kernel: str) -> str:
    """
    Map a kernel name or alias to its canonical name

    Parameters
    ----------
    kernel : str
        Kernel name. Case, "-", "_" and spaces are ignored.

    Returns
    -------
    str
        Either "bartlett" or "quadraticspectral".
    """
    if isinstance(kernel, str):
        normalized = _normalize_name(kernel)
        if normalized in KERNEL_ALIASES:
            return KERNEL_ALIASES[normalized]
    available = "\n".join(sorted(KERNEL_ALIASES))
    raise InvalidKernelError(
        invalid_kernel_error.format(kernel=kernel, available=available)
    )


def _check_nobs(nobs: int) -> None:
    if nobs <= 0:
        raise InvalidInputError(f"nobs must be positive. The value provided was {nobs}.")


def bartlett_auto_seed(scale: float, nobs: int) -> int:
    r"""
    Number of autocovariances used to seed the Bartlett plug-in bandwidth

    Computed as :math:`\lfloor x (T/100)^{2/9} \rfloor`.
    """
    _check_nobs(nobs)
    return int(scale * (nobs / 100) ** (2 / 9))


def qs_auto_seed(scale: float, nobs: int) -> int:
    r"""
    Number of autocovariances used to seed the Quadratic Spectral plug-in bandwidth

    Computed as :math:`\lfloor x (T/100)^{2/25} \rfloor`.
    """
    _check_nobs(nobs)
    return int(scale * (nobs / 100) ** (2 / 25))


def bartlett_manual_bandwidth(scale: float, nobs: int) -> int:
    r"""
    Deterministic Bartlett bandwidth :math:`\lfloor x (T/100)^{1/4} \rfloor`
    """
    _check_nobs(nobs)
    return int(scale * (nobs / 100) ** (1 / 4))


def qs_manual_bandwidth(scale: float, nobs: int) -> int:
    r"""
    Deterministic Quadratic Spectral bandwidth
    :math:`\lfloor \frac{2}{3} x (T/100)^{1/4} \rfloor`
    """
    _check_nobs(nobs)
    return int((2 / 3) * scale * (nobs / 100) ** (1 / 4))


def rule_of_thumb(
    kernel: str, nobs: int, scale: float = 4.0, automatic: bool = True
) -> int:
    """
    Data-independent bandwidth or seed lag count

    Parameters
    ----------
    kernel : str
        The kernel name.
    nobs : int
        The sample size.
    scale : float, default 4.0
        Multiplier applied to the growth-rate sequence.
    automatic : bool, default True
        If True, return the seed used in automatic bandwidth selection.
        If False, return a bandwidth that can be used directly.

    Returns
    -------
    int
        The seed lag count or the bandwidth.
    """
    kernel = canonical_kernel(kernel)
    if kernel == BARTLETT:
        rule = bartlett_auto_seed if automatic else bartlett_manual_bandwidth
    else:
        rule = qs_auto_seed if automatic else qs_manual_bandwidth
    return rule(scale, nobs)


def _check_seed(seed: int) -> int:
    if (
        not np.isscalar(seed)
        or isinstance(seed, (bool, np.bool_, str))
        or not np.isfinite(seed)
        or int(seed) != seed
        or seed < 0
    ):
        raise InvalidBandwidthSeedError(invalid_seed_error.format(seed=seed))
    return int(seed)


def _check_bandwidth(bandwidth: float) -> float:
    if (
        not np.isscalar(bandwidth)
        or isinstance(bandwidth, (bool, np.bool_, str))
        or not np.isfinite(bandwidth)
        or bandwidth < 0
    ):
        raise InvalidBandwidthError(invalid_bandwidth_error.format(bandwidth=bandwidth))
    return float(bandwidth)


def select_bandwidth(
    kernel: str, acov: Union[Float64Array1D, ArrayLike1D], seed: int
) -> float:
    r"""
    Newey-West (1994) automatic bandwidth selection

    Parameters
    ----------
    kernel : str
        The kernel, either Bartlett or Quadratic Spectral (or an alias).
    acov : array_like
        Autocovariances at lags 0, 1, ..., T-1. The sample size T is taken
        to be the number of autocovariances.
    seed : int
        The number of autocovariances used in the plug-in estimate.

    Returns
    -------
    float
        The selected bandwidth. Integer-valued for the Bartlett kernel.

    Notes
    -----
    With :math:`s_0=\hat{\gamma}_0 + 2\sum_{j=1}^{n}\hat{\gamma}_j` and
    :math:`s_q=2\sum_{j=1}^{n}j^q\hat{\gamma}_j`, the bandwidth is

    .. math::

       \hat{m} = \min\left(T, c_k \left[\left(s_q/s_0\right)^2\right]^{\frac{1}{2q+1}}
                 T^{\frac{1}{2q+1}}\right)

    where q=1, :math:`c_k=1.1447` for the Bartlett kernel, which is then
    truncated to an integer, and q=2, :math:`c_k=1.3221` for the
    Quadratic Spectral kernel.

    When :math:`s_0=0` the ratio is treated as its limit: the bandwidth is 0
    if :math:`s_q` is also 0 and T otherwise.
    """
    kernel = canonical_kernel(kernel)
    n = _check_seed(seed)
    if n == 0:
        return 0.0
    acov = np.asarray(acov, dtype=float).ravel()
    nobs = acov.shape[0]
    if nobs < n + 1:
        raise InsufficientLagsError(
            insufficient_lags_error.format(seed=n, required=n + 1, available=nobs)
        )
    lags = np.arange(1, n + 1, dtype=float)
    gammas = acov[1 : n + 1]
    s0 = acov[0] + 2 * gammas.sum()
    q, kernel_const = PLUG_IN_CONSTANTS[kernel]
    sq = 2 * (lags**q * gammas).sum()
    if s0 == 0:
        return 0.0 if sq == 0 else float(nobs)
    power = 1 / (2 * q + 1)
    gamma = kernel_const * ((sq / s0) ** 2) ** power
    bw = gamma * nobs**power
    if kernel == BARTLETT:
        return float(min(nobs, int(bw)))
    return float(min(nobs, bw))


def resolve_bandwidth(
    kernel: str, acov: Union[Float64Array1D, ArrayLike1D], policy: BandwidthPolicy
) -> float:
    """
    Turn a bandwidth policy into a bandwidth

    Parameters
    ----------
    kernel : str
        The kernel name.
    acov : array_like
        Autocovariances at lags 0, 1, ..., T-1.
    policy : {Manual, Automatic}
        Manual uses the bandwidth provided. Automatic applies the Newey-West
        plug-in rule, unless the seed needs more autocovariances than are
        available in which case the bandwidth is T.

    Returns
    -------
    float
        The bandwidth.
    """
    kernel = canonical_kernel(kernel)
    if isinstance(policy, Manual):
        return _check_bandwidth(policy.bandwidth)
    if not isinstance(policy, Automatic):
        raise TypeError("policy must be a Manual or Automatic instance.")
    seed = _check_seed(policy.seed)
    nobs = np.asarray(acov).shape[0]
    if seed + 1 > nobs:
        return float(nobs)
    return select_bandwidth(kernel, acov, seed)

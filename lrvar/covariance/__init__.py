from typing import Dict, Type

from . import kernel
from .ar import ARSpectral, ARSpectralEstimate, ar_spectral_lrv
from .autocov import autocov
from .bandwidth import (
    Automatic,
    Manual,
    bartlett_auto_seed,
    bartlett_manual_bandwidth,
    qs_auto_seed,
    qs_manual_bandwidth,
    rule_of_thumb,
    select_bandwidth,
)
from .kernel import (
    Andrews,
    Bartlett,
    LongRunVarianceEstimate,
    NeweyWest,
    QuadraticSpectral,
    auto_bandwidth,
    kernel_weights,
    long_run_variance,
)

KERNEL_ESTIMATORS: Dict[str, Type[kernel.LongRunVarianceEstimator]] = {
    est_name.lower(): getattr(kernel, est_name) for est_name in kernel.KERNELS
}
KERNEL_ESTIMATORS.update(
    {est_name: getattr(kernel, est_name) for est_name in kernel.KERNELS}
)

__all__ = [
    "ARSpectral",
    "ARSpectralEstimate",
    "Andrews",
    "Automatic",
    "Bartlett",
    "KERNEL_ESTIMATORS",
    "LongRunVarianceEstimate",
    "Manual",
    "NeweyWest",
    "QuadraticSpectral",
    "ar_spectral_lrv",
    "auto_bandwidth",
    "autocov",
    "bartlett_auto_seed",
    "bartlett_manual_bandwidth",
    "kernel_weights",
    "long_run_variance",
    "qs_auto_seed",
    "qs_manual_bandwidth",
    "rule_of_thumb",
    "select_bandwidth",
]

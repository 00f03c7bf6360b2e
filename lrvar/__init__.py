from ._version import version as __version__, version_tuple
from .covariance import (
    ARSpectral,
    Automatic,
    Bartlett,
    Manual,
    QuadraticSpectral,
    ar_spectral_lrv,
    auto_bandwidth,
    autocov,
    long_run_variance,
)
from .utility import test

__all__ = [
    "ARSpectral",
    "Automatic",
    "Bartlett",
    "Manual",
    "QuadraticSpectral",
    "__version__",
    "ar_spectral_lrv",
    "auto_bandwidth",
    "autocov",
    "long_run_variance",
    "test",
    "version_tuple",
]

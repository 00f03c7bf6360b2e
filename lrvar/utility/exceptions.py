class LongRunVarianceError(ValueError):
    """Base class for invalid inputs to the long-run variance estimators"""


class InvalidInputError(LongRunVarianceError):
    pass


invalid_input_error: str = """\
{name} must contain at least {min_nobs} observations to compute a long-run
variance. The series provided has {nobs}.
"""


class InvalidBandwidthError(LongRunVarianceError):
    pass


invalid_bandwidth_error: str = """\
bandwidth must be a non-negative scalar. The value provided was {bandwidth}.
"""


class InvalidBandwidthSeedError(LongRunVarianceError):
    pass


invalid_seed_error: str = """\
The number of lags used in the automatic bandwidth selection (seed) must be a
non-negative integer. The value provided was {seed}.
"""


class InvalidKernelError(LongRunVarianceError):
    pass


invalid_kernel_error: str = """\
kernel {kernel} was not found. The available kernels are:

{available}
"""


class InvalidCriterionError(LongRunVarianceError):
    pass


invalid_criterion_error: str = """\
method must be one of "aic" or "bic". The value provided was {method}.
"""


class InsufficientLagsError(LongRunVarianceError):
    pass


insufficient_lags_error: str = """\
Automatic bandwidth selection with seed {seed} requires at least {required}
autocovariances, but only {available} were provided.
"""


class InvalidOrderError(LongRunVarianceError):
    pass


invalid_order_error: str = """\
max_lag must be a positive integer. The value provided was {max_lag}.
"""

short_series_order_error: str = """\
max_lag ({max_lag}) is too large for a series with {nobs} observations. An
AR({max_lag}) fitted by least squares needs at least {required} observations
to leave any residual degrees of freedom.
"""


class NearUnitRootWarning(UserWarning):
    """Warning issued when the selected AR model has a (near) unit root"""


near_unit_root_warning: str = """\
The sum of the AR coefficients at the selected order ({order}) is {coef_sum:0.6g},
which is not compatible with covariance stationarity. The implied long-run
variance, {lrv:0.6g}, is unreliable.
"""

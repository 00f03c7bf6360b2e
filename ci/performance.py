"""
Script to run performance tests to show speed.
"""

import timeit

from lrvar.compat.numba import DISABLE_NUMBA

if __name__ == "__main__":
    if DISABLE_NUMBA:
        print("numba disabled -- timings use the pure Python loop")
    for nobs in (500, 2000, 10000):
        setup = (
            "from lrvar import autocov, Bartlett, ARSpectral\n"
            "import numpy as np\n"
            f"x = np.random.RandomState(0).standard_normal({nobs})"
        )
        autocov_time = min(timeit.repeat("autocov(x)", setup=setup, number=5, repeat=3))
        bartlett_time = min(
            timeit.repeat("Bartlett(x).lrv", setup=setup, number=5, repeat=3)
        )
        ar_time = min(
            timeit.repeat(
                "ARSpectral(x, max_lag=12).lrv", setup=setup, number=5, repeat=3
            )
        )
        print(
            f"nobs: {nobs:>6}  autocov: {autocov_time / 5:0.5f}s  "
            f"Bartlett: {bartlett_time / 5:0.5f}s  ARSpectral: {ar_time / 5:0.5f}s"
        )

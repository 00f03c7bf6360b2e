from itertools import product

import numpy as np
import pandas as pd
import pytest

DATA_PARAMS = list(product([0.0, 0.5, 0.8], [True, False]))
DATA_IDS = [f"phi: {phi}, pandas: {pandas}" for phi, pandas in DATA_PARAMS]


@pytest.fixture(scope="module", params=DATA_PARAMS, ids=DATA_IDS)
def ar1_data(request):
    phi, pandas = request.param
    rs = np.random.RandomState([839084, 3823810, 982103, 829108])
    burn = 100
    rvs = rs.standard_normal(burn + 500)
    for i in range(1, burn + 500):
        rvs[i] += phi * rvs[i - 1]
    rvs = rvs[burn:]
    if pandas:
        return pd.Series(rvs, name="x")
    return rvs

import warnings

import numpy as np
from numpy.testing import assert_allclose, assert_array_equal
import pandas as pd
import pytest

from lrvar.covariance.ar import (
    UNIT_ROOT_TOL,
    ARFit,
    ARSpectral,
    ARSpectralEstimate,
    ar_spectral_lrv,
)
from lrvar.utility.exceptions import (
    InvalidCriterionError,
    InvalidInputError,
    InvalidOrderError,
    NearUnitRootWarning,
)

METHODS = ["aic", "bic"]


@pytest.fixture(params=METHODS)
def method(request):
    return request.param


def direct_ic_table(x, method, max_lag):
    x = np.asarray(x, dtype=float)
    nobs = x.shape[0]
    penalty = 2 / nobs if method == "aic" else np.log(nobs) / nobs
    s2 = x @ x / nobs
    ics = [np.log(s2)]
    lrvs = [s2]
    for k in range(1, max_lag + 1):
        lhs = x[k:]
        rhs = np.column_stack([x[k - i : nobs - i] for i in range(1, k + 1)])
        beta = np.linalg.lstsq(rhs, lhs, rcond=None)[0]
        resid = lhs - rhs @ beta
        s2 = resid @ resid / (rhs.shape[0] - rhs.shape[1])
        ics.append(np.log(s2) + k * penalty)
        lrvs.append(s2 / (1 - beta.sum()) ** 2)
    return np.array(ics), np.array(lrvs)


def test_ar_direct(ar1_data, method):
    max_lag = 6
    mod = ARSpectral(ar1_data, method=method, max_lag=max_lag)
    ics, lrvs = direct_ic_table(ar1_data, method, max_lag)
    table = mod.ic_table
    assert isinstance(table, pd.DataFrame)
    assert list(table.index) == list(range(max_lag + 1))
    assert table.index.name == "order"
    assert_allclose(table["ic"], ics)
    assert_allclose(table["lrv"], lrvs)
    order = int(np.argmin(ics))
    assert mod.order == order
    assert_allclose(mod.lrv, lrvs[order])
    assert mod.params.shape == (order,)


def test_ar_selection_bounds(ar1_data, method):
    mod = ARSpectral(ar1_data, method=method, max_lag=8)
    assert 0 <= mod.order <= 8
    table = mod.ic_table
    assert table.loc[mod.order, "ic"] <= table.loc[0, "ic"]
    assert table.loc[mod.order, "ic"] == table["ic"].min()


def test_ar_order_zero_row(ar1_data, method):
    x = np.asarray(ar1_data)
    mod = ARSpectral(ar1_data, method=method, max_lag=2)
    s2 = x @ x / x.shape[0]
    assert_allclose(mod.ic_table.loc[0, "lrv"], s2)
    assert_allclose(mod.ic_table.loc[0, "ic"], np.log(s2))


def test_ar_selects_order_zero(method):
    # Lag-1 products nearly cancel, so the AR(1) does not improve the fit
    x = np.array([1.0, 1.0, -1.0, -1.0, 1.0, 1.0, -1.0, -1.0])
    mod = ARSpectral(x, method=method, max_lag=1)
    assert mod.order == 0
    assert mod.lrv == 1.0
    assert mod.short_run == 1.0
    assert mod.params.shape == (0,)
    assert_allclose(mod.ic_table.loc[1, "lrv"], (8 / 7) / (1 - 1 / 7) ** 2)
    penalty = 2 / 8 if method == "aic" else np.log(8) / 8
    assert_allclose(mod.ic_table.loc[1, "ic"], np.log(8 / 7) + penalty)
    assert ar_spectral_lrv(x, method, 1) == ARSpectralEstimate(1.0, 0)


def test_ar_persistent():
    rs = np.random.RandomState([12839028, 3092183, 902813])
    e = rs.standard_normal(1100)
    for i in range(1, e.shape[0]):
        e[i] += 0.7 * e[i - 1]
    e = e[100:]
    mod = ARSpectral(e, method="bic", max_lag=4)
    assert mod.order >= 1
    # Population long-run variance is 1 / (1 - 0.7) ** 2
    assert_allclose(mod.lrv, 1 / 0.09, rtol=0.5)
    assert mod.params.shape == (mod.order,)
    assert_allclose(mod.short_run, 1.0, rtol=0.15)


def test_ar_near_unit_root():
    x = np.arange(1.0, 21.0)
    mod = ARSpectral(x, max_lag=1)
    with pytest.warns(NearUnitRootWarning, match="covariance stationarity"):
        lrv = mod.lrv
    assert mod.order == 1
    assert mod.params[0] > 1
    assert np.isfinite(lrv)
    assert lrv > 0


def test_ar_ties_select_lowest_order(monkeypatch, method):
    def equal_ic_fit(self, order):
        return ARFit(order, 0.0, float(order), np.zeros(order), 1.0)

    monkeypatch.setattr(ARSpectral, "_fit", equal_ic_fit)
    mod = ARSpectral(np.arange(20.0), method=method, max_lag=3)
    assert_array_equal(mod.ic_table["ic"], np.zeros(4))
    assert mod.order == 0
    assert mod.lrv == 0.0


def test_ar_near_unit_root_tolerance(monkeypatch):
    coef_sum = 1 - UNIT_ROOT_TOL / 10

    def persistent_fit(self, order):
        params = np.full(order, coef_sum / max(order, 1))
        return ARFit(order, -float(order), 1.0 / (1 - coef_sum) ** 2, params, 1.0)

    monkeypatch.setattr(ARSpectral, "_fit", persistent_fit)
    mod = ARSpectral(np.arange(20.0), max_lag=2)
    with pytest.warns(NearUnitRootWarning, match="covariance stationarity"):
        lrv = mod.lrv
    assert mod.order == 2
    assert_allclose(lrv, 1.0 / (1 - coef_sum) ** 2)


def test_ar_stationary_does_not_warn(monkeypatch):
    def stationary_fit(self, order):
        params = np.full(order, 0.9 / max(order, 1))
        return ARFit(order, -float(order), 100.0, params, 1.0)

    monkeypatch.setattr(ARSpectral, "_fit", stationary_fit)
    mod = ARSpectral(np.arange(20.0), max_lag=2)
    with warnings.catch_warnings():
        warnings.simplefilter("error", NearUnitRootWarning)
        assert mod.lrv == 100.0


def test_ar_center(method):
    rs = np.random.RandomState(0)
    x = rs.standard_normal(200) + 5.0
    raw = ARSpectral(x, method=method, max_lag=3)
    centered = ARSpectral(x, method=method, max_lag=3, center=True)
    assert centered.centered
    assert not raw.centered
    demeaned = x - x.mean()
    assert_allclose(centered.ic_table.loc[0, "lrv"], demeaned @ demeaned / 200)
    assert_allclose(raw.ic_table.loc[0, "lrv"], x @ x / 200)


def test_ar_inputs(method):
    rs = np.random.RandomState(1)
    x = rs.standard_normal(120)
    base = ARSpectral(x, method=method, max_lag=4)
    for alt in (pd.Series(x, name="y"), x.tolist(), x[:, None]):
        mod = ARSpectral(alt, method=method, max_lag=4)
        assert_allclose(mod.ic_table, base.ic_table)
        assert mod.order == base.order


def test_ar_default_max_lag():
    x = np.random.RandomState(2).standard_normal(500)
    assert ARSpectral(x).max_lag == 7
    assert ARSpectral(x[:3]).max_lag == 1
    assert ARSpectral(x).method == "aic"
    assert ARSpectral(x, method="BIC").method == "bic"


def test_ar_repeatable(ar1_data, method):
    first = ar_spectral_lrv(ar1_data, method, 5)
    second = ar_spectral_lrv(ar1_data, method, 5)
    assert first == second
    assert_array_equal(
        ARSpectral(ar1_data, method, 5).ic_table,
        ARSpectral(ar1_data, method, 5).ic_table,
    )


def test_ar_str(ar1_data):
    mod = ARSpectral(ar1_data, max_lag=3)
    assert "AR Spectral" in str(mod)
    assert "AIC" in str(mod)
    assert "ID:" in repr(mod)
    assert isinstance(mod.estimate, ARSpectralEstimate)
    assert mod.estimate.order == mod.order


@pytest.mark.parametrize("max_lag", [0, -1, 1.5, "2", True])
def test_ar_invalid_order(max_lag):
    x = np.random.RandomState(3).standard_normal(50)
    with pytest.raises(InvalidOrderError):
        ARSpectral(x, max_lag=max_lag)


def test_ar_order_too_large_for_sample():
    x = np.random.RandomState(4).standard_normal(10)
    ARSpectral(x, max_lag=4)
    with pytest.raises(InvalidOrderError, match="too large"):
        ARSpectral(x, max_lag=5)


@pytest.mark.parametrize("method", ["hqc", "AIC2", "", None, 1])
def test_ar_invalid_criterion(method):
    x = np.random.RandomState(5).standard_normal(50)
    with pytest.raises(InvalidCriterionError):
        ARSpectral(x, method=method, max_lag=2)


def test_ar_invalid_input():
    with pytest.raises(InvalidInputError):
        ARSpectral([1.0], max_lag=1)
    with pytest.raises(InvalidInputError):
        ARSpectral(np.ones((10, 3)), max_lag=1)

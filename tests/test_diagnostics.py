import pytest
import numpy as np
from scipy import stats

from garch.diagnostics import ljung_box, arch_effect_test, residual_test, sample_acf
from garch.estimator import GARCHEstimator
from utils.exceptions import InvalidInputError


def ljung_box_by_hand(x, lags):
    x = np.asarray(x, dtype=float)
    n = len(x)
    d = x - x.mean()
    denom = np.sum(d ** 2)
    q = 0.0
    for k in range(1, lags + 1):
        rho = np.sum(d[k:] * d[:-k]) / denom
        q += rho ** 2 / (n - k)
    q *= n * (n + 2)
    return q, stats.chi2.sf(q, lags)


def test_statistic_matches_formula():
    x = np.random.default_rng(11).standard_t(5, size=400)
    result = ljung_box(x, lags=12)

    q, p = ljung_box_by_hand(x, 12)
    assert result.statistic == pytest.approx(q, rel=1e-8)
    assert result.p_value == pytest.approx(p, rel=1e-6)
    assert result.df == 12
    assert result.lags == 12


def test_iid_noise_not_systematically_rejected():
    """Rejection rate at 5% on white noise stays near nominal"""
    rng = np.random.default_rng(2024)
    p_values = np.array([ljung_box(rng.standard_normal(500)).p_value for _ in range(200)])

    assert np.mean(p_values < 0.05) < 0.12
    assert 0.3 < np.median(p_values) < 0.7


def test_detects_volatility_clustering(garch_returns):
    result = arch_effect_test(garch_returns)

    assert result.label == 'squared returns'
    assert result.p_value < 0.01
    assert result.rejects()


def test_residual_test_uses_burn_in_trimmed_residuals(garch_returns):
    fit = GARCHEstimator().fit(garch_returns)
    pre = arch_effect_test(garch_returns)
    post = residual_test(fit)

    expected = ljung_box(fit.diagnostic_residuals() ** 2)
    assert post.statistic == pytest.approx(expected.statistic)
    assert post.label == 'squared standardized residuals'
    # the model should absorb most of the clustering
    assert post.statistic < pre.statistic


def test_rejects_non_finite_input():
    x = np.random.default_rng(0).standard_normal(100)
    x[10] = np.nan

    with pytest.raises(InvalidInputError, match="non-finite"):
        ljung_box(x)


def test_rejects_short_input():
    with pytest.raises(InvalidInputError, match="exceed lag count"):
        ljung_box(np.arange(12.0), lags=12)

    with pytest.raises(InvalidInputError):
        ljung_box(np.arange(50.0), lags=0)


def test_sample_acf():
    x = np.random.default_rng(5).standard_normal(300)
    rho = sample_acf(x, nlags=10)

    assert len(rho) == 11
    assert rho[0] == pytest.approx(1.0)
    assert np.all(np.abs(rho[1:]) < 0.2)

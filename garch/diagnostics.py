"""
Portmanteau diagnostics for ARCH effects before and after GARCH fitting.
"""

import logging

import numpy as np
from statsmodels.stats.diagnostic import acorr_ljungbox
from statsmodels.tsa.stattools import acf

from models import GARCHFit, ReturnSeries, TestResult
from utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_LAGS = 12


def _as_finite_array(values, lags: int) -> np.ndarray:
    x = np.asarray(values, dtype=float)
    if x.ndim != 1:
        raise InvalidInputError(f"Expected a one-dimensional series, got shape {x.shape}")
    if not np.all(np.isfinite(x)):
        raise InvalidInputError(f"Series contains {int(np.sum(~np.isfinite(x)))} non-finite values")
    if len(x) <= lags:
        raise InvalidInputError(f"Series length {len(x)} must exceed lag count {lags}")
    return x


def ljung_box(values, lags: int = DEFAULT_LAGS, label: str = '') -> TestResult:
    """
    Ljung-Box test for autocorrelation up to ``lags``.

    Q = n(n+2) * sum_{k=1..lags} rho_k^2 / (n-k), compared against a
    chi-squared distribution with ``lags`` degrees of freedom.
    """
    if lags < 1:
        raise InvalidInputError(f"Lag count must be positive, got {lags}")
    x = _as_finite_array(values, lags)

    table = acorr_ljungbox(x, lags=[lags])
    result = TestResult(
        statistic=float(table['lb_stat'].iloc[0]),
        df=lags,
        p_value=float(table['lb_pvalue'].iloc[0]),
        lags=lags,
        label=label
    )

    logger.info(
        f"Box-Ljung test ({label or 'series'}): X-squared = {result.statistic:.4f}, "
        f"df = {result.df}, p-value = {result.p_value:.4g}"
    )
    return result


def arch_effect_test(returns: ReturnSeries, lags: int = DEFAULT_LAGS) -> TestResult:
    """Ljung-Box on squared returns; a small p-value indicates volatility clustering."""
    return ljung_box(returns.squared(), lags=lags, label='squared returns')


def residual_test(fit: GARCHFit, lags: int = DEFAULT_LAGS) -> TestResult:
    """Ljung-Box on squared standardized residuals with burn-in dropped."""
    residuals = fit.diagnostic_residuals()
    return ljung_box(residuals ** 2, lags=lags, label='squared standardized residuals')


def sample_acf(values, nlags: int) -> np.ndarray:
    """Sample autocorrelations for lags 0..nlags."""
    x = _as_finite_array(values, nlags)
    return acf(x, nlags=nlags, fft=False)

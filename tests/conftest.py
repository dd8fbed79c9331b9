import sys
import os

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.append(project_root)

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

from models import GARCHFit, ReturnSeries


def _simulate(omega: float, alpha: float, beta: float, n: int, seed: int = 42) -> ReturnSeries:
    """Simulate a zero-mean GARCH(1,1) path started at its unconditional variance"""
    rng = np.random.default_rng(seed)
    z = rng.standard_normal(n)
    returns = np.empty(n)
    sigma2 = omega / (1 - alpha - beta)
    for t in range(n):
        returns[t] = np.sqrt(sigma2) * z[t]
        sigma2 = omega + alpha * returns[t] ** 2 + beta * sigma2
    dates = pd.bdate_range('2000-01-04', periods=n)
    return ReturnSeries(dates=dates, values=returns)


@pytest.fixture
def simulate_garch():
    """Factory for simulated GARCH(1,1) returns"""
    return _simulate


@pytest.fixture
def garch_returns():
    """3000 returns with pronounced volatility clustering"""
    return _simulate(omega=0.05, alpha=0.10, beta=0.85, n=3000, seed=7)


@pytest.fixture
def price_csv(tmp_path, garch_returns):
    """DEXJPUS-style CSV built from simulated returns, with sentinel rows"""
    prices = 110.0 * np.exp(np.cumsum(np.concatenate([[0.0], garch_returns.values])) / 100)
    dates = pd.bdate_range('1999-12-31', periods=len(prices))
    frame = pd.DataFrame({
        'DATE': dates.strftime('%Y-%m-%d'),
        'DEXJPUS': [f"{p:.4f}" for p in prices]
    })
    # FRED marks holidays with "." rather than leaving the row out
    frame.loc[[5, 250], 'DEXJPUS'] = '.'
    path = tmp_path / "DEXJPUS.csv"
    frame.to_csv(path, index=False)
    return path


@pytest.fixture
def make_fit():
    """Build a GARCHFit by hand for reporting and plotting tests"""
    def _make(n: int = 200, alpha: float = 0.08, beta: float = 0.9, burn_in: int = 1) -> GARCHFit:
        rng = np.random.default_rng(3)
        sigma = 0.5 + 0.1 * rng.random(n)
        resid = rng.standard_normal(n)
        sigma[:burn_in] = np.nan
        resid[:burn_in] = np.nan
        return GARCHFit(
            params={'omega': 0.01, 'alpha[1]': alpha, 'beta[1]': beta},
            std_errors={'omega': 0.002, 'alpha[1]': 0.01, 'beta[1]': 0.012},
            tvalues={'omega': 5.0, 'alpha[1]': 8.0, 'beta[1]': 75.0},
            pvalues={'omega': 1e-6, 'alpha[1]': 1e-12, 'beta[1]': 0.0},
            conditional_volatility=sigma,
            std_residuals=resid,
            dates=pd.bdate_range('2020-01-01', periods=n),
            burn_in=burn_in,
            loglikelihood=-250.0,
            aic=506.0,
            bic=516.0,
            nobs=n
        )
    return _make

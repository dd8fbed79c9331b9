"""Common data models used across the project."""

from dataclasses import dataclass
from typing import Dict, Optional
import numpy as np
import pandas as pd


def _readonly(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class PriceSeries:
    """Chronologically ordered (date, price) observations"""
    dates: pd.DatetimeIndex
    prices: np.ndarray
    name: str = 'price'

    def __post_init__(self):
        object.__setattr__(self, 'dates', pd.DatetimeIndex(self.dates))
        object.__setattr__(self, 'prices', _readonly(self.prices))
        if len(self.dates) != len(self.prices):
            raise ValueError(
                f"Dates and prices differ in length: {len(self.dates)} != {len(self.prices)}"
            )

    def __len__(self) -> int:
        return len(self.prices)

    def to_series(self) -> pd.Series:
        return pd.Series(self.prices, index=self.dates, name=self.name)


@dataclass(frozen=True)
class ReturnSeries:
    """Percentage log returns, each dated by the later price of its pair"""
    dates: pd.DatetimeIndex
    values: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'dates', pd.DatetimeIndex(self.dates))
        object.__setattr__(self, 'values', _readonly(self.values))
        if len(self.dates) != len(self.values):
            raise ValueError(
                f"Dates and returns differ in length: {len(self.dates)} != {len(self.values)}"
            )

    def __len__(self) -> int:
        return len(self.values)

    def squared(self) -> np.ndarray:
        return self.values ** 2

    def to_series(self) -> pd.Series:
        return pd.Series(self.values, index=self.dates, name='returns')


@dataclass(frozen=True)
class GARCHFit:
    """Container for GARCH(1,1) estimation results

    ``conditional_volatility`` and ``std_residuals`` align index-for-index
    with the fitted returns; the first ``burn_in`` entries are NaN.
    """
    params: Dict[str, float]
    std_errors: Dict[str, float]
    tvalues: Dict[str, float]
    pvalues: Dict[str, float]
    conditional_volatility: np.ndarray  # sigma_t per period
    std_residuals: np.ndarray  # r_t / sigma_t per period
    dates: pd.DatetimeIndex
    burn_in: int
    loglikelihood: float
    aic: float
    bic: float
    nobs: int
    convergence_flag: int = 0
    message: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'conditional_volatility', _readonly(self.conditional_volatility))
        object.__setattr__(self, 'std_residuals', _readonly(self.std_residuals))
        object.__setattr__(self, 'dates', pd.DatetimeIndex(self.dates))

    @property
    def omega(self) -> float:
        return self.params['omega']

    @property
    def alpha(self) -> float:
        return self.params['alpha[1]']

    @property
    def beta(self) -> float:
        return self.params['beta[1]']

    @property
    def persistence(self) -> float:
        return self.alpha + self.beta

    @property
    def is_stationary(self) -> bool:
        return self.persistence < 1

    @property
    def unconditional_variance(self) -> Optional[float]:
        """Long-run variance omega / (1 - alpha - beta), None if non-stationary"""
        if not self.is_stationary:
            return None
        return self.omega / (1 - self.persistence)

    def diagnostic_residuals(self) -> np.ndarray:
        """Standardized residuals with the burn-in entries removed"""
        return self.std_residuals[self.burn_in:]


@dataclass(frozen=True)
class TestResult:
    """Portmanteau test outcome"""
    statistic: float
    df: int
    p_value: float
    lags: int
    label: str = ''

    # keep pytest from collecting this as a test class
    __test__ = False

    def rejects(self, alpha: float = 0.05) -> bool:
        return self.p_value < alpha

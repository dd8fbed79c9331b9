"""
Prepare percentage log returns for GARCH estimation.
"""

import logging
from typing import List, Tuple

import numpy as np

from models import PriceSeries, ReturnSeries
from utils.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class GarchDataPrep:
    """Turns a price series into returns suitable for GARCH estimation."""

    def __init__(self, scale: float = 100.0):
        """
        Args:
            scale: Multiplier applied to log returns (100 gives percent)
        """
        self.scale = scale

    def prepare_returns(self, prices: PriceSeries) -> ReturnSeries:
        """
        Compute scaled log returns ``scale * (ln p[t] - ln p[t-1])``.

        Args:
            prices: Chronologically ordered price series

        Returns:
            ReturnSeries one element shorter than ``prices``
        """
        if len(prices) < 2:
            raise InvalidInputError(f"Need at least 2 prices, found {len(prices)}")

        values = prices.prices
        non_positive = np.flatnonzero(values <= 0)
        if non_positive.size:
            first = non_positive[0]
            raise InvalidInputError(
                f"Found {non_positive.size} non-positive prices, log undefined "
                f"(first: {values[first]} on {prices.dates[first]:%Y-%m-%d})"
            )

        log_prices = np.log(values)
        returns = self.scale * (log_prices[1:] - log_prices[:-1])

        logger.info(
            f"Prepared log returns:\n"
            f"  Observations: {len(returns)}\n"
            f"  Mean: {np.mean(returns):.6f}\n"
            f"  Std:  {np.std(returns):.6f}"
        )

        return ReturnSeries(dates=prices.dates[1:], values=returns)

    def verify_data_quality(self, returns: ReturnSeries,
                            min_observations: int = 30) -> Tuple[bool, List[str]]:
        """
        Verify data quality for GARCH estimation.

        Args:
            returns: Series of log returns
            min_observations: Minimum required observations

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []
        values = returns.values

        if len(values) < min_observations:
            issues.append(f"Insufficient observations: {len(values)} < {min_observations}")

        n_bad = int(np.sum(~np.isfinite(values)))
        if n_bad:
            issues.append(f"Found {n_bad} non-finite returns")
        elif len(values) > 1 and np.std(values) == 0:
            issues.append("Returns have zero variance")

        # Zero returns are legal but worth knowing about
        n_zero = int(np.sum(values == 0))
        if n_zero:
            logger.warning(f"Found {n_zero} zero returns")

        for issue in issues:
            logger.warning(issue)

        return len(issues) == 0, issues

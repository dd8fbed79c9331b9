"""
Data validation for exchange-rate price files.
"""

import pandas as pd
from typing import List


class DataValidator:
    """Validates raw price data before it becomes a PriceSeries."""

    def __init__(self, date_column: str = 'DATE', price_column: str = 'DEXJPUS'):
        self.date_column = date_column
        self.price_column = price_column

        # Reasonable bounds for a quoted exchange rate
        self.validation_bounds = {
            'price': {'min': 0, 'max': 100000}
        }

    def check_columns(self, df: pd.DataFrame) -> List[str]:
        """Return the required columns missing from the frame."""
        required_cols = [self.date_column, self.price_column]
        return [col for col in required_cols if col not in df.columns]

    def structural_issues(self, df: pd.DataFrame) -> List[str]:
        """
        Problems that make the frame unusable as a price series.

        Expects parsed dates and numeric prices with missing rows removed.
        """
        issues = []

        missing_cols = self.check_columns(df)
        if missing_cols:
            return [f"Missing required columns: {missing_cols}"]

        for col in [self.date_column, self.price_column]:
            missing_count = df[col].isna().sum()
            if missing_count > 0:
                issues.append(f"Column {col} has {missing_count} missing values")

        duplicated = df[self.date_column][df[self.date_column].duplicated()]
        if not duplicated.empty:
            issues.append(
                f"{len(duplicated)} duplicate dates "
                f"(first occurrence at index {duplicated.index[0]})"
            )

        if len(df) < 2:
            issues.append(f"Need at least 2 observations, found {len(df)}")

        return issues

    def value_issues(self, df: pd.DataFrame) -> List[str]:
        """Out-of-range prices; these are reported, not rejected, at load time."""
        return self._validate_bounds(
            df[self.price_column],
            self.validation_bounds['price']['min'],
            self.validation_bounds['price']['max'],
            f"{self.price_column} price"
        )

    def _validate_bounds(self, series: pd.Series, min_val: float, max_val: float, name: str) -> List[str]:
        """Validates that values fall within expected bounds."""
        issues = []

        # Log returns need strictly positive prices
        below_min = series[series <= min_val]
        if not below_min.empty:
            issues.append(
                f"{name}: {len(below_min)} values at or below minimum of {min_val} "
                f"(first occurrence at index {below_min.index[0]})"
            )

        above_max = series[series > max_val]
        if not above_max.empty:
            issues.append(
                f"{name}: {len(above_max)} values above maximum of {max_val} "
                f"(first occurrence at index {above_max.index[0]})"
            )

        return issues

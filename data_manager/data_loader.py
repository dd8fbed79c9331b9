"""
Data loader for daily exchange-rate observations (FRED DEXJPUS format).
"""

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from data_manager.data_validator import DataValidator
from models import PriceSeries
from utils.exceptions import DataFormatError

logger = logging.getLogger(__name__)


class DataLoader:
    def __init__(self, date_column: str = 'DATE', price_column: str = 'DEXJPUS',
                 na_token: str = '.'):
        """
        Initialize data loader

        Args:
            date_column: Name of the observation date column
            price_column: Name of the exchange-rate column
            na_token: Sentinel string marking a missing observation
        """
        self.date_column = date_column
        self.price_column = price_column
        self.na_token = na_token
        self.validator = DataValidator(date_column=date_column, price_column=price_column)

    def read_frame(self, file_path: Union[str, Path]) -> pd.DataFrame:
        """Load the CSV and drop rows carrying the missing-value sentinel."""
        logger.info(f"Reading data from: {file_path}")
        try:
            # read as text so only the sentinel marks a missing value
            df = pd.read_csv(file_path, header=0, na_values=[self.na_token],
                             keep_default_na=False, dtype=str)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise DataFormatError(f"{file_path}: {e}") from e
        logger.info(f"Total rows in CSV: {len(df)}")

        missing_cols = self.validator.check_columns(df)
        if missing_cols:
            raise DataFormatError(
                f"{file_path}: missing required columns {missing_cols}, "
                f"found {df.columns.tolist()}"
            )

        df = df[[self.date_column, self.price_column]]
        n_rows = len(df)
        df = df.dropna().reset_index(drop=True)
        if len(df) < n_rows:
            logger.info(f"Dropped {n_rows - len(df)} rows with missing values")

        return df

    def _coerce_types(self, df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()

        prices = pd.to_numeric(df[self.price_column], errors='coerce')
        bad_prices = df[self.price_column][prices.isna()]
        if not bad_prices.empty:
            raise DataFormatError(
                f"Column {self.price_column} has {len(bad_prices)} non-numeric values "
                f"(first: {bad_prices.iloc[0]!r} at row {bad_prices.index[0]})"
            )
        df[self.price_column] = prices.astype(float)

        dates = pd.to_datetime(df[self.date_column], errors='coerce')
        bad_dates = df[self.date_column][dates.isna()]
        if not bad_dates.empty:
            raise DataFormatError(
                f"Column {self.date_column} has {len(bad_dates)} unparseable dates "
                f"(first: {bad_dates.iloc[0]!r} at row {bad_dates.index[0]})"
            )
        df[self.date_column] = dates

        return df

    def load_price_series(self, file_path: Union[str, Path]) -> PriceSeries:
        """
        Load a price series from CSV.

        Rows with the sentinel are removed and the remaining rows are
        renumbered contiguously in chronological order.

        Raises:
            DataFormatError: if a required column is absent, values cannot be
                parsed, dates repeat or fewer than two rows remain
        """
        df = self._coerce_types(self.read_frame(file_path))
        df = df.sort_values(self.date_column, kind='mergesort').reset_index(drop=True)

        issues = self.validator.structural_issues(df)
        if issues:
            raise DataFormatError(f"{file_path}: " + "; ".join(issues))

        for issue in self.validator.value_issues(df):
            logger.warning(issue)

        series = PriceSeries(
            dates=pd.DatetimeIndex(df[self.date_column]),
            prices=df[self.price_column].to_numpy(),
            name=self.price_column
        )

        logger.info(
            f"Loaded {len(series)} observations of {self.price_column} "
            f"from {series.dates[0]:%Y-%m-%d} to {series.dates[-1]:%Y-%m-%d}"
        )
        return series

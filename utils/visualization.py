from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from statsmodels.graphics.tsaplots import plot_acf
from pathlib import Path
import logging

from models import GARCHFit, ReturnSeries

logger = logging.getLogger(__name__)

class GARCHVisualizer:
    """Visualization utilities for GARCH analysis"""

    def __init__(self, style: str = 'seaborn-v0_8-whitegrid', figsize: tuple = (12, 6)):
        """
        Initialize visualizer

        Parameters:
        -----------
        style : str
            Matplotlib style to use. Default is 'seaborn-v0_8-whitegrid'.
            Available styles can be listed with `plt.style.available`
        figsize : tuple
            Figure size for every chart
        """
        try:
            plt.style.use(style)
        except OSError:
            # Let seaborn configure an equivalent theme
            sns.set_theme(style='whitegrid')
            logger.warning(f"Style '{style}' not found, using seaborn whitegrid theme")

        self.figsize = figsize
        self.colors = plt.rcParams['axes.prop_cycle'].by_key()['color']

    def _finish(self, fig: plt.Figure, save_path: Optional[Path]) -> plt.Figure:
        sns.despine(fig=fig)
        fig.tight_layout()
        if save_path:
            fig.savefig(save_path)
            logger.info(f"Saved figure to {save_path}")
        return fig

    def plot_returns(self,
                     returns: ReturnSeries,
                     title: str = 'USD/JPY Log Returns',
                     save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot the log-return series

        Parameters:
        -----------
        returns : ReturnSeries
            Percentage log returns
        title : str
            Plot title
        save_path : Path, optional
            Path to save figure
        """
        if len(returns) == 0:
            raise ValueError("Empty input data")

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.plot(returns.dates, returns.values, color=self.colors[0], linewidth=0.6)
        ax.set_xlabel('Time')
        ax.set_ylabel('Return (%)')
        ax.set_title(title)

        return self._finish(fig, save_path)

    def plot_residual_acf(self,
                          fit: GARCHFit,
                          nlags: Optional[int] = None,
                          title: str = 'ACF of Squared Standardized Residuals',
                          save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot the autocorrelation function of squared standardized residuals

        Parameters:
        -----------
        fit : GARCHFit
            Estimated model; burn-in entries are dropped before plotting
        nlags : int, optional
            Number of lags; statsmodels picks a default when omitted
        title : str
            Plot title
        save_path : Path, optional
            Path to save figure
        """
        squared = fit.diagnostic_residuals() ** 2
        if len(squared) == 0:
            raise ValueError("Empty input data")

        fig, ax = plt.subplots(figsize=self.figsize)
        plot_acf(squared, ax=ax, lags=nlags, title=title, color=self.colors[0])
        ax.set_xlabel('Lag')
        ax.set_ylabel('ACF')

        return self._finish(fig, save_path)

    def plot_volatility_bands(self,
                              returns: ReturnSeries,
                              fit: GARCHFit,
                              title: str = 'USD/JPY Returns and Conditional Volatility',
                              save_path: Optional[Path] = None) -> plt.Figure:
        """
        Plot returns overlaid with +/- conditional standard deviation bands

        Parameters:
        -----------
        returns : ReturnSeries
            Returns the model was fitted to
        fit : GARCHFit
            Estimated model
        title : str
            Plot title
        save_path : Path, optional
            Path to save figure
        """
        if len(returns) != len(fit.conditional_volatility):
            raise ValueError(
                f"Returns and volatility differ in length: "
                f"{len(returns)} != {len(fit.conditional_volatility)}"
            )

        sigma = fit.conditional_volatility
        fig, ax = plt.subplots(figsize=self.figsize)
        ax.plot(returns.dates, returns.values, color='grey', linewidth=0.6, label='Returns')
        ax.plot(returns.dates, sigma, color='red', linewidth=0.8, label='Conditional SD')
        ax.plot(returns.dates, -sigma, color='red', linewidth=0.8)
        ax.set_xlabel('Time')
        ax.set_ylabel('Value')
        ax.set_title(title)
        ax.legend(loc='upper right', frameon=False)

        return self._finish(fig, save_path)

    def close_all(self):
        """Close all open figures"""
        plt.close('all')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_all()

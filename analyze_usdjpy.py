#!/usr/bin/env python
"""
USD/JPY volatility analysis pipeline.
Loads daily exchange rates, tests for ARCH effects, fits GARCH(1,1),
re-tests the standardized residuals and writes the report table and plots.
"""
import sys
import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd

from data_manager.data_loader import DataLoader
from garch.data_prep import GarchDataPrep
from garch.diagnostics import arch_effect_test, residual_test, DEFAULT_LAGS
from garch.estimator import GARCHEstimator
from models import GARCHFit, PriceSeries, ReturnSeries, TestResult
from utils.progress import ProgressMonitor
from utils.report import coefficient_table, render_coefficient_table, render_diagnostics
from utils.visualization import GARCHVisualizer

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
HANDLER_PREFIX = 'volatility_analysis'


@dataclass
class AnalysisConfig:
    """Settings for one run of the analysis"""
    data_file: Path = Path("DEXJPUS.csv")
    date_column: str = 'DATE'
    price_column: str = 'DEXJPUS'
    na_token: str = '.'
    lags: int = DEFAULT_LAGS
    min_observations: int = 30
    max_iter: int = 1000
    burn_in: int = 1
    require_stationary: bool = True
    acf_lags: Optional[int] = None
    output_dir: Path = Path("results")
    show_plots: bool = False
    show_progress: bool = True


@dataclass
class AnalysisResult:
    """Everything the report needs, in pipeline order"""
    prices: PriceSeries
    returns: ReturnSeries
    pre_fit_test: TestResult
    fit: GARCHFit
    post_fit_test: TestResult
    coefficients: pd.DataFrame
    outputs: Dict[str, Path] = field(default_factory=dict)


def setup_logging(output_dir: Path, level: int = logging.INFO) -> logging.Logger:
    """
    Configure logging with both file and console handlers

    Parameters:
    -----------
    output_dir : Path
        Directory for log file

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    log_dir = Path(output_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"volatility_analysis_{timestamp}.log"

    # Handlers go on the root logger so package modules are captured too
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if (handler.get_name() or '').startswith(HANDLER_PREFIX):
            root.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    for kind, handler in (('file', file_handler), ('console', console_handler)):
        handler.set_name(f"{HANDLER_PREFIX}.{kind}")
        root.addHandler(handler)

    return logging.getLogger("volatility_analysis")


def run_analysis(config: AnalysisConfig, logger: Optional[logging.Logger] = None) -> AnalysisResult:
    """Run the analysis pipeline; any failure is logged and re-raised"""
    if logger is None:
        logger = logging.getLogger("volatility_analysis")
    logger.info("Starting analysis pipeline...")

    output_dir = Path(config.output_dir)
    plot_dir = output_dir / "plots"
    plot_dir.mkdir(parents=True, exist_ok=True)

    monitor = ProgressMonitor(stages=5, desc="USD/JPY analysis", logger=logger,
                              show_bar=config.show_progress)
    try:
        loader = DataLoader(
            date_column=config.date_column,
            price_column=config.price_column,
            na_token=config.na_token
        )
        prices = loader.load_price_series(config.data_file)
        returns = GarchDataPrep().prepare_returns(prices)
        monitor.checkpoint("load")

        pre_fit_test = arch_effect_test(returns, lags=config.lags)
        monitor.checkpoint("pre-fit test")

        estimator = GARCHEstimator(
            min_observations=config.min_observations,
            max_iter=config.max_iter,
            burn_in=config.burn_in,
            require_stationary=config.require_stationary
        )
        fit = estimator.fit(returns)
        monitor.checkpoint("estimation")

        post_fit_test = residual_test(fit, lags=config.lags)
        monitor.checkpoint("post-fit test")

        logger.info("Writing report outputs...")
        outputs = {
            'coefficients': output_dir / "coefficients.md",
            'diagnostics': output_dir / "diagnostics.txt",
            'returns_plot': plot_dir / "log_returns.png",
            'acf_plot': plot_dir / "residual_acf.png",
            'volatility_plot': plot_dir / "conditional_volatility.png",
        }
        outputs['coefficients'].write_text(render_coefficient_table(fit))
        outputs['diagnostics'].write_text(render_diagnostics(pre_fit_test, post_fit_test, fit))
        logger.info("\n" + render_coefficient_table(fit, fmt='text'))

        with GARCHVisualizer() as visualizer:
            visualizer.plot_returns(returns, save_path=outputs['returns_plot'])
            visualizer.plot_residual_acf(fit, nlags=config.acf_lags, save_path=outputs['acf_plot'])
            visualizer.plot_volatility_bands(returns, fit, save_path=outputs['volatility_plot'])
            if config.show_plots:
                plt.show()
        monitor.checkpoint("report")

        logger.info("Pipeline completed successfully")
        return AnalysisResult(
            prices=prices,
            returns=returns,
            pre_fit_test=pre_fit_test,
            fit=fit,
            post_fit_test=post_fit_test,
            coefficients=coefficient_table(fit),
            outputs=outputs
        )

    except Exception as e:
        logger.error(f"Error in analysis pipeline: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise
    finally:
        monitor.close()


def main():
    """Main entry point with default configuration"""
    config = AnalysisConfig()
    logger = setup_logging(config.output_dir)
    logger.info("Starting USD/JPY volatility analysis...")
    run_analysis(config, logger)


if __name__ == '__main__':
    main()

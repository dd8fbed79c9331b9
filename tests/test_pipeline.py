import logging

import pytest

from analyze_usdjpy import HANDLER_PREFIX, AnalysisConfig, run_analysis, setup_logging
from utils.exceptions import DataFormatError


@pytest.fixture
def config(price_csv, tmp_path):
    return AnalysisConfig(
        data_file=price_csv,
        output_dir=tmp_path / "results",
        show_progress=False
    )


def test_pipeline(config):
    """Test full pipeline execution"""
    logger = setup_logging(config.output_dir)
    result = run_analysis(config, logger)

    # two sentinel rows in the fixture file
    assert len(result.prices) == 3001 - 2
    assert len(result.returns) == len(result.prices) - 1
    assert len(result.fit.conditional_volatility) == len(result.returns)

    assert result.pre_fit_test.p_value < 0.01
    assert result.post_fit_test.statistic < result.pre_fit_test.statistic
    assert result.fit.is_stationary
    assert list(result.coefficients.index) == ['omega', 'alpha[1]', 'beta[1]']

    for name, path in result.outputs.items():
        assert path.exists(), f"Output not written: {name}"
        assert path.stat().st_size > 0

    assert "GARCH(1,1) Model Coefficients" in result.outputs['coefficients'].read_text()
    assert "Box-Ljung test" in result.outputs['diagnostics'].read_text()
    assert list((config.output_dir / "logs").glob("volatility_analysis_*.log"))


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    setup_logging(tmp_path)
    setup_logging(tmp_path)

    names = [h.get_name() for h in logging.getLogger().handlers]
    assert names.count('volatility_analysis.file') == 1
    assert names.count('volatility_analysis.console') == 1
    ours = [n for n in names if (n or '').startswith(HANDLER_PREFIX)]
    assert len(ours) == 2


def test_pipeline_missing_column(tmp_path):
    data_file = tmp_path / "bad.csv"
    data_file.write_text("DATE,PRICE\n2020-01-02,108.4\n2020-01-03,108.0\n")
    config = AnalysisConfig(data_file=data_file, output_dir=tmp_path / "out", show_progress=False)

    with pytest.raises(DataFormatError):
        run_analysis(config)

"""Tabular summaries of the GARCH fit and diagnostic tests."""

import pandas as pd

from garch.diagnostics import sample_acf
from models import GARCHFit, TestResult

COEF_COLUMNS = ['Estimate', 'Std. Error', 't value', 'Pr(>|t|)']
COEF_CAPTION = 'GARCH(1,1) Model Coefficients'


def coefficient_table(fit: GARCHFit) -> pd.DataFrame:
    """One row per parameter with estimate, standard error, t value and p-value"""
    names = list(fit.params)
    return pd.DataFrame(
        {
            'Estimate': [fit.params[n] for n in names],
            'Std. Error': [fit.std_errors[n] for n in names],
            't value': [fit.tvalues[n] for n in names],
            'Pr(>|t|)': [fit.pvalues[n] for n in names],
        },
        index=pd.Index(names, name='Parameter'),
        columns=COEF_COLUMNS
    )


def render_coefficient_table(fit: GARCHFit, fmt: str = 'markdown',
                             floatfmt: str = '.6f') -> str:
    """
    Render the coefficient table with its caption

    Parameters:
    -----------
    fit : GARCHFit
        Estimated model
    fmt : str
        'markdown' (via tabulate) or 'text'
    floatfmt : str
        Number format for markdown output
    """
    table = coefficient_table(fit)
    if fmt == 'markdown':
        body = table.to_markdown(floatfmt=floatfmt)
    elif fmt == 'text':
        body = table.to_string(float_format=lambda v: format(v, floatfmt))
    else:
        raise ValueError(f"Unknown table format: {fmt}")
    return f"Table: {COEF_CAPTION}\n\n{body}\n"


def format_test_result(result: TestResult) -> str:
    header = f"Box-Ljung test: {result.label}" if result.label else "Box-Ljung test"
    return (
        f"{header}\n"
        f"X-squared = {result.statistic:.4f}, df = {result.df}, "
        f"p-value = {result.p_value:.4g}"
    )


def render_diagnostics(pre_fit: TestResult, post_fit: TestResult, fit: GARCHFit) -> str:
    """Plain-text diagnostics summary written next to the plots"""
    lines = [
        format_test_result(pre_fit),
        "",
        format_test_result(post_fit),
        "",
        f"Persistence (alpha + beta): {fit.persistence:.6f}",
        f"Log-likelihood: {fit.loglikelihood:.4f}",
        f"AIC: {fit.aic:.4f}  BIC: {fit.bic:.4f}",
        f"Observations: {fit.nobs} (burn-in dropped for diagnostics: {fit.burn_in})",
    ]
    if fit.unconditional_variance is not None:
        lines.append(f"Unconditional variance: {fit.unconditional_variance:.6f}")

    rho = sample_acf(fit.diagnostic_residuals() ** 2, nlags=post_fit.lags)
    lines.append("")
    lines.append("ACF of squared standardized residuals:")
    lines.extend(f"  lag {k:>2}: {rho[k]: .4f}" for k in range(1, len(rho)))
    return "\n".join(lines) + "\n"

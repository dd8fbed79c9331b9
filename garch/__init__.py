"""
GARCH modeling package for volatility analysis.
Return preparation, GARCH(1,1) estimation and residual diagnostics.
"""

from .data_prep import GarchDataPrep
from .estimator import GARCHEstimator
from .diagnostics import ljung_box, arch_effect_test, residual_test, sample_acf
from models import GARCHFit, TestResult

__all__ = [
    'GarchDataPrep', 'GARCHEstimator', 'GARCHFit', 'TestResult',
    'ljung_box', 'arch_effect_test', 'residual_test', 'sample_acf'
]

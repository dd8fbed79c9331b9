"""Utility functions and classes for GARCH analysis"""

from .exceptions import AnalysisError, DataFormatError, InvalidInputError, ConvergenceError
from .visualization import GARCHVisualizer

__all__ = [
    'GARCHVisualizer',
    'AnalysisError', 'DataFormatError', 'InvalidInputError', 'ConvergenceError'
]

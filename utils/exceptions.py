"""Error types raised by the volatility analysis pipeline."""


class AnalysisError(Exception):
    """Base class for all analysis failures"""


class DataFormatError(AnalysisError, ValueError):
    """Input file is malformed or lacks an expected column"""


class InvalidInputError(AnalysisError, ValueError):
    """Input values cannot be processed (non-positive prices, short samples)"""


class ConvergenceError(AnalysisError, RuntimeError):
    """GARCH optimizer failed or produced a non-stationary fit"""

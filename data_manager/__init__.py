"""
Data management package for the exchange-rate analysis.
Handles data loading and validation.
"""

from .data_loader import DataLoader
from .data_validator import DataValidator

__all__ = ['DataLoader', 'DataValidator']

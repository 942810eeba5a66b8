"""
Calculators Package - Concrete board topologies.

Import this module to register all built-in calculators.
"""

from .diamond import DiamondCalculator

__all__ = [
    "DiamondCalculator",
]

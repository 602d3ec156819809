"""
Common utilities and infrastructure for the geodesy package.

This package provides foundational components used across all modules:
- Geodetic constants with uncertainty bounds
- Unit-checked distance quantities
- Logging infrastructure
"""

from common.constants import Constant, GeodeticConstants
from common.units import validate_units, ureg, Q_
from common.logging_config import get_logger

__all__ = [
    "Constant",
    "GeodeticConstants",
    "validate_units",
    "ureg",
    "Q_",
    "get_logger",
]

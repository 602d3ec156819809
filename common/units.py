"""
Units for geodetic distances.

The numeric core works on bare floats (meters, degrees, radians). Quantities
appear only at the public boundary, where callers may ask for kilometers,
nautical miles or any other length unit.

>>> from common.units import Q_
>>> Q_(184_800, 'm').to('km')
<Quantity(184.8, 'kilometer')>
"""

from functools import wraps
from typing import Callable
import inspect

import pint

ureg = pint.UnitRegistry()
Q_ = ureg.Quantity


def _check(value, unit: str, label: str) -> None:
    if isinstance(value, pint.Quantity) and not value.is_compatible_with(unit):
        raise ValueError(f"{label} has incompatible units: expected {unit}, got {value.units}")


def validate_units(expected_units: dict[str, str]):
    """Reject quantity arguments or results that cannot convert to the given units.

    Plain floats are passed through unchecked. The key ``'return'`` names the
    unit of the result.
    """
    result_unit = expected_units.get("return")
    arguments = {name: unit for name, unit in expected_units.items() if name != "return"}

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = signature.bind(*args, **kwargs)
            for name, unit in arguments.items():
                _check(bound.arguments.get(name), unit, f"Parameter '{name}'")
            result = func(*args, **kwargs)
            if result_unit is not None:
                _check(result, result_unit, "Return value")
            return result
        return wrapper
    return decorator

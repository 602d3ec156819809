"""
Angle Codec: decimal degrees <-> degrees, minutes, seconds.

Decomposition Rules
-------------------
An angle given in decimal degrees ``d`` is split as::

    degrees = floor(d)
    minutes = round((d - degrees) * 60, 10)
    seconds = round((minutes - floor(minutes)) * 60, 8)
    minutes = floor(minutes)

Both roundings matter. Without the 10-place rounding of the intermediate
minutes a value such as 49.5 decomposes into 29' 59.99999999" instead of
30' 0"; without the 8-place rounding of the seconds the canonical text
shows floating-point noise. When the intermediate minutes round up to a
full 60, one degree is carried so the text never shows ``60'``.

Negative angles are floored, so -49.5 decomposes into -50° 30' 0", which
still converts back to -49.5.

Canonical Text
--------------
``D° M' S.SSSS"`` with the seconds printed to four decimal places. A
missing value renders as ``?° ?' ?"``.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


ANGLE_FORMAT = "{0}° {1}' {2}\""
MISSING_ANGLE = ANGLE_FORMAT.format("?", "?", "?")


@dataclass(frozen=True)
class Angle:
    """An angle in degrees, minutes and seconds.

    Attributes
    ----------
    degrees : int
        Whole degrees (floored, so negative for negative angles).
    minutes : int
        Whole minutes in ``[0, 59]``.
    seconds : float
        Seconds in ``[0, 60)``, rounded to 8 decimal places when derived
        from a decimal value.

    Notes
    -----
    Equality is structural (field by field). The hash is derived from the
    decimal-degree value so that equal angles hash equally.
    """
    degrees: int
    minutes: int
    seconds: float

    @classmethod
    def from_decimal(cls, value: float) -> "Angle":
        """Decompose a decimal-degree value.

        Parameters
        ----------
        value : float
            Angle in decimal degrees. Must be finite.

        Returns
        -------
        Angle
            The decomposed angle.
        """
        degrees = int(np.floor(value))
        minutes = round((value - degrees) * 60.0, 10)
        seconds = round((minutes - np.floor(minutes)) * 60.0, 8)
        minutes = int(np.floor(minutes))

        if minutes >= 60:
            degrees += 1
            minutes -= 60

        return cls(degrees, minutes, float(seconds))

    def to_decimal(self) -> float:
        """Angle in decimal degrees: ``D + (M*60 + S) / 3600``."""
        return self.degrees + (self.minutes * 60 + self.seconds) / 3600.0

    def format(self, decimal_separator: str = ".") -> str:
        """Render the canonical ``D° M' S.SSSS"`` text.

        Parameters
        ----------
        decimal_separator : str
            Character used as the decimal point of the seconds.
        """
        seconds = f"{self.seconds:.4f}"
        if decimal_separator != ".":
            seconds = seconds.replace(".", decimal_separator)
        return ANGLE_FORMAT.format(self.degrees, self.minutes, seconds)

    def __hash__(self) -> int:
        return hash(self.to_decimal())

    def __str__(self) -> str:
        return self.format()


def dec_to_degrees(value: float) -> int:
    """Whole-degree part of a decimal-degree value."""
    return Angle.from_decimal(value).degrees


def dec_to_minutes(value: float) -> int:
    """Whole-minute part of a decimal-degree value."""
    return Angle.from_decimal(value).minutes


def dec_to_seconds(value: float) -> float:
    """Seconds part of a decimal-degree value."""
    return Angle.from_decimal(value).seconds


def degrees_to_dec(degrees: float, minutes: float, seconds: float) -> float:
    """Combine degrees, minutes and seconds into decimal degrees.

    Degrees and minutes are rounded to whole numbers first.
    """
    return Angle(int(round(degrees)), int(round(minutes)), float(seconds)).to_decimal()


def format_angle(value: Optional[float], decimal_separator: str = ".") -> str:
    """Canonical text of a decimal-degree value, or ``?° ?' ?"`` for None."""
    if value is None:
        return MISSING_ANGLE
    return Angle.from_decimal(value).format(decimal_separator)


def format_lat_lon(
    latitude: Optional[float],
    longitude: Optional[float],
    decimal_separator: str = "."
) -> str:
    """Render a latitude/longitude pair with hemisphere letters.

    Examples
    --------
    >>> format_lat_lon(49.5, -18.25)
    '49° 30\\' 0.0000" N; 18° 15\\' 0.0000" W'
    """
    def axis(value: Optional[float], positive: str, negative: str) -> str:
        if value is None:
            return MISSING_ANGLE
        hemisphere = positive if value >= 0 else negative
        return f"{format_angle(abs(value), decimal_separator)} {hemisphere}"

    return f"{axis(latitude, 'N', 'S')}; {axis(longitude, 'E', 'W')}"

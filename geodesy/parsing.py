"""
Coordinate Text Parser.

Turns user-entered text into a :class:`WGS84Coordinate`. Four notations
are supported, tried in this fixed order; the first one that matches the
whole (trimmed) input wins and later ones are not tried:

1. Signed decimal pair (Google Maps)::

       49.4593683, 18.3572658

2. Decimal pair with hemisphere letters (Mapy.cz)::

       49.4593683N, 18.3572658E

3. Hemisphere letter, degrees and decimal minutes (Mapy.cz)::

       N 49°27.56210', E 18°21.43595'

4. Degrees, minutes, decimal seconds and hemisphere letter (Mapy.cz)::

       49°27'33.726"N, 18°21'26.157"E

Letters are case-insensitive; ``S`` and ``W`` negate the axis. Prime
(′) and double prime (″) are accepted in place of the ASCII quotes.

A string matching none of the notations yields ``None``; it is not an
error, so callers can fall back to other interpretations.
"""

import re
from typing import Callable, Optional, Tuple

from common.logging_config import get_logger
from geodesy.coordinate_models import WGS84Coordinate


logger = get_logger(__name__)

_FLAGS = re.IGNORECASE

_MINUTE_MARK = r"\s*['′]"
_SECOND_MARK = r"\s*(?:\"|″|'')"

DECIMAL_PAIR = re.compile(
    r"(?P<lat>[+-]?\d{1,3}(?:\.\d+)?)\s*,\s*(?P<lon>[+-]?\d{1,3}(?:\.\d+)?)",
    _FLAGS,
)

DECIMAL_HEMISPHERE = re.compile(
    r"(?P<lat>\d{1,3}(?:\.\d*)?)\s*(?P<lat_hemi>[NS])\s*,\s*"
    r"(?P<lon>\d{1,3}(?:\.\d*)?)\s*(?P<lon_hemi>[EW])",
    _FLAGS,
)

DEGREES_DECIMAL_MINUTES = re.compile(
    r"(?P<lat_hemi>[NS])\s*(?P<lat_deg>\d{1,3})\s*°\s*(?P<lat_min>\d{1,2}(?:\.\d*)?)" + _MINUTE_MARK
    + r"\s*,\s*"
    + r"(?P<lon_hemi>[EW])\s*(?P<lon_deg>\d{1,3})\s*°\s*(?P<lon_min>\d{1,2}(?:\.\d*)?)" + _MINUTE_MARK,
    _FLAGS,
)

DEGREES_MINUTES_SECONDS = re.compile(
    r"(?P<lat_deg>\d{1,3})\s*°\s*(?P<lat_min>\d{1,2})" + _MINUTE_MARK
    + r"\s*(?P<lat_sec>\d{1,2}(?:\.\d*)?)" + _SECOND_MARK + r"\s*(?P<lat_hemi>[NS])"
    + r"\s*,\s*"
    + r"(?P<lon_deg>\d{1,3})\s*°\s*(?P<lon_min>\d{1,2})" + _MINUTE_MARK
    + r"\s*(?P<lon_sec>\d{1,2}(?:\.\d*)?)" + _SECOND_MARK + r"\s*(?P<lon_hemi>[EW])",
    _FLAGS,
)


def _signed(value: float, hemisphere: str) -> float:
    return -value if hemisphere.upper() in ("S", "W") else value


def parse_decimal_pair(text: str) -> Optional[WGS84Coordinate]:
    """``49.4593683, 18.3572658``"""
    match = DECIMAL_PAIR.fullmatch(text.strip())
    if match is None:
        return None
    return WGS84Coordinate(float(match["lat"]), float(match["lon"]))


def parse_decimal_hemisphere(text: str) -> Optional[WGS84Coordinate]:
    """``49.4593683N, 18.3572658E``"""
    match = DECIMAL_HEMISPHERE.fullmatch(text.strip())
    if match is None:
        return None
    return WGS84Coordinate(
        _signed(float(match["lat"]), match["lat_hemi"]),
        _signed(float(match["lon"]), match["lon_hemi"]),
    )


def parse_degrees_decimal_minutes(text: str) -> Optional[WGS84Coordinate]:
    """``N 49°27.56210', E 18°21.43595'``"""
    match = DEGREES_DECIMAL_MINUTES.fullmatch(text.strip())
    if match is None:
        return None

    def axis(prefix: str) -> float:
        value = float(match[f"{prefix}_deg"]) + float(match[f"{prefix}_min"]) / 60.0
        return _signed(value, match[f"{prefix}_hemi"])

    return WGS84Coordinate(axis("lat"), axis("lon"))


def parse_degrees_minutes_seconds(text: str) -> Optional[WGS84Coordinate]:
    """``49°27'33.726"N, 18°21'26.157"E``"""
    match = DEGREES_MINUTES_SECONDS.fullmatch(text.strip())
    if match is None:
        return None

    def axis(prefix: str) -> float:
        value = (
            float(match[f"{prefix}_deg"])
            + float(match[f"{prefix}_min"]) / 60.0
            + float(match[f"{prefix}_sec"]) / 3600.0
        )
        return _signed(value, match[f"{prefix}_hemi"])

    return WGS84Coordinate(axis("lat"), axis("lon"))


# Priority order is part of the public contract
MATCHERS: Tuple[Callable[[str], Optional[WGS84Coordinate]], ...] = (
    parse_decimal_pair,
    parse_decimal_hemisphere,
    parse_degrees_decimal_minutes,
    parse_degrees_minutes_seconds,
)


def parse(text: Optional[str]) -> Optional[WGS84Coordinate]:
    """Parse a coordinate in any supported notation.

    Parameters
    ----------
    text : str or None
        User-entered text.

    Returns
    -------
    WGS84Coordinate or None
        The coordinate of the first matching notation, or None when the
        input is empty or matches none of them.

    Examples
    --------
    >>> parse("49.4593683N, 18.3572658W")
    WGS84Coordinate(latitude=49.4593683, longitude=-18.3572658)
    >>> parse("Brno") is None
    True
    """
    if text is None or not text.strip():
        return None

    for matcher in MATCHERS:
        coordinate = matcher(text)
        if coordinate is not None:
            logger.debug("Parsed %r with %s", text, matcher.__name__)
            return coordinate

    return None

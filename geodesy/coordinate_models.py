"""
Coordinate Value Types.

One immutable value type per reference system. Every type carries only
its native axes; conversions are exposed as read-only properties that are
recomputed on each access.

WGS84 is the interchange system: every other type is defined by a
transform to or from :class:`WGS84Coordinate`, directly or through
another projected type.

Notes
-----
Projected constructors (S-JTSK, S-42, UTM) do not validate ranges or the
ordering of their axes; points near projection boundaries routinely fall
outside the usual ranges.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from common.constants import GeodeticConstants
from geodesy.angles import Angle, format_angle


EMEP_01_HALF_SIZE = GeodeticConstants.EMEP_01_GRID_HALF_SIZE.value
GRIDABLE_TOLERANCE = 1e-7


def _engine():
    # geodesy.transformations imports this module; resolve it lazily
    from geodesy import transformations
    return transformations


def gridable(value: float) -> float:
    """Snap a decimal-degree value to the center of its 0.1° cell.

    Examples
    --------
    >>> round(gridable(18.17), 10)
    18.15
    """
    return float(np.floor(value * 10.0) / 10.0 + EMEP_01_HALF_SIZE)


def is_gridable(value: float) -> bool:
    """True when ``value`` already is a 0.1° cell center."""
    return abs(value - gridable(value)) < GRIDABLE_TOLERANCE


@dataclass(frozen=True)
class WGS84Coordinate:
    """A geodetic coordinate on the WGS84 ellipsoid.

    Attributes
    ----------
    latitude : float
        Geodetic latitude in decimal degrees, positive north.
    longitude : float
        Geodetic longitude in decimal degrees, positive east.

    Examples
    --------
    >>> prague = WGS84Coordinate(50.0755, 14.4378)
    >>> prague.jtsk5514.x < 0
    True
    """
    latitude: float
    longitude: float

    @classmethod
    def from_dms(
        cls,
        latitude_degrees: float,
        latitude_minutes: float,
        latitude_seconds: float,
        longitude_degrees: float,
        longitude_minutes: float,
        longitude_seconds: float
    ) -> "WGS84Coordinate":
        """Create a coordinate from degrees, minutes and seconds."""
        latitude = Angle(int(round(latitude_degrees)), int(round(latitude_minutes)), float(latitude_seconds))
        longitude = Angle(int(round(longitude_degrees)), int(round(longitude_minutes)), float(longitude_seconds))
        return cls(latitude.to_decimal(), longitude.to_decimal())

    @classmethod
    def parse(cls, text: str) -> Optional["WGS84Coordinate"]:
        """Parse free text; None when no supported notation matches."""
        from geodesy.parsing import parse
        return parse(text)

    # --- angular views ---------------------------------------------------

    @property
    def latitude_rad(self) -> float:
        return float(np.radians(self.latitude))

    @property
    def longitude_rad(self) -> float:
        return float(np.radians(self.longitude))

    @property
    def latitude_angle(self) -> Angle:
        return Angle.from_decimal(self.latitude)

    @property
    def longitude_angle(self) -> Angle:
        return Angle.from_decimal(self.longitude)

    @property
    def latitude_degrees(self) -> int:
        return self.latitude_angle.degrees

    @property
    def latitude_minutes(self) -> int:
        return self.latitude_angle.minutes

    @property
    def latitude_seconds(self) -> float:
        return self.latitude_angle.seconds

    @property
    def longitude_degrees(self) -> int:
        return self.longitude_angle.degrees

    @property
    def longitude_minutes(self) -> int:
        return self.longitude_angle.minutes

    @property
    def longitude_seconds(self) -> float:
        return self.longitude_angle.seconds

    # --- projections -----------------------------------------------------

    @property
    def s42(self) -> "S42Coordinate":
        return _engine().wgs84_to_s42(self)

    @property
    def jtsk2065(self) -> "JTSK2065Coordinate":
        return _engine().wgs84_to_jtsk2065(self)

    @property
    def jtsk5514(self) -> "JTSK5514Coordinate":
        return _engine().wgs84_to_jtsk5514(self)

    @property
    def emep_grid_50x50(self) -> "EMEPGrid50x50Coordinate":
        return _engine().wgs84_to_emep_grid_50x50(self)

    @property
    def emep_grid_01x01(self) -> "EMEPGrid01x01Coordinate":
        return _engine().wgs84_to_emep_grid_01x01(self)

    @property
    def utm(self) -> "UTMCoordinate":
        return _engine().wgs84_to_utm(self)

    @property
    def utm33n(self) -> "UTMZoneCoordinate":
        """UTM in zone 33 regardless of the true zone (whole Czech Republic in one zone)."""
        return _engine().wgs84_to_utm_zone(self, 33)

    def utm_in_zone(self, zone_number: int) -> "UTMZoneCoordinate":
        return _engine().wgs84_to_utm_zone(self, zone_number)

    # --- distance and text -----------------------------------------------

    def distance_to(self, other: "WGS84Coordinate", method: str = "vincenty") -> float:
        """Distance to ``other`` in meters (ellipsoidal by default)."""
        from geodesy.distance_calculations import distance
        return distance(self, other, method=method)

    def to_deg_string(self, decimal_separator: str = ".") -> str:
        """Both axes as ``D° M' S.SSSS"`` text."""
        return (
            f"{format_angle(self.latitude, decimal_separator)} "
            f"{format_angle(self.longitude, decimal_separator)}"
        )

    def __str__(self) -> str:
        return f"{self.latitude}° {self.longitude}°"


@dataclass(frozen=True)
class JTSK2065Coordinate:
    """S-JTSK / Krovak South-West (EPSG:2065), the "positive" convention.

    Attributes
    ----------
    x : float
        Southing in meters (about 935 000 - 1 230 000 over the Czech Republic).
    y : float
        Westing in meters (about 430 000 - 905 000).

    Notes
    -----
    Surveyors write the pair as ``Y, X``; :meth:`__str__` follows that
    order. The relation to EPSG:5514 is ``X5514 = -y``, ``Y5514 = -x``.
    """
    x: float
    y: float

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().jtsk2065_to_wgs84(self)

    @property
    def jtsk5514(self) -> "JTSK5514Coordinate":
        return _engine().jtsk2065_to_jtsk5514(self)

    def __str__(self) -> str:
        return f"JTSK2065: {self.y}m; {self.x}m"


@dataclass(frozen=True)
class JTSK5514Coordinate:
    """S-JTSK / Krovak East-North (EPSG:5514), the "negative" convention.

    Used by the CUZK geoportal; both axes are negative over the Czech
    Republic and the pair is written ``X, Y``.
    """
    x: float
    y: float

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().jtsk5514_to_wgs84(self)

    @property
    def jtsk2065(self) -> JTSK2065Coordinate:
        return _engine().jtsk5514_to_jtsk2065(self)

    def __str__(self) -> str:
        return f"JTSK5514: {self.x}m; {self.y}m"


@dataclass(frozen=True)
class S42Coordinate:
    """S-42 (Pulkovo 1942) Gauss-Krüger coordinate.

    Attributes
    ----------
    x : float
        Easting in meters; the millions digit is the zone number and the
        in-zone easting is offset by 500 000 m.
    y : float
        Northing in meters.
    """
    x: float
    y: float

    @property
    def zone(self) -> int:
        return _engine().s42_zone(self.x)

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().s42_to_wgs84(self)

    def __str__(self) -> str:
        return f"S42: {self.x}m; {self.y}m"


@dataclass(frozen=True)
class EMEPGrid50x50Coordinate:
    """Cell index in the EMEP 50 x 50 km polar-stereographic grid.

    The grid is a polar-stereographic projection true at 60° N with the
    North Pole at cell (8, 110) and the Y axis parallel to 32° W.
    """
    x: int
    y: int

    NORTH_POLE_X = GeodeticConstants.EMEP_NORTH_POLE_X
    NORTH_POLE_Y = GeodeticConstants.EMEP_NORTH_POLE_Y

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().emep_grid_50x50_to_wgs84(self)

    def __str__(self) -> str:
        return f"EMEP 50x50: {self.x}; {self.y}"


@dataclass(frozen=True)
class EMEPGrid01x01Coordinate:
    """A 0.1° x 0.1° EMEP cell identified by its center.

    A center is valid only when both axes are of the form
    ``floor(v * 10) / 10 + 0.05``; for example cell (49.05, 18.15) spans
    latitudes 49.0 - 49.1 and longitudes 18.1 - 18.2.
    """
    latitude: float
    longitude: float

    @classmethod
    def from_wgs84(cls, coordinate: WGS84Coordinate) -> "EMEPGrid01x01Coordinate":
        """The cell containing ``coordinate``."""
        return cls(gridable(coordinate.latitude), gridable(coordinate.longitude))

    @property
    def is_valid(self) -> bool:
        return is_gridable(self.latitude) and is_gridable(self.longitude)

    @property
    def wgs84(self) -> WGS84Coordinate:
        """Cell center."""
        return WGS84Coordinate(self.latitude, self.longitude)

    @property
    def left_top_corner(self) -> WGS84Coordinate:
        return WGS84Coordinate(self.latitude + EMEP_01_HALF_SIZE, self.longitude - EMEP_01_HALF_SIZE)

    @property
    def right_top_corner(self) -> WGS84Coordinate:
        return WGS84Coordinate(self.latitude + EMEP_01_HALF_SIZE, self.longitude + EMEP_01_HALF_SIZE)

    @property
    def left_bottom_corner(self) -> WGS84Coordinate:
        return WGS84Coordinate(self.latitude - EMEP_01_HALF_SIZE, self.longitude - EMEP_01_HALF_SIZE)

    @property
    def right_bottom_corner(self) -> WGS84Coordinate:
        return WGS84Coordinate(self.latitude - EMEP_01_HALF_SIZE, self.longitude + EMEP_01_HALF_SIZE)

    @property
    def corners(self) -> Tuple[WGS84Coordinate, WGS84Coordinate, WGS84Coordinate, WGS84Coordinate]:
        """Corners clockwise from the top left."""
        return (
            self.left_top_corner,
            self.right_top_corner,
            self.right_bottom_corner,
            self.left_bottom_corner,
        )

    def __str__(self) -> str:
        suffix = "" if self.is_valid else " (invalid)"
        return f"EMEP 0.1°x0.1°: {self.latitude:.2f}; {self.longitude:.2f}{suffix}"


@dataclass(frozen=True)
class UTMCoordinate:
    """Universal Transverse Mercator coordinate in its natural zone.

    Attributes
    ----------
    easting : float
        Meters, including the 500 000 m false easting.
    northing : float
        Meters, including the 10 000 000 m false northing south of the
        equator.
    zone_number : int
        1 - 60.
    zone_letter : str
        Latitude band C - X, or ``"Z"`` outside the UTM latitude range.
    southern : bool, optional
        Hemisphere the false northing was applied for. When omitted it is
        read from the band letter; for band ``"Z"`` a northing below
        5 000 km means south of -80°.
    """
    easting: float
    northing: float
    zone_number: int
    zone_letter: str
    southern: Optional[bool] = None

    @property
    def zone(self) -> str:
        return f"{self.zone_number}{self.zone_letter}"

    @property
    def is_southern(self) -> bool:
        if self.southern is not None:
            return self.southern
        letter = self.zone_letter.upper()
        if letter == "Z":
            return self.northing < 5_000_000.0
        return letter < "N"

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().utm_to_wgs84(self)

    def __str__(self) -> str:
        return f"{self.zone} {self.easting} {self.northing}"


@dataclass(frozen=True)
class UTMZoneCoordinate:
    """Transverse Mercator coordinate forced into a caller-chosen zone.

    Keeps a region that straddles two zones (the Czech Republic lies in
    33N and 34N) in a single planar system. South of the equator ``y``
    carries the 10 000 000 m false northing and ``southern`` is set.
    """
    x: float
    y: float
    zone_number: int
    southern: bool = False

    @property
    def wgs84(self) -> WGS84Coordinate:
        return _engine().utm_zone_to_wgs84(self)

    def __str__(self) -> str:
        return f"{self.x}; {self.y}; zone: {self.zone_number}"

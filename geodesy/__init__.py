"""
Geodesy Module: Central European coordinate reference systems.

All conversions between the supported systems go through this package.
WGS84 is the interchange system; every other coordinate type converts to
and from it.

This module provides:
- Immutable coordinate value types (WGS84, S-JTSK, S-42, EMEP, UTM)
- Closed-form projection kernels (Krovak, Gauss-Krüger, polar stereographic, UTM)
- Degree/minute/second angle codec and ellipsoid registry
- Free-text coordinate parser and ellipsoidal distance
"""

__version__ = "1.0.0"

from geodesy.angles import (
    Angle,
    format_angle,
    format_lat_lon,
)

from geodesy.ellipsoids import (
    Ellipsoid,
    EllipsoidRegistry,
    UnknownDatumError,
    get_default_ellipsoid,
    get_ellipsoid,
)

from geodesy.coordinate_models import (
    EMEPGrid01x01Coordinate,
    EMEPGrid50x50Coordinate,
    JTSK2065Coordinate,
    JTSK5514Coordinate,
    S42Coordinate,
    UTMCoordinate,
    UTMZoneCoordinate,
    WGS84Coordinate,
)

from geodesy.transformations import transform

from geodesy.parsing import parse

from geodesy.distance_calculations import (
    VincentyResult,
    distance,
    vincenty_inverse,
)

__all__ = [
    "__version__",
    # Angles and ellipsoids
    "Angle",
    "format_angle",
    "format_lat_lon",
    "Ellipsoid",
    "EllipsoidRegistry",
    "UnknownDatumError",
    "get_default_ellipsoid",
    "get_ellipsoid",
    # Coordinate types
    "EMEPGrid01x01Coordinate",
    "EMEPGrid50x50Coordinate",
    "JTSK2065Coordinate",
    "JTSK5514Coordinate",
    "S42Coordinate",
    "UTMCoordinate",
    "UTMZoneCoordinate",
    "WGS84Coordinate",
    # Operations
    "transform",
    "parse",
    "VincentyResult",
    "distance",
    "vincenty_inverse",
]

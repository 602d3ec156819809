"""
Transformation Engine.

Pure functions mapping one coordinate value type onto another. Each
function reads only its arguments and fixed constants, so all of them are
safe to call concurrently.

Pipelines
---------
WGS84 -> S-JTSK (EPSG:2065)::

    geodetic (WGS84) -> ECEF -> Helmert -> ECEF (S-JTSK)
        -> geodetic (Bessel 1841) -> Krovak

S-JTSK -> WGS84 runs the same chain backwards with its own Helmert
parameter set and a 45 m ellipsoidal height for the S-JTSK point.

EPSG:2065 <-> EPSG:5514 is a reflection, ``(x, y) -> (-y, -x)``, with
no re-projection.

Example Usage
-------------
>>> from geodesy.coordinate_models import WGS84Coordinate, JTSK5514Coordinate
>>> from geodesy.transformations import transform
>>> jtsk = transform(WGS84Coordinate(50.0755, 14.4378), JTSK5514Coordinate)
"""

from typing import Callable, Dict, Optional, Tuple, Type, TypeVar

import numpy as np

from common.logging_config import get_logger
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
from geodesy.ellipsoids import (
    BESSEL_1841,
    WGS84,
    Ellipsoid,
    ecef_to_geodetic,
    geodetic_to_ecef,
)
from geodesy.projections import (
    JTSK_TO_WGS84,
    WGS84_TO_JTSK,
    EMEPPolarStereographic,
    GaussKrugerS42Projection,
    KrovakProjection,
    TransverseMercator,
    helmert_transform,
    s42_zone,
    utm_zone_letter,
    utm_zone_number,
)


logger = get_logger(__name__)

# Ellipsoidal height assigned to S-JTSK points before the datum shift
JTSK_HEIGHT_M = 45.0

S42_PROJECTION = GaussKrugerS42Projection()
KROVAK_PROJECTION = KrovakProjection()
EMEP_PROJECTION = EMEPPolarStereographic()


# =========================================================================
# S-42
# =========================================================================

def wgs84_to_s42(coordinate: WGS84Coordinate) -> S42Coordinate:
    """WGS84 -> S-42 Gauss-Krüger zone 3."""
    x, y = S42_PROJECTION.to_projected(coordinate.latitude_rad, coordinate.longitude_rad)
    return S42Coordinate(x, y)


def s42_to_wgs84(coordinate: S42Coordinate) -> WGS84Coordinate:
    """S-42 Gauss-Krüger (any zone) -> WGS84 via a Molodensky datum shift."""
    latitude_rad, longitude_rad = S42_PROJECTION.to_geodetic(coordinate.x, coordinate.y)
    return WGS84Coordinate(float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad)))


# =========================================================================
# S-JTSK
# =========================================================================

def wgs84_to_jtsk2065(coordinate: WGS84Coordinate) -> JTSK2065Coordinate:
    """WGS84 -> S-JTSK / Krovak South-West."""
    X, Y, Z = geodetic_to_ecef(coordinate.latitude_rad, coordinate.longitude_rad, 0.0, WGS84)
    X, Y, Z = helmert_transform(X, Y, Z, WGS84_TO_JTSK)
    latitude_rad, longitude_rad = ecef_to_geodetic(X, Y, Z, BESSEL_1841)
    x, y = KROVAK_PROJECTION.to_projected(latitude_rad, longitude_rad)
    return JTSK2065Coordinate(x, y)


def jtsk2065_to_wgs84(
    coordinate: JTSK2065Coordinate,
    max_iterations: int = 100,
    tolerance: float = 1e-15
) -> WGS84Coordinate:
    """S-JTSK / Krovak South-West -> WGS84.

    Parameters
    ----------
    coordinate : JTSK2065Coordinate
        Point to convert.
    max_iterations, tolerance
        Bounds of the Krovak latitude fixed-point iteration.
    """
    projection = KrovakProjection(max_iterations=max_iterations, tolerance=tolerance)
    latitude_rad, longitude_rad = projection.to_geodetic(coordinate.x, coordinate.y)
    X, Y, Z = geodetic_to_ecef(latitude_rad, longitude_rad, JTSK_HEIGHT_M, BESSEL_1841)
    X, Y, Z = helmert_transform(X, Y, Z, JTSK_TO_WGS84)
    latitude_rad, longitude_rad = ecef_to_geodetic(X, Y, Z, WGS84)
    return WGS84Coordinate(float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad)))


def jtsk2065_to_jtsk5514(coordinate: JTSK2065Coordinate) -> JTSK5514Coordinate:
    return JTSK5514Coordinate(-coordinate.y, -coordinate.x)


def jtsk5514_to_jtsk2065(coordinate: JTSK5514Coordinate) -> JTSK2065Coordinate:
    return JTSK2065Coordinate(-coordinate.y, -coordinate.x)


def wgs84_to_jtsk5514(coordinate: WGS84Coordinate) -> JTSK5514Coordinate:
    """WGS84 -> S-JTSK / Krovak East-North."""
    return jtsk2065_to_jtsk5514(wgs84_to_jtsk2065(coordinate))


def jtsk5514_to_wgs84(coordinate: JTSK5514Coordinate) -> WGS84Coordinate:
    """S-JTSK / Krovak East-North -> WGS84."""
    return jtsk2065_to_wgs84(jtsk5514_to_jtsk2065(coordinate))


# =========================================================================
# EMEP grids
# =========================================================================

def wgs84_to_emep_grid_50x50(coordinate: WGS84Coordinate) -> EMEPGrid50x50Coordinate:
    """WGS84 -> EMEP 50 x 50 km cell index.

    The fractional grid position is truncated toward zero, not rounded.
    """
    x, y = EMEP_PROJECTION.to_projected(coordinate.latitude_rad, coordinate.longitude_rad)
    return EMEPGrid50x50Coordinate(int(x), int(y))


def emep_grid_50x50_to_wgs84(coordinate: EMEPGrid50x50Coordinate) -> WGS84Coordinate:
    """EMEP 50 x 50 km grid position -> WGS84 (closed form)."""
    latitude_rad, longitude_rad = EMEP_PROJECTION.to_geodetic(coordinate.x, coordinate.y)
    return WGS84Coordinate(float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad)))


def wgs84_to_emep_grid_01x01(coordinate: WGS84Coordinate) -> EMEPGrid01x01Coordinate:
    """WGS84 -> the EMEP 0.1° x 0.1° cell containing the point."""
    return EMEPGrid01x01Coordinate.from_wgs84(coordinate)


def emep_grid_01x01_from_lat_lon(latitude: float, longitude: float) -> EMEPGrid01x01Coordinate:
    return wgs84_to_emep_grid_01x01(WGS84Coordinate(latitude, longitude))


# =========================================================================
# UTM
# =========================================================================

def wgs84_to_utm(
    coordinate: WGS84Coordinate,
    ellipsoid: Optional[Ellipsoid] = None
) -> UTMCoordinate:
    """WGS84 -> UTM in the point's own zone.

    Parameters
    ----------
    coordinate : WGS84Coordinate
        Point to convert.
    ellipsoid : Ellipsoid, optional
        Defaults to the registry's default ellipsoid (WGS 84).
    """
    zone_number = utm_zone_number(coordinate.latitude, coordinate.longitude)
    southern = coordinate.latitude < 0
    projection = TransverseMercator(zone_number, southern=southern, ellipsoid=ellipsoid)
    easting, northing = projection.to_projected(coordinate.latitude_rad, coordinate.longitude_rad)
    return UTMCoordinate(easting, northing, zone_number, utm_zone_letter(coordinate.latitude), southern)


def wgs84_to_utm_zone(
    coordinate: WGS84Coordinate,
    zone_number: int,
    ellipsoid: Optional[Ellipsoid] = None
) -> UTMZoneCoordinate:
    """WGS84 -> Transverse Mercator in a caller-chosen UTM zone.

    Points south of the equator get the 10 000 km false northing, as in
    the natural-zone transform.
    """
    southern = coordinate.latitude < 0
    projection = TransverseMercator(zone_number, southern=southern, ellipsoid=ellipsoid)
    x, y = projection.to_projected(coordinate.latitude_rad, coordinate.longitude_rad)
    return UTMZoneCoordinate(x, y, zone_number, southern)


def utm_to_wgs84(
    coordinate: UTMCoordinate,
    ellipsoid: Optional[Ellipsoid] = None
) -> WGS84Coordinate:
    """UTM -> WGS84; see :attr:`UTMCoordinate.is_southern` for the hemisphere."""
    projection = TransverseMercator(
        coordinate.zone_number, southern=coordinate.is_southern, ellipsoid=ellipsoid
    )
    latitude_rad, longitude_rad = projection.to_geodetic(coordinate.easting, coordinate.northing)
    return WGS84Coordinate(float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad)))


def utm_zone_to_wgs84(
    coordinate: UTMZoneCoordinate,
    ellipsoid: Optional[Ellipsoid] = None
) -> WGS84Coordinate:
    """Fixed-zone Transverse Mercator -> WGS84."""
    projection = TransverseMercator(
        coordinate.zone_number, southern=coordinate.southern, ellipsoid=ellipsoid
    )
    latitude_rad, longitude_rad = projection.to_geodetic(coordinate.x, coordinate.y)
    return WGS84Coordinate(float(np.degrees(latitude_rad)), float(np.degrees(longitude_rad)))


# =========================================================================
# Generic dispatch
# =========================================================================

T = TypeVar("T")

_TO_WGS84: Dict[type, Callable] = {
    JTSK2065Coordinate: jtsk2065_to_wgs84,
    JTSK5514Coordinate: jtsk5514_to_wgs84,
    S42Coordinate: s42_to_wgs84,
    EMEPGrid50x50Coordinate: emep_grid_50x50_to_wgs84,
    EMEPGrid01x01Coordinate: lambda coordinate: coordinate.wgs84,
    UTMCoordinate: utm_to_wgs84,
    UTMZoneCoordinate: utm_zone_to_wgs84,
}

_FROM_WGS84: Dict[type, Callable] = {
    JTSK2065Coordinate: wgs84_to_jtsk2065,
    JTSK5514Coordinate: wgs84_to_jtsk5514,
    S42Coordinate: wgs84_to_s42,
    EMEPGrid50x50Coordinate: wgs84_to_emep_grid_50x50,
    EMEPGrid01x01Coordinate: wgs84_to_emep_grid_01x01,
    UTMCoordinate: wgs84_to_utm,
    UTMZoneCoordinate: lambda coordinate: wgs84_to_utm_zone(coordinate, 33),
}

_DIRECT: Dict[Tuple[type, type], Callable] = {
    (JTSK2065Coordinate, JTSK5514Coordinate): jtsk2065_to_jtsk5514,
    (JTSK5514Coordinate, JTSK2065Coordinate): jtsk5514_to_jtsk2065,
}


def transform(coordinate, target: Type[T]) -> T:
    """Convert ``coordinate`` into the ``target`` value type.

    Direct mappings (the S-JTSK reflection) are used when available;
    every other pair is routed through WGS84. Conversions into
    :class:`UTMZoneCoordinate` use zone 33.

    Raises
    ------
    TypeError
        If either type is not a known coordinate type.
    """
    source = type(coordinate)
    if source is target:
        return coordinate

    direct = _DIRECT.get((source, target))
    if direct is not None:
        return direct(coordinate)

    if source is WGS84Coordinate:
        wgs84 = coordinate
    elif source in _TO_WGS84:
        wgs84 = _TO_WGS84[source](coordinate)
    else:
        raise TypeError(f"Cannot transform from {source.__name__}")

    if target is WGS84Coordinate:
        return wgs84
    if target not in _FROM_WGS84:
        raise TypeError(f"Cannot transform into {getattr(target, '__name__', target)!r}")

    logger.debug("Routing %s -> %s through WGS84", source.__name__, target.__name__)
    return _FROM_WGS84[target](wgs84)


"""
Reference Transformer.

Independent projections of WGS84 points through PROJ and the EPSG
database (pyproj). The closed-form engine in
:mod:`geodesy.transformations` is checked against these values.

Notes
-----
EPSG:28403 alone carries no datum shift to WGS84 in every PROJ build, so
the S-42 reference uses an explicit PROJ string with the same three
translation parameters used by the S-42 -> WGS84 Molodensky shift.
"""

from functools import lru_cache
from typing import Tuple, Union

from pyproj import CRS, Transformer
from pyproj.enums import TransformDirection

from common.logging_config import get_logger
from geodesy.coordinate_models import (
    JTSK5514Coordinate,
    S42Coordinate,
    UTMCoordinate,
    WGS84Coordinate,
)
from geodesy.distance_calculations import karney_distance
from geodesy.projections import utm_zone_letter


logger = get_logger(__name__)

WGS84_EPSG = 4326
JTSK_KROVAK_EAST_NORTH_EPSG = 5514

S42_ZONE3_PROJ = (
    "+proj=tmerc +lat_0=0 +lon_0=15 +k=1 +x_0=3500000 +y_0=0 "
    "+ellps=krass +towgs84=26,-121,-78,0,0,0,0 +units=m +no_defs"
)

CRSLike = Union[int, str]


class ReferenceTransformer:
    """Thin wrapper over ``pyproj.Transformer`` with lon/lat axis order.

    Parameters
    ----------
    source, target : int or str
        EPSG codes or PROJ strings.
    """

    def __init__(self, source: CRSLike, target: CRSLike):
        self.source = CRS.from_user_input(source)
        self.target = CRS.from_user_input(target)
        self._transformer = Transformer.from_crs(self.source, self.target, always_xy=True)
        logger.debug("Reference transformer %s -> %s", self.source.name, self.target.name)

    def forward(self, x: float, y: float) -> Tuple[float, float]:
        tx, ty = self._transformer.transform(x, y)
        return float(tx), float(ty)

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        tx, ty = self._transformer.transform(x, y, direction=TransformDirection.INVERSE)
        return float(tx), float(ty)


@lru_cache(maxsize=None)
def _transformer(source: CRSLike, target: CRSLike) -> ReferenceTransformer:
    return ReferenceTransformer(source, target)


def utm_epsg(zone_number: int, southern: bool = False) -> int:
    """EPSG code of WGS 84 / UTM zone ``zone_number``."""
    return (32700 if southern else 32600) + zone_number


def reference_jtsk5514(coordinate: WGS84Coordinate) -> JTSK5514Coordinate:
    """WGS84 -> EPSG:5514 (easting, northing) through PROJ."""
    x, y = _transformer(WGS84_EPSG, JTSK_KROVAK_EAST_NORTH_EPSG).forward(
        coordinate.longitude, coordinate.latitude
    )
    return JTSK5514Coordinate(x, y)


def reference_s42(coordinate: WGS84Coordinate) -> S42Coordinate:
    """WGS84 -> S-42 Gauss-Krüger zone 3 through PROJ."""
    x, y = _transformer(WGS84_EPSG, S42_ZONE3_PROJ).forward(coordinate.longitude, coordinate.latitude)
    return S42Coordinate(x, y)


def reference_utm(coordinate: WGS84Coordinate, zone_number: int) -> UTMCoordinate:
    """WGS84 -> WGS 84 / UTM in ``zone_number`` through PROJ."""
    southern = coordinate.latitude < 0
    easting, northing = _transformer(WGS84_EPSG, utm_epsg(zone_number, southern)).forward(
        coordinate.longitude, coordinate.latitude
    )
    return UTMCoordinate(easting, northing, zone_number, utm_zone_letter(coordinate.latitude), southern)


def reference_distance(first: WGS84Coordinate, second: WGS84Coordinate) -> float:
    """Karney geodesic distance in meters."""
    return karney_distance(first.latitude, first.longitude, second.latitude, second.longitude)

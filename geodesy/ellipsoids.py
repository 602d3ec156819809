"""
Reference Ellipsoids and Geocentric Conversions.

This module holds two things:

1. The **ellipsoid registry**, a fixed catalog of published datums looked
   up by case-insensitive name. It supplies the parameters of the UTM
   transformation. Unknown names raise :class:`UnknownDatumError`; the
   registry never falls back to WGS 84 silently.
2. The **precise ellipsoids** of the closed-form pipelines (WGS84,
   Bessel 1841 and Krasovsky 1940) together with the geodetic <->
   geocentric (ECEF) conversions the Krovak transformation runs through.

Scientific Context
------------------
Domain: Geodesy, reference ellipsoids
Model: Rotational ellipsoid given by semi-major axis ``a`` and first
eccentricity squared ``e²``

The registry values are rounded catalog values (``e²`` to about 9
significant digits). The Krovak and Gauss-Krüger pipelines use the
full-precision ellipsoids defined at the bottom of this module.

References
----------
- NIMA TR8350.2, Appendix A: reference ellipsoid parameters
- Bowring, B.R. (1985). The accuracy of geodetic latitude and height
  equations. Survey Review, 28(218), 202-206.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
import threading

import numpy as np

from common.constants import GeodeticConstants
from common.logging_config import get_logger


logger = get_logger(__name__)


class UnknownDatumError(KeyError):
    """Raised when a datum name is not in the ellipsoid catalog."""

    def __init__(self, datum_name: str):
        super().__init__(datum_name)
        self.datum_name = datum_name

    def __str__(self) -> str:
        return f"Unknown datum: {self.datum_name!r}"


@dataclass(frozen=True)
class Ellipsoid:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    name : str
        Datum name as listed in the catalog.
    semi_major_axis : float
        Semi-major axis (equatorial radius) ``a`` in meters.
    eccentricity_squared : float
        First eccentricity squared: e² = (a² - b²) / a²

    Derived Parameters
    ------------------
    semi_minor_axis : float
        Semi-minor axis (polar radius) ``b`` in meters.
    second_eccentricity_squared : float
        Second eccentricity squared: e'² = e² / (1 - e²)
    flattening : float
        Flattening: f = (a - b) / a
    """
    name: str
    semi_major_axis: float
    eccentricity_squared: float

    @property
    def semi_minor_axis(self) -> float:
        """Semi-minor axis in meters."""
        return self.semi_major_axis * np.sqrt(1.0 - self.eccentricity_squared)

    @property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared."""
        return self.eccentricity_squared / (1.0 - self.eccentricity_squared)

    @property
    def flattening(self) -> float:
        """Flattening."""
        return 1.0 - np.sqrt(1.0 - self.eccentricity_squared)


# Catalog of published datums: (name, a [m], e²)
ELLIPSOID_TABLE: Tuple[Tuple[str, float, float], ...] = (
    ("Airy", 6377563, 0.00667054),
    ("Australian National", 6378160, 0.006694542),
    ("Bessel 1841", 6377397, 0.006674372),
    ("Bessel 1841 Nambia", 6377484, 0.006674372),
    ("Clarke 1866", 6378206, 0.006768658),
    ("Clarke 1880", 6378249, 0.006803511),
    ("Everest", 6377276, 0.006637847),
    ("Fischer 1960 Mercury", 6378166, 0.006693422),
    ("Fischer 1968", 6378150, 0.006693422),
    ("GRS 1967", 6378160, 0.006694605),
    ("GRS 1980", 6378137, 0.00669438),
    ("Helmert 1906", 6378200, 0.006693422),
    ("Hough", 6378270, 0.00672267),
    ("International", 6378388, 0.00672267),
    ("Krassovsky", 6378245, 0.006693422),
    ("Modified Airy", 6377340, 0.00667054),
    ("Modified Everest", 6377304, 0.006637847),
    ("Modified Fischer 1960", 6378155, 0.006693422),
    ("South American 1969", 6378160, 0.006694542),
    ("WGS 60", 6378165, 0.006693422),
    ("WGS 66", 6378145, 0.006694542),
    ("WGS 72", 6378135, 0.006694318),
    ("ED50", 6378388, 0.00672267),
    ("WGS 84", 6378137, 0.00669438),
    ("EUREF89", 6378137, 0.00669438),
    ("ETRS89", 6378137, 0.00669438),
)

DEFAULT_DATUM = "WGS 84"


class EllipsoidRegistry:
    """Case-insensitive catalog of reference ellipsoids.

    The default ellipsoid is resolved once, on first request, and the
    same instance is returned for the lifetime of the registry. The
    resolution is guarded by a lock so concurrent first callers cannot
    publish two different instances.

    Parameters
    ----------
    entries : iterable of (name, a, e²)
        Catalog rows.
    default_name : str
        Name of the entry returned by :meth:`get_default`.

    Examples
    --------
    >>> registry = EllipsoidRegistry()
    >>> registry.get("bessel 1841").semi_major_axis
    6377397.0
    """

    def __init__(
        self,
        entries: Iterable[Tuple[str, float, float]] = ELLIPSOID_TABLE,
        default_name: str = DEFAULT_DATUM
    ):
        self._entries: Dict[str, Ellipsoid] = {
            name.lower(): Ellipsoid(name, float(a), float(e2))
            for name, a, e2 in entries
        }
        self._default_name = default_name
        self._default: Optional[Ellipsoid] = None
        self._lock = threading.Lock()

    def get(self, datum_name: str) -> Ellipsoid:
        """Look up an ellipsoid by datum name.

        Raises
        ------
        UnknownDatumError
            If the name is not in the catalog.
        """
        try:
            return self._entries[datum_name.lower()]
        except (KeyError, AttributeError):
            raise UnknownDatumError(datum_name) from None

    def get_default(self) -> Ellipsoid:
        """The default (WGS 84) ellipsoid, memoized after the first call."""
        if self._default is None:
            with self._lock:
                if self._default is None:
                    self._default = self.get(self._default_name)
                    logger.debug("Default ellipsoid resolved to %s", self._default.name)
        return self._default

    def names(self) -> List[str]:
        """Catalog names in table order."""
        return [ellipsoid.name for ellipsoid in self._entries.values()]

    def __contains__(self, datum_name: object) -> bool:
        return isinstance(datum_name, str) and datum_name.lower() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


_registry = EllipsoidRegistry()


def get_ellipsoid(datum_name: str) -> Ellipsoid:
    """Look up an ellipsoid in the shared registry."""
    return _registry.get(datum_name)


def get_default_ellipsoid() -> Ellipsoid:
    """Default ellipsoid of the shared registry."""
    return _registry.get_default()


# =========================================================================
# Precise ellipsoids of the closed-form pipelines
# =========================================================================

WGS84 = Ellipsoid(
    name="WGS84",
    semi_major_axis=GeodeticConstants.WGS84_SEMI_MAJOR_AXIS.value,
    eccentricity_squared=GeodeticConstants.WGS84_ECCENTRICITY_SQUARED.value,
)

BESSEL_1841 = Ellipsoid(
    name="Bessel 1841",
    semi_major_axis=GeodeticConstants.BESSEL_SEMI_MAJOR_AXIS.value,
    eccentricity_squared=GeodeticConstants.BESSEL_ECCENTRICITY_SQUARED.value,
)

KRASOVSKY_1940 = Ellipsoid(
    name="Krasovsky 1940",
    semi_major_axis=GeodeticConstants.KRASOVSKY_SEMI_MAJOR_AXIS.value,
    eccentricity_squared=GeodeticConstants.KRASOVSKY_ECCENTRICITY_SQUARED.value,
)


def radius_of_curvature_prime_vertical(latitude_rad: float, ellipsoid: Ellipsoid) -> float:
    """Radius of curvature in the prime vertical.

    Notes
    -----
    N = a / sqrt(1 - e² sin²φ)
    """
    sin_lat = np.sin(latitude_rad)
    return ellipsoid.semi_major_axis / np.sqrt(1.0 - ellipsoid.eccentricity_squared * sin_lat**2)


def geodetic_to_ecef(
    latitude_rad: float,
    longitude_rad: float,
    altitude_m: float,
    ellipsoid: Ellipsoid
) -> Tuple[float, float, float]:
    """Convert geodetic coordinates to Earth-Centered Earth-Fixed (ECEF).

    Parameters
    ----------
    latitude_rad, longitude_rad : float
        Geodetic latitude and longitude in radians.
    altitude_m : float
        Height above the ellipsoid in meters.
    ellipsoid : Ellipsoid
        Reference ellipsoid.

    Returns
    -------
    Tuple[float, float, float]
        (X, Y, Z) in meters.
    """
    sin_lat = np.sin(latitude_rad)
    cos_lat = np.cos(latitude_rad)

    N = radius_of_curvature_prime_vertical(latitude_rad, ellipsoid)

    X = (N + altitude_m) * cos_lat * np.cos(longitude_rad)
    Y = (N + altitude_m) * cos_lat * np.sin(longitude_rad)
    Z = (N * (1.0 - ellipsoid.eccentricity_squared) + altitude_m) * sin_lat

    return float(X), float(Y), float(Z)


def ecef_to_geodetic(
    X: float,
    Y: float,
    Z: float,
    ellipsoid: Ellipsoid
) -> Tuple[float, float]:
    """Convert ECEF coordinates to geodetic latitude and longitude.

    Uses Bowring's closed-form approximation (one parametric-latitude
    step, no iteration), which is accurate to well below a millimeter
    for points near the ellipsoid surface.

    Returns
    -------
    Tuple[float, float]
        (latitude_rad, longitude_rad)
    """
    a = ellipsoid.semi_major_axis
    b = ellipsoid.semi_minor_axis
    e2 = ellipsoid.eccentricity_squared
    ep2 = ellipsoid.second_eccentricity_squared

    p = np.sqrt(X**2 + Y**2)
    theta = np.arctan(Z * a / (b * p))
    latitude_rad = np.arctan(
        (Z + ep2 * b * np.sin(theta)**3) / (p - e2 * a * np.cos(theta)**3)
    )
    # Half-angle form of atan2(Y, X)
    longitude_rad = 2.0 * np.arctan(Y / (p + X))

    return float(latitude_rad), float(longitude_rad)

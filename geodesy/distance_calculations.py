"""
Distance Calculations between WGS84 Points.

Scientific Context
------------------
Domain: Geodesy
Model: Geodesic on the WGS84 ellipsoid (Vincenty inverse), with two
spherical approximations for speed.

Methods
-------
``vincenty``
    Reduced-latitude iteration of Vincenty (1975). Sub-millimeter
    accurate for ordinary point pairs. For nearly antipodal points the
    longitude iteration may not settle within its budget; the distance
    reached so far is returned and :class:`VincentyResult` reports
    ``converged=False``. This is a documented approximation, not an
    error.
``spherical``
    Spherical law of cosines on a sphere of radius 6 378 137 m. Errors up
    to about 900 m.
``haversine``
    Haversine formula on the IUGG mean-radius sphere.
``karney``
    Karney's algorithm through ``pyproj.Geod``; accurate to nanometers
    for every point pair and used as the reference.

References
----------
- Vincenty, T. (1975). Direct and inverse solutions of geodesics on the
  ellipsoid with application of nested equations. Survey Review, 23(176).
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
- https://www.movable-type.co.uk/scripts/latlong-vincenty.html
"""

from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np
import pint
from pyproj import Geod

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from common.units import Q_, validate_units
from geodesy.coordinate_models import WGS84Coordinate


logger = get_logger(__name__)

# Create the geodesic calculator for WGS84
_wgs84_geod = Geod(ellps='WGS84')

VINCENTY_A = GeodeticConstants.WGS84_SEMI_MAJOR_AXIS.value
VINCENTY_B = GeodeticConstants.WGS84_SEMI_MINOR_AXIS.value
VINCENTY_F = GeodeticConstants.WGS84_FLATTENING.value


@dataclass(frozen=True)
class VincentyResult:
    """Result of the Vincenty inverse problem.

    Attributes
    ----------
    distance_m : float
        Ellipsoidal distance in meters.
    iterations : int
        Number of longitude iterations performed.
    converged : bool
        False when the iteration budget ran out before the tolerance was
        reached; ``distance_m`` is then the best available estimate.
    """
    distance_m: float
    iterations: int
    converged: bool


def vincenty_inverse(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    max_iterations: int = 20,
    tolerance: float = 1e-12
) -> VincentyResult:
    """Solve the inverse geodesic problem by Vincenty's iteration.

    Parameters
    ----------
    lat1, lon1 : float
        First point in decimal degrees.
    lat2, lon2 : float
        Second point in decimal degrees.
    max_iterations : int
        Iteration budget for the auxiliary longitude.
    tolerance : float
        Stop when two successive auxiliary longitudes differ by no more
        than this (radians).

    Returns
    -------
    VincentyResult
        Distance, iteration count and convergence flag.
    """
    a, b, f = VINCENTY_A, VINCENTY_B, VINCENTY_F

    L = np.radians(lon2 - lon1)
    U1 = np.arctan((1.0 - f) * np.tan(np.radians(lat1)))
    U2 = np.arctan((1.0 - f) * np.tan(np.radians(lat2)))
    sin_u1, cos_u1 = np.sin(U1), np.cos(U1)
    sin_u2, cos_u2 = np.sin(U2), np.cos(U2)

    lam = L
    lam_previous = 2.0 * np.pi
    iterations = 0
    sin_sigma = cos_sigma = sigma = 0.0
    cos_sq_alpha = cos_2sigma_m = 0.0

    while np.abs(lam - lam_previous) > tolerance and iterations < max_iterations:
        iterations += 1
        sin_lam, cos_lam = np.sin(lam), np.cos(lam)

        sin_sigma = np.sqrt(
            (cos_u2 * sin_lam)**2
            + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)**2
        )
        if sin_sigma == 0:
            # Coincident points
            return VincentyResult(0.0, iterations, True)

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = np.arctan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1.0 - sin_alpha**2
        # Equatorial line: cos²α = 0
        cos_2sigma_m = 0.0 if cos_sq_alpha == 0 else cos_sigma - 2.0 * sin_u1 * sin_u2 / cos_sq_alpha
        C = f / 16.0 * cos_sq_alpha * (4.0 + f * (4.0 - 3.0 * cos_sq_alpha))

        lam_previous = lam
        lam = L + (1.0 - C) * f * sin_alpha * (
            sigma + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2))
        )

    converged = bool(np.abs(lam - lam_previous) <= tolerance)
    if not converged:
        logger.debug(
            "Vincenty iteration did not converge after %d steps (delta=%.3e)",
            iterations, np.abs(lam - lam_previous)
        )

    u_sq = cos_sq_alpha * (a**2 - b**2) / b**2
    A = 1.0 + u_sq / 16384.0 * (4096.0 + u_sq * (-768.0 + u_sq * (320.0 - 175.0 * u_sq)))
    B = u_sq / 1024.0 * (256.0 + u_sq * (-128.0 + u_sq * (74.0 - 47.0 * u_sq)))
    delta_sigma = B * sin_sigma * (
        cos_2sigma_m + B / 4.0 * (
            cos_sigma * (-1.0 + 2.0 * cos_2sigma_m**2)
            - B / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma**2) * (-3.0 + 4.0 * cos_2sigma_m**2)
        )
    )

    return VincentyResult(float(b * A * (sigma - delta_sigma)), iterations, converged)


def geodesic_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Ellipsoidal (Vincenty) distance in meters between two points in degrees."""
    return vincenty_inverse(lat1, lon1, lat2, lon2).distance_m


def spherical_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance by the spherical law of cosines.

    Notes
    -----
    Uses a sphere of radius 6 378 137 m; the error against the ellipsoid
    stays below about 900 m over Central European distances.
    """
    R = GeodeticConstants.SPHERICAL_EARTH_RADIUS.value
    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    cos_angle = np.sin(phi1) * np.sin(phi2) + np.cos(phi1) * np.cos(phi2) * np.cos(np.radians(lon2 - lon1))
    # Rounding can push identical points just past 1
    return float(R * np.arccos(np.clip(cos_angle, -1.0, 1.0)))


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance by the haversine formula on the mean-radius sphere."""
    R = GeodeticConstants.EARTH_MEAN_RADIUS.value

    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    dlat = phi2 - phi1
    dlon = np.radians(lon2 - lon1)

    a = np.sin(dlat / 2)**2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlon / 2)**2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return float(R * c)


def karney_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Geodesic distance by Karney's algorithm (pyproj)."""
    _, _, distance_m = _wgs84_geod.inv(lon1, lat1, lon2, lat2)
    return float(distance_m)


DISTANCE_METHODS: Dict[str, Callable[[float, float, float, float], float]] = {
    "vincenty": geodesic_distance,
    "spherical": spherical_distance,
    "haversine": haversine_distance,
    "karney": karney_distance,
}


def distance(
    first: WGS84Coordinate,
    second: WGS84Coordinate,
    method: str = "vincenty"
) -> float:
    """Distance in meters between two WGS84 coordinates.

    Parameters
    ----------
    first, second : WGS84Coordinate
        End points.
    method : str
        One of ``vincenty`` (default), ``spherical``, ``haversine``,
        ``karney``.

    Raises
    ------
    ValueError
        For an unknown method name.
    """
    try:
        calculate = DISTANCE_METHODS[method.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown distance method {method!r}; expected one of {sorted(DISTANCE_METHODS)}"
        ) from None
    return calculate(first.latitude, first.longitude, second.latitude, second.longitude)


@validate_units({'return': 'm'})
def distance_quantity(
    first: WGS84Coordinate,
    second: WGS84Coordinate,
    method: str = "vincenty",
    unit: str = "m"
) -> pint.Quantity:
    """Distance as a pint quantity, converted to ``unit``.

    Examples
    --------
    >>> prague = WGS84Coordinate(50.0755, 14.4378)
    >>> brno = WGS84Coordinate(49.1951, 16.6068)
    >>> distance_quantity(prague, brno, unit="km").units
    <Unit('kilometer')>
    """
    return Q_(distance(first, second, method=method), "m").to(unit)

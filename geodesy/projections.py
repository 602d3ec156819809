"""
Map Projection Kernels for Central European Reference Systems.

This module contains the numeric core of every transformation: the
7-parameter Helmert datum shift, the Krovak double conformal conic
projection of S-JTSK, the Gauss-Krüger projection of S-42, the EMEP
polar-stereographic grid and the Transverse Mercator series behind UTM.

The kernels work on plain floats (radians or degrees as documented) and
know nothing about the coordinate value types; those are mapped onto the
kernels in :mod:`geodesy.transformations`.

Scientific Context
------------------
Domain: Cartography, mathematical geodesy
Model: Conformal projections with constants folded into numeric literals

The Krovak and Gauss-Krüger kernels follow published closed-form
derivations whose ellipsoid and projection parameters were pre-evaluated
into literals. The literals are kept verbatim; re-deriving them from the
defining parameters changes results in the last digits.

References
----------
- Hrdina, Z. (2002). Přepočet z S-JTSK do WGS-84.
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- Timár, G. et al. Gauss-Krüger inverse formulas for S-42 (Eötvös University).
- EMEP/MSC-W. Definition of the 50 km polar-stereographic grid.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from geodesy.ellipsoids import (
    BESSEL_1841,
    KRASOVSKY_1940,
    Ellipsoid,
    get_default_ellipsoid,
)


logger = get_logger(__name__)


# =========================================================================
# Helmert datum shift
# =========================================================================

@dataclass(frozen=True)
class HelmertParameters:
    """Seven-parameter similarity transform between geocentric frames.

    The transform is ``v' = t + s * R v`` with the small-angle rotation
    matrix::

        R = |  1   rz  -ry |
            | -rz   1   rx |
            |  ry  -rx   1 |

    Attributes
    ----------
    tx, ty, tz : float
        Translations in meters.
    scale : float
        Scale factor ``s`` (1 + ppm * 1e-6).
    rx, ry, rz : float
        Rotations in radians.
    """
    tx: float
    ty: float
    tz: float
    scale: float
    rx: float
    ry: float
    rz: float

    @property
    def rotation_matrix(self) -> NDArray[np.float64]:
        return np.array([
            [1.0, self.rz, -self.ry],
            [-self.rz, 1.0, self.rx],
            [self.ry, -self.rx, 1.0],
        ])


# Both directions are published parameter sets, not numeric inverses of each other
WGS84_TO_JTSK = HelmertParameters(
    tx=-570.69, ty=-85.69, tz=-462.84,
    scale=0.999996457,
    rx=0.00002423200589058494,
    ry=0.0000076928295663736721,
    rz=0.0000255065325768538,
)

JTSK_TO_WGS84 = HelmertParameters(
    tx=570.69, ty=85.69, tz=462.84,
    scale=1.000003543,
    rx=-0.00002423200589058494,
    ry=-0.0000076928295663736721,
    rz=-0.0000255065325768538,
)


def helmert_transform(
    X: float,
    Y: float,
    Z: float,
    params: HelmertParameters
) -> Tuple[float, float, float]:
    """Apply a Helmert transform to a geocentric point."""
    translated = np.array([params.tx, params.ty, params.tz])
    shifted = translated + params.scale * (params.rotation_matrix @ np.array([X, Y, Z]))
    return float(shifted[0]), float(shifted[1]), float(shifted[2])


# =========================================================================
# Krovak (S-JTSK), Hrdina variant
# =========================================================================

KROVAK_E = 0.081696831215303            # first eccentricity of Bessel 1841
KROVAK_N = 0.97992470462083             # cone constant
KROVAK_SIN_VQ = 0.420215144586493
KROVAK_COS_VQ = 0.907424504992097
KROVAK_ALPHA = 1.000597498371542        # ellipsoid -> Gauss sphere longitude ratio
KROVAK_K = 1.00685001861538
KROVAK_INVERSE_K = 1.003419163966575
KROVAK_SIN_UQ = 0.863499969506341       # oblique pole latitude on the sphere
KROVAK_COS_UQ = 0.504348889819882
KROVAK_RHO0 = 12310230.12797036         # cone radius constant [m]


def krovak_forward(latitude_rad: float, longitude_rad: float) -> Tuple[float, float]:
    """Project Bessel geodetic coordinates into S-JTSK (EPSG:2065 axes).

    Parameters
    ----------
    latitude_rad, longitude_rad : float
        Geodetic coordinates on the Bessel 1841 ellipsoid, longitude from
        Greenwich.

    Returns
    -------
    Tuple[float, float]
        (x, y): southing and westing in meters, both positive over the
        Czech Republic.
    """
    e = KROVAK_E
    sin_b = np.sin(latitude_rad)

    # Gauss conformal sphere
    t = KROVAK_K * np.exp(KROVAK_ALPHA * np.log(
        (1.0 + sin_b)**2 / (1.0 - sin_b**2)
        * np.exp(e * np.log((1.0 - e * sin_b) / (1.0 + e * sin_b)))
    ))
    sin_u = (t - 1.0) / (t + 1.0)
    cos_u = np.sqrt(1.0 - sin_u**2)
    v = KROVAK_ALPHA * longitude_rad

    # Oblique cartographic coordinates
    sin_s = KROVAK_SIN_UQ * sin_u + KROVAK_COS_UQ * cos_u * (
        KROVAK_COS_VQ * np.cos(v) + KROVAK_SIN_VQ * np.sin(v)
    )
    cos_s = np.sqrt(1.0 - sin_s**2)
    sin_d = (KROVAK_SIN_VQ * np.cos(v) - KROVAK_COS_VQ * np.sin(v)) * cos_u / cos_s
    d = np.arctan(sin_d / np.sqrt(1.0 - sin_d**2))

    # Cone
    rho = KROVAK_RHO0 * np.exp(-KROVAK_N * np.log((1.0 + sin_s) / cos_s))

    return float(rho * np.cos(KROVAK_N * d)), float(rho * np.sin(KROVAK_N * d))


def krovak_inverse(
    x: float,
    y: float,
    max_iterations: int = 100,
    tolerance: float = 1e-15
) -> Tuple[float, float]:
    """Invert the Krovak projection back to Bessel geodetic coordinates.

    The isometric-latitude relation has no closed-form inverse; ``sin B``
    is found by fixed-point iteration until two successive values differ
    by at most ``tolerance``. The iteration is contractive (factor about
    e²) and settles within a handful of steps; ``max_iterations`` only
    guards against oscillation in the last ulp.

    Parameters
    ----------
    x, y : float
        S-JTSK southing and westing in meters (EPSG:2065 axes).
    max_iterations : int
        Upper bound on fixed-point steps.
    tolerance : float
        Convergence threshold on ``sin B``.

    Returns
    -------
    Tuple[float, float]
        (latitude_rad, longitude_rad) on the Bessel 1841 ellipsoid.
    """
    e = KROVAK_E

    rho = np.sqrt(x**2 + y**2)
    d = 2.0 * np.arctan(y / (rho + x)) / KROVAK_N
    s = 2.0 * np.arctan(np.exp(np.log(KROVAK_RHO0 / rho) / KROVAK_N)) - np.pi / 2.0

    sin_u = KROVAK_SIN_UQ * np.sin(s) - KROVAK_COS_UQ * np.cos(s) * np.cos(d)
    cos_u = np.sqrt(1.0 - sin_u**2)
    sin_dv = np.sin(d) * np.cos(s) / cos_u
    cos_dv = np.sqrt(1.0 - sin_dv**2)
    longitude_rad = 2.0 * np.arctan(
        (KROVAK_SIN_VQ * cos_dv - KROVAK_COS_VQ * sin_dv)
        / (1.0 + KROVAK_COS_VQ * cos_dv + KROVAK_SIN_VQ * sin_dv)
    ) / KROVAK_ALPHA

    t = np.exp(2.0 / KROVAK_ALPHA * np.log((1.0 + sin_u) / cos_u / KROVAK_INVERSE_K))
    estimate = (t - 1.0) / (t + 1.0)
    sin_b = estimate

    for _ in range(max_iterations):
        sin_b = estimate
        estimate = t * np.exp(e * np.log((1.0 + e * sin_b) / (1.0 - e * sin_b)))
        estimate = (estimate - 1.0) / (estimate + 1.0)
        if np.abs(estimate - sin_b) <= tolerance:
            break
    else:
        logger.debug(
            "Krovak latitude iteration stopped after %d steps (delta=%.3e)",
            max_iterations, np.abs(estimate - sin_b)
        )

    latitude_rad = np.arctan(estimate / np.sqrt(1.0 - estimate**2))
    return float(latitude_rad), float(longitude_rad)


# =========================================================================
# Gauss-Krüger (S-42, zone 3)
# =========================================================================

S42_CENTRAL_MERIDIAN_RAD = 0.26179938779914941    # 15° E
S42_FALSE_EASTING = 3500123.2862402               # zone prefix + 500 km + datum offset
S42_NORTHING_OFFSET = 42.93530495                 # datum offset
S42_A5_CONSTANT = 0.57277466024809742
S42_A6_CONSTANT = 58.776286613154447


def _krasovsky_meridian_arc(latitude_rad: float) -> float:
    return (
        6367558.4970123032 * latitude_rad
        - 16036.479939776922 * np.sin(2.0 * latitude_rad)
        + 16.827654579200246 * np.sin(4.0 * latitude_rad)
        - 0.02179177355292761 * np.sin(6.0 * latitude_rad)
    )


def gauss_kruger_forward(latitude_rad: float, longitude_rad: float) -> Tuple[float, float]:
    """Project WGS84 coordinates into S-42 Gauss-Krüger zone 3.

    The WGS84 latitude and longitude are fed directly into the Krasovsky
    series; the datum difference is absorbed by the constant offsets of
    the false easting and northing, which holds at meter level across
    Central Europe.

    The higher-order terms use the published folded literals rather than
    Snyder's textbook form: ``85 e'²`` in the A⁵ term, ``61 - 330 e'²``
    in the A⁶ term, and ``A²`` where Snyder has ``T²`` in the A⁶ term.
    The difference is below a millimeter inside the zone.

    Returns
    -------
    Tuple[float, float]
        (x, y): easting with zone prefix and northing, in meters.
    """
    e2 = KRASOVSKY_1940.eccentricity_squared
    ep2 = KRASOVSKY_1940.second_eccentricity_squared
    phi = latitude_rad

    N = KRASOVSKY_1940.semi_major_axis / np.sqrt(1.0 - e2 * np.sin(phi)**2)
    T = np.tan(phi)**2
    C = ep2 * np.cos(phi)**2
    A = (longitude_rad - S42_CENTRAL_MERIDIAN_RAD) * np.cos(phi)
    M = _krasovsky_meridian_arc(phi)

    x = S42_FALSE_EASTING + N * (
        A
        + (1.0 - T + C) * A**3 / 6.0
        + (5.0 - 18.0 * T + T**2 + 72.0 * C - S42_A5_CONSTANT) * A**5 / 120.0
    )
    y = S42_NORTHING_OFFSET + M + N * np.tan(phi) * (
        A**2 / 2.0
        + (5.0 - T + 9.0 * C + 4.0 * C**2) * A**4 / 24.0
        + (S42_A6_CONSTANT - 58.0 * T + A**2 + 600.0 * C) * A**6 / 720.0
    )
    return float(x), float(y)


def s42_zone(x: float) -> int:
    """Gauss-Krüger zone number: the millions digit of the easting."""
    return int(np.trunc(x / 1_000_000.0))


def gauss_kruger_inverse(x: float, y: float) -> Tuple[float, float]:
    """Invert S-42 Gauss-Krüger coordinates to Krasovsky geodetic.

    The zone is taken from the millions digit of ``x``; its central
    meridian is ``6 * zone - 3`` degrees.

    Returns
    -------
    Tuple[float, float]
        (latitude_rad, longitude_rad) on the Krasovsky ellipsoid.
    """
    e2 = KRASOVSKY_1940.eccentricity_squared
    ep2 = KRASOVSKY_1940.second_eccentricity_squared
    zone = s42_zone(x)

    # Footpoint latitude
    phi1 = (
        y / 6367558.4970123032
        + 0.0025184647775237596 * np.sin(y / 3183779.2485061516)
        + 0.0000036998858962068768 * np.sin(y / 1591889.6242530758)
        + 0.0000000074446047831951984 * np.sin(y / 1061259.7495020505)
        + 0.000000000017026207045302084 * np.sin(y / 795944.8121265379)
    )

    C1 = ep2 * np.cos(phi1)**2
    T1 = np.tan(phi1)**2
    N1 = KRASOVSKY_1940.semi_major_axis / np.sqrt(1.0 - e2 * np.sin(phi1)**2)
    # a(1 - e²) divided by the meridian-radius factor gives R1
    R1 = 6335552.7170004258 / (1.0 - e2 * np.sin(phi1)**2)**1.5
    D = (x - (500_000.0 + zone * 1_000_000.0)) / N1

    latitude_rad = phi1 - N1 * np.tan(phi1) / R1 * (
        D**2 / 2.0
        - (5.0 + 3.0 * T1 + 10.0 * C1 - 4.0 * C1**2 - 9.0 * ep2) * D**4 / 24.0
        + (61.0 + 90.0 * T1 + 298.0 * C1 + 45.0 * T1**2 - 252.0 * ep2 - 3.0 * C1**2) * D**6 / 720.0
    )

    central_meridian = np.radians(6.0 * zone - 3.0)
    longitude_rad = central_meridian + (
        D
        - (1.0 + 2.0 * T1 + C1) * D**3 / 6.0
        + (5.0 - 2.0 * C1 + 28.0 * T1 - 3.0 * C1**2 + 8.0 * ep2 + 24.0 * T1**2) * D**5 / 120.0
    ) / np.cos(phi1)

    return float(latitude_rad), float(longitude_rad)


def molodensky_s42_to_wgs84(latitude_rad: float, longitude_rad: float) -> Tuple[float, float]:
    """Abridged Molodensky shift from the S-42 datum to WGS84.

    Uses the Czech S-42 translation (dX, dY, dZ) = (26, -121, -78) m.

    Returns
    -------
    Tuple[float, float]
        (latitude_deg, longitude_deg) in WGS84.
    """
    phi = latitude_rad
    lam = longitude_rad
    e2 = 0.0066934216229659329

    d_lat = (
        -26.0 * np.sin(phi) * np.cos(lam)
        + 121.0 * np.sin(phi) * np.sin(lam)
        - 78.0 * np.cos(phi)
        + 2.7045797937100424 * np.sin(2.0 * phi)
    ) / 110576.25484489677 * (1.0 - e2 * np.sin(phi)**2)**1.5
    d_lon = (
        (-26.0 * np.sin(lam) - 121.0 * np.cos(lam)) / 111321.37574842962
        * np.sqrt(1.0 - e2 * np.sin(phi)**2) / np.cos(phi)
    )

    return float(np.degrees(phi) + d_lat), float(np.degrees(lam) + d_lon)


# =========================================================================
# EMEP 50 x 50 km polar-stereographic grid
# =========================================================================

EMEP_GRID_SCALE = GeodeticConstants.emep_grid_scale()
EMEP_POLE_X = GeodeticConstants.EMEP_NORTH_POLE_X
EMEP_POLE_Y = GeodeticConstants.EMEP_NORTH_POLE_Y
EMEP_ROTATION_DEG = GeodeticConstants.EMEP_ROTATION_LONGITUDE.value


def polar_stereographic_forward(latitude_deg: float, longitude_deg: float) -> Tuple[float, float]:
    """Fractional EMEP grid position of a WGS84 point.

    Returns
    -------
    Tuple[float, float]
        (x, y) in grid units, not yet truncated to a cell index.
    """
    phi = np.radians(latitude_deg)
    delta = np.radians(longitude_deg - EMEP_ROTATION_DEG)
    r = EMEP_GRID_SCALE * np.tan(np.pi / 4.0 - phi / 2.0)

    return float(EMEP_POLE_X + r * np.sin(delta)), float(EMEP_POLE_Y - r * np.cos(delta))


def polar_stereographic_inverse(x: float, y: float) -> Tuple[float, float]:
    """WGS84 latitude and longitude (degrees) of an EMEP grid position."""
    dx = x - EMEP_POLE_X
    dy = EMEP_POLE_Y - y
    r = np.sqrt(dx**2 + dy**2)

    latitude_deg = 90.0 - 360.0 / np.pi * np.arctan(r / EMEP_GRID_SCALE)
    longitude_deg = EMEP_ROTATION_DEG + np.degrees(np.arctan2(dx, dy))

    return float(latitude_deg), float(longitude_deg)


# =========================================================================
# Transverse Mercator (UTM)
# =========================================================================

UTM_SCALE_FACTOR = GeodeticConstants.UTM_SCALE_FACTOR.value
UTM_FALSE_EASTING = GeodeticConstants.UTM_FALSE_EASTING.value
UTM_SOUTHERN_FALSE_NORTHING = GeodeticConstants.UTM_SOUTHERN_FALSE_NORTHING.value

UTM_ZONE_LETTERS = "CDEFGHJKLMNPQRSTUVWX"


def utm_central_meridian(zone_number: int) -> float:
    """Central meridian of a UTM zone in degrees."""
    return (zone_number - 1) * 6.0 - 180.0 + 3.0


def utm_zone_number(latitude: float, longitude: float) -> int:
    """UTM zone number of a WGS84 point, honoring the Norway and Svalbard exceptions.

    Examples
    --------
    >>> utm_zone_number(60.5, 6.0)
    32
    >>> utm_zone_number(0.0, 179.9)
    60
    """
    if 8.0 <= longitude <= 13.0 and 54.5 < latitude < 58.0:
        return 32

    if 56.0 <= latitude < 64.0 and 3.0 <= longitude < 12.0:
        return 32

    if 72.0 <= latitude < 84.0:
        if 0.0 <= longitude < 9.0:
            return 31
        if 9.0 <= longitude < 21.0:
            return 33
        if 21.0 <= longitude < 33.0:
            return 35
        if 33.0 <= longitude < 42.0:
            return 37

    return int((longitude + 180.0) / 6.0) + 1


def utm_zone_letter(latitude: float) -> str:
    """Latitude band letter; ``"Z"`` outside [-80°, 84°]."""
    if not -80.0 <= latitude <= 84.0:
        return "Z"
    return UTM_ZONE_LETTERS[min(int((latitude + 80.0) // 8.0), len(UTM_ZONE_LETTERS) - 1)]


def transverse_mercator_forward(
    latitude_deg: float,
    longitude_deg: float,
    central_meridian_deg: float,
    ellipsoid: Ellipsoid,
    scale_factor: float = UTM_SCALE_FACTOR,
    false_easting: float = UTM_FALSE_EASTING
) -> Tuple[float, float]:
    """Transverse Mercator series (Snyder 8-9 ... 8-10).

    Returns
    -------
    Tuple[float, float]
        (easting, northing) in meters; the northing carries no false
        northing.
    """
    a = ellipsoid.semi_major_axis
    e2 = ellipsoid.eccentricity_squared
    ep2 = ellipsoid.second_eccentricity_squared
    e4 = e2 * e2
    e6 = e4 * e2

    phi = np.radians(latitude_deg)
    sin_phi = np.sin(phi)
    cos_phi = np.cos(phi)
    tan_phi = np.tan(phi)

    N = a / np.sqrt(1.0 - e2 * sin_phi**2)
    T = tan_phi**2
    C = ep2 * cos_phi**2
    A = cos_phi * np.radians(longitude_deg - central_meridian_deg)
    M = a * (
        (1.0 - e2 / 4.0 - 3.0 * e4 / 64.0 - 5.0 * e6 / 256.0) * phi
        - (3.0 * e2 / 8.0 + 3.0 * e4 / 32.0 + 45.0 * e6 / 1024.0) * np.sin(2.0 * phi)
        + (15.0 * e4 / 256.0 + 45.0 * e6 / 1024.0) * np.sin(4.0 * phi)
        - (35.0 * e6 / 3072.0) * np.sin(6.0 * phi)
    )

    easting = false_easting + scale_factor * N * (
        A
        + (1.0 - T + C) * A**3 / 6.0
        + (5.0 - 18.0 * T + T**2 + 72.0 * C - 58.0 * ep2) * A**5 / 120.0
    )
    northing = scale_factor * (M + N * tan_phi * (
        A**2 / 2.0
        + (5.0 - T + 9.0 * C + 4.0 * C**2) * A**4 / 24.0
        + (61.0 - 58.0 * T + T**2 + 600.0 * C - 330.0 * ep2) * A**6 / 720.0
    ))
    return float(easting), float(northing)


def transverse_mercator_inverse(
    easting: float,
    northing: float,
    central_meridian_deg: float,
    ellipsoid: Ellipsoid,
    scale_factor: float = UTM_SCALE_FACTOR,
    false_easting: float = UTM_FALSE_EASTING
) -> Tuple[float, float]:
    """Inverse Transverse Mercator series through the footpoint latitude.

    ``northing`` must already have any false northing removed.

    Returns
    -------
    Tuple[float, float]
        (latitude_deg, longitude_deg)
    """
    a = ellipsoid.semi_major_axis
    e2 = ellipsoid.eccentricity_squared
    ep2 = ellipsoid.second_eccentricity_squared
    e4 = e2 * e2
    e6 = e4 * e2
    e1 = (1.0 - np.sqrt(1.0 - e2)) / (1.0 + np.sqrt(1.0 - e2))

    mu = northing / scale_factor / (a * (1.0 - e2 / 4.0 - 3.0 * e4 / 64.0 - 5.0 * e6 / 256.0))
    phi1 = (
        mu
        + (3.0 * e1 / 2.0 - 27.0 * e1**3 / 32.0) * np.sin(2.0 * mu)
        + (21.0 * e1**2 / 16.0 - 55.0 * e1**4 / 32.0) * np.sin(4.0 * mu)
        + (151.0 * e1**3 / 96.0) * np.sin(6.0 * mu)
        + (1097.0 * e1**4 / 512.0) * np.sin(8.0 * mu)
    )

    sin_phi1 = np.sin(phi1)
    cos_phi1 = np.cos(phi1)
    N1 = a / np.sqrt(1.0 - e2 * sin_phi1**2)
    R1 = a * (1.0 - e2) / (1.0 - e2 * sin_phi1**2)**1.5
    T1 = np.tan(phi1)**2
    C1 = ep2 * cos_phi1**2
    D = (easting - false_easting) / (N1 * scale_factor)

    phi = phi1 - N1 * np.tan(phi1) / R1 * (
        D**2 / 2.0
        - (5.0 + 3.0 * T1 + 10.0 * C1 - 4.0 * C1**2 - 9.0 * ep2) * D**4 / 24.0
        + (61.0 + 90.0 * T1 + 298.0 * C1 + 45.0 * T1**2 - 252.0 * ep2 - 3.0 * C1**2) * D**6 / 720.0
    )
    lam = (
        D
        - (1.0 + 2.0 * T1 + C1) * D**3 / 6.0
        + (5.0 - 2.0 * C1 + 28.0 * T1 - 3.0 * C1**2 + 8.0 * ep2 + 24.0 * T1**2) * D**5 / 120.0
    ) / cos_phi1

    return float(np.degrees(phi)), float(central_meridian_deg + np.degrees(lam))


# =========================================================================
# Projection adapters
# =========================================================================

class ProjectionAdapter(ABC):
    """Abstract base class for map projection adapters.

    Gives every kernel of this module the same radians-in, plane-out
    interface so that batch helpers and tests can treat them uniformly.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @property
    @abstractmethod
    def preserves_angles(self) -> bool:
        """Whether this is a conformal projection."""
        pass

    @property
    def preserves_area(self) -> bool:
        """Whether this is an equal-area projection."""
        return False

    @abstractmethod
    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        """Transform geodetic coordinates to projected coordinates.

        Parameters
        ----------
        lat_rad, lon_rad : float
            Geodetic coordinates in radians.

        Returns
        -------
        Tuple[float, float]
            (x, y) projected coordinates.
        """
        pass

    @abstractmethod
    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        """Transform projected coordinates to geodetic.

        Returns
        -------
        Tuple[float, float]
            (lat_rad, lon_rad) geodetic coordinates in radians.
        """
        pass


class KrovakProjection(ProjectionAdapter):
    """Krovak double conformal conic projection on Bessel 1841.

    Geodetic input and output refer to the S-JTSK datum, not WGS84.
    """

    def __init__(self, max_iterations: int = 100, tolerance: float = 1e-15):
        self._max_iterations = max_iterations
        self._tolerance = tolerance

    @property
    def name(self) -> str:
        return "Krovak (S-JTSK, Bessel 1841)"

    @property
    def preserves_angles(self) -> bool:
        return True

    @property
    def ellipsoid(self) -> Ellipsoid:
        return BESSEL_1841

    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        return krovak_forward(lat_rad, lon_rad)

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        return krovak_inverse(x, y, self._max_iterations, self._tolerance)


class GaussKrugerS42Projection(ProjectionAdapter):
    """S-42 Gauss-Krüger with the WGS84 datum shift folded in.

    Geodetic input and output are WGS84. The forward direction always
    produces zone 3; the inverse honors the zone encoded in ``x``.
    """

    @property
    def name(self) -> str:
        return "Gauss-Krüger (S-42, Krasovsky 1940)"

    @property
    def preserves_angles(self) -> bool:
        return True

    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        return gauss_kruger_forward(lat_rad, lon_rad)

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        lat_deg, lon_deg = molodensky_s42_to_wgs84(*gauss_kruger_inverse(x, y))
        return float(np.radians(lat_deg)), float(np.radians(lon_deg))


class EMEPPolarStereographic(ProjectionAdapter):
    """EMEP 50 km polar-stereographic grid, in fractional grid units."""

    @property
    def name(self) -> str:
        return "EMEP 50x50 km polar stereographic"

    @property
    def preserves_angles(self) -> bool:
        return True

    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        return polar_stereographic_forward(np.degrees(lat_rad), np.degrees(lon_rad))

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        lat_deg, lon_deg = polar_stereographic_inverse(x, y)
        return float(np.radians(lat_deg)), float(np.radians(lon_deg))


class TransverseMercator(ProjectionAdapter):
    """UTM-style Transverse Mercator for one zone.

    Parameters
    ----------
    zone_number : int
        UTM zone; fixes the central meridian.
    southern : bool
        Apply the 10 000 km false northing of the southern hemisphere.
    ellipsoid : Ellipsoid, optional
        Defaults to the registry's default ellipsoid (WGS 84).
    """

    def __init__(
        self,
        zone_number: int,
        southern: bool = False,
        ellipsoid: Optional[Ellipsoid] = None
    ):
        self._zone_number = zone_number
        self._southern = southern
        self._ellipsoid = ellipsoid if ellipsoid is not None else get_default_ellipsoid()
        self._central_meridian = utm_central_meridian(zone_number)

    @property
    def name(self) -> str:
        hemisphere = "S" if self._southern else "N"
        return f"Transverse Mercator (UTM {self._zone_number}{hemisphere}, CM={self._central_meridian}°)"

    @property
    def preserves_angles(self) -> bool:
        return True

    @property
    def zone_number(self) -> int:
        return self._zone_number

    @property
    def false_northing(self) -> float:
        return UTM_SOUTHERN_FALSE_NORTHING if self._southern else 0.0

    def to_projected(self, lat_rad: float, lon_rad: float) -> Tuple[float, float]:
        easting, northing = transverse_mercator_forward(
            np.degrees(lat_rad), np.degrees(lon_rad), self._central_meridian, self._ellipsoid
        )
        return easting, northing + self.false_northing

    def to_geodetic(self, x: float, y: float) -> Tuple[float, float]:
        lat_deg, lon_deg = transverse_mercator_inverse(
            x, y - self.false_northing, self._central_meridian, self._ellipsoid
        )
        return float(np.radians(lat_deg)), float(np.radians(lon_deg))

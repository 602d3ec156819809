"""
Geodetic Constants for Central European Coordinate Transformations.

This module provides the numeric constants used by the transformation
engine, each with its uncertainty bound and source. All lengths are in
meters, all angles in degrees unless the description says otherwise.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- Bessel 1841 / S-JTSK: CUZK, "Souradnicove systemy" (S-JTSK definition)
- Krasovsky 1940 / S-42: GOST 51794-2001
- EMEP grid: EMEP/CEIP reporting guidelines (ECE/EB.AIR/125)
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of geodetic constants used throughout the system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Reference Ellipsoids
    --------------------
    Precise parameters of the three ellipsoids the closed-form
    transformations are built on: WGS84 (GPS), Bessel 1841 (S-JTSK)
    and Krasovsky 1940 (S-42).

    Grids
    -----
    Constants defining the EMEP polar-stereographic and geodetic grids.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_ECCENTRICITY_SQUARED: Final[Constant] = Constant(
        value=0.00669437999014133,
        uncertainty=1e-14,
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2 (derived)",
        description="First eccentricity squared: e² = (a² - b²) / a²"
    )

    WGS84_SEMI_MINOR_AXIS: Final[Constant] = Constant(
        value=6_356_752.3142,
        uncertainty=0.0001,
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-minor axis (polar radius) as used by the Vincenty inverse"
    )

    WGS84_FLATTENING: Final[Constant] = Constant(
        value=0.0033528106647474805,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = 1 / 298.257223563"
    )

    # =========================================================================
    # Bessel 1841 Ellipsoid (datum of S-JTSK)
    # =========================================================================

    BESSEL_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_377_397.15508,
        uncertainty=0.0,
        unit="m",
        source="Bessel 1841, CUZK S-JTSK definition",
        description="Semi-major axis of the Bessel 1841 ellipsoid"
    )

    BESSEL_ECCENTRICITY_SQUARED: Final[Constant] = Constant(
        value=0.0066743722306217279,
        uncertainty=1e-15,
        unit="dimensionless",
        source="Bessel 1841, CUZK S-JTSK definition",
        description="First eccentricity squared of the Bessel 1841 ellipsoid"
    )

    # =========================================================================
    # Krasovsky 1940 Ellipsoid (datum of S-42 / Pulkovo 1942)
    # =========================================================================

    KRASOVSKY_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_245.0,
        uncertainty=0.0,
        unit="m",
        source="Krasovsky 1940, GOST 51794-2001",
        description="Semi-major axis of the Krasovsky ellipsoid"
    )

    KRASOVSKY_ECCENTRICITY_SQUARED: Final[Constant] = Constant(
        value=0.0066934216229659511,
        uncertainty=1e-15,
        unit="dimensionless",
        source="Krasovsky 1940, GOST 51794-2001",
        description="First eccentricity squared of the Krasovsky ellipsoid"
    )

    # =========================================================================
    # Spherical Earth
    # =========================================================================

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_008.8,
        uncertainty=0.1,
        unit="m",
        source="IUGG mean radius",
        description="Mean radius of Earth (haversine distance)"
    )

    SPHERICAL_EARTH_RADIUS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=900.0,  # Documented worst-case distance error
        unit="m",
        source="geodatasource.com great-circle routine",
        description="Sphere radius of the law-of-cosines distance"
    )

    # =========================================================================
    # EMEP 50x50 km polar-stereographic grid
    # =========================================================================

    EMEP_EARTH_RADIUS: Final[Constant] = Constant(
        value=6370.0,
        uncertainty=0.0,  # Defined exactly
        unit="km",
        source="EMEP/MSC-W grid definition",
        description="Earth radius of the EMEP polar-stereographic grid"
    )

    EMEP_GRID_SIZE: Final[Constant] = Constant(
        value=50.0,
        uncertainty=0.0,
        unit="km",
        source="EMEP/MSC-W grid definition",
        description="Cell size of the EMEP grid at the reference latitude"
    )

    EMEP_REFERENCE_LATITUDE: Final[Constant] = Constant(
        value=60.0,
        uncertainty=0.0,
        unit="degree",
        source="EMEP/MSC-W grid definition",
        description="Latitude of true scale of the EMEP grid"
    )

    EMEP_ROTATION_LONGITUDE: Final[Constant] = Constant(
        value=-32.0,
        uncertainty=0.0,
        unit="degree",
        source="EMEP/MSC-W grid definition",
        description="Longitude parallel to the grid Y axis"
    )

    EMEP_NORTH_POLE_X: Final[int] = 8
    EMEP_NORTH_POLE_Y: Final[int] = 110

    EMEP_01_GRID_HALF_SIZE: Final[Constant] = Constant(
        value=0.05,
        uncertainty=0.0,
        unit="degree",
        source="ECE/EB.AIR/125, art. 14, 28, 47-50",
        description="Half of the edge of an EMEP 0.1° x 0.1° cell"
    )

    # =========================================================================
    # UTM
    # =========================================================================

    UTM_SCALE_FACTOR: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor on the central meridian of a UTM zone"
    )

    UTM_FALSE_EASTING: Final[Constant] = Constant(
        value=500_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False easting of every UTM zone"
    )

    UTM_SOUTHERN_FALSE_NORTHING: Final[Constant] = Constant(
        value=10_000_000.0,
        uncertainty=0.0,
        unit="m",
        source="DMA TM 8358.2",
        description="False northing applied in the southern hemisphere"
    )

    @staticmethod
    def emep_grid_scale() -> float:
        """Number of EMEP grid cells between the North Pole and the equator.

        Returns
        -------
        float
            M = R / d * (1 + sin(φ0)) for R = 6370 km, d = 50 km, φ0 = 60°.
        """
        radius = GeodeticConstants.EMEP_EARTH_RADIUS.value
        size = GeodeticConstants.EMEP_GRID_SIZE.value
        phi0 = np.radians(GeodeticConstants.EMEP_REFERENCE_LATITUDE.value)
        return float(radius / size * (1.0 + np.sin(phi0)))

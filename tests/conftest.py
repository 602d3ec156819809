"""
Pytest configuration and shared fixtures for the geodesy tests.

This module provides fixtures for:
- Well-known Czech reference points
- Seeded random generators for property-style tests
- A regular grid of points covering the Czech Republic
"""

from typing import List

import numpy as np
import pytest

from geodesy.coordinate_models import WGS84Coordinate


# Bounding box of the Czech Republic (degrees)
CZ_LAT_MIN, CZ_LAT_MAX = 48.6, 51.0
CZ_LON_MIN, CZ_LON_MAX = 12.2, 18.8


# ==============================================================================
# REFERENCE POINTS
# ==============================================================================

@pytest.fixture
def prague() -> WGS84Coordinate:
    return WGS84Coordinate(50.0755, 14.4378)


@pytest.fixture
def brno() -> WGS84Coordinate:
    return WGS84Coordinate(49.1951, 16.6068)


@pytest.fixture
def ostrava() -> WGS84Coordinate:
    """Lies in UTM zone 34, east of the 18° E zone boundary."""
    return WGS84Coordinate(49.8209, 18.2625)


# ==============================================================================
# GENERATED INPUTS
# ==============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240917)


@pytest.fixture
def czech_grid() -> List[WGS84Coordinate]:
    """7 x 7 grid of points spanning the Czech bounding box."""
    latitudes = np.linspace(CZ_LAT_MIN, CZ_LAT_MAX, 7)
    longitudes = np.linspace(CZ_LON_MIN, CZ_LON_MAX, 7)
    return [
        WGS84Coordinate(float(lat), float(lon))
        for lat in latitudes
        for lon in longitudes
    ]

"""Tests for ellipsoidal and spherical distances."""

import numpy as np
import pytest

from common.units import ureg
from geodesy.coordinate_models import WGS84Coordinate
from geodesy.distance_calculations import (
    DISTANCE_METHODS,
    distance,
    distance_quantity,
    geodesic_distance,
    haversine_distance,
    karney_distance,
    spherical_distance,
    vincenty_inverse,
)


class TestVincenty:

    def test_prague_brno(self, prague, brno):
        d = distance(prague, brno)
        assert 184_000 < d < 186_000

    def test_converges_for_ordinary_points(self, prague, brno):
        result = vincenty_inverse(prague.latitude, prague.longitude, brno.latitude, brno.longitude)
        assert result.converged
        assert 1 < result.iterations <= 20

    def test_coincident_points(self, prague):
        result = vincenty_inverse(prague.latitude, prague.longitude, prague.latitude, prague.longitude)
        assert result.distance_m == 0.0
        assert result.converged

    def test_symmetric(self, prague, brno):
        assert distance(prague, brno) == pytest.approx(distance(brno, prague), abs=1e-6)

    def test_one_degree_of_longitude_on_equator(self):
        # a * pi / 180
        assert geodesic_distance(0.0, 0.0, 0.0, 1.0) == pytest.approx(111_319.4908, abs=1e-3)

    def test_nearly_antipodal_points_return_estimate(self):
        result = vincenty_inverse(0.0, 0.0, 0.5, 179.7)
        assert not result.converged
        assert result.iterations == 20
        assert np.isfinite(result.distance_m)

    def test_agrees_with_karney(self, czech_grid, prague):
        for point in czech_grid:
            assert geodesic_distance(
                prague.latitude, prague.longitude, point.latitude, point.longitude
            ) == pytest.approx(
                karney_distance(prague.latitude, prague.longitude, point.latitude, point.longitude),
                abs=0.01,
            )


class TestSphericalApproximations:

    def test_spherical_within_900_m(self, prague, brno):
        ellipsoidal = distance(prague, brno)
        assert abs(distance(prague, brno, method="spherical") - ellipsoidal) < 900

    def test_haversine_close_to_ellipsoid(self, prague, brno):
        assert distance(prague, brno, method="haversine") == pytest.approx(distance(prague, brno), rel=5e-3)

    def test_spherical_identical_points(self):
        assert spherical_distance(49.5, 18.25, 49.5, 18.25) == pytest.approx(0.0, abs=0.5)
        assert haversine_distance(49.5, 18.25, 49.5, 18.25) == 0.0


class TestDispatch:

    def test_known_methods(self):
        assert set(DISTANCE_METHODS) == {"vincenty", "spherical", "haversine", "karney"}

    def test_method_name_is_case_insensitive(self, prague, brno):
        assert distance(prague, brno, method="Vincenty") == distance(prague, brno)

    def test_unknown_method(self, prague, brno):
        with pytest.raises(ValueError, match="Unknown distance method"):
            distance(prague, brno, method="manhattan")

    def test_coordinate_method(self, prague, brno):
        assert prague.distance_to(brno) == distance(prague, brno)


class TestQuantity:

    def test_kilometers(self, prague, brno):
        d = distance_quantity(prague, brno, unit="km")
        assert d.units == ureg.kilometer
        assert d.magnitude == pytest.approx(distance(prague, brno) / 1000.0)

    def test_default_meters(self):
        d = distance_quantity(WGS84Coordinate(0.0, 0.0), WGS84Coordinate(0.0, 1.0))
        assert d.to("m").magnitude == pytest.approx(111_319.4908, abs=1e-3)

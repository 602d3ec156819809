"""Tests for the transformation engine and the projection kernels."""

import numpy as np
import pytest

from geodesy.coordinate_models import (
    EMEPGrid01x01Coordinate,
    EMEPGrid50x50Coordinate,
    JTSK2065Coordinate,
    JTSK5514Coordinate,
    S42Coordinate,
    UTMCoordinate,
    UTMZoneCoordinate,
    WGS84Coordinate,
    gridable,
    is_gridable,
)
from geodesy.ellipsoids import get_ellipsoid
from geodesy.projections import (
    EMEPPolarStereographic,
    GaussKrugerS42Projection,
    KrovakProjection,
    TransverseMercator,
    gauss_kruger_inverse,
    krovak_inverse,
    polar_stereographic_forward,
    polar_stereographic_inverse,
    utm_central_meridian,
    utm_zone_letter,
    utm_zone_number,
)
from geodesy.transformations import (
    emep_grid_01x01_from_lat_lon,
    jtsk2065_to_wgs84,
    transform,
    wgs84_to_utm,
    wgs84_to_utm_zone,
)


# ==============================================================================
# S-JTSK
# ==============================================================================

class TestJTSK:

    def test_prague_is_in_expected_range(self, prague):
        jtsk = prague.jtsk2065
        assert 1_030_000 < jtsk.x < 1_060_000
        assert 730_000 < jtsk.y < 750_000

    def test_round_trip_over_czech_republic(self, czech_grid):
        for point in czech_grid:
            back = point.jtsk2065.wgs84
            assert back.latitude == pytest.approx(point.latitude, abs=1e-6)
            assert back.longitude == pytest.approx(point.longitude, abs=1e-6)

    def test_5514_round_trip(self, czech_grid):
        for point in czech_grid:
            back = point.jtsk5514.wgs84
            assert back.latitude == pytest.approx(point.latitude, abs=1e-6)
            assert back.longitude == pytest.approx(point.longitude, abs=1e-6)

    def test_5514_axes_are_negative(self, brno):
        jtsk = brno.jtsk5514
        assert jtsk.x < 0
        assert jtsk.y < 0

    def test_reflection_is_exact(self, rng):
        for x, y in rng.uniform(400_000, 1_300_000, (100, 2)):
            negative = JTSK2065Coordinate(float(x), float(y)).jtsk5514
            assert negative.x == -y
            assert negative.y == -x
            assert negative.jtsk2065 == JTSK2065Coordinate(float(x), float(y))

    def test_forward_matches_reflected_forward(self, prague):
        positive = prague.jtsk2065
        negative = prague.jtsk5514
        assert negative.x == -positive.y
        assert negative.y == -positive.x

    def test_iteration_bounds_are_configurable(self, prague):
        jtsk = prague.jtsk2065
        default = jtsk2065_to_wgs84(jtsk)
        capped = jtsk2065_to_wgs84(jtsk, max_iterations=1)
        assert capped.latitude != pytest.approx(default.latitude, abs=1e-9)
        assert capped.longitude == pytest.approx(default.longitude, abs=1e-6)

    def test_zero_iterations_still_returns_a_point(self):
        latitude_rad, longitude_rad = krovak_inverse(1_045_000.0, 740_000.0, max_iterations=0)
        assert np.isfinite(latitude_rad)
        assert np.isfinite(longitude_rad)

    def test_text(self):
        assert str(JTSK2065Coordinate(1045000.5, 740000.25)) == "JTSK2065: 740000.25m; 1045000.5m"
        assert str(JTSK5514Coordinate(-740000.25, -1045000.5)) == "JTSK5514: -740000.25m; -1045000.5m"

    def test_construction_is_permissive(self):
        odd = JTSK2065Coordinate(-5.0, 1e9)
        assert odd.jtsk5514 == JTSK5514Coordinate(-1e9, 5.0)


# ==============================================================================
# S-42
# ==============================================================================

class TestS42:

    def test_prague_is_in_zone_3(self, prague):
        s42 = prague.s42
        assert s42.zone == 3
        assert 3_400_000 < s42.x < 3_500_000
        assert 5_540_000 < s42.y < 5_560_000

    def test_round_trip_over_czech_republic(self, czech_grid):
        for point in czech_grid:
            back = point.s42.wgs84
            assert back.latitude == pytest.approx(point.latitude, abs=1e-4)
            assert back.longitude == pytest.approx(point.longitude, abs=1e-4)

    def test_forward_uses_folded_series(self, brno):
        phi, lam = brno.latitude_rad, brno.longitude_rad
        n = 6378245.0 / np.sqrt(1.0 - 0.0066934216229659511 * np.sin(phi)**2)
        t = np.tan(phi)**2
        c = 0.0067385254146834989 * np.cos(phi)**2
        a = (lam - 0.26179938779914941) * np.cos(phi)
        m = (
            6367558.4970123032 * phi
            - 16036.479939776922 * np.sin(2.0 * phi)
            + 16.827654579200246 * np.sin(4.0 * phi)
            - 0.02179177355292761 * np.sin(6.0 * phi)
        )
        x = 3500123.2862402 + n * (
            a + (1.0 - t + c) * a**3 / 6.0
            + (5.0 - 18.0 * t + t**2 + 72.0 * c - 0.57277466024809742) * a**5 / 120.0
        )
        y = 42.93530495 + m + n * np.tan(phi) * (
            a**2 / 2.0
            + (5.0 - t + 9.0 * c + 4.0 * c**2) * a**4 / 24.0
            + (58.776286613154447 - 58.0 * t + a**2 + 600.0 * c) * a**6 / 720.0
        )
        s42 = brno.s42
        assert s42.x == pytest.approx(x, abs=1e-6)
        assert s42.y == pytest.approx(y, abs=1e-6)

    def test_zone_is_millions_digit(self):
        assert S42Coordinate(3_456_789.0, 5_500_000.0).zone == 3
        assert S42Coordinate(4_500_000.0, 5_500_000.0).zone == 4

    def test_inverse_uses_zone_central_meridian(self):
        _, longitude_rad = gauss_kruger_inverse(4_500_000.0, 5_500_000.0)
        assert np.degrees(longitude_rad) == pytest.approx(21.0)

    def test_text(self):
        assert str(S42Coordinate(3456789.5, 5551234.25)) == "S42: 3456789.5m; 5551234.25m"


# ==============================================================================
# EMEP grids
# ==============================================================================

class TestEMEP50x50:

    def test_prague_cell(self):
        assert WGS84Coordinate(50.08, 14.42).emep_grid_50x50 == EMEPGrid50x50Coordinate(70, 50)

    def test_forward_truncates(self):
        x, y = polar_stereographic_forward(50.08, 14.42)
        assert x == pytest.approx(70.5, abs=0.1)
        assert y == pytest.approx(50.5, abs=0.1)

    def test_grid_position_to_wgs84(self):
        position = EMEPGrid50x50Coordinate(70, 50).wgs84
        assert position.latitude == pytest.approx(50.1086, abs=0.01)
        assert position.longitude == pytest.approx(13.9377, abs=0.01)

    def test_pole(self):
        pole = EMEPGrid50x50Coordinate(
            EMEPGrid50x50Coordinate.NORTH_POLE_X, EMEPGrid50x50Coordinate.NORTH_POLE_Y
        ).wgs84
        assert pole.latitude == pytest.approx(90.0)
        assert pole.longitude == pytest.approx(-32.0)

    @pytest.mark.parametrize("x, y", [(70.5, 50.5), (20.0, 20.0), (120.0, 80.0)])
    def test_fractional_round_trip(self, x, y):
        fx, fy = polar_stereographic_forward(*polar_stereographic_inverse(x, y))
        assert fx == pytest.approx(x, abs=1e-9)
        assert fy == pytest.approx(y, abs=1e-9)

    def test_text(self):
        assert str(EMEPGrid50x50Coordinate(70, 50)) == "EMEP 50x50: 70; 50"


class TestEMEP01x01:

    def test_gridable(self):
        assert gridable(18.15) == pytest.approx(18.15)
        assert gridable(18.17) == pytest.approx(18.15)
        assert gridable(49.0) == pytest.approx(49.05)
        assert is_gridable(18.15)
        assert not is_gridable(18.17)

    def test_validity(self):
        assert EMEPGrid01x01Coordinate(49.05, 18.15).is_valid
        assert EMEPGrid01x01Coordinate(18.15, 49.05).is_valid
        assert not EMEPGrid01x01Coordinate(18.17, 49.05).is_valid

    def test_cell_of_point(self, brno):
        cell = brno.emep_grid_01x01
        assert cell.is_valid
        assert cell.latitude == pytest.approx(49.15)
        assert cell.longitude == pytest.approx(16.65)
        assert emep_grid_01x01_from_lat_lon(49.1951, 16.6068) == cell

    def test_corners_clockwise_from_top_left(self):
        corners = EMEPGrid01x01Coordinate(49.05, 18.15).corners
        expected = [(49.1, 18.1), (49.1, 18.2), (49.0, 18.2), (49.0, 18.1)]
        for corner, (lat, lon) in zip(corners, expected):
            assert corner.latitude == pytest.approx(lat)
            assert corner.longitude == pytest.approx(lon)

    def test_center_is_wgs84(self):
        assert EMEPGrid01x01Coordinate(49.05, 18.15).wgs84 == WGS84Coordinate(49.05, 18.15)

    def test_text(self):
        assert str(EMEPGrid01x01Coordinate(49.05, 18.15)) == "EMEP 0.1°x0.1°: 49.05; 18.15"
        assert str(EMEPGrid01x01Coordinate(49.05, 18.17)) == "EMEP 0.1°x0.1°: 49.05; 18.17 (invalid)"


# ==============================================================================
# UTM
# ==============================================================================

class TestUTMZones:

    @pytest.mark.parametrize("latitude, longitude, zone", [
        (60.5, 6.0, 32),
        (0.0, -179.9, 1),
        (0.0, 179.9, 60),
        (50.0755, 14.4378, 33),
        (49.8209, 18.2625, 34),
        (78.0, 5.0, 31),
        (78.0, 10.0, 33),
        (78.0, 25.0, 35),
        (78.0, 35.0, 37),
        (56.0, 10.0, 32),
    ])
    def test_zone_number(self, latitude, longitude, zone):
        assert utm_zone_number(latitude, longitude) == zone

    @pytest.mark.parametrize("latitude, letter", [
        (50.0, "U"),
        (-80.0, "C"),
        (0.0, "N"),
        (-0.1, "M"),
        (72.0, "X"),
        (84.0, "X"),
        (84.5, "Z"),
        (-80.5, "Z"),
    ])
    def test_zone_letter(self, latitude, letter):
        assert utm_zone_letter(latitude) == letter

    def test_central_meridian(self):
        assert utm_central_meridian(33) == 15.0
        assert utm_central_meridian(1) == -177.0


class TestUTM:

    def test_prague(self, prague):
        utm = prague.utm
        assert utm.zone == "33U"
        assert 450_000 < utm.easting < 470_000
        assert 5_540_000 < utm.northing < 5_560_000

    def test_round_trip(self, czech_grid):
        for point in czech_grid:
            back = point.utm.wgs84
            assert back.latitude == pytest.approx(point.latitude, abs=1e-6)
            assert back.longitude == pytest.approx(point.longitude, abs=1e-6)

    def test_southern_hemisphere(self):
        cape_town = WGS84Coordinate(-33.9249, 18.4241)
        utm = cape_town.utm
        assert utm.zone == "34H"
        assert utm.is_southern
        assert 6_000_000 < utm.northing < 6_500_000
        back = utm.wgs84
        assert back.latitude == pytest.approx(cape_town.latitude, abs=1e-6)
        assert back.longitude == pytest.approx(cape_town.longitude, abs=1e-6)

    def test_forced_zone_keeps_one_plane(self, ostrava):
        forced = ostrava.utm33n
        assert forced.zone_number == 33
        assert forced.x > ostrava.utm_in_zone(34).x
        back = forced.wgs84
        assert back.latitude == pytest.approx(ostrava.latitude, abs=1e-6)
        assert back.longitude == pytest.approx(ostrava.longitude, abs=1e-6)

    def test_forced_zone_south_of_equator(self):
        cape_town = WGS84Coordinate(-33.9249, 18.4241)
        forced = wgs84_to_utm_zone(cape_town, 34)
        assert forced.southern
        assert forced.y == pytest.approx(cape_town.utm.northing, abs=1e-6)
        assert forced.x == pytest.approx(cape_town.utm.easting, abs=1e-6)
        back = forced.wgs84
        assert back.latitude == pytest.approx(cape_town.latitude, abs=1e-6)
        assert back.longitude == pytest.approx(cape_town.longitude, abs=1e-6)

    def test_forced_zone_north_has_no_false_northing(self, prague):
        assert not prague.utm33n.southern
        assert prague.utm33n.y == pytest.approx(prague.utm.northing, abs=1e-6)

    @pytest.mark.parametrize("latitude", [-85.0, 85.0])
    def test_polar_band_round_trip(self, latitude):
        point = WGS84Coordinate(latitude, 10.0)
        utm = point.utm
        assert utm.zone_letter == "Z"
        assert utm.is_southern == (latitude < 0)
        back = utm.wgs84
        assert back.latitude == pytest.approx(latitude, abs=1e-6)
        assert back.longitude == pytest.approx(10.0, abs=1e-6)

    def test_hemisphere_inferred_without_flag(self):
        south = WGS84Coordinate(-85.0, 10.0).utm
        north = WGS84Coordinate(85.0, 10.0).utm
        assert UTMCoordinate(south.easting, south.northing, 32, "Z").is_southern
        assert not UTMCoordinate(north.easting, north.northing, 32, "Z").is_southern
        assert UTMCoordinate(500_000.0, 6_000_000.0, 34, "H").is_southern
        assert not UTMCoordinate(500_000.0, 6_000_000.0, 33, "U").is_southern

    def test_injected_ellipsoid(self, prague):
        default = wgs84_to_utm(prague)
        international = wgs84_to_utm(prague, ellipsoid=get_ellipsoid("International"))
        assert international.zone == default.zone
        assert international.northing != pytest.approx(default.northing, abs=1.0)

    def test_explicit_zone(self, prague):
        assert wgs84_to_utm_zone(prague, 33) == prague.utm33n

    def test_text(self):
        assert str(UTMCoordinate(458000.5, 5547000.25, 33, "U")) == "33U 458000.5 5547000.25"
        assert str(UTMZoneCoordinate(458000.5, 5547000.25, 33)) == "458000.5; 5547000.25; zone: 33"


# ==============================================================================
# Generic dispatch
# ==============================================================================

class TestTransformDispatch:

    def test_same_type_is_identity(self, prague):
        assert transform(prague, WGS84Coordinate) is prague

    def test_direct_reflection(self):
        assert transform(JTSK2065Coordinate(1.0, 2.0), JTSK5514Coordinate) == JTSK5514Coordinate(-2.0, -1.0)

    def test_from_wgs84_matches_properties(self, prague):
        assert transform(prague, S42Coordinate) == prague.s42
        assert transform(prague, UTMCoordinate) == prague.utm
        assert transform(prague, UTMZoneCoordinate) == prague.utm33n
        assert transform(prague, EMEPGrid50x50Coordinate) == prague.emep_grid_50x50

    def test_routes_through_wgs84(self, prague):
        jtsk = transform(prague.s42, JTSK5514Coordinate)
        assert jtsk.x == pytest.approx(prague.jtsk5514.x, abs=20.0)
        assert jtsk.y == pytest.approx(prague.jtsk5514.y, abs=20.0)

    def test_to_wgs84(self, prague):
        back = transform(prague.jtsk2065, WGS84Coordinate)
        assert back.latitude == pytest.approx(prague.latitude, abs=1e-6)

    def test_unknown_source(self):
        with pytest.raises(TypeError):
            transform(object(), WGS84Coordinate)

    def test_unknown_target(self, prague):
        with pytest.raises(TypeError):
            transform(prague, int)


# ==============================================================================
# Projection adapters
# ==============================================================================

class TestProjectionAdapters:

    @pytest.mark.parametrize("projection", [
        KrovakProjection(),
        GaussKrugerS42Projection(),
        EMEPPolarStereographic(),
        TransverseMercator(33),
    ])
    def test_adapters_are_conformal(self, projection):
        assert projection.preserves_angles
        assert not projection.preserves_area
        assert projection.name

    def test_southern_false_northing(self):
        assert TransverseMercator(34, southern=True).false_northing == 10_000_000.0
        assert TransverseMercator(34).false_northing == 0.0

    def test_transforms_route_through_adapters(self, brno):
        s42 = GaussKrugerS42Projection().to_projected(brno.latitude_rad, brno.longitude_rad)
        assert (brno.s42.x, brno.s42.y) == s42
        x, y = EMEPPolarStereographic().to_projected(brno.latitude_rad, brno.longitude_rad)
        assert brno.emep_grid_50x50 == EMEPGrid50x50Coordinate(int(x), int(y))

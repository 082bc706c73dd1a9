import numpy as np
import pytest

from sunang.geometry import (
    great_circle_distance,
    initial_bearing,
    separation_cosine,
    solar_elevation,
    solar_zenith_angle,
    sun_position,
    wrap_azimuth,
)


@pytest.fixture
def random_points():
    """Random observer locations and sub-solar points"""
    rng = np.random.default_rng(42)
    n = 200
    return (
        rng.uniform(-90, 90, n),
        rng.uniform(-180, 180, n),
        rng.uniform(-23.6, 23.6, n),
        rng.uniform(-180, 180, n),
    )


class TestWrapAzimuth:
    """Tests for angle wrapping"""

    @pytest.mark.parametrize(
        "angle, expected",
        [(190.0, -170.0), (180.0, -180.0), (-180.0, -180.0), (540.0, -180.0), (0.0, 0.0), (-190.0, 170.0)],
    )
    def test_default_range(self, angle, expected):
        """Default interval is [-180, 180)"""
        assert float(wrap_azimuth(angle)) == pytest.approx(expected)

    @pytest.mark.parametrize("angle, expected", [(-90.0, 270.0), (360.0, 0.0), (725.0, 5.0)])
    def test_compass_range(self, angle, expected):
        """lower=0 gives compass style [0, 360)"""
        assert float(wrap_azimuth(angle, lower=0.0)) == pytest.approx(expected)

    def test_tiny_negative(self):
        """A tiny negative angle never wraps to the upper bound"""
        result = float(wrap_azimuth(-1e-20, lower=0.0))
        assert 0.0 <= result < 360.0

    def test_nan_passthrough(self):
        """NaN stays NaN"""
        assert np.isnan(wrap_azimuth(np.nan))


class TestGreatCircle:
    """Tests for great-circle distance and bearing"""

    def test_quarter_circle(self):
        """Points 90° apart along the equator and along a meridian"""
        assert float(great_circle_distance(0.0, 0.0, 0.0, 90.0)) == pytest.approx(90.0)
        assert float(great_circle_distance(0.0, 0.0, 90.0, 0.0)) == pytest.approx(90.0)

    def test_coincident_points(self):
        """Distance to itself is zero, with no NaN from rounding"""
        assert float(great_circle_distance(37.3, -122.1, 37.3, -122.1)) == pytest.approx(0.0, abs=1e-6)

    def test_antipodes(self):
        """Antipodal points are 180° apart and the cosine is clipped"""
        assert float(separation_cosine(-20.0, -135.0, 20.0, 45.0)) == pytest.approx(-1.0)
        assert float(great_circle_distance(-20.0, -135.0, 20.0, 45.0)) == pytest.approx(180.0, abs=1e-6)

    def test_cosine_bounded(self, random_points):
        """Separation cosine stays within [-1, 1]"""
        cos_sep = separation_cosine(*random_points)
        assert np.all(np.abs(cos_sep) <= 1.0)

    @pytest.mark.parametrize(
        "lat2, lon2, expected",
        [(10.0, 0.0, 0.0), (0.0, 10.0, 90.0), (-10.0, 0.0, 180.0), (0.0, -10.0, 270.0)],
    )
    def test_cardinal_bearings(self, lat2, lon2, expected):
        """Bearings from the origin towards the four cardinal directions"""
        assert float(initial_bearing(0.0, 0.0, lat2, lon2)) == pytest.approx(expected)

    def test_bearing_range(self, random_points):
        """Bearings are wrapped into [0, 360)"""
        bearing = initial_bearing(*random_points)
        assert np.all((bearing >= 0.0) & (bearing < 360.0))


class TestSunPosition:
    """Tests for zenith cosine and azimuth from the sub-solar point"""

    def test_overhead_sun(self):
        """Sun directly overhead: mu0 = 1 and azimuth defined by atan2(0, 0)"""
        mu0, phi0 = sun_position(20.0, 45.0, 20.0, 45.0)
        assert float(mu0) == pytest.approx(1.0)
        assert float(phi0) == 180.0

    def test_noon_sun_due_south(self):
        """At local noon north of the sub-solar point the sun is due south"""
        mu0, phi0 = sun_position(40.0, 0.0, 10.0, 0.0)
        assert float(mu0) == pytest.approx(np.cos(np.radians(30.0)))
        assert float(phi0) == pytest.approx(0.0, abs=1e-9)

    def test_noon_sun_due_north(self):
        """South of the sub-solar point the noon sun is due north"""
        mu0, phi0 = sun_position(-30.0, 0.0, 10.0, 0.0)
        assert float(mu0) == pytest.approx(np.cos(np.radians(40.0)))
        assert abs(float(phi0)) == pytest.approx(180.0)

    def test_morning_sun_east(self):
        """Sub-solar point to the east: azimuth +90 (counter-clockwise from south)"""
        mu0, phi0 = sun_position(0.0, 0.0, 0.0, 90.0)
        assert float(mu0) == pytest.approx(0.0, abs=1e-12)
        assert float(phi0) == pytest.approx(90.0)

    def test_evening_sun_west(self):
        """Sub-solar point to the west: azimuth -90"""
        _, phi0 = sun_position(0.0, 0.0, 0.0, -90.0)
        assert float(phi0) == pytest.approx(-90.0)

    def test_below_horizon_unmasked(self):
        """Geometry returns negative cosines unchanged"""
        mu0, phi0 = sun_position(0.0, 0.0, 0.0, 180.0)
        assert float(mu0) == pytest.approx(-1.0)
        assert np.isfinite(phi0)

    def test_cosine_of_separation(self, random_points):
        """mu0 equals the cosine of the great-circle separation"""
        mu0, _ = sun_position(*random_points)
        arclen = great_circle_distance(*random_points)
        np.testing.assert_allclose(mu0, np.cos(np.radians(arclen)), atol=1e-9)

    def test_azimuth_range(self, random_points):
        """Azimuths fall in (-180, 180]"""
        _, phi0 = sun_position(*random_points)
        assert np.all((phi0 > -180.0) & (phi0 <= 180.0))

    def test_azimuth_is_translated_bearing(self, random_points):
        """phi0 = 180 - bearing"""
        _, phi0 = sun_position(*random_points)
        np.testing.assert_allclose(phi0, 180.0 - initial_bearing(*random_points))

    def test_shape_preserved(self):
        """Output shape follows the input grid"""
        lat, lon = np.meshgrid(np.linspace(-60, 60, 4), np.linspace(-150, 150, 3))
        mu0, phi0 = sun_position(lat, lon, 5.0, 30.0)
        assert mu0.shape == phi0.shape == (3, 4)


class TestAngleConversions:
    """Tests for zenith/elevation conversions"""

    def test_zenith_angle(self):
        assert float(solar_zenith_angle(0.5)) == pytest.approx(60.0)

    def test_elevation(self):
        assert float(solar_elevation(0.5)) == pytest.approx(30.0)
        assert float(solar_elevation(-1.0)) == pytest.approx(-90.0)

    def test_overshoot_clipped(self):
        """Cosines a hair above 1 do not produce NaN"""
        assert float(solar_zenith_angle(1.0 + 1e-15)) == 0.0

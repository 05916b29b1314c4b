import math

import numpy as np
import pytest

from balcon.sun import (
    SunPosition,
    SurfaceOrientation,
    ClearSkyAtmosphere,
    air_mass,
    transmittance,
    geometric_factor,
    intensity,
    intensity_array,
    sun_direction,
)

SOUTH = math.pi
ROOF = SurfaceOrientation(azimuth=0.0, tilt=math.pi / 2)
SOUTH_WALL = SurfaceOrientation(azimuth=SOUTH, tilt=0.0)
NORTH_WALL = SurfaceOrientation(azimuth=0.0, tilt=0.0)


def kasten_young(alt: float) -> float:
    return 1 / (math.sin(alt) + 0.50572 * (math.degrees(alt) + 6.07995) ** -1.6364)


class TestSunDirection:
    def test_unit_length(self) -> None:
        d = sun_direction(1.1, 0.4)
        assert np.linalg.norm(d) == pytest.approx(1.0)

    def test_east_on_horizon(self) -> None:
        d = sun_direction(math.pi / 2, 0.0)
        assert d == pytest.approx(np.array([1.0, 0.0, 0.0]), abs=1e-12)

    def test_zenith_points_up(self) -> None:
        d = sun_direction(0.3, math.pi / 2)
        assert d == pytest.approx(np.array([0.0, 0.0, 1.0]), abs=1e-12)


class TestAirMass:
    def test_infinite_at_horizon(self) -> None:
        assert air_mass(0.0) == math.inf

    def test_infinite_below_horizon(self) -> None:
        assert air_mass(-0.2) == math.inf

    def test_close_to_one_at_zenith(self) -> None:
        assert air_mass(math.pi / 2) == pytest.approx(1.0, abs=1e-3)

    def test_kasten_young_at_30_deg(self) -> None:
        alt = math.radians(30)
        assert air_mass(alt) == pytest.approx(kasten_young(alt), abs=1e-12)
        assert air_mass(alt) == pytest.approx(1.99, abs=0.01)

    def test_finite_just_above_horizon(self) -> None:
        am = air_mass(1e-6)
        assert math.isfinite(am)
        assert am == pytest.approx(37.92, abs=0.05)

    def test_array(self) -> None:
        am = air_mass(np.array([-0.1, 0.0, math.radians(30), math.pi / 2]))
        assert am[0] == math.inf and am[1] == math.inf
        assert am[2] == pytest.approx(kasten_young(math.radians(30)))

    def test_nan_propagates(self) -> None:
        assert math.isnan(air_mass(math.nan))

    def test_returns_float_for_scalar(self) -> None:
        assert isinstance(air_mass(0.5), float)


class TestTransmittance:
    def test_zenith_value(self) -> None:
        assert transmittance(1.0) == pytest.approx(0.8)

    def test_zero_for_infinite_air_mass(self) -> None:
        assert transmittance(math.inf) == 0.0

    def test_clamped_to_one(self) -> None:
        atmosphere = ClearSkyAtmosphere(tau_0=1.0, k=0.5)
        assert transmittance(0.0, atmosphere) == 1.0

    def test_decreases_with_air_mass(self) -> None:
        tau = transmittance(np.array([1.0, 2.0, 5.0, 20.0]))
        assert np.all(np.diff(tau) < 0)

    def test_custom_atmosphere(self) -> None:
        atmosphere = ClearSkyAtmosphere(tau_0=0.7, k=0.1)
        assert transmittance(3.0, atmosphere) == pytest.approx(0.7 * math.exp(-0.2))


class TestIntensity:
    def test_zenith_on_roof(self) -> None:
        for azimuth in (0.0, 1.0, math.pi, 5.0):
            sun = SunPosition(azimuth=azimuth, altitude=math.pi / 2)
            assert geometric_factor(sun, ROOF) == pytest.approx(1.0)
            assert intensity(sun, ROOF) == pytest.approx(0.8, abs=1e-4)

    def test_opposing_face_is_dark(self) -> None:
        sun = SunPosition(azimuth=SOUTH, altitude=math.pi / 4)
        assert intensity(sun, NORTH_WALL) == 0.0

    def test_facing_sun(self) -> None:
        alt = math.pi / 4
        sun = SunPosition(azimuth=SOUTH, altitude=alt)
        g = geometric_factor(sun, SOUTH_WALL)
        assert g == pytest.approx(math.cos(alt), abs=1e-12)
        expected = g * 0.8 * math.exp(-0.08 * (kasten_young(alt) - 1))
        assert intensity(sun, SOUTH_WALL) == pytest.approx(expected, abs=1e-9)

    def test_below_horizon_is_dark(self) -> None:
        rng = np.random.default_rng(1)
        for _ in range(200):
            sun = SunPosition(
                azimuth=rng.uniform(0, 2 * math.pi),
                altitude=rng.uniform(-math.pi / 2, 0.0)
            )
            surface = SurfaceOrientation(
                azimuth=rng.uniform(0, 2 * math.pi),
                tilt=rng.choice([0.0, math.pi / 2])
            )
            assert intensity(sun, surface) == 0.0

    def test_range(self) -> None:
        rng = np.random.default_rng(2)
        values = intensity_array(
            rng.uniform(-10, 10, 5000),
            rng.uniform(-math.pi / 2, math.pi / 2, 5000),
            rng.uniform(-10, 10, 5000),
            rng.uniform(-math.pi / 2, math.pi / 2, 5000)
        )
        assert np.all(values >= 0.0)
        assert np.all(values <= 1.0)

    def test_monotonic_attenuation(self) -> None:
        # sun due South, surface normal tracking the sun keeps g = 1
        altitudes = np.radians(np.linspace(85, 1, 50))
        values = [
            intensity(
                SunPosition(SOUTH, alt),
                SurfaceOrientation(azimuth=SOUTH, tilt=alt)
            )
            for alt in altitudes
        ]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_nan_propagates(self) -> None:
        assert math.isnan(intensity(SunPosition(math.nan, 0.5), ROOF))
        assert math.isnan(intensity(SunPosition(0.5, math.nan), ROOF))

    def test_deterministic(self) -> None:
        sun = SunPosition(azimuth=2.1, altitude=0.7)
        wall = SurfaceOrientation(azimuth=1.9, tilt=0.0)
        assert intensity(sun, wall) == intensity(sun, wall)

    def test_array_matches_scalar(self) -> None:
        azimuths = np.linspace(0, 2 * math.pi, 13)
        altitudes = np.linspace(-0.3, 1.5, 13)
        values = intensity_array(azimuths, altitudes, math.pi / 2, 0.0)
        for az, alt, value in zip(azimuths, altitudes, values):
            scalar = intensity(SunPosition(az, alt), SurfaceOrientation(math.pi / 2, 0.0))
            assert value == pytest.approx(scalar, abs=1e-15)

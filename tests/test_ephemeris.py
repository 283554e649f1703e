# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for position queries: catalog bodies and raw element sets."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from orrery.domain.body_catalog import UnknownBodyError, load_catalog
from orrery.domain.ephemeris import (
    PositionMode,
    elliptical_position,
    heliocentric_position,
    position_at,
    position_from_elements,
    positions_at,
    propagated_elements_at,
)
from orrery.domain.kepler import DEFAULT_SOLVER_SETTINGS, KeplerSolverSettings
from orrery.domain.julian_time import DAYS_PER_JULIAN_CENTURY, J2000
from orrery.domain.orbit_sampling import (
    apoapsis_position,
    kepler_mean_motion_deg_per_century,
    orbital_period_days,
    periapsis_position,
)
from orrery.domain.orbital_elements import EccentricityOutOfRangeError, OrbitalElementSet
from orrery.domain.orbital_frames import ORIGIN


_MOMENTS = [
    J2000,
    datetime(1850, 3, 1, tzinfo=timezone.utc),
    datetime(1969, 7, 20, 20, 17, tzinfo=timezone.utc),
    datetime(2024, 3, 20, 3, 6, tzinfo=timezone.utc),
    datetime(2049, 12, 31, 23, 59, tzinfo=timezone.utc),
]


def _second_focus(elements):
    """Empty focus: 2ae from the occupied one, opposite the periapsis."""
    peri = periapsis_position(elements)
    a, e = elements.semi_major_axis, elements.eccentricity
    return peri.scaled(-2.0 * a * e / peri.magnitude)


class TestEarthAtJ2000:

    def test_position(self):
        pos = position_at("earth", J2000)
        assert pos.x == pytest.approx(-0.1771, abs=1e-3)
        assert pos.y == pytest.approx(0.9672, abs=1e-3)
        assert pos.z == pytest.approx(0.0, abs=1e-3)

    def test_distance_near_perihelion(self):
        # perihelion is in early January
        assert position_at("earth", J2000).magnitude == pytest.approx(0.9833, abs=1e-3)

    def test_longitude_of_periapsis_convention_independent(self):
        # i ≈ 0, so splitting ϖ into Ω and ω differently changes nothing
        stored_varpi = load_catalog().get("earth").elements
        rotated = OrbitalElementSet.from_longitude_of_periapsis(
            semi_major_axis=1.00000261,
            eccentricity=0.01671123,
            inclination_deg=-0.00001531,
            longitude_of_ascending_node_deg=-11.26064,
            longitude_of_periapsis_deg=102.93768193,
            mean_longitude_deg=100.46457166,
        )
        a = position_from_elements(stored_varpi, J2000)
        b = position_from_elements(rotated, J2000)
        assert a.as_tuple() == pytest.approx(b.as_tuple(), abs=1e-6)


class TestFocalProperty:
    """|r| + |r − F₂| = 2a for every computed position."""

    @pytest.mark.parametrize("key", ["mercury", "earth", "mars", "jupiter", "neptune", "moon"])
    def test_catalog_bodies(self, key):
        record = load_catalog().get(key)
        for moment in _MOMENTS:
            elements = propagated_elements_at(record.elements, moment)
            pos = elliptical_position(elements)
            f2 = _second_focus(elements)
            a = elements.semi_major_axis
            total = pos.magnitude + pos.distance_to(f2)
            assert total == pytest.approx(2.0 * a, rel=1e-9)

    @pytest.mark.parametrize("key", ["venus", "saturn", "uranus"])
    def test_distance_between_apsides(self, key):
        record = load_catalog().get(key)
        for moment in _MOMENTS:
            elements = propagated_elements_at(record.elements, moment)
            r = elliptical_position(elements).magnitude
            a, e = elements.semi_major_axis, elements.eccentricity
            assert a * (1 - e) - 1e-12 <= r <= a * (1 + e) + 1e-12


class TestCircularOrbitDegeneracy:

    def test_radius_constant(self):
        elements = OrbitalElementSet(
            semi_major_axis=3.2,
            eccentricity=0.0,
            inclination_deg=12.0,
            longitude_of_ascending_node_deg=70.0,
            argument_of_periapsis_deg=15.0,
            mean_longitude_deg=0.0,
            mean_longitude_rate=2000.0,
        )
        for days in range(0, 4000, 137):
            pos = position_from_elements(elements, J2000 + timedelta(days=days))
            assert pos.magnitude == pytest.approx(3.2, rel=1e-12)


class TestPeriodicity:

    def _elements(self, a):
        return OrbitalElementSet(
            semi_major_axis=a,
            eccentricity=0.2,
            inclination_deg=10.0,
            longitude_of_ascending_node_deg=30.0,
            argument_of_periapsis_deg=60.0,
            mean_longitude_deg=5.0,
            mean_longitude_rate=kepler_mean_motion_deg_per_century(a),
        )

    @pytest.mark.parametrize("a", [0.4, 1.0, 1.5, 5.2])
    def test_returns_after_one_period(self, a):
        elements = self._elements(a)
        t0 = datetime(2010, 5, 1, 6, 0, tzinfo=timezone.utc)
        t1 = t0 + timedelta(days=orbital_period_days(a))
        p0 = position_from_elements(elements, t0, include_secular_drift=False)
        p1 = position_from_elements(elements, t1, include_secular_drift=False)
        assert p0.distance_to(p1) < 1e-9 * a

    def test_half_period_is_elsewhere(self):
        elements = self._elements(1.0)
        t0 = datetime(2010, 5, 1, tzinfo=timezone.utc)
        t1 = t0 + timedelta(days=orbital_period_days(1.0) / 2)
        p0 = position_from_elements(elements, t0)
        p1 = position_from_elements(elements, t1)
        assert p0.distance_to(p1) > 1.0


class TestAnomalyPlacement:

    def _elements(self, mean_longitude_deg):
        return OrbitalElementSet(
            semi_major_axis=2.0,
            eccentricity=0.3,
            inclination_deg=20.0,
            longitude_of_ascending_node_deg=40.0,
            argument_of_periapsis_deg=70.0,
            mean_longitude_deg=mean_longitude_deg,
        )

    def test_zero_mean_anomaly_is_periapsis(self):
        elements = self._elements(110.0)
        pos = position_from_elements(elements, J2000)
        assert pos.as_tuple() == pytest.approx(periapsis_position(elements).as_tuple(), abs=1e-12)
        assert pos.magnitude == pytest.approx(1.4)

    def test_half_revolution_is_apoapsis(self):
        elements = self._elements(290.0)
        pos = position_from_elements(elements, J2000)
        assert pos.as_tuple() == pytest.approx(apoapsis_position(elements).as_tuple(), abs=1e-12)
        assert pos.magnitude == pytest.approx(2.6)


class TestReferentialTransparency:

    def test_repeatable(self):
        moment = datetime(2031, 1, 1, tzinfo=timezone.utc)
        assert position_at("saturn", moment) == position_at("saturn", moment)

    def test_order_independent(self):
        moment = datetime(1999, 8, 11, 11, 3, tzinfo=timezone.utc)
        forward = positions_at(moment, ["mars", "earth", "venus"])
        backward = positions_at(moment, ["venus", "earth", "mars"])
        assert forward == backward
        for key, pos in forward.items():
            assert pos == position_at(key, moment)

    def test_record_or_key(self):
        record = load_catalog().get("mars")
        assert position_at(record, J2000) == position_at("mars", J2000)


class TestPositionsAt:

    def test_all_bodies_by_default(self):
        positions = positions_at(J2000)
        assert set(positions) == set(load_catalog().keys())

    def test_unknown_body(self):
        with pytest.raises(UnknownBodyError):
            positions_at(J2000, ["earth", "pluto"])


class TestErrors:

    def test_unknown_body(self):
        with pytest.raises(UnknownBodyError):
            position_at("planet x", J2000)

    def test_eccentricity_drifts_out_of_range(self):
        elements = OrbitalElementSet(
            semi_major_axis=1.0,
            eccentricity=0.99,
            inclination_deg=0.0,
            longitude_of_ascending_node_deg=0.0,
            argument_of_periapsis_deg=0.0,
            mean_longitude_deg=0.0,
            eccentricity_rate=0.1,
        )
        later = J2000 + timedelta(days=DAYS_PER_JULIAN_CENTURY)
        with pytest.raises(EccentricityOutOfRangeError):
            position_from_elements(elements, later)
        # drift disabled keeps the epoch eccentricity
        position_from_elements(elements, later, include_secular_drift=False)


class TestCircularMode:

    def test_flat_circle_at_mean_longitude(self):
        mars = load_catalog().get("mars").elements
        pos = position_at("mars", J2000, mode=PositionMode.CIRCULAR)
        angle = math.radians(-4.55343205 % 360.0)
        assert pos.z == 0.0
        assert pos.magnitude == pytest.approx(mars.semi_major_axis, rel=1e-12)
        assert pos.x == pytest.approx(mars.semi_major_axis * math.cos(angle), abs=1e-12)
        assert pos.y == pytest.approx(mars.semi_major_axis * math.sin(angle), abs=1e-12)

    def test_differs_from_elliptical(self):
        moment = datetime(2020, 1, 1, tzinfo=timezone.utc)
        circular = position_at("mercury", moment, mode=PositionMode.CIRCULAR)
        elliptical = position_at("mercury", moment)
        assert circular != elliptical

    def test_mode_values(self):
        assert PositionMode("circular") is PositionMode.CIRCULAR
        assert PositionMode("elliptical") is PositionMode.ELLIPTICAL


class TestHeliocentric:

    def test_moon_adds_earth(self):
        moment = datetime(2024, 4, 8, 18, 0, tzinfo=timezone.utc)
        moon = heliocentric_position("moon", moment)
        expected = position_at("earth", moment) + position_at("moon", moment)
        assert moon.as_tuple() == pytest.approx(expected.as_tuple(), abs=1e-15)

    def test_moon_close_to_earth(self):
        moment = datetime(2024, 4, 8, 18, 0, tzinfo=timezone.utc)
        separation = heliocentric_position("moon", moment).distance_to(
            heliocentric_position("earth", moment)
        )
        a, e = 0.00256955529, 0.0549
        assert a * (1 - e) - 1e-12 <= separation <= a * (1 + e) + 1e-12

    def test_planet_unchanged(self):
        assert heliocentric_position("venus", J2000) == position_at("venus", J2000)

    def test_sun_is_origin(self):
        assert heliocentric_position("sun", J2000) == ORIGIN

    @pytest.mark.parametrize("key, planet", [
        ("io", "jupiter"), ("callisto", "jupiter"), ("titan", "saturn"), ("iapetus", "saturn"),
    ])
    def test_major_moon_adds_planet(self, key, planet):
        moment = datetime(2030, 9, 14, 3, 0, tzinfo=timezone.utc)
        helio = heliocentric_position(key, moment)
        expected = position_at(planet, moment) + position_at(key, moment)
        assert helio.as_tuple() == pytest.approx(expected.as_tuple(), abs=1e-15)


class TestMajorMoons:

    def test_ganymede_at_j2000(self):
        a = load_catalog().get("ganymede").elements.semi_major_axis
        pos = position_at("ganymede", J2000)
        assert pos.as_tuple() == pytest.approx((-a, 0.0, 0.0), abs=1e-15)

    @pytest.mark.parametrize("key", ["io", "europa", "ganymede", "callisto", "titan", "rhea", "iapetus"])
    def test_radius_constant(self, key):
        a = load_catalog().get(key).elements.semi_major_axis
        for moment in _MOMENTS:
            pos = position_at(key, moment)
            assert pos.magnitude == pytest.approx(a, rel=1e-12)
            assert pos.z == pytest.approx(0.0, abs=1e-15)

    @pytest.mark.parametrize("key", ["io", "titan"])
    def test_returns_after_stored_period(self, key):
        record = load_catalog().get(key)
        t0 = datetime(2010, 5, 1, 6, 0, tzinfo=timezone.utc)
        t1 = t0 + timedelta(days=record.period_days)
        p0 = position_at(key, t0)
        p1 = position_at(key, t1)
        assert p0.distance_to(p1) < 1e-8 * record.elements.semi_major_axis

    def test_io_angle_after_one_day(self):
        t1 = J2000 + timedelta(days=1)
        io_angle = math.atan2(position_at("io", t1).y, position_at("io", t1).x) % (2 * math.pi)
        # one day at 1.769 days per orbit: ~203.5 degrees
        assert math.degrees(io_angle) == pytest.approx(360.0 / 1.769137786, abs=1e-6)


class TestSolverSettings:

    def test_explicit_defaults_match(self):
        moment = datetime(2015, 7, 14, tzinfo=timezone.utc)
        assert position_at("mercury", moment, settings=DEFAULT_SOLVER_SETTINGS) == position_at(
            "mercury", moment
        )

    def test_single_iteration_is_coarser(self):
        moment = datetime(2015, 7, 14, tzinfo=timezone.utc)
        coarse = position_at("mercury", moment, settings=KeplerSolverSettings(max_iterations=1))
        fine = position_at("mercury", moment)
        assert math.isfinite(coarse.magnitude)
        assert coarse.distance_to(fine) < 0.1

    def test_tight_tolerance_stays_on_ellipse(self):
        elements = load_catalog().get("mars").elements
        tight = KeplerSolverSettings(tolerance_rad=1e-14)
        pos = position_from_elements(elements, J2000, include_secular_drift=False, settings=tight)
        a, e = elements.semi_major_axis, elements.eccentricity
        assert a * (1 - e) - 1e-12 <= pos.magnitude <= a * (1 + e) + 1e-12

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Apsides and orbit-path sampling.

Periapsis and apoapsis are closed-form (ν = 0 and ν = π, no Kepler
solve). Orbit paths are closed polylines for line rendering: either the
full elliptical orbit, sampled through the position pipeline, or a flat
circle of radius a as a lower-fidelity fallback.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Union

import numpy as np

from orrery.domain.body_catalog import BodyCatalog, BodyRecord
from orrery.domain.ephemeris import (
    BodyRef,
    PositionMode,
    elliptical_position,
    position_from_mean_anomaly,
    propagated_elements_at,
    resolve_body,
)
from orrery.domain.julian_time import DAYS_PER_JULIAN_CENTURY, J2000
from orrery.domain.kepler import TWO_PI, mean_anomaly_from_longitudes
from orrery.domain.orbital_elements import (
    OrbitalElementSet,
    PropagatedElements,
    at_epoch,
)
from orrery.domain.orbital_frames import StateVector, orbital_plane_to_reference

DAYS_PER_UNIT_PERIOD: float = 365.25
"""Period (days) of a 1 AU orbit around a unit-mass central body."""

MIN_PATH_SAMPLES: int = 3


def periapsis_distance(semi_major_axis: float, eccentricity: float) -> float:
    """r_p = a·(1 − e)."""
    return semi_major_axis * (1.0 - eccentricity)


def apoapsis_distance(semi_major_axis: float, eccentricity: float) -> float:
    """r_a = a·(1 + e)."""
    return semi_major_axis * (1.0 + eccentricity)


def _point_at_true_anomaly(
    elements: PropagatedElements,
    true_anomaly_rad: float,
    radius: float,
) -> StateVector:
    return orbital_plane_to_reference(
        radius,
        true_anomaly_rad,
        elements.inclination_rad,
        elements.longitude_of_ascending_node_rad,
        elements.argument_of_periapsis_rad,
    )


def periapsis_position(elements: Union[OrbitalElementSet, PropagatedElements]) -> StateVector:
    """Closest point of the orbit: ν = 0, r = a(1 − e).

    Reference element sets are evaluated at J2000.0.
    """
    el = at_epoch(elements)
    return _point_at_true_anomaly(
        el, 0.0, periapsis_distance(el.semi_major_axis, el.eccentricity),
    )


def apoapsis_position(elements: Union[OrbitalElementSet, PropagatedElements]) -> StateVector:
    """Farthest point of the orbit: ν = π, r = a(1 + e).

    Reference element sets are evaluated at J2000.0.
    """
    el = at_epoch(elements)
    return _point_at_true_anomaly(
        el, math.pi, apoapsis_distance(el.semi_major_axis, el.eccentricity),
    )


def apsides(
    body: BodyRef,
    moment: Optional[datetime] = None,
    catalog: Optional[BodyCatalog] = None,
) -> tuple[StateVector, StateVector]:
    """(periapsis, apoapsis) of a catalog body, for marker placement.

    Uses the orbit at moment, or the reference epoch when moment is None.
    """
    record = resolve_body(body, catalog)
    elements = propagated_elements_at(record.elements, moment or J2000)
    return periapsis_position(elements), apoapsis_position(elements)


def orbital_period_days(semi_major_axis: float) -> float:
    """Kepler's third law around a unit-mass central body: P = 365.25·a^1.5 days."""
    if semi_major_axis <= 0.0:
        raise ValueError(f"semi_major_axis must be positive, got {semi_major_axis!r}")
    return DAYS_PER_UNIT_PERIOD * semi_major_axis ** 1.5


def kepler_mean_motion_deg_per_century(semi_major_axis: float) -> float:
    """Mean-longitude rate consistent with orbital_period_days."""
    return 360.0 * DAYS_PER_JULIAN_CENTURY / orbital_period_days(semi_major_axis)


def body_period_days(record: BodyRecord) -> float:
    """Stored period if the catalog has one, else Kepler's third law."""
    if record.period_days is not None:
        return record.period_days
    return orbital_period_days(record.elements.semi_major_axis)


@dataclass(frozen=True)
class OrbitPath:
    """Closed polyline of an orbit: num_samples + 1 points, last == first."""
    body: str
    mode: PositionMode
    points: tuple[StateVector, ...]
    period_days: float
    start: datetime = J2000

    @property
    def num_samples(self) -> int:
        return len(self.points) - 1

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 1 and self.points[0] == self.points[-1]

    def as_array(self) -> np.ndarray:
        """(num_samples + 1, 3) array of x, y, z."""
        return np.array([p.as_tuple() for p in self.points], dtype=float)

    def translated(self, offset: StateVector) -> "OrbitPath":
        """Same path with every point shifted by offset (e.g. into the Sun's frame)."""
        return replace(self, points=tuple(p + offset for p in self.points))

    def __len__(self) -> int:
        return len(self.points)


def sample_orbit(
    elements: PropagatedElements,
    num_samples: int,
    mode: PositionMode = PositionMode.ELLIPTICAL,
) -> tuple[StateVector, ...]:
    """
    Sample one full revolution of a fixed orbit.

    ELLIPTICAL: num_samples points evenly spaced in time (mean anomaly)
    starting at the body's current position. CIRCULAR: true anomaly
    uniform in [0, 2π) at radius a in the z = 0 plane. The closing point
    repeats the first one exactly.

    Raises:
        ValueError: If num_samples < MIN_PATH_SAMPLES.
    """
    if num_samples < MIN_PATH_SAMPLES:
        raise ValueError(
            f"num_samples must be at least {MIN_PATH_SAMPLES}, got {num_samples}"
        )

    step = TWO_PI / num_samples
    if mode is PositionMode.CIRCULAR:
        r = elements.semi_major_axis
        points = [
            StateVector(r * math.cos(k * step), r * math.sin(k * step), 0.0)
            for k in range(num_samples)
        ]
    else:
        m0 = mean_anomaly_from_longitudes(
            elements.mean_longitude_deg,
            elements.longitude_of_periapsis_deg,
        )
        points = [
            position_from_mean_anomaly(elements, m0 + k * step)
            for k in range(num_samples)
        ]

    points.append(points[0])
    return tuple(points)


def sample_path(
    body: BodyRef,
    num_samples: int,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    start: datetime = J2000,
    catalog: Optional[BodyCatalog] = None,
) -> OrbitPath:
    """
    Closed orbit path of a catalog body for line rendering.

    The orbit is frozen at start (secular drift applied up to start) and
    sampled over one period.

    Args:
        body: Catalog key or BodyRecord.
        num_samples: Number of segments; the path has num_samples + 1 points.
        mode: ELLIPTICAL (accurate) or CIRCULAR (flat fallback).
        start: Moment of the first sample.
        catalog: Element catalog; the bundled one when None.

    Raises:
        UnknownBodyError: If body is not in the catalog.
        ValueError: If num_samples < MIN_PATH_SAMPLES.
    """
    record = resolve_body(body, catalog)
    elements = propagated_elements_at(record.elements, start)
    return OrbitPath(
        body=record.key,
        mode=mode,
        points=sample_orbit(elements, num_samples, mode),
        period_days=body_period_days(record),
        start=start,
    )


@dataclass(frozen=True)
class OrbitSummary:
    """Position and orbit shape of a body at one moment."""
    body: str
    position: StateVector
    distance: float
    periapsis_distance: float
    apoapsis_distance: float
    eccentricity: float
    moment_iso: str


def orbit_summary(
    body: BodyRef,
    moment: datetime,
    catalog: Optional[BodyCatalog] = None,
) -> OrbitSummary:
    """Where a body is and how its orbit is shaped at moment."""
    record = resolve_body(body, catalog)
    elements = propagated_elements_at(record.elements, moment)
    position = elliptical_position(elements)
    return OrbitSummary(
        body=record.key,
        position=position,
        distance=position.magnitude,
        periapsis_distance=periapsis_distance(elements.semi_major_axis, elements.eccentricity),
        apoapsis_distance=apoapsis_distance(elements.semi_major_axis, elements.eccentricity),
        eccentricity=elements.eccentricity,
        moment_iso=moment.isoformat(),
    )

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orrery: Keplerian positions and orbit paths of solar-system bodies.

Computes where a body is at a moment from its reference orbital elements
(JPL approximate elements, valid 1800–2050 AD), plus the geometric
primitives a visualizer needs: periapsis/apoapsis points, orbital
periods and closed orbit paths.
"""

__version__ = "0.1.0"

from orrery.domain.julian_time import (
    J2000,
    J2000_JD,
    DAYS_PER_JULIAN_CENTURY,
    to_julian_date,
    julian_date_to_datetime,
    centuries_since_epoch,
    centuries_since_j2000,
    days_since_j2000,
    parse_moment,
)
from orrery.domain.orbital_elements import (
    EccentricityOutOfRangeError,
    ElementConvention,
    OrbitalElementSet,
    PropagatedElements,
    propagate,
)
from orrery.domain.kepler import (
    KeplerSolverSettings,
    KeplerSolution,
    DEFAULT_SOLVER_SETTINGS,
    solve_kepler,
    solve_eccentric_anomaly,
    eccentric_to_true_anomaly,
    radius_from_eccentric_anomaly,
)
from orrery.domain.orbital_frames import (
    StateVector,
    perifocal_rotation_matrix,
    orbital_plane_to_reference,
    ecliptic_to_y_up,
)
from orrery.domain.body_catalog import (
    BodyRecord,
    BodyCatalog,
    UnknownBodyError,
    build_catalog,
    load_catalog,
)
from orrery.domain.ephemeris import (
    PositionMode,
    position_at,
    position_from_elements,
    position_from_mean_anomaly,
    positions_at,
    heliocentric_position,
)
from orrery.domain.orbit_sampling import (
    OrbitPath,
    OrbitSummary,
    periapsis_position,
    apoapsis_position,
    apsides,
    orbital_period_days,
    body_period_days,
    sample_path,
    orbit_summary,
)

__all__ = [
    "J2000",
    "J2000_JD",
    "DAYS_PER_JULIAN_CENTURY",
    "to_julian_date",
    "julian_date_to_datetime",
    "centuries_since_epoch",
    "centuries_since_j2000",
    "days_since_j2000",
    "parse_moment",
    "EccentricityOutOfRangeError",
    "ElementConvention",
    "OrbitalElementSet",
    "PropagatedElements",
    "propagate",
    "KeplerSolverSettings",
    "KeplerSolution",
    "DEFAULT_SOLVER_SETTINGS",
    "solve_kepler",
    "solve_eccentric_anomaly",
    "eccentric_to_true_anomaly",
    "radius_from_eccentric_anomaly",
    "StateVector",
    "perifocal_rotation_matrix",
    "orbital_plane_to_reference",
    "ecliptic_to_y_up",
    "BodyRecord",
    "BodyCatalog",
    "UnknownBodyError",
    "build_catalog",
    "load_catalog",
    "PositionMode",
    "position_at",
    "position_from_elements",
    "position_from_mean_anomaly",
    "positions_at",
    "heliocentric_position",
    "OrbitPath",
    "OrbitSummary",
    "periapsis_position",
    "apoapsis_position",
    "apsides",
    "orbital_period_days",
    "body_period_days",
    "sample_path",
    "orbit_summary",
]

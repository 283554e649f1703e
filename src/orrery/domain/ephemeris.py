# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Position query: where a body is at a given moment.

Composes time conversion → element propagation → Kepler solve →
anomaly conversion → frame transform. Every function here is pure;
identical inputs always give identical outputs, so bodies can be
evaluated in any order or in parallel.
"""
import math
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Union

from orrery.domain.body_catalog import (
    ROOT_BODY,
    BodyCatalog,
    BodyRecord,
    load_catalog,
)
from orrery.domain.julian_time import centuries_since_j2000
from orrery.domain.kepler import (
    DEFAULT_SOLVER_SETTINGS,
    KeplerSolverSettings,
    eccentric_to_true_anomaly,
    mean_anomaly_from_longitudes,
    radius_from_eccentric_anomaly,
    solve_kepler,
)
from orrery.domain.orbital_elements import (
    OrbitalElementSet,
    PropagatedElements,
    propagate,
)
from orrery.domain.orbital_frames import ORIGIN, StateVector, orbital_plane_to_reference


class PositionMode(Enum):
    """Position strategy, chosen by the caller per body set."""
    ELLIPTICAL = "elliptical"  # full Keplerian solution
    CIRCULAR = "circular"      # flat circle of radius a, lower fidelity


BodyRef = Union[str, BodyRecord]


def resolve_body(body: BodyRef, catalog: Optional[BodyCatalog] = None) -> BodyRecord:
    """BodyRecord for a key or record. Raises UnknownBodyError for unknown keys."""
    if isinstance(body, BodyRecord):
        return body
    if catalog is None:
        catalog = load_catalog()
    return catalog.get(body)


def propagated_elements_at(
    elements: OrbitalElementSet,
    moment: datetime,
    include_secular_drift: bool = True,
) -> PropagatedElements:
    """Elements valid at moment."""
    centuries = centuries_since_j2000(moment)
    return propagate(elements, centuries, include_secular_drift)


def position_from_mean_anomaly(
    elements: PropagatedElements,
    mean_anomaly_rad: float,
    settings: KeplerSolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> StateVector:
    """Point of the orbit described by elements at the given mean anomaly."""
    a = elements.semi_major_axis
    e = elements.eccentricity

    solution = solve_kepler(mean_anomaly_rad, e, settings)
    E = solution.eccentric_anomaly_rad

    nu = eccentric_to_true_anomaly(E, e)
    r = radius_from_eccentric_anomaly(a, e, E)

    return orbital_plane_to_reference(
        r,
        nu,
        elements.inclination_rad,
        elements.longitude_of_ascending_node_rad,
        elements.argument_of_periapsis_rad,
    )


def elliptical_position(
    elements: PropagatedElements,
    settings: KeplerSolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> StateVector:
    """Keplerian position from propagated elements. M = L − ϖ."""
    mean_anomaly = mean_anomaly_from_longitudes(
        elements.mean_longitude_deg,
        elements.longitude_of_periapsis_deg,
    )
    return position_from_mean_anomaly(elements, mean_anomaly, settings)


def circular_position(elements: PropagatedElements) -> StateVector:
    """Simplified position: radius a at the mean longitude, in the z = 0 plane."""
    angle = math.radians(elements.mean_longitude_deg % 360.0)
    r = elements.semi_major_axis
    return StateVector(r * math.cos(angle), r * math.sin(angle), 0.0)


def position_from_elements(
    elements: OrbitalElementSet,
    moment: datetime,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    include_secular_drift: bool = True,
    settings: KeplerSolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> StateVector:
    """
    Position of a body described by raw reference elements.

    Args:
        elements: Reference elements at J2000.0.
        moment: Time of the position (naive = UTC).
        mode: ELLIPTICAL or CIRCULAR strategy.
        include_secular_drift: Apply rates of a, e, i, Ω, ω (the mean
            longitude always advances).
        settings: Kepler solver tolerance and iteration cap.

    Returns:
        StateVector relative to the central body, in the unit of a.

    Raises:
        EccentricityOutOfRangeError: If e leaves [0, 1) at moment.
    """
    propagated = propagated_elements_at(elements, moment, include_secular_drift)
    if mode is PositionMode.CIRCULAR:
        return circular_position(propagated)
    return elliptical_position(propagated, settings)


def position_at(
    body: BodyRef,
    moment: datetime,
    catalog: Optional[BodyCatalog] = None,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    include_secular_drift: bool = True,
    settings: KeplerSolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> StateVector:
    """
    Position of a catalog body relative to its central body.

    Args:
        body: Catalog key (case-insensitive) or BodyRecord.
        moment: Time of the position (naive = UTC).
        catalog: Element catalog; the bundled one when None.
        mode: ELLIPTICAL or CIRCULAR strategy.
        include_secular_drift: See position_from_elements.
        settings: Kepler solver tolerance and iteration cap.

    Returns:
        StateVector in the catalog distance unit (AU for the bundled table).

    Raises:
        UnknownBodyError: If body is not in the catalog.
        EccentricityOutOfRangeError: If the elements are not elliptical at moment.
    """
    record = resolve_body(body, catalog)
    return position_from_elements(
        record.elements, moment, mode, include_secular_drift, settings,
    )


def positions_at(
    moment: datetime,
    bodies: Optional[Iterable[BodyRef]] = None,
    catalog: Optional[BodyCatalog] = None,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    include_secular_drift: bool = True,
) -> dict[str, StateVector]:
    """Positions of several bodies at one moment, keyed by body key.

    All catalog bodies when bodies is None.
    """
    if catalog is None:
        catalog = load_catalog()
    records = list(catalog) if bodies is None else [resolve_body(b, catalog) for b in bodies]
    return {
        record.key: position_from_elements(record.elements, moment, mode, include_secular_drift)
        for record in records
    }


def heliocentric_position(
    body: BodyRef,
    moment: datetime,
    catalog: Optional[BodyCatalog] = None,
    mode: PositionMode = PositionMode.ELLIPTICAL,
) -> StateVector:
    """Position relative to the root body, summed up the central-body chain.

    A moon's position is added to its planet's.
    """
    if catalog is None:
        catalog = load_catalog()
    if isinstance(body, str) and body.strip().lower() == ROOT_BODY:
        return ORIGIN

    total = ORIGIN
    record = resolve_body(body, catalog)
    seen: set[str] = set()
    while True:
        if record.key in seen:
            raise ValueError(f"central-body cycle through {record.key!r}")
        seen.add(record.key)
        total = total + position_from_elements(record.elements, moment, mode)
        if record.central_body == ROOT_BODY:
            return total
        record = catalog.get(record.central_body)

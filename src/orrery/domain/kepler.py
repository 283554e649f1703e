# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Kepler's equation and anomaly conversions.

Solves M = E − e·sin(E) for the eccentric anomaly with Newton–Raphson
iteration and converts between mean, eccentric and true anomalies.
Elliptical orbits only (0 ≤ e < 1).

No external dependencies: only stdlib math/dataclasses.
"""
import math
from dataclasses import dataclass

from orrery.domain.orbital_elements import check_eccentricity

TWO_PI: float = 2.0 * math.pi

KEPLER_TOLERANCE_RAD: float = 1e-6
"""Stop once the Newton step |ΔE| falls below this (radians)."""

KEPLER_MAX_ITERATIONS: int = 50
"""Hard cap on Newton steps; bounds the work of every solve."""

_HIGH_ECCENTRICITY: float = 0.8


@dataclass(frozen=True)
class KeplerSolverSettings:
    """Tunable solver constants."""
    tolerance_rad: float = KEPLER_TOLERANCE_RAD
    max_iterations: int = KEPLER_MAX_ITERATIONS

    def __post_init__(self) -> None:
        if not self.tolerance_rad > 0.0:
            raise ValueError(f"tolerance_rad must be positive, got {self.tolerance_rad!r}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations!r}")


DEFAULT_SOLVER_SETTINGS: KeplerSolverSettings = KeplerSolverSettings()


@dataclass(frozen=True)
class KeplerSolution:
    """Result of a Kepler solve.

    residual_rad is |M − (E − e·sin E)| at the returned E. converged is
    False when the iteration cap was reached first; the estimate is
    still the best one available.
    """
    eccentric_anomaly_rad: float
    iterations: int
    residual_rad: float
    converged: bool


def reduce_to_two_pi(angle_rad: float) -> float:
    """Reduce an angle to [0, 2π)."""
    reduced = math.fmod(angle_rad, TWO_PI)
    if reduced < 0.0:
        reduced += TWO_PI
    # fmod of a tiny negative angle can round up to exactly 2π
    if reduced >= TWO_PI:
        reduced = 0.0
    return reduced


def solve_kepler(
    mean_anomaly_rad: float,
    eccentricity: float,
    settings: KeplerSolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> KeplerSolution:
    """Solve Kepler's equation M = E − e·sin(E) by Newton–Raphson.

    E(n+1) = E(n) − (E(n) − e·sin E(n) − M) / (1 − e·cos E(n))

    The first guess is E₀ = M. Above e = 0.8 it is π instead, from which
    Newton's method converges monotonically for every M.

    Args:
        mean_anomaly_rad: Mean anomaly (radians); reduced to [0, 2π).
        eccentricity: Orbital eccentricity, 0 ≤ e < 1.
        settings: Convergence threshold on |ΔE| and iteration cap.

    Returns:
        KeplerSolution with E in radians.

    Raises:
        EccentricityOutOfRangeError: If e is outside [0, 1).
    """
    check_eccentricity(eccentricity, "Kepler solve")
    e = eccentricity
    m = reduce_to_two_pi(mean_anomaly_rad)

    E = m if e < _HIGH_ECCENTRICITY else math.pi

    converged = False
    iterations = 0
    while iterations < settings.max_iterations:
        iterations += 1
        delta = (E - e * math.sin(E) - m) / (1.0 - e * math.cos(E))
        E -= delta
        if abs(delta) < settings.tolerance_rad:
            converged = True
            break

    residual = abs(m - (E - e * math.sin(E)))
    return KeplerSolution(
        eccentric_anomaly_rad=E,
        iterations=iterations,
        residual_rad=residual,
        converged=converged,
    )


def solve_eccentric_anomaly(mean_anomaly_rad: float, eccentricity: float) -> float:
    """Eccentric anomaly (radians) for the given mean anomaly. Convenience wrapper."""
    return solve_kepler(mean_anomaly_rad, eccentricity).eccentric_anomaly_rad


def mean_anomaly_from_longitudes(
    mean_longitude_deg: float,
    longitude_of_periapsis_deg: float,
) -> float:
    """M = L − ϖ, reduced to [0, 2π) radians."""
    return reduce_to_two_pi(
        math.radians((mean_longitude_deg - longitude_of_periapsis_deg) % 360.0)
    )


def eccentric_to_true_anomaly(eccentric_anomaly_rad: float, eccentricity: float) -> float:
    """ν = 2·atan2(√(1+e)·sin(E/2), √(1−e)·cos(E/2)).

    The half-angle form keeps the quadrant without a separate branch.
    """
    half = eccentric_anomaly_rad / 2.0
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(half),
        math.sqrt(1.0 - eccentricity) * math.cos(half),
    )


def radius_from_eccentric_anomaly(
    semi_major_axis: float,
    eccentricity: float,
    eccentric_anomaly_rad: float,
) -> float:
    """Distance from the focus: r = a·(1 − e·cos E)."""
    return semi_major_axis * (1.0 - eccentricity * math.cos(eccentric_anomaly_rad))

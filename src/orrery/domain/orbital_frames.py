# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital-plane to reference-frame transformation.

Rotates (radius, true anomaly) in the orbital plane into Cartesian
coordinates of the shared ecliptic frame through the classical 3-1-3
sequence: argument of periapsis ω about the orbit normal, inclination i
about the line of nodes, longitude of the ascending node Ω about the
ecliptic pole. Every position the engine produces goes through
orbital_plane_to_reference.
"""
import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class StateVector:
    """Cartesian position in the reference (ecliptic) frame.

    Same distance unit as the semi-major axis it was computed from,
    origin at the central body.
    """
    x: float
    y: float
    z: float

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, other: "StateVector") -> float:
        return (self - other).magnitude

    def __add__(self, other: "StateVector") -> "StateVector":
        return StateVector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "StateVector") -> "StateVector":
        return StateVector(self.x - other.x, self.y - other.y, self.z - other.z)

    def scaled(self, factor: float) -> "StateVector":
        return StateVector(self.x * factor, self.y * factor, self.z * factor)


ORIGIN = StateVector(0.0, 0.0, 0.0)


def perifocal_rotation_matrix(
    inclination_rad: float,
    ascending_node_rad: float,
    argument_of_periapsis_rad: float,
) -> np.ndarray:
    """3×3 rotation from the perifocal (PQW) frame to the reference frame.

    R = Rz(Ω) · Rx(i) · Rz(ω)
    """
    cO = float(np.cos(ascending_node_rad))
    sO = float(np.sin(ascending_node_rad))
    co = float(np.cos(argument_of_periapsis_rad))
    so = float(np.sin(argument_of_periapsis_rad))
    ci = float(np.cos(inclination_rad))
    si = float(np.sin(inclination_rad))

    return np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])


def orbital_plane_to_reference(
    radius: float,
    true_anomaly_rad: float,
    inclination_rad: float,
    ascending_node_rad: float,
    argument_of_periapsis_rad: float,
) -> StateVector:
    """
    Position on (or off) an orbit in reference-frame coordinates.

    Args:
        radius: Distance from the central body (any unit).
        true_anomaly_rad: True anomaly ν (radians).
        inclination_rad: Inclination i (radians).
        ascending_node_rad: Longitude of the ascending node Ω (radians).
        argument_of_periapsis_rad: Argument of periapsis ω (radians).

    Returns:
        StateVector in the unit of radius.
    """
    pos_pqw = np.array([
        radius * float(np.cos(true_anomaly_rad)),
        radius * float(np.sin(true_anomaly_rad)),
        0.0,
    ])
    rotation = perifocal_rotation_matrix(
        inclination_rad, ascending_node_rad, argument_of_periapsis_rad,
    )
    pos = rotation @ pos_pqw
    return StateVector(float(pos[0]), float(pos[1]), float(pos[2]))


def ecliptic_to_y_up(vector: StateVector) -> StateVector:
    """Axis swap for Y-up renderers: (x, y, z) → (x, z, y).

    The ecliptic north pole becomes +Y.
    """
    return StateVector(vector.x, vector.z, vector.y)

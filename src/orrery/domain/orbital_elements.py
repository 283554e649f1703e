# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Keplerian element sets and their secular propagation.

Reference elements are valid at J2000.0 and carry one linear rate per
element (per Julian century), in the form published by JPL for the
approximate positions of the major planets. Angles are kept in degrees
and unreduced; reduction modulo 360° happens where they are consumed.

No external dependencies: only stdlib math/dataclasses/enum.
"""
import math
from dataclasses import dataclass
from enum import Enum


class EccentricityOutOfRangeError(ValueError):
    """Eccentricity outside [0, 1): the orbit is not an ellipse."""


class ElementConvention(Enum):
    """How a reference table stores the periapsis angle."""
    ARGUMENT_OF_PERIAPSIS = "argument_of_periapsis"    # ω
    LONGITUDE_OF_PERIAPSIS = "longitude_of_periapsis"  # ϖ = Ω + ω


def check_eccentricity(e: float, context: str = "") -> None:
    """Raise EccentricityOutOfRangeError unless 0 <= e < 1."""
    if not (0.0 <= e < 1.0):
        where = f" ({context})" if context else ""
        raise EccentricityOutOfRangeError(
            f"eccentricity {e!r} outside [0, 1){where}"
        )


@dataclass(frozen=True)
class OrbitalElementSet:
    """Reference orbital elements at J2000.0 with secular rates.

    Distances in the caller's unit (AU for planets), angles in degrees,
    rates per Julian century.
    """
    semi_major_axis: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    argument_of_periapsis_deg: float
    mean_longitude_deg: float
    semi_major_axis_rate: float = 0.0
    eccentricity_rate: float = 0.0
    inclination_rate: float = 0.0
    longitude_of_ascending_node_rate: float = 0.0
    argument_of_periapsis_rate: float = 0.0
    mean_longitude_rate: float = 0.0

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
        if self.semi_major_axis <= 0.0:
            raise ValueError(
                f"semi_major_axis must be positive, got {self.semi_major_axis!r}"
            )
        check_eccentricity(self.eccentricity, "reference elements")

    @classmethod
    def from_longitude_of_periapsis(
        cls,
        semi_major_axis: float,
        eccentricity: float,
        inclination_deg: float,
        longitude_of_ascending_node_deg: float,
        longitude_of_periapsis_deg: float,
        mean_longitude_deg: float,
        semi_major_axis_rate: float = 0.0,
        eccentricity_rate: float = 0.0,
        inclination_rate: float = 0.0,
        longitude_of_ascending_node_rate: float = 0.0,
        longitude_of_periapsis_rate: float = 0.0,
        mean_longitude_rate: float = 0.0,
    ) -> "OrbitalElementSet":
        """Build from a table that stores ϖ instead of ω.

        ω = ϖ − Ω, and the same for the rates.
        """
        return cls(
            semi_major_axis=semi_major_axis,
            eccentricity=eccentricity,
            inclination_deg=inclination_deg,
            longitude_of_ascending_node_deg=longitude_of_ascending_node_deg,
            argument_of_periapsis_deg=longitude_of_periapsis_deg - longitude_of_ascending_node_deg,
            mean_longitude_deg=mean_longitude_deg,
            semi_major_axis_rate=semi_major_axis_rate,
            eccentricity_rate=eccentricity_rate,
            inclination_rate=inclination_rate,
            longitude_of_ascending_node_rate=longitude_of_ascending_node_rate,
            argument_of_periapsis_rate=longitude_of_periapsis_rate - longitude_of_ascending_node_rate,
            mean_longitude_rate=mean_longitude_rate,
        )

    @property
    def longitude_of_periapsis_deg(self) -> float:
        return self.longitude_of_ascending_node_deg + self.argument_of_periapsis_deg


@dataclass(frozen=True)
class PropagatedElements:
    """Elements evaluated at a given number of Julian centuries from J2000.0."""
    semi_major_axis: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    argument_of_periapsis_deg: float
    mean_longitude_deg: float
    centuries: float = 0.0

    @property
    def longitude_of_periapsis_deg(self) -> float:
        return self.longitude_of_ascending_node_deg + self.argument_of_periapsis_deg

    @property
    def inclination_rad(self) -> float:
        return math.radians(self.inclination_deg % 360.0)

    @property
    def longitude_of_ascending_node_rad(self) -> float:
        return math.radians(self.longitude_of_ascending_node_deg % 360.0)

    @property
    def argument_of_periapsis_rad(self) -> float:
        return math.radians(self.argument_of_periapsis_deg % 360.0)


def propagate(
    elements: OrbitalElementSet,
    centuries: float,
    include_secular_drift: bool = True,
) -> PropagatedElements:
    """Apply linear secular rates: value(T) = value_at_epoch + rate · T.

    The mean longitude always advances (its rate is the mean motion).
    With include_secular_drift=False the orbit's shape and orientation
    stay at their epoch values.

    Args:
        elements: Reference elements at J2000.0.
        centuries: Julian centuries since J2000.0 (T).
        include_secular_drift: Apply the rates of a, e, i, Ω and ω.

    Returns:
        PropagatedElements valid at T.

    Raises:
        EccentricityOutOfRangeError: If e(T) leaves [0, 1).
    """
    t = centuries
    drift = t if include_secular_drift else 0.0

    eccentricity = elements.eccentricity + elements.eccentricity_rate * drift
    check_eccentricity(eccentricity, f"propagated to T={t:.6f} centuries")

    semi_major_axis = elements.semi_major_axis + elements.semi_major_axis_rate * drift
    if semi_major_axis <= 0.0:
        raise ValueError(
            f"semi_major_axis {semi_major_axis!r} not positive at T={t:.6f} centuries"
        )

    return PropagatedElements(
        semi_major_axis=semi_major_axis,
        eccentricity=eccentricity,
        inclination_deg=elements.inclination_deg + elements.inclination_rate * drift,
        longitude_of_ascending_node_deg=(
            elements.longitude_of_ascending_node_deg
            + elements.longitude_of_ascending_node_rate * drift
        ),
        argument_of_periapsis_deg=(
            elements.argument_of_periapsis_deg
            + elements.argument_of_periapsis_rate * drift
        ),
        mean_longitude_deg=elements.mean_longitude_deg + elements.mean_longitude_rate * t,
        centuries=t,
    )


def at_epoch(elements: "OrbitalElementSet | PropagatedElements") -> PropagatedElements:
    """Elements as PropagatedElements, evaluating a reference set at T = 0."""
    if isinstance(elements, PropagatedElements):
        return elements
    return propagate(elements, 0.0)

# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for orbit data export.

Adapters implement these to export orbit paths and body positions in
various formats (JSON, CSV).
"""
from datetime import datetime
from typing import Mapping, Protocol, Sequence, runtime_checkable

from orrery.domain.orbit_sampling import OrbitPath
from orrery.domain.orbital_frames import StateVector


@runtime_checkable
class OrbitPathExporter(Protocol):
    """Port for exporting sampled orbit paths to file."""

    def export(
        self,
        paths: Sequence[OrbitPath],
        path: str,
        y_up: bool = False,
    ) -> int:
        """
        Export closed orbit polylines to a file.

        Args:
            paths: Sampled orbit paths.
            path: Output file path.
            y_up: Write coordinates with the ecliptic pole as +Y.

        Returns:
            Number of orbit paths exported.
        """
        ...


@runtime_checkable
class PositionExporter(Protocol):
    """Port for exporting a frame of body positions to file."""

    def export_positions(
        self,
        positions: Mapping[str, StateVector],
        path: str,
        moment: datetime,
        y_up: bool = False,
    ) -> int:
        """
        Export body positions at one moment to a file.

        Args:
            positions: Body key → position.
            path: Output file path.
            moment: Time the positions are valid for.
            y_up: Write coordinates with the ecliptic pole as +Y.

        Returns:
            Number of bodies exported.
        """
        ...

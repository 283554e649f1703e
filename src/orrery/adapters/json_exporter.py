# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON orbit exporter.

Writes orbit paths as point arrays and position frames as a key → [x, y, z]
object. External dependencies (json, file I/O) are confined to this adapter.
"""
import json
import logging
from datetime import datetime
from typing import Any, Mapping, Sequence

from orrery.domain.orbit_sampling import OrbitPath
from orrery.domain.orbital_frames import StateVector, ecliptic_to_y_up
from orrery.ports.export import OrbitPathExporter, PositionExporter


_log = logging.getLogger(__name__)


def _coords(vector: StateVector, y_up: bool) -> list[float]:
    if y_up:
        vector = ecliptic_to_y_up(vector)
    return [vector.x, vector.y, vector.z]


def path_to_dict(orbit: OrbitPath, y_up: bool = False) -> dict[str, Any]:
    """Plain-data form of an orbit path."""
    return {
        'body': orbit.body,
        'mode': orbit.mode.value,
        'period_days': orbit.period_days,
        'start': orbit.start.isoformat(),
        'points': [_coords(p, y_up) for p in orbit.points],
    }


class JsonOrbitExporter(OrbitPathExporter, PositionExporter):
    """Exports orbit paths and position frames as JSON documents."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def export(
        self,
        paths: Sequence[OrbitPath],
        path: str,
        y_up: bool = False,
    ) -> int:
        for orbit in paths:
            if not orbit.is_closed:
                _log.warning("Orbit path for %s is not closed", orbit.body)

        document = {
            'y_up': y_up,
            'paths': [path_to_dict(orbit, y_up) for orbit in paths],
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=self._indent)

        _log.debug("Wrote %d orbit paths to %s", len(paths), path)
        return len(paths)

    def export_positions(
        self,
        positions: Mapping[str, StateVector],
        path: str,
        moment: datetime,
        y_up: bool = False,
    ) -> int:
        document = {
            'moment': moment.isoformat(),
            'y_up': y_up,
            'positions': {
                key: _coords(vector, y_up) for key, vector in positions.items()
            },
        }
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=self._indent)

        _log.debug("Wrote %d positions to %s", len(positions), path)
        return len(positions)

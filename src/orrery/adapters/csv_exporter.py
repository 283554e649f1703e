# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV orbit exporter.

Exports orbit paths (one row per point) and position frames (one row per
body) as CSV. External dependencies (csv, file I/O) are confined to this
adapter.
"""
import csv
import logging
from datetime import datetime
from typing import Mapping, Sequence

from orrery.domain.orbit_sampling import OrbitPath
from orrery.domain.orbital_frames import StateVector, ecliptic_to_y_up
from orrery.ports.export import OrbitPathExporter, PositionExporter


_log = logging.getLogger(__name__)

_PATH_HEADER = ['body', 'index', 'x', 'y', 'z']

_POSITION_HEADER = ['body', 'x', 'y', 'z', 'distance', 'moment']


def _fmt(value: float) -> str:
    return f'{value:.9f}'


class CsvOrbitExporter(OrbitPathExporter, PositionExporter):
    """Exports orbit paths and position frames to CSV."""

    def export(
        self,
        paths: Sequence[OrbitPath],
        path: str,
        y_up: bool = False,
    ) -> int:
        rows = 0
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_PATH_HEADER)

            for orbit in paths:
                if not orbit.is_closed:
                    _log.warning("Orbit path for %s is not closed", orbit.body)
                for index, point in enumerate(orbit.points):
                    if y_up:
                        point = ecliptic_to_y_up(point)
                    writer.writerow([
                        orbit.body,
                        index,
                        _fmt(point.x),
                        _fmt(point.y),
                        _fmt(point.z),
                    ])
                    rows += 1

        _log.debug("Wrote %d orbit paths (%d points) to %s", len(paths), rows, path)
        return len(paths)

    def export_positions(
        self,
        positions: Mapping[str, StateVector],
        path: str,
        moment: datetime,
        y_up: bool = False,
    ) -> int:
        moment_str = moment.isoformat()
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_POSITION_HEADER)

            for key, vector in positions.items():
                out = ecliptic_to_y_up(vector) if y_up else vector
                writer.writerow([
                    key,
                    _fmt(out.x),
                    _fmt(out.y),
                    _fmt(out.z),
                    _fmt(vector.magnitude),
                    moment_str,
                ])

        _log.debug("Wrote %d positions to %s", len(positions), path)
        return len(positions)

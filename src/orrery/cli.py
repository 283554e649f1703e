# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for planetary positions and orbit paths.

Usage:
    # Positions of all catalog bodies now
    orrery

    # Selected bodies at a given moment
    orrery --body earth --body mars --at 2024-03-20T03:06:00Z

    # Moon relative to the Sun instead of the Earth
    orrery --body moon --heliocentric

    # Orbit paths, exported for a renderer with a Y-up convention
    orrery --body mars --path 360 --y-up --export-json mars_orbit.json

    # Custom element table
    orrery --catalog my_elements.json --list
"""
import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import Optional, Sequence

from orrery.domain.body_catalog import BodyCatalog, UnknownBodyError, load_catalog
from orrery.domain.ephemeris import PositionMode, heliocentric_position, positions_at
from orrery.domain.julian_time import parse_moment, to_julian_date
from orrery.domain.orbit_sampling import OrbitPath, apsides, sample_path
from orrery.domain.orbital_frames import ORIGIN, StateVector, ecliptic_to_y_up
from orrery.adapters import CsvOrbitExporter, JsonOrbitExporter


_log = logging.getLogger(__name__)


def format_vector(vector: StateVector, y_up: bool = False) -> str:
    """'x=… y=… z=… r=…' with six decimals; r is frame-independent."""
    out = ecliptic_to_y_up(vector) if y_up else vector
    return (
        f"x={out.x:+.6f} y={out.y:+.6f} z={out.z:+.6f} "
        f"r={vector.magnitude:.6f}"
    )


def compute_positions(
    bodies: Optional[Sequence[str]],
    moment: datetime,
    catalog: BodyCatalog,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    heliocentric: bool = False,
) -> dict[str, StateVector]:
    """
    Positions of the requested bodies (all catalog bodies when None).

    Raises:
        UnknownBodyError: If a body is not in the catalog.
    """
    if not heliocentric:
        return positions_at(moment, bodies, catalog=catalog, mode=mode)

    keys = list(bodies) if bodies else list(catalog.keys())
    return {
        catalog.get(key).key: heliocentric_position(key, moment, catalog=catalog, mode=mode)
        for key in keys
    }


def parent_offset(
    body: str,
    moment: datetime,
    catalog: BodyCatalog,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    heliocentric: bool = False,
) -> StateVector:
    """Shift from the body's central-body frame into the reported frame.

    Zero unless heliocentric; then the central body's position at moment.
    """
    if not heliocentric:
        return ORIGIN
    central = catalog.get(body).central_body
    return heliocentric_position(central, moment, catalog=catalog, mode=mode)


def compute_paths(
    bodies: Sequence[str],
    num_samples: int,
    start: datetime,
    catalog: BodyCatalog,
    mode: PositionMode = PositionMode.ELLIPTICAL,
    heliocentric: bool = False,
) -> list[OrbitPath]:
    """One closed orbit path per body, frozen at start.

    With heliocentric, a moon's path is placed around its planet's
    position at start.
    """
    paths = []
    for key in bodies:
        orbit = sample_path(key, num_samples, mode=mode, start=start, catalog=catalog)
        offset = parent_offset(key, start, catalog, mode, heliocentric)
        paths.append(orbit if offset == ORIGIN else orbit.translated(offset))
    return paths


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Keplerian positions and orbit paths of solar-system bodies"
    )
    parser.add_argument(
        '--body', '-b', action='append', dest='bodies', metavar='KEY',
        help="Catalog body key, repeatable (default: all bodies)"
    )
    parser.add_argument(
        '--at', '-t', dest='moment',
        help="ISO-8601 moment, naive = UTC (default: now)"
    )
    parser.add_argument(
        '--mode', choices=[m.value for m in PositionMode],
        default=PositionMode.ELLIPTICAL.value,
        help="Position strategy (default: elliptical)"
    )
    parser.add_argument(
        '--heliocentric', action='store_true', default=False,
        help="Report positions, apsides and paths relative to the Sun "
             "(moons placed around their planet)"
    )
    parser.add_argument(
        '--apsides', action='store_true', default=False,
        help="Also print periapsis and apoapsis points"
    )
    parser.add_argument(
        '--path', type=int, metavar='N', dest='path_samples',
        help="Sample each orbit with N segments"
    )
    parser.add_argument(
        '--y-up', action='store_true', default=False,
        help="Report coordinates with the ecliptic pole as +Y"
    )
    parser.add_argument(
        '--catalog', metavar='FILE',
        help="Element table JSON (default: bundled JPL table)"
    )
    parser.add_argument(
        '--list', action='store_true', default=False,
        help="List catalog bodies and exit"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument(
        '--export-json', metavar='FILE',
        help="Export orbit paths (with --path) or positions to JSON"
    )
    export_group.add_argument(
        '--export-csv', metavar='FILE',
        help="Export orbit paths (with --path) or positions to CSV"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = load_catalog(args.catalog)

        if args.list:
            for record in catalog:
                print(f"{record.key:<10} {record.name:<10} orbits {record.central_body}")
            return

        moment = parse_moment(args.moment) if args.moment else datetime.now(tz=timezone.utc)
        mode = PositionMode(args.mode)
        _log.debug("JD %.6f, mode %s", to_julian_date(moment), mode.value)

        positions = compute_positions(
            args.bodies, moment, catalog, mode=mode, heliocentric=args.heliocentric,
        )
        origin = "sun" if args.heliocentric else "central body"
        print(f"Positions at {moment.isoformat()} (relative to {origin}):")
        for key, vector in positions.items():
            print(f"  {key:<10} {format_vector(vector, args.y_up)}")
            if args.apsides:
                peri, apo = apsides(key, moment, catalog=catalog)
                offset = parent_offset(key, moment, catalog, mode, args.heliocentric)
                peri, apo = peri + offset, apo + offset
                print(f"    periapsis  {format_vector(peri, args.y_up)}")
                print(f"    apoapsis   {format_vector(apo, args.y_up)}")

        paths: list[OrbitPath] = []
        if args.path_samples is not None:
            paths = compute_paths(
                list(positions), args.path_samples, moment, catalog,
                mode=mode, heliocentric=args.heliocentric,
            )
            for orbit in paths:
                print(
                    f"Sampled {orbit.body} orbit: {orbit.num_samples} segments, "
                    f"period {orbit.period_days:.3f} days"
                )

        exports = [
            (args.export_json, JsonOrbitExporter()),
            (args.export_csv, CsvOrbitExporter()),
        ]
        for dest, exporter in exports:
            if not dest:
                continue
            if paths:
                count = exporter.export(paths, dest, y_up=args.y_up)
                print(f"Exported {count} orbit paths to {dest}")
            else:
                count = exporter.export_positions(positions, dest, moment, y_up=args.y_up)
                print(f"Exported {count} positions to {dest}")

    except UnknownBodyError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()

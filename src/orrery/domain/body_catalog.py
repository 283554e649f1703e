# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Reference orbital-element catalog.

Bodies are keyed by lowercase name. Tables may store either the argument
of periapsis (ω) or the longitude of periapsis (ϖ); the convention is
declared in the data and normalized to ω here, once, at load time.

The bundled table holds the JPL approximate elements of the eight major
planets (valid 1800–2050 AD), mean lunar elements relative to Earth, and
circular orbits of the major moons of Jupiter and Saturn.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from orrery.domain.julian_time import J2000_JD
from orrery.domain.orbital_elements import ElementConvention, OrbitalElementSet

ROOT_BODY: str = "sun"
"""Central body of the catalog; positions of planets are relative to it."""

_ELEMENT_KEYS = ("a", "e", "i", "node", "periapsis", "mean_longitude")


class UnknownBodyError(KeyError):
    """Requested body key is not in the catalog."""

    def __str__(self) -> str:
        return f"unknown body: {self.args[0]!r}" if self.args else "unknown body"


@dataclass(frozen=True)
class BodyRecord:
    """A catalog entry: elements plus the body they orbit."""
    key: str
    name: str
    elements: OrbitalElementSet
    central_body: str = ROOT_BODY
    period_days: Optional[float] = None


@dataclass(frozen=True)
class BodyCatalog:
    """Immutable key → BodyRecord mapping."""
    records: Mapping[str, BodyRecord]
    source: str = ""
    valid_years: Optional[tuple[int, int]] = None
    distance_unit: str = "AU"

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", MappingProxyType(dict(self.records)))

    def get(self, key: str) -> BodyRecord:
        """Look up a body by key (case-insensitive).

        Raises:
            UnknownBodyError: If the key is not in the catalog.
        """
        record = self.records.get(key.strip().lower())
        if record is None:
            raise UnknownBodyError(key)
        return record

    def keys(self) -> tuple[str, ...]:
        return tuple(self.records)

    def orbiting(self, central_body: str) -> tuple[BodyRecord, ...]:
        """Records whose central body is the given key."""
        return tuple(r for r in self.records.values() if r.central_body == central_body)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip().lower() in self.records

    def __iter__(self) -> Iterator[BodyRecord]:
        return iter(self.records.values())

    def __len__(self) -> int:
        return len(self.records)


def _parse_convention(value: Any, body_key: str) -> ElementConvention:
    try:
        return ElementConvention(value)
    except ValueError:
        raise ValueError(
            f"body {body_key!r}: unknown element convention {value!r}"
        ) from None


def _element_values(block: Any, body_key: str, label: str) -> dict[str, float]:
    if not isinstance(block, dict):
        raise ValueError(f"body {body_key!r}: '{label}' must be an object")
    missing = [k for k in _ELEMENT_KEYS if k not in block]
    if missing:
        raise ValueError(f"body {body_key!r}: '{label}' missing {', '.join(missing)}")
    try:
        return {k: float(block[k]) for k in _ELEMENT_KEYS}
    except (TypeError, ValueError):
        raise ValueError(f"body {body_key!r}: non-numeric value in '{label}'") from None


def _build_elements(
    values: dict[str, float],
    rates: dict[str, float],
    convention: ElementConvention,
) -> OrbitalElementSet:
    if convention is ElementConvention.LONGITUDE_OF_PERIAPSIS:
        return OrbitalElementSet.from_longitude_of_periapsis(
            semi_major_axis=values["a"],
            eccentricity=values["e"],
            inclination_deg=values["i"],
            longitude_of_ascending_node_deg=values["node"],
            longitude_of_periapsis_deg=values["periapsis"],
            mean_longitude_deg=values["mean_longitude"],
            semi_major_axis_rate=rates["a"],
            eccentricity_rate=rates["e"],
            inclination_rate=rates["i"],
            longitude_of_ascending_node_rate=rates["node"],
            longitude_of_periapsis_rate=rates["periapsis"],
            mean_longitude_rate=rates["mean_longitude"],
        )
    return OrbitalElementSet(
        semi_major_axis=values["a"],
        eccentricity=values["e"],
        inclination_deg=values["i"],
        longitude_of_ascending_node_deg=values["node"],
        argument_of_periapsis_deg=values["periapsis"],
        mean_longitude_deg=values["mean_longitude"],
        semi_major_axis_rate=rates["a"],
        eccentricity_rate=rates["e"],
        inclination_rate=rates["i"],
        longitude_of_ascending_node_rate=rates["node"],
        argument_of_periapsis_rate=rates["periapsis"],
        mean_longitude_rate=rates["mean_longitude"],
    )


def build_catalog(data: Mapping[str, Any]) -> BodyCatalog:
    """Build a BodyCatalog from parsed table data.

    Expected layout::

        {"convention": "longitude_of_periapsis",
         "bodies": {"earth": {"name": ..., "central_body": "sun",
                              "period_days": ...,
                              "elements": {"a", "e", "i", "node",
                                           "periapsis", "mean_longitude"},
                              "rates": {... same keys ...}}}}

    A body may override the table-level "convention". "rates" is optional
    (all zero). An optional "reference_epoch_jd" must be J2000.0, the epoch
    the rates are applied from.

    Raises:
        ValueError: On missing fields, unknown conventions, a reference
            epoch other than J2000.0, or a central body that is neither the
            root body nor in the table.
        EccentricityOutOfRangeError: On non-elliptical elements.
    """
    bodies = data.get("bodies")
    if not isinstance(bodies, dict) or not bodies:
        raise ValueError("catalog data has no 'bodies'")

    epoch_jd = data.get("reference_epoch_jd", J2000_JD)
    try:
        epoch_jd = float(epoch_jd)
    except (TypeError, ValueError):
        raise ValueError(f"non-numeric reference_epoch_jd {epoch_jd!r}") from None
    if epoch_jd != J2000_JD:
        raise ValueError(
            f"reference_epoch_jd {epoch_jd!r} is not J2000.0 ({J2000_JD})"
        )

    default_convention = data.get("convention", ElementConvention.ARGUMENT_OF_PERIAPSIS.value)

    records: dict[str, BodyRecord] = {}
    for raw_key, entry in bodies.items():
        key = str(raw_key).strip().lower()
        if not isinstance(entry, dict):
            raise ValueError(f"body {key!r}: entry must be an object")
        convention = _parse_convention(entry.get("convention", default_convention), key)
        values = _element_values(entry.get("elements"), key, "elements")
        rates = _element_values(
            entry.get("rates", dict.fromkeys(_ELEMENT_KEYS, 0.0)), key, "rates",
        )
        period = entry.get("period_days")
        if period is not None and float(period) <= 0.0:
            raise ValueError(f"body {key!r}: period_days must be positive")

        records[key] = BodyRecord(
            key=key,
            name=str(entry.get("name", key.capitalize())),
            elements=_build_elements(values, rates, convention),
            central_body=str(entry.get("central_body", ROOT_BODY)).strip().lower(),
            period_days=float(period) if period is not None else None,
        )

    for record in records.values():
        if record.central_body != ROOT_BODY and record.central_body not in records:
            raise ValueError(
                f"body {record.key!r}: unknown central body {record.central_body!r}"
            )
        if record.central_body == record.key:
            raise ValueError(f"body {record.key!r} cannot orbit itself")

    valid_years = data.get("valid_years")
    return BodyCatalog(
        records=records,
        source=str(data.get("source", "")),
        valid_years=tuple(valid_years) if valid_years else None,
        distance_unit=str(data.get("distance_unit", "AU")),
    )


_CACHED_CATALOG: Optional[BodyCatalog] = None


def load_catalog(path: Optional[str] = None) -> BodyCatalog:
    """Load an element table from bundled JSON or a custom path.

    The bundled table is parsed once and cached.
    """
    global _CACHED_CATALOG

    if path is None and _CACHED_CATALOG is not None:
        return _CACHED_CATALOG

    if path is None:
        data_path = Path(__file__).parent.parent / "data" / "planetary_elements.json"
    else:
        data_path = Path(path)

    with open(data_path, encoding="utf-8") as f:
        data = json.load(f)

    catalog = build_catalog(data)

    if path is None:
        _CACHED_CATALOG = catalog

    return catalog

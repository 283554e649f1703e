# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Julian Date arithmetic for element propagation.

Maps absolute moments (datetimes) to Julian Dates and to Julian centuries
since the J2000.0 reference epoch. UTC is used as the time scale; the
TT-UTC offset (~1 minute) is below what a visualization can resolve.

No external dependencies: only stdlib datetime.
"""
from datetime import datetime, timedelta, timezone

J2000_JD: float = 2451545.0
"""Julian Date of the J2000.0 reference epoch."""

J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
"""J2000.0 reference epoch (2000-01-01 12:00:00 UTC)."""

DAYS_PER_JULIAN_CENTURY: float = 36525.0

_SECONDS_PER_DAY: float = 86400.0


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def to_julian_date(moment: datetime) -> float:
    """Julian Date of a moment.

    Computed from the exact timedelta to J2000.0, so the result keeps
    microsecond resolution and preserves ordering of moments.
    Naive datetimes are treated as UTC.
    """
    return J2000_JD + days_since_j2000(moment)


def julian_date_to_datetime(jd: float) -> datetime:
    """Inverse of to_julian_date. Returns a UTC-aware datetime."""
    return J2000 + timedelta(days=jd - J2000_JD)


def centuries_since_epoch(jd: float, epoch_jd: float = J2000_JD) -> float:
    """Julian centuries elapsed between epoch_jd and jd."""
    return (jd - epoch_jd) / DAYS_PER_JULIAN_CENTURY


def days_since_j2000(moment: datetime) -> float:
    """Days since J2000.0 (negative before 2000-01-01 12:00 UTC).

    Taken straight from the timedelta, so sub-second steps survive that
    a full Julian Date (~2.45e6) would round away.
    """
    elapsed = _as_utc(moment) - J2000
    return elapsed.total_seconds() / _SECONDS_PER_DAY


def centuries_since_j2000(moment: datetime) -> float:
    """Julian centuries since J2000.0, the T of the secular-rate model."""
    return days_since_j2000(moment) / DAYS_PER_JULIAN_CENTURY


def parse_moment(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into a UTC-aware datetime.

    Accepts a trailing 'Z'. Naive timestamps are treated as UTC.

    Raises:
        ValueError: If text is not a valid ISO-8601 timestamp.
    """
    cleaned = text.strip()
    if cleaned.endswith(('Z', 'z')):
        cleaned = cleaned[:-1] + '+00:00'
    try:
        moment = datetime.fromisoformat(cleaned)
    except ValueError:
        raise ValueError(f"Invalid ISO-8601 timestamp: {text!r}") from None
    return _as_utc(moment)
